"""
Bank Accounts Service

Account lifecycle and movement processing for personal and company
customers, with monthly movement limits and account-type rules.
"""

__version__ = "1.0.0"
