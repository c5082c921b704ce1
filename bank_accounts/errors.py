"""
Error types raised by the service
"""

from typing import Optional


class AccountNotFoundError(LookupError):
    """Raised when an operation requires an account that does not exist"""

    def __init__(self, account_id: str):
        super().__init__(f"Account {account_id} not found")
        self.account_id = account_id


class DownstreamServiceError(Exception):
    """A call to the customers or transactions service failed"""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class CustomerServiceError(DownstreamServiceError):
    pass


class TransactionServiceError(DownstreamServiceError):
    pass
