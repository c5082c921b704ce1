#!/usr/bin/env python3
"""
Bank Accounts Service Entry Point

Starts the FastAPI server with host, port and logging taken from
BANK_ACCOUNTS_* environment variables.
"""

import sys

from bank_accounts.api import run_server


if __name__ == "__main__":
    try:
        run_server()
    except KeyboardInterrupt:
        print("\nShutting down Bank Accounts Service...")
    except Exception as e:
        print(f"Error starting server: {e}")
        sys.exit(1)
