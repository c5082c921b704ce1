"""
Bank Accounts API Application Factory
"""

from contextlib import asynccontextmanager
from typing import List
from fastapi import Depends, FastAPI
import uvicorn

from .accounts import router as accounts_router
from .dependencies import BankAccountsSystem, get_system
from .schemas import AccountTypeModel
from .. import __version__
from ..config import get_config
from ..logging_config import setup_logging


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize storage pools on startup and close clients on shutdown"""
    system = get_system()
    await system.startup()
    yield
    await system.shutdown()


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Bank Accounts API",
        description="Account lifecycle and deposit/withdrawal processing",
        version=__version__,
        lifespan=lifespan
    )

    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])

    @app.get("/account-types", response_model=List[AccountTypeModel], tags=["Accounts"])
    async def list_account_types(system: BankAccountsSystem = Depends(get_system)):
        """List the account type catalog"""
        return [AccountTypeModel.from_account_type(t) for t in system.catalog.all()]

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "bank_accounts",
            "version": __version__
        }

    return app


app = create_app()


def run_server(host: str = None, port: int = None, debug: bool = False):
    """Run the FastAPI server"""
    config = get_config()
    setup_logging(config.log_level, config.log_format)
    uvicorn.run(
        "bank_accounts.api:app",
        host=host or config.api_host,
        port=port or config.api_port,
        reload=debug,
        log_level=config.log_level.lower()
    )
