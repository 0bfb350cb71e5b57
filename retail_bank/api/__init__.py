"""
Retail Bank API Application Factory
"""

from fastapi import FastAPI
import uvicorn

from .customers import router as customers_router
from .accounts import router as accounts_router
from .bank import router as bank_router
from .. import __version__


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    app = FastAPI(
        title="Retail Bank Simulation API",
        description="Customers, savings and checking accounts, and bank-wide reports",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.include_router(customers_router, prefix="/customers", tags=["Customers"])
    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(bank_router, prefix="/bank", tags=["Bank"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {
            "status": "healthy",
            "service": "retail_bank_api",
            "version": __version__
        }

    return app


def run_server(host: str = "0.0.0.0", port: int = 8090, debug: bool = False):
    """Serve the API with uvicorn"""
    uvicorn.run(
        "retail_bank.api:app",
        host=host,
        port=port,
        reload=debug,
        log_level="info"
    )


app = create_app()
