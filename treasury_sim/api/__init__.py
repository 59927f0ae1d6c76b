"""
Treasury Simulator API Application Factory
"""

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from .accounts import router as accounts_router
from .transfers import router as transfers_router
from .transactions import router as transactions_router
from .schemas import ErrorResponse
from .. import __version__
from ..config import get_config
from ..errors import TransferError, TransferErrorKind
from ..logging_config import get_logger

ERROR_STATUS_CODES = {
    TransferErrorKind.ACCOUNT_NOT_FOUND: 404,
    TransferErrorKind.SAME_ACCOUNT: 400,
    TransferErrorKind.INVALID_AMOUNT: 422,
    TransferErrorKind.PAST_DATE: 400,
    TransferErrorKind.NO_FX_ROUTE: 422,
    TransferErrorKind.INSUFFICIENT_FUNDS: 409,
}


def create_app() -> FastAPI:
    """Create and configure the FastAPI application"""
    config = get_config()
    logger = get_logger("treasury.api")

    app = FastAPI(
        title=config.api_title,
        description="Multi-currency treasury transfers with scheduling and FX conversion",
        version=__version__,
        docs_url="/docs",
        redoc_url="/redoc"
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_credentials=True,
        allow_methods=["*"],
        allow_headers=["*"],
    )

    @app.exception_handler(TransferError)
    async def transfer_error_handler(request: Request, exc: TransferError):
        logger.info(f"{request.method} {request.url.path} rejected: {exc.kind.value}")
        return JSONResponse(
            status_code=ERROR_STATUS_CODES.get(exc.kind, 400),
            content=ErrorResponse(**exc.to_dict()).model_dump()
        )

    app.include_router(accounts_router, prefix="/accounts", tags=["Accounts"])
    app.include_router(transfers_router, prefix="/transfers", tags=["Transfers"])
    app.include_router(transactions_router, prefix="/transactions", tags=["Transactions"])

    @app.get("/health")
    async def health_check():
        """Health check endpoint"""
        return {"status": "healthy", "version": __version__}

    return app
