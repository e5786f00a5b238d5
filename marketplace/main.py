import logging

from fastapi import FastAPI, Request, status
from fastapi.encoders import jsonable_encoder
from fastapi.exceptions import RequestValidationError
from fastapi.responses import JSONResponse

from marketplace.core.config import settings
from marketplace.core.errors import MarketplaceError
from marketplace.core.logging_config import setup_logging
from marketplace.db.base import SessionLocal, init_db
from marketplace.api.routes import auth
from marketplace.api.routes import categories as categories_router
from marketplace.api.routes import providers as providers_router
from marketplace.api.routes import review as review_router
from marketplace.api.routes import requests as requests_router

logger = logging.getLogger(__name__)


def register_exception_handlers(app: FastAPI) -> None:
    @app.exception_handler(MarketplaceError)
    async def marketplace_error_handler(request: Request, exc: MarketplaceError):
        return JSONResponse(status_code=exc.status_code, content={"kind": exc.kind, "detail": exc.message})

    @app.exception_handler(RequestValidationError)
    async def validation_error_handler(request: Request, exc: RequestValidationError):
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={
                "kind": "InvalidInput",
                "detail": "Invalid request data",
                "errors": jsonable_encoder(exc.errors()),
            },
        )

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception):
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            content={"kind": "InternalError", "detail": "Internal server error"},
        )


def create_app() -> FastAPI:
    setup_logging(settings.log_level, settings.log_file or None)

    app = FastAPI(title=settings.project_name, version=settings.api_version)
    register_exception_handlers(app)

    @app.on_event("startup")
    def startup():
        init_db()
        if settings.seed_demo_data:
            from marketplace.db.seed import seed_database
            db = SessionLocal()
            try:
                seed_database(db)
            finally:
                db.close()

    @app.get("/")
    def root():
        return {"message": "Event Services Marketplace API running"}

    app.include_router(auth.router, prefix="/api")
    app.include_router(categories_router.router, prefix="/api")
    app.include_router(providers_router.router, prefix="/api")
    app.include_router(review_router.router, prefix="/api")
    app.include_router(requests_router.router, prefix="/api")

    return app


app = create_app()
