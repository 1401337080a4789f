# -*- coding: utf-8 -*-
import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from resource_backend.config import settings
from resource_backend.core.global_exception_handlers import set_global_exception_handlers
from resource_backend.core.logging_config import setup_logging
from resource_backend.middleware.auth_middleware import JWTAuthMiddleware

setup_logging(settings)
logger = logging.getLogger(__name__)

API_PREFIX = "/v1"


def create_app() -> FastAPI:
    logger.info(f"Creating FastAPI application (debug={settings.app_debug})")

    app = FastAPI(
        title="Study Resource Rating API",
        description="Study resource sharing service with rating aggregation",
        version=settings.app_version,
        debug=settings.app_debug,
        root_path=settings.app_root_path
    )

    set_global_exception_handlers(app)

    if settings.jwt_enabled:
        app.add_middleware(JWTAuthMiddleware)
    else:
        # 인증이 필요한 엔드포인트는 모두 401
        logger.warning("JWT authentication is disabled")

    from resource_backend.api.routers.rating_router import router as rating_router
    from resource_backend.api.routers.resource_router import router as resource_router

    app.include_router(rating_router, prefix=API_PREFIX)
    app.include_router(resource_router, prefix=API_PREFIX)

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.get_cors_origins(),
        allow_credentials=True,
        allow_methods=["GET", "POST", "PUT", "DELETE"],
        allow_headers=["*"],
    )

    @app.get("/health")
    async def health_check():
        return {"status": "healthy", "service": "resource-backend", "version": settings.app_version}

    return app


app = create_app()


def run():
    """uvicorn 으로 서버 실행"""
    import uvicorn

    uvicorn.run("resource_backend.main:app", **settings.get_uvicorn_config())


if __name__ == "__main__":
    run()
