from __future__ import annotations

import logging
from contextlib import asynccontextmanager
from fastapi import FastAPI, HTTPException
from fastapi.exceptions import RequestValidationError

from search_server.app.api.routers import (
    health,
    search,
    index
)
from search_server.app.api.deps import (
    create_opensearch,
    create_catalog_http,
    create_executor,
)
from search_server.app.platform.config import settings
from search_server.app.platform.logging import setup_logging
from search_server.app.platform.errors import (
    http_exception_handler,
    validation_exception_handler,
    unhandled_exception_handler,
    domain_exception_handler
)
from search_server.app.platform import exceptions as domainex
from search_server.app.middlewares.request_context import RequestContextMiddleware

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    # 로깅 등 공통 준비
    setup_logging(
        log_to_file=settings.LOG_TO_FILE,
        log_dir=settings.LOG_DIR,
        as_json=settings.LOG_AS_JSON,
        level=settings.LOG_LEVEL,
    )

    # 클라이언트/스레드 풀은 한 번만 생성해서 공유
    app.state.opensearch = create_opensearch()
    app.state.catalog_http = create_catalog_http()
    app.state.fetch_executor = create_executor(settings.FETCH_WORKERS, "catalog-fetch")
    app.state.build_executor = create_executor(settings.BUILD_WORKERS, "goods-build")
    try:
        yield
    finally:
        app.state.build_executor.shutdown(wait=True)
        app.state.fetch_executor.shutdown(wait=True)
        app.state.catalog_http.close()
        try:
            app.state.opensearch.close()
        except Exception:
            logger.warning("failed to close opensearch client", exc_info=True)

app = FastAPI(title="Goods Search API", lifespan=lifespan)
app.include_router(health.router)
app.include_router(index.router, prefix="/api")
app.include_router(search.router, prefix="/api")

# Global Exception Filter
app.add_exception_handler(HTTPException, http_exception_handler)
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(domainex.DomainError, domain_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)

# 요청 컨텍스트/액세스 로그 미들웨어
app.add_middleware(RequestContextMiddleware)
