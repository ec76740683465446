from fastapi import Request, HTTPException
from fastapi.responses import JSONResponse
from fastapi.exceptions import RequestValidationError
from fastapi import status
from search_server.app.platform.logging import request_id_ctx
from search_server.app.platform import exceptions as domainex
import logging

def error_envelope(message, code="BAD_REQUEST", details=None, trace_id=None):
    return {
        "success": False, 
        "error": {
            "code": code, "message": message, "details": details
        }, 
        "trace_id": trace_id
    }

async def http_exception_handler(request: Request, exc: HTTPException):
    # 4xx, 5xx 에러
    return JSONResponse(status_code=exc.status_code,
                        content=error_envelope(
                            exc.detail, 
                            code=f"HTTP_{exc.status_code}", 
                            trace_id=request_id_ctx.get()))

async def validation_exception_handler(request: Request, exc: RequestValidationError):
    # 422 Unprocessable Entity
    return JSONResponse(status_code=422,
                        content=error_envelope(
                            "Unprocessable Entity", 
                            code="VALIDATION_ERROR", 
                            details=jsonable_errors(exc), 
                            trace_id=request_id_ctx.get()))

def jsonable_errors(exc: RequestValidationError) -> list:
    # ctx 안의 예외 객체는 JSON 직렬화가 안 되므로 문자열로 바꾼다
    errors = []
    for err in exc.errors():
        err = dict(err)
        if "ctx" in err:
            err["ctx"] = {k: str(v) for k, v in err["ctx"].items()}
        errors.append(err)
    return errors

async def unhandled_exception_handler(request: Request, exc: Exception):
    logging.getLogger(__name__).exception("Unhandled exception")
    # 500 Internal server error
    return JSONResponse(status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
                        content=error_envelope(
                            "Internal server error", 
                            code="INTERNAL_ERROR", 
                            trace_id=request_id_ctx.get()))

def map_domain_error(exc: domainex.DomainError) -> tuple[int, str]:
    """
    도메인 예외 → (HTTP status, 에러 코드)
    """
    if isinstance(exc, domainex.ResourceNotFound):
        return status.HTTP_404_NOT_FOUND, "NOT_FOUND"
    if isinstance(exc, domainex.InvalidInput):
        return status.HTTP_400_BAD_REQUEST, "INVALID_INPUT"
    if isinstance(exc, domainex.UpstreamTimeout):
        return status.HTTP_504_GATEWAY_TIMEOUT, "UPSTREAM_TIMEOUT"
    if isinstance(exc, domainex.UpstreamUnavailable):
        return status.HTTP_502_BAD_GATEWAY, "UPSTREAM_UNAVAILABLE"
    if isinstance(exc, domainex.IndexUnavailable):
        return status.HTTP_503_SERVICE_UNAVAILABLE, "INDEX_UNAVAILABLE"
    if isinstance(exc, domainex.IndexingFailed):
        return status.HTTP_502_BAD_GATEWAY, "INDEXING_FAILED"
    return status.HTTP_400_BAD_REQUEST, "SERVICE_ERROR"

async def domain_exception_handler(request: Request, exc: domainex.DomainError):
    """
    도메인/유즈케이스 예외를 HTTP로 매핑.
    """
    http_status, code = map_domain_error(exc)
    logging.getLogger(__name__).warning(
        "Domain error: %s (%s) path=%s", exc, code, str(request.url)
    )
    return JSONResponse(
        status_code=http_status,
        content=error_envelope(
            str(exc), 
            code=code, 
            trace_id=request_id_ctx.get())
    )
