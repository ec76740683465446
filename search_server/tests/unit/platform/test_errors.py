import json
import logging
import pytest

from search_server.app.platform import exceptions as domainex
from search_server.app.platform.errors import map_domain_error, error_envelope
from search_server.app.platform.logging import JsonFormatter, request_id_ctx


@pytest.mark.parametrize(
    "exc, status, code",
    [
        (domainex.CategoryNotFound(1), 404, "NOT_FOUND"),
        (domainex.BrandNotFound(1, 2), 404, "NOT_FOUND"),
        (domainex.SkuNotFound(1), 404, "NOT_FOUND"),
        (domainex.SpecParamNotFound(1, 76), 404, "NOT_FOUND"),
        (domainex.SpecDetailNotFound(1), 404, "NOT_FOUND"),
        (domainex.InvalidInput("bad"), 400, "INVALID_INPUT"),
        (domainex.UpstreamTimeout("sku", "slow"), 504, "UPSTREAM_TIMEOUT"),
        (domainex.UpstreamUnavailable("sku", "down"), 502, "UPSTREAM_UNAVAILABLE"),
        (domainex.IndexUnavailable("goods", "down"), 503, "INDEX_UNAVAILABLE"),
        (domainex.IndexingFailed("goods", "bulk"), 502, "INDEXING_FAILED"),
        (domainex.DomainError("x"), 400, "SERVICE_ERROR"),
    ],
)
def test_map_domain_error(exc, status, code):
    assert map_domain_error(exc) == (status, code)


def test_not_found_kinds_share_base():
    for exc in (domainex.CategoryNotFound(1), domainex.SpecDetailNotFound(1)):
        assert isinstance(exc, domainex.ResourceNotFound)
    assert not isinstance(domainex.UpstreamTimeout("sku", "slow"), domainex.ResourceNotFound)


def test_error_envelope():
    env = error_envelope("boom", code="X", trace_id="t-1")
    assert env == {"success": False, "error": {"code": "X", "message": "boom", "details": None}, "trace_id": "t-1"}


def test_json_formatter_includes_request_id_and_extra():
    token = request_id_ctx.set("req-1")
    try:
        record = logging.LogRecord("svc", logging.INFO, __file__, 1, "built %s", (57,), None)
        record.request_id = request_id_ctx.get()
        record.spu_id = 57
        payload = json.loads(JsonFormatter().format(record))
    finally:
        request_id_ctx.reset(token)

    assert payload["message"] == "built 57"
    assert payload["request_id"] == "req-1"
    assert payload["spu_id"] == 57
    assert payload["timestamp"].endswith("Z")
