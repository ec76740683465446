from fastapi.testclient import TestClient
from unittest.mock import MagicMock
import pytest

from search_server.app.main import app
from search_server.app.api.deps import get_search_service
from search_server.app.domain.models import Goods, PageResult, SearchRequest
from search_server.app.platform.exceptions import DomainError, InvalidInput, IndexUnavailable
from opensearchpy.exceptions import ConnectionError


@pytest.fixture
def client():
    return TestClient(app, raise_server_exceptions=False)


@pytest.fixture
def mock_search_service():
    svc = MagicMock()
    svc.search.return_value = PageResult[Goods](
        total=25,
        total_page=3,
        items=[Goods(id=i, skus="[]", sub_title=f"sub-{i}") for i in range(10)],
    )
    return svc


@pytest.fixture(autouse=True)
def override_dependency(mock_search_service):
    app.dependency_overrides[get_search_service] = lambda: mock_search_service
    yield
    app.dependency_overrides.clear()


def test_search_defaults(client, mock_search_service):
    """
    기본 파라미터(page=1, size=20)가 적용되어 서비스가 호출되는지 검증
    """
    resp = client.post("/api/search", json={"key": "갤럭시"})

    assert resp.status_code == 200
    body = resp.json()
    assert body["success"] is True
    assert body["data"]["total"] == 25
    assert body["data"]["totalPage"] == 3
    assert len(body["data"]["items"]) == 10
    # 목록은 id/skus/subTitle만
    assert set(body["data"]["items"][0]) == {"id", "skus", "subTitle"}
    mock_search_service.search.assert_called_once_with(SearchRequest(key="갤럭시", page=1, size=20))


def test_search_with_params(client, mock_search_service):
    resp = client.post("/api/search", json={"key": "폰", "page": 3, "size": 10})

    assert resp.status_code == 200
    mock_search_service.search.assert_called_once_with(SearchRequest(key="폰", page=3, size=10))


def test_search_empty_result(client, mock_search_service):
    mock_search_service.search.return_value = PageResult[Goods](total=0, total_page=0, items=[])

    resp = client.post("/api/search", json={"key": "없는상품"})

    assert resp.status_code == 200
    assert resp.json()["data"] == {"total": 0, "totalPage": 0, "items": []}


def test_search_page_zero_returns_422(client, mock_search_service):
    resp = client.post("/api/search", json={"key": "폰", "page": 0})

    assert resp.status_code == 422
    assert resp.json()["error"]["code"] == "VALIDATION_ERROR"
    mock_search_service.search.assert_not_called()


def test_search_invalid_key_returns_400(client, mock_search_service):
    mock_search_service.search.side_effect = InvalidInput("page must be >= 1: 0")

    resp = client.post("/api/search", json={"key": "폰"})
    assert resp.status_code == 400
    assert resp.json()["error"]["code"] == "INVALID_INPUT"


def test_search_domain_error_returns_400(client, mock_search_service):
    mock_search_service.search.side_effect = DomainError("invalid query")

    resp = client.post("/api/search", json={"key": "폰"})
    assert resp.status_code == 400


def test_search_index_unavailable_returns_503(client, mock_search_service):
    mock_search_service.search.side_effect = IndexUnavailable("goods", "opensearch down")

    resp = client.post("/api/search", json={"key": "폰"})
    assert resp.status_code == 503
    assert resp.json()["error"]["code"] == "INDEX_UNAVAILABLE"


def test_search_unexpected_error_returns_500(client, mock_search_service):
    """
    서비스에서 연결 예외가 그대로 올라오면 500
    """
    mock_search_service.search.side_effect = ConnectionError("opensearch down")

    resp = client.post("/api/search", json={"key": "폰"})
    assert resp.status_code == 500


def test_search_response_has_request_id(client):
    resp = client.post("/api/search", json={"key": "폰"}, headers={"X-Request-ID": "rid-1"})

    assert resp.status_code == 200
    assert resp.headers["X-Request-ID"] == "rid-1"
