from unittest.mock import MagicMock
import pytest

from search_server.app.domain.services.search_service import SearchService
from search_server.app.domain.models import Goods, SearchRequest, PageResult
from search_server.app.platform.exceptions import InvalidInput, IndexUnavailable


@pytest.fixture
def mock_searcher():
    return MagicMock()


@pytest.fixture
def service(mock_searcher):
    return SearchService(searcher=mock_searcher)


def _goods(n: int) -> list[Goods]:
    return [Goods(id=i, skus="[]", sub_title=f"sub-{i}") for i in range(n)]


def test_search_converts_page_and_projects_fields(service, mock_searcher):
    """
    1부터 시작하는 page → 0부터, 필드는 id/skus/subTitle만
    """
    # given
    mock_searcher.query.return_value = (_goods(10), 25)

    # when
    res = service.search(SearchRequest(key="폰", page=1, size=10))

    # then
    mock_searcher.query.assert_called_once_with("폰", 0, 10, ["id", "skus", "subTitle"])
    assert isinstance(res, PageResult)
    assert res.total == 25
    assert res.total_page == 3
    assert len(res.items) == 10


def test_search_last_page(service, mock_searcher):
    mock_searcher.query.return_value = (_goods(5), 25)

    res = service.search(SearchRequest(key="폰", page=3, size=10))

    mock_searcher.query.assert_called_once_with("폰", 2, 10, ["id", "skus", "subTitle"])
    assert res.total_page == 3
    assert len(res.items) == 5


def test_search_no_hits_is_empty_page(service, mock_searcher):
    """
    매칭 0건은 오류가 아니라 빈 페이지
    """
    mock_searcher.query.return_value = ([], 0)

    res = service.search(SearchRequest(key="없는상품"))

    assert res.total == 0
    assert res.total_page == 0
    assert res.items == []


def test_search_total_page_computed_from_total(service, mock_searcher):
    """
    total_page는 total/size 올림으로 직접 계산
    """
    mock_searcher.query.return_value = (_goods(20), 41)

    res = service.search(SearchRequest(key="폰", size=20))

    assert res.total_page == 3


@pytest.mark.parametrize("key", ["", "   "])
def test_search_blank_key_is_queried_as_is(service, mock_searcher, key):
    """
    빈 검색어는 막지 않고 그대로 질의한다(매칭 0건 → 빈 페이지)
    """
    mock_searcher.query.return_value = ([], 0)

    res = service.search(SearchRequest(key=key))

    mock_searcher.query.assert_called_once_with(key, 0, 20, ["id", "skus", "subTitle"])
    assert res.total == 0
    assert res.items == []


def test_search_page_below_one_is_invalid(service, mock_searcher):
    request = SearchRequest.model_construct(key="폰", page=0, size=20)

    with pytest.raises(InvalidInput):
        service.search(request)
    mock_searcher.query.assert_not_called()


def test_search_propagates_exception(service, mock_searcher):
    """
    검색 포트가 예외를 던지면 서비스도 그대로 전파해야 함
    """
    mock_searcher.query.side_effect = IndexUnavailable("goods", "opensearch down")

    with pytest.raises(IndexUnavailable) as ei:
        service.search(SearchRequest(key="폰"))

    assert "opensearch down" in str(ei.value)
    assert mock_searcher.query.call_count == 1


def test_search_propagates_unexpected_exception(service, mock_searcher):
    mock_searcher.query.side_effect = RuntimeError("boom")

    with pytest.raises(RuntimeError):
        service.search(SearchRequest(key="폰"))
