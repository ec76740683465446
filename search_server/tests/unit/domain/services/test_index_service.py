from concurrent.futures import ThreadPoolExecutor
from unittest.mock import MagicMock, call
import pytest

from search_server.app.domain.services.index_service import IndexService
from search_server.app.domain.models import Spu, Goods, IndexResult, IndexErrorItem
from search_server.app.platform.exceptions import (
    ResourceNotFound, SkuNotFound, InvalidInput, IndexUnavailable
)


def _spu(i: int) -> Spu:
    return Spu(id=i, cid1=1, cid2=2, cid3=3, brand_id=9, title=f"상품{i}")


def _goods(spu: Spu) -> Goods:
    return Goods(id=spu.id, all=spu.title)


@pytest.fixture
def spus():
    return MagicMock()


@pytest.fixture
def builder():
    b = MagicMock()
    b.build.side_effect = _goods
    return b


@pytest.fixture
def indexer():
    i = MagicMock()
    i.create_index.return_value = "goods"
    i.write_many.side_effect = lambda goods: IndexResult(indexed=len(list(goods)))
    return i


@pytest.fixture
def service(spus, builder, indexer):
    return IndexService(spus=spus, builder=builder, indexer=indexer)


# ----------------------
# rebuild / remove
# ----------------------
def test_rebuild_builds_and_writes(service, spus, builder, indexer):
    spus.by_id.return_value = _spu(57)

    goods = service.rebuild(57)

    assert goods.id == 57
    spus.by_id.assert_called_once_with(57)
    indexer.write.assert_called_once_with(goods)


def test_rebuild_missing_spu(service, spus, indexer):
    spus.by_id.return_value = None

    with pytest.raises(ResourceNotFound):
        service.rebuild(1)
    indexer.write.assert_not_called()


def test_rebuild_does_not_write_on_build_failure(service, spus, builder, indexer):
    """
    빌드 실패 시 부분 문서를 쓰지 않는다
    """
    spus.by_id.return_value = _spu(1)
    builder.build.side_effect = SkuNotFound(1)

    with pytest.raises(SkuNotFound):
        service.rebuild(1)
    indexer.write.assert_not_called()


def test_remove(service, indexer):
    indexer.delete.return_value = True
    assert service.remove(3) is True
    indexer.delete.assert_called_once_with(3)


# ----------------------
# import_all
# ----------------------
def test_import_all_pages_until_short_page(service, spus, indexer):
    spus.page.side_effect = [[_spu(1), _spu(2)], [_spu(3)]]

    res = service.import_all(rows=2)

    assert res.indexed == 3
    assert res.errors == []
    indexer.create_index.assert_called_once()
    assert spus.page.call_args_list == [
        call(1, 2, saleable=True),
        call(2, 2, saleable=True),
    ]


def test_import_all_stops_on_empty_page(service, spus, indexer):
    spus.page.side_effect = [[_spu(1), _spu(2)], []]

    res = service.import_all(rows=2)

    assert res.indexed == 2
    assert indexer.write_many.call_count == 1


def test_import_all_collects_build_failures(service, spus, builder, indexer):
    """
    빌드 실패 상품은 errors에 기록하고 나머지는 색인
    """
    def build(spu):
        if spu.id == 2:
            raise SkuNotFound(2)
        return _goods(spu)

    builder.build.side_effect = build
    spus.page.side_effect = [[_spu(1), _spu(2), _spu(3)]]

    res = service.import_all(rows=10)

    assert res.indexed == 2
    assert len(res.errors) == 1
    assert res.errors[0].doc_id == "2"
    assert "sku not found" in res.errors[0].reason
    written = [g.id for g in indexer.write_many.call_args.args[0]]
    assert written == [1, 3]


def test_import_all_reports_unexpected_build_error(service, spus, builder, indexer):
    """
    도메인 예외가 아닌 빌드 오류도 해당 상품만 실패로 기록하고 나머지는 색인
    """
    def build(spu):
        if spu.id == 1:
            raise ValueError("bad upstream json")
        return _goods(spu)

    builder.build.side_effect = build
    spus.page.side_effect = [[_spu(1), _spu(2)]]

    res = service.import_all(rows=10)

    assert res.indexed == 1
    assert [e.doc_id for e in res.errors] == ["1"]
    assert "ValueError: bad upstream json" == res.errors[0].reason
    written = [g.id for g in indexer.write_many.call_args.args[0]]
    assert written == [2]


def test_import_all_merges_bulk_errors(service, spus, indexer):
    indexer.write_many.side_effect = None
    indexer.write_many.return_value = IndexResult(
        indexed=1, errors=[IndexErrorItem(doc_id="2", reason="mapper_parsing_exception")])
    spus.page.side_effect = [[_spu(1), _spu(2)]]

    res = service.import_all(rows=10)

    assert res.indexed == 1
    assert [e.doc_id for e in res.errors] == ["2"]


def test_import_all_with_executor(spus, builder, indexer):
    spus.page.side_effect = [[_spu(i) for i in range(1, 6)]]
    with ThreadPoolExecutor(max_workers=3) as pool:
        svc = IndexService(spus=spus, builder=builder, indexer=indexer, executor=pool)
        res = svc.import_all(rows=10)

    assert res.indexed == 5
    written = [g.id for g in indexer.write_many.call_args.args[0]]
    assert written == [1, 2, 3, 4, 5]


def test_import_all_propagates_index_unavailable(service, spus, indexer):
    indexer.create_index.side_effect = IndexUnavailable("goods", "down")

    with pytest.raises(IndexUnavailable):
        service.import_all()
    spus.page.assert_not_called()


def test_import_all_rejects_invalid_rows(service):
    with pytest.raises(InvalidInput):
        service.import_all(rows=0)
