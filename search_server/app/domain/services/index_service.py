"""
IndexService
==============

색인 유지 유스케이스(상품 서비스 → 검색 인덱스).

Flow:
    SpuPort → BuildService → IndexPort

- rebuild: 상품 1건 재색인(문서 통째로 교체, 마지막 쓰기 우선)
- remove: 상품 1건 문서 삭제(판매 중지 등)
- import_all: 판매 중인 전체 상품을 페이지 단위로 읽어 병렬 빌드 후 bulk 색인
  빌드에 실패한 상품은 결과의 errors에 기록하고 나머지는 계속 진행한다.

예시:
    svc = IndexService(spus, builder, indexer, executor=pool)
    result = svc.import_all(rows=100)
"""

from __future__ import annotations

import logging
from concurrent.futures import Executor
from typing import List

from search_server.app.domain.ports import SpuPort, IndexPort
from search_server.app.domain.models import (
    Spu, Goods, IndexResult, IndexErrorItem
)
from search_server.app.domain.services.build_service import BuildService
from search_server.app.platform.exceptions import (
    DomainError, ResourceNotFound, InvalidInput
)

logger = logging.getLogger(__name__)


class IndexService:
    """상품을 검색 문서로 만들어 인덱스에 적재하는 유스케이스 서비스."""

    def __init__(
        self,
        spus: SpuPort,
        builder: BuildService,
        indexer: IndexPort,
        executor: Executor | None = None,
    ) -> None:
        """
        인덱스 서비스 초기화.
        Args:
            spus: SpuPort          : 상품 조회
            builder: BuildService  : 검색 문서 조립
            indexer: IndexPort     : 검색 문서 색인
            executor: Executor     : 전체 적재 시 상품별 빌드 병렬 실행(없으면 순차)
        """
        self._spus = spus
        self._builder = builder
        self._indexer = indexer
        self._executor = executor

    # ================= public API =================

    def ensure_index(self) -> str:
        return self._indexer.create_index()

    def rebuild(self, spu_id: int) -> Goods:
        """
        상품 1건을 다시 만들어 색인한다.
        Args:
            spu_id: int
        Returns:
            Goods: 색인된 문서
        """
        logger.info("service.rebuild: spu_id=%s", spu_id, extra={"spu_id": spu_id})
        spu = self._spus.by_id(spu_id)
        if spu is None:
            raise ResourceNotFound("spu", f"spu {spu_id} not found")
        goods = self._builder.build(spu)
        self._indexer.write(goods)
        return goods

    def remove(self, spu_id: int) -> bool:
        logger.info("service.remove: spu_id=%s", spu_id, extra={"spu_id": spu_id})
        return self._indexer.delete(spu_id)

    def import_all(self, rows: int = 100) -> IndexResult:
        """
        판매 중인 전체 상품을 색인한다.
        Args:
            rows: int : 상품 조회 페이지 크기
        Returns:
            IndexResult: 색인 건수와 실패 상세(빌드 실패 + 색인 실패)
        """
        if rows < 1:
            raise InvalidInput(f"rows must be >= 1: {rows}")
        logger.info("service.import_all: rows=%s", rows)
        self.ensure_index()

        indexed = 0
        errors: List[IndexErrorItem] = []
        page = 1
        while True:
            spus = self._spus.page(page, rows, saleable=True)
            if not spus:
                break

            goods, failed = self._build_all(spus)
            errors.extend(failed)
            if goods:
                result = self._indexer.write_many(goods)
                indexed += result.indexed
                errors.extend(result.errors)

            if len(spus) < rows:
                break
            page += 1

        logger.info(
            "service.import_all done: indexed=%s failed=%s", indexed, len(errors),
            extra={"indexed": indexed, "failed": len(errors)},
        )
        return IndexResult(indexed=indexed, errors=errors)

    #================= internal helpers =================
    def _build_all(self, spus: List[Spu]) -> tuple[List[Goods], List[IndexErrorItem]]:
        """
        상품 목록을 빌드한다. 빌드 중 예외가 난 상품은 실패 항목으로 돌려준다.
        """
        if self._executor is None:
            outcomes = [self._try_build(spu) for spu in spus]
        else:
            outcomes = list(self._executor.map(self._try_build, spus))

        goods: List[Goods] = []
        failed: List[IndexErrorItem] = []
        for spu, outcome in zip(spus, outcomes):
            if isinstance(outcome, Goods):
                goods.append(outcome)
            else:
                failed.append(IndexErrorItem(doc_id=str(spu.id), reason=outcome))
        return goods, failed

    def _try_build(self, spu: Spu) -> Goods | str:
        try:
            return self._builder.build(spu)
        except DomainError as e:
            logger.warning("build failed: spu_id=%s error=%s", spu.id, e,
                           extra={"spu_id": spu.id})
            return str(e)
        except Exception as e:
            # 예상 못 한 오류도 해당 상품만 실패로 기록하고 적재는 계속한다
            logger.exception("build error: spu_id=%s", spu.id, extra={"spu_id": spu.id})
            return f"{type(e).__name__}: {e}"
