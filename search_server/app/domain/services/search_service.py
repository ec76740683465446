# search_server/app/domain/services/search_service.py
"""
SearchService
==============

검색 유스케이스.

Flow:
    SearchRequest → (페이지 변환, 필드 제한, all 필드 match) → SearchPort → PageResult

- 요청 page는 1부터, 인덱스는 0부터 센다.
- 목록 화면에 필요한 id/skus/subTitle만 조회한다.
- total_page는 인덱스 응답을 믿지 않고 total/size 올림으로 직접 계산한다.
- 인덱스 오류는 재시도/가공 없이 그대로 전파한다.
- 빈 검색어도 그대로 질의한다(매칭 0건 → 빈 페이지).
"""

from __future__ import annotations

import logging

from search_server.app.domain.ports import SearchPort
from search_server.app.domain.models import Goods, PageResult, SearchRequest
from search_server.app.domain.utils import total_pages
from search_server.app.platform.exceptions import InvalidInput

logger = logging.getLogger(__name__)

SOURCE_FIELDS = ("id", "skus", "subTitle")


class SearchService:

    def __init__(
        self,
        searcher: SearchPort) -> None:
        self._searcher = searcher
        
    # ================= public API =================
    def search(self, request: SearchRequest) -> PageResult[Goods]:
        """
        검색을 수행하는 메서드.
        Args:
            request: SearchRequest : 검색어, 페이지(1부터), 페이지 크기
        Returns:
            PageResult[Goods]: 전체 건수, 전체 페이지 수, 페이지 문서
        """
        logger.info("service.search: key=%s page=%s size=%s",
                    request.key, request.page, request.size)
        if request.page < 1:
            raise InvalidInput(f"page must be >= 1: {request.page}")

        size = request.size
        items, total = self._searcher.query(
            request.key, request.page - 1, size, list(SOURCE_FIELDS))
        return PageResult[Goods](
            total=total,
            total_page=total_pages(total, size),
            items=items,
        )
