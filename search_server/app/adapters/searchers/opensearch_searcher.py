"""
사용자 검색어로 Goods 인덱스를 조회하는 SearchPort 구현체.
"""

from __future__ import annotations

from typing import Any, Dict, List, Sequence
from opensearchpy import OpenSearch
from opensearchpy.exceptions import ConnectionError, TransportError
from search_server.app.domain.ports import SearchPort
from search_server.app.domain.models import Goods
from search_server.app.platform.exceptions import IndexUnavailable

class OpenSearchSearcher(SearchPort):

    def __init__(self, client: OpenSearch, index_name: str) -> None:
        self.client = client
        self.index_name = index_name

    def query(
        self,
        key: str,
        page: int,
        size: int,
        fields: Sequence[str],
    ) -> tuple[List[Goods], int]:
        """
        Opensearch에 검색을 수행하여 결과를 반환한다.

        Args:
            key (str): 검색어
            page (int): 0부터 시작하는 페이지
            size (int): 페이지 크기
            fields (Sequence[str]): 조회할 _source 필드
        Returns:
            tuple[List[Goods], int]: (페이지 문서, 전체 매칭 건수)
        """
        body = self._build_query(key, page=page, size=size, fields=fields)
        try:
            res = self.client.search(index=self.index_name, body=body)
        except (ConnectionError, TransportError) as e:
            raise IndexUnavailable(self.index_name, str(e)) from e

        hits = res.get("hits", {})
        items = [Goods.model_validate(h["_source"]) for h in hits.get("hits", [])]
        return items, self._total(hits)

    def _build_query(
        self,
        key: str,
        page: int = 0,
        size: int = 20,
        fields: Sequence[str] = ("id", "skus", "subTitle")) -> Dict[str, Any]:
        """
        검색 쿼리 바디를 구성한다.

        Args:
            key (str): 검색어
            page (int): 0부터 시작하는 페이지
            size (int): 페이지 크기
            fields (Sequence[str]): 조회할 _source 필드
        Returns:
            Dict[str, Any]: 검색 쿼리 바디
        """
        # TODO: 브랜드/카테고리/규격 필터는 bool.filter 절로 추가
        return {
            "from": page * size,
            "size": size,
            "_source": {"includes": list(fields)},
            "track_total_hits": True,
            "query": {
                "match": {
                    "all": {
                        "query": key
                    }
                }
            }
        }

    @staticmethod
    def _total(hits: Dict[str, Any]) -> int:
        # 7.x 이후는 {"value": n, "relation": "eq"}, 이전 버전은 정수
        total = hits.get("total", 0)
        if isinstance(total, dict):
            return int(total.get("value", 0))
        return int(total)
