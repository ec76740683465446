"""
Goods 문서를 OpenSearch에 색인하는 IndexPort 구현체
"""

from __future__ import annotations
import json
import logging
import os
from typing import Iterable
from pathlib import Path
from opensearchpy import OpenSearch, helpers
from opensearchpy.exceptions import ConnectionError, NotFoundError, TransportError
from search_server.app.domain.ports import IndexPort
from search_server.app.domain.models import Goods, IndexResult, IndexErrorItem
from search_server.app.platform.exceptions import IndexUnavailable

logger = logging.getLogger(__name__)


class OpenSearchIndexer(IndexPort):

    def __init__(self, client: OpenSearch, index_name: str) -> None:
        self.client = client
        self.index_name = index_name
        self._load_index_schema()

    def _load_index_schema(self) -> None:
        """
            인덱스 스키마를 JSON 파일에서 로드한다.
        """
        root_dir = Path(os.path.dirname(__file__)).resolve().parents[2]
        schema_path = root_dir / "resources/schema/goods_index.json"
        with open(schema_path, 'r', encoding='utf-8') as f:
            self.index_schema = json.load(f)

    def create_index(self) -> str:
        """
            로드된 스키마를 사용해 인덱스를 생성한다.
            이미 있으면 그대로 둔다(매핑 변경/마이그레이션은 하지 않음).

            Returns:
                인덱스 이름
        """
        try:
            if self.client.indices.exists(index=self.index_name):
                logger.info("Index '%s' already exists.", self.index_name)
                return self.index_name
            self.client.indices.create(index=self.index_name, body=self.index_schema)
        except (ConnectionError, TransportError) as e:
            raise IndexUnavailable(self.index_name, str(e)) from e
        logger.info("Index '%s' created successfully.", self.index_name,
                    extra={"index_name": self.index_name})
        return self.index_name

    def write(self, goods: Goods) -> None:
        """
            상품 문서 1건을 색인한다(같은 id 문서는 통째로 교체).

            Args:
                goods: 색인 문서
        """
        try:
            self.client.index(
                index=self.index_name,
                id=str(goods.id),
                body=goods.to_source(),
            )
        except (ConnectionError, TransportError) as e:
            raise IndexUnavailable(self.index_name, str(e)) from e

    def write_many(self, goods: Iterable[Goods]) -> IndexResult:
        """
            상품 문서들을 bulk 색인한다.

            Args:
                goods: 색인 문서들
            Returns:
                색인 결과(색인 성공 건수, 실패 상세)
        """
        def actions():
            for g in goods:
                yield {
                    "_op_type": "index",
                    "_index": self.index_name,
                    "_id": str(g.id),
                    "_source": g.to_source(),
                }

        # bulk 적재
        try:
            ok, errors = helpers.bulk(self.client, actions(), raise_on_error=False)
        except ConnectionError as e:
            raise IndexUnavailable(self.index_name, str(e)) from e
        err_items: list[IndexErrorItem] = []
        for e in errors or []:
            err_items.append(IndexErrorItem(
                doc_id=str(e.get("index", {}).get("_id", "")),
                reason=str(e)))
        return IndexResult(indexed=ok, errors=err_items)

    def delete(self, goods_id: int) -> bool:
        """
            상품 문서를 삭제한다. 없는 문서면 False.
        """
        try:
            self.client.delete(index=self.index_name, id=str(goods_id))
        except NotFoundError:
            return False
        except (ConnectionError, TransportError) as e:
            raise IndexUnavailable(self.index_name, str(e)) from e
        return True
