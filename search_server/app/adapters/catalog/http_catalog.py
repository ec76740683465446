"""
상품 서비스(item-service) REST API를 호출하는 카탈로그 포트 구현체들.

포트마다 어댑터 클래스 하나씩 두고, 모두 같은 httpx.Client를 공유한다.
클라이언트(base_url, 커넥션 풀, 타임아웃)는 앱 lifespan에서 한 번 만들어 주입받는다.
"""

from __future__ import annotations

import logging
from typing import Any, List, Sequence, TypeVar

import httpx
from pydantic import BaseModel, ValidationError

from search_server.app.domain.ports import (
    CategoryPort, BrandPort, SkuPort, SpecParamPort, SpuDetailPort, SpuPort
)
from search_server.app.domain.models import (
    Spu, Category, Brand, Sku, SpecParam, SpuDetail
)
from search_server.app.platform.exceptions import UpstreamTimeout, UpstreamUnavailable

logger = logging.getLogger(__name__)

M = TypeVar("M", bound=BaseModel)


class HttpCatalogAdapter:
    """상품 서비스 호출 공통 베이스."""

    resource = "catalog"

    def __init__(self, client: httpx.Client) -> None:
        """
        Args:
            client: base_url, timeout이 설정된 httpx.Client
        """
        self.client = client

    def _get(self, path: str, params: dict[str, Any] | None = None) -> Any:
        """
        GET 요청을 보내고 JSON 본문을 반환한다. 404나 빈 본문은 None.

        Raises:
            UpstreamTimeout: 타임아웃
            UpstreamUnavailable: 연결 실패, 404 이외의 4xx/5xx 응답
        """
        try:
            resp = self.client.get(path, params=params)
            if resp.status_code == httpx.codes.NOT_FOUND:
                return None
            resp.raise_for_status()
        except httpx.TimeoutException as e:
            logger.warning("catalog timeout: resource=%s path=%s", self.resource, path)
            raise UpstreamTimeout(self.resource, str(e) or type(e).__name__) from e
        except httpx.HTTPError as e:
            logger.warning("catalog error: resource=%s path=%s error=%s", self.resource, path, e)
            raise UpstreamUnavailable(self.resource, str(e) or type(e).__name__) from e
        if not resp.content:
            return None
        try:
            return resp.json()
        except ValueError as e:
            logger.warning("catalog bad body: resource=%s path=%s", self.resource, path)
            raise UpstreamUnavailable(self.resource, f"invalid json: {e}") from e

    def _validate(self, model: type[M], data: Any) -> M:
        """응답 항목을 모델로 읽는다. 형식이 맞지 않으면 UpstreamUnavailable."""
        try:
            return model.model_validate(data)
        except ValidationError as e:
            logger.warning("catalog bad payload: resource=%s error=%s", self.resource, e)
            raise UpstreamUnavailable(self.resource, f"invalid payload: {e}") from e


class HttpCategoryAdapter(HttpCatalogAdapter, CategoryPort):
    resource = "category"

    def by_ids(self, ids: Sequence[int]) -> List[Category]:
        data = self._get("category/list/ids", params={"ids": ",".join(str(i) for i in ids)})
        return [self._validate(Category, d) for d in data or []]


class HttpBrandAdapter(HttpCatalogAdapter, BrandPort):
    resource = "brand"

    def by_id(self, brand_id: int) -> Brand | None:
        data = self._get(f"brand/{brand_id}")
        return self._validate(Brand, data) if data else None


class HttpSkuAdapter(HttpCatalogAdapter, SkuPort):
    resource = "sku"

    def by_spu_id(self, spu_id: int) -> List[Sku]:
        data = self._get("sku/list", params={"id": spu_id})
        return [self._validate(Sku, d) for d in data or []]


class HttpSpecParamAdapter(HttpCatalogAdapter, SpecParamPort):
    resource = "spec_param"

    def list(self, cid: int, searching: bool = True) -> List[SpecParam]:
        params: dict[str, Any] = {"cid": cid}
        if searching:
            params["searching"] = "true"
        data = self._get("spec/params", params=params)
        return [self._validate(SpecParam, d) for d in data or []]


class HttpSpuDetailAdapter(HttpCatalogAdapter, SpuDetailPort):
    resource = "spu_detail"

    def by_id(self, spu_id: int) -> SpuDetail | None:
        data = self._get(f"spu/detail/{spu_id}")
        return self._validate(SpuDetail, data) if data else None


class HttpSpuAdapter(HttpCatalogAdapter, SpuPort):
    resource = "spu"

    def by_id(self, spu_id: int) -> Spu | None:
        data = self._get(f"spu/{spu_id}")
        return self._validate(Spu, data) if data else None

    def page(self, page: int, rows: int, saleable: bool = True) -> List[Spu]:
        data = self._get(
            "spu/page",
            params={"page": page, "rows": rows, "saleable": str(saleable).lower()})
        if not data:
            return []
        # 상품 서비스는 PageResult({"total", "totalPage", "items"})로 감싸서 준다
        if isinstance(data, dict):
            data = data.get("items") or []
        return [self._validate(Spu, d) for d in data]
