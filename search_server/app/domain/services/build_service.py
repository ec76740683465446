"""
BuildService
============

상품(SPU) 1건을 검색 문서(Goods) 1건으로 조립하는 유스케이스.

Flow:
    (Category, Brand, Sku, SpecParam, SpuDetail 조회) → 조인 → Goods 생성

- 다섯 조회는 서로 독립이므로 Executor가 주입되면 병렬로 실행하고,
  모두 모은 뒤(join) 문서를 만든다. 실패는 선언 순서대로 판단한다.
- 하나라도 비어 있으면 해당 NotFound 예외로 중단한다(부분 문서 없음).
- 도메인은 **Port(인터페이스)** 에만 의존합니다. (DIP)

예시:
    svc = BuildService(categories, brands, skus, spec_params, details, executor=pool)
    goods = svc.build(spu)
"""

from __future__ import annotations

import json
import logging
from concurrent.futures import Executor, Future
from typing import Any, Callable, Dict, List, TypeVar

from search_server.app.domain.ports import (
    CategoryPort, BrandPort, SkuPort, SpecParamPort, SpuDetailPort
)
from search_server.app.domain.models import (
    Spu, Category, Brand, Sku, SpecParam, SpuDetail, Goods
)
from search_server.app.domain.utils import choose_segment, to_sku_summary
from search_server.app.platform.exceptions import (
    CategoryNotFound,
    BrandNotFound,
    SkuNotFound,
    SpecParamNotFound,
    SpecDetailNotFound,
)

logger = logging.getLogger(__name__)

R = TypeVar("R")


class _Inline:
    """Executor가 없을 때 쓰는 즉시 실행용 future 대용."""

    def __init__(self, fn: Callable[[], Any]) -> None:
        self._value = None
        self._error: BaseException | None = None
        try:
            self._value = fn()
        except Exception as e:
            self._error = e

    def result(self) -> Any:
        if self._error is not None:
            raise self._error
        return self._value


class BuildService:
    """상품 1건을 검색 문서로 조립하는 서비스."""

    def __init__(
        self,
        categories: CategoryPort,
        brands: BrandPort,
        skus: SkuPort,
        spec_params: SpecParamPort,
        details: SpuDetailPort,
        executor: Executor | None = None,
    ) -> None:
        """
        Args:
            categories: CategoryPort   : 카테고리 조회
            brands: BrandPort          : 브랜드 조회
            skus: SkuPort              : SKU 조회
            spec_params: SpecParamPort : 규격 파라미터 정의 조회
            details: SpuDetailPort     : 상품 규격 값 조회
            executor: Executor         : 조회 병렬 실행용(없으면 순차 실행)
        """
        self._categories = categories
        self._brands = brands
        self._skus = skus
        self._spec_params = spec_params
        self._details = details
        self._executor = executor

    # ================= public API =================

    def build(self, spu: Spu) -> Goods:
        """
        상품 1건을 검색 문서로 조립한다.

        Args:
            spu: Spu (상품 원본)
        Returns:
            Goods: 색인 문서
        Raises:
            CategoryNotFound, BrandNotFound, SkuNotFound,
            SpecParamNotFound, SpecDetailNotFound: 조회 결과가 비어 있을 때
            UpstreamTimeout, UpstreamUnavailable: 상품 서비스 호출 실패
        """
        logger.info("service.build: spu_id=%s", spu.id, extra={"spu_id": spu.id})

        f_categories = self._submit(self._categories.by_ids, [spu.cid1, spu.cid2, spu.cid3])
        f_brand = self._submit(self._brands.by_id, spu.brand_id)
        f_skus = self._submit(self._skus.by_spu_id, spu.id)
        f_params = self._submit(self._spec_params.list, spu.cid3, True)
        f_detail = self._submit(self._details.by_id, spu.id)

        # 1. 카테고리
        categories: List[Category] = f_categories.result()
        if not categories:
            raise CategoryNotFound(spu.id)

        # 2. 브랜드
        brand: Brand | None = f_brand.result()
        if brand is None:
            raise BrandNotFound(spu.id, spu.brand_id)

        # 3. 검색 필드
        names = " ".join(c.name for c in categories)
        all_text = spu.title + names + brand.name

        # 4. SKU
        sku_list: List[Sku] = f_skus.result()
        if not sku_list:
            raise SkuNotFound(spu.id)
        summaries = [to_sku_summary(sku).model_dump() for sku in sku_list]
        prices = sorted({sku.price for sku in sku_list})

        # 5. 규격 파라미터
        params: List[SpecParam] = f_params.result()
        if not params:
            raise SpecParamNotFound(spu.id, spu.cid3)

        # 6. 규격 값
        detail: SpuDetail | None = f_detail.result()
        if detail is None:
            raise SpecDetailNotFound(spu.id)

        # 7. 규격명 → 값
        specs = self._build_specs(params, detail)

        # 8. 문서
        return Goods(
            id=spu.id,
            cid1=spu.cid1,
            cid2=spu.cid2,
            cid3=spu.cid3,
            brand_id=spu.brand_id,
            create_time=spu.create_time,
            sub_title=spu.sub_title,
            all=all_text,
            price=prices,
            skus=json.dumps(summaries, ensure_ascii=False),
            specs=specs,
        )

    #================= internal helpers =================
    def _submit(self, fn: Callable[..., R], *args: Any) -> "Future[R] | _Inline":
        if self._executor is None:
            return _Inline(lambda: fn(*args))
        return self._executor.submit(fn, *args)

    def _build_specs(self, params: List[SpecParam], detail: SpuDetail) -> Dict[str, Any]:
        """
        규격 파라미터마다 값을 찾아 {규격명: 값} 맵을 만든다.
        - 통용 규격: generic_spec 값 (숫자형이면 구간 라벨)
        - 특유 규격: special_spec 값 목록
        값이 없으면 통용은 "", 특유는 [].
        """
        specs: Dict[str, Any] = {}
        for param in params:
            if param.generic:
                value = detail.generic_spec.get(param.id)
                if value is None:
                    specs[param.name] = ""
                elif param.numeric:
                    specs[param.name] = choose_segment(value, param)
                else:
                    specs[param.name] = value
            else:
                specs[param.name] = detail.special_spec.get(param.id, [])
        return specs
