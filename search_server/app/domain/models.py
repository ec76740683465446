"""
도메인 모델 정의.

- Spu / Category / Brand / Sku / SpecParam / SpuDetail: 상품 서비스에서 조회하는 원본(정규화) 데이터
- Goods: 색인 단위(상품 1건 = 문서 1건)의 비정규화 검색 문서
- SearchRequest / PageResult: 검색 요청/응답
- IndexResult: 일괄 색인 결과 요약

상품 서비스 JSON이 camelCase 라서 CamelModel을 기반으로 한다.
Pydantic v2 기반 모델이라 검증/직렬화가 용이합니다.
"""

from __future__ import annotations

import json
from typing import Any, Generic, TypeVar
from datetime import datetime
from pydantic import BaseModel, ConfigDict, Field, ValidationInfo, field_validator
from pydantic.alias_generators import to_camel


T = TypeVar("T")


class CamelModel(BaseModel):
    """camelCase JSON <-> snake_case 필드 매핑 공통 베이스."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


# ================= 카탈로그(원본) =================

class Spu(CamelModel):
    """상품(SPU) 원본. 색인 문서 1건의 기준."""
    id: int
    cid1: int
    cid2: int
    cid3: int
    brand_id: int
    title: str
    sub_title: str | None = None
    create_time: datetime | None = None
    saleable: bool = True
    valid: bool = True


class Category(CamelModel):
    id: int
    name: str
    parent_id: int | None = None


class Brand(CamelModel):
    id: int
    name: str


class Sku(CamelModel):
    """판매 단위(SKU). images는 콤마로 구분된 이미지 주소 목록."""
    id: int
    spu_id: int | None = None
    title: str
    price: int = Field(..., description="가격(최소 화폐 단위)")
    images: str = ""

    @field_validator("images", mode="before")
    @classmethod
    def _none_to_empty(cls, v: Any) -> Any:
        return "" if v is None else v


class SpecParam(CamelModel):
    """
    카테고리별 규격 파라미터 정의.
    numeric=True 이면 segments("0-100,100-500,500")로 구간(버킷) 라벨을 만든다.
    """
    id: int
    cid: int | None = None
    name: str
    generic: bool = True
    numeric: bool = False
    unit: str | None = None
    searching: bool = True
    segments: str | None = None


class SpuDetail(CamelModel):
    """
    상품별 규격 값.
    - generic_spec: {paramId: 값}
    - special_spec: {paramId: [값, ...]}
    상품 서비스는 두 맵을 JSON 문자열로 내려주므로 before 검증에서 디코딩한다.
    """
    spu_id: int | None = None
    generic_spec: dict[int, str] = Field(default_factory=dict)
    special_spec: dict[int, list[str]] = Field(default_factory=dict)

    @field_validator("generic_spec", "special_spec", mode="before")
    @classmethod
    def _decode_json(cls, v: Any, info: ValidationInfo) -> Any:
        if v is None or v == "":
            return {}
        if isinstance(v, str):
            v = json.loads(v)
        if not isinstance(v, dict):
            return v
        # 숫자/불리언 값(5.2, 64, true)도 JSON 표기 그대로 문자열로 보관한다
        if info.field_name == "generic_spec":
            return {k: _spec_text(val) for k, val in v.items()}
        return {
            k: [_spec_text(x) for x in vals] if isinstance(vals, list) else vals
            for k, vals in v.items()
        }


def _spec_text(val: Any) -> str:
    if val is None:
        return ""
    if isinstance(val, str):
        return val
    return json.dumps(val, ensure_ascii=False)


# ================= 색인 문서 =================

class SkuSummary(BaseModel):
    """검색 목록 렌더링에 필요한 SKU 요약(id/title/price/대표 이미지)."""
    id: int
    title: str
    price: int
    image: str


class Goods(CamelModel):
    """
    색인 문서 1건(상품 1건과 1:1).
    OpenSearch 매핑(resources/schema/goods_index.json):
      - all: text (키워드 매칭 대상: 제목 + 카테고리명 + 브랜드명)
      - cid1/cid2/cid3/brandId/price: long (필터/범위)
      - skus: SkuSummary 목록의 JSON 문자열 (저장만, 색인 안 함)
      - specs: 규격명 → 값/구간 라벨/값 목록 (동적 object)
    검색 시에는 id/skus/subTitle만 조회하므로 나머지 필드는 비어 있을 수 있다.
    """
    id: int
    cid1: int | None = None
    cid2: int | None = None
    cid3: int | None = None
    brand_id: int | None = None
    create_time: datetime | None = None
    sub_title: str | None = None
    all: str | None = None
    price: list[int] | None = Field(None, description="SKU 가격 집합(중복 제거, 오름차순)")
    skus: str | None = None
    specs: dict[str, Any] | None = None

    def to_source(self) -> dict[str, Any]:
        """색인 요청 _source 형태(camelCase)로 변환."""
        return self.model_dump(mode="json", by_alias=True)


# ================= 검색 =================

class SearchRequest(CamelModel):
    """검색 요청. page는 1부터 시작."""
    key: str = Field(..., description="검색어")
    page: int = Field(1, ge=1, description="페이지(1부터)")
    size: int = Field(20, ge=1, le=100, description="페이지 크기")


class PageResult(CamelModel, Generic[T]):
    """페이지 결과. total_page = ceil(total / size)."""
    total: int = Field(..., ge=0)
    total_page: int = Field(..., ge=0)
    items: list[T] = Field(default_factory=list)


# ================= 색인 결과 =================

class IndexErrorItem(BaseModel):
    """색인 실패 항목 요약."""
    doc_id: str
    reason: str


class IndexResult(BaseModel):
    """색인 실행 결과."""
    indexed: int = Field(..., ge=0)
    errors: list[IndexErrorItem] = Field(default_factory=list)
