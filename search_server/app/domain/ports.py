"""
도메인 포트(추상 인터페이스).

애플리케이션 서비스(유스케이스)는 아래 포트들(추상)에만 의존합니다.
구체 구현은 adapters 레이어에서 제공하고, FastAPI DI로 주입합니다.

- 카탈로그 포트: 상품 서비스(카테고리/브랜드/SKU/규격/상품)를 읽기 전용으로 조회
- IndexPort / SearchPort: 검색 인덱스 쓰기/읽기
"""

from __future__ import annotations

from typing import Protocol, Iterable, List, Sequence
from .models import (
    Spu,
    Category,
    Brand,
    Sku,
    SpecParam,
    SpuDetail,
    Goods,
    IndexResult,
)


class CategoryPort(Protocol):
    """카테고리 조회."""
    def by_ids(self, ids: Sequence[int]) -> List[Category]:
        """
        Returns:
            List[Category]: 조회된 카테고리(없으면 빈 목록)
        """
        ...


class BrandPort(Protocol):
    """브랜드 조회."""
    def by_id(self, brand_id: int) -> Brand | None:
        ...


class SkuPort(Protocol):
    """상품(SPU)에 속한 SKU 전체 조회."""
    def by_spu_id(self, spu_id: int) -> List[Sku]:
        ...


class SpecParamPort(Protocol):
    """카테고리별 규격 파라미터 정의 조회."""
    def list(self, cid: int, searching: bool = True) -> List[SpecParam]:
        """
        Args:
            cid: 3단계 카테고리 id
            searching: True면 검색용 파라미터만
        """
        ...


class SpuDetailPort(Protocol):
    """상품별 규격 값(통용/특유) 조회."""
    def by_id(self, spu_id: int) -> SpuDetail | None:
        ...


class SpuPort(Protocol):
    """상품(SPU) 조회. 단건 재색인/전체 적재에 사용."""
    def by_id(self, spu_id: int) -> Spu | None:
        ...

    def page(self, page: int, rows: int, saleable: bool = True) -> List[Spu]:
        """
        Args:
            page: 1부터 시작하는 페이지
            rows: 페이지 크기
            saleable: True면 판매 중인 상품만
        Returns:
            List[Spu]: 해당 페이지 상품(마지막 페이지 이후는 빈 목록)
        """
        ...


class IndexPort(Protocol):
    """
    검색 문서를 인덱스에 적재.
    문서는 상품 id를 키로 통째로 교체(index op)한다.
    """
    index_name: str

    def create_index(self) -> str:
        """인덱스가 없으면 생성하고 이름을 반환."""
        ...

    def write(self, goods: Goods) -> None:
        ...

    def write_many(self, goods: Iterable[Goods]) -> IndexResult:
        """
        Returns:
            IndexResult: 성공/실패 건수 및 실패 상세
        """
        ...

    def delete(self, goods_id: int) -> bool:
        """
        Returns:
            bool: 삭제된 문서가 있었는지 여부
        """
        ...


class SearchPort(Protocol):
    """
    검색을 수행합니다.
    """
    def query(
        self,
        key: str,
        page: int,
        size: int,
        fields: Sequence[str],
    ) -> tuple[List[Goods], int]:
        """
        Args:
            key: 검색어 (all 필드 match)
            page: 0부터 시작하는 페이지
            size: 페이지 크기
            fields: 조회할 _source 필드
        Returns:
            tuple[List[Goods], int]: (페이지 문서, 전체 매칭 건수)
        """
        ...
