from __future__ import annotations

from concurrent.futures import Executor, ThreadPoolExecutor
from urllib.parse import urlparse

import httpx
from fastapi import Depends, Request
from opensearchpy import OpenSearch

from search_server.app.domain.ports import IndexPort, SearchPort
from search_server.app.domain.services.build_service import BuildService
from search_server.app.domain.services.index_service import IndexService
from search_server.app.domain.services.search_service import SearchService
from search_server.app.adapters.catalog.http_catalog import (
    HttpCategoryAdapter,
    HttpBrandAdapter,
    HttpSkuAdapter,
    HttpSpecParamAdapter,
    HttpSpuDetailAdapter,
    HttpSpuAdapter,
)
from search_server.app.adapters.indexers.opensearch_indexer import OpenSearchIndexer
from search_server.app.adapters.searchers.opensearch_searcher import OpenSearchSearcher
from search_server.app.platform.config import settings


# ---- 클라이언트 생성 ----
def create_opensearch() -> OpenSearch:
    u = urlparse(settings.OPENSEARCH_HOST)
    return OpenSearch(
        hosts=[
            {"host": u.hostname, "port": u.port or 9200, "scheme": u.scheme or "http"}
        ],
        verify_certs=False,
    )


def create_catalog_http() -> httpx.Client:
    return httpx.Client(
        base_url=settings.CATALOG_BASE_URL,
        timeout=settings.CATALOG_TIMEOUT,
        headers={"Accept": "application/json"},
    )


def create_executor(workers: int, name: str) -> ThreadPoolExecutor:
    return ThreadPoolExecutor(max_workers=workers, thread_name_prefix=name)


# ---- 클라이언트 ----
def get_opensearch(request: Request) -> OpenSearch:
    """
    앱 시작 시 main.py의 lifespan에서 만들어 넣어둔 OpenSearch 클라이언트를 꺼낸다.
    없으면(테스트 등) 즉석 생성.
    """
    if hasattr(request.app.state, "opensearch"):
        return request.app.state.opensearch
    return create_opensearch()


def get_catalog_http(request: Request) -> httpx.Client:
    """lifespan에서 만든 상품 서비스 httpx.Client. 없으면 즉석 생성."""
    if hasattr(request.app.state, "catalog_http"):
        return request.app.state.catalog_http
    return create_catalog_http()


def get_fetch_executor(request: Request) -> Executor | None:
    """lifespan에서 만든 카탈로그 조회용 스레드 풀. 없으면 순차 실행."""
    return getattr(request.app.state, "fetch_executor", None)


def get_build_executor(request: Request) -> Executor | None:
    """lifespan에서 만든 상품 빌드용 스레드 풀. 없으면 순차 실행."""
    return getattr(request.app.state, "build_executor", None)


# ---- 서비스 ----
def get_build_service(
    http: httpx.Client = Depends(get_catalog_http),
    executor: Executor | None = Depends(get_fetch_executor),
) -> BuildService:
    """
    상품 서비스 어댑터들을 묶어 BuildService를 생성해 주입한다.
    """
    return BuildService(
        categories=HttpCategoryAdapter(http),
        brands=HttpBrandAdapter(http),
        skus=HttpSkuAdapter(http),
        spec_params=HttpSpecParamAdapter(http),
        details=HttpSpuDetailAdapter(http),
        executor=executor,
    )


def get_index_service(
    os: OpenSearch = Depends(get_opensearch),
    http: httpx.Client = Depends(get_catalog_http),
    executor: Executor | None = Depends(get_build_executor),
    builder: BuildService = Depends(get_build_service),
) -> IndexService:
    """
    FastAPI DI에서 OpenSearch/상품 서비스 클라이언트를 받아 IndexService를 생성해 주입한다.
    """
    indexer: IndexPort = OpenSearchIndexer(os, settings.OPENSEARCH_INDEX)
    return IndexService(
        spus=HttpSpuAdapter(http),
        builder=builder,
        indexer=indexer,
        executor=executor,
    )


def get_search_service(os: OpenSearch = Depends(get_opensearch)) -> SearchService:
    """
    FastAPI DI에서 OpenSearch 클라이언트를 받아 SearchService를 생성해 주입한다.
    """
    searcher: SearchPort = OpenSearchSearcher(os, settings.OPENSEARCH_INDEX)
    return SearchService(searcher)
