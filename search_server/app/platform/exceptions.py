class DomainError(Exception):
    """도메인/유즈케이스 공통 베이스 예외"""
    pass

class ResourceNotFound(DomainError):
    def __init__(self, resource: str, detail: str | None = None):
        super().__init__(detail or f"{resource} not found")
        self.resource = resource

class CategoryNotFound(ResourceNotFound):
    def __init__(self, spu_id: int):
        super().__init__("category", f"category not found for spu {spu_id}")
        self.spu_id = spu_id

class BrandNotFound(ResourceNotFound):
    def __init__(self, spu_id: int, brand_id: int):
        super().__init__("brand", f"brand {brand_id} not found for spu {spu_id}")
        self.spu_id = spu_id

class SkuNotFound(ResourceNotFound):
    def __init__(self, spu_id: int):
        super().__init__("sku", f"sku not found for spu {spu_id}")
        self.spu_id = spu_id

class SpecParamNotFound(ResourceNotFound):
    def __init__(self, spu_id: int, cid: int):
        super().__init__("spec_param", f"searchable spec params not found for category {cid} (spu {spu_id})")
        self.spu_id = spu_id

class SpecDetailNotFound(ResourceNotFound):
    def __init__(self, spu_id: int):
        super().__init__("spu_detail", f"spec detail not found for spu {spu_id}")
        self.spu_id = spu_id

class InvalidInput(DomainError):
    def __init__(self, message: str):
        super().__init__(message)

class UpstreamTimeout(DomainError):
    """카탈로그 서비스 호출 시간 초과"""
    def __init__(self, resource: str, reason: str):
        super().__init__(f"{resource} lookup timed out: {reason}")
        self.resource = resource

class UpstreamUnavailable(DomainError):
    """카탈로그 서비스 호출 실패(연결 실패, 5xx 등)"""
    def __init__(self, resource: str, reason: str):
        super().__init__(f"{resource} lookup failed: {reason}")
        self.resource = resource

class IndexUnavailable(DomainError):
    def __init__(self, index_name: str, reason: str):
        super().__init__(f"Index {index_name} unavailable: {reason}")
        self.index_name = index_name

class IndexingFailed(DomainError):
    def __init__(self, index_name: str, reason: str):
        super().__init__(f"Indexing failed for {index_name}: {reason}")
        self.index_name = index_name
