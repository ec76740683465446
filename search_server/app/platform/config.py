from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    model_config = SettingsConfigDict(env_file=".env", extra="ignore")

    APP_NAME: str = "goods-search-api"
    DEBUG: bool = False

    OPENSEARCH_HOST: str = "http://opensearch:9200"
    OPENSEARCH_INDEX: str = "goods"

    # 상품 서비스(카테고리/브랜드/SKU/규격 파라미터 조회)
    CATALOG_BASE_URL: str = "http://item-service:8081"
    CATALOG_TIMEOUT: float = 5.0

    # 상품 1건의 카탈로그 조회 병렬 처리 / 전체 적재 시 상품 단위 병렬 처리
    # 빌드 스레드가 조회 풀을 기다리므로 두 풀은 분리한다
    FETCH_WORKERS: int = 16
    BUILD_WORKERS: int = 4
    IMPORT_PAGE_ROWS: int = 100

    LOG_AS_JSON: bool = True
    LOG_TO_FILE: bool = False
    LOG_DIR: str = "/var/log/app"
    LOG_LEVEL: str = "INFO"

settings = Settings()
