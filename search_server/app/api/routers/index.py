from fastapi import APIRouter, Depends, Query
from pydantic import BaseModel, Field
from typing import Dict, Any
from search_server.app.api.deps import get_index_service, IndexService
from search_server.app.platform.config import settings
import logging
logger = logging.getLogger(__name__)


router = APIRouter(prefix="/index", tags=["index"])

class ApiResponse(BaseModel):
    """
    색인 응답
    """
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    data: Dict[str, Any] = Field(
        ...,
        description="작업별 결과 딕셔너리"
    )

@router.post(
    "",
    summary="전체 상품 색인",
    description=(
        "판매 중인 전체 상품을 페이지 단위(`rows`)로 읽어 검색 문서를 만들고 bulk 색인합니다. "
        "빌드에 실패한 상품은 `errors`에 담기고 나머지는 계속 색인됩니다."
    ),
    operation_id="importGoods",
    status_code=200,
    response_model=ApiResponse,
    responses={
        200: {
            "description": "전체 색인 완료",
            "content": {
                "application/json": {
                    "examples": {
                        "partial": {
                            "summary": "일부 상품 실패",
                            "value": {
                                "success": True,
                                "message": "전체 색인 완료",
                                "data": {
                                    "indexed": 181,
                                    "errors": [
                                        {"doc_id": "96", "reason": "sku not found for spu 96"}
                                    ]
                                }
                            }
                        }
                    }
                }
            },
        },
        503: {"description": "검색 인덱스 사용 불가"},
        500: {"description": "서버 내부 오류"},
    },
)
def import_all(
    rows: int = Query(settings.IMPORT_PAGE_ROWS, ge=1, le=1000, description="상품 조회 페이지 크기"),
    svc: IndexService = Depends(get_index_service),
):
    logger.info("ImportRequest: rows=%s", rows)
    result = svc.import_all(rows=rows)
    return ApiResponse(success=True, message="전체 색인 완료", data=result.model_dump())

@router.put(
    "/{spu_id}",
    summary="상품 1건 재색인",
    description="상품 1건의 검색 문서를 다시 만들어 통째로 교체합니다.",
    operation_id="rebuildGoods",
    status_code=200,
    response_model=ApiResponse,
    responses={
        404: {"description": "상품 또는 연관 데이터(카테고리/브랜드/SKU/규격) 없음"},
        502: {"description": "상품 서비스 호출 실패"},
        504: {"description": "상품 서비스 호출 시간 초과"},
    },
)
def rebuild(spu_id: int, svc: IndexService = Depends(get_index_service)):
    logger.info("RebuildRequest: spu_id=%s", spu_id)
    goods = svc.rebuild(spu_id)
    return ApiResponse(
        success=True,
        message="재색인 완료",
        data=goods.model_dump(mode="json", by_alias=True))

@router.delete(
    "/{spu_id}",
    summary="상품 1건 색인 삭제",
    operation_id="removeGoods",
    status_code=200,
    response_model=ApiResponse,
)
def remove(spu_id: int, svc: IndexService = Depends(get_index_service)):
    logger.info("RemoveRequest: spu_id=%s", spu_id)
    deleted = svc.remove(spu_id)
    return ApiResponse(success=True, message="삭제 완료", data={"id": spu_id, "deleted": deleted})
