from fastapi import APIRouter, Depends
from pydantic import BaseModel, Field
from search_server.app.api.deps import get_search_service, SearchService
from search_server.app.domain.models import SearchRequest
from typing import Dict, Any
import logging
logger = logging.getLogger(__name__)

router = APIRouter(prefix="/search", tags=["search"])

class ApiResponse(BaseModel):
    """
    검색 응답
    """
    success: bool = Field(..., description="성공 여부")
    message: str = Field(..., description="결과 메시지")
    data: Dict[str, Any] = Field(
        ...,
        description="페이지 결과(total, totalPage, items)"
    )

@router.post(
    "",
    summary="상품 검색",
    description=(
        "검색어(`key`)로 상품을 검색합니다. `page`는 1부터 시작하고 "
        "`size`로 페이지 크기를 지정합니다. 각 항목은 id, skus, subTitle만 포함합니다."
    ),
    operation_id="searchGoods",
    status_code=200,
    response_model=ApiResponse,
    responses={
        200: {
            "description": "검색 성공",
            "content": {
                "application/json": {
                    "examples": {
                        "basic": {
                            "summary": "기본 검색 예시",
                            "value": {
                                "success": True,
                                "message": "검색 성공",
                                "data": {
                                    "total": 25,
                                    "totalPage": 3,
                                    "items": [
                                        {
                                            "id": 57,
                                            "subTitle": "6.2 inch display",
                                            "skus": "[{\"id\": 2600242, \"title\": \"Phone 64GB\", \"price\": 159900, \"image\": \"http://image.example.com/1.jpg\"}]",
                                        }
                                    ]
                                }
                            }
                        }
                    }
                }
            },
        },
        400: {"description": "잘못된 요청 값"},
        503: {"description": "검색 인덱스 사용 불가"},
        500: {"description": "서버 내부 오류"},
    },
)
def search(req: SearchRequest, svc: SearchService = Depends(get_search_service)):
    logger.info("SearchRequest: %s", req)
    result = svc.search(req)
    return ApiResponse(
        success=True,
        message="검색 성공",
        data=result.model_dump(mode="json", by_alias=True, exclude_none=True))
