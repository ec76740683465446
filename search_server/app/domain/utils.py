"""
유틸리티 함수.
"""

import math

from search_server.app.domain.models import SpecParam, Sku, SkuSummary

OTHER_SEGMENT = "Other"


def to_double(text: str | None, default: float = 0.0) -> float:
    """
    문자열을 float로 변환하는 함수. 변환 실패 시 default.
    Args:
        text: str (숫자 문자열)
        default: float
    Returns:
        float: 변환 값
    """
    if text is None:
        return default
    try:
        value = float(text.strip())
    except ValueError:
        return default
    # "nan", "inf" 같은 입력은 숫자로 보지 않는다
    if math.isnan(value) or math.isinf(value):
        return default
    return value


def choose_segment(value: str | None, param: SpecParam) -> str:
    """
    숫자형 규격 값을 구간 라벨로 변환하는 함수.

    segments 예: "0-100,100-500,500", unit 예: "g"
      - 50  → "100g or below"   (begin == 0)
      - 300 → "100-500g"
      - 900 → "500g or above"   (상한 없음)
      - -5  → "Other"           (매칭 구간 없음)

    구간은 [begin, end) 이고 선언 순서대로 첫 번째로 맞는 구간을 고른다.
    숫자로 읽을 수 없는 값은 0으로 본다.

    Args:
        value: str (원본 규격 값)
        param: SpecParam (segments, unit)
    Returns:
        str: 구간 라벨
    """
    val = to_double(value)
    unit = param.unit or ""
    if not param.segments:
        return OTHER_SEGMENT

    for segment in param.segments.split(","):
        # 끝이나 중간의 빈 구간("0-100,,500,")은 건너뛴다
        if not segment.strip():
            continue
        segs = segment.split("-")
        begin = to_double(segs[0])
        end = math.inf
        if len(segs) == 2:
            end = to_double(segs[1])

        if begin <= val < end:
            if len(segs) == 1:
                return f"{segs[0]}{unit} or above"
            if begin == 0:
                return f"{segs[1]}{unit} or below"
            return f"{segment}{unit}"
    return OTHER_SEGMENT


def first_image(images: str) -> str:
    """
    콤마로 구분된 이미지 목록에서 첫 번째 이미지만 꺼낸다.
    구분자가 없으면 전체 문자열.
    """
    return images.split(",", 1)[0]


def to_sku_summary(sku: Sku) -> SkuSummary:
    return SkuSummary(id=sku.id, title=sku.title, price=sku.price, image=first_image(sku.images))


def total_pages(total: int, size: int) -> int:
    """전체 건수와 페이지 크기로 전체 페이지 수(올림)를 계산."""
    return (total + size - 1) // size
