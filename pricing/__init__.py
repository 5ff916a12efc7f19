"""
pricing/ - 운임·수익성 계산 로직
────────────────────────────────────
웹 프레임워크 의존성이 없는 순수 Python 모듈.
backend/app 은 이 패키지의 함수를 호출하는 얇은 API 레이어입니다.

모듈 구조:
- models.py: 입출력 타입 (검증 포함)
- errors.py: 요율 누락 / 입력 오류
- quotation.py: 운임 산출
- profitability.py: 수익성 판정, 권장 기사 운임
- regions.py: 지역명 정규화
- db.py: DB 연결 및 요율표 스키마
- rate_lookup.py: 센터 요율 조회/관리
- export.py: 수익성 엑셀 내보내기
"""

# 타입
from .models import (
    PROFIT,
    BREAK_EVEN,
    LOSS,
    FareComponents,
    BillableRequest,
    ProfitabilityThresholds,
    FareQuote,
    ProfitabilityResult,
)

# 오류
from .errors import (
    FareError,
    MissingRateError,
    MissingSurchargeError,
    InvalidInputError,
)

# 운임 산출
from .quotation import (
    quote_fare,
    build_formula,
)

# 수익성
from .profitability import (
    STATUS_LABELS,
    STATUS_COLORS,
    resolve_center_billing,
    classify_margin_rate,
    calculate_profitability,
    calculate_recommended_driver_fee,
    get_profitability_icon,
    generate_profitability_summary,
)

# 지역
from .regions import (
    normalize_region,
    unique_regions,
)

# DB
from .db import (
    get_connection,
    ensure_tables,
    FARE_TYPE_BASIC,
    FARE_TYPE_EXTRA,
)

# 요율 조회
from .rate_lookup import (
    lookup_fare_components,
    list_center_fares,
    upsert_center_fare,
    deactivate_center_fare,
)

# 엑셀
from .export import (
    add_profitability_columns,
    profitability_to_excel,
)

__all__ = [
    # models
    "PROFIT",
    "BREAK_EVEN",
    "LOSS",
    "FareComponents",
    "BillableRequest",
    "ProfitabilityThresholds",
    "FareQuote",
    "ProfitabilityResult",
    # errors
    "FareError",
    "MissingRateError",
    "MissingSurchargeError",
    "InvalidInputError",
    # quotation
    "quote_fare",
    "build_formula",
    # profitability
    "STATUS_LABELS",
    "STATUS_COLORS",
    "resolve_center_billing",
    "classify_margin_rate",
    "calculate_profitability",
    "calculate_recommended_driver_fee",
    "get_profitability_icon",
    "generate_profitability_summary",
    # regions
    "normalize_region",
    "unique_regions",
    # db
    "get_connection",
    "ensure_tables",
    "FARE_TYPE_BASIC",
    "FARE_TYPE_EXTRA",
    # rate_lookup
    "lookup_fare_components",
    "list_center_fares",
    "upsert_center_fare",
    "deactivate_center_fare",
    # export
    "add_profitability_columns",
    "profitability_to_excel",
]
