"""
pricing/errors.py - 요금 계산 오류 정의
───────────────────────────────────────────
요율 누락 / 입력 오류를 구분하기 위한 예외 계층.

API 레이어는 code 값으로 응답 상태를 결정합니다.
- MISSING_RATE      → 422 (기본운임 등록 필요)
- MISSING_SURCHARGE → 422 (경유/지역 요율 등록 필요)
- VALIDATION_ERROR  → 400
"""
from __future__ import annotations

from typing import Any, Dict, List, Optional


class FareError(Exception):
    """요금 계산 오류 기본 클래스."""

    code = "FARE_ERROR"
    default_message = "요금 계산 중 오류가 발생했습니다"

    def __init__(
        self,
        message: Optional[str] = None,
        missing_regions: Optional[List[str]] = None,
        **context: Any,
    ) -> None:
        self.message = message or self.default_message
        self.missing_regions = list(missing_regions or [])
        self.context = context
        super().__init__(self.message)

    def as_dict(self) -> Dict[str, Any]:
        """422/400 응답 본문 형태로 변환."""
        body: Dict[str, Any] = {
            "ok": False,
            "code": self.code,
            "message": self.message,
            "missingRegions": self.missing_regions,
        }
        for key, value in self.context.items():
            if value is not None:
                body[_camel(key)] = value
        return body


class MissingRateError(FareError):
    """기본운임 레코드가 없음."""

    code = "MISSING_RATE"
    default_message = "기본운임이 등록되지 않았습니다"


class MissingSurchargeError(FareError):
    """경유/지역 추가요율 레코드가 없음."""

    code = "MISSING_SURCHARGE"
    default_message = "경유/지역 요율이 등록되지 않았습니다"


class InvalidInputError(FareError):
    """음수 금액, 잘못된 착지/지역 수, 협의금액 누락 등."""

    code = "VALIDATION_ERROR"
    default_message = "입력 데이터가 올바르지 않습니다"

    def __init__(self, message: Optional[str] = None, field: Optional[str] = None, **context: Any) -> None:
        self.field = field
        super().__init__(message, field=field, **context)


def _camel(name: str) -> str:
    head, *rest = name.split("_")
    return head + "".join(part.title() for part in rest)
