"""
pricing/export.py - 수익성 엑셀 내보내기
───────────────────────────────────────────
요청 목록 DataFrame 에 수익성 컬럼을 붙이고 xlsx 로 저장.
행마다 calculate_profitability() 를 호출하므로 화면과 같은 결과가 나옵니다.
"""
from __future__ import annotations

import io
import logging
import re
from typing import Optional

import pandas as pd

from .errors import InvalidInputError
from .models import BillableRequest, ProfitabilityThresholds
from .profitability import calculate_profitability

logger = logging.getLogger(__name__)

PROFIT_COLUMNS = ["센터청구", "기사운임", "마진", "마진율(%)", "수익성"]


def add_profitability_columns(
    df: pd.DataFrame,
    thresholds: Optional[ProfitabilityThresholds] = None,
) -> pd.DataFrame:
    """
    수익성 컬럼 추가 (원본 DataFrame 은 그대로).

    Raises:
        InvalidInputError: 금액이 잘못된 행 (행 번호 포함)
    """
    out = df.copy()
    values = {col: [] for col in PROFIT_COLUMNS}

    for idx, row in df.iterrows():
        try:
            result = calculate_profitability(BillableRequest.from_mapping(row), thresholds)
        except InvalidInputError as e:
            raise InvalidInputError(f"{idx}행: {e.message}", field=e.field, row=str(idx)) from e
        values["센터청구"].append(result.center_billing)
        values["기사운임"].append(result.driver_fee)
        values["마진"].append(result.margin)
        values["마진율(%)"].append(round(result.margin_rate, 2))
        values["수익성"].append(result.status_label)

    for col in PROFIT_COLUMNS:
        out[col] = values[col]
    return out


def profitability_to_excel(
    df: pd.DataFrame,
    thresholds: Optional[ProfitabilityThresholds] = None,
    sheet_name: str = "수익성",
) -> io.BytesIO:
    """수익성 컬럼을 포함한 xlsx 파일 (BytesIO, 처음 위치로 되감음)."""
    enriched = add_profitability_columns(df, thresholds)

    # 시트명은 31자 제한, 특수문자 제거
    safe_sheet_name = re.sub(r'[\\/*?:\[\]]', '', sheet_name)[:31] or "Sheet1"

    output = io.BytesIO()
    with pd.ExcelWriter(output, engine="openpyxl") as writer:
        enriched.to_excel(writer, sheet_name=safe_sheet_name, index=False)
    output.seek(0)

    logger.info(f"수익성 엑셀 생성: {len(enriched)}행")
    return output
