"""
pricing/db.py - DB 연결 헬퍼
───────────────────────────────────
fares.db 자동 생성, 센터 요율표(center_fares) 보장.

요율표 구조:
- 기본운임: (센터, 차량톤수, 지역) 마다 1행, base_fare 사용
- 경유운임: (센터, 차량톤수) 마다 1행, extra_stop_fee / extra_region_fee 사용
"""
from __future__ import annotations

import datetime as dt
import os
import pathlib
import sqlite3
import textwrap
from contextlib import contextmanager

import pandas as pd

# ─────────────────────────────────────
# 0. 전역 상수
# ─────────────────────────────────────
DEFAULT_DB_PATH = "fares.db"
DATE_FMT = "%Y-%m-%d %H:%M:%S"

FARE_TYPE_BASIC = "기본운임"
FARE_TYPE_EXTRA = "경유운임"
FARE_TYPES = (FARE_TYPE_BASIC, FARE_TYPE_EXTRA)


def db_path() -> pathlib.Path:
    """FARE_DB 환경변수 → 기본값 fares.db"""
    return pathlib.Path(os.getenv("FARE_DB", DEFAULT_DB_PATH))


# ─────────────────────────────────────
# 1. DB 연결
# ─────────────────────────────────────
@contextmanager
def get_connection():
    """로컬 SQLite 파일에 직접 연결합니다."""
    con = None
    try:
        con = sqlite3.connect(db_path())
        # WAL 모드: 동시 읽기 성능 향상 & 안정성
        con.execute("PRAGMA journal_mode=WAL;")
        con.execute("PRAGMA busy_timeout=5000;")
        yield con
    finally:
        if con:
            con.close()


# ─────────────────────────────────────
# 2. DDL
# ─────────────────────────────────────
DDL_SQL = textwrap.dedent(
    """
    CREATE TABLE IF NOT EXISTS center_fares(
        fare_id          INTEGER PRIMARY KEY AUTOINCREMENT,
        center_name      TEXT NOT NULL,
        vehicle_type     TEXT NOT NULL,
        region           TEXT DEFAULT '',
        fare_type        TEXT NOT NULL,
        base_fare        INTEGER,
        extra_stop_fee   INTEGER,
        extra_region_fee INTEGER,
        is_active        INTEGER DEFAULT 1,
        created_at       TIMESTAMP DEFAULT CURRENT_TIMESTAMP
    );

    CREATE INDEX IF NOT EXISTS idx_center_fares_lookup
        ON center_fares(center_name, vehicle_type, fare_type, region);
    """
)


def ensure_tables() -> None:
    """필수 테이블 생성. 기존 데이터는 건드리지 않습니다."""
    with get_connection() as con:
        con.executescript(DDL_SQL)
        con.commit()


# ─────────────────────────────────────
# 3. 유틸
# ─────────────────────────────────────
def now_str(fmt: str = DATE_FMT) -> str:
    return dt.datetime.now().strftime(fmt)


def read_fares_df(
    sql: str,
    params: tuple | list | None = None,
    con: sqlite3.Connection | None = None,
) -> pd.DataFrame:
    """요율표 SELECT → DataFrame. con 이 주어지면 그 연결을 그대로 사용."""
    if con is not None:
        return pd.read_sql(sql, con, params=params)
    with get_connection() as new_con:
        return pd.read_sql(sql, new_con, params=params)
