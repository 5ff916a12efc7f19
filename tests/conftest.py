import pytest
from fastapi.testclient import TestClient

from pricing import (
    FARE_TYPE_BASIC,
    FARE_TYPE_EXTRA,
    BillableRequest,
    ensure_tables,
    upsert_center_fare,
)

CENTER = "A센터"
VEHICLE = "5톤"


@pytest.fixture
def fare_db(tmp_path, monkeypatch):
    """빈 요율 DB (테스트마다 새 파일)."""
    path = tmp_path / "fares.db"
    monkeypatch.setenv("FARE_DB", str(path))
    ensure_tables()
    return path


@pytest.fixture
def seeded_db(fare_db):
    """A센터/5톤: 강남 300,000 / 수원 350,000, 경유료 50,000 / 지역료 30,000"""
    upsert_center_fare(CENTER, VEHICLE, FARE_TYPE_BASIC, region="강남", base_fare=300000)
    upsert_center_fare(CENTER, VEHICLE, FARE_TYPE_BASIC, region="수원", base_fare=350000)
    upsert_center_fare(
        CENTER, VEHICLE, FARE_TYPE_EXTRA, extra_stop_fee=50000, extra_region_fee=30000
    )
    return fare_db


@pytest.fixture
def client(fare_db):
    from backend.app.main import app

    with TestClient(app) as c:
        yield c


@pytest.fixture
def base_request():
    """서울-경기 3착지 요청 (청구 380,000 / 기사 250,000)"""
    return BillableRequest(
        base_fare=300000,
        extra_stop_fee=50000,
        extra_region_fee=30000,
        extra_adjustment=0,
        driver_fee=250000,
    )
