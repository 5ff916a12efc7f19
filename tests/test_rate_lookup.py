import pytest

from pricing import (
    FARE_TYPE_BASIC,
    FARE_TYPE_EXTRA,
    InvalidInputError,
    MissingRateError,
    MissingSurchargeError,
    deactivate_center_fare,
    get_connection,
    list_center_fares,
    lookup_fare_components,
    quote_fare,
    upsert_center_fare,
)
from pricing.db import db_path, read_fares_df

from conftest import CENTER, VEHICLE


def test_lookup_uses_highest_base_fare(seeded_db):
    components = lookup_fare_components(CENTER, VEHICLE, ["강남구", "수원시"], 3)

    assert components.base_fare == 350000
    assert components.base_fare_region == "수원"
    assert components.extra_stop_fee == 50000
    assert components.extra_region_fee == 30000
    assert components.stop_count == 3
    assert components.region_count == 2

    quote = quote_fare(components)
    assert quote.total == 350000 + 50000 * 2 + 30000 * 1
    assert quote.formula.startswith("수원 기본료 350,000원")


def test_duplicate_regions_are_counted_once(seeded_db):
    components = lookup_fare_components(CENTER, VEHICLE, ["강남", "강남구", "GANGNAM"])

    assert components.region_count == 1
    assert components.stop_count == 1


def test_stop_count_raised_to_region_count(seeded_db):
    components = lookup_fare_components(CENTER, VEHICLE, ["강남", "수원"], 1)
    assert components.stop_count == 2


def test_missing_base_fare_lists_every_region(seeded_db):
    with pytest.raises(MissingRateError) as exc_info:
        lookup_fare_components(CENTER, VEHICLE, ["강남", "부산", "대구시"])

    error = exc_info.value
    assert error.missing_regions == ["부산", "대구"]
    body = error.as_dict()
    assert body["code"] == "MISSING_RATE"
    assert body["missingRegions"] == ["부산", "대구"]
    assert body["centerName"] == CENTER
    assert body["vehicleType"] == VEHICLE


def test_unknown_vehicle_type_is_missing_rate(seeded_db):
    with pytest.raises(MissingRateError):
        lookup_fare_components(CENTER, "11톤", ["강남"])


def test_missing_surcharge_row(fare_db):
    upsert_center_fare(CENTER, VEHICLE, FARE_TYPE_BASIC, region="강남", base_fare=300000)

    with pytest.raises(MissingSurchargeError) as exc_info:
        lookup_fare_components(CENTER, VEHICLE, ["강남"])

    assert exc_info.value.as_dict()["code"] == "MISSING_SURCHARGE"


def test_negotiated_lookup_does_not_raise(fare_db):
    upsert_center_fare(CENTER, VEHICLE, FARE_TYPE_BASIC, region="강남", base_fare=300000)

    components = lookup_fare_components(
        CENTER, VEHICLE, ["강남", "부산"], is_negotiated=True, negotiated_fare=500000,
    )

    assert components.base_fare == 300000
    assert components.extra_stop_fee is None
    assert quote_fare(components).total == 500000


def test_lookup_reuses_given_connection(seeded_db):
    with get_connection() as con:
        components = lookup_fare_components(CENTER, VEHICLE, ["강남"], con=con)
        # 조회 후에도 호출자의 연결은 열려 있어야 함
        con.execute("SELECT 1").fetchone()

    assert components.base_fare == 300000


def test_read_fares_df_without_connection(seeded_db):
    df = read_fares_df(
        "SELECT region FROM center_fares WHERE fare_type = ? ORDER BY region",
        [FARE_TYPE_BASIC],
    )

    assert df["region"].tolist() == ["강남", "수원"]


def test_db_path_comes_from_env(monkeypatch, tmp_path):
    monkeypatch.setenv("FARE_DB", str(tmp_path / "other.db"))
    assert db_path() == tmp_path / "other.db"

    monkeypatch.delenv("FARE_DB")
    assert db_path().name == "fares.db"


def test_empty_regions(seeded_db):
    with pytest.raises(InvalidInputError):
        lookup_fare_components(CENTER, VEHICLE, ["", "  "])


def test_upsert_replaces_active_rate(seeded_db):
    upsert_center_fare(CENTER, VEHICLE, FARE_TYPE_BASIC, region="강남구", base_fare=400000)

    components = lookup_fare_components(CENTER, VEHICLE, ["강남"])
    assert components.base_fare == 400000

    df = list_center_fares(CENTER, VEHICLE)
    gangnam = df[(df["fare_type"] == FARE_TYPE_BASIC) & (df["region"] == "강남")]
    assert len(gangnam) == 1

    history = list_center_fares(CENTER, VEHICLE, include_inactive=True)
    assert len(history[history["region"] == "강남"]) == 2


def test_deactivate_removes_rate_from_lookup(seeded_db):
    df = list_center_fares(CENTER, VEHICLE)
    extra_id = int(df[df["fare_type"] == FARE_TYPE_EXTRA].iloc[0]["fare_id"])

    assert deactivate_center_fare(extra_id) is True
    assert deactivate_center_fare(extra_id) is False

    with pytest.raises(MissingSurchargeError):
        lookup_fare_components(CENTER, VEHICLE, ["강남"])


@pytest.mark.parametrize("kwargs", [
    {"fare_type": "기타"},
    {"fare_type": FARE_TYPE_BASIC, "base_fare": 1000},                 # 지역 없음
    {"fare_type": FARE_TYPE_BASIC, "region": "강남", "base_fare": -1},
    {"fare_type": FARE_TYPE_EXTRA, "extra_stop_fee": 1000},            # 지역료 없음
])
def test_upsert_validation(fare_db, kwargs):
    with pytest.raises(InvalidInputError):
        upsert_center_fare(CENTER, VEHICLE, **kwargs)
