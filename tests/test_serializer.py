from datetime import date

import pytest

from capsule_crm import Case
from capsule_crm.services import CaseSerializer


@pytest.fixture()
def serializer() -> CaseSerializer:
    return CaseSerializer()


def test_dump_wraps_in_kase_root_and_camelcases(serializer) -> None:
    kase = Case(
        id=3,
        name="Renewal",
        description="",
        status="CLOSED",
        close_date=date(2013, 5, 1),
        owner="matt",
        party_id=1,
        track_id=5,
    )

    assert serializer.dump(kase) == {
        "kase": {
            "name": "Renewal",
            "status": "CLOSED",
            "closeDate": "2013-05-01",
            "owner": "matt",
            "partyId": 1,
        }
    }


def test_load_accepts_bare_object(serializer) -> None:
    assert serializer.load({"id": 42, "name": "Test", "status": "OPEN"}) == {
        "id": 42,
        "name": "Test",
        "status": "OPEN",
    }


def test_partial_load_keeps_only_present_keys(serializer) -> None:
    assert serializer.load({"id": 42}, partial=True) == {"id": 42}


def test_load_coerces_wire_types(serializer) -> None:
    attributes = serializer.load({"kase": {
        "id": "7",
        "partyId": "1",
        "trackId": "5",
        "closeDate": "2013-05-01T00:00:00Z",
        "createdOn": "2013-01-01T10:00:00Z",
    }})

    assert attributes == {
        "id": 7,
        "party_id": 1,
        "track_id": 5,
        "close_date": date(2013, 5, 1),
        "status": "OPEN",
    }


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"kases": {"kase": [{"id": "1"}, {"id": "2"}]}}, [1, 2]),
        ({"kases": {"kase": {"id": "1"}}}, [1]),
        ({"kases": {}}, []),
        ({}, []),
    ],
)
def test_load_collection(serializer, payload, expected) -> None:
    assert [item["id"] for item in serializer.load_collection(payload)] == expected


def test_load_tags(serializer) -> None:
    assert serializer.load_tags({"tags": {"tag": {"name": "VIP"}}}) == ["VIP"]
