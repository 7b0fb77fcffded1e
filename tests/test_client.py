from datetime import date

import pytest

from capsule_crm import NotFound, Party, RecordInvalid, Track


def test_create_find_update_destroy_round_trip(crm, capsule_store) -> None:
    kase = crm.cases.create(name="Renewal", party=Party(id=1), track=Track(id=5), owner="matt")

    assert kase.persisted
    method, url, body = capsule_store.requests[0]
    assert (method, url) == ("POST", "https://acme.capsulecrm.com/api/party/1/kase?trackId=5")
    assert body == {"kase": {"name": "Renewal", "owner": "matt", "partyId": 1}}

    found = crm.cases.find(kase.id)
    assert (found.name, found.status, found.track_id) == ("Renewal", "OPEN", 5)

    found.update_attributes(status="CLOSED", close_date=date(2013, 6, 30))
    assert capsule_store.kases[kase.id]["status"] == "CLOSED"
    assert capsule_store.kases[kase.id]["closeDate"] == "2013-06-30"

    found.destroy()
    assert found.new_record
    assert kase.id not in capsule_store.kases


def test_invalid_create_sends_nothing(crm, capsule_store) -> None:
    with pytest.raises(RecordInvalid):
        crm.cases.create_or_raise(name=None)

    assert crm.cases.create(name="No party").new_record
    assert capsule_store.requests == []


def test_associations_resolve_through_api(crm, capsule_store) -> None:
    kase = crm.cases.create(name="Onboarding", party_id=2, track_id=6)
    capsule_store.tasks[kase.id] = [{"id": "9", "description": "Kick-off call", "caseId": str(kase.id)}]

    found = crm.cases.find(kase.id)

    assert found.party.display_name == "Acme Ltd"
    assert found.track.description == "Onboarding"
    assert [task.description for task in found.tasks] == ["Kick-off call"]


def test_listing_and_tags(crm) -> None:
    first = crm.cases.create(name="First", party_id=1)
    crm.cases.create(name="Second", party_id=2)

    first.add_tag("VIP")

    assert first.tags() == ["VIP"]
    assert [kase.name for kase in crm.cases.all()] == ["First", "Second"]
    assert [kase.name for kase in crm.cases.all(tag="VIP")] == ["First"]
    assert [kase.name for kase in crm.cases.for_party(2)] == ["Second"]

    first.remove_tag("VIP")
    assert first.tags() == []


def test_for_track_is_not_supported(crm) -> None:
    with pytest.raises(NotImplementedError):
        crm.cases.for_track(Track(id=5))


def test_api_errors_propagate(crm) -> None:
    with pytest.raises(NotFound):
        crm.cases.find(999)

    with pytest.raises(NotFound):
        crm.cases.create(name="Orphan", party_id=404)
