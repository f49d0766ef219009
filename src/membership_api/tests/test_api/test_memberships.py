import uuid
from datetime import datetime, timezone

import pytest

from membership_api.exceptions import UnknownStoreError
from membership_api.models import Membership

from .conftest import API


@pytest.fixture
def membership_payload(created_member_json, created_sport_json):
    def _make(**overrides) -> dict:
        data = {
            "member_id": created_member_json["id"],
            "sport_id": created_sport_json["id"],
            "type": "training",
            "start_date": "2024-03-01T00:00:00+00:00",
            "due_date": "2024-04-01T00:00:00+00:00",
            "fee": 60.0,
        }
        data.update(overrides)
        return data

    return _make


class TestMembershipsApi:

    def test_create_and_get(self, client, membership_payload):
        created = client.post(f"{API}/memberships", json=membership_payload())

        assert created.status_code == 201
        body = created.json()
        assert body["type"] == "training"
        assert body["status"] == 1
        assert body["fee"] == 60.0

        fetched = client.get(f"{API}/memberships/{body['id']}")
        assert fetched.status_code == 200
        assert fetched.json()["member_id"] == body["member_id"]

    def test_invalid_membership_returns_400_with_fields(self, client, membership_payload):
        resp = client.post(
            f"{API}/memberships",
            json=membership_payload(type="yearly", fee=0, due_date="2024-02-01T00:00:00+00:00"),
        )

        assert resp.status_code == 400
        assert resp.json()["fields"] == ["type", "fee", "due_date"]

    def test_unknown_status_returns_400(self, client, membership_payload):
        resp = client.post(f"{API}/memberships", json=membership_payload(status=3))
        assert resp.status_code == 400
        assert resp.json()["fields"] == ["status"]

    def test_unknown_member_returns_422(self, client, membership_payload):
        resp = client.post(f"{API}/memberships", json=membership_payload(member_id=str(uuid.uuid4())))

        assert resp.status_code == 422
        assert resp.json()["code"] == "reference_not_found"
        assert resp.json()["fields"] == ["member_id"]

    def test_get_unknown_returns_404(self, client):
        assert client.get(f"{API}/memberships/{uuid.uuid4()}").status_code == 404

    def test_get_all(self, client, membership_payload):
        client.post(f"{API}/memberships", json=membership_payload())
        client.post(f"{API}/memberships", json=membership_payload(type="membership", fee=400.0))

        types = sorted(m["type"] for m in client.get(f"{API}/memberships").json())

        assert types == ["membership", "training"]

    def test_deleting_member_drops_its_memberships(self, client, membership_payload, created_member_json):
        client.post(f"{API}/memberships", json=membership_payload())

        client.delete(f"{API}/members/{created_member_json['id']}")

        assert client.get(f"{API}/memberships").json() == []


class TestStorageFailure:

    def test_unknown_store_error_returns_generic_500(self, client, fake_store, monkeypatch):
        async def broken():
            raise UnknownStoreError("connection reset")

        monkeypatch.setattr(fake_store, "get_all_memberships", broken)

        resp = client.get(f"{API}/memberships")

        assert resp.status_code == 500
        assert resp.json() == {"detail": "Internal storage error", "code": "unknown"}


class TestStoredValuesOutsideTheRules:

    def test_unknown_type_and_status_are_returned_raw(self, client, fake_store):
        membership = Membership(
            id=uuid.uuid4(),
            member_id=uuid.uuid4(),
            sport_id=uuid.uuid4(),
            type="yearly",
            start_date=datetime(2024, 1, 1, tzinfo=timezone.utc),
            due_date=datetime(2024, 12, 31, tzinfo=timezone.utc),
            status=9,
            fee=-5.0,
        )
        fake_store.memberships[membership.id] = membership

        resp = client.get(f"{API}/memberships/{membership.id}")

        assert resp.status_code == 200
        assert resp.json()["type"] == "yearly"
        assert resp.json()["status"] == 9
        assert client.get(f"{API}/memberships").status_code == 200
