import uuid

from membership_api.models import Member

from .conftest import API


class TestPing:

    def test_ping(self, client):
        resp = client.get(f"{API}/ping")
        assert resp.status_code == 200
        assert resp.text == "pong"


class TestCreateMember:

    def test_create_returns_201_with_generated_id_and_active_status(self, client, member_payload):
        payload = member_payload()

        resp = client.post(f"{API}/members", json=payload)

        assert resp.status_code == 201
        body = resp.json()
        uuid.UUID(body["id"])
        assert body["email"] == payload["email"]
        assert body["status"] == "Active"
        assert body["join_date"]

    def test_status_in_payload_is_ignored(self, client, member_payload):
        resp = client.post(f"{API}/members", json=member_payload(status=0))
        assert resp.json()["status"] == "Active"

    def test_invalid_member_returns_400_with_fields(self, client, member_payload, fake_store):
        resp = client.post(
            f"{API}/members",
            json=member_payload(name="Al", email="not-an-email", phone_number="123"),
        )

        assert resp.status_code == 400
        assert resp.json() == {
            "detail": "Invalid member details",
            "code": "invalid_entity",
            "fields": ["name", "email", "phone_number"],
        }
        assert fake_store.members == {}

    def test_duplicate_email_returns_409(self, client, member_payload, created_member_json):
        resp = client.post(f"{API}/members", json=member_payload(email=created_member_json["email"]))

        assert resp.status_code == 409
        assert resp.json()["code"] == "already_exists"
        assert resp.json()["fields"] == ["email"]

    def test_missing_json_field_is_rejected_by_request_validation(self, client):
        resp = client.post(f"{API}/members", json={"name": "No Email Person"})
        assert resp.status_code == 422


class TestReadMembers:

    def test_get_by_id(self, client, created_member_json):
        resp = client.get(f"{API}/members/{created_member_json['id']}")
        assert resp.status_code == 200
        assert resp.json() == created_member_json

    def test_get_by_email(self, client, created_member_json):
        resp = client.get(f"{API}/members/email/{created_member_json['email']}")
        assert resp.status_code == 200
        assert resp.json()["id"] == created_member_json["id"]

    def test_unknown_id_returns_404(self, client):
        resp = client.get(f"{API}/members/{uuid.uuid4()}")
        assert resp.status_code == 404
        assert resp.json()["code"] == "not_found"

    def test_unknown_email_returns_404(self, client):
        assert client.get(f"{API}/members/email/ghost@example.com").status_code == 404

    def test_malformed_id_returns_422(self, client):
        assert client.get(f"{API}/members/not-a-uuid").status_code == 422

    def test_get_all(self, client, member_payload):
        for _ in range(3):
            client.post(f"{API}/members", json=member_payload())

        resp = client.get(f"{API}/members")

        assert resp.status_code == 200
        assert len(resp.json()) == 3

    def test_get_all_empty(self, client):
        assert client.get(f"{API}/members").json() == []


class TestUpdateMember:

    def test_partial_update(self, client, created_member_json):
        resp = client.patch(f"{API}/members/{created_member_json['id']}", json={"address": "7 Quay St"})

        assert resp.status_code == 200
        body = resp.json()
        assert body["address"] == "7 Quay St"
        assert body["name"] == created_member_json["name"]
        assert body["email"] == created_member_json["email"]

    def test_deactivate(self, client, created_member_json):
        resp = client.patch(f"{API}/members/{created_member_json['id']}", json={"status": 0})

        assert resp.status_code == 200
        assert resp.json()["status"] == "Inactive"

    def test_unknown_status_returns_400(self, client, created_member_json):
        resp = client.patch(f"{API}/members/{created_member_json['id']}", json={"status": 7})

        assert resp.status_code == 400
        assert resp.json()["fields"] == ["status"]

    def test_invalid_merged_member_is_not_written(self, client, created_member_json):
        resp = client.patch(f"{API}/members/{created_member_json['id']}", json={"email": "broken"})

        assert resp.status_code == 400
        assert resp.json()["fields"] == ["email"]
        stored = client.get(f"{API}/members/{created_member_json['id']}").json()
        assert stored["email"] == created_member_json["email"]

    def test_taking_another_members_email_returns_409(self, client, member_payload, created_member_json):
        other = client.post(f"{API}/members", json=member_payload()).json()

        resp = client.patch(f"{API}/members/{other['id']}", json={"email": created_member_json["email"]})

        assert resp.status_code == 409

    def test_unknown_id_returns_404(self, client):
        resp = client.patch(f"{API}/members/{uuid.uuid4()}", json={"name": "Somebody"})
        assert resp.status_code == 404


class TestDeleteMember:

    def test_delete_then_get_returns_404(self, client, created_member_json):
        resp = client.delete(f"{API}/members/{created_member_json['id']}")

        assert resp.status_code == 204
        assert client.get(f"{API}/members/{created_member_json['id']}").status_code == 404

    def test_delete_unknown_returns_404(self, client):
        assert client.delete(f"{API}/members/{uuid.uuid4()}").status_code == 404


class TestStoredValuesOutsideTheRules:
    """The store keeps whatever it was given; reads must still render such rows."""

    def test_unknown_status_is_rendered_raw(self, client, fake_store):
        member = Member(
            id=uuid.uuid4(), name="Legacy Row", email="legacy@example.com", phone_number="5550001111", status=7
        )
        fake_store.members[member.id] = member

        listed = client.get(f"{API}/members")
        single = client.get(f"{API}/members/{member.id}")

        assert listed.status_code == 200
        assert listed.json()[0]["status"] == "7"
        assert single.json()["status"] == "7"


class TestAppModule:

    def test_importing_main_builds_no_app(self):
        import membership_api.main as main

        assert not hasattr(main, "app")
        assert callable(main.create_app)

    def test_error_bodies_are_documented(self, client):
        responses = client.get("/openapi.json").json()["paths"][f"{API}/members/{{member_id}}"]["get"]["responses"]

        assert responses["404"]["content"]["application/json"]["schema"]["$ref"].endswith("/ErrorResponse")
        assert "409" in responses
