"""
Tests for participant, challenge and association routes
"""

from utils.mock_utils import attach_challenge, create_test_campaign, create_test_challenge, create_test_tenant


async def create_participant(client, headers, nickname: str = "runner") -> dict:
    response = await client.post("/api/participants", json={"name": "Test Runner", "nickname": nickname}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


async def create_campaign(client, headers, name: str = "Spring Campaign") -> dict:
    response = await client.post("/api/campaigns", json={"name": name}, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestParticipantRoutes:
    async def test_crud(self, client, auth_headers):
        participant = await create_participant(client, auth_headers)
        url = f"/api/participants/{participant['id']}"

        response = await client.get(url, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["nickname"] == "runner"

        response = await client.patch(url, json={"name": "Renamed"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"

        response = await client.delete(url, headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(url, headers=auth_headers)
        assert response.status_code == 404

    async def test_duplicate_nickname(self, client, auth_headers):
        await create_participant(client, auth_headers)

        response = await client.post(
            "/api/participants", json={"name": "Another", "nickname": "runner"}, headers=auth_headers
        )

        assert response.status_code == 422
        assert response.json()["error"]["details"]["validation_errors"][0]["field"] == "nickname"

    async def test_nickname_filter(self, client, auth_headers, other_auth_headers):
        await create_participant(client, auth_headers, nickname="TrailRunner")
        await create_participant(client, auth_headers, nickname="walker")
        await create_participant(client, other_auth_headers, nickname="runner")

        response = await client.get("/api/participants", params={"nickname": "runner"}, headers=auth_headers)
        assert [p["nickname"] for p in response.json()["data"]] == ["TrailRunner"]

        response = await client.get("/api/participants", params={"nickname": "RUNNER"}, headers=auth_headers)
        assert [p["nickname"] for p in response.json()["data"]] == ["TrailRunner"]

        response = await client.get("/api/participants", params={"nickname": "swimmer"}, headers=auth_headers)
        assert response.json()["data"] == []


class TestCampaignAssociationRoutes:
    async def test_associate_list_disassociate(self, client, auth_headers):
        participant = await create_participant(client, auth_headers)
        campaign = await create_campaign(client, auth_headers)
        url = f"/api/participants/{participant['id']}/campaigns/{campaign['id']}"

        response = await client.post(url, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["campaign_id"] == campaign["id"]

        response = await client.get(f"/api/participants/{participant['id']}/campaigns", headers=auth_headers)
        assert [c["id"] for c in response.json()["data"]] == [campaign["id"]]

        response = await client.get(f"/api/campaigns/{campaign['id']}/participants", headers=auth_headers)
        assert [p["id"] for p in response.json()["data"]] == [participant["id"]]

        response = await client.delete(url, headers=auth_headers)
        assert response.status_code == 204

        response = await client.delete(url, headers=auth_headers)
        assert response.status_code == 404
        assert response.json()["error"]["error_code"] == "not_found"

    async def test_duplicate_association(self, client, auth_headers):
        participant = await create_participant(client, auth_headers)
        campaign = await create_campaign(client, auth_headers)
        url = f"/api/participants/{participant['id']}/campaigns/{campaign['id']}"
        await client.post(url, headers=auth_headers)

        response = await client.post(url, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["details"]["validation_errors"][0]["field"] == "participant_id"

    async def test_cross_tenant_association_is_forbidden(self, client, auth_headers, other_auth_headers):
        participant = await create_participant(client, auth_headers)
        foreign_campaign = await create_campaign(client, other_auth_headers)

        response = await client.post(
            f"/api/participants/{participant['id']}/campaigns/{foreign_campaign['id']}", headers=auth_headers
        )

        assert response.status_code == 403
        assert response.json()["error"]["error_code"] == "tenant_mismatch"


class TestChallengeAssociationRoutes:
    async def test_assignment_flow(self, client, auth_headers, test_db):
        await create_test_tenant(test_db, "tenant-a")
        campaign = await create_test_campaign(test_db, "tenant-a")
        challenge = await create_test_challenge(test_db)
        await attach_challenge(test_db, campaign, challenge)
        participant = await create_participant(client, auth_headers)
        assign_url = f"/api/participants/{participant['id']}/challenges/{challenge.id}"

        response = await client.post(assign_url, headers=auth_headers)
        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "participant_not_in_campaign"

        await client.post(f"/api/participants/{participant['id']}/campaigns/{campaign.id}", headers=auth_headers)

        response = await client.post(assign_url, headers=auth_headers)
        assert response.status_code == 201
        assert response.json()["campaign_id"] == campaign.id

        response = await client.get(
            f"/api/participants/{participant['id']}/challenges",
            params={"campaign_id": campaign.id},
            headers=auth_headers,
        )
        assert [c["id"] for c in response.json()["data"]] == [challenge.id]

        response = await client.get(f"/api/challenges/{challenge.id}/participants", headers=auth_headers)
        assert [p["id"] for p in response.json()["data"]] == [participant["id"]]

        response = await client.delete(assign_url, headers=auth_headers)
        assert response.status_code == 204

    async def test_challenge_not_offered_to_tenant(self, client, auth_headers, test_db):
        challenge = await create_test_challenge(test_db)
        participant = await create_participant(client, auth_headers)

        response = await client.post(
            f"/api/participants/{participant['id']}/challenges/{challenge.id}", headers=auth_headers
        )

        assert response.status_code == 403
        assert response.json()["error"]["error_code"] == "tenant_mismatch"


class TestChallengeRoutes:
    async def test_crud(self, client, auth_headers):
        response = await client.post(
            "/api/challenges",
            json={"name": "Step Counter", "metadata": {"unit": "steps"}},
            headers=auth_headers,
        )
        assert response.status_code == 201
        challenge = response.json()
        assert challenge["metadata"] == {"unit": "steps"}

        response = await client.get("/api/challenges", headers=auth_headers)
        assert [c["id"] for c in response.json()["data"]] == [challenge["id"]]

        response = await client.put(
            f"/api/challenges/{challenge['id']}", json={"description": "Count them"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["description"] == "Count them"
        assert response.json()["metadata"] == {"unit": "steps"}

        response = await client.delete(f"/api/challenges/{challenge['id']}", headers=auth_headers)
        assert response.status_code == 204

    async def test_challenges_require_authentication(self, client):
        response = await client.get("/api/challenges")

        assert response.status_code == 401

    async def test_attached_challenge_cannot_be_deleted(self, client, auth_headers, test_db):
        await create_test_tenant(test_db, "tenant-a")
        campaign = await create_test_campaign(test_db, "tenant-a")
        challenge = await create_test_challenge(test_db)
        await attach_challenge(test_db, campaign, challenge)

        response = await client.delete(f"/api/challenges/{challenge.id}", headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["error_code"] == "has_associations"
