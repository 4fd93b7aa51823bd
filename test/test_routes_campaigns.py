"""
Tests for campaign and campaign-challenge routes

Covers status code mapping, the list envelope and the error envelope.
"""

from utils.mock_utils import create_test_campaigns, create_test_challenge, create_test_tenant


async def create_campaign(client, headers, **overrides) -> dict:
    body = {"name": "Spring Campaign"}
    body.update(overrides)
    response = await client.post("/api/campaigns", json=body, headers=headers)
    assert response.status_code == 201, response.text
    return response.json()


class TestCampaignRoutes:
    async def test_create_and_get(self, client, auth_headers):
        created = await create_campaign(
            client,
            auth_headers,
            description="Warm up",
            start_time="2024-03-01T00:00:00Z",
            end_time="2024-06-01T00:00:00+02:00",
        )

        assert created["tenant_id"] == "tenant-a"
        assert created["status"] == "active"
        assert created["start_time"] == "2024-03-01T00:00:00Z"
        assert created["end_time"] == "2024-05-31T22:00:00Z"

        response = await client.get(f"/api/campaigns/{created['id']}", headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Spring Campaign"

    async def test_short_name_is_rejected(self, client, auth_headers):
        response = await client.post("/api/campaigns", json={"name": "ab"}, headers=auth_headers)

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["error_code"] == "validation_error"
        assert error["details"]["validation_errors"][0]["field"] == "name"

    async def test_inverted_dates_are_rejected(self, client, auth_headers):
        response = await client.post(
            "/api/campaigns",
            json={"name": "Backwards", "start_time": "2024-06-01T00:00:00Z", "end_time": "2024-05-01T00:00:00Z"},
            headers=auth_headers,
        )

        assert response.status_code == 422
        error = response.json()["error"]
        assert error["details"]["validation_errors"] == [
            {"field": "start_time", "message": "must be before end_time", "rule": "date_order"}
        ]
        assert error["path"] == "/api/campaigns"

    async def test_other_tenant_sees_not_found(self, client, auth_headers, other_auth_headers):
        created = await create_campaign(client, auth_headers)

        response = await client.get(f"/api/campaigns/{created['id']}", headers=other_auth_headers)

        assert response.status_code == 404
        error = response.json()["error"]
        assert error["error_code"] == "not_found"
        assert error["message"] == "Campaign not found"

    async def test_put_and_patch_update(self, client, auth_headers):
        created = await create_campaign(client, auth_headers)

        response = await client.patch(
            f"/api/campaigns/{created['id']}", json={"status": "paused"}, headers=auth_headers
        )
        assert response.status_code == 200
        assert response.json()["status"] == "paused"

        response = await client.put(f"/api/campaigns/{created['id']}", json={"name": "Renamed"}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["name"] == "Renamed"
        assert response.json()["status"] == "paused"

    async def test_delete(self, client, auth_headers):
        created = await create_campaign(client, auth_headers)

        response = await client.delete(f"/api/campaigns/{created['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"/api/campaigns/{created['id']}", headers=auth_headers)
        assert response.status_code == 404


class TestCampaignListing:
    async def test_envelope_and_cursor_walk(self, client, auth_headers, test_db):
        await create_test_tenant(test_db, "tenant-a")
        campaigns = await create_test_campaigns(test_db, "tenant-a", 12)
        expected = [c.id for c in reversed(campaigns)]

        seen = []
        params = {"limit": "5"}
        for expected_more in (True, True, False):
            response = await client.get("/api/campaigns", params=params, headers=auth_headers)
            assert response.status_code == 200
            body = response.json()
            assert set(body) == {"data", "next_cursor", "has_more"}
            assert body["has_more"] is expected_more
            seen.extend(item["id"] for item in body["data"])
            if body["has_more"]:
                assert body["next_cursor"].endswith("Z")
                params = {"limit": "5", "cursor": body["next_cursor"]}
            else:
                assert body["next_cursor"] is None

        assert seen == expected

    async def test_lenient_query_parameters(self, client, auth_headers, test_db):
        await create_test_tenant(test_db, "tenant-a")
        await create_test_campaigns(test_db, "tenant-a", 3)

        response = await client.get(
            "/api/campaigns",
            params={"limit": "lots", "cursor": "not-a-date", "order": "sideways"},
            headers=auth_headers,
        )

        assert response.status_code == 200
        body = response.json()
        assert len(body["data"]) == 3
        assert body["has_more"] is False

    async def test_ascending_order(self, client, auth_headers, test_db):
        await create_test_tenant(test_db, "tenant-a")
        campaigns = await create_test_campaigns(test_db, "tenant-a", 3)

        response = await client.get("/api/campaigns", params={"order": "asc"}, headers=auth_headers)

        assert [item["id"] for item in response.json()["data"]] == [c.id for c in campaigns]

    async def test_listing_is_tenant_scoped(self, client, auth_headers, other_auth_headers):
        await create_campaign(client, auth_headers)

        response = await client.get("/api/campaigns", headers=other_auth_headers)

        assert response.json() == {"data": [], "next_cursor": None, "has_more": False}


class TestCampaignChallengeRoutes:
    async def test_attach_list_update_detach(self, client, auth_headers, test_db):
        campaign = await create_campaign(client, auth_headers)
        challenge = await create_test_challenge(test_db)
        base = f"/api/campaigns/{campaign['id']}/challenges"

        response = await client.post(
            base,
            json={
                "challenge_id": challenge.id,
                "display_name": "Walk it off",
                "evaluation_frequency": "0 8 * * 1",
                "reward_points": 25,
                "configuration": {"target": 5000},
            },
            headers=auth_headers,
        )
        assert response.status_code == 201, response.text
        attached = response.json()
        assert attached["challenge_id"] == challenge.id
        assert "challenge" not in attached

        response = await client.get(base, headers=auth_headers)
        assert [item["id"] for item in response.json()["data"]] == [attached["id"]]

        response = await client.put(f"{base}/{attached['id']}", json={"reward_points": 30}, headers=auth_headers)
        assert response.status_code == 200
        assert response.json()["reward_points"] == 30

        response = await client.delete(f"{base}/{attached['id']}", headers=auth_headers)
        assert response.status_code == 204

        response = await client.get(f"{base}/{attached['id']}", headers=auth_headers)
        assert response.status_code == 404

    async def test_missing_required_fields(self, client, auth_headers, test_db):
        campaign = await create_campaign(client, auth_headers)

        response = await client.post(f"/api/campaigns/{campaign['id']}/challenges", json={}, headers=auth_headers)

        assert response.status_code == 422
        fields = {error["field"] for error in response.json()["error"]["details"]["validation_errors"]}
        assert {"challenge_id", "display_name", "evaluation_frequency", "reward_points"} <= fields

    async def test_duplicate_attach(self, client, auth_headers, test_db):
        campaign = await create_campaign(client, auth_headers)
        challenge = await create_test_challenge(test_db)
        body = {
            "challenge_id": challenge.id,
            "display_name": "Walk it off",
            "evaluation_frequency": "daily",
            "reward_points": 10,
        }
        url = f"/api/campaigns/{campaign['id']}/challenges"
        await client.post(url, json=body, headers=auth_headers)

        response = await client.post(url, json=body, headers=auth_headers)

        assert response.status_code == 422
        assert response.json()["error"]["details"]["validation_errors"][0]["message"] == "has already been taken"

    async def test_other_tenant_campaign(self, client, auth_headers, other_auth_headers):
        campaign = await create_campaign(client, auth_headers)

        response = await client.get(f"/api/campaigns/{campaign['id']}/challenges", headers=other_auth_headers)

        assert response.status_code == 404
