"""
Tests for admin endpoints.
"""

from typing import Any

import pytest
from httpx import AsyncClient


async def submit(client: AsyncClient, body: dict[str, Any], form_id: str = "f1") -> dict[str, Any]:
    response = await client.post(f"/api/v1/forms/{form_id}/responses", json=body)
    assert response.status_code == 201
    return response.json()


@pytest.mark.unit
class TestAdminAccess:
    @pytest.mark.parametrize(
        "method,url",
        [
            ("GET", "/api/v1/admin/forms/f1/stats"),
            ("GET", "/api/v1/admin/forms/f1/responses"),
            ("DELETE", "/api/v1/admin/respondents/r-1"),
        ],
    )
    async def test_admin_routes_require_key(self, client: AsyncClient, method: str, url: str) -> None:
        """Test every admin route answers 401 without a valid key."""
        missing = await client.request(method, url)
        wrong = await client.request(method, url, headers={"X-Admin-Key": "nope"})

        assert missing.status_code == 401
        assert wrong.status_code == 401
        assert wrong.json()["code"] == "unauthorized"


@pytest.mark.integration
class TestAdminEndpoints:
    async def test_stats(self, client: AsyncClient, admin_headers, sample_submission) -> None:
        await submit(client, sample_submission)

        response = await client.get("/api/v1/admin/forms/f1/stats", headers=admin_headers)

        assert response.status_code == 200
        data = response.json()
        assert data["total_responses"] == 1
        assert data["role_distribution"] == [{"role": "Engineer", "count": 1}]
        assert [q["question_id"] for q in data["question_stats"]] == ["q1", "q2"]
        assert "jane" not in response.text.lower()

    async def test_responses_with_pii(self, client: AsyncClient, admin_headers, sample_submission) -> None:
        created = await submit(client, sample_submission)

        response = await client.get("/api/v1/admin/forms/f1/responses", headers=admin_headers)

        assert response.status_code == 200
        [item] = response.json()
        assert item["id"] == created["response_id"]
        assert item["respondent_name"] == "Jane Doe"
        assert item["respondent_email"] == "jane@x.com"
        assert len(item["answers"]) == 4

    async def test_erase_then_view(self, client: AsyncClient, admin_headers, sample_submission) -> None:
        """Test erasure removes PII from the admin view but not from stats."""
        await submit(client, sample_submission)
        [item] = (await client.get("/api/v1/admin/forms/f1/responses", headers=admin_headers)).json()
        stats_before = (await client.get("/api/v1/admin/forms/f1/stats", headers=admin_headers)).json()

        erased = await client.delete(f"/api/v1/admin/respondents/{item['respondent_id']}", headers=admin_headers)

        assert erased.status_code == 200
        assert erased.json() == {
            "message": "PII deleted successfully",
            "note": "Response data remains anonymous in the system",
        }
        [after] = (await client.get("/api/v1/admin/forms/f1/responses", headers=admin_headers)).json()
        assert after["respondent_name"] is None
        assert after["respondent_email"] is None
        assert (await client.get("/api/v1/admin/forms/f1/stats", headers=admin_headers)).json() == stats_before

    async def test_erase_unknown_respondent(self, client: AsyncClient, admin_headers) -> None:
        response = await client.delete("/api/v1/admin/respondents/missing", headers=admin_headers)

        assert response.status_code == 404
        assert response.json()["code"] == "not_found"
