"""Tests for the certificate endpoints.

Contracts checked here are the ones clients depend on:
- POST /generateCertificate answers 201 {message, url} or 400 {message}
- GET /verifyCertificate/{id} answers 201 {message, name, url} or 400 {message}
- Malformed input is a 400, never a 422
"""

from dataclasses import replace
from unittest.mock import AsyncMock

import pytest
from botocore.exceptions import ClientError
from httpx import ASGITransport, AsyncClient

from schemas import MAX_CERTIFICATE_ID_BYTES
from tests.fakes import TEST_BASE_URL, TEST_BUCKET, FakePdfRenderer

pytestmark = pytest.mark.unit


class TestGenerateCertificate:
    async def test_issues_certificate(self, client, s3_client):
        response = await client.post(
            "/generateCertificate",
            json={"id": "abc-123", "name": "Ada Lovelace", "grade": "A"},
        )

        assert response.status_code == 201
        assert response.json() == {
            "message": "Certificate created successfully.",
            "url": f"{TEST_BASE_URL}/abc-123.pdf",
        }
        assert len(s3_client.objects) == 1

    async def test_reissue_returns_same_url(self, client):
        body = {"id": "abc", "name": "Ada", "grade": "A"}
        first = await client.post("/generateCertificate", json=body)
        second = await client.post(
            "/generateCertificate", json={**body, "name": "Grace"}
        )

        assert first.status_code == second.status_code == 201
        assert first.json()["url"] == second.json()["url"]

    async def test_name_and_grade_are_trimmed(self, client, certificate_table):
        response = await client.post(
            "/generateCertificate",
            json={"id": "abc", "name": " Ada ", "grade": "A "},
        )

        assert response.status_code == 201
        assert certificate_table.items["abc"]["name"] == "Ada"
        assert certificate_table.items["abc"]["grade"] == "A"

    async def test_long_labels_are_accepted(self, client, certificate_table):
        grade = "Distinction with honours in cloud architecture 2024"
        name = "Maria " * 60

        response = await client.post(
            "/generateCertificate",
            json={"id": "abc", "name": name, "grade": grade},
        )

        assert response.status_code == 201
        assert certificate_table.items["abc"]["grade"] == grade

    async def test_id_at_key_limit_is_accepted(self, client, s3_client):
        certificate_id = "a" * MAX_CERTIFICATE_ID_BYTES

        response = await client.post(
            "/generateCertificate",
            json={"id": certificate_id, "name": "Ada", "grade": "A"},
        )

        assert response.status_code == 201
        assert (TEST_BUCKET, f"{certificate_id}.pdf") in s3_client.objects

    async def test_id_over_key_limit_is_400(self, client, certificate_table):
        # Multi-byte characters count by their encoded size
        certificate_id = "\u00e9" * (MAX_CERTIFICATE_ID_BYTES // 2 + 1)

        response = await client.post(
            "/generateCertificate",
            json={"id": certificate_id, "name": "Ada", "grade": "A"},
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["loc"] == ["body", "id"]
        assert certificate_table.put_calls == []

    @pytest.mark.parametrize(
        "body",
        [
            {"name": "Ada", "grade": "A"},
            {"id": "abc", "grade": "A"},
            {"id": "abc", "name": "Ada"},
            {"id": "", "name": "Ada", "grade": "A"},
            {"id": "abc", "name": "   ", "grade": "A"},
            {"id": "a/b", "name": "Ada", "grade": "A"},
            {"id": " abc", "name": "Ada", "grade": "A"},
            {"id": "abc\t", "name": "Ada", "grade": "A"},
            {"id": "   ", "name": "Ada", "grade": "A"},
        ],
    )
    async def test_invalid_body_is_400(self, client, certificate_table, body):
        response = await client.post("/generateCertificate", json=body)

        assert response.status_code == 400
        data = response.json()
        assert data["message"] == "Invalid request."
        assert data["errors"]
        assert certificate_table.put_calls == []

    async def test_non_json_body_is_400(self, client):
        response = await client.post(
            "/generateCertificate",
            content=b"not json",
            headers={"Content-Type": "application/json"},
        )

        assert response.status_code == 400
        assert response.json()["message"] == "Invalid request."

    async def test_issue_failure_is_generic_400(self, app, deps):
        app.state.dependencies = replace(
            deps, renderer=FakePdfRenderer(error=RuntimeError("chromium crashed"))
        )
        async with AsyncClient(
            transport=ASGITransport(app=app), base_url="http://test"
        ) as ac:
            response = await ac.post(
                "/generateCertificate",
                json={"id": "abc", "name": "Ada", "grade": "A"},
            )

        assert response.status_code == 400
        assert response.json() == {"message": "Could not generate certificate."}
        assert "chromium" not in response.text

    async def test_response_carries_request_id(self, client):
        response = await client.post(
            "/generateCertificate",
            json={"id": "abc", "name": "Ada", "grade": "A"},
        )

        assert response.headers["x-request-id"]
        assert float(response.headers["x-request-duration-ms"]) >= 0


class TestVerifyCertificate:
    async def test_unknown_id_is_400(self, client):
        response = await client.get("/verifyCertificate/missing")

        assert response.status_code == 400
        assert response.json() == {"message": "Invalid certificate."}

    async def test_issued_id_is_201(self, client):
        issued = await client.post(
            "/generateCertificate",
            json={"id": "abc", "name": "Ada Lovelace", "grade": "A"},
        )

        response = await client.get("/verifyCertificate/abc")

        assert response.status_code == 201
        assert response.json() == {
            "message": "Valid certificate.",
            "name": "Ada Lovelace",
            "url": issued.json()["url"],
        }

    async def test_reports_first_issued_name(self, client):
        await client.post(
            "/generateCertificate", json={"id": "abc", "name": "Ada", "grade": "A"}
        )
        await client.post(
            "/generateCertificate", json={"id": "abc", "name": "Grace", "grade": "B"}
        )

        response = await client.get("/verifyCertificate/abc")

        assert response.json()["name"] == "Ada"

    async def test_missing_id_is_400(self, client):
        response = await client.get("/verifyCertificate")

        assert response.status_code == 400
        assert response.json() == {"message": "Missing certificate id."}

    async def test_record_store_failure_is_500(self, app, deps, caplog):
        records = AsyncMock()
        records.get_by_id.side_effect = ClientError(
            {"Error": {"Code": "ResourceNotFoundException"}}, "GetItem"
        )
        app.state.dependencies = replace(deps, records=records)

        async with AsyncClient(
            transport=ASGITransport(app=app, raise_app_exceptions=False),
            base_url="http://test",
        ) as ac:
            with caplog.at_level("INFO", logger="core.middleware"):
                response = await ac.get("/verifyCertificate/abc")

        assert response.status_code == 500
        assert "message" in response.json()
        completed = next(
            r for r in caplog.records if r.getMessage() == "request.completed"
        )
        assert completed.http_status_code == 500
