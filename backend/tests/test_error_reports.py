"""
Tests for error reports and resource health.
"""

from datetime import datetime, timezone

import pytest
from httpx import AsyncClient

from app.models.resource import Resource


@pytest.mark.asyncio
async def test_create_error_report_sets_filing_date(client: AsyncClient, auth_headers, resource, test_user):
    """Without created_date the report is stamped with the clock's time."""
    response = await client.post(
        "/api/v1/error-reports/",
        json={"resource_id": resource.id, "user_id": test_user.id, "description": "Door lock broken"},
        headers=auth_headers,
    )
    assert response.status_code == 201
    data = response.json()
    assert data["resolved"] is False
    assert data["created_date"].startswith("2025-02-01")


@pytest.mark.asyncio
async def test_health_reflects_active_reports(client: AsyncClient, auth_headers, admin_headers, resource, make_error_report):
    """Active report -> unhealthy; after resolving every report -> healthy."""
    await make_error_report()

    health = await client.get(f"/api/v1/resources/{resource.id}/health", headers=auth_headers)
    assert health.status_code == 200
    assert health.json() == {"resource_id": resource.id, "has_active_error_reports": True}

    resolved = await client.post(f"/api/v1/error-reports/resolve?resource_id={resource.id}", headers=admin_headers)
    assert resolved.status_code == 200
    assert resolved.json()["resolved_any"] is True

    health = await client.get(f"/api/v1/resources/{resource.id}/health", headers=auth_headers)
    assert health.json()["has_active_error_reports"] is False


@pytest.mark.asyncio
async def test_resolve_with_nothing_open(client: AsyncClient, admin_headers, resource, make_error_report):
    await make_error_report(resolved=True)

    response = await client.post(f"/api/v1/error-reports/resolve?resource_id={resource.id}", headers=admin_headers)
    assert response.status_code == 200
    assert response.json()["resolved_any"] is False


@pytest.mark.asyncio
async def test_resolve_requires_admin(client: AsyncClient, auth_headers, resource):
    response = await client.post(f"/api/v1/error-reports/resolve?resource_id={resource.id}", headers=auth_headers)
    assert response.status_code == 403


@pytest.mark.asyncio
async def test_resolved_reports_do_not_count(client: AsyncClient, auth_headers, resource, make_error_report):
    await make_error_report(resolved=True)

    health = await client.get(f"/api/v1/resources/{resource.id}/health", headers=auth_headers)
    assert health.json()["has_active_error_reports"] is False


@pytest.mark.asyncio
async def test_list_by_institution_newest_first(
    client: AsyncClient, auth_headers, db_session, institution, resource, make_error_report
):
    other_resource = Resource(name="Projector Room", institution_id=institution.id)
    foreign_resource = Resource(name="Elsewhere", institution_id="other-institution")
    db_session.add_all([other_resource, foreign_resource])
    await db_session.commit()

    older = await make_error_report(created_date=datetime(2025, 1, 5, tzinfo=timezone.utc))
    newer = await make_error_report(
        resource_id=other_resource.id, created_date=datetime(2025, 1, 20, tzinfo=timezone.utc)
    )
    await make_error_report(resource_id=foreign_resource.id)

    response = await client.get(f"/api/v1/error-reports/?institution_id={institution.id}", headers=auth_headers)
    assert response.status_code == 200
    assert [r["id"] for r in response.json()] == [newer.id, older.id]


@pytest.mark.asyncio
async def test_list_by_resource(client: AsyncClient, auth_headers, resource, make_error_report):
    await make_error_report()
    await make_error_report(resolved=True)

    response = await client.get(f"/api/v1/error-reports/?resource_id={resource.id}", headers=auth_headers)
    assert response.status_code == 200
    assert len(response.json()) == 2


@pytest.mark.asyncio
@pytest.mark.parametrize("query", ["", "?institution_id=a&resource_id=b"])
async def test_list_needs_exactly_one_filter(client: AsyncClient, auth_headers, query):
    response = await client.get(f"/api/v1/error-reports/{query}", headers=auth_headers)
    assert response.status_code == 400


@pytest.mark.asyncio
async def test_update_keeps_filing_date(client: AsyncClient, auth_headers, resource, test_user, make_error_report):
    report = await make_error_report()

    response = await client.put(
        f"/api/v1/error-reports/{report.id}",
        json={"resource_id": resource.id, "user_id": test_user.id, "description": "Fixed cable", "resolved": True},
        headers=auth_headers,
    )
    assert response.status_code == 204

    fetched = await client.get(f"/api/v1/error-reports/{report.id}", headers=auth_headers)
    data = fetched.json()
    assert data["description"] == "Fixed cable"
    assert data["resolved"] is True
    assert data["created_date"].startswith("2025-02-01T09:30")


@pytest.mark.asyncio
async def test_update_missing_report(client: AsyncClient, auth_headers, resource, test_user):
    response = await client.put(
        "/api/v1/error-reports/doesnotexist",
        json={"resource_id": resource.id, "user_id": test_user.id},
        headers=auth_headers,
    )
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_delete_report_admin_only(client: AsyncClient, auth_headers, admin_headers, make_error_report):
    report = await make_error_report()

    forbidden = await client.delete(f"/api/v1/error-reports/{report.id}", headers=auth_headers)
    assert forbidden.status_code == 403

    response = await client.delete(f"/api/v1/error-reports/{report.id}", headers=admin_headers)
    assert response.status_code == 204

    missing = await client.get(f"/api/v1/error-reports/{report.id}", headers=auth_headers)
    assert missing.status_code == 404
