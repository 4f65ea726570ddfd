"""HTTP tests for project endpoints."""

import pytest


@pytest.mark.asyncio
async def test_project_crud(client, make_user, auth_headers):
    owner_id = await make_user()
    headers = auth_headers(owner_id)

    response = await client.post(
        "/api/project", json={"name": "Q3", "description": "Quarter plan"}, headers=headers
    )
    assert response.status_code == 201
    project = response.json()
    assert project["owner_id"] == owner_id

    response = await client.get("/api/project", headers=headers)
    assert [p["id"] for p in response.json()["projects"]] == [project["id"]]

    response = await client.put(
        f"/api/project/{project['id']}", json={"name": "Q4"}, headers=headers
    )
    assert response.status_code == 200
    assert response.json()["name"] == "Q4"
    assert response.json()["description"] == "Quarter plan"

    response = await client.delete(f"/api/project/{project['id']}", headers=headers)
    assert response.status_code == 204

    response = await client.get(f"/api/project/{project['id']}", headers=headers)
    assert response.status_code == 404


@pytest.mark.asyncio
async def test_empty_project_name_is_bad_request(client, make_user, auth_headers):
    owner_id = await make_user()

    response = await client.post("/api/project", json={"name": " "}, headers=auth_headers(owner_id))

    assert response.status_code == 400


@pytest.mark.asyncio
async def test_other_users_project_is_not_found(client, make_user, auth_headers):
    owner_id = await make_user()
    other_id = await make_user()
    response = await client.post(
        "/api/project", json={"name": "Private"}, headers=auth_headers(owner_id)
    )
    project_id = response.json()["id"]

    response = await client.get(f"/api/project/{project_id}", headers=auth_headers(other_id))
    assert response.status_code == 404

    response = await client.delete(f"/api/project/{project_id}", headers=auth_headers(other_id))
    assert response.status_code == 404

    response = await client.get("/api/project", headers=auth_headers(other_id))
    assert response.json()["projects"] == []
