"""
Tests the HTTP layer, backed by the in-memory repository.
"""

from unittest.mock import AsyncMock

import pytest
from fastapi.testclient import TestClient
from sqlalchemy.exc import OperationalError

from studygroups.api.app import app
from studygroups.api.dependencies import get_repository
from studygroups.repository.base import StudyGroupRepository
from studygroups.repository.memory import InMemoryStudyGroupRepository


@pytest.fixture
def repository():
    yield InMemoryStudyGroupRepository()


@pytest.fixture
def client(repository):
    app.dependency_overrides[get_repository] = lambda: repository
    yield TestClient(app)
    app.dependency_overrides.clear()


def create(client, name, subject, created_by_user_id=101, member_ids=None):
    return client.post(
        "/study-groups",
        json={
            "name": name,
            "subject": subject,
            "created_by_user_id": created_by_user_id,
            "member_ids": member_ids or [created_by_user_id],
        },
    )


def test_create(client):
    response = create(client, "Physics Lovers", "Physics")

    assert response.status_code == 200
    content = response.json()
    assert content["study_group_id"] == 1
    assert content["subject"] == "Physics"
    assert content["members"] == [{"user_id": 101}]
    assert content["create_date"]


def test_create_invalid_name(client):
    response = create(client, "Tiny", "Math")

    assert response.status_code == 422
    assert "between 5 and 30" in response.text


def test_create_invalid_subject(client):
    response = create(client, "Biology Buddies", "Biology")

    assert response.status_code == 422
    assert "invalid subject" in response.text


def test_create_duplicate_subject(client, repository):
    assert create(client, "Math Club", "Math").status_code == 200

    response = create(client, "Second Math Club", "Math")

    assert response.status_code == 400
    assert len(repository.store) == 1

    # A different user, or a different subject, is fine
    assert create(client, "Second Math Club", "Math", created_by_user_id=7).status_code == 200
    assert create(client, "Chemistry Crew", "Chemistry").status_code == 200


def test_list(client):
    create(client, "Chem Group", "Chemistry")
    create(client, "Math Group", "Math")

    response = client.get("/study-groups")

    assert response.status_code == 200
    assert [g["name"] for g in response.json()] == ["Chem Group", "Math Group"]


def test_search(client):
    create(client, "Math Lab", "Math", created_by_user_id=1)
    create(client, "Physics Friends", "Physics", created_by_user_id=1)
    create(client, "Late Math Lab", "Math", created_by_user_id=2)

    response = client.get(
        "/study-groups/search", params={"subject": "Math", "order": "Descending"}
    )

    assert response.status_code == 200
    content = response.json()
    assert {g["name"] for g in content} == {"Late Math Lab", "Math Lab"}
    dates = [g["create_date"] for g in content]
    assert dates == sorted(dates, reverse=True)

    response = client.get("/study-groups/search", params={"subject": "Biology"})
    assert response.status_code == 200
    assert response.json() == []


def test_search_unknown_order(client):
    response = client.get(
        "/study-groups/search", params={"subject": "Math", "order": "Sideways"}
    )

    assert response.status_code == 422


def test_get_by_id(client):
    create(client, "Chem Group", "Chemistry")

    assert client.get("/study-groups/1").json()["name"] == "Chem Group"
    assert client.get("/study-groups/2").status_code == 404


def test_join_and_leave(client):
    create(client, "Chem Group", "Chemistry")

    response = client.post("/study-groups/1/members", json={"user_id": 42})
    assert response.status_code == 200
    assert {"user_id": 42} in response.json()["members"]

    response = client.delete("/study-groups/1/members/42")
    assert response.status_code == 200
    assert {"user_id": 42} not in response.json()["members"]

    # Leaving a group you are not in is fine
    assert client.delete("/study-groups/1/members/42").status_code == 200


def test_join_unknown_group(client):
    response = client.post("/study-groups/5/members", json={"user_id": 42})
    assert response.status_code == 404

    assert client.delete("/study-groups/5/members/42").status_code == 404


def test_storage_failure():
    broken = AsyncMock(spec=StudyGroupRepository)
    broken.get_study_groups.side_effect = OperationalError(
        "SELECT 1", {}, Exception("database is locked")
    )

    app.dependency_overrides[get_repository] = lambda: broken
    try:
        response = TestClient(app).get("/study-groups")
    finally:
        app.dependency_overrides.clear()

    assert response.status_code == 500
    assert response.json() == {"detail": "Storage failure"}
