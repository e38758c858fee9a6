import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from league_api.errors import ConflictError, PersistenceError
from league_api.services import stadiums as stadium_service


def _create(client: TestClient, name: str, **extra):
    return client.post("/api/stadiums", json={"name": name, **extra})


def test_create_and_list_stadiums(client: TestClient):
    response = _create(client, "Anfield", city="Liverpool", capacity=61000)
    assert response.status_code == 201
    assert response.json()["name"] == "Anfield"
    assert response.json()["capacity"] == 61000

    _create(client, "Camp Nou")

    names = [s["name"] for s in client.get("/api/stadiums").json()]
    assert names == ["Anfield", "Camp Nou"]


def test_create_duplicate_name_conflicts(client: TestClient):
    _create(client, "Anfield")
    response = _create(client, "Anfield")
    assert response.status_code == 409


def test_check_name(client: TestClient):
    _create(client, "Anfield")

    assert client.post("/api/stadiums/check-name", json={"name": "Anfield"}).json() == {"success": False}
    assert client.post("/api/stadiums/check-name", json={"name": "Wembley"}).json() == {"success": True}
    assert client.post("/api/stadiums/check-name", json={"name": "Anfield", "is_edit": True}).json() == {
        "success": True
    }


def test_update_stadium(client: TestClient):
    stadium = _create(client, "Anfield").json()

    response = client.patch(f"/api/stadiums/{stadium['id']}", json={"city": "Liverpool", "capacity": 54000})
    assert response.status_code == 200
    assert response.json()["city"] == "Liverpool"
    assert response.json()["name"] == "Anfield"

    # Renaming to its own name is not a conflict
    response = client.patch(f"/api/stadiums/{stadium['id']}", json={"name": "Anfield"})
    assert response.status_code == 200


def test_update_stadium_name_collision(client: TestClient):
    _create(client, "Anfield")
    other = _create(client, "Goodison Park").json()

    response = client.patch(f"/api/stadiums/{other['id']}", json={"name": "Anfield"})
    assert response.status_code == 409
    assert response.json()["detail"] == "Stadium name already exists!"


def test_update_stadium_rejects_unknown_fields(client: TestClient):
    stadium = _create(client, "Anfield").json()
    response = client.patch(f"/api/stadiums/{stadium['id']}", json={"id": 77})
    assert response.status_code == 422


def test_update_stadium_rejects_null_name(client: TestClient):
    stadium = _create(client, "Anfield", city="Liverpool").json()

    response = client.patch(f"/api/stadiums/{stadium['id']}", json={"name": None})
    assert response.status_code == 422

    # Nulling an optional field is still allowed
    response = client.patch(f"/api/stadiums/{stadium['id']}", json={"city": None})
    assert response.status_code == 200
    assert response.json()["name"] == "Anfield"
    assert response.json()["city"] is None


def test_not_null_failure_is_not_reported_as_name_conflict(session: Session):
    stadium = stadium_service.create_stadium(session, "Anfield")

    with pytest.raises(PersistenceError):
        stadium_service.update_stadium(session, stadium.id, {"name": None})

    assert stadium_service.find_stadium_by_name(session, "Anfield") is not None


def test_unique_failure_on_save_is_a_conflict(session: Session):
    stadium_service.create_stadium(session, "Anfield")
    other = stadium_service.create_stadium(session, "Goodison Park")

    # Skip the pre-check so the database constraint is what rejects the name
    other.name = "Anfield"
    session.add(other)
    with pytest.raises(ConflictError):
        stadium_service._commit(session, other.name)


def test_update_and_delete_unknown_stadium(client: TestClient):
    assert client.patch("/api/stadiums/999", json={"city": "Nowhere"}).status_code == 404
    assert client.delete("/api/stadiums/999").status_code == 404


def test_delete_stadium(client: TestClient):
    stadium = _create(client, "Anfield").json()
    assert client.delete(f"/api/stadiums/{stadium['id']}").status_code == 204
    assert client.get("/api/stadiums").json() == []
