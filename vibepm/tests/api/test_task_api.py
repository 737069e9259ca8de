import json

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vibepm.models.activity import Activity
from vibepm.models.prompt import Prompt
from vibepm.models.step import Step

def _activities(db: Session, type_: str):
    return db.query(Activity).filter(Activity.type == type_).all()

def test_create_task_defaults(client: TestClient, db: Session, project):
    response = client.post("/api/tasks", json={"projectId": project.id, "title": "Build login"})

    assert response.status_code == 201
    data = response.json()
    assert data["order"] == 0
    assert data["status"] == "TODO"
    assert data["complexity"] == "MEDIUM"

    created = _activities(db, "task_created")
    assert len(created) == 1
    assert created[0].title == 'Created task "Build login"'
    assert created[0].task_id == data["id"]

def test_task_order_is_appended(client: TestClient, project):
    orders = [
        client.post("/api/tasks", json={"projectId": project.id, "title": f"Task {i}"}).json()["order"]
        for i in range(4)
    ]
    assert orders == [0, 1, 2, 3]

def test_create_task_validation(client: TestClient, project):
    no_project = client.post("/api/tasks", json={"title": "Orphan"})
    assert no_project.status_code == 400
    assert no_project.json() == {"error": "Project ID is required"}

    no_title = client.post("/api/tasks", json={"projectId": project.id, "title": "  "})
    assert no_title.status_code == 400
    assert no_title.json() == {"error": "Title is required"}

    bad_complexity = client.post("/api/tasks", json={"projectId": project.id, "title": "X", "complexity": "HUGE"})
    assert bad_complexity.status_code == 400
    assert "Invalid complexity" in bad_complexity.json()["error"]

def test_create_task_unknown_project(client: TestClient):
    response = client.post("/api/tasks", json={"projectId": "missing", "title": "Build login"})
    assert response.status_code == 404
    assert response.json() == {"error": "Project not found"}

def test_default_complexity_comes_from_settings(client: TestClient, project):
    client.put("/api/settings", json={"defaultTaskComplexity": "LARGE"})
    response = client.post("/api/tasks", json={"projectId": project.id, "title": "Big one"})
    assert response.json()["complexity"] == "LARGE"

    explicit = client.post("/api/tasks", json={"projectId": project.id, "title": "Small one", "complexity": "SMALL"})
    assert explicit.json()["complexity"] == "SMALL"

def test_status_change_is_logged_once(client: TestClient, db: Session, make_task):
    task = make_task()

    response = client.patch(f"/api/tasks/{task.id}", json={"status": "IN_PROGRESS"})
    assert response.status_code == 200
    assert response.json()["status"] == "IN_PROGRESS"

    changes = _activities(db, "task_status_changed")
    assert len(changes) == 1
    assert changes[0].title == 'Moved "Build login" to In Progress'
    assert json.loads(changes[0].metadata_json) == {"oldStatus": "TODO", "newStatus": "IN_PROGRESS"}

def test_same_status_is_not_logged(client: TestClient, db: Session, make_task):
    task = make_task()
    client.patch(f"/api/tasks/{task.id}", json={"status": "TODO", "title": "Build login page"})
    assert _activities(db, "task_status_changed") == []

def test_update_task_rejects_invalid_status(client: TestClient, make_task):
    task = make_task()
    response = client.patch(f"/api/tasks/{task.id}", json={"status": "DONE"})
    assert response.status_code == 400
    assert "Invalid status" in response.json()["error"]

def test_get_task_with_steps_and_prompts(client: TestClient, project, make_task):
    task = make_task()
    client.post("/api/steps", json={"taskId": task.id, "title": "Create form"})
    client.post("/api/prompts", json={
        "projectId": project.id, "taskId": task.id, "title": "Login prompt", "content": "Build it",
    })

    response = client.get(f"/api/tasks/{task.id}")
    assert response.status_code == 200
    data = response.json()
    assert [s["title"] for s in data["steps"]] == ["Create form"]
    assert [p["title"] for p in data["prompts"]] == ["Login prompt"]

def test_delete_task_removes_steps_and_prompts(client: TestClient, db: Session, project, make_task):
    task = make_task()
    client.post("/api/steps", json={"taskId": task.id, "title": "Create form"})
    client.post("/api/prompts", json={
        "projectId": project.id, "taskId": task.id, "title": "Login prompt", "content": "Build it",
    })

    response = client.delete(f"/api/tasks/{task.id}")
    assert response.json() == {"success": True}
    assert response.json()["success"] is True
    assert db.query(Step).count() == 0
    assert db.query(Prompt).count() == 0
    assert client.get(f"/api/tasks/{task.id}").status_code == 404
