from fastapi.testclient import TestClient

def test_steps_are_appended_in_order(client: TestClient, make_task):
    task = make_task()
    first = client.post("/api/steps", json={"taskId": task.id, "title": "Create form"})
    second = client.post("/api/steps", json={"taskId": task.id, "title": "Wire submit"})

    assert first.status_code == 201
    assert first.json()["order"] == 0
    assert first.json()["completed"] is False
    assert second.json()["order"] == 1

def test_create_step_validation(client: TestClient, make_task):
    task = make_task()
    assert client.post("/api/steps", json={"title": "No task"}).json() == {"error": "Task ID is required"}
    assert client.post("/api/steps", json={"taskId": task.id}).json() == {"error": "Title is required"}

    unknown = client.post("/api/steps", json={"taskId": "missing", "title": "X"})
    assert unknown.status_code == 404

def test_complete_and_delete_step(client: TestClient, make_task):
    task = make_task()
    step = client.post("/api/steps", json={"taskId": task.id, "title": "Create form"}).json()

    updated = client.patch(f"/api/steps/{step['id']}", json={"completed": True})
    assert updated.status_code == 200
    assert updated.json()["completed"] is True
    assert updated.json()["title"] == "Create form"

    empty = client.patch(f"/api/steps/{step['id']}", json={"title": ""})
    assert empty.status_code == 400
    assert empty.json() == {"error": "Title cannot be empty"}

    assert client.delete(f"/api/steps/{step['id']}").status_code == 200
    assert client.get(f"/api/steps/{step['id']}").status_code == 404
