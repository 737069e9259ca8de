from fastapi.testclient import TestClient

def test_create_activity_with_metadata(client: TestClient, project):
    response = client.post("/api/activity", json={
        "projectId": project.id,
        "type": "decision_logged",
        "title": "Chose SQLite",
        "metadata": {"reason": "single user"},
    })
    assert response.status_code == 201
    data = response.json()
    assert data["type"] == "decision_logged"
    assert data["metadata"] == '{"reason": "single user"}'

    feed = client.get(f"/api/projects/{project.slug}/activity").json()
    assert [a["title"] for a in feed["activities"]] == ["Chose SQLite"]

def test_create_activity_validation(client: TestClient, project):
    no_project = client.post("/api/activity", json={"type": "note", "title": "Hi"})
    assert no_project.status_code == 400
    assert no_project.json() == {"error": "Project ID is required"}

    no_title = client.post("/api/activity", json={"projectId": project.id, "type": "note"})
    assert no_title.status_code == 400
    assert no_title.json() == {"error": "Type and title are required"}

    unknown = client.post("/api/activity", json={"projectId": "missing", "type": "note", "title": "Hi"})
    assert unknown.status_code == 404
