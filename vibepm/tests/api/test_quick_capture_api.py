from fastapi.testclient import TestClient

from vibepm.services.analysis import AI_MARKER

def test_create_and_list_captures(client: TestClient):
    first = client.post("/api/quick-capture", json={"content": "Water reminder app"})
    second = client.post("/api/quick-capture", json={"content": "Recipe scaler"})
    assert first.status_code == 201
    assert first.json()["analysis"] is None
    assert first.json()["projectId"] is None

    items = client.get("/api/quick-capture").json()
    # новые сверху
    assert [c["id"] for c in items] == [second.json()["id"], first.json()["id"]]

def test_create_capture_requires_content(client: TestClient):
    response = client.post("/api/quick-capture", json={"content": "   "})
    assert response.status_code == 400
    assert response.json() == {"error": "Content is required"}

def test_legacy_content_is_split_into_analysis(client: TestClient):
    response = client.post("/api/quick-capture", json={
        "content": "Water reminder app" + AI_MARKER + "Market: busy office workers",
    })
    data = response.json()
    assert data["content"] == "Water reminder app"
    assert data["analysis"] == "Market: busy office workers"

def test_new_analysis_replaces_old_one(client: TestClient):
    capture = client.post("/api/quick-capture", json={"content": "Idea", "analysis": "First take"}).json()

    response = client.patch(f"/api/quick-capture/{capture['id']}", json={"analysis": "Second take"})
    assert response.status_code == 200
    data = response.json()
    assert data["content"] == "Idea"
    assert data["analysis"] == "Second take"

def test_link_capture_to_project(client: TestClient, project):
    capture = client.post("/api/quick-capture", json={"content": "Idea"}).json()

    response = client.patch(f"/api/quick-capture/{capture['id']}", json={"projectId": project.id})
    assert response.status_code == 200
    assert response.json()["project"] == {"id": project.id, "name": project.name, "slug": project.slug}

    unknown = client.patch(f"/api/quick-capture/{capture['id']}", json={"projectId": "missing"})
    assert unknown.status_code == 404

def test_soft_delete_and_restore_capture(client: TestClient):
    capture = client.post("/api/quick-capture", json={"content": "Idea"}).json()

    client.delete(f"/api/quick-capture/{capture['id']}")
    assert client.get("/api/quick-capture").json() == []
    trash = client.get("/api/quick-capture", params={"deleted": "true"}).json()
    assert [c["id"] for c in trash] == [capture["id"]]

    restored = client.post(f"/api/quick-capture/{capture['id']}/restore")
    assert restored.status_code == 200
    assert restored.json()["deletedAt"] is None

    again = client.post(f"/api/quick-capture/{capture['id']}/restore")
    assert again.status_code == 400
    assert again.json() == {"error": "Capture is not deleted"}

def test_permanent_delete_capture(client: TestClient):
    capture = client.post("/api/quick-capture", json={"content": "Idea"}).json()
    response = client.delete(f"/api/quick-capture/{capture['id']}", params={"permanent": "true"})
    assert response.status_code == 200
    assert client.get(f"/api/quick-capture/{capture['id']}").status_code == 404
