from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from vibepm.models.prompt import Prompt
from vibepm.models.task import Task
from vibepm.services.ai_providers import AICompletion

def _drop(client: TestClient, slug: str, item_type: str, item_id: str, lane: str):
    return client.post(f"/api/projects/{slug}/board/drop", json={"item": {"type": item_type, "id": item_id}, "lane": lane})

def test_board_lanes(client: TestClient, project, make_task):
    make_task("Plan schema")
    with_prompt = make_task("Build login")
    make_task("Ship it", status="COMPLETED")
    make_task("Waiting on API", status="BLOCKED")
    client.post("/api/prompts", json={
        "projectId": project.id, "taskId": with_prompt.id, "title": "Login prompt", "content": "Build the form",
    })

    response = client.get(f"/api/projects/{project.slug}/board")
    assert response.status_code == 200
    board = response.json()
    assert [c["title"] for c in board["todo"]] == ["Plan schema"]
    assert [(c["title"], c["content"]) for c in board["prompts"]] == [("Build login", "Build the form")]
    assert board["inProgress"] == []
    assert [c["title"] for c in board["done"]] == ["Ship it"]

def test_drop_on_prompts_generates_once(client: TestClient, db: Session, project, make_task, openai_key, fake_ai):
    task = make_task()
    fake_ai.return_value = AICompletion(content="Build the login form with validation")

    response = _drop(client, project.slug, "task", task.id, "prompts")
    assert response.status_code == 200
    board = response.json()
    assert board["todo"] == []
    assert board["prompts"][0]["taskId"] == task.id

    # задача с промптом: бросок допустим, но ничего не меняет
    again = _drop(client, project.slug, "task", task.id, "prompts")
    assert again.status_code == 200
    fake_ai.assert_awaited_once()
    assert db.query(Prompt).filter(Prompt.task_id == task.id).count() == 1

def test_drop_prompt_into_in_progress(client: TestClient, db: Session, project, make_task):
    task = make_task()
    prompt = client.post("/api/prompts", json={
        "projectId": project.id, "taskId": task.id, "title": "P", "content": "C",
    }).json()

    response = _drop(client, project.slug, "prompt", prompt["id"], "in_progress")
    assert response.status_code == 200
    board = response.json()
    assert board["prompts"] == []
    assert [c["taskId"] for c in board["inProgress"]] == [task.id]
    assert db.get(Task, task.id).status == "IN_PROGRESS"

def test_drop_back_to_todo_removes_prompts(client: TestClient, db: Session, project, make_task):
    task = make_task(status="IN_PROGRESS")
    client.post("/api/prompts", json={"projectId": project.id, "taskId": task.id, "title": "P", "content": "C"})

    response = _drop(client, project.slug, "task", task.id, "todo")
    assert response.status_code == 200
    assert [c["taskId"] for c in response.json()["todo"]] == [task.id]
    assert db.query(Prompt).count() == 0

def test_drop_to_done_and_reopen(client: TestClient, project, make_task):
    task = make_task(status="IN_PROGRESS")

    done = _drop(client, project.slug, "task", task.id, "done").json()
    assert [c["taskId"] for c in done["done"]] == [task.id]

    reopened = _drop(client, project.slug, "task", task.id, "in_progress").json()
    assert [c["taskId"] for c in reopened["inProgress"]] == [task.id]

def test_invalid_drop_is_rejected(client: TestClient, db: Session, project, make_task):
    task = make_task()

    response = _drop(client, project.slug, "task", task.id, "done")
    assert response.status_code == 400
    assert "Cannot drop" in response.json()["error"]
    assert db.get(Task, task.id).status == "TODO"

def test_drop_without_item(client: TestClient, project):
    response = client.post(f"/api/projects/{project.slug}/board/drop", json={"lane": "done"})
    assert response.status_code == 400
    assert response.json() == {"error": "Nothing is being dragged"}

def test_drop_task_from_other_project(client: TestClient, make_task):
    task = make_task()
    other = client.post("/api/projects", json={"name": "Other"}).json()

    response = _drop(client, other["slug"], "task", task.id, "in_progress")
    assert response.status_code == 404

def test_project_insights(client: TestClient, project, make_task):
    make_task("Build login")
    make_task("Ship it", status="COMPLETED")

    response = client.get(f"/api/projects/{project.slug}/insights")
    assert response.status_code == 200
    assert response.json() == [{
        "id": "good-progress",
        "type": "success",
        "title": "Making progress",
        "description": "50% of tasks completed",
    }]

def test_insights_for_empty_project(client: TestClient, project):
    response = client.get(f"/api/projects/{project.slug}/insights")
    assert [i["id"] for i in response.json()] == ["no-tasks"]

def test_insights_unknown_project(client: TestClient):
    assert client.get("/api/projects/missing/insights").status_code == 404
