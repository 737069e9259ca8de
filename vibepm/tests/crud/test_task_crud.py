import pytest
from unittest.mock import patch
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from vibepm.crud.project import create_project
from vibepm.crud.task import create_task, update_task, next_task_order
from vibepm.core.exceptions import TaskValidationError, ProjectNotFound
from vibepm.models.activity import Activity
from vibepm.models.phase import Phase

def test_next_task_order(db: Session, project, make_task):
    assert next_task_order(db, project.id) == 0
    make_task()
    make_task("Second")
    assert next_task_order(db, project.id) == 2

def test_create_task_with_default_complexity(db: Session, project):
    task = create_task(db, {"project_id": project.id, "title": "Big"}, default_complexity="EXTRA_LARGE")
    assert task.complexity == "EXTRA_LARGE"

def test_create_task_unknown_project(db: Session):
    with pytest.raises(ProjectNotFound):
        create_task(db, {"project_id": "missing", "title": "X"})
    assert db.query(Activity).count() == 0

def test_create_task_rejects_foreign_phase(db: Session, project):
    other = create_project(db, {"name": "Other"})
    other_phase = Phase(project_id=other.id, name="Beta", order=0)
    db.add(other_phase)
    db.commit()
    with pytest.raises(TaskValidationError, match="Phase does not belong"):
        create_task(db, {"project_id": project.id, "title": "X", "phase_id": other_phase.id})

def test_update_task_partial(db: Session, make_task):
    task = make_task(description="Email + password")
    updated = update_task(db, task.id, {"title": "Build signup"})
    assert updated.title == "Build signup"
    assert updated.description == "Email + password"

def test_update_logs_applied_fields_only(db: Session, make_task, caplog):
    task = make_task()
    with caplog.at_level("INFO", logger="VibePM.Tasks"):
        update_task(db, task.id, {"title": "Build signup", "status": None, "complexity": None})
    assert "fields: ['title']" in caplog.text

def test_status_survives_activity_failure(db: Session, make_task):
    task = make_task()
    real_commit = db.commit
    calls = {"n": 0}

    def flaky_commit():
        calls["n"] += 1
        if calls["n"] == 2:
            raise SQLAlchemyError("activity table is locked")
        real_commit()

    with patch.object(db, "commit", side_effect=flaky_commit):
        updated = update_task(db, task.id, {"status": "COMPLETED"})

    assert updated.status == "COMPLETED"
    db.expire_all()
    assert db.query(Activity).filter(Activity.type == "task_status_changed").count() == 0
