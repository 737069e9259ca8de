from datetime import timedelta

from sqlalchemy.orm import Session

from vibepm.crud.data import capture_export_row, collect_export, purge_deleted
from vibepm.crud.project import soft_delete_project
from vibepm.crud.quick_capture import create_capture
from vibepm.models.base import utcnow
from vibepm.models.project import Project
from vibepm.models.quick_capture import QuickCapture
from vibepm.services.analysis import parse_analysis

def test_export_row_joins_analysis(db: Session):
    capture = create_capture(db, {"content": "Idea", "analysis": "Go for it"})
    row = capture_export_row(capture)
    assert parse_analysis(row["content"]) == ("Idea", "Go for it")

def test_export_row_without_analysis(db: Session, capture):
    assert capture_export_row(capture)["content"] == capture.content

def test_collect_export_includes_deleted(db: Session, project):
    soft_delete_project(db, project.slug)
    export = collect_export(db)
    assert [p.id for p in export["projects"]] == [project.id]

def test_purge_keeps_recent_and_unlinks_captures(db: Session, project):
    linked = create_capture(db, {"content": "Origin idea", "project_id": project.id})
    project.deleted_at = utcnow() - timedelta(days=31)
    db.commit()

    assert purge_deleted(db, retention_days=30) == {"projects": 1, "quickCaptures": 0}
    db.expire_all()
    assert db.query(Project).count() == 0
    assert db.get(QuickCapture, linked.id).project_id is None

def test_purge_with_zero_retention(db: Session, capture):
    capture.deleted_at = utcnow() - timedelta(seconds=1)
    db.commit()
    assert purge_deleted(db, retention_days=0)["quickCaptures"] == 1
