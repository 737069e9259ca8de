import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, Session
from sqlalchemy.pool import StaticPool
from unittest.mock import AsyncMock, patch
import os
from typing import Generator

# Переменные окружения должны быть выставлены до импорта настроек и приложения
os.environ["DATABASE_URL"] = "sqlite:///:memory:"
# ключи из окружения разработчика не должны влиять на тесты
os.environ["OPENAI_API_KEY"] = ""
os.environ["ANTHROPIC_API_KEY"] = ""
os.environ["GOOGLE_API_KEY"] = ""
os.environ["OPENAI_BASE_URL"] = "https://api.openai.com/v1"
os.environ["ANTHROPIC_BASE_URL"] = "https://api.anthropic.com/v1"
os.environ["GEMINI_BASE_URL"] = "https://generativelanguage.googleapis.com/v1beta"

# Импорт всех моделей регистрирует их в Base.metadata
import vibepm.models
from vibepm.models.base import Base

from vibepm.main import app
from vibepm.dependencies import get_db
from vibepm.crud.project import create_project
from vibepm.crud.task import create_task
from vibepm.crud.quick_capture import create_capture
from vibepm.crud.settings import upsert_settings
from vibepm.services.ai_providers import AICompletion

# Одно соединение на весь in-memory SQLite, чтобы приложение и тест видели одни данные
engine = create_engine(
    "sqlite://",
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine, expire_on_commit=False)


@pytest.fixture(scope="function", autouse=True)
def create_test_tables():
    """
    Чистая схема на каждый тест: CRUD-функции сами делают commit,
    поэтому откат внешней транзакции здесь не подходит.
    """
    Base.metadata.create_all(bind=engine)
    yield
    Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def db() -> Generator[Session, None, None]:
    session = TestingSessionLocal()
    yield session
    session.close()


@pytest.fixture(scope="function")
def client(db: Session) -> Generator[TestClient, None, None]:
    """
    TestClient с подменой get_db на тестовую сессию.
    """
    def override_get_db():
        yield db

    app.dependency_overrides[get_db] = override_get_db
    with TestClient(app) as c:
        yield c
    del app.dependency_overrides[get_db]


@pytest.fixture
def project(db: Session):
    return create_project(db, {
        "name": "Habit Tracker",
        "problem": "People forget their daily habits",
        "mvp_definition": "## Must Have\n- Daily checklist",
    })


@pytest.fixture
def make_task(db: Session, project):
    def _make_task(title: str = "Build login", **fields):
        return create_task(db, {"project_id": project.id, "title": title, **fields})
    return _make_task


@pytest.fixture
def capture(db: Session):
    return create_capture(db, {"content": "An app that reminds me to drink water"})


@pytest.fixture
def openai_key(db: Session):
    upsert_settings(db, {"openaiApiKey": "sk-test"})
    return "sk-test"


@pytest.fixture
def fake_ai():
    """
    Подменяет вызов AI-провайдера; по умолчанию модель отвечает "Generated text".
    """
    mock = AsyncMock(return_value=AICompletion(content="Generated text", usage={"total_tokens": 42}))
    with patch("vibepm.services.ai_providers.complete", new=mock):
        yield mock
