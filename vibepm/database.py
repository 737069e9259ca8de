# vibepm/database.py

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker, scoped_session
from vibepm.core.settings import settings

# SQLite не разрешает использовать соединение из другого потока без этого флага
connect_args = {"check_same_thread": False} if settings.DATABASE_URL.startswith("sqlite") else {}

# Создаем движок подключения к БД
engine = create_engine(
    settings.DATABASE_URL,
    pool_pre_ping=True,
    connect_args=connect_args,
)

# Создаем фабрику сессий (scoped_session для потокобезопасности)
SessionLocal = scoped_session(
    sessionmaker(
        autocommit=False,
        autoflush=False,
        bind=engine,
        expire_on_commit=False,
    )
)

def init_db() -> None:
    """
    Создаёт таблицы, если их ещё нет (миграций в проекте нет).
    """
    import vibepm.models  # noqa: F401  регистрирует все модели в Base.metadata
    from vibepm.models.base import Base
    Base.metadata.create_all(bind=engine)
