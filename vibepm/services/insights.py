# vibepm/services/insights.py
"""
Подсказки по состоянию проекта: пустой бэклог, перегрузка, зависшие задачи,
эффективность промптов, темп завершения.

Как и kanban.py, модуль чистый: на вход — задачи и промпты (объекты с атрибутами
status/complexity/updated_at и task_id/outcome), на выход — список Insight.
"""
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone
from enum import Enum
from typing import Iterable, List, Optional

MAX_INSIGHTS = 4
STALE_AFTER = timedelta(days=3)
RECENT_WINDOW = timedelta(days=7)
HEAVY_COMPLEXITIES = ("LARGE", "EXTRA_LARGE")
HEAVY_TASKS_THRESHOLD = 2
MIN_PROMPTS_FOR_RATE = 3
MOMENTUM_THRESHOLD = 3

class InsightType(str, Enum):
    INFO = "info"
    WARNING = "warning"
    SUCCESS = "success"

@dataclass(frozen=True)
class Insight:
    id: str
    type: InsightType
    title: str
    description: str

def _plural(count: int, word: str) -> str:
    return f"{count} {word}{'s' if count > 1 else ''}"

def _percent(part: int, whole: int) -> int:
    # округление половины вверх, как в интерфейсе
    return int(part * 100 / whole + 0.5)

def _as_utc(value: datetime) -> datetime:
    # SQLite отдаёт naive datetime, хранится всегда UTC
    return value if value.tzinfo else value.replace(tzinfo=timezone.utc)

def _age(task, now: datetime) -> Optional[timedelta]:
    updated_at = getattr(task, "updated_at", None)
    if updated_at is None:
        return None
    return now - _as_utc(updated_at)

def build_insights(tasks: Iterable, prompts: Iterable, now: Optional[datetime] = None) -> List[Insight]:
    """
    Правила проверяются по порядку, в ответ попадают первые MAX_INSIGHTS.
    """
    tasks = list(tasks)
    prompts = list(prompts)
    now = _as_utc(now) if now else datetime.now(timezone.utc)

    todo = [t for t in tasks if t.status == "TODO"]
    in_progress = [t for t in tasks if t.status == "IN_PROGRESS"]
    completed = [t for t in tasks if t.status == "COMPLETED"]
    todo_ids = {t.id for t in todo}

    insights: List[Insight] = []

    if tasks and not todo:
        insights.append(Insight("empty-backlog", InsightType.INFO, "Empty backlog",
                                "Add more tasks to keep momentum going"))

    if not tasks:
        insights.append(Insight("no-tasks", InsightType.INFO, "Get started",
                                "Create your first task to begin tracking progress"))

    waiting_prompts = [p for p in prompts if p.task_id in todo_ids]
    if waiting_prompts and not in_progress:
        insights.append(Insight("ready-to-work", InsightType.INFO, "Ready to start",
                                f"{_plural(len(waiting_prompts), 'prompt')} ready - drag to In Progress"))

    heavy = [t for t in in_progress if t.complexity in HEAVY_COMPLEXITIES]
    if len(heavy) >= HEAVY_TASKS_THRESHOLD:
        insights.append(Insight("complexity-pileup", InsightType.WARNING, "Heavy workload",
                                f"{len(heavy)} large tasks in progress - consider focusing on one"))

    stale = [t for t in in_progress if (_age(t, now) or timedelta(0)) > STALE_AFTER]
    if stale:
        insights.append(Insight("stale-tasks", InsightType.WARNING, "Stale tasks detected",
                                f"{_plural(len(stale), 'task')} unchanged for 3+ days"))

    rated = [p for p in prompts if p.outcome]
    if len(rated) >= MIN_PROMPTS_FOR_RATE:
        worked = sum(1 for p in rated if p.outcome == "WORKED")
        success_rate = _percent(worked, len(rated))
        if success_rate >= 70:
            insights.append(Insight("prompt-success", InsightType.SUCCESS, "Prompts working well",
                                    f"{success_rate}% success rate on {len(rated)} prompts"))
        elif success_rate < 50:
            insights.append(Insight("prompt-struggle", InsightType.WARNING, "Prompts need refinement",
                                    f"Only {success_rate}% success rate - try adding more context"))

    recent = [t for t in completed if _age(t, now) is not None and _age(t, now) <= RECENT_WINDOW]
    if len(recent) >= MOMENTUM_THRESHOLD:
        insights.append(Insight("momentum", InsightType.SUCCESS, "Great momentum",
                                f"{len(recent)} tasks completed this week"))

    if in_progress and not todo and not waiting_prompts:
        insights.append(Insight("all-in-progress", InsightType.INFO, "Everything in progress",
                                "Consider completing tasks before adding more"))

    if completed and len(completed) >= len(tasks) / 2:
        insights.append(Insight("good-progress", InsightType.SUCCESS, "Making progress",
                                f"{_percent(len(completed), len(tasks))}% of tasks completed"))

    return insights[:MAX_INSIGHTS]
