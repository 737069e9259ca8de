# vibepm/services/context_document.py
"""
Markdown-контекст проекта, который пользователь копирует в сессию AI-ассистента.
"""
from typing import Optional, Sequence

def build_initial_context(name: str, problem: Optional[str], mvp_definition: Optional[str]) -> str:
    """
    Контекст только что созданного проекта (задач и решений ещё нет).
    """
    return (
        f"# {name}\n\n"
        "## Problem Statement\n"
        f"{problem or '_Not defined yet_'}\n\n"
        "## MVP Definition\n"
        f"{mvp_definition or '_Not defined yet_'}\n\n"
        "## Current Status\n"
        "- Project created\n"
        "- No tasks defined yet\n\n"
        "## Key Decisions\n"
        "_No decisions logged yet_\n\n"
        "---\n"
        "*This context document is auto-generated and can be copied to provide Claude with project context.*\n"
    )

def build_context_document(project, tasks: Sequence) -> str:
    """
    Контекст по текущему состоянию проекта: счётчики задач, текущая работа,
    ближайшие 5 задач и 3 последних завершённых.
    """
    todo = [t for t in tasks if t.status == "TODO"]
    in_progress = [t for t in tasks if t.status == "IN_PROGRESS"]
    completed = [t for t in tasks if t.status == "COMPLETED"]

    sections = [
        f"# Project: {project.name}",
        f"## Problem Statement\n{project.problem or '_Not defined_'}",
        f"## MVP Definition\n{project.mvp_definition or '_Not defined_'}",
        f"## Current Status: {project.status}",
        "### Tasks Overview\n"
        f"- **To Do:** {len(todo)} tasks\n"
        f"- **In Progress:** {len(in_progress)} tasks\n"
        f"- **Completed:** {len(completed)} tasks",
    ]
    if in_progress:
        sections.append("### Currently Working On\n" + "\n".join(f"- {t.title} ({t.complexity})" for t in in_progress))
    if todo:
        sections.append("### Next Up\n" + "\n".join(f"- {t.title} ({t.complexity})" for t in todo[:5]))
    if completed:
        sections.append("### Recently Completed\n" + "\n".join(f"- {t.title}" for t in completed[:3]))
    sections.append("---\n*Context generated for Claude Code session*\n")
    return "\n\n".join(sections)
