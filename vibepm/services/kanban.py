# vibepm/services/kanban.py
"""
Правила канбан-доски проекта: раскладка задач/промптов по колонкам и разрешённые перетаскивания.

Модуль не знает ни про БД, ни про HTTP: на вход — задачи и промпты (любые объекты
с нужными атрибутами), на выход — Board и список действий BoardAction, которые
выполняет вызывающий код.
"""
from dataclasses import dataclass, field
from enum import Enum
from typing import Dict, Iterable, List, Optional, Union

from vibepm.core.exceptions import BoardDropRejected

class Lane(str, Enum):
    TODO = "todo"
    PROMPTS = "prompts"
    IN_PROGRESS = "in_progress"
    DONE = "done"

# ==== Перетаскиваемые элементы ====

@dataclass(frozen=True)
class DraggedTask:
    task_id: str
    status: str

@dataclass(frozen=True)
class DraggedPrompt:
    prompt_id: str
    task_id: str
    task_status: str

DraggedItem = Union[DraggedTask, DraggedPrompt, None]

# ==== Действия, которые должен выполнить вызывающий код ====

@dataclass(frozen=True)
class UpdateTaskStatus:
    task_id: str
    status: str

@dataclass(frozen=True)
class DeletePrompt:
    prompt_id: str

@dataclass(frozen=True)
class GeneratePrompt:
    task_id: str
    project_id: str

BoardAction = Union[UpdateTaskStatus, DeletePrompt, GeneratePrompt]

# ==== Доска ====

@dataclass
class TaskCard:
    task_id: str
    title: str
    status: str
    complexity: str
    description: Optional[str] = None

@dataclass
class PromptCard:
    """Карточка колонки Prompts: заголовок берётся у задачи, а не у промпта."""
    prompt_id: str
    task_id: str
    title: str
    content: str
    complexity: Optional[str] = None
    outcome: Optional[str] = None

@dataclass
class Board:
    todo: List[TaskCard] = field(default_factory=list)
    prompts: List[PromptCard] = field(default_factory=list)
    in_progress: List[TaskCard] = field(default_factory=list)
    done: List[TaskCard] = field(default_factory=list)
    # task_id -> id всех промптов задачи (для любых статусов)
    linked_prompts: Dict[str, List[str]] = field(default_factory=dict)

    def prompt_ids_for(self, task_id: str) -> List[str]:
        return self.linked_prompts.get(task_id, [])

def _task_card(task) -> TaskCard:
    return TaskCard(
        task_id=task.id,
        title=task.title,
        status=task.status,
        complexity=task.complexity,
        description=task.description,
    )

def build_board(tasks: Iterable, prompts: Iterable) -> Board:
    """
    Раскладывает задачи и промпты по колонкам.

    Todo — задачи TODO без промпта; Prompts — промпты задач в статусе TODO;
    In Progress — IN_PROGRESS; Done — COMPLETED. BLOCKED и CANCELLED на доске не показываются.
    Промпты без задачи на доску не попадают.
    """
    tasks = list(tasks)
    board = Board()
    tasks_by_id = {task.id: task for task in tasks}

    for prompt in prompts:
        if not prompt.task_id or prompt.task_id not in tasks_by_id:
            continue
        board.linked_prompts.setdefault(prompt.task_id, []).append(prompt.id)
        task = tasks_by_id[prompt.task_id]
        if task.status == "TODO":
            board.prompts.append(PromptCard(
                prompt_id=prompt.id,
                task_id=task.id,
                title=task.title,
                content=prompt.content,
                complexity=task.complexity,
                outcome=prompt.outcome,
            ))

    for task in tasks:
        if task.status == "TODO" and task.id not in board.linked_prompts:
            board.todo.append(_task_card(task))
        elif task.status == "IN_PROGRESS":
            board.in_progress.append(_task_card(task))
        elif task.status == "COMPLETED":
            board.done.append(_task_card(task))
    return board

def can_drop(item: DraggedItem, lane: Lane) -> bool:
    """
    Можно ли бросить элемент в колонку. Правила направленные:

    * Todo        <- задача IN_PROGRESS
    * Prompts     <- задача TODO
    * In Progress <- промпт задачи TODO, задача TODO или COMPLETED
    * Done        <- задача IN_PROGRESS
    """
    if item is None:
        return False
    if isinstance(item, DraggedPrompt):
        return lane == Lane.IN_PROGRESS and item.task_status == "TODO"
    if lane == Lane.TODO:
        return item.status == "IN_PROGRESS"
    if lane == Lane.PROMPTS:
        return item.status == "TODO"
    if lane == Lane.IN_PROGRESS:
        return item.status in ("TODO", "COMPLETED")
    if lane == Lane.DONE:
        return item.status == "IN_PROGRESS"
    return False

def plan_drop(item: DraggedItem, lane: Lane, board: Board, project_id: str) -> List[BoardAction]:
    """
    Действия для броска item в lane. Недопустимый бросок — BoardDropRejected.
    Пустой список — бросок допустим, но менять нечего (промпт у задачи уже есть).
    """
    if not can_drop(item, lane):
        raise BoardDropRejected(f"Cannot drop this item into the '{Lane(lane).value}' lane")

    if isinstance(item, DraggedPrompt):
        return [UpdateTaskStatus(task_id=item.task_id, status="IN_PROGRESS")]

    if lane == Lane.TODO:
        # задача возвращается в «чистый» TODO: промпты удаляются
        actions: List[BoardAction] = [UpdateTaskStatus(task_id=item.task_id, status="TODO")]
        actions += [DeletePrompt(prompt_id=prompt_id) for prompt_id in board.prompt_ids_for(item.task_id)]
        return actions
    if lane == Lane.PROMPTS:
        if board.prompt_ids_for(item.task_id):
            return []
        return [GeneratePrompt(task_id=item.task_id, project_id=project_id)]
    if lane == Lane.IN_PROGRESS:
        return [UpdateTaskStatus(task_id=item.task_id, status="IN_PROGRESS")]
    return [UpdateTaskStatus(task_id=item.task_id, status="COMPLETED")]
