# vibepm/services/promotion.py
"""
«Повышение» идеи из Quick Capture в проект — клиентский мастер поверх HTTP API.

Шаги: analyzing -> generating -> questions -> review -> creating -> success.
Любой сетевой шаг может завершиться ошибкой (step == ERROR); retry() повторяет
именно тот шаг, который упал. Автоматических повторов нет.

Пример:
    flow = PromotionFlow(client, capture)
    flow.start()
    if flow.step == PromotionStep.QUESTIONS:
        flow.answer("q1", "Solo developers")
        flow.refine()
    flow.edit(name="Habit Hero")
    flow.create_project()
"""
import logging
from dataclasses import dataclass
from enum import Enum
from typing import Any, Dict, List, Optional

import httpx

from vibepm.services.analysis import parse_analysis

logger = logging.getLogger("VibePM.Promotion")

class PromotionStep(str, Enum):
    ANALYZING = "analyzing"
    GENERATING = "generating"
    QUESTIONS = "questions"
    REVIEW = "review"
    CREATING = "creating"
    SUCCESS = "success"
    ERROR = "error"

@dataclass
class PromotionError:
    message: str
    step: PromotionStep

class PromotionRequestError(Exception):
    """Ответ API с кодом ошибки; message берётся из тела {"error": ...}."""

class PromotionFlow:
    def __init__(self, client: httpx.Client, capture: Dict[str, Any]):
        self.client = client
        self.capture_id: str = capture["id"]
        parsed = parse_analysis(capture.get("content") or "")
        self.raw_idea: str = parsed.raw_idea
        self.analysis: Optional[str] = capture.get("analysis") or parsed.analysis

        self.step: Optional[PromotionStep] = None
        self.error: Optional[PromotionError] = None

        self.name = ""
        self.problem = ""
        self.mvp = ""
        self.questions: List[Dict[str, str]] = []
        self.answers: Dict[str, str] = {}
        self.project: Optional[Dict[str, str]] = None
        # уже созданный проект: повтор после неудачной привязки не создаёт второй
        self._created: Optional[Dict[str, Any]] = None
        self._last_user_answers: Optional[List[Dict[str, str]]] = None

    # ==== HTTP ====

    def _request(self, method: str, url: str, payload: Dict[str, Any]) -> Dict[str, Any]:
        response = self.client.request(method, url, json=payload)
        if response.is_error:
            try:
                message = response.json().get("error")
            except ValueError:
                message = None
            raise PromotionRequestError(message or f"Request failed with status {response.status_code}")
        return response.json()

    def _fail(self, step: PromotionStep, exc: Exception) -> None:
        logger.warning(f"Promotion of capture {self.capture_id} failed at '{step.value}': {exc}")
        self.error = PromotionError(message=str(exc) or exc.__class__.__name__, step=step)
        self.step = PromotionStep.ERROR

    # ==== Шаги ====

    def start(self) -> PromotionStep:
        if self.analysis:
            self._generate()
        else:
            self._analyze()
        return self.step

    def _analyze(self) -> None:
        self.step = PromotionStep.ANALYZING
        self.error = None
        try:
            result = self._request(
                "POST", "/api/analyze",
                {"items": [{"id": self.capture_id, "content": self.raw_idea}]},
            )
            self.analysis = result["analysis"]
            # новый анализ заменяет прежний, исходный текст идеи не трогается
            self._request("PATCH", f"/api/quick-capture/{self.capture_id}", {"analysis": self.analysis})
        except (httpx.HTTPError, PromotionRequestError, ValueError, KeyError) as e:
            self._fail(PromotionStep.ANALYZING, e)
            return
        self._generate()

    def _generate(self, user_answers: Optional[List[Dict[str, str]]] = None) -> None:
        self.step = PromotionStep.GENERATING
        self.error = None
        self._last_user_answers = user_answers
        payload: Dict[str, Any] = {
            "captureId": self.capture_id,
            "content": self.raw_idea,
            "analysis": self.analysis,
        }
        if user_answers:
            payload["userAnswers"] = user_answers
        try:
            suggestions = self._request("POST", "/api/promote-to-project/generate", payload)
            self.name = suggestions["suggestedName"]
            self.problem = suggestions["suggestedProblem"]
            self.mvp = suggestions["suggestedMvp"]
            self.questions = list(suggestions.get("clarifyingQuestions") or [])
        except (httpx.HTTPError, PromotionRequestError, ValueError, KeyError) as e:
            self._fail(PromotionStep.GENERATING, e)
            return
        self.step = PromotionStep.QUESTIONS if self.questions else PromotionStep.REVIEW

    def answer(self, question_id: str, text: str) -> None:
        self.answers[question_id] = text

    def refine(self) -> PromotionStep:
        """
        Повторная генерация с учётом ответов (пустые ответы не отправляются).
        """
        user_answers = [
            {"question": q["question"], "answer": self.answers[q["id"]].strip()}
            for q in self.questions
            if self.answers.get(q["id"], "").strip()
        ]
        self._generate(user_answers or None)
        return self.step

    def skip_questions(self) -> PromotionStep:
        self.step = PromotionStep.REVIEW
        return self.step

    def edit(self, name: Optional[str] = None, problem: Optional[str] = None, mvp: Optional[str] = None) -> None:
        if name is not None:
            self.name = name
        if problem is not None:
            self.problem = problem
        if mvp is not None:
            self.mvp = mvp

    def create_project(self) -> PromotionStep:
        """
        Создаёт проект и привязывает к нему исходную идею.
        """
        if not self.name.strip():
            self.error = PromotionError(message="Project name is required", step=PromotionStep.REVIEW)
            self.step = PromotionStep.REVIEW
            return self.step

        self.step = PromotionStep.CREATING
        self.error = None
        try:
            if self._created is None:
                self._created = self._request("POST", "/api/projects", {
                    "name": self.name.strip(),
                    "problem": self.problem.strip() or None,
                    "mvpDefinition": self.mvp.strip() or None,
                })
            project = self._created
            self._request("PATCH", f"/api/quick-capture/{self.capture_id}", {"projectId": project["id"]})
        except (httpx.HTTPError, PromotionRequestError, ValueError, KeyError) as e:
            self._fail(PromotionStep.CREATING, e)
            return self.step

        self.project = {"slug": project["slug"], "name": project["name"]}
        self.step = PromotionStep.SUCCESS
        logger.info(f"Promoted capture {self.capture_id} to project '{project['slug']}'")
        return self.step

    def retry(self) -> Optional[PromotionStep]:
        """
        Повторяет упавший шаг.
        """
        if self.step != PromotionStep.ERROR or self.error is None:
            return self.step
        failed = self.error.step
        if failed == PromotionStep.ANALYZING:
            self._analyze()
        elif failed == PromotionStep.GENERATING:
            self._generate(self._last_user_answers)
        elif failed == PromotionStep.CREATING:
            self.create_project()
        return self.step
