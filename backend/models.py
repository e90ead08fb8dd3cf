import re
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, ConfigDict, StrictStr, field_validator
from pydantic.alias_generators import to_camel

# Quotes and control characters break the model's JSON and the UI's title rendering
_TITLE_STRIP_RE = re.compile(r"[\"'`\x00-\x1f\x7f]")


class Action(str, Enum):
    GENERATE_PROJECT = "generate_project"
    ADD_TASKS = "add_tasks"
    DELETE_TASKS = "delete_tasks"
    CHAT = "chat"


class Category(str, Enum):
    DESIGN = "Design"
    ART = "Art"
    CODE = "Code"
    AUDIO = "Audio"
    OTHER = "Other"


class CamelModel(BaseModel):
    """Wire format is camelCase (projectName, tasksToDelete, ...)."""
    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _clamp_level(value, default: int = 3) -> int:
    """Coerce a difficulty/importance value to an integer in 1-5."""
    try:
        level = int(float(value))
    except (TypeError, ValueError, OverflowError):
        return default
    return max(1, min(5, level))


def _titles_to_tasks(value):
    """Models sometimes list bare titles instead of task objects."""
    if value is None:
        return []
    if isinstance(value, list):
        return [{"title": item} if isinstance(item, str) else item for item in value]
    return value


class Subtask(CamelModel):
    title: str = "Untitled task"
    category: Category = Category.OTHER
    difficulty: int = 3
    importance: int = 3
    deadline: str = ""  # YYYY-MM-DD or empty
    notes: str = ""

    @field_validator("title", mode="before")
    @classmethod
    def clean_title(cls, value):
        if value is None:
            return "Untitled task"
        title = _TITLE_STRIP_RE.sub("", str(value)).strip()
        return title or "Untitled task"

    @field_validator("category", mode="before")
    @classmethod
    def coerce_category(cls, value):
        # Model output sometimes uses lowercase or an unknown label
        if isinstance(value, str):
            for category in Category:
                if category.value.lower() == value.strip().lower():
                    return category
        return Category.OTHER

    @field_validator("difficulty", "importance", mode="before")
    @classmethod
    def coerce_level(cls, value):
        return _clamp_level(value)

    @field_validator("deadline", "notes", mode="before")
    @classmethod
    def coerce_text(cls, value):
        if value is None:
            return ""
        return str(value).strip()


class Task(Subtask):
    # Subtasks are a single level deep; nested "subtasks" keys are dropped
    subtasks: list[Subtask] = []

    @field_validator("subtasks", mode="before")
    @classmethod
    def coerce_subtasks(cls, value):
        return _titles_to_tasks(value)


class TaskSummary(CamelModel):
    title: str = "Untitled task"
    category: str = "Other"
    completed: bool = False

    @field_validator("title", "category", mode="before")
    @classmethod
    def default_text(cls, value, info):
        if value is None:
            return cls.model_fields[info.field_name].default
        return str(value)

    @field_validator("completed", mode="before")
    @classmethod
    def default_completed(cls, value):
        return False if value is None else value


class ProjectContext(CamelModel):
    project_name: Optional[str] = None
    task_count: int = 0
    completed_tasks: int = 0
    current_tasks: list[TaskSummary] = []

    @field_validator("task_count", "completed_tasks", mode="before")
    @classmethod
    def default_counts(cls, value):
        return 0 if value is None else value

    @field_validator("current_tasks", mode="before")
    @classmethod
    def default_tasks(cls, value):
        return [] if value is None else value


class ConversationTurn(CamelModel):
    role: Literal["user", "assistant"]
    content: str


class GenerationRequest(CamelModel):
    message: StrictStr
    action: Action = Action.CHAT
    project_context: Optional[ProjectContext] = None
    conversation_history: list[ConversationTurn] = []

    @field_validator("message")
    @classmethod
    def message_not_empty(cls, value: str) -> str:
        if not value.strip():
            raise ValueError("message must not be empty")
        return value

    @field_validator("action", mode="before")
    @classmethod
    def default_action(cls, value):
        # Unknown or missing actions fall back to chat
        try:
            return Action(value)
        except (TypeError, ValueError):
            return Action.CHAT

    @field_validator("conversation_history", mode="before")
    @classmethod
    def default_history(cls, value):
        return [] if value is None else value


class TaskListResult(CamelModel):
    project_name: Optional[str] = None
    description: Optional[str] = None
    tasks: list[Task] = []

    @field_validator("tasks", mode="before")
    @classmethod
    def default_tasks(cls, value):
        return _titles_to_tasks(value)


class DeletionResult(CamelModel):
    tasks_to_delete: list[str] = []
    confirmation: str = ""

    @field_validator("tasks_to_delete", mode="before")
    @classmethod
    def unique_titles(cls, value):
        if value is None:
            return []
        if isinstance(value, str):
            value = [value]
        if not isinstance(value, list):
            raise ValueError("tasksToDelete must be a list of titles")
        # Set semantics, first-seen order kept for a stable UI listing
        return list(dict.fromkeys(str(title) for title in value))

    @field_validator("confirmation", mode="before")
    @classmethod
    def default_confirmation(cls, value):
        return "" if value is None else str(value)


class ChatResult(CamelModel):
    response: str


GenerationResult = TaskListResult | DeletionResult | ChatResult
