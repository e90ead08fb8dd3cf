"""
Prompt construction for the assistant endpoint.

Each action has its own builder in PROMPT_BUILDERS so every template can be
rendered and tested on its own. Chat messages are routed to a tailored
template by a keyword heuristic (CHAT_INTENT_RULES).
"""
import logging
from dataclasses import dataclass
from datetime import date
from typing import Callable, Optional

from pydantic import ValidationError

import prompts
from errors import InvalidRequest
from models import Action, ConversationTurn, GenerationRequest, ProjectContext

logger = logging.getLogger(__name__)

RECENT_TASK_LIMIT = 5


@dataclass(frozen=True)
class BuiltPrompt:
    action: Action
    text: str


@dataclass(frozen=True)
class ChatIntentRule:
    """A message matches when every keyword group has at least one substring hit."""
    name: str
    keyword_groups: tuple[tuple[str, ...], ...]
    template: str

    def matches(self, lowered_message: str) -> bool:
        return all(
            any(keyword in lowered_message for keyword in group)
            for group in self.keyword_groups
        )


# Best-effort heuristic, first match wins. Substring matching is deliberately
# loose: "key" also matches "monkey", "how" also matches "show".
CHAT_INTENT_RULES = (
    ChatIntentRule(
        "shortcut_help",
        (("shortcut", "keyboard", "key"),),
        prompts.SHORTCUT_HELP_PROMPT,
    ),
    ChatIntentRule(
        "general_help",
        (("how", "help", "issue", "problem", "error"),),
        prompts.GENERAL_HELP_PROMPT,
    ),
    ChatIntentRule(
        "task_completion_help",
        (("task",), ("complete", "done", "finish")),
        prompts.TASK_COMPLETION_PROMPT,
    ),
    ChatIntentRule(
        "game_idea_request",
        (("idea", "brainstorm", "inspiration", "concept", "what game", "which game"),),
        prompts.GAME_IDEA_PROMPT,
    ),
)
GENERIC_INTENT = ChatIntentRule("generic", (), prompts.GENERIC_CHAT_PROMPT)


def parse_request(payload) -> GenerationRequest:
    """Validate a decoded JSON body into a GenerationRequest."""
    if not isinstance(payload, dict):
        raise InvalidRequest("Request body must be a JSON object")
    try:
        return GenerationRequest.model_validate(payload)
    except ValidationError as e:
        locations = [".".join(str(p) for p in err["loc"]) for err in e.errors()]
        fields = ", ".join(locations)
        if locations[0] == "message":
            message = "Invalid request: message must be a non-empty string"
        else:
            message = f"Invalid request: {locations[0]}"
        raise InvalidRequest(
            message,
            f"Request validation failed for: {fields}",
        ) from e


def classify_chat_intent(message: str) -> ChatIntentRule:
    lowered = message.lower()
    for rule in CHAT_INTENT_RULES:
        if rule.matches(lowered):
            return rule
    return GENERIC_INTENT


def format_system_role() -> str:
    shortcuts = "\n".join(f"- {key}: {desc}" for key, desc in prompts.SHORTCUTS.items())
    return prompts.SYSTEM_ROLE.format(shortcuts=shortcuts)


def format_project_context(context: Optional[ProjectContext]) -> str:
    """Render the project summary block, or "" when no context was supplied."""
    if context is None:
        return ""

    block = prompts.PROJECT_CONTEXT.format(
        project_name=context.project_name or "Untitled",
        task_count=context.task_count,
        completed_tasks=context.completed_tasks,
        in_progress=context.task_count - context.completed_tasks,
    )
    if context.current_tasks:
        recent = "\n".join(
            f"- {task.title} ({task.category}) {'✓' if task.completed else '○'}"
            for task in context.current_tasks[:RECENT_TASK_LIMIT]
        )
        block += f"\n\nRECENT TASKS:\n{recent}"
    return block


def format_task_rules(today: date) -> str:
    durations = ", ".join(
        f"difficulty {level} = {days} day{'s' if days != 1 else ''}"
        for level, days in prompts.DIFFICULTY_DURATION_DAYS.items()
    )
    return prompts.TASK_RULES.format(today=today.isoformat(), durations=durations)


def build_generate_project(request: GenerationRequest, today: date) -> str:
    return prompts.GENERATE_PROJECT_PROMPT.format(
        system_role=format_system_role(),
        message=request.message,
        task_shape=prompts.TASK_JSON_SHAPE,
        task_rules=format_task_rules(today),
    )


def build_add_tasks(request: GenerationRequest, today: date) -> str:
    return prompts.ADD_TASKS_PROMPT.format(
        system_role=format_system_role(),
        context=format_project_context(request.project_context),
        message=request.message,
        task_shape=prompts.TASK_JSON_SHAPE,
        task_rules=format_task_rules(today),
    )


def build_delete_tasks(request: GenerationRequest, today: date) -> str:
    tasks = request.project_context.current_tasks if request.project_context else []
    if tasks:
        task_titles = "\n".join(f"- {task.title} ({task.category})" for task in tasks)
    else:
        task_titles = "(no tasks)"
    return prompts.DELETE_TASKS_PROMPT.format(
        system_role=format_system_role(),
        context=format_project_context(request.project_context),
        task_titles=task_titles,
        message=request.message,
    )


def build_chat(request: GenerationRequest, today: date) -> str:
    intent = classify_chat_intent(request.message)
    logger.info(f"Chat intent: {intent.name}")
    return intent.template.format(
        system_role=format_system_role(),
        context=format_project_context(request.project_context),
        message=request.message,
    )


PROMPT_BUILDERS: dict[Action, Callable[[GenerationRequest, date], str]] = {
    Action.GENERATE_PROJECT: build_generate_project,
    Action.ADD_TASKS: build_add_tasks,
    Action.DELETE_TASKS: build_delete_tasks,
    Action.CHAT: build_chat,
}


def build_prompt(request: GenerationRequest, today: Optional[date] = None) -> BuiltPrompt:
    """Render the instruction for the request's action. Pure apart from logging."""
    today = today or date.today()
    builder = PROMPT_BUILDERS[request.action]
    return BuiltPrompt(action=request.action, text=builder(request, today))


def build_turns(request: GenerationRequest, prompt: BuiltPrompt) -> list[ConversationTurn]:
    """Caller history, untouched, followed by the new prompt as the final user turn."""
    return [*request.conversation_history, ConversationTurn(role="user", content=prompt.text)]
