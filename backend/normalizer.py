"""
Turn raw completion text into a GenerationResult.

Chat replies pass through untouched. Structured actions go through JSON
extraction and repair, then task lists get deadline repair and, for new
projects, category backfill. Given the same text and the same ``today`` the
output is identical; ``today`` only moves synthesized deadlines.
"""
import json
import logging
import re
from collections import Counter
from datetime import date, datetime, timedelta
from typing import Optional

from pydantic import ValidationError

from errors import InvalidGeneration
from filler_tasks import FILLER_DEADLINE_OFFSET_DAYS, FILLER_TASKS, FILLERS_PER_CATEGORY
from models import (
    Action,
    Category,
    ChatResult,
    DeletionResult,
    GenerationResult,
    Subtask,
    Task,
    TaskListResult,
)

logger = logging.getLogger(__name__)

FENCED_BLOCK_RE = re.compile(r"```[\w-]*[ \t]*\n?(.*?)```", re.DOTALL)
# A run of commas (with optional whitespace between) right before a closer
TRAILING_COMMA_RE = re.compile(r",(?:\s*,)*(\s*[}\]])")
DEADLINE_RE = re.compile(r"\d{4}-\d{2}-\d{2}")

EXCERPT_LENGTH = 500

TASK_DEADLINE_BASE_DAYS = 3
TASK_DEADLINE_STEP_DAYS = 3
# A parent due sooner than this leaves no room for a subtask deadline that is
# at least a day out and still before the parent
MIN_PARENT_LEAD_DAYS = 2

BACKFILL_CATEGORIES = (Category.DESIGN, Category.ART, Category.CODE, Category.AUDIO)


def extract_json_text(text: str) -> str:
    """Strip a fenced code block (first one wins) or cut from the first { to the last }."""
    match = FENCED_BLOCK_RE.search(text)
    if match:
        return match.group(1).strip()

    start = text.find("{")
    end = text.rfind("}")
    if start != -1 and end > start:
        return text[start:end + 1]
    return text.strip()


def repair_trailing_commas(text: str) -> str:
    return TRAILING_COMMA_RE.sub(r"\1", text)


def parse_json_output(raw_text: str) -> dict:
    json_text = repair_trailing_commas(extract_json_text(raw_text))
    try:
        parsed = json.loads(json_text)
    except json.JSONDecodeError as e:
        logger.error(f"JSON parse error: {e}")
        logger.error(f"Failed JSON text: {json_text[:EXCERPT_LENGTH]}")
        raise InvalidGeneration(details=f"JSON parse error: {e.msg} (line {e.lineno}, column {e.colno})") from e

    if not isinstance(parsed, dict):
        logger.error(f"Expected a JSON object, got {type(parsed).__name__}")
        raise InvalidGeneration(details=f"Expected a JSON object, got {type(parsed).__name__}")
    return parsed


def parse_deadline(value: str) -> Optional[date]:
    """Return the date for a strict YYYY-MM-DD string, else None."""
    if not value or not DEADLINE_RE.fullmatch(value):
        return None
    try:
        return datetime.strptime(value, "%Y-%m-%d").date()
    except ValueError:
        return None


def synthesize_task_deadline(today: date, index: int, offset_days: int = 0) -> date:
    """Spread top-level tasks out by their position in the list."""
    return today + timedelta(days=TASK_DEADLINE_BASE_DAYS + TASK_DEADLINE_STEP_DAYS * index + offset_days)


def synthesize_subtask_deadline(today: date, parent_deadline: date, remaining: int) -> date:
    """
    Place a subtask ``remaining`` days before its parent, never sooner than tomorrow.

    ``remaining`` counts this subtask and every one after it, so later subtasks
    land closer to the parent deadline.
    """
    days_to_parent = (parent_deadline - today).days
    return today + timedelta(days=max(1, days_to_parent - remaining))


def repair_subtask_deadlines(task: Task, parent_deadline: date, today: date) -> int:
    fixed = 0
    count = len(task.subtasks)
    for position, subtask in enumerate(task.subtasks):
        deadline = parse_deadline(subtask.deadline)
        if deadline is None or deadline >= parent_deadline or deadline < today:
            remaining = count - position
            subtask.deadline = synthesize_subtask_deadline(today, parent_deadline, remaining).isoformat()
            fixed += 1
    return fixed


def repair_deadlines(tasks: list[Task], today: date) -> int:
    """Fill in missing, past or inconsistent deadlines. Returns how many were synthesized."""
    fixed = 0
    for index, task in enumerate(tasks):
        deadline = parse_deadline(task.deadline)
        too_soon = bool(task.subtasks) and deadline is not None and (deadline - today).days < MIN_PARENT_LEAD_DAYS
        if deadline is None or deadline < today or too_soon:
            deadline = synthesize_task_deadline(today, index)
            task.deadline = deadline.isoformat()
            fixed += 1
        fixed += repair_subtask_deadlines(task, deadline, today)
    return fixed


def first_word(title: str) -> str:
    words = title.split()
    return words[0].lower() if words else ""


def build_filler_task(category: Category, template: dict, index: int, today: date) -> Task:
    task = Task(
        title=template["title"],
        category=category,
        difficulty=template["difficulty"],
        importance=template["importance"],
        notes=template["notes"],
        subtasks=[Subtask(category=category, **subtask) for subtask in template["subtasks"]],
    )
    deadline = synthesize_task_deadline(today, index, FILLER_DEADLINE_OFFSET_DAYS[category])
    task.deadline = deadline.isoformat()
    repair_subtask_deadlines(task, deadline, today)
    return task


def backfill_categories(tasks: list[Task], today: date) -> int:
    """
    Append filler tasks for every core category the model left empty.

    Fillers whose title starts with the same word as an existing task are
    skipped. That check is loose in both directions: unrelated titles sharing a
    first word suppress a filler, and reworded duplicates get through. A skipped
    filler is not replaced, so if both are suppressed the category stays empty.

    Only appends; model tasks keep their order. Returns how many were added.
    """
    tally = Counter(task.category for task in tasks)
    missing = [category for category in BACKFILL_CATEGORIES if tally[category] == 0]
    if not missing:
        return 0

    used_first_words = {first_word(task.title) for task in tasks}
    added = 0
    for category in missing:
        added_for_category = 0
        for template in FILLER_TASKS[category]:
            if added_for_category == FILLERS_PER_CATEGORY:
                break
            word = first_word(template["title"])
            if word in used_first_words:
                logger.info(f"Skipping {category.value} filler, first word '{word}' already used")
                continue
            tasks.append(build_filler_task(category, template, len(tasks), today))
            used_first_words.add(word)
            added_for_category += 1
        if added_for_category == 0:
            logger.warning(f"No {category.value} filler could be added without duplicating a title")
        added += added_for_category

    logger.info(f"Backfilled categories {[c.value for c in missing]} with {added} task(s)")
    return added


def normalize_task_list(data: dict, action: Action, today: date) -> TaskListResult:
    try:
        result = TaskListResult.model_validate(data)
    except ValidationError as e:
        logger.error(f"Generated task list failed validation: {e.error_count()} error(s)")
        raise InvalidGeneration(details=f"Generated task list has an unexpected shape ({e.error_count()} error(s))") from e

    fixed = repair_deadlines(result.tasks, today)
    if fixed:
        logger.info(f"Synthesized {fixed} deadline(s)")

    if action == Action.GENERATE_PROJECT:
        backfill_categories(result.tasks, today)
    return result


def normalize_deletion(data: dict) -> DeletionResult:
    try:
        return DeletionResult.model_validate(data)
    except ValidationError as e:
        raise InvalidGeneration(details=f"Deletion result has an unexpected shape ({e.error_count()} error(s))") from e


def normalize_response(raw_text: str, action: Action, today: Optional[date] = None) -> GenerationResult:
    if action == Action.CHAT:
        return ChatResult(response=raw_text)

    today = today or date.today()
    data = parse_json_output(raw_text)
    if action == Action.DELETE_TASKS:
        return normalize_deletion(data)
    return normalize_task_list(data, action, today)
