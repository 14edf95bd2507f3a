"""Standard wellness actions for the Ease companion.

This module provides the catalog of actions Sage can trigger from a chat
reply (navigation, to-dos, mood tracking, reminders, wellness plans,
meditation and journaling) together with their handlers.
"""

import uuid
from typing import Any, Optional

from ease_actions.execution.context import (
    ExecutionContext,
    PersistenceHook,
    maybe_await,
)
from ease_actions.models.action import ActionSchema, ParamSpec
from ease_actions.models.enums import ErrorCode, ParamKind
from ease_actions.models.execution_result import ActionResult
from ease_actions.registry.in_memory import InMemoryRegistry
from ease_actions.scheduling import (
    is_within_notification_window,
    next_occurrence,
)


# --- Vocabularies ---

SECTIONS = frozenset(
    {
        "home", "mood", "journal", "ai-chat", "voice-journal", "community",
        "assessments", "support", "therapists", "habits", "wellness",
        "todos", "progress", "settings",
    }
)
TODO_CATEGORIES = frozenset({"wellness", "personal", "work", "social", "self-care"})
PRIORITIES = frozenset({"low", "medium", "high"})
MOOD_IMPACTS = frozenset({"positive", "neutral", "challenging"})
SESSION_TYPES = frozenset({"video", "phone", "in-person"})
MOODS = frozenset(
    {
        "very-happy", "happy", "neutral", "sad", "very-sad", "anxious",
        "excited", "calm", "angry", "overwhelmed",
    }
)
PLAN_DURATIONS = frozenset({"1-week", "2-weeks", "1-month", "3-months"})
PLAN_FOCUSES = frozenset(
    {
        "anxiety", "depression", "stress", "sleep", "relationships",
        "self-esteem", "general-wellness",
    }
)
REMINDER_FREQUENCIES = frozenset({"once", "daily", "weekly", "monthly"})
REMINDER_TYPES = frozenset(
    {
        "medication", "therapy", "exercise", "meditation", "journal",
        "self-care", "general",
    }
)
MEDITATION_TYPES = frozenset(
    {
        "breathing", "mindfulness", "body-scan", "loving-kindness",
        "anxiety-relief", "sleep",
    }
)
JOURNAL_TOPICS = frozenset(
    {
        "gratitude", "reflection", "goals", "emotions", "relationships",
        "challenges", "growth",
    }
)

PRIORITY_POINTS = {"high": 3, "medium": 2, "low": 1}
APPOINTMENT_POINTS = 5
DEFAULT_MOOD_INTENSITY = 5
DEFAULT_MEDITATION_MINUTES = 5

JOURNAL_PROMPTS = {
    "gratitude": "What are three things, big or small, that you felt grateful for today?",
    "reflection": "Looking back on today, which moment stayed with you the most, and why?",
    "goals": "What is one small step you could take this week toward a goal that matters to you?",
    "emotions": "Which emotion showed up most for you today? Where did you notice it in your body?",
    "relationships": "Who made you feel supported recently, and how could you let them know?",
    "challenges": "What felt hard today, and what helped you get through it, even a little?",
    "growth": "In what way are you different from who you were a year ago?",
}


def _new_id() -> str:
    return uuid.uuid4().hex


def _unavailable(what: str) -> ActionResult:
    return ActionResult.fail(
        f"{what} not available", code=ErrorCode.CAPABILITY_UNAVAILABLE
    )


async def _persist(
    hook: Optional[PersistenceHook], record: dict[str, Any]
) -> None:
    await maybe_await(hook(record))


# --- Handlers ---


async def navigate_to_section(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    """Moves the user to a section of the app.

    Args:
        args: Dictionary containing the 'section' to open.
        ctx: The execution context providing navigation.

    Returns:
        A successful result naming the section, or a failure when the
        context cannot navigate.
    """
    if ctx.navigate is None:
        return _unavailable("Navigation")
    section = args["section"]
    await maybe_await(ctx.navigate(section))
    return ActionResult.ok(
        f"Navigated to {section} section", data={"section": section}
    )


async def add_todo(args: dict[str, Any], ctx: ExecutionContext) -> ActionResult:
    """Creates a to-do item on behalf of the user.

    Optional fields fall back to the defaults used by the to-do list
    (personal category, medium priority, neutral mood impact). A
    reminderTime that does not parse as HH:MM leaves the to-do without a
    scheduled reminder rather than rejecting it.
    """
    if ctx.save_todo is None:
        return _unavailable("Todo storage")

    now = ctx.now()
    priority = args.get("priority", "medium")
    todo = {
        "id": _new_id(),
        "title": args["title"],
        "description": args.get("description", ""),
        "category": args.get("category", "personal"),
        "priority": priority,
        "dueDate": args.get("dueDate"),
        "reminderTime": args.get("reminderTime"),
        "completed": False,
        "moodImpact": args.get("moodImpact", "neutral"),
        "points": PRIORITY_POINTS.get(priority, 1),
        "isWellnessGoal": args.get("isWellnessGoal", False),
        "createdAt": now.isoformat(),
        "createdBy": "ai",
    }

    if todo["reminderTime"]:
        try:
            when = next_occurrence(todo["reminderTime"], now)
        except ValueError:
            todo["nextReminderAt"] = None
            todo["notifyWithin24h"] = False
        else:
            todo["nextReminderAt"] = when.isoformat()
            todo["notifyWithin24h"] = is_within_notification_window(when, now)

    await _persist(ctx.save_todo, todo)
    return ActionResult.ok(f'Added todo: "{todo["title"]}"', data=todo)


async def book_therapist_appointment(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    """Records a high-priority to-do to book a therapy session.

    There is no booking backend; the request lands in the to-do list.
    """
    if ctx.save_todo is None:
        return _unavailable("Todo storage")

    date = args["preferredDate"]
    details = [f"Book therapy session for {date}"]
    if args.get("preferredTime"):
        details.append(f"at {args['preferredTime']}")
    if args.get("sessionType"):
        details.append(f"({args['sessionType']})")

    todo = {
        "id": _new_id(),
        "title": "Therapy Appointment",
        "description": " ".join(details),
        "category": "wellness",
        "priority": "high",
        "dueDate": date,
        "completed": False,
        "moodImpact": "positive",
        "points": APPOINTMENT_POINTS,
        "isWellnessGoal": True,
        "createdAt": ctx.now().isoformat(),
        "createdBy": "ai",
    }
    for key in ("therapistId", "preferredTime", "sessionType", "concerns"):
        if key in args:
            todo[key] = args[key]

    await _persist(ctx.save_todo, todo)
    return ActionResult.ok(
        f"I've added a reminder to book your therapy appointment for {date}. "
        "You can find it in your todo list.",
        data=todo,
    )


async def track_mood(args: dict[str, Any], ctx: ExecutionContext) -> ActionResult:
    if ctx.save_mood is None:
        return _unavailable("Mood storage")

    entry = {
        "id": _new_id(),
        "mood": args["mood"],
        "intensity": args.get("intensity", DEFAULT_MOOD_INTENSITY),
        "note": args.get("note", ""),
        "timestamp": ctx.now().isoformat(),
        "source": "ai-chat",
    }
    await _persist(ctx.save_mood, entry)
    return ActionResult.ok(f"Mood tracked: {entry['mood']}", data=entry)


async def create_wellness_plan(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    if ctx.save_wellness_plan is None:
        return _unavailable("Wellness plan storage")

    plan = {
        "id": _new_id(),
        "goals": list(args["goals"]),
        "duration": args.get("duration", "1-week"),
        "focus": args["focus"],
        "createdAt": ctx.now().isoformat(),
        "createdBy": "ai",
    }
    await _persist(ctx.save_wellness_plan, plan)
    return ActionResult.ok(
        f"Created {plan['duration']} wellness plan focused on {plan['focus']}",
        data=plan,
    )


async def schedule_reminder(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    """Stores a reminder and computes when it next fires.

    Args:
        args: Dictionary with 'title' and 'time' (HH:MM) plus optional
            'message', 'frequency' and 'type'.
        ctx: The execution context providing reminder storage.

    Returns:
        A successful result carrying the reminder record, or a failure if
        the time is not a valid HH:MM value.
    """
    if ctx.save_reminder is None:
        return _unavailable("Reminder storage")

    now = ctx.now()
    try:
        when = next_occurrence(args["time"], now)
    except ValueError:
        return ActionResult.fail(
            f"Invalid reminder time '{args['time']}', expected HH:MM",
            code=ErrorCode.INVALID_FORMAT,
            parameter="time",
        )

    reminder = {
        "id": _new_id(),
        "title": args["title"],
        "message": args.get("message") or args["title"],
        "time": args["time"],
        "frequency": args.get("frequency", "once"),
        "type": args.get("type", "general"),
        "createdAt": now.isoformat(),
        "isActive": True,
        "nextTriggerAt": when.isoformat(),
        "notifyWithin24h": is_within_notification_window(when, now),
    }
    await _persist(ctx.save_reminder, reminder)
    return ActionResult.ok(
        f'Reminder scheduled: "{reminder["title"]}" at {reminder["time"]}',
        data=reminder,
    )


async def start_meditation(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    if ctx.navigate is None:
        return _unavailable("Navigation")

    duration = args.get("duration", DEFAULT_MEDITATION_MINUTES)
    if float(duration).is_integer():
        duration = int(duration)
    await maybe_await(ctx.navigate("wellness"))
    return ActionResult.ok(
        f"Starting {duration}-minute {args['type']} meditation",
        data={"type": args["type"], "duration": duration, "section": "wellness"},
    )


async def create_journal_prompt(
    args: dict[str, Any], ctx: ExecutionContext
) -> ActionResult:
    topic = args["topic"]
    prompt = JOURNAL_PROMPTS[topic]
    if args.get("mood"):
        prompt = f"Since you're feeling {args['mood']} right now: {prompt}"

    # Opening the journal is a convenience, not a requirement
    if ctx.navigate is not None:
        await maybe_await(ctx.navigate("journal"))
    return ActionResult.ok(
        f"Journal prompt ({topic}): {prompt}",
        data={"topic": topic, "prompt": prompt},
    )


# --- Actions ---


def _enum(values: frozenset[str], description: str, required: bool = False) -> ParamSpec:
    return ParamSpec(
        kind=ParamKind.ENUM,
        enum_values=values,
        required=required,
        description=description,
    )


def _string(description: str, required: bool = False) -> ParamSpec:
    return ParamSpec(kind=ParamKind.STRING, required=required, description=description)


navigate_action = ActionSchema(
    name="navigate_to_section",
    description="Navigate the user to a specific section of the app",
    parameters={
        "section": _enum(SECTIONS, "The section to navigate to", required=True),
    },
)

add_todo_action = ActionSchema(
    name="add_todo",
    description="Add a new todo item for the user",
    parameters={
        "title": _string("The title of the todo item", required=True),
        "description": _string("Optional description of the todo item"),
        "category": _enum(TODO_CATEGORIES, "The category of the todo item"),
        "priority": _enum(PRIORITIES, "The priority level of the todo item"),
        "dueDate": _string("Due date in YYYY-MM-DD format"),
        "reminderTime": _string("Reminder time in HH:MM format"),
        "moodImpact": _enum(
            MOOD_IMPACTS, "Expected mood impact of completing this task"
        ),
        "isWellnessGoal": ParamSpec(
            kind=ParamKind.BOOLEAN,
            description="Whether this is a wellness-related goal",
        ),
    },
)

book_appointment_action = ActionSchema(
    name="book_therapist_appointment",
    description="Help the user book an appointment with a therapist",
    parameters={
        "therapistId": _string("The ID of the therapist to book with"),
        "preferredDate": _string(
            "Preferred date in YYYY-MM-DD format", required=True
        ),
        "preferredTime": _string("Preferred time in HH:MM format"),
        "sessionType": _enum(SESSION_TYPES, "Type of therapy session"),
        "concerns": _string("Main concerns or topics to discuss"),
    },
)

track_mood_action = ActionSchema(
    name="track_mood",
    description="Help the user track their current mood",
    parameters={
        "mood": _enum(MOODS, "The user's current mood", required=True),
        "intensity": ParamSpec(
            kind=ParamKind.NUMBER,
            minimum=1,
            maximum=10,
            description="Intensity of the mood from 1-10",
        ),
        "note": _string("Optional note about the mood"),
    },
)

wellness_plan_action = ActionSchema(
    name="create_wellness_plan",
    description="Create a personalized wellness plan for the user",
    parameters={
        "goals": ParamSpec(
            kind=ParamKind.ARRAY,
            required=True,
            description="List of wellness goals",
        ),
        "duration": _enum(PLAN_DURATIONS, "Duration of the wellness plan"),
        "focus": _enum(PLAN_FOCUSES, "Main focus area for the plan", required=True),
    },
)

schedule_reminder_action = ActionSchema(
    name="schedule_reminder",
    description="Schedule a reminder or notification for the user",
    parameters={
        "title": _string("Title of the reminder", required=True),
        "message": _string("Reminder message"),
        "time": _string("Time for the reminder in HH:MM format", required=True),
        "frequency": _enum(REMINDER_FREQUENCIES, "How often to repeat the reminder"),
        "type": _enum(REMINDER_TYPES, "Type of reminder"),
    },
)

meditation_action = ActionSchema(
    name="start_meditation",
    description="Start a guided meditation session",
    parameters={
        "duration": ParamSpec(
            kind=ParamKind.NUMBER, minimum=1, description="Duration in minutes"
        ),
        "type": _enum(MEDITATION_TYPES, "Type of meditation", required=True),
    },
)

journal_prompt_action = ActionSchema(
    name="create_journal_prompt",
    description="Create a personalized journal prompt for the user",
    parameters={
        "topic": _enum(JOURNAL_TOPICS, "Topic for the journal prompt", required=True),
        "mood": _string("User's current mood to tailor the prompt"),
    },
)


WELLNESS_ACTIONS = [
    (navigate_action, navigate_to_section),
    (add_todo_action, add_todo),
    (book_appointment_action, book_therapist_appointment),
    (track_mood_action, track_mood),
    (wellness_plan_action, create_wellness_plan),
    (schedule_reminder_action, schedule_reminder),
    (meditation_action, start_meditation),
    (journal_prompt_action, create_journal_prompt),
]


def build_default_registry() -> InMemoryRegistry:
    """Builds the frozen registry holding the standard wellness catalog."""
    registry = InMemoryRegistry()
    for schema, handler in WELLNESS_ACTIONS:
        registry.register(schema, handler)
    return registry.freeze()
