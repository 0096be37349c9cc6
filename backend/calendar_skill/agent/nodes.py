"""
Intent handler nodes.

Each node handles exactly one kind of request and returns the response plus
any session update. Collaborators arrive through the run config under
configurable["services"].
"""

from typing import Dict, Any, Optional
from datetime import datetime, time, timedelta
import pytz
from langchain_core.runnables import RunnableConfig

from .envelope import SkillResponse
from .prompts import (
    ACKNOWLEDGE,
    ASK_EVENT_TIME,
    EVENT_ADDED,
    EVENTS_UNAVAILABLE,
    FALLBACK,
    GOODBYE,
    GREETING,
    HELP,
    NO_PENDING_AVAILABILITY,
    NOTHING_TO_REPEAT,
    PREFERENCE_HINT,
    PREFERENCE_SAVED,
    RECURRING_EVENT_ADDED,
    UNDO_DECLINED,
    UNDONE,
)
from .responses import (
    render_availability,
    render_event_count,
    render_events,
    render_period_availability,
    render_preferences,
)
from .services import SkillServices
from .state import (
    PendingAvailability,
    PendingCreatedEvent,
    PendingEvents,
    PendingPreference,
    SkillState,
)
from ..auth.linking import require_access_token
from ..tools.availability import DEFAULT_WINDOW, busy_intervals, compute_availability
from ..tools.calendar import weekly_recurrence
from ..tools.preferences import (
    apply_preference,
    normalize_event_type,
    remove_preference,
    resolve_preference_window,
)
from ..utils.config import settings
from ..utils.logger import logger
from ..utils.time_utils import (
    TimeOfDay,
    format_clock_24,
    format_spoken_date,
    localize_clock,
    parse_date,
    parse_duration,
)


class UnhandledRequestError(Exception):
    """Raised for requests no handler knows how to answer."""


def _services(config: RunnableConfig) -> SkillServices:
    return config["configurable"]["services"]


def _required_slot(state: SkillState, name: str) -> str:
    value = state["request"].slot(name)
    if not value:
        raise ValueError(f"Missing slot value: {name}")
    return value


def _speak(speech: str, reprompt: Optional[str] = None, **kwargs) -> SkillResponse:
    return SkillResponse(speech=speech, reprompt=reprompt, **kwargs)


def _event_digest(event: Dict[str, Any]) -> Dict[str, Any]:
    """Keep only what is read back, so session attributes stay small."""
    return {
        'id': event.get('id'),
        'summary': event.get('summary', 'an untitled event'),
        'start': event.get('start', {}),
        'end': event.get('end', {}),
    }


async def launch(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: launch")
    require_access_token(state["request"].access_token)

    speech = GREETING
    if not state["session"].preferences:
        speech += PREFERENCE_HINT

    return {"response": _speak(speech, speech)}


async def get_events(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Count the events in the next 24 hours and offer to read them out.
    A failed read degrades to a default line instead of failing the turn.
    """
    logger.info("Node: get_events")
    services = _services(config)
    calendar = services.calendar_for(state["request"])
    timezone = await services.timezone_for(state["request"])

    now = datetime.now(pytz.UTC)

    try:
        events = calendar.list_events(now, now + timedelta(days=1))
    except Exception as e:
        logger.error(f"Error getting events: {e}")
        return {"response": _speak(EVENTS_UNAVAILABLE, EVENTS_UNAVAILABLE)}

    speech = render_event_count(len(events))
    pending = PendingEvents(
        events=[_event_digest(event) for event in events],
        timezone=timezone
    )

    return {
        "session": state["session"].model_copy(update={"pending": pending}),
        "response": _speak(speech, speech),
    }


async def confirm(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: confirm")
    session = state["session"]

    if not isinstance(session.pending, PendingEvents):
        return {"response": _speak(ACKNOWLEDGE, ACKNOWLEDGE)}

    speech = render_events(
        session.pending.events,
        session.pending.timezone or settings.default_timezone
    )

    return {
        "session": session.model_copy(update={"pending": None}),
        "response": _speak(speech, speech),
    }


async def decline(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    """Undo whatever the previous turn did, if it can be undone."""
    logger.info("Node: decline")
    services = _services(config)
    request = state["request"]
    session = state["session"]
    pending = session.pending
    update: Dict[str, Any] = {"pending": None}
    speech = UNDO_DECLINED

    if isinstance(pending, PendingPreference):
        preferences = remove_preference(session.preferences, pending.event_type)
        if request.user_id:
            services.preference_store.save(request.user_id, preferences)
        update["preferences"] = preferences
        speech = UNDONE
        logger.info(f"Removed preference for '{pending.event_type}'")

    elif isinstance(pending, PendingCreatedEvent):
        services.calendar_for(request).delete_event(pending.event_id)
        speech = UNDONE

    return {
        "session": session.model_copy(update=update),
        "response": _speak(speech, speech),
    }


async def set_preferences(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: set_preferences")
    services = _services(config)
    request = state["request"]
    session = state["session"]

    event_type = normalize_event_type(_required_slot(state, "eventType"))
    window, description = resolve_preference_window(
        _required_slot(state, "time"),
        request.slot("timeEnd")
    )

    preferences = apply_preference(session.preferences, event_type, window)

    if request.user_id:
        services.preference_store.save(request.user_id, preferences)
    else:
        logger.warning("No user id on request, preference kept for this session only")

    speech = PREFERENCE_SAVED.format(event_type=event_type, window=description)

    return {
        "session": session.model_copy(update={
            "preferences": preferences,
            "pending": PendingPreference(event_type=event_type),
        }),
        "response": _speak(speech),
    }


async def get_preferences(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: get_preferences")
    return {"response": _speak(render_preferences(state["session"].preferences))}


async def schedule_event(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    """
    Work out when the user is free on a day, inside the preferred window for
    the event type if one is stored.
    """
    logger.info("Node: schedule_event")
    services = _services(config)
    request = state["request"]
    session = state["session"]
    calendar = services.calendar_for(request)

    event_type = normalize_event_type(request.slot("eventType") or "")
    window = session.preferences.get(event_type, DEFAULT_WINDOW)

    timezone = await services.timezone_for(request)
    day = parse_date(request.slot("date"), timezone)

    events = calendar.list_events(
        localize_clock(day, window.start, timezone),
        localize_clock(day, window.end, timezone)
    )

    busy = busy_intervals(events, timezone, day)
    result = compute_availability(window, busy)
    speech = render_availability(result, window, len(busy))

    pending = PendingAvailability(date=day.isoformat(), by_period=result.by_period)

    return {
        "session": session.model_copy(update={"pending": pending}),
        "response": _speak(speech, ASK_EVENT_TIME),
    }


async def time_of_day(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    """Narrow a summarized availability down to one period of the day."""
    logger.info("Node: time_of_day")
    pending = state["session"].pending

    if not isinstance(pending, PendingAvailability):
        return {"response": _speak(NO_PENDING_AVAILABILITY, NO_PENDING_AVAILABILITY)}

    period = TimeOfDay.from_spoken(_required_slot(state, "timeOfDay"))
    speech = render_period_availability(period, pending.by_period.get(period, []))

    return {"response": _speak(speech, ASK_EVENT_TIME)}


async def add_event(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: add_event")
    services = _services(config)
    request = state["request"]
    session = state["session"]
    calendar = services.calendar_for(request)

    name = _required_slot(state, "eventName")
    timezone = await services.timezone_for(request)

    date_string = session.pending.date if isinstance(session.pending, PendingAvailability) else None
    day = parse_date(date_string, timezone)

    start = localize_clock(day, _required_slot(state, "time"), timezone)
    end = start + parse_duration(_required_slot(state, "duration"))

    created = calendar.create_event(name, start, end, timezone)

    speech = EVENT_ADDED.format(
        name=name,
        date=format_spoken_date(start),
        start=format_clock_24(start.strftime('%H:%M')),
        end=format_clock_24(end.strftime('%H:%M'))
    )

    return {
        "session": session.model_copy(update={
            "pending": PendingCreatedEvent(event_id=created['id']),
        }),
        "response": _speak(speech),
    }


async def recurring_event(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: recurring_event")
    services = _services(config)
    request = state["request"]
    calendar = services.calendar_for(request)

    name = _required_slot(state, "eventName")
    timezone = await services.timezone_for(request)

    start_day = parse_date(_required_slot(state, "startDate"), timezone)
    end_day = parse_date(_required_slot(state, "endDate"), timezone)
    weekday = request.slot("frequency") or start_day.strftime('%A')

    start = datetime.combine(start_day, time(0, 0))

    calendar.create_event(
        name,
        start,
        start,
        timezone,
        recurrence=[weekly_recurrence(end_day, weekday)]
    )

    return {"response": _speak(RECURRING_EVENT_ADDED)}


async def repeat(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: repeat")
    speech = state["session"].last_speech or NOTHING_TO_REPEAT
    return {"response": _speak(speech, speech)}


async def help_request(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: help_request")
    return {"response": _speak(HELP, HELP)}


async def stop(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: stop")
    return {"response": _speak(GOODBYE, should_end_session=True)}


async def fallback(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info("Node: fallback")
    return {"response": _speak(FALLBACK, FALLBACK)}


async def session_ended(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    logger.info(f"Session ended for user: {state['request'].user_id}")
    return {"response": SkillResponse()}


async def unhandled(state: SkillState, config: RunnableConfig) -> Dict[str, Any]:
    request = state["request"]
    raise UnhandledRequestError(
        f"No handler for {request.request_type} {request.intent_name or ''}".strip()
    )
