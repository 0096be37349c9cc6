from langgraph.graph import StateGraph, START, END
from typing import Any, Dict, Optional

from .envelope import SkillRequest, SkillResponse
from .nodes import (
    add_event,
    confirm,
    decline,
    fallback,
    get_events,
    get_preferences,
    help_request,
    launch,
    recurring_event,
    repeat,
    schedule_event,
    session_ended,
    set_preferences,
    stop,
    time_of_day,
    unhandled,
)
from .prompts import ERROR
from .services import SkillServices
from .state import SessionState, SkillState, create_initial_state
from ..auth.linking import LINK_ACCOUNT_SPEECH, AccountNotLinkedError
from ..utils.logger import logger


REPEAT_INTENT = "AMAZON.RepeatIntent"

REQUEST_ROUTES = {
    "LaunchRequest": "launch",
    "SessionEndedRequest": "session_ended",
}

INTENT_ROUTES = {
    "GetEventsIntent": "get_events",
    "SetPreferencesIntent": "set_preferences",
    "GetPreferencesIntent": "get_preferences",
    "ScheduleEventIntent": "schedule_event",
    "TimeOfDayIntent": "time_of_day",
    "AddEventIntent": "add_event",
    "RecurringEventIntent": "recurring_event",
    "AMAZON.YesIntent": "confirm",
    "AMAZON.NoIntent": "decline",
    REPEAT_INTENT: "repeat",
    "AMAZON.HelpIntent": "help_request",
    "AMAZON.CancelIntent": "stop",
    "AMAZON.StopIntent": "stop",
    "AMAZON.FallbackIntent": "fallback",
}

NODES = {
    "launch": launch,
    "get_events": get_events,
    "set_preferences": set_preferences,
    "get_preferences": get_preferences,
    "schedule_event": schedule_event,
    "time_of_day": time_of_day,
    "add_event": add_event,
    "recurring_event": recurring_event,
    "confirm": confirm,
    "decline": decline,
    "repeat": repeat,
    "help_request": help_request,
    "stop": stop,
    "fallback": fallback,
    "session_ended": session_ended,
    "unhandled": unhandled,
}


def route_request(state: SkillState) -> str:
    request = state["request"]

    if request.request_type == "IntentRequest":
        node = INTENT_ROUTES.get(request.intent_name, "unhandled")
    else:
        node = REQUEST_ROUTES.get(request.request_type, "unhandled")

    logger.info(f"Routing: {request.request_type} {request.intent_name or ''} -> {node}")
    return node


def create_skill_graph():
    workflow = StateGraph(SkillState)

    for name, node in NODES.items():
        workflow.add_node(name, node)
        workflow.add_edge(name, END)

    workflow.add_conditional_edges(
        START,
        route_request,
        {name: name for name in NODES}
    )

    app = workflow.compile()
    logger.info("Compiled skill request graph")
    return app


skill_graph = create_skill_graph()


def link_account_response() -> SkillResponse:
    return SkillResponse(
        speech=LINK_ACCOUNT_SPEECH,
        link_account_card=True,
        should_end_session=True
    )


def error_response() -> SkillResponse:
    return SkillResponse(speech=ERROR, reprompt=ERROR)


async def run_skill(envelope: Dict[str, Any], services: SkillServices) -> Dict[str, Any]:
    """
    Handle one request envelope and build the response envelope.

    Every failure is turned into a spoken reply; this never raises for a
    malformed or unroutable request.
    """
    request: Optional[SkillRequest] = None
    session = SessionState()

    try:
        request = SkillRequest.from_envelope(envelope)
        session = SessionState.from_attributes(request.session_attributes)

        if request.session_new and request.user_id:
            session = session.model_copy(update={
                "preferences": services.preference_store.load(request.user_id)
            })

        result = await skill_graph.ainvoke(
            create_initial_state(request, session),
            config={"configurable": {"services": services}}
        )

        session = result["session"]
        response = result.get("response") or SkillResponse()

    except AccountNotLinkedError:
        response = link_account_response()

    except Exception as e:
        logger.error(f"Error handled: {e}", exc_info=True)
        response = error_response()

    if response.speech and (request is None or request.intent_name != REPEAT_INTENT):
        session = session.model_copy(update={"last_speech": response.speech})

    return response.to_envelope(session.to_attributes())
