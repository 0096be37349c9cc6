from typing import TypedDict, Optional, List, Dict, Any, Literal, Union, Annotated
from pydantic import BaseModel, Field

from .envelope import SkillRequest, SkillResponse
from ..tools.availability import Interval
from ..utils.time_utils import TimeOfDay


class PendingEvents(BaseModel):
    """Upcoming events read out if the user answers yes."""
    previous_intent: Literal["get_events"] = "get_events"
    events: List[Dict[str, Any]] = Field(default_factory=list)
    timezone: Optional[str] = None


class PendingPreference(BaseModel):
    """Preference that a no removes again."""
    previous_intent: Literal["set_preferences"] = "set_preferences"
    event_type: str


class PendingAvailability(BaseModel):
    """Availability awaiting a time-of-day choice or a new event."""
    previous_intent: Literal["schedule_event"] = "schedule_event"
    date: str
    by_period: Dict[TimeOfDay, List[Interval]] = Field(default_factory=dict)


class PendingCreatedEvent(BaseModel):
    """Event that a no deletes again."""
    previous_intent: Literal["add_event"] = "add_event"
    event_id: str


PendingTurn = Annotated[
    Union[PendingEvents, PendingPreference, PendingAvailability, PendingCreatedEvent],
    Field(discriminator="previous_intent")
]


class SessionState(BaseModel):
    preferences: Dict[str, Interval] = Field(default_factory=dict)
    last_speech: str = ""
    pending: Optional[PendingTurn] = None

    @classmethod
    def from_attributes(cls, attributes: Optional[Dict[str, Any]]) -> "SessionState":
        return cls.model_validate(attributes or {})

    def to_attributes(self) -> Dict[str, Any]:
        return self.model_dump(mode="json")


class SkillState(TypedDict):
    request: SkillRequest
    session: SessionState
    response: Optional[SkillResponse]


def create_initial_state(request: SkillRequest, session: SessionState) -> SkillState:
    return SkillState(
        request=request,
        session=session,
        response=None
    )
