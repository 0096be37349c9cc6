"""
Voice platform request and response envelopes.

Only the fields the skill reads are lifted out of the incoming JSON; the
outgoing envelope follows the platform's response format (version 1.0).
"""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field


class SkillRequest(BaseModel):
    request_type: str
    intent_name: Optional[str] = None
    slots: Dict[str, Optional[str]] = Field(default_factory=dict)
    session_new: bool = False
    session_attributes: Dict[str, Any] = Field(default_factory=dict)
    application_id: Optional[str] = None
    user_id: Optional[str] = None
    access_token: Optional[str] = None
    device_id: Optional[str] = None
    api_endpoint: Optional[str] = None
    api_access_token: Optional[str] = None

    @classmethod
    def from_envelope(cls, envelope: Dict[str, Any]) -> "SkillRequest":
        request = envelope.get("request") or {}
        session = envelope.get("session") or {}
        system = (envelope.get("context") or {}).get("System") or {}
        user = system.get("user") or session.get("user") or {}
        intent = request.get("intent") or {}

        slots = {
            name: (slot or {}).get("value")
            for name, slot in (intent.get("slots") or {}).items()
        }

        application = system.get("application") or session.get("application") or {}

        return cls(
            request_type=request.get("type", ""),
            intent_name=intent.get("name"),
            slots=slots,
            session_new=bool(session.get("new", False)),
            session_attributes=session.get("attributes") or {},
            application_id=application.get("applicationId"),
            user_id=user.get("userId"),
            access_token=user.get("accessToken"),
            device_id=(system.get("device") or {}).get("deviceId"),
            api_endpoint=system.get("apiEndpoint"),
            api_access_token=system.get("apiAccessToken"),
        )

    def slot(self, name: str) -> Optional[str]:
        return self.slots.get(name)


class SkillResponse(BaseModel):
    speech: Optional[str] = None
    reprompt: Optional[str] = None
    should_end_session: Optional[bool] = None
    link_account_card: bool = False

    def to_envelope(self, session_attributes: Optional[Dict[str, Any]] = None) -> Dict[str, Any]:
        response: Dict[str, Any] = {}

        if self.speech is not None:
            response["outputSpeech"] = {"type": "PlainText", "text": self.speech}

        if self.reprompt is not None:
            response["reprompt"] = {
                "outputSpeech": {"type": "PlainText", "text": self.reprompt}
            }

        if self.link_account_card:
            response["card"] = {"type": "LinkAccount"}

        if self.should_end_session is not None:
            response["shouldEndSession"] = self.should_end_session

        return {
            "version": "1.0",
            "sessionAttributes": session_attributes or {},
            "response": response,
        }
