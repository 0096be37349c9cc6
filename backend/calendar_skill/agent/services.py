from typing import Callable, Optional

from .envelope import SkillRequest
from ..auth.linking import require_access_token
from ..tools.calendar import GoogleCalendarTool
from ..tools.preferences import PreferenceStore
from ..tools.timezone import DeviceSettingsClient


class SkillServices:
    """External collaborators the intent handlers talk to."""

    def __init__(
        self,
        preference_store: Optional[PreferenceStore] = None,
        device_settings: Optional[DeviceSettingsClient] = None,
        calendar_factory: Callable[[str], GoogleCalendarTool] = GoogleCalendarTool.from_access_token
    ):
        self.preference_store = preference_store or PreferenceStore()
        self.device_settings = device_settings or DeviceSettingsClient()
        self.calendar_factory = calendar_factory

    def calendar_for(self, request: SkillRequest) -> GoogleCalendarTool:
        return self.calendar_factory(require_access_token(request.access_token))

    async def timezone_for(self, request: SkillRequest) -> str:
        return await self.device_settings.get_timezone(
            request.api_endpoint,
            request.device_id,
            request.api_access_token
        )
