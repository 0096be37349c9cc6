from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build
from googleapiclient.errors import HttpError
from datetime import date, datetime
from typing import List, Dict, Optional, Any

from ..auth.linking import credentials_from_token
from ..utils.config import settings
from ..utils.logger import logger


def weekly_recurrence(until: date, weekday: str) -> str:
    """
    Build a weekly RRULE.

    Args:
        until: Last date the event repeats on
        weekday: Day name such as "monday"; only the first two letters are used
    """
    day_code = weekday.strip().upper()[:2]
    return f"RRULE:FREQ=WEEKLY;UNTIL={until.strftime('%Y%m%d')};BYDAY={day_code}"


class GoogleCalendarTool:
    def __init__(self, credentials: Credentials, calendar_id: Optional[str] = None):
        self.credentials = credentials
        self.calendar_id = calendar_id or settings.calendar_id
        self.service = build('calendar', 'v3', credentials=credentials, cache_discovery=False)
        logger.info("Initialized Google Calendar tool")

    @classmethod
    def from_access_token(cls, access_token: str) -> "GoogleCalendarTool":
        return cls(credentials_from_token(access_token))

    def list_events(self, start_time: datetime, end_time: datetime) -> List[Dict[str, Any]]:
        """
        List single events between two instants, ordered by start time.
        """
        try:
            events_result = self.service.events().list(
                calendarId=self.calendar_id,
                timeMin=start_time.isoformat(),
                timeMax=end_time.isoformat(),
                singleEvents=True,
                orderBy='startTime'
            ).execute()

            events = events_result.get('items', [])
            logger.info(f"Retrieved {len(events)} events from calendar")
            return events

        except HttpError as error:
            logger.error(f"Error listing calendar events: {error}")
            raise

    def create_event(
        self,
        summary: str,
        start_time: datetime,
        end_time: datetime,
        timezone: str,
        recurrence: Optional[List[str]] = None
    ) -> Dict[str, Any]:
        """
        Create a new calendar event.

        Args:
            summary: Event title
            start_time: Wall-clock start in the given timezone
            end_time: Wall-clock end in the given timezone
            timezone: Timezone the wall-clock times are in
            recurrence: Optional RRULE lines

        Returns:
            Created event dictionary
        """
        event = {
            'summary': summary,
            'start': {
                'dateTime': start_time.replace(tzinfo=None).isoformat(timespec='seconds'),
                'timeZone': timezone,
            },
            'end': {
                'dateTime': end_time.replace(tzinfo=None).isoformat(timespec='seconds'),
                'timeZone': timezone,
            },
        }

        if recurrence:
            event['recurrence'] = recurrence

        try:
            created_event = self.service.events().insert(
                calendarId=self.calendar_id,
                body=event
            ).execute()

            logger.info(f"Created event: {summary} at {start_time}")
            return created_event

        except HttpError as error:
            logger.error(f"Error creating calendar event: {error}")
            raise

    def delete_event(self, event_id: str) -> None:
        try:
            self.service.events().delete(
                calendarId=self.calendar_id,
                eventId=event_id
            ).execute()

            logger.info(f"Deleted event: {event_id}")

        except HttpError as error:
            logger.error(f"Error deleting calendar event: {error}")
            raise
