GREETING = "Hi there! I can help you schedule an event or check if you have any upcoming events."

PREFERENCE_HINT = " You can let me know if you prefer to schedule certain types of events at certain times."

HELP = (
    "Hi there! I can help you schedule an event or check if you have any upcoming events. "
    "You can also let me know if you prefer to schedule certain types of events at certain times."
)

FALLBACK = (
    "Sorry, I don't know about that. "
    "I can help you schedule an event or tell you your upcoming events."
)

GOODBYE = "Goodbye!"

ERROR = "Sorry, I had trouble doing what you asked. Please try again."

ASK_EVENT_TIME = "What time would you like to schedule the event for?"

ASK_PERIOD = "Which would you prefer?"

WHOLE_DAY_AVAILABLE = f"You are available for the whole day. {ASK_EVENT_TIME}"

WINDOW_AVAILABLE = "You are available from {start} to {end}. " + ASK_EVENT_TIME

NO_AVAILABILITY = "You have no availability today."

NO_PERIOD_AVAILABILITY = "You don't have any availability in the {period}."

NO_PENDING_AVAILABILITY = (
    "I haven't checked your availability yet. "
    "Ask me to schedule an event first."
)

EVENTS_UNAVAILABLE = "Sorry, I couldn't get your upcoming events right now."

NO_UPCOMING_EVENTS = "You have no upcoming events."

NO_PREFERENCES = "You have no preferences."

PREFERENCE_SAVED = "Okay, I'll remember that you prefer {event_type} events to be {window}."

EVENT_ADDED = "Okay, I added {name} to your calendar for {date} from {start} to {end}."

RECURRING_EVENT_ADDED = "Okay, I've added the event to your calendar."

ACKNOWLEDGE = "Okay."

UNDO_DECLINED = "Okay"

UNDONE = "Okay, I'll undo that"

NOTHING_TO_REPEAT = "Sorry, I don't have anything to repeat."
