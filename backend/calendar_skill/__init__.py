"""Voice skill backend for checking Google Calendar availability and scheduling events."""
