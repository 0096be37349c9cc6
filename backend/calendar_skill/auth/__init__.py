"""Account linking for the calendar provider."""

from .linking import AccountNotLinkedError, credentials_from_token, require_access_token

__all__ = ["AccountNotLinkedError", "credentials_from_token", "require_access_token"]
