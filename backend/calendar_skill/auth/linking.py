from google.oauth2.credentials import Credentials
from typing import Optional

from ..utils.logger import logger


LINK_ACCOUNT_SPEECH = "Please use the Alexa app to link your Google Account."


class AccountNotLinkedError(Exception):
    """Raised when a request needs the calendar but carries no linked-account token."""


def require_access_token(access_token: Optional[str]) -> str:
    if not access_token:
        logger.warning("Request has no linked account token")
        raise AccountNotLinkedError(LINK_ACCOUNT_SPEECH)

    return access_token


def credentials_from_token(access_token: Optional[str]) -> Credentials:
    """
    Build Google credentials from the token the voice platform obtained
    through account linking. The platform refreshes the token, so no refresh
    token is kept here.
    """
    return Credentials(token=require_access_token(access_token))
