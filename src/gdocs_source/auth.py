"""OAuth2 credentials for the Drive and Docs APIs.

A token cached at ``settings.token_path`` is reused while valid and refreshed
when it has expired; otherwise the installed-app flow runs in the browser and
its result is written back to the token file.
"""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING, Any

from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow
from loguru import logger

if TYPE_CHECKING:
    from gdocs_source.settings import Settings

GOOGLE_AUTH_URI = "https://accounts.google.com/o/oauth2/auth"
GOOGLE_TOKEN_URI = "https://oauth2.googleapis.com/token"


def client_config(settings: Settings) -> dict[str, Any]:
    """Build an installed-app client config from settings."""
    return {
        "installed": {
            "client_id": settings.client_id,
            "client_secret": settings.client_secret,
            "redirect_uris": list(settings.redirect_uris),
            "auth_uri": GOOGLE_AUTH_URI,
            "token_uri": GOOGLE_TOKEN_URI,
        }
    }


def load_cached_credentials(settings: Settings) -> Credentials | None:
    """Return the credentials stored at the token path, if any."""
    token_path = Path(settings.token_path)
    if not token_path.exists():
        return None
    creds: Credentials = Credentials.from_authorized_user_file(
        str(token_path), settings.scopes
    )
    return creds


def get_credentials(settings: Settings) -> Credentials:
    """Return valid credentials, refreshing or running the OAuth flow as needed.

    This blocks on the network (and on the user, for the interactive flow).
    """
    creds = load_cached_credentials(settings)
    if creds is not None and creds.valid:
        return creds

    if creds is not None and creds.expired and creds.refresh_token:
        logger.info("Refreshing cached Google access token")
        creds.refresh(Request())
    else:
        logger.info("No usable token at {}; starting OAuth flow", settings.token_path)
        flow = InstalledAppFlow.from_client_config(
            client_config(settings), scopes=list(settings.scopes)
        )
        creds = flow.run_local_server(
            port=0, access_type=settings.access_type, prompt="consent"
        )

    token_path = Path(settings.token_path)
    token_path.parent.mkdir(parents=True, exist_ok=True)
    token_path.write_text(creds.to_json(), encoding="utf-8")
    logger.debug("Saved Google token to {}", token_path)
    return creds


def access_token(settings: Settings) -> str:
    """Return a bearer token for the Drive and Docs APIs."""
    token: str = get_credentials(settings).token
    return token
