"""
bubo/tools/google_client.py
===========================

Google Drive and Google Sheets access on behalf of a user.

Authentication
--------------
Both APIs share one set of OAuth **user** credentials built from
``GOOGLE_CLIENT_ID`` / ``GOOGLE_CLIENT_SECRET``.  When
``GOOGLE_REFRESH_TOKEN`` is configured it is applied to the credentials, and
``google-auth`` refreshes access tokens from it on first use.  Without it the
services are still built, but any call that needs delegated access fails with
a ``RefreshError`` at call time.

The refresh token is obtained once with ``scripts/setup_google_user_auth.py``,
which uses ``client_config()`` (including ``GOOGLE_REDIRECT_URI``).

Building the services is local: ``googleapiclient`` ships static discovery
documents for Drive v3 and Sheets v4, so bootstrap makes no network call.
"""

import logging
from typing import Any, Dict, List

from google.oauth2.credentials import Credentials
from googleapiclient.discovery import build

from ..config import Config

logger = logging.getLogger(__name__)

SCOPES = [
    "https://www.googleapis.com/auth/drive.readonly",
    "https://www.googleapis.com/auth/spreadsheets.readonly",
]
TOKEN_URI = "https://oauth2.googleapis.com/token"
AUTH_URI = "https://accounts.google.com/o/oauth2/auth"

DRIVE_PAGE_SIZE = 10
_FILE_FIELDS = "files(id, name, mimeType, modifiedTime)"


def client_config(config: Config) -> Dict[str, Any]:
    """Return the OAuth client description in ``client_secret.json`` shape."""
    redirect_uris = [config.google_redirect_uri] if config.google_redirect_uri else []
    return {
        "web": {
            "client_id": config.google_client_id,
            "client_secret": config.google_client_secret,
            "redirect_uris": redirect_uris,
            "auth_uri": AUTH_URI,
            "token_uri": TOKEN_URI,
        }
    }


def build_user_credentials(config: Config) -> Credentials:
    """Build OAuth user credentials, applying the stored refresh token if any."""
    creds = Credentials(
        token=None,
        refresh_token=config.google_refresh_token,
        client_id=config.google_client_id,
        client_secret=config.google_client_secret,
        token_uri=TOKEN_URI,
        scopes=SCOPES,
    )
    if config.google_refresh_token:
        logger.info("Google OAuth client initialised with stored refresh token.")
    else:
        logger.warning("GOOGLE_REFRESH_TOKEN not set; Drive and Sheets calls will fail.")
    return creds


class GoogleWorkspace:
    """Wraps the Drive v3 and Sheets v4 APIs.

    Parameters
    ----------
    config:
        Populated ``Config``.
    credentials, drive, sheets:
        Optional pre-built objects; built from ``config`` when omitted.
    """

    def __init__(self, config: Config, credentials=None, drive=None, sheets=None):
        self.config = config
        self.credentials = credentials or build_user_credentials(config)
        self.drive = drive or build("drive", "v3", credentials=self.credentials, cache_discovery=False)
        self.sheets = sheets or build("sheets", "v4", credentials=self.credentials, cache_discovery=False)

    # ── Drive ─────────────────────────────────────────────────────────────────

    def list_files(self, page_size: int = DRIVE_PAGE_SIZE) -> List[Dict[str, Any]]:
        """List at most ``page_size`` files from the user's Drive.

        Returns
        -------
        List[Dict[str, Any]]
            File metadata dicts with ``id``, ``name``, ``mimeType`` and
            ``modifiedTime``.
        """
        page_size = min(page_size, DRIVE_PAGE_SIZE)
        result = self.drive.files().list(pageSize=page_size, fields=_FILE_FIELDS).execute()
        files = result.get("files", [])
        return files[:page_size]

    # ── Sheets ────────────────────────────────────────────────────────────────

    def read_range(self, spreadsheet_id: str, range_name: str) -> List[List[Any]]:
        """Read a range from a Google Sheet.

        Parameters
        ----------
        spreadsheet_id:
            The Sheet ID from the URL.
        range_name:
            A1 notation range, e.g. ``"Sheet1!A1:Z100"``.
        """
        result = self.sheets.spreadsheets().values().get(
            spreadsheetId=spreadsheet_id, range=range_name
        ).execute()
        return result.get("values", [])
