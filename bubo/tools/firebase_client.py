"""
bubo/tools/firebase_client.py
=============================

Firebase Realtime Database access.

Availability
------------
The store is only initialised when ``FIREBASE_PRIVATE_KEY`` is configured.
Without it the store is constructed in an explicit *unavailable* state: every
read raises ``ServiceUnavailableError`` instead of touching an uninitialised
Firebase app.  Startup never fails because Firebase is missing.

A malformed key, on the other hand, raises from ``credentials.Certificate``
during bootstrap and aborts the process.
"""

import logging
from typing import Any, Optional

import firebase_admin
from firebase_admin import credentials, db

from ..config import Config
from .errors import ServiceUnavailableError

logger = logging.getLogger(__name__)

FIREBASE_APP_NAME = "bubo-agent"
_TOKEN_URI = "https://oauth2.googleapis.com/token"


def initialize_firebase_app(config: Config) -> firebase_admin.App:
    """Initialise (or reuse) the named Firebase app from service-account fields."""
    try:
        return firebase_admin.get_app(FIREBASE_APP_NAME)
    except ValueError:
        pass

    cert = credentials.Certificate({
        "type": "service_account",
        "project_id": config.firebase_project_id,
        "client_email": config.firebase_client_email,
        "private_key": config.firebase_private_key,
        "token_uri": _TOKEN_URI,
    })
    logger.info("Initialising Firebase app for project: %s", config.firebase_project_id)
    return firebase_admin.initialize_app(
        cert,
        {"databaseURL": config.firebase_database_url},
        name=FIREBASE_APP_NAME,
    )


class RealtimeStore:
    """Read access to the Realtime Database, tagged available or unavailable.

    Parameters
    ----------
    config:
        Populated ``Config``.
    app:
        An already initialised Firebase app.  When omitted, one is created
        from ``config`` if the private key is present.
    """

    def __init__(self, config: Config, app: Optional[firebase_admin.App] = None):
        self.config = config
        if app is None and config.firebase_enabled:
            app = initialize_firebase_app(config)
        self._app = app
        if self._app is None:
            logger.warning("FIREBASE_PRIVATE_KEY not set; realtime database disabled.")

    @property
    def available(self) -> bool:
        return self._app is not None

    def reference(self, path: str) -> db.Reference:
        if self._app is None:
            raise ServiceUnavailableError(
                "Firebase Realtime Database", "FIREBASE_PRIVATE_KEY is not configured"
            )
        return db.reference(path or "/", app=self._app)

    def read(self, path: str) -> Any:
        """Return the value stored at ``path`` (``None`` when absent)."""
        value = self.reference(path).get()
        logger.debug("Read realtime path %r (%s)", path, type(value).__name__)
        return value
