import os
from dataclasses import dataclass
from typing import Mapping, Optional

from dotenv import load_dotenv

DEFAULT_MODEL = "gemini-2.5-pro"
DEFAULT_PORT = 3000
DEFAULT_DB_PATH = "bubo_agent.db"


@dataclass(frozen=True)
class Config:
    """Configuration for BuboAgent, read once at process start."""

    # Firebase Realtime Database (service account)
    firebase_project_id: Optional[str] = None
    firebase_client_email: Optional[str] = None
    firebase_private_key: Optional[str] = None
    firebase_database_url: Optional[str] = None

    # Google OAuth client (Drive + Sheets on behalf of a user)
    google_client_id: Optional[str] = None
    google_client_secret: Optional[str] = None
    google_redirect_uri: Optional[str] = None
    google_refresh_token: Optional[str] = None

    # Gemini
    gemini_api_key: Optional[str] = None
    gemini_model: str = DEFAULT_MODEL
    google_cloud_project: Optional[str] = None
    google_cloud_location: str = "us-central1"

    # HTTP server
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT

    database_path: str = DEFAULT_DB_PATH
    log_level: str = "INFO"

    @property
    def firebase_enabled(self) -> bool:
        return bool(self.firebase_private_key)

    @classmethod
    def from_env(cls, environ: Optional[Mapping[str, str]] = None) -> "Config":
        """Build a Config from ``environ`` (defaults to ``os.environ`` + ``.env``)."""
        if environ is None:
            load_dotenv()
            environ = os.environ

        private_key = environ.get("FIREBASE_PRIVATE_KEY")
        if private_key:
            # Keys pasted into .env files usually carry literal "\n" sequences.
            private_key = private_key.replace("\\n", "\n")

        return cls(
            firebase_project_id=environ.get("FIREBASE_PROJECT_ID"),
            firebase_client_email=environ.get("FIREBASE_CLIENT_EMAIL"),
            firebase_private_key=private_key,
            firebase_database_url=environ.get("FIREBASE_DATABASE_URL"),
            google_client_id=environ.get("GOOGLE_CLIENT_ID"),
            google_client_secret=environ.get("GOOGLE_CLIENT_SECRET"),
            google_redirect_uri=environ.get("GOOGLE_REDIRECT_URI"),
            google_refresh_token=environ.get("GOOGLE_REFRESH_TOKEN") or None,
            gemini_api_key=environ.get("GOOGLE_GENERATIVE_AI_API_KEY"),
            gemini_model=environ.get("GEMINI_MODEL", DEFAULT_MODEL),
            google_cloud_project=environ.get("GOOGLE_CLOUD_PROJECT"),
            google_cloud_location=environ.get("GOOGLE_CLOUD_LOCATION", "us-central1"),
            host=environ.get("HOST", "0.0.0.0"),
            port=int(environ.get("PORT") or DEFAULT_PORT),
            database_path=environ.get("BUBO_DB_PATH", DEFAULT_DB_PATH),
            log_level=environ.get("LOG_LEVEL", "INFO"),
        )
