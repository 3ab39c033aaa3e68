"""
Obtain a Google OAuth refresh token for BuboAgent.

Reads GOOGLE_CLIENT_ID / GOOGLE_CLIENT_SECRET / GOOGLE_REDIRECT_URI from the
environment (or .env), runs the consent flow and prints the refresh token to
put in GOOGLE_REFRESH_TOKEN.

Usage:
    python scripts/setup_google_user_auth.py            # paste-the-code flow
    python scripts/setup_google_user_auth.py --local    # local browser flow
"""

import sys

from google_auth_oauthlib.flow import Flow, InstalledAppFlow

from bubo.config import Config
from bubo.tools.google_client import SCOPES, client_config


def _print_token(creds):
    if not creds.refresh_token:
        print("\n❌ Google did not return a refresh token.")
        print("Revoke the app's access at https://myaccount.google.com/permissions and retry.")
        sys.exit(1)
    print("\n✅ Authentication Successful!")
    print("Add this line to your .env:\n")
    print(f"GOOGLE_REFRESH_TOKEN={creds.refresh_token}")


def setup_auth(local: bool = False):
    config = Config.from_env()
    if not config.google_client_id or not config.google_client_secret:
        print("\n❌ ERROR: GOOGLE_CLIENT_ID and GOOGLE_CLIENT_SECRET must be set.")
        print("1. Go to Google Cloud Console > APIs & Services > Credentials")
        print("2. Create an OAuth Client ID")
        print("3. Put its id and secret in .env")
        sys.exit(1)

    if local:
        installed = {"installed": client_config(config)["web"]}
        flow = InstalledAppFlow.from_client_config(installed, SCOPES)
        print("\nStarting Login Flow...")
        print("Please check your browser to authorize the app.")
        _print_token(flow.run_local_server(port=0, access_type="offline", prompt="consent"))
        return

    if not config.google_redirect_uri:
        print("\n❌ ERROR: GOOGLE_REDIRECT_URI is not set (or use --local).")
        sys.exit(1)

    flow = Flow.from_client_config(
        client_config(config), scopes=SCOPES, redirect_uri=config.google_redirect_uri
    )
    auth_url, _ = flow.authorization_url(access_type="offline", prompt="consent")
    print("\nOpen this URL, approve access, then paste the 'code' parameter from the redirect:\n")
    print(auth_url)
    code = input("\ncode: ").strip()
    flow.fetch_token(code=code)
    _print_token(flow.credentials)


if __name__ == "__main__":
    setup_auth(local="--local" in sys.argv[1:])
