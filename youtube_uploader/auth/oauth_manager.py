"""
OAuth Manager

Credential provider for the upload facade.

One OAuthManager is shared by every call of a YouTubeUploader. It owns
the refreshable user credentials and hands each request its own
authorized HTTP transport, because httplib2.Http is not thread-safe
while the credentials themselves may be shared.

Token lifecycle:
    run_initial_auth()  -> consent in the browser, token.json written
    OAuthManager(...)   -> token.json loaded, refreshed when expired
    authorized_http()   -> fresh AuthorizedHttp per request
"""

import logging
import os
import threading
from typing import Optional

import google_auth_httplib2
import httplib2
from google.auth.transport.requests import Request
from google.oauth2.credentials import Credentials
from google_auth_oauthlib.flow import InstalledAppFlow

from youtube_uploader.constants import YOUTUBE_SCOPES

logger = logging.getLogger(__name__)


def _write_token(token_path: str, credentials: Credentials) -> None:
    with open(token_path, "w") as token_file:
        token_file.write(credentials.to_json())


class OAuthManager:
    """
    Shares one set of user credentials across concurrent requests.

    Refreshing is serialized with a lock so two threads that find the
    token expired at the same time refresh it once.
    """

    def __init__(self, client_secret_path: str, token_path: str):
        """
        Args:
            client_secret_path: OAuth client from Google Cloud Console
            token_path: token.json written by run_initial_auth()

        Raises:
            FileNotFoundError: If client_secret_path doesn't exist
            RuntimeError: If token.json is missing or cannot be refreshed
        """
        if not os.path.exists(client_secret_path):
            raise FileNotFoundError(f"Client secret file not found: {client_secret_path}")

        if not os.path.exists(token_path):
            raise RuntimeError(
                f"No token at {token_path}; run run_initial_auth() once to create it",
            )

        self.client_secret_path = client_secret_path
        self.token_path = token_path
        self._refresh_lock = threading.Lock()
        self.credentials: Optional[Credentials] = Credentials.from_authorized_user_file(
            token_path,
            YOUTUBE_SCOPES,
        )

        # Fail at construction rather than on the first API call
        self.get_credentials()

        logger.info(f"OAuth credentials loaded from {token_path}")

    def get_credentials(self) -> Credentials:
        """
        Return valid credentials, refreshing and persisting them if expired.

        Raises:
            RuntimeError: If the token is invalid and has no refresh token
        """
        with self._refresh_lock:
            creds = self.credentials

            if creds is not None and not creds.valid and creds.expired and creds.refresh_token:
                logger.info("Access token expired, refreshing...")
                creds.refresh(Request())
                self._persist(creds)

            if creds is None or not creds.valid:
                raise RuntimeError(
                    f"Credentials in {self.token_path} are invalid and cannot be refreshed; "
                    f"run run_initial_auth() again",
                )

            return creds

    def authorized_http(self) -> google_auth_httplib2.AuthorizedHttp:
        """
        Build a new authorized transport for a single request.

        The transport refreshes the shared credentials on 401, so only
        the connection pool is per request.
        """
        return google_auth_httplib2.AuthorizedHttp(
            self.get_credentials(),
            http=httplib2.Http(),
        )

    def _persist(self, credentials: Credentials) -> None:
        try:
            _write_token(self.token_path, credentials)
        except OSError as e:
            # The refreshed token stays valid in memory for this process
            logger.warning(f"Could not write refreshed token to {self.token_path}: {e}")


def run_initial_auth(
    client_secret_path: str,
    token_path: str,
    port: int = 8080,
) -> bool:
    """
    Run the installed-app consent flow once and store token.json.

    Returns:
        True if token.json was written

    Example:
        run_initial_auth("credentials/client_secret.json", "credentials/token.json")
    """
    try:
        flow = InstalledAppFlow.from_client_secrets_file(client_secret_path, YOUTUBE_SCOPES)
        logger.info(f"Waiting for browser consent on localhost:{port}")
        _write_token(token_path, flow.run_local_server(port=port))
    except Exception as e:
        logger.error(f"❌ Authentication failed: {e}")
        return False

    logger.info(f"✅ Token saved to {token_path}")
    return True
