"""
Zoom API Client with Server-to-Server OAuth authentication

One client serves one page render: it exchanges the account credentials for
a token and lists a single page of the user's cloud recordings. Nothing is
cached between invocations and nothing is retried.
"""

import base64
import logging
import urllib.parse
from typing import Any

import requests

from zoomrecpage.exceptions import RecordingsFetchError, TokenRequestError

logger = logging.getLogger(__name__)

REQUEST_TIMEOUT = 30  # seconds
DEFAULT_PAGE_SIZE = 200


class ZoomClient:
    """Client for the two Zoom endpoints the recordings page needs"""

    def __init__(
        self,
        account_id: str,
        client_id: str,
        client_secret: str,
        *,
        base_url: str = "https://api.zoom.us/v2",
        token_url: str = "https://zoom.us/oauth/token",
        timeout: float = REQUEST_TIMEOUT,
    ):
        self.account_id = account_id
        self.client_id = client_id
        self.client_secret = client_secret
        self.base_url = base_url.rstrip("/")
        self.token_url = token_url.rstrip("/")
        self.timeout = timeout

    def __repr__(self) -> str:
        """
        String representation that excludes credentials

        Prevents accidental credential exposure in logs, tracebacks, and debugging
        """
        return (
            f"ZoomClient("
            f"base_url={self.base_url!r}, "
            f"token_url={self.token_url!r}, "
            f"account_id_set={bool(self.account_id)}, "
            f"client_id_set={bool(self.client_id)}"
            f")"
        )

    @classmethod
    def from_config(cls, config: Any) -> "ZoomClient":
        """Build a client from a validated Config"""
        return cls(
            str(config.zoom_account_id),
            str(config.zoom_client_id),
            str(config.zoom_client_secret),
            base_url=config.zoom_api_base_url,
            token_url=config.zoom_oauth_token_url,
        )

    def basic_credentials(self) -> str:
        """Base64 of ``client_id:client_secret`` for the Basic auth header"""
        credentials = f"{self.client_id}:{self.client_secret}"
        return base64.b64encode(credentials.encode()).decode()

    def get_access_token(self) -> str:
        """
        Exchange account credentials for a bearer token

        Raises:
            TokenRequestError: On network failure, non-2xx status or a body
                without ``access_token``
        """
        params = {"grant_type": "account_credentials", "account_id": self.account_id}
        headers = {"Authorization": f"Basic {self.basic_credentials()}"}

        try:
            response = requests.post(
                self.token_url,
                params=params,
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.Timeout as e:
            raise TokenRequestError(
                "Authentication timeout",
                details=f"Zoom OAuth server did not respond within {self.timeout} seconds",
            ) from e
        except requests.exceptions.RequestException as e:
            raise TokenRequestError(
                "OAuth token request failed",
                details=f"Could not reach Zoom OAuth server: {e}",
            ) from e

        if not _is_success(response):
            logger.error("Error getting Zoom token: %s %s", response.status_code, response.text)
            raise TokenRequestError(
                f"OAuth token request failed (HTTP {response.status_code})",
                details=response.text,
                status_code=response.status_code,
            )

        token_data = response.json()
        access_token = token_data.get("access_token") if isinstance(token_data, dict) else None
        if not access_token:
            raise TokenRequestError(
                "Invalid OAuth token response",
                details="Response did not contain required 'access_token' field",
                status_code=response.status_code,
            )

        logger.debug("Obtained Zoom access token")
        return str(access_token)

    def list_user_recordings(
        self,
        access_token: str,
        user_id: str = "me",
        page_size: int = DEFAULT_PAGE_SIZE,
    ) -> dict[str, Any]:
        """
        Fetch one page of a user's cloud recordings

        Args:
            access_token: Bearer token from get_access_token()
            user_id: Zoom user ID or email; ``me`` for the token's owner
            page_size: Upper bound on meetings returned

        Raises:
            RecordingsFetchError: On network failure or non-2xx status
        """
        endpoint = f"users/{urllib.parse.quote(user_id, safe='')}/recordings"
        url = f"{self.base_url}/{endpoint}"
        headers = {
            "Authorization": f"Bearer {access_token}",
            "Accept": "application/json",
        }

        try:
            response = requests.get(
                url,
                params={"page_size": page_size},
                headers=headers,
                timeout=self.timeout,
            )
        except requests.exceptions.RequestException as e:
            raise RecordingsFetchError(
                f"Network request failed: {type(e).__name__}",
                details=str(e),
            ) from e

        if not _is_success(response):
            logger.error("Error fetching recordings: %s %s", response.status_code, response.text)
            raise RecordingsFetchError(
                f"Zoom API error (HTTP {response.status_code})",
                details=response.text,
                status_code=response.status_code,
            )

        result: dict[str, Any] = response.json()
        return result


def _is_success(response: requests.Response) -> bool:
    return 200 <= response.status_code < 300
