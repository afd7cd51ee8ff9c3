"""
Core HTTP client for the Dynect REST API.

Handles the session token, request/response, and error handling. Every
failure (transport, HTTP, malformed body) is folded into a ``None`` result
instead of an exception.
"""

import http.client
import json
import logging
import os
import urllib.error
import urllib.request
from collections.abc import Mapping
from typing import Any

from dynect_cli.core.types import Credentials, ResponseEnvelope

logger = logging.getLogger(__name__)

# Configuration
DEFAULT_BASE_URL = "https://api2.dynect.net/REST"
DEFAULT_TIMEOUT = 60

VERBS = ("GET", "POST", "PUT", "DELETE")


class CLIError(Exception):
    """Base error class for CLI errors."""

    def __init__(self, message: str, details: dict | None = None):
        super().__init__(message)
        self.message = message
        self.details = details or {}

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result: dict[str, Any] = {"error": self.message}
        if self.details:
            result["details"] = self.details
        return result


class APIError(CLIError):
    """An operation the API reported as failed (or that never got a response)."""

    def __init__(self, message: str, raw: str = "", details: dict | None = None):
        super().__init__(message, details)
        self.raw = raw

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for JSON output."""
        result = super().to_dict()
        if self.raw:
            result["response"] = self.raw
        return result


class ValidationError(CLIError):
    """Validation error for local input/configuration issues (not API errors)."""


class APIClient:
    """
    Low-level HTTP client for the Dynect REST API.

    Handles:
    - Session login/logout and the Auth-Token header
    - HTTP methods (GET, POST, PUT, DELETE) through execute()
    - Response envelope parsing

    The token and the last raw body are plain attributes with no locking;
    use one client per logical session.
    """

    def __init__(
        self,
        credentials: Credentials | Mapping[str, Any] | None = None,
        base_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the API client.

        Args:
            credentials: Session credentials, sent as-is to the login endpoint
                (or DYNECT_CUSTOMER_NAME / DYNECT_USER_NAME / DYNECT_PASSWORD env vars)
            base_url: API base URL (or DYNECT_BASE_URL env var)
            timeout: Request timeout in seconds

        """
        if credentials is None:
            credentials = Credentials.from_env()
        self.credentials = credentials
        self.base_url = (base_url or os.environ.get("DYNECT_BASE_URL", DEFAULT_BASE_URL)).rstrip("/")
        self.timeout = timeout
        self.token: str | None = None
        # Raw body of the most recent call
        self.result = ""

    def _credentials_payload(self) -> dict[str, Any]:
        if isinstance(self.credentials, Credentials):
            return self.credentials.to_dict()
        return dict(self.credentials)

    def _build_url(self, resource: str) -> str:
        """Build full URL from a resource path, used verbatim."""
        return f"{self.base_url}/{resource}/"

    def _send(self, req: urllib.request.Request) -> str:
        """Send a request and return the body, whatever the HTTP status."""
        try:
            with urllib.request.urlopen(req, timeout=self.timeout) as response:
                return response.read().decode("utf-8", errors="replace")

        except urllib.error.HTTPError as e:
            # Error statuses still carry a JSON envelope
            logger.debug("HTTP %s for %s %s", e.code, req.get_method(), req.full_url)
            try:
                return e.read().decode("utf-8", errors="replace")
            except (OSError, http.client.HTTPException):
                return ""

        except urllib.error.URLError as e:
            logger.warning("Connection error for %s %s: %s", req.get_method(), req.full_url, e.reason)

        except (OSError, http.client.HTTPException) as e:
            # TimeoutError and socket errors land here
            logger.warning("Transport error for %s %s: %s", req.get_method(), req.full_url, e)

        except UnicodeError as e:
            # http.client only sends ASCII request lines and latin-1 headers
            logger.warning("Cannot encode request %s %s: %s", req.get_method(), req.full_url, e)

        return ""

    def execute(
        self,
        resource: str,
        verb: str,
        payload: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope | None:
        """
        Make a call to the API.

        Args:
            resource: Resource path (e.g., "Zone/example.com")
            verb: HTTP method (GET, POST, PUT, DELETE)
            payload: Request body, sent as JSON only when non-empty

        Returns:
            Parsed response envelope, or None if the call failed or the body
            could not be parsed. The raw body is kept in ``self.result``.

        """
        verb = verb.upper()
        if verb not in VERBS:
            raise ValueError(f"Unsupported HTTP verb: {verb}")

        self.result = ""

        url = self._build_url(resource)
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Auth-Token"] = self.token

        body = json.dumps(payload).encode("utf-8") if payload else None

        logger.debug("%s %s", verb, url)
        req = urllib.request.Request(url, data=body, headers=headers, method=verb)
        self.result = self._send(req)

        envelope = ResponseEnvelope.parse(self.result)
        if envelope is None and self.result:
            logger.warning("Unparseable response from %s %s", verb, url)
        return envelope

    # =========================================================================
    # Session
    # =========================================================================

    def login(self) -> bool:
        """
        Log in and keep the session token for later calls.

        Returns:
            True on success, False otherwise (the token is left unchanged)

        """
        envelope = self.execute("Session", "POST", self._credentials_payload())
        if envelope is None or not envelope.is_success:
            return False
        token = envelope.data.get("token") if isinstance(envelope.data, dict) else None
        if not token:
            logger.warning("Login succeeded without a token in the response")
            return False
        self.token = token
        return True

    def logout(self) -> bool:
        """
        End the remote session.

        The stored token is not cleared and is still sent on later calls.
        """
        envelope = self.execute("Session", "DELETE")
        return envelope is not None and envelope.is_success

    @property
    def is_authenticated(self) -> bool:
        """Check if a session token is held."""
        return bool(self.token)
