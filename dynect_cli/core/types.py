"""
Core types for the Dynect REST API.

These dataclasses describe the login credentials and the JSON envelope that
wraps every API response.
"""

import json
import os
from dataclasses import dataclass, field
from typing import Any

SUCCESS = "success"

# =============================================================================
# Credentials
# =============================================================================


@dataclass
class Credentials:
    """Login credentials for a Dynect session."""

    customer_name: str
    user_name: str
    password: str

    @classmethod
    def from_env(cls) -> "Credentials":
        """Create from DYNECT_* environment variables (missing values are empty)."""
        return cls(
            customer_name=os.environ.get("DYNECT_CUSTOMER_NAME", ""),
            user_name=os.environ.get("DYNECT_USER_NAME", ""),
            password=os.environ.get("DYNECT_PASSWORD", ""),
        )

    @property
    def is_complete(self) -> bool:
        """Check if every field is set."""
        return bool(self.customer_name and self.user_name and self.password)

    def to_dict(self) -> dict[str, Any]:
        """Convert to dict for the Session endpoint."""
        return {
            "customer_name": self.customer_name,
            "user_name": self.user_name,
            "password": self.password,
        }


# =============================================================================
# Response Envelope
# =============================================================================


@dataclass
class ResponseEnvelope:
    """The envelope wrapped around every Dynect response."""

    status: str
    data: Any = None
    job_id: int | None = None
    msgs: list[dict[str, Any]] = field(default_factory=list)

    @property
    def is_success(self) -> bool:
        """Check if the API reported success."""
        return self.status == SUCCESS

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "ResponseEnvelope":
        """Create from API response dict."""
        status = data.get("status")
        return cls(
            status=status if isinstance(status, str) else "",
            data=data.get("data"),
            job_id=data.get("job_id"),
            msgs=data.get("msgs") or [],
        )

    @classmethod
    def parse(cls, body: str) -> "ResponseEnvelope | None":
        """
        Parse a raw response body.

        Returns None for an empty body, invalid JSON, or JSON that is not an object.
        """
        if not body:
            return None
        try:
            decoded = json.loads(body)
        except json.JSONDecodeError:
            return None
        if not isinstance(decoded, dict):
            return None
        return cls.from_dict(decoded)
