"""
Core layer - Raw types and HTTP client.

This layer provides:
- Dataclasses for credentials and the response envelope
- Low-level HTTP client with the session token and execute contract
"""

from dynect_cli.core.client import APIClient, APIError, CLIError, ValidationError
from dynect_cli.core.types import Credentials, ResponseEnvelope

__all__ = [
    "APIClient",
    "APIError",
    "CLIError",
    "Credentials",
    "ResponseEnvelope",
    "ValidationError",
]
