"""
Dynect CLI - Three-layer client for the Dynect REST API.

Layers:
- core: Raw types and HTTP client (session + execute)
- sdk: High-level DynectClient with per-resource operations
- cli: Command-line interface
"""

from dynect_cli.sdk import DynectClient

__version__ = "0.1.0"
__all__ = ["DynectClient"]
