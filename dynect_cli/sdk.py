"""
Dynect SDK - High-level client with per-resource operations.

Every operation is one execute() call on the core APIClient. Mutating
operations return True/False; read operations return the response data or
False. Nothing here raises for a failed call.
"""

import builtins
from collections.abc import Mapping
from typing import Any

from dynect_cli.core.client import DEFAULT_TIMEOUT, APIClient
from dynect_cli.core.types import Credentials, ResponseEnvelope

DEFAULT_ZONE_TTL = 3600
DEFAULT_RECORD_TTL = 0


def _succeeded(envelope: ResponseEnvelope | None) -> bool:
    return envelope is not None and envelope.is_success


def _data_or_false(envelope: ResponseEnvelope | None) -> Any:
    """Return the envelope's data on success, else False."""
    if not _succeeded(envelope):
        return False
    return envelope.data


def _strip_uris(entries: builtins.list[Any], prefix: str) -> builtins.list[str]:
    """Turn "/REST/<Type>/.../<id>/" URIs into bare ids."""
    return [str(entry).replace(prefix, "", 1).rstrip("/") for entry in entries]


class DynectClient:
    """
    High-level Dynect API client.

    Example:
        client = DynectClient(Credentials("acme", "ops", "secret"))
        if client.login():
            client.zones.create("hostmaster@example.com", "example.com")
            client.arecords.add("example.com", "www.example.com", "192.0.2.10")
            client.zones.publish("example.com")
            client.logout()

    """

    def __init__(
        self,
        credentials: Credentials | Mapping[str, Any] | None = None,
        base_url: str | None = None,
        timeout: int = DEFAULT_TIMEOUT,
    ):
        """
        Initialize the Dynect client.

        Args:
            credentials: Session credentials (or DYNECT_* env vars)
            base_url: API base URL (or DYNECT_BASE_URL env var)
            timeout: Request timeout in seconds

        """
        self._client = APIClient(credentials=credentials, base_url=base_url, timeout=timeout)

        # Sub-clients for different resources
        self.zones = ZoneOperations(self._client)
        self.nodes = NodeOperations(self._client)
        self.arecords = ARecordOperations(self._client)
        self.cnames = CNAMEOperations(self._client)

    def login(self) -> bool:
        """Log in and keep the session token."""
        return self._client.login()

    def logout(self) -> bool:
        """End the remote session (the local token is kept)."""
        return self._client.logout()

    def execute(
        self,
        resource: str,
        verb: str,
        payload: Mapping[str, Any] | None = None,
    ) -> ResponseEnvelope | None:
        """Make a raw call; see APIClient.execute."""
        return self._client.execute(resource, verb, payload)

    @property
    def token(self) -> str | None:
        """Get the current session token."""
        return self._client.token

    @property
    def result(self) -> str:
        """Get the raw body of the most recent call."""
        return self._client.result


# =============================================================================
# Zone Operations
# =============================================================================


class ZoneOperations:
    """Operations for managing zones."""

    PREFIX = "/REST/Zone/"

    def __init__(self, client: APIClient):
        self._client = client

    def create(self, contact: str, name: str, ttl: int = DEFAULT_ZONE_TTL) -> bool:
        """
        Create a new zone.

        Args:
            contact: Email address of the zone's contact
            name: Zone name
            ttl: Default TTL for the zone

        Returns:
            True on success. False without calling the API if contact or name is empty.

        """
        if not contact or not name:
            return False
        envelope = self._client.execute(f"Zone/{name}", "POST", {"rname": contact, "zone": name, "ttl": ttl})
        return _succeeded(envelope)

    def delete(self, zone: str) -> bool:
        """Delete a zone."""
        return _succeeded(self._client.execute(f"Zone/{zone}", "DELETE"))

    def publish(self, zone: str) -> bool:
        """Publish pending changes to a zone."""
        return _succeeded(self._client.execute(f"Zone/{zone}", "PUT", {"publish": True}))

    def freeze(self, zone: str) -> bool:
        """Freeze a zone, blocking further changes."""
        return _succeeded(self._client.execute(f"Zone/{zone}", "PUT", {"freeze": True}))

    def thaw(self, zone: str) -> bool:
        """Thaw a frozen zone, permitting changes."""
        return _succeeded(self._client.execute(f"Zone/{zone}", "PUT", {"thaw": True}))

    def get(self, zone: str) -> Any:
        """
        Get details of a zone.

        Returns:
            The zone data, or False

        """
        return _data_or_false(self._client.execute(f"Zone/{zone}", "GET"))

    def list(self) -> builtins.list[str] | bool:
        """
        List zone names.

        Returns:
            Zone names with the URI prefix removed, or False

        """
        envelope = self._client.execute("Zone", "GET")
        if not _succeeded(envelope) or not isinstance(envelope.data, builtins.list):
            return False
        return _strip_uris(envelope.data, self.PREFIX)


# =============================================================================
# Node Operations
# =============================================================================


class NodeOperations:
    """Operations for nodes (named positions in a zone)."""

    def __init__(self, client: APIClient):
        self._client = client

    def delete(self, zone: str, fqdn: str) -> bool:
        """Delete a node, its records, and every node below it."""
        return _succeeded(self._client.execute(f"Node/{zone}/{fqdn}", "DELETE"))

    def list(self, zone: str, fqdn: str = "") -> Any:
        """
        List the nodes in a zone.

        Args:
            zone: Zone to query
            fqdn: Optional node to start from

        Returns:
            The node list data, or False

        """
        resource = f"NodeList/{zone}"
        if fqdn:
            resource = f"{resource}/{fqdn}"
        return _data_or_false(self._client.execute(resource, "GET"))


# =============================================================================
# Record Operations
# =============================================================================


class _RecordOperations:
    """Shared shape of the per-type record endpoints."""

    record_type = ""

    def __init__(self, client: APIClient):
        self._client = client

    def _resource(self, zone: str, fqdn: str, record_id: str | int = "") -> str:
        resource = f"{self.record_type}/{zone}/{fqdn}"
        if record_id != "":
            resource = f"{resource}/{record_id}"
        return resource

    def _add(self, zone: str, fqdn: str, rdata: dict[str, Any], ttl: int) -> bool:
        envelope = self._client.execute(self._resource(zone, fqdn), "POST", {"rdata": rdata, "ttl": ttl})
        return _succeeded(envelope)

    def delete(self, zone: str, fqdn: str, record_id: str | int) -> bool:
        """Delete a record by id. False without calling the API if the id is empty."""
        if record_id in ("", None):
            return False
        return _succeeded(self._client.execute(self._resource(zone, fqdn, record_id), "DELETE"))

    def get(self, zone: str, fqdn: str, record_id: str | int) -> Any:
        """Get a record's data, or False. False without calling the API if the id is empty."""
        if record_id in ("", None):
            return False
        return self._get(zone, fqdn, record_id)

    def _get(self, zone: str, fqdn: str, record_id: str | int) -> Any:
        return _data_or_false(self._client.execute(self._resource(zone, fqdn, record_id), "GET"))

    def list(self, zone: str, fqdn: str) -> builtins.list[str] | bool:
        """
        List the record ids at an FQDN.

        Returns:
            Record ids, or False. An empty result is also False.

        """
        envelope = self._client.execute(self._resource(zone, fqdn), "GET")
        if not _succeeded(envelope) or not envelope.data:
            return False
        if not isinstance(envelope.data, builtins.list):
            return False
        return _strip_uris(envelope.data, f"/REST/{self._resource(zone, fqdn)}/")


class ARecordOperations(_RecordOperations):
    """Operations for A records."""

    record_type = "ARecord"

    def add(self, zone: str, fqdn: str, ip: str, ttl: int = DEFAULT_RECORD_TTL) -> bool:
        """
        Create an A record.

        Args:
            zone: Zone containing the record
            fqdn: Name of the record
            ip: IPv4 address
            ttl: Record TTL (0 uses the zone default)

        """
        return self._add(zone, fqdn, {"address": ip}, ttl)

    def get(self, zone: str, fqdn: str, record_id: str | int = "") -> Any:
        """Get an A record's data (all records at the FQDN when no id is given), or False."""
        return self._get(zone, fqdn, "" if record_id is None else record_id)


class CNAMEOperations(_RecordOperations):
    """Operations for CNAME records."""

    record_type = "CNAMERecord"

    def add(self, zone: str, fqdn: str, cname: str, ttl: int = DEFAULT_RECORD_TTL) -> bool:
        """
        Create a CNAME record.

        Args:
            zone: Zone containing the record
            fqdn: Name of the alias
            cname: Canonical name the alias points to
            ttl: Record TTL (0 uses the zone default)

        """
        return self._add(zone, fqdn, {"cname": cname}, ttl)
