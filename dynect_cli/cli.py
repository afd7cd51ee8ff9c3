"""
Dynect CLI - Command-line interface.

This layer provides the user-facing commands, using the SDK layer for all
operations. It handles:
- Argument parsing
- Credentials from the environment (and .env)
- One login/logout around each command
- TTY detection for human vs machine output
"""

import argparse
import json
import logging
import sys
from typing import Any

from dotenv import load_dotenv

from dynect_cli.core.client import APIError, CLIError, ValidationError
from dynect_cli.core.types import Credentials
from dynect_cli.sdk import DEFAULT_RECORD_TTL, DEFAULT_ZONE_TTL, DynectClient

logger = logging.getLogger(__name__)

# =============================================================================
# Output Helpers
# =============================================================================


def is_tty() -> bool:
    """Check if stdout is a TTY (human) or pipe (machine)."""
    return sys.stdout.isatty()


def json_output(data: Any, pretty: bool = False) -> None:
    """Print JSON output."""
    indent = 2 if pretty or is_tty() else None
    print(json.dumps(data, indent=indent, default=str))


def error_output(error: CLIError) -> None:
    """Print error and exit."""
    json_output(error.to_dict())
    sys.exit(1)


def success_output(data: Any) -> None:
    """Print success output."""
    json_output(data)


def list_output(items: list[str] | None, header: str) -> None:
    """Print a list of ids, one per line for humans or as JSON for pipes."""
    items = items or []
    if is_tty():
        print(header)
        print("-" * len(header))
        for item in items:
            print(item)
        if not items:
            print("(none)")
    else:
        success_output({"data": items})


def require(client: DynectClient, result: Any, action: str) -> Any:
    """Turn a False result into an APIError carrying the raw response."""
    if result is False:
        raise APIError(f"{action} failed", raw=client.result)
    return result


# =============================================================================
# CLI Commands
# =============================================================================


def cmd_login(client: DynectClient, args: argparse.Namespace) -> None:
    """Verify the configured credentials."""
    success_output({"authenticated": client.token is not None})


def cmd_zone_list(client: DynectClient, args: argparse.Namespace) -> None:
    """List zones."""
    zones = require(client, client.zones.list(), "Zone list")
    list_output(zones, "Zone")


def cmd_zone_get(client: DynectClient, args: argparse.Namespace) -> None:
    """Get zone details."""
    success_output(require(client, client.zones.get(args.zone), f"Zone get {args.zone}"))


def cmd_zone_create(client: DynectClient, args: argparse.Namespace) -> None:
    """Create a zone."""
    if not args.contact or not args.zone:
        raise ValidationError("Both contact and zone name are required")
    require(client, client.zones.create(args.contact, args.zone, args.ttl), f"Zone create {args.zone}")
    success_output({"zone": args.zone, "created": True})


def cmd_zone_delete(client: DynectClient, args: argparse.Namespace) -> None:
    """Delete a zone."""
    require(client, client.zones.delete(args.zone), f"Zone delete {args.zone}")
    success_output({"zone": args.zone, "deleted": True})


def cmd_zone_publish(client: DynectClient, args: argparse.Namespace) -> None:
    """Publish a zone."""
    require(client, client.zones.publish(args.zone), f"Zone publish {args.zone}")
    success_output({"zone": args.zone, "published": True})


def cmd_zone_freeze(client: DynectClient, args: argparse.Namespace) -> None:
    """Freeze a zone."""
    require(client, client.zones.freeze(args.zone), f"Zone freeze {args.zone}")
    success_output({"zone": args.zone, "frozen": True})


def cmd_zone_thaw(client: DynectClient, args: argparse.Namespace) -> None:
    """Thaw a zone."""
    require(client, client.zones.thaw(args.zone), f"Zone thaw {args.zone}")
    success_output({"zone": args.zone, "frozen": False})


def cmd_node_list(client: DynectClient, args: argparse.Namespace) -> None:
    """List nodes in a zone."""
    nodes = require(client, client.nodes.list(args.zone, args.fqdn or ""), f"Node list {args.zone}")
    list_output(nodes, "Node")


def cmd_node_delete(client: DynectClient, args: argparse.Namespace) -> None:
    """Delete a node and everything below it."""
    require(client, client.nodes.delete(args.zone, args.fqdn), f"Node delete {args.fqdn}")
    success_output({"zone": args.zone, "fqdn": args.fqdn, "deleted": True})


def _records(client: DynectClient, kind: str):
    return client.arecords if kind == "arecord" else client.cnames


def cmd_record_list(client: DynectClient, args: argparse.Namespace) -> None:
    """List record ids at an FQDN."""
    ids = require(client, _records(client, args.command).list(args.zone, args.fqdn), f"Record list {args.fqdn}")
    list_output(ids, "Record ID")


def cmd_record_get(client: DynectClient, args: argparse.Namespace) -> None:
    """Get a record's data."""
    data = _records(client, args.command).get(args.zone, args.fqdn, args.record_id or "")
    success_output(require(client, data, f"Record get {args.fqdn}"))


def cmd_record_delete(client: DynectClient, args: argparse.Namespace) -> None:
    """Delete a record."""
    records = _records(client, args.command)
    require(client, records.delete(args.zone, args.fqdn, args.record_id), f"Record delete {args.record_id}")
    success_output({"fqdn": args.fqdn, "id": args.record_id, "deleted": True})


def cmd_arecord_add(client: DynectClient, args: argparse.Namespace) -> None:
    """Add an A record."""
    require(client, client.arecords.add(args.zone, args.fqdn, args.ip, args.ttl), f"A record add {args.fqdn}")
    success_output({"fqdn": args.fqdn, "address": args.ip, "created": True})


def cmd_cname_add(client: DynectClient, args: argparse.Namespace) -> None:
    """Add a CNAME record."""
    require(client, client.cnames.add(args.zone, args.fqdn, args.cname, args.ttl), f"CNAME add {args.fqdn}")
    success_output({"fqdn": args.fqdn, "cname": args.cname, "created": True})


# =============================================================================
# Main CLI
# =============================================================================


def _add_record_commands(subparsers: Any, name: str, help_text: str, add_func: Any, target: str) -> None:
    group = subparsers.add_parser(name, help=help_text)
    group.set_defaults(func=lambda _c, _a: group.print_help())
    group_sub = group.add_subparsers(dest="subcommand")

    r_list = group_sub.add_parser("list", help="List record ids at an FQDN")
    r_list.add_argument("zone", help="Zone name")
    r_list.add_argument("fqdn", help="Record FQDN")
    r_list.set_defaults(func=cmd_record_list)

    r_get = group_sub.add_parser("get", help="Get record details")
    r_get.add_argument("zone", help="Zone name")
    r_get.add_argument("fqdn", help="Record FQDN")
    if name == "arecord":
        r_get.add_argument("record_id", nargs="?", help="Record ID (all records when omitted)")
    else:
        r_get.add_argument("record_id", help="Record ID")
    r_get.set_defaults(func=cmd_record_get)

    r_add = group_sub.add_parser("add", help="Add a record")
    r_add.add_argument("zone", help="Zone name")
    r_add.add_argument("fqdn", help="Record FQDN")
    r_add.add_argument(target, help="Record target")
    r_add.add_argument("--ttl", type=int, default=DEFAULT_RECORD_TTL, help="TTL (0 uses the zone default)")
    r_add.set_defaults(func=add_func)

    r_delete = group_sub.add_parser("delete", help="Delete a record")
    r_delete.add_argument("zone", help="Zone name")
    r_delete.add_argument("fqdn", help="Record FQDN")
    r_delete.add_argument("record_id", help="Record ID")
    r_delete.set_defaults(func=cmd_record_delete)


def create_parser() -> argparse.ArgumentParser:
    """Create the argument parser."""
    parser = argparse.ArgumentParser(
        description="Dynect CLI - Command-line interface for the Dynect REST API",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Credentials are read from DYNECT_CUSTOMER_NAME, DYNECT_USER_NAME and
DYNECT_PASSWORD (a .env file in the working directory is loaded first).

Examples:
  dynect zone create hostmaster@example.com example.com
  dynect arecord add example.com www.example.com 192.0.2.10
  dynect zone publish example.com
  dynect arecord list example.com www.example.com | jq '.data[]'
""",
    )
    parser.add_argument("--base-url", help="API base URL (overrides DYNECT_BASE_URL)")
    parser.add_argument("--verbose", "-v", action="store_true", help="Log requests to stderr")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # ========== Session ==========
    login = subparsers.add_parser("login", help="Check that the credentials can log in")
    login.set_defaults(func=cmd_login)

    # ========== Zones ==========
    zone = subparsers.add_parser("zone", help="Manage zones")
    zone.set_defaults(func=lambda _c, _a: zone.print_help())
    zone_sub = zone.add_subparsers(dest="subcommand")

    z_list = zone_sub.add_parser("list", help="List zones")
    z_list.set_defaults(func=cmd_zone_list)

    z_get = zone_sub.add_parser("get", help="Get zone details")
    z_get.add_argument("zone", help="Zone name")
    z_get.set_defaults(func=cmd_zone_get)

    z_create = zone_sub.add_parser("create", help="Create a zone")
    z_create.add_argument("contact", help="Contact email address")
    z_create.add_argument("zone", help="Zone name")
    z_create.add_argument("--ttl", type=int, default=DEFAULT_ZONE_TTL, help="Default TTL for the zone")
    z_create.set_defaults(func=cmd_zone_create)

    for action, func, help_text in (
        ("delete", cmd_zone_delete, "Delete a zone"),
        ("publish", cmd_zone_publish, "Publish pending changes"),
        ("freeze", cmd_zone_freeze, "Freeze a zone"),
        ("thaw", cmd_zone_thaw, "Thaw a frozen zone"),
    ):
        z_action = zone_sub.add_parser(action, help=help_text)
        z_action.add_argument("zone", help="Zone name")
        z_action.set_defaults(func=func)

    # ========== Nodes ==========
    node = subparsers.add_parser("node", help="Manage nodes")
    node.set_defaults(func=lambda _c, _a: node.print_help())
    node_sub = node.add_subparsers(dest="subcommand")

    n_list = node_sub.add_parser("list", help="List nodes in a zone")
    n_list.add_argument("zone", help="Zone name")
    n_list.add_argument("fqdn", nargs="?", help="Node to start from")
    n_list.set_defaults(func=cmd_node_list)

    n_delete = node_sub.add_parser("delete", help="Delete a node and its records")
    n_delete.add_argument("zone", help="Zone name")
    n_delete.add_argument("fqdn", help="Node FQDN")
    n_delete.set_defaults(func=cmd_node_delete)

    # ========== Records ==========
    _add_record_commands(subparsers, "arecord", "Manage A records", cmd_arecord_add, "ip")
    _add_record_commands(subparsers, "cname", "Manage CNAME records", cmd_cname_add, "cname")

    return parser


def main(argv: list[str] | None = None) -> None:
    """Main CLI entry point."""
    load_dotenv()
    parser = create_parser()
    args = parser.parse_args(argv)

    if not args.command:
        parser.print_help()
        sys.exit(0)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    credentials = Credentials.from_env()
    if not credentials.is_complete:
        error_output(ValidationError("Set DYNECT_CUSTOMER_NAME, DYNECT_USER_NAME and DYNECT_PASSWORD"))

    client = DynectClient(credentials, base_url=args.base_url)
    if not client.login():
        error_output(APIError("Login failed", raw=client.result))

    failure: CLIError | None = None
    try:
        # Run command (all subparsers have default funcs that print help)
        args.func(client, args)
    except CLIError as e:
        failure = e
    finally:
        if not client.logout():
            logger.warning("Logout failed")

    if failure is not None:
        error_output(failure)


if __name__ == "__main__":
    main()
