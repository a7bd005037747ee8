from __future__ import annotations

import argparse
import asyncio
import logging
import sys
from typing import Awaitable, Callable, Dict, List, Optional

from dbus_fast.errors import AuthError, InvalidAddressError

from .client import AvahiClient
from .config.config_parser import ConfigError, load_config, model_to_dict
from .config.logging_config import init_logging
from .errors import AvahiProtocolError, DBusError
from .types import IF_UNSPEC, AvahiLookupFlag, AvahiProtocol

logger = logging.getLogger("avahi_client.main")

_PROTOCOLS: Dict[str, AvahiProtocol] = {
    "inet": AvahiProtocol.INET,
    "ipv4": AvahiProtocol.INET,
    "inet6": AvahiProtocol.INET6,
    "ipv6": AvahiProtocol.INET6,
}

_FLAGS: Dict[str, AvahiLookupFlag] = {
    "use-wide-area": AvahiLookupFlag.USE_WIDE_AREA,
    "use-multicast": AvahiLookupFlag.USE_MULTICAST,
    "no-txt": AvahiLookupFlag.NO_TXT,
    "no-address": AvahiLookupFlag.NO_ADDRESS,
}


def _add_lookup_options(parser: argparse.ArgumentParser, *, address_protocol: bool) -> None:
    parser.add_argument(
        "--interface",
        type=int,
        default=IF_UNSPEC,
        help="Interface index to query on (default: any)",
    )
    parser.add_argument(
        "--protocol",
        choices=sorted(_PROTOCOLS),
        default=None,
        help="Protocol to query on (default: any)",
    )
    if address_protocol:
        parser.add_argument(
            "--address-protocol",
            choices=sorted(_PROTOCOLS),
            default=None,
            help="Address family to return (default: any)",
        )
    parser.add_argument(
        "--flag",
        dest="flags",
        action="append",
        choices=sorted(_FLAGS),
        default=[],
        help="Lookup flag; may be repeated",
    )


def build_parser() -> argparse.ArgumentParser:
    """Brief: Build the avahi-client argument parser.

    Inputs:
      - None.

    Outputs:
      - argparse.ArgumentParser with one subcommand per daemon method.
    """

    parser = argparse.ArgumentParser(
        prog="avahi-client", description="Query avahi-daemon over D-Bus"
    )
    parser.add_argument("--config", default=None, help="Path to YAML config")
    parser.add_argument(
        "--bus-address",
        default=None,
        help="D-Bus address to connect to (default: the system bus)",
    )
    parser.add_argument(
        "--log-level", default=None, help="Override logging.level from the config"
    )

    sub = parser.add_subparsers(dest="command", metavar="COMMAND")
    sub.required = True

    sub.add_parser("version", help="Print the daemon version string")
    sub.add_parser("api-version", help="Print the daemon API version")
    p = sub.add_parser("host-name", help="Print (or set) the host name")
    p.add_argument("--set", dest="new_name", default=None, help="New host name")
    sub.add_parser("domain-name", help="Print the domain name")
    sub.add_parser("fqdn", help="Print the fully qualified host name")
    p = sub.add_parser(
        "alternative-host-name", help="Print an alternative for a host name"
    )
    p.add_argument("name")
    p = sub.add_parser(
        "alternative-service-name", help="Print an alternative for a service name"
    )
    p.add_argument("name")

    p = sub.add_parser("resolve-host-name", help="Resolve a host name to an address")
    p.add_argument("name")
    _add_lookup_options(p, address_protocol=True)

    p = sub.add_parser("resolve-address", help="Resolve an address to a host name")
    p.add_argument("address")
    _add_lookup_options(p, address_protocol=False)

    return parser


def _protocol(value: Optional[str]) -> Optional[AvahiProtocol]:
    return None if value is None else _PROTOCOLS[value]


async def run_command(client: AvahiClient, args: argparse.Namespace) -> str:
    """Brief: Run one parsed subcommand against the daemon.

    Inputs:
      - client: AvahiClient to use.
      - args: Parsed namespace from build_parser().

    Outputs:
      - str: Text to print (may be empty).
    """

    command = args.command
    simple: Dict[str, Callable[[], Awaitable[object]]] = {
        "version": client.get_version_string,
        "api-version": client.get_api_version,
        "domain-name": client.get_domain_name,
        "fqdn": client.get_host_name_fqdn,
    }
    if command in simple:
        return str(await simple[command]())

    if command == "host-name":
        if args.new_name is not None:
            await client.set_host_name(args.new_name)
            return ""
        return await client.get_host_name()

    if command == "alternative-host-name":
        return await client.get_alternative_host_name(args.name)

    if command == "alternative-service-name":
        return await client.get_alternative_service_name(args.name)

    flags = [_FLAGS[f] for f in args.flags]
    if command == "resolve-host-name":
        result = await client.resolve_host_name(
            args.name,
            interface=args.interface,
            protocol=_protocol(args.protocol),
            address_protocol=_protocol(args.address_protocol),
            flags=flags,
        )
        return f"{result.name.name}\t{result.address.address}"

    if command == "resolve-address":
        result2 = await client.resolve_address(
            args.address,
            interface=args.interface,
            protocol=_protocol(args.protocol),
            flags=flags,
        )
        return f"{result2.address.address}\t{result2.name.name}"

    raise ValueError(f"unknown command {command!r}")  # pragma: no cover


async def _run(args: argparse.Namespace, bus_address: Optional[str]) -> str:
    async with AvahiClient(bus_address=bus_address) as client:
        return await run_command(client, args)


def main(argv: List[str] | None = None) -> int:
    """
    Entry point for the avahi-client command.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:]).

    Returns:
        0 on success, 1 on configuration, daemon or protocol errors.

    Example use:
        avahi-client resolve-address 192.168.1.1
        avahi-client --config avahi-client.yaml resolve-host-name foo.local --protocol inet
    """
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        cfg = load_config(args.config)
    except ConfigError as exc:
        print(str(exc), file=sys.stderr)
        return 1

    logging_cfg = model_to_dict(cfg.logging)
    if args.log_level:
        logging_cfg["level"] = args.log_level
    init_logging(logging_cfg)

    bus_address = args.bus_address or cfg.bus_address
    logger.debug("Running %s (bus: %s)", args.command, bus_address or "system")

    try:
        output = asyncio.run(_run(args, bus_address))
    except DBusError as exc:
        logger.error("%s: %s", exc.type, exc.text)
        print(f"{exc.type}: {exc.text}", file=sys.stderr)
        return 1
    except AvahiProtocolError as exc:
        logger.error("%s", exc)
        print(str(exc), file=sys.stderr)
        return 1
    except (OSError, InvalidAddressError, AuthError) as exc:
        logger.error("Cannot connect to D-Bus: %s", exc)
        print(f"Cannot connect to D-Bus: {exc}", file=sys.stderr)
        return 1

    if output:
        print(output)
    return 0


if __name__ == "__main__":
    raise SystemExit(main())
