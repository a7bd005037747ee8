"""D-Bus client for the avahi-daemon Server2 interface.

Brief:
  AvahiClient wraps the methods of ``org.freedesktop.Avahi.Server2`` on the
  daemon's root object. Each method sends one D-Bus call, checks that the
  reply has the expected signature and unwraps it into avahi_client types.

Inputs:
  - An optional dbus_fast MessageBus. Without one, a private connection to
    the system bus is opened and owned by the client.

Outputs:
  - Plain Python values and frozen result dataclasses.

Example:
  >>> async def show_version():
  ...     async with AvahiClient() as client:
  ...         print(await client.get_version_string())
"""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Iterable, List, Optional, Sequence

from dbus_fast import BusType, ErrorType, Message, MessageType
from dbus_fast.aio import MessageBus

from .codec import (
    decode_lookup_result_flags,
    decode_protocol,
    encode_lookup_flags,
    encode_protocol,
)
from .errors import AvahiClientClosedError, AvahiProtocolError, DBusError
from .types import (
    IF_UNSPEC,
    AvahiAddress,
    AvahiHostName,
    AvahiLookupFlag,
    AvahiProtocol,
    AvahiResolveAddressResult,
    AvahiResolveHostNameResult,
)

logger = logging.getLogger(__name__)

AVAHI_BUS_NAME = "org.freedesktop.Avahi"
AVAHI_OBJECT_PATH = "/"
AVAHI_SERVER_INTERFACE = "org.freedesktop.Avahi.Server2"


class AvahiClient:
    """
    A client connected to avahi-daemon over D-Bus.

    Inputs:
      - bus: Optional connected dbus_fast MessageBus (or any object with a
        compatible ``call()`` coroutine). It is never closed by the client.
      - bus_address: Optional D-Bus address used when ``bus`` is omitted;
        defaults to the system bus.
    Outputs:
      - AvahiClient instance. Calls connect the owned bus lazily; close()
        must be awaited to release it.
    """

    def __init__(
        self, bus: Optional[MessageBus] = None, *, bus_address: Optional[str] = None
    ) -> None:
        self._owns_bus = bus is None
        if bus is None:
            bus = MessageBus(bus_address=bus_address, bus_type=BusType.SYSTEM)
        self._bus = bus
        self._connect_future: Optional[asyncio.Future] = None
        self._closed = False

    @property
    def owns_bus(self) -> bool:
        return self._owns_bus

    async def connect(self) -> "AvahiClient":
        """Brief: Complete the handshake of an owned bus connection.

        Inputs:
          - None.

        Outputs:
          - AvahiClient: self, so ``client = await AvahiClient().connect()`` works.

        Notes:
          - Borrowed buses are assumed to be connected already.
          - Concurrent callers share a single handshake; cancelling one
            caller (e.g. asyncio.wait_for) leaves the handshake running.

        Raises:
          - AvahiClientClosedError: close() was already called.
        """

        if self._closed:
            raise AvahiClientClosedError("AvahiClient is closed")
        if not self._owns_bus:
            return self
        if self._connect_future is None or self._connect_future.cancelled():
            logger.debug("Connecting to D-Bus for %s", AVAHI_BUS_NAME)
            self._connect_future = asyncio.ensure_future(self._bus.connect())
        await asyncio.shield(self._connect_future)
        return self

    async def close(self) -> None:
        """Brief: Release the bus connection if this client created it.

        Inputs:
          - None.

        Outputs:
          - None. Borrowed connections are left open; repeated calls are no-ops.
        """

        if self._closed:
            return
        self._closed = True
        if not self._owns_bus:
            return

        connected = (
            self._connect_future is not None
            and self._connect_future.done()
            and not self._connect_future.cancelled()
            and self._connect_future.exception() is None
        )
        logger.debug("Closing owned D-Bus connection")
        self._bus.disconnect()
        if connected:
            await self._bus.wait_for_disconnect()

    async def __aenter__(self) -> "AvahiClient":
        return await self.connect()

    async def __aexit__(self, exc_type, exc, tb) -> None:
        await self.close()

    async def _call(
        self,
        member: str,
        reply_signature: str,
        signature: str = "",
        body: Optional[Sequence[Any]] = None,
    ) -> List[Any]:
        """Brief: Call a Server2 method and return the checked reply body.

        Inputs:
          - member: D-Bus method name (e.g. ``GetHostName``).
          - reply_signature: Signature the reply must have.
          - signature: Signature of ``body``.
          - body: Argument values.

        Outputs:
          - list: Reply body values.

        Raises:
          - DBusError: The daemon replied with an error.
          - AvahiProtocolError: The reply signature did not match.
          - AvahiClientClosedError: The client was closed.
        """

        await self.connect()
        method = f"{AVAHI_SERVER_INTERFACE}.{member}"
        logger.debug("Calling %s(%s)", method, ", ".join(repr(v) for v in body or []))

        reply = await self._bus.call(
            Message(
                destination=AVAHI_BUS_NAME,
                path=AVAHI_OBJECT_PATH,
                interface=AVAHI_SERVER_INTERFACE,
                member=member,
                signature=signature,
                body=list(body or []),
            )
        )

        if reply.message_type == MessageType.ERROR:
            text = ""
            if reply.body and str(reply.signature).startswith("s"):
                text = str(reply.body[0])
            error_name = reply.error_name or ErrorType.FAILED.value
            logger.warning("%s failed: %s %s", method, error_name, text)
            raise DBusError(error_name, text, reply=reply)

        if reply.signature != reply_signature:
            logger.warning(
                "%s returned signature %r, expected %r",
                method,
                reply.signature,
                reply_signature,
            )
            raise AvahiProtocolError(
                method, reply_signature, reply.signature, reply.body or []
            )

        return list(reply.body or [])

    async def get_version_string(self) -> str:
        """Gets the server version string."""
        (version,) = await self._call("GetVersionString", "s")
        return version

    async def get_api_version(self) -> int:
        """Gets the API version."""
        (version,) = await self._call("GetAPIVersion", "u")
        return version

    async def get_host_name(self) -> str:
        """Gets the host name."""
        (name,) = await self._call("GetHostName", "s")
        return name

    async def set_host_name(self, host_name: str) -> None:
        """Sets the host name."""
        await self._call("SetHostName", "", "s", [host_name])

    async def get_domain_name(self) -> str:
        (name,) = await self._call("GetDomainName", "s")
        return name

    async def get_host_name_fqdn(self) -> str:
        """Gets the host name in fully qualified domain name form."""
        (name,) = await self._call("GetHostNameFqdn", "s")
        return name

    async def get_alternative_host_name(self, name: str) -> str:
        """Gets an alternative host name for ``name`` (e.g. ``foo`` -> ``foo-2``)."""
        (alternative,) = await self._call("GetAlternativeHostName", "s", "s", [name])
        return alternative

    async def get_alternative_service_name(self, name: str) -> str:
        """Gets an alternative service name for ``name`` (e.g. ``foo`` -> ``foo #2``)."""
        (alternative,) = await self._call(
            "GetAlternativeServiceName", "s", "s", [name]
        )
        return alternative

    async def resolve_host_name(
        self,
        name: str,
        interface: int = IF_UNSPEC,
        protocol: Optional[AvahiProtocol] = None,
        address_protocol: Optional[AvahiProtocol] = None,
        flags: Iterable[AvahiLookupFlag] = (),
    ) -> AvahiResolveHostNameResult:
        """Brief: Get the address that matches a host name.

        Inputs:
          - name: Host name to resolve (e.g. ``foo.local``).
          - interface: Interface index, -1 for any.
          - protocol: Protocol to query on, None for any.
          - address_protocol: Desired address family, None for any.
          - flags: AvahiLookupFlag members.

        Outputs:
          - AvahiResolveHostNameResult.

        Raises:
          - DBusError when the daemon cannot resolve the name.
        """

        (
            returned_interface,
            returned_protocol,
            returned_name,
            returned_address_protocol,
            address,
            result_flags,
        ) = await self._call(
            "ResolveHostName",
            "iisisu",
            "iisiu",
            [
                int(interface),
                encode_protocol(protocol),
                name,
                encode_protocol(address_protocol),
                encode_lookup_flags(flags),
            ],
        )
        return AvahiResolveHostNameResult(
            name=AvahiHostName(returned_name, decode_protocol(returned_protocol)),
            address=AvahiAddress(address, decode_protocol(returned_address_protocol)),
            interface=returned_interface,
            flags=decode_lookup_result_flags(result_flags),
        )

    async def resolve_address(
        self,
        address: str,
        interface: int = IF_UNSPEC,
        protocol: Optional[AvahiProtocol] = None,
        flags: Iterable[AvahiLookupFlag] = (),
    ) -> AvahiResolveAddressResult:
        """Brief: Get the host name that matches an address.

        Inputs:
          - address: Address to resolve (e.g. ``192.168.1.1``).
          - interface: Interface index, -1 for any.
          - protocol: Protocol to query on, None for any.
          - flags: AvahiLookupFlag members.

        Outputs:
          - AvahiResolveAddressResult.

        Raises:
          - DBusError when the daemon cannot resolve the address.
        """

        (
            returned_interface,
            returned_protocol,
            returned_address_protocol,
            returned_address,
            name,
            result_flags,
        ) = await self._call(
            "ResolveAddress",
            "iiissu",
            "iisu",
            [
                int(interface),
                encode_protocol(protocol),
                address,
                encode_lookup_flags(flags),
            ],
        )
        return AvahiResolveAddressResult(
            address=AvahiAddress(
                returned_address, decode_protocol(returned_address_protocol)
            ),
            name=AvahiHostName(name, decode_protocol(returned_protocol)),
            interface=returned_interface,
            flags=decode_lookup_result_flags(result_flags),
        )
