from __future__ import annotations

import enum
from dataclasses import dataclass
from typing import FrozenSet, Optional

# Any interface / any protocol, as understood by avahi-daemon.
IF_UNSPEC = -1
PROTO_UNSPEC = -1


class AvahiProtocol(enum.Enum):
    """Brief: Address family tag used by Avahi.

    An unspecified family is represented by ``None`` rather than a member.
    """

    INET = 0
    INET6 = 1


class AvahiLookupFlag(enum.Enum):
    """Brief: Flags sent with lookup requests.

    Inputs:
      - Member values are the bits used on the wire.

    Outputs:
      - Enum members combined into a set by callers.
    """

    USE_WIDE_AREA = 0x01
    USE_MULTICAST = 0x02
    NO_TXT = 0x04
    NO_ADDRESS = 0x08


class AvahiLookupResultFlag(enum.Enum):
    """Brief: Flags describing how a lookup result was obtained."""

    CACHED = 0x01
    WIDE_AREA = 0x02
    MULTICAST = 0x04
    LOCAL = 0x08
    OUR_OWN = 0x10
    STATIC = 0x20


@dataclass(frozen=True)
class AvahiAddress:
    """Brief: A network address in string form.

    Inputs:
      - address: Address string (e.g. ``192.168.1.1``).
      - protocol: Optional AvahiProtocol the address uses.

    Outputs:
      - AvahiAddress instance.
    """

    address: str
    protocol: Optional[AvahiProtocol] = None


@dataclass(frozen=True)
class AvahiHostName:
    """Brief: A host name with the protocol it was looked up on.

    Inputs:
      - name: Host name (e.g. ``foo.local``).
      - protocol: Optional AvahiProtocol.

    Outputs:
      - AvahiHostName instance.
    """

    name: str
    protocol: Optional[AvahiProtocol] = None


@dataclass(frozen=True)
class AvahiResolveHostNameResult:
    """Brief: Result of a ResolveHostName call.

    Inputs:
      - name: The host name that was resolved.
      - address: The address matching ``name``.
      - interface: Index of the interface the address is on.
      - flags: Result flags reported by the daemon.

    Outputs:
      - AvahiResolveHostNameResult instance.
    """

    name: AvahiHostName
    address: AvahiAddress
    interface: int
    flags: FrozenSet[AvahiLookupResultFlag] = frozenset()


@dataclass(frozen=True)
class AvahiResolveAddressResult:
    """Brief: Result of a ResolveAddress call.

    Inputs:
      - address: The address that was resolved.
      - name: The host name matching ``address``.
      - interface: Index of the interface the address is on.
      - flags: Result flags reported by the daemon.

    Outputs:
      - AvahiResolveAddressResult instance.
    """

    address: AvahiAddress
    name: AvahiHostName
    interface: int
    flags: FrozenSet[AvahiLookupResultFlag] = frozenset()
