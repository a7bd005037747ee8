"""Encode/decode helpers between avahi_client types and D-Bus integers.

Brief:
  Avahi transmits address families as int32 values and flag sets as uint32
  bitmasks. The bit assignments are part of the daemon's D-Bus contract.
"""

from __future__ import annotations

from typing import Dict, FrozenSet, Iterable, Optional

from .types import (
    PROTO_UNSPEC,
    AvahiLookupFlag,
    AvahiLookupResultFlag,
    AvahiProtocol,
)

_PROTOCOL_VALUES: Dict[AvahiProtocol, int] = {
    AvahiProtocol.INET: 0,
    AvahiProtocol.INET6: 1,
}
_PROTOCOLS_BY_VALUE: Dict[int, AvahiProtocol] = {
    v: k for k, v in _PROTOCOL_VALUES.items()
}


def encode_protocol(protocol: Optional[AvahiProtocol]) -> int:
    """Brief: Encode an address family for transmission.

    Inputs:
      - protocol: AvahiProtocol or None for "unspecified".

    Outputs:
      - int: 0 for INET, 1 for INET6, -1 when unspecified.

    Example:
      >>> encode_protocol(AvahiProtocol.INET6)
      1
      >>> encode_protocol(None)
      -1
    """

    if protocol is None:
        return PROTO_UNSPEC
    return _PROTOCOL_VALUES.get(protocol, PROTO_UNSPEC)


def decode_protocol(value: int) -> Optional[AvahiProtocol]:
    """Brief: Decode an address family received from the daemon.

    Inputs:
      - value: int32 protocol value.

    Outputs:
      - Optional[AvahiProtocol]: None for -1 and for any unmapped value.
    """

    return _PROTOCOLS_BY_VALUE.get(int(value))


def encode_lookup_flags(flags: Iterable[AvahiLookupFlag]) -> int:
    """Brief: Combine request flags into a uint32 bitmask.

    Inputs:
      - flags: Iterable of AvahiLookupFlag members (duplicates are harmless).

    Outputs:
      - int: Bitwise OR of each flag's bit.

    Example:
      >>> encode_lookup_flags({AvahiLookupFlag.USE_MULTICAST, AvahiLookupFlag.NO_TXT})
      6
    """

    value = 0
    for flag in flags:
        value |= AvahiLookupFlag(flag).value
    return value


def decode_lookup_flags(value: int) -> FrozenSet[AvahiLookupFlag]:
    """Brief: Split a request bitmask back into AvahiLookupFlag members.

    Unknown bits are ignored.
    """

    return frozenset(f for f in AvahiLookupFlag if value & f.value)


def encode_lookup_result_flags(flags: Iterable[AvahiLookupResultFlag]) -> int:
    """Brief: Combine result flags into the daemon's uint32 bitmask.

    Inputs:
      - flags: Iterable of AvahiLookupResultFlag members.

    Outputs:
      - int: Bitwise OR of each flag's bit.
    """

    value = 0
    for flag in flags:
        value |= AvahiLookupResultFlag(flag).value
    return value


def decode_lookup_result_flags(value: int) -> FrozenSet[AvahiLookupResultFlag]:
    """Brief: Decode the result flags bitmask of a resolve reply.

    Inputs:
      - value: uint32 bitmask (bit0=cached ... bit5=static).

    Outputs:
      - frozenset of AvahiLookupResultFlag whose bits are set; unknown bits
        are ignored.

    Example:
      >>> sorted(f.name for f in decode_lookup_result_flags(0x11))
      ['CACHED', 'OUR_OWN']
    """

    return frozenset(f for f in AvahiLookupResultFlag if value & f.value)
