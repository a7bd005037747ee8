"""avahi_client package"""

from .client import (
    AVAHI_BUS_NAME,
    AVAHI_OBJECT_PATH,
    AVAHI_SERVER_INTERFACE,
    AvahiClient,
)
from .codec import (
    decode_lookup_flags,
    decode_lookup_result_flags,
    decode_protocol,
    encode_lookup_flags,
    encode_lookup_result_flags,
    encode_protocol,
)
from .errors import AvahiClientClosedError, AvahiProtocolError, DBusError
from .types import (
    IF_UNSPEC,
    PROTO_UNSPEC,
    AvahiAddress,
    AvahiHostName,
    AvahiLookupFlag,
    AvahiLookupResultFlag,
    AvahiProtocol,
    AvahiResolveAddressResult,
    AvahiResolveHostNameResult,
)

__all__ = [
    "AVAHI_BUS_NAME",
    "AVAHI_OBJECT_PATH",
    "AVAHI_SERVER_INTERFACE",
    "AvahiAddress",
    "AvahiClient",
    "AvahiHostName",
    "AvahiLookupFlag",
    "AvahiLookupResultFlag",
    "AvahiProtocol",
    "AvahiClientClosedError",
    "AvahiProtocolError",
    "AvahiResolveAddressResult",
    "AvahiResolveHostNameResult",
    "DBusError",
    "IF_UNSPEC",
    "PROTO_UNSPEC",
    "decode_lookup_flags",
    "decode_lookup_result_flags",
    "decode_protocol",
    "encode_lookup_flags",
    "encode_lookup_result_flags",
    "encode_protocol",
]
