from __future__ import annotations

from typing import Any, List, Sequence

# Daemon-reported failures are raised as the transport's own error type.
from dbus_fast.errors import DBusError

__all__ = ["AvahiClientClosedError", "AvahiProtocolError", "DBusError"]


class AvahiProtocolError(Exception):
    """
    A reply from avahi-daemon did not have the expected D-Bus signature.

    Inputs:
      - method: Fully qualified method name (interface.member).
      - expected: Signature the client expected.
      - signature: Signature actually received.
      - values: Reply body, kept for diagnostics.
    Outputs:
      - Exception instance.

    Brief: Raised instead of coercing values of the wrong type.
    """

    def __init__(
        self, method: str, expected: str, signature: str, values: Sequence[Any]
    ) -> None:
        self.method = method
        self.expected = expected
        self.signature = signature
        self.values: List[Any] = list(values)
        super().__init__(
            f"{method} returned invalid result: {self.values!r} "
            f"(signature {signature!r}, expected {expected!r})"
        )


class AvahiClientClosedError(RuntimeError):
    """Raised when an operation is attempted after AvahiClient.close()."""
