"""
Brief: Tests for avahi_client.types value objects.

Inputs:
  - None

Outputs:
  - None
"""

import dataclasses

import pytest

from avahi_client.types import (
    AvahiAddress,
    AvahiHostName,
    AvahiLookupResultFlag,
    AvahiProtocol,
    AvahiResolveAddressResult,
)


def test_address_and_host_name_defaults_and_equality():
    assert AvahiAddress("192.168.1.1").protocol is None
    assert AvahiHostName("foo.local").protocol is None
    assert AvahiAddress("::1", AvahiProtocol.INET6) == AvahiAddress(
        "::1", protocol=AvahiProtocol.INET6
    )
    assert "foo.local" in repr(AvahiHostName("foo.local", AvahiProtocol.INET))


def test_results_are_immutable():
    """
    Brief: Result records cannot be mutated after construction.

    Inputs:
      - AvahiResolveAddressResult

    Outputs:
      - None: Asserts FrozenInstanceError on assignment
    """
    result = AvahiResolveAddressResult(
        address=AvahiAddress("192.168.1.1"),
        name=AvahiHostName("foo.local"),
        interface=2,
        flags=frozenset({AvahiLookupResultFlag.CACHED}),
    )
    with pytest.raises(dataclasses.FrozenInstanceError):
        result.interface = 3  # type: ignore[misc]
    assert hash(result) == hash(
        AvahiResolveAddressResult(
            address=AvahiAddress("192.168.1.1"),
            name=AvahiHostName("foo.local"),
            interface=2,
            flags=frozenset({AvahiLookupResultFlag.CACHED}),
        )
    )
