"""
Brief: Tests for avahi_client.codec enum encode/decode helpers.

Inputs:
  - None

Outputs:
  - None
"""

import itertools

import pytest

from avahi_client.codec import (
    decode_lookup_flags,
    decode_lookup_result_flags,
    decode_protocol,
    encode_lookup_flags,
    encode_lookup_result_flags,
    encode_protocol,
)
from avahi_client.types import AvahiLookupFlag, AvahiLookupResultFlag, AvahiProtocol


def test_protocol_encoding_table():
    assert encode_protocol(AvahiProtocol.INET) == 0
    assert encode_protocol(AvahiProtocol.INET6) == 1
    assert encode_protocol(None) == -1


@pytest.mark.parametrize("protocol", [AvahiProtocol.INET, AvahiProtocol.INET6, None])
def test_protocol_decode_inverts_encode(protocol):
    assert decode_protocol(encode_protocol(protocol)) is protocol


@pytest.mark.parametrize("value", [-1, 2, 7, 1000, -42])
def test_unknown_protocol_decodes_to_none(value):
    """
    Brief: Unmapped protocol integers decode to None instead of raising.

    Inputs:
      - value: int outside {0, 1}

    Outputs:
      - None: Asserts lenient decoding
    """
    assert decode_protocol(value) is None


def test_lookup_flag_bits():
    """
    Brief: Each request flag owns its fixed wire bit.

    Inputs:
      - None

    Outputs:
      - None: Asserts bit assignments
    """
    assert encode_lookup_flags([]) == 0
    assert encode_lookup_flags([AvahiLookupFlag.USE_WIDE_AREA]) == 0x1
    assert encode_lookup_flags([AvahiLookupFlag.USE_MULTICAST]) == 0x2
    assert encode_lookup_flags([AvahiLookupFlag.NO_TXT]) == 0x4
    assert encode_lookup_flags([AvahiLookupFlag.NO_ADDRESS]) == 0x8


def test_lookup_flags_encoding_is_order_independent_or():
    """
    Brief: Encoding every subset equals the OR of member bits in any order,
    and decoding yields exactly that subset.

    Inputs:
      - All subsets of AvahiLookupFlag

    Outputs:
      - None
    """
    members = list(AvahiLookupFlag)
    for r in range(len(members) + 1):
        for subset in itertools.combinations(members, r):
            expected = 0
            for flag in subset:
                expected |= flag.value
            assert encode_lookup_flags(subset) == expected
            assert encode_lookup_flags(reversed(subset)) == expected
            assert decode_lookup_flags(expected) == frozenset(subset)


def test_duplicate_lookup_flags_are_harmless():
    flags = [AvahiLookupFlag.NO_TXT, AvahiLookupFlag.NO_TXT]
    assert encode_lookup_flags(flags) == 0x4


def test_result_flag_bits():
    assert decode_lookup_result_flags(0) == frozenset()
    assert decode_lookup_result_flags(0x01) == {AvahiLookupResultFlag.CACHED}
    assert decode_lookup_result_flags(0x02) == {AvahiLookupResultFlag.WIDE_AREA}
    assert decode_lookup_result_flags(0x04) == {AvahiLookupResultFlag.MULTICAST}
    assert decode_lookup_result_flags(0x08) == {AvahiLookupResultFlag.LOCAL}
    assert decode_lookup_result_flags(0x10) == {AvahiLookupResultFlag.OUR_OWN}
    assert decode_lookup_result_flags(0x20) == {AvahiLookupResultFlag.STATIC}
    assert decode_lookup_result_flags(0x3F) == frozenset(AvahiLookupResultFlag)


def test_result_flags_ignore_unknown_bits():
    """
    Brief: Bits above bit5 are dropped when decoding.

    Inputs:
      - 0x40 | 0x80 | 0x05

    Outputs:
      - None
    """
    flags = decode_lookup_result_flags(0x40 | 0x80 | 0x05)
    assert flags == {AvahiLookupResultFlag.CACHED, AvahiLookupResultFlag.MULTICAST}
    assert encode_lookup_result_flags(flags) == 0x05


def test_result_flags_round_trip_for_every_mask():
    for value in range(0x40):
        assert encode_lookup_result_flags(decode_lookup_result_flags(value)) == value
