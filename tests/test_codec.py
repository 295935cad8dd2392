from dataclasses import dataclass

import pytest
from hypothesis import given
from hypothesis import strategies as st

from marinade_sdk.codec import (
    BOOL,
    PUBKEY,
    U8,
    U32,
    U64,
    BorshError,
    BorshStruct,
    borsh_field,
    option,
    struct,
)
from marinade_sdk.pubkey import Pubkey


@dataclass
class Inner(BorshStruct):
    basis_points: int = borsh_field(U32)


@dataclass
class Sample(BorshStruct):
    amount: int = borsh_field(U64)
    index: int = borsh_field(U32)
    flag: bool = borsh_field(BOOL)
    maybe: int | None = borsh_field(option(U64))
    key: Pubkey = borsh_field(PUBKEY)
    inner: Inner = borsh_field(struct(Inner))


samples = st.builds(
    Sample,
    amount=st.integers(min_value=0, max_value=2**64 - 1),
    index=st.integers(min_value=0, max_value=2**32 - 1),
    flag=st.booleans(),
    maybe=st.none() | st.integers(min_value=0, max_value=2**64 - 1),
    key=st.binary(min_size=32, max_size=32).map(Pubkey),
    inner=st.builds(Inner, basis_points=st.integers(min_value=0, max_value=2**32 - 1)),
)


@given(samples)
def test_round_trip(sample):
    kind = struct(Sample)
    encoded = kind.encode(sample)
    assert kind.decode(encoded, 0) == (sample, len(encoded))
    assert Sample.from_bytes(sample.to_bytes()) == sample


def test_little_endian_integers():
    assert U64.encode(1) == b"\x01" + bytes(7)
    assert Inner(basis_points=250).to_bytes() == b"\xfa\x00\x00\x00"


def test_option_wire_form():
    assert option(U8).encode(None) == b"\x00"
    assert option(U8).encode(7) == b"\x01\x07"
    assert option(U8).decode(b"\x01\x07", 0) == (7, 2)


def test_defaults_encode_as_zeros():
    encoded = struct(Sample).encode(Sample())
    assert set(encoded) == {0}
    assert Sample.from_bytes(encoded) == Sample()


def test_decode_at_offset_returns_end():
    payload = struct(Inner).encode(Inner(basis_points=5))
    buffer = b"xx" + payload
    assert struct(Inner).decode(buffer, 2) == (Inner(basis_points=5), len(buffer))
    value, end = Inner.decode(buffer, 2)
    assert value == Inner(basis_points=5)
    assert end == len(buffer)


def test_truncated_input():
    truncated = struct(Sample).encode(Sample())[:-1]
    with pytest.raises(BorshError):
        struct(Sample).decode(truncated, 0)
    with pytest.raises(BorshError):
        Sample.from_bytes(truncated)


def test_trailing_bytes_rejected():
    encoded = struct(Sample).encode(Sample())
    with pytest.raises(BorshError):
        Sample.from_bytes(encoded + b"\x00")


def test_invalid_bool_and_option_tag():
    with pytest.raises(BorshError):
        BOOL.decode(b"\x02", 0)
    with pytest.raises(BorshError):
        option(U8).decode(b"\x05\x00", 0)


def test_out_of_range_integers():
    with pytest.raises(BorshError):
        U8.encode(256)
    with pytest.raises(BorshError):
        U32.encode(-1)


def test_wrong_nested_type():
    with pytest.raises(BorshError):
        struct(Sample).encode(Sample(inner=5))


def test_struct_requires_borsh_struct():
    with pytest.raises(TypeError):
        struct(int)