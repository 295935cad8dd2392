import pytest
from hypothesis import given
from hypothesis import strategies as st

from marinade_sdk.pubkey import (
    ID,
    PDA_MARKER,
    Pubkey,
    PubkeyError,
    b58decode,
    b58encode,
    create_program_address,
    create_with_seed,
    find_program_address,
)


def test_program_id_text_form():
    assert str(ID) == "MarBmsSgKXdrN1egZf5sqe1TMai9K1rChYNDJgjq7aD"
    assert Pubkey.from_string("MarBmsSgKXdrN1egZf5sqe1TMai9K1rChYNDJgjq7aD") == ID


def test_default_is_all_ones_in_base58():
    assert str(Pubkey.default()) == "1" * 32
    assert bytes(Pubkey.default()) == bytes(32)


@given(st.binary(max_size=64))
def test_base58_round_trip(data):
    assert b58decode(b58encode(data)) == data


@given(st.binary(min_size=32, max_size=32))
def test_pubkey_string_round_trip(raw):
    key = Pubkey(raw)
    assert Pubkey.from_string(str(key)) == key


def test_invalid_base58_character():
    with pytest.raises(PubkeyError):
        b58decode("0OIl")


def test_wrong_length_rejected():
    with pytest.raises(PubkeyError):
        Pubkey(b"abc")
    with pytest.raises(PubkeyError):
        Pubkey.from_string("1111")


def test_new_unique_distinct():
    keys = {Pubkey.new_unique() for _ in range(20)}
    assert len(keys) == 20


def test_on_curve_points():
    assert Pubkey.default().is_on_curve()
    base_point = bytes.fromhex("58" + "66" * 31)
    assert Pubkey(base_point).is_on_curve()


def test_find_program_address_is_consistent():
    seeds = [bytes(ID), b"liq_mint"]
    address, bump = find_program_address(seeds, ID)
    assert 0 < bump <= 255
    assert not address.is_on_curve()
    assert create_program_address([*seeds, bytes([bump])], ID) == address
    for higher in range(255, bump, -1):
        with pytest.raises(PubkeyError):
            create_program_address([*seeds, bytes([higher])], ID)


def test_create_program_address_rejects_on_curve_results():
    outcomes = []
    for bump in range(255, 205, -1):
        try:
            outcomes.append(create_program_address([b"seed", bytes([bump])], ID).is_on_curve())
        except PubkeyError:
            outcomes.append(None)
    assert None in outcomes
    assert all(outcome is False for outcome in outcomes if outcome is not None)


def test_seed_limits():
    with pytest.raises(PubkeyError):
        create_program_address([bytes(33)], ID)
    with pytest.raises(PubkeyError):
        create_program_address([b"a"] * 17, ID)
    with pytest.raises(PubkeyError):
        find_program_address([b"a"] * 16, ID)


def test_create_with_seed():
    base = Pubkey.new_unique()
    first = create_with_seed(base, "liq_st_sol", ID)
    assert first == create_with_seed(base, "liq_st_sol", ID)
    assert first != create_with_seed(base, "other", ID)
    with pytest.raises(PubkeyError):
        create_with_seed(base, "x" * 33, ID)
    with pytest.raises(PubkeyError):
        create_with_seed(base, "seed", Pubkey(bytes(11) + PDA_MARKER))