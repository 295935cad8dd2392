import pytest

from marinade_sdk.anchor import (
    AccountDeserializeError,
    AnchorErrorCode,
    DeserializeErrorKind,
    anchor_error_code,
)
from marinade_sdk.pubkey import ID, Pubkey
from marinade_sdk.state.ticket import DelayedUnstakeTicket


@pytest.fixture
def ticket():
    return DelayedUnstakeTicket(
        state_address=Pubkey.new_unique(),
        beneficiary=Pubkey.new_unique(),
        lamports_amount=1_000_000,
        created_epoch=42,
    )


def test_discriminator_is_fixed(ticket):
    disc = bytes([133, 77, 18, 98, 211, 1, 231, 3])
    assert DelayedUnstakeTicket.DISCRIMINATOR == disc
    assert DelayedUnstakeTicket.try_deserialize(disc + ticket.to_bytes()) == ticket


def test_owner_is_program_id():
    assert DelayedUnstakeTicket.owner() == ID


def test_round_trip_through_account_data(ticket):
    data = DelayedUnstakeTicket.DISCRIMINATOR + ticket.to_bytes()
    assert DelayedUnstakeTicket.try_deserialize(data) == ticket


def test_encoded_size(ticket):
    assert len(ticket.to_bytes()) == 80


def test_unchecked_ignores_discriminator(ticket):
    data = bytes(8) + ticket.to_bytes()
    assert DelayedUnstakeTicket.try_deserialize_unchecked(data) == ticket


def test_short_data_has_no_discriminator():
    with pytest.raises(AccountDeserializeError) as info:
        DelayedUnstakeTicket.try_deserialize(b"\x85\x4d")
    assert info.value.kind is DeserializeErrorKind.DISCRIMINATOR_NOT_FOUND


def test_wrong_discriminator(ticket):
    with pytest.raises(AccountDeserializeError) as info:
        DelayedUnstakeTicket.try_deserialize(bytes(8) + ticket.to_bytes())
    assert info.value.kind is DeserializeErrorKind.DISCRIMINATOR_MISMATCH


def test_truncated_body(ticket):
    data = DelayedUnstakeTicket.DISCRIMINATOR + ticket.to_bytes()[:-1]
    with pytest.raises(AccountDeserializeError) as info:
        DelayedUnstakeTicket.try_deserialize(data)
    assert anchor_error_code(info.value) is AnchorErrorCode.AccountDidNotDeserialize