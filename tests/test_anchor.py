from dataclasses import dataclass
from typing import ClassVar

import pytest

from marinade_sdk.anchor import (
    AccountData,
    AccountDeserializeError,
    AccountMeta,
    AnchorErrorCode,
    DeserializeErrorKind,
    Instruction,
    InstructionBuilder,
    InstructionData,
    anchor_error_code,
)
from marinade_sdk.codec import PUBKEY, U64, borsh_field
from marinade_sdk.pubkey import ID, Pubkey

DISC = bytes([1, 2, 3, 4, 5, 6, 7, 8])


@dataclass
class Sample(AccountData):
    DISCRIMINATOR = DISC
    OWNER = ID

    amount: int = borsh_field(U64)
    key: Pubkey = borsh_field(PUBKEY)


@dataclass
class Payload(InstructionData):
    DISCRIMINATOR = DISC

    lamports: int = borsh_field(U64)


@dataclass
class Accounts:
    DATA: ClassVar[type] = Payload

    first: Pubkey
    second: Pubkey

    def to_account_metas(self):
        return [AccountMeta.new(self.first, True), AccountMeta.new_readonly(self.second, False)]

    @classmethod
    def owner(cls):
        return ID


def test_account_round_trip():
    sample = Sample(amount=42, key=Pubkey.new_unique())
    data = DISC + sample.to_bytes()
    assert Sample.try_deserialize(data) == sample


def test_trailing_bytes_are_allowed():
    sample = Sample(amount=7, key=Pubkey.new_unique())
    assert Sample.try_deserialize(DISC + sample.to_bytes() + b"\xff" * 5) == sample


def test_short_buffer_has_no_discriminator():
    with pytest.raises(AccountDeserializeError) as info:
        Sample.try_deserialize(DISC[:5])
    assert info.value.kind is DeserializeErrorKind.DISCRIMINATOR_NOT_FOUND
    assert anchor_error_code(info.value) is AnchorErrorCode.AccountDiscriminatorNotFound


def test_wrong_discriminator():
    sample = Sample(amount=1)
    with pytest.raises(AccountDeserializeError) as info:
        Sample.try_deserialize(bytes(8) + sample.to_bytes())
    assert info.value.kind is DeserializeErrorKind.DISCRIMINATOR_MISMATCH
    assert anchor_error_code(info.value) is AnchorErrorCode.AccountDiscriminatorMismatch


def test_truncated_body_did_not_deserialize():
    with pytest.raises(AccountDeserializeError) as info:
        Sample.try_deserialize(DISC + b"\x01\x02")
    assert info.value.kind is DeserializeErrorKind.DID_NOT_DESERIALIZE
    assert anchor_error_code(info.value) is AnchorErrorCode.AccountDidNotDeserialize


def test_owner():
    expected = Pubkey.from_string("MarBmsSgKXdrN1egZf5sqe1TMai9K1rChYNDJgjq7aD")
    assert Sample.owner() == expected


@pytest.mark.parametrize(
    ("kind", "code"),
    [
        (DeserializeErrorKind.DISCRIMINATOR_NOT_FOUND, AnchorErrorCode.AccountDiscriminatorNotFound),
        (DeserializeErrorKind.DISCRIMINATOR_MISMATCH, AnchorErrorCode.AccountDiscriminatorMismatch),
        (DeserializeErrorKind.DID_NOT_DESERIALIZE, AnchorErrorCode.AccountDidNotDeserialize),
    ],
)
def test_anchor_error_code(kind, code):
    assert anchor_error_code(AccountDeserializeError(kind)) is code
    assert anchor_error_code(kind) is code


def test_account_meta_flags():
    key = Pubkey.new_unique()
    assert AccountMeta.new(key, True) == AccountMeta(key, True, True)
    assert AccountMeta.new_readonly(key, False) == AccountMeta(key, False, False)


def test_instruction_data_layout():
    assert U64.encode(1) == b"\x01" + bytes(7)
    assert Payload(lamports=1).data() == DISC + b"\x01" + bytes(7)


def test_bad_discriminator_length_rejected():
    with pytest.raises(TypeError):

        @dataclass
        class Broken(InstructionData):
            DISCRIMINATOR = b"\x01\x02"

    assert U64.decode(Payload(lamports=2).data(), 8) == (2, 16)


def test_builder_makes_instruction():
    first, second = Pubkey.new_unique(), Pubkey.new_unique()
    accounts = Accounts(first, second)
    ix = InstructionBuilder(accounts, Payload(lamports=5)).instruction()
    assert ix == Instruction(ID, Payload(lamports=5).data(), accounts.to_account_metas())


def test_builder_rejects_wrong_data_type():
    with pytest.raises(TypeError):
        InstructionBuilder(Accounts(Pubkey.new_unique(), Pubkey.new_unique()), Sample())