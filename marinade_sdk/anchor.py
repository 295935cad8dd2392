"""Account discriminators, account deserialization and instruction building."""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum, IntEnum
from typing import ClassVar, Protocol, TypeVar

from marinade_sdk.codec import BorshError, BorshStruct
from marinade_sdk.pubkey import Pubkey

DISCRIMINATOR_LEN = 8

A = TypeVar("A", bound="AccountData")


class DeserializeErrorKind(Enum):
    """Why account data could not be turned into an account value."""

    DISCRIMINATOR_NOT_FOUND = "DiscriminatorNotFound"
    DISCRIMINATOR_MISMATCH = "DiscriminatorMismatch"
    DID_NOT_DESERIALIZE = "DidNotDeserialize"


class AccountDeserializeError(ValueError):
    """Raised when account data does not hold the expected account type."""

    def __init__(self, kind: DeserializeErrorKind) -> None:
        self.kind = kind
        super().__init__(kind.value)


class AnchorErrorCode(IntEnum):
    """Framework error codes that deserialization failures map onto."""

    AccountDiscriminatorNotFound = 3001
    AccountDiscriminatorMismatch = 3002
    AccountDidNotDeserialize = 3003


_ANCHOR_CODES = {
    DeserializeErrorKind.DISCRIMINATOR_NOT_FOUND: AnchorErrorCode.AccountDiscriminatorNotFound,
    DeserializeErrorKind.DISCRIMINATOR_MISMATCH: AnchorErrorCode.AccountDiscriminatorMismatch,
    DeserializeErrorKind.DID_NOT_DESERIALIZE: AnchorErrorCode.AccountDidNotDeserialize,
}


def anchor_error_code(
    error: AccountDeserializeError | DeserializeErrorKind,
) -> AnchorErrorCode:
    """The framework error code for a deserialization failure."""
    kind = error.kind if isinstance(error, AccountDeserializeError) else error
    return _ANCHOR_CODES[kind]


@dataclass(frozen=True)
class AccountMeta:
    """An account an instruction touches, with its access flags."""

    pubkey: Pubkey
    is_signer: bool
    is_writable: bool

    @classmethod
    def new(cls, pubkey: Pubkey, is_signer: bool) -> AccountMeta:
        """A writable account."""
        return cls(pubkey, is_signer, True)

    @classmethod
    def new_readonly(cls, pubkey: Pubkey, is_signer: bool) -> AccountMeta:
        """A read-only account."""
        return cls(pubkey, is_signer, False)


@dataclass(frozen=True)
class Instruction:
    """A program invocation: program, accounts and data bytes."""

    program_id: Pubkey
    data: bytes
    accounts: list[AccountMeta] = field(default_factory=list)


class _Discriminated(BorshStruct):
    DISCRIMINATOR: ClassVar[bytes]

    def __init_subclass__(cls, **kwargs: object) -> None:
        super().__init_subclass__(**kwargs)
        disc = cls.__dict__.get("DISCRIMINATOR")
        if disc is not None:
            disc = bytes(disc)
            if len(disc) != DISCRIMINATOR_LEN:
                raise TypeError(
                    f"{cls.__name__}.DISCRIMINATOR must be {DISCRIMINATOR_LEN} bytes"
                )
            cls.DISCRIMINATOR = disc


class InstructionData(_Discriminated):
    """Instruction arguments, sent as discriminator followed by the encoded fields."""

    def data(self) -> bytes:
        """The instruction data bytes."""
        return bytes(self.DISCRIMINATOR) + self.to_bytes()


class AccountData(_Discriminated):
    """Account state stored as discriminator followed by the encoded fields."""

    OWNER: ClassVar[Pubkey]

    @classmethod
    def owner(cls) -> Pubkey:
        """The program expected to own accounts of this type."""
        return cls.OWNER

    @classmethod
    def try_deserialize_unchecked(cls: type[A], data: bytes) -> A:
        """Decode the fields after the discriminator without checking it."""
        try:
            value, _ = cls.decode(bytes(data), DISCRIMINATOR_LEN)
        except BorshError:
            raise AccountDeserializeError(
                DeserializeErrorKind.DID_NOT_DESERIALIZE
            ) from None
        return value

    @classmethod
    def try_deserialize(cls: type[A], data: bytes) -> A:
        """Decode account data after checking its discriminator."""
        data = bytes(data)
        if len(data) < DISCRIMINATOR_LEN:
            raise AccountDeserializeError(DeserializeErrorKind.DISCRIMINATOR_NOT_FOUND)
        if data[:DISCRIMINATOR_LEN] != bytes(cls.DISCRIMINATOR):
            raise AccountDeserializeError(DeserializeErrorKind.DISCRIMINATOR_MISMATCH)
        return cls.try_deserialize_unchecked(data)


class ToAccountMetas(Protocol):
    """A set of accounts that can list itself for an instruction."""

    def to_account_metas(self) -> list[AccountMeta]: ...

    @classmethod
    def owner(cls) -> Pubkey: ...


@dataclass
class InstructionBuilder:
    """Pairs an instruction's accounts with its data."""

    accounts: ToAccountMetas
    data: InstructionData

    def __post_init__(self) -> None:
        expected = getattr(type(self.accounts), "DATA", None)
        if isinstance(expected, type) and not isinstance(self.data, expected):
            raise TypeError(
                f"{type(self.accounts).__name__} takes {expected.__name__}, "
                f"got {type(self.data).__name__}"
            )

    def instruction(self) -> Instruction:
        """Build the instruction addressed to the accounts' owner program."""
        return Instruction(
            self.accounts.owner(),
            self.data.data(),
            list(self.accounts.to_account_metas()),
        )