"""Class decorators that turn dataclasses into instruction data and account sets."""

from __future__ import annotations

import dataclasses
from collections.abc import Iterable
from dataclasses import dataclass
from typing import Any, ClassVar, TypeVar

from marinade_sdk.anchor import DISCRIMINATOR_LEN, AccountMeta, InstructionData
from marinade_sdk.pubkey import Pubkey

_META = "account"
_ACCOUNTS_SUFFIX = "Accounts"

T = TypeVar("T", bound=type)


class DeriveError(TypeError):
    """Raised when a class cannot be declared as instruction data or accounts."""


@dataclass(frozen=True)
class _AccountFlags:
    mut: bool = False
    signer: bool = False


@dataclass(frozen=True)
class _AccountField:
    name: str
    is_pubkey: bool
    flags: _AccountFlags


def _derive(cls: type, base: type, namespace: dict[str, Any]) -> type:
    """Return cls with base mixed in and the namespace set on it."""
    if issubclass(cls, base):
        for key, value in namespace.items():
            setattr(cls, key, value)
        return cls
    attrs = {
        "__module__": cls.__module__,
        "__qualname__": cls.__qualname__,
        "__doc__": cls.__doc__,
        **namespace,
    }
    try:
        return type(cls.__name__, (cls, base), attrs)
    except TypeError as err:
        raise DeriveError(f"cannot derive {base.__name__} for {cls.__name__}: {err}") from None


def _require_dataclass(cls: Any, what: str) -> None:
    if not (isinstance(cls, type) and dataclasses.is_dataclass(cls)):
        raise DeriveError(f"{what} can only be applied to dataclasses")


def _discriminator_bytes(discriminator: bytes | Iterable[int]) -> bytes:
    try:
        disc = bytes(discriminator)
    except (TypeError, ValueError) as err:
        raise DeriveError(f"invalid discriminator: {err}") from None
    if len(disc) != DISCRIMINATOR_LEN:
        raise DeriveError(
            f"a discriminator is {DISCRIMINATOR_LEN} bytes, got {len(disc)}"
        )
    return disc


def instruction_data(discriminator: bytes | Iterable[int]):
    """Declare a dataclass as instruction data sent with the given discriminator."""
    disc = _discriminator_bytes(discriminator)

    def decorate(cls: T) -> T:
        _require_dataclass(cls, "instruction_data")
        return _derive(cls, InstructionData, {"DISCRIMINATOR": disc})

    return decorate


def account(*, mut: bool = False, signer: bool = False) -> Any:
    """Declare an account field as writable and/or as a required signer."""
    return dataclasses.field(metadata={_META: _AccountFlags(mut=mut, signer=signer)})


def _strip_accounts_suffix(name: str) -> str:
    if not name.endswith(_ACCOUNTS_SUFFIX):
        raise DeriveError(
            f"Struct {name} annotated with InstructionAccounts is expected "
            f"to have a name ending with '{_ACCOUNTS_SUFFIX}'"
        )
    return name[: -len(_ACCOUNTS_SUFFIX)]


def _annotation_name(annotation: Any) -> str:
    if isinstance(annotation, str):
        return annotation.strip()
    if isinstance(annotation, type):
        return annotation.__name__
    return str(annotation)


def _account_field(field: dataclasses.Field) -> _AccountField:
    flags = field.metadata.get(_META, _AccountFlags())
    annotation = field.type
    if isinstance(annotation, type) and issubclass(annotation, Pubkey):
        is_pubkey = True
    else:
        type_name = _annotation_name(annotation)
        is_pubkey = type_name.endswith("Pubkey")
        if not is_pubkey:
            _strip_accounts_suffix(type_name.rsplit(".", 1)[-1])
    return _AccountField(field.name, is_pubkey, flags)


class InstructionAccounts:
    """A set of accounts an instruction takes, listed in declaration order.

    Address fields come first; accounts of nested account sets follow.
    """

    OWNER: ClassVar[Pubkey]
    DATA: ClassVar[type | None] = None
    DATA_NAME: ClassVar[str] = ""
    _ACCOUNT_FIELDS: ClassVar[tuple[_AccountField, ...]] = ()

    def to_account_metas(self) -> list[AccountMeta]:
        """The account metas of this set and of every nested set."""
        metas: list[AccountMeta] = []
        nested: list[InstructionAccounts] = []
        for spec in self._ACCOUNT_FIELDS:
            value = getattr(self, spec.name)
            if spec.is_pubkey:
                if not isinstance(value, Pubkey):
                    raise TypeError(
                        f"field {spec.name} expects a Pubkey, got {type(value).__name__}"
                    )
                metas.append(AccountMeta(value, spec.flags.signer, spec.flags.mut))
            else:
                if not isinstance(value, InstructionAccounts):
                    raise TypeError(
                        f"field {spec.name} expects an account set, "
                        f"got {type(value).__name__}"
                    )
                nested.append(value)
        for child in nested:
            metas.extend(child.to_account_metas())
        return metas

    @classmethod
    def owner(cls) -> Pubkey:
        """The program these accounts are passed to."""
        return cls.OWNER


def instruction_accounts(owner: Pubkey, data: type | None = None):
    """Declare a dataclass as the accounts of an instruction of the owner program."""
    if not isinstance(owner, Pubkey):
        raise DeriveError("'ownerid' argument is required and must be a Pubkey")
    if data is not None and not (
        isinstance(data, type) and issubclass(data, InstructionData)
    ):
        raise DeriveError(f"data {data!r} is not an instruction data class")

    def decorate(cls: T) -> T:
        _require_dataclass(cls, "instruction_accounts")
        stripped = _strip_accounts_suffix(cls.__name__)
        fields = tuple(_account_field(f) for f in dataclasses.fields(cls))
        return _derive(
            cls,
            InstructionAccounts,
            {
                "OWNER": owner,
                "DATA": data,
                "DATA_NAME": data.__name__ if data is not None else f"{stripped}Data",
                "_ACCOUNT_FIELDS": fields,
            },
        )

    return decorate