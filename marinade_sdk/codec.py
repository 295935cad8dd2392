"""Borsh binary encoding for dataclasses whose fields declare their wire kind."""

from __future__ import annotations

import copy
import dataclasses
from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import Any, TypeVar

from marinade_sdk.pubkey import PUBKEY_BYTES, Pubkey

_META = "borsh"

S = TypeVar("S", bound="BorshStruct")


class BorshError(ValueError):
    """Raised when a value cannot be encoded or bytes cannot be decoded."""


def _take(data: bytes, offset: int, size: int) -> tuple[bytes, int]:
    end = offset + size
    if offset < 0 or end > len(data):
        raise BorshError("unexpected end of input")
    return data[offset:end], end


class Kind(ABC):
    """How one field value is laid out on the wire."""

    @abstractmethod
    def encode(self, value: Any) -> bytes:
        """Encode a value into bytes."""

    @abstractmethod
    def decode(self, data: bytes, offset: int = 0) -> tuple[Any, int]:
        """Decode a value at an offset; return it with the offset past it."""

    @abstractmethod
    def default(self) -> Any:
        """The zero value of this kind."""


@dataclass(frozen=True)
class _Integer(Kind):
    size: int
    signed: bool

    def encode(self, value: int) -> bytes:
        if not isinstance(value, int):
            raise BorshError(f"expected an integer, got {type(value).__name__}")
        try:
            return int(value).to_bytes(self.size, "little", signed=self.signed)
        except OverflowError:
            raise BorshError(f"{value} does not fit in {self.size} bytes") from None

    def decode(self, data: bytes, offset: int = 0) -> tuple[int, int]:
        chunk, end = _take(data, offset, self.size)
        return int.from_bytes(chunk, "little", signed=self.signed), end

    def default(self) -> int:
        return 0


class _Bool(Kind):
    def encode(self, value: bool) -> bytes:
        return b"\x01" if value else b"\x00"

    def decode(self, data: bytes, offset: int = 0) -> tuple[bool, int]:
        chunk, end = _take(data, offset, 1)
        if chunk not in (b"\x00", b"\x01"):
            raise BorshError(f"invalid bool representation: {chunk[0]}")
        return chunk == b"\x01", end

    def default(self) -> bool:
        return False


class _Pubkey(Kind):
    def encode(self, value: Pubkey) -> bytes:
        if not isinstance(value, Pubkey):
            raise BorshError(f"expected a Pubkey, got {type(value).__name__}")
        return bytes(value)

    def decode(self, data: bytes, offset: int = 0) -> tuple[Pubkey, int]:
        chunk, end = _take(data, offset, PUBKEY_BYTES)
        return Pubkey(chunk), end

    def default(self) -> Pubkey:
        return Pubkey.default()


@dataclass(frozen=True)
class _Option(Kind):
    inner: Kind

    def encode(self, value: Any) -> bytes:
        if value is None:
            return b"\x00"
        return b"\x01" + self.inner.encode(value)

    def decode(self, data: bytes, offset: int = 0) -> tuple[Any, int]:
        tag, offset = _take(data, offset, 1)
        if tag == b"\x00":
            return None, offset
        if tag == b"\x01":
            return self.inner.decode(data, offset)
        raise BorshError(f"invalid option tag: {tag[0]}")

    def default(self) -> None:
        return None


@dataclass(frozen=True)
class _Struct(Kind):
    cls: type

    def encode(self, value: Any) -> bytes:
        if not isinstance(value, self.cls):
            raise BorshError(f"expected {self.cls.__name__}, got {type(value).__name__}")
        return value.to_bytes()

    def decode(self, data: bytes, offset: int = 0) -> tuple[Any, int]:
        return self.cls.decode(data, offset)

    def default(self) -> Any:
        return self.cls()


U8 = _Integer(1, False)
U16 = _Integer(2, False)
U32 = _Integer(4, False)
U64 = _Integer(8, False)
U128 = _Integer(16, False)
I32 = _Integer(4, True)
I64 = _Integer(8, True)
BOOL = _Bool()
PUBKEY = _Pubkey()


def option(kind: Kind) -> Kind:
    """A value of the given kind that may be absent."""
    return _Option(kind)


def struct(cls: type) -> Kind:
    """A nested BorshStruct."""
    if not (isinstance(cls, type) and issubclass(cls, BorshStruct)):
        raise TypeError(f"{cls!r} is not a BorshStruct")
    return _Struct(cls)


def borsh_field(kind: Kind, default: Any = dataclasses.MISSING) -> Any:
    """Declare a dataclass field encoded as the given kind."""
    metadata = {_META: kind}
    if default is dataclasses.MISSING:
        return dataclasses.field(default_factory=kind.default, metadata=metadata)
    if type(default).__hash__ is None:
        return dataclasses.field(
            default_factory=lambda: copy.deepcopy(default), metadata=metadata
        )
    return dataclasses.field(default=default, metadata=metadata)


class BorshStruct:
    """Base for dataclasses serialized field by field in declaration order.

    Only fields declared with borsh_field take part in the encoding.
    """

    @classmethod
    def _borsh_fields(cls) -> list[tuple[str, Kind]]:
        return [
            (f.name, f.metadata[_META])
            for f in dataclasses.fields(cls)
            if _META in f.metadata
        ]

    def to_bytes(self) -> bytes:
        """Encode every field in order."""
        return b"".join(
            kind.encode(getattr(self, name)) for name, kind in self._borsh_fields()
        )

    @classmethod
    def decode(cls: type[S], data: bytes, offset: int = 0) -> tuple[S, int]:
        """Decode an instance at an offset; return it with the offset past it."""
        data = bytes(data)
        values = {}
        for name, kind in cls._borsh_fields():
            values[name], offset = kind.decode(data, offset)
        return cls(**values), offset

    @classmethod
    def from_bytes(cls: type[S], data: bytes) -> S:
        """Decode an instance that must use every byte given."""
        value, end = cls.decode(data, 0)
        if end != len(data):
            raise BorshError("not all bytes read")
        return value