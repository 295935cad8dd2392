"""Fixed-size records stored one after another in an account after a header."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Protocol

from marinade_sdk.codec import PUBKEY, U32, BorshError, BorshStruct, borsh_field
from marinade_sdk.errors import CommonError, MarinadeError, ProgramError, ProgramErrorKind
from marinade_sdk.pubkey import Pubkey

HEADER_LEN = 8
_U32_MAX = 2**32 - 1


class _Decodable(Protocol):
    def decode(self, data: bytes, offset: int = 0) -> tuple[Any, int]: ...


@dataclass
class List(BorshStruct):
    """Where a record list lives and how many records of what size it holds."""

    account: Pubkey = borsh_field(PUBKEY)
    item_size: int = borsh_field(U32)
    count: int = borsh_field(U32)
    new_account: Pubkey = borsh_field(PUBKEY)
    copied_count: int = borsh_field(U32)

    @staticmethod
    def bytes_for(item_size: int, count: int) -> int:
        """Account size needed for count records of item_size bytes."""
        total = HEADER_LEN + count * item_size
        if total > _U32_MAX:
            raise OverflowError("list size does not fit in 32 bits")
        return total

    @staticmethod
    def capacity_of(item_size: int, account_len: int) -> int:
        """How many records of item_size bytes fit in an account."""
        usable = (account_len & _U32_MAX) - HEADER_LEN
        if usable < 0:
            raise OverflowError("account is smaller than the list header")
        return usable // item_size

    def len(self) -> int:
        """Number of records in the list."""
        return self.count

    def __len__(self) -> int:
        return self.count

    def is_empty(self) -> bool:
        """Whether the list holds no records."""
        return self.count == 0

    def is_changing_account(self) -> bool:
        """Whether the list is being moved to a new account."""
        return self.new_account != Pubkey.default()

    def capacity(self, account_len: int) -> int:
        """How many records fit in an account of the given length."""
        usable = account_len - HEADER_LEN
        if usable < 0:
            raise ProgramError(ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL)
        if usable > _U32_MAX:
            raise MarinadeError(CommonError.CalculationFailure)
        if self.item_size == 0:
            return _U32_MAX
        return usable // self.item_size

    def get(self, item_type: _Decodable, data: bytes, index: int, list_name: str) -> Any:
        """Decode the record at index from the list account's data."""
        if index >= self.count:
            raise ProgramError(
                ProgramErrorKind.INVALID_ARGUMENT,
                f"list {list_name} index out of bounds ({index}/{self.count})",
            )
        start = HEADER_LEN + index * self.item_size
        end = start + self.item_size
        data = bytes(data)
        if end > len(data):
            raise ProgramError(
                ProgramErrorKind.ACCOUNT_DATA_TOO_SMALL,
                f"list {list_name} data ends before record {index}",
            )
        try:
            value, _ = item_type.decode(data[start:end], 0)
        except BorshError as err:
            raise ProgramError(ProgramErrorKind.BORSH_IO_ERROR, str(err)) from None
        return value