"""Fees expressed in basis points."""

from __future__ import annotations

import math
from dataclasses import dataclass

from marinade_sdk.codec import U32, BorshStruct, borsh_field
from marinade_sdk.errors import CommonError, MarinadeError

MAX_BASIS_POINTS = 10_000
_U32_MAX = 2**32 - 1
_U64_MASK = 2**64 - 1


@dataclass(frozen=True, order=True)
class Fee(BorshStruct):
    """A fee of basis_points hundredths of a percent."""

    basis_points: int = borsh_field(U32)

    def __str__(self) -> str:
        whole, part = divmod(self.basis_points, 100)
        if part == 0:
            return f"{whole}%"
        return f"{whole}.{part:02d}".rstrip("0") + "%"

    @classmethod
    def from_basis_points(cls, basis_points: int) -> Fee:
        """A fee of the given number of basis points."""
        return cls(basis_points)

    def check_max(self, max_basis_points: int) -> None:
        """Raise FeeTooHigh when the fee is above the cap."""
        if self.basis_points > max_basis_points:
            raise MarinadeError(CommonError.FeeTooHigh)

    def check(self) -> None:
        """Raise FeeTooHigh when the fee is above 100%."""
        self.check_max(MAX_BASIS_POINTS)

    def apply(self, lamports: int) -> int:
        """The fee charged on an amount of lamports, rounded down."""
        return (lamports * self.basis_points // MAX_BASIS_POINTS) & _U64_MASK

    @classmethod
    def from_float(cls, n: float) -> Fee:
        """A fee from a percentage: 4.5 gives 450 basis points."""
        if math.isnan(n):
            basis_points = 0
        elif math.isinf(n):
            raise MarinadeError(CommonError.CalculationFailure)
        else:
            basis_points = math.floor(n * 100.0)
        if not 0 <= basis_points <= _U32_MAX:
            raise MarinadeError(CommonError.CalculationFailure)
        fee = cls.from_basis_points(basis_points)
        fee.check()
        return fee

    @classmethod
    def parse(cls, text: str) -> Fee:
        """A fee from a percentage written as a number."""
        if text != text.strip() or "_" in text:
            raise MarinadeError(CommonError.CalculationFailure)
        try:
            value = float(text)
        except ValueError:
            raise MarinadeError(CommonError.CalculationFailure) from None
        return cls.from_float(value)