"""Share and value calculations in 64-bit lamport arithmetic."""

from __future__ import annotations

from marinade_sdk.errors import CommonError, MarinadeError

U64_MAX = 2**64 - 1


def _check_u64(*values: int) -> None:
    for value in values:
        if not 0 <= value <= U64_MAX:
            raise ValueError(f"{value} is not an unsigned 64-bit integer")


def proportional(amount: int, numerator: int, denominator: int) -> int:
    """Return amount * numerator / denominator, rounded down.

    A zero denominator returns the amount unchanged.
    """
    _check_u64(amount, numerator, denominator)
    if denominator == 0:
        return amount
    result = amount * numerator // denominator
    if result > U64_MAX:
        raise MarinadeError(CommonError.CalculationFailure)
    return result


def value_from_shares(shares: int, total_value: int, total_shares: int) -> int:
    """Value of a number of shares given the totals."""
    return proportional(shares, total_value, total_shares)


def shares_from_value(value: int, total_value: int, total_shares: int) -> int:
    """Shares bought by a value; with no shares minted yet, one per unit."""
    if total_shares == 0:
        _check_u64(value, total_value)
        return value
    return proportional(value, total_shares, total_value)