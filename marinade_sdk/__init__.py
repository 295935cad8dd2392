"""Instruction builders, account layouts and calculations for the Marinade staking program."""

__version__ = "0.1.0"