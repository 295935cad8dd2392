"""Validators the program stakes with and the list that records them."""

from __future__ import annotations

from dataclasses import dataclass

from marinade_sdk.calc import proportional
from marinade_sdk.codec import PUBKEY, U8, U32, U64, BorshStruct, borsh_field, struct
from marinade_sdk.errors import ProgramError, ProgramErrorKind
from marinade_sdk.pubkey import ID, Pubkey, create_program_address, find_program_address
from marinade_sdk.state.list import List

_U64_MAX = 2**64 - 1


@dataclass
class ValidatorRecord(BorshStruct):
    """One validator: vote account, staked balance and score."""

    DISCRIMINATOR = b"validatr"
    DUPLICATE_FLAG_SEED = b"unique_validator"

    validator_account: Pubkey = borsh_field(PUBKEY)
    active_balance: int = borsh_field(U64)
    score: int = borsh_field(U32)
    last_stake_delta_epoch: int = borsh_field(U64)
    duplication_flag_bump_seed: int = borsh_field(U8)

    @staticmethod
    def find_duplication_flag(
        state: Pubkey, validator_account: Pubkey
    ) -> tuple[Pubkey, int]:
        """Address and bump of the flag that marks a validator as listed."""
        return find_program_address(
            [bytes(state), ValidatorRecord.DUPLICATE_FLAG_SEED, bytes(validator_account)],
            ID,
        )

    def duplication_flag_seeds(self, state: Pubkey) -> list[bytes]:
        """Seeds, bump included, of this validator's duplication flag."""
        return [
            bytes(state),
            self.DUPLICATE_FLAG_SEED,
            bytes(self.validator_account),
            bytes([self.duplication_flag_bump_seed]),
        ]

    def duplication_flag_address(self, state: Pubkey) -> Pubkey:
        """Address of this validator's duplication flag."""
        return create_program_address(self.duplication_flag_seeds(state), ID)

    @classmethod
    def create(
        cls,
        validator_account: Pubkey,
        score: int,
        state: Pubkey,
        duplication_flag_address: Pubkey,
    ) -> ValidatorRecord:
        """A new record; the given duplication flag must be the validator's own."""
        actual, bump = cls.find_duplication_flag(state, validator_account)
        if duplication_flag_address != actual:
            raise ProgramError(
                ProgramErrorKind.INVALID_ARGUMENT,
                f"Duplication flag {duplication_flag_address} does not match {actual}",
            )
        return cls(
            validator_account=validator_account,
            active_balance=0,
            score=score,
            last_stake_delta_epoch=_U64_MAX,
            duplication_flag_bump_seed=bump,
        )


@dataclass
class ValidatorSystem(BorshStruct):
    """Validator list location, manager and score totals."""

    validator_list: List = borsh_field(struct(List))
    manager_authority: Pubkey = borsh_field(PUBKEY)
    total_validator_score: int = borsh_field(U32)
    total_active_balance: int = borsh_field(U64)
    auto_add_validator_enabled: int = borsh_field(U8)

    @staticmethod
    def bytes_for_list(count: int, additional_record_space: int) -> int:
        """Account size for a validator list of count records with extra room per record."""
        return List.bytes_for(
            len(ValidatorRecord().to_bytes()) + additional_record_space, count
        )

    @property
    def validator_list_address(self) -> Pubkey:
        """The account holding the validator list."""
        return self.validator_list.account

    def validator_count(self) -> int:
        """Number of validator records."""
        return self.validator_list.len()

    def validator_list_capacity(self, validator_list_len: int) -> int:
        """How many records fit in a validator list account of the given length."""
        return self.validator_list.capacity(validator_list_len)

    def validator_record_size(self) -> int:
        """Size of one validator record in the list."""
        return self.validator_list.item_size

    def get(self, validator_list_data: bytes, index: int) -> ValidatorRecord:
        """Decode the validator record at index."""
        return self.validator_list.get(
            ValidatorRecord, validator_list_data, index, "validator_list"
        )

    def validator_stake_target(
        self, validator: ValidatorRecord, total_stake_target: int
    ) -> int:
        """The validator's share of the total stake, by score."""
        if self.total_validator_score == 0:
            return 0
        return proportional(
            total_stake_target, validator.score, self.total_validator_score
        )