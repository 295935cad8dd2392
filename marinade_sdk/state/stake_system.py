"""Stake accounts the program manages and the list that records them."""

from __future__ import annotations

from dataclasses import dataclass

from marinade_sdk.codec import PUBKEY, U8, U32, U64, BorshStruct, borsh_field, struct
from marinade_sdk.pubkey import ID, Pubkey, find_program_address
from marinade_sdk.state.list import List


@dataclass
class StakeRecord(BorshStruct):
    """One stake account and its last observed delegation."""

    DISCRIMINATOR = b"staker__"

    stake_account: Pubkey = borsh_field(PUBKEY)
    last_update_delegated_lamports: int = borsh_field(U64)
    last_update_epoch: int = borsh_field(U64)
    is_emergency_unstaking: int = borsh_field(U8)


@dataclass
class StakeSystem(BorshStruct):
    """Stake list location and stake-delta parameters."""

    STAKE_WITHDRAW_SEED = b"withdraw"
    STAKE_DEPOSIT_SEED = b"deposit"

    stake_list: List = borsh_field(struct(List))
    delayed_unstake_cooling_down: int = borsh_field(U64)
    stake_deposit_bump_seed: int = borsh_field(U8)
    stake_withdraw_bump_seed: int = borsh_field(U8)
    slots_for_stake_delta: int = borsh_field(U64)
    last_stake_delta_epoch: int = borsh_field(U64)
    min_stake: int = borsh_field(U64)
    extra_stake_delta_runs: int = borsh_field(U32)

    @staticmethod
    def bytes_for_list(count: int, additional_record_space: int) -> int:
        """Account size for a stake list of count records with extra room per record."""
        return List.bytes_for(len(StakeRecord().to_bytes()) + additional_record_space, count)

    @staticmethod
    def find_stake_withdraw_authority(state: Pubkey) -> tuple[Pubkey, int]:
        """Address and bump of the stake withdraw authority of a state."""
        return find_program_address([bytes(state), StakeSystem.STAKE_WITHDRAW_SEED], ID)

    @staticmethod
    def find_stake_deposit_authority(state: Pubkey) -> tuple[Pubkey, int]:
        """Address and bump of the stake deposit authority of a state."""
        return find_program_address([bytes(state), StakeSystem.STAKE_DEPOSIT_SEED], ID)

    @property
    def stake_list_address(self) -> Pubkey:
        """The account holding the stake list."""
        return self.stake_list.account

    def stake_count(self) -> int:
        """Number of stake records."""
        return self.stake_list.len()

    def stake_list_capacity(self, stake_list_len: int) -> int:
        """How many records fit in a stake list account of the given length."""
        return self.stake_list.capacity(stake_list_len)

    def stake_record_size(self) -> int:
        """Size of one stake record in the list."""
        return self.stake_list.item_size

    def get(self, stake_list_data: bytes, index: int) -> StakeRecord:
        """Decode the stake record at index."""
        return self.stake_list.get(StakeRecord, stake_list_data, index, "stake_list")