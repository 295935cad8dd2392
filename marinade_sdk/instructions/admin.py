"""Instructions that initialize the program and change its configuration."""

from __future__ import annotations

import dataclasses
from dataclasses import dataclass
from typing import Any, TypeVar

from marinade_sdk.anchor import InstructionData
from marinade_sdk.codec import (
    BOOL,
    PUBKEY,
    U32,
    U64,
    borsh_field,
    option,
    struct,
)
from marinade_sdk.derive import (
    InstructionAccounts,
    account,
    instruction_accounts,
    instruction_data,
)
from marinade_sdk.pubkey import ID, Pubkey
from marinade_sdk.state.fee import Fee

D = TypeVar("D")


def _set_once(data: D, name: str, value: Any, message: str) -> D:
    """Return a copy of data with an optional field set; it must be unset."""
    if getattr(data, name) is not None:
        raise ValueError(message)
    return dataclasses.replace(data, **{name: value})


@instruction_data([50, 106, 66, 104, 99, 118, 145, 88])
@dataclass(frozen=True)
class ChangeAuthorityData(InstructionData):
    """New authorities; unset ones stay as they are."""

    admin: Pubkey | None = borsh_field(option(PUBKEY))
    validator_manager: Pubkey | None = borsh_field(option(PUBKEY))
    operational_sol_account: Pubkey | None = borsh_field(option(PUBKEY))
    treasury_msol_account: Pubkey | None = borsh_field(option(PUBKEY))

    def with_admin(self, v: Pubkey) -> ChangeAuthorityData:
        """Set the new admin."""
        return _set_once(self, "admin", v, "Parameter admin pubkey was already set")

    def with_validator_manager(self, v: Pubkey) -> ChangeAuthorityData:
        """Set the new validator manager."""
        return _set_once(
            self,
            "validator_manager",
            v,
            "Parameter validator manager pubkey was already set",
        )

    def with_operational_sol_account(self, v: Pubkey) -> ChangeAuthorityData:
        """Set the new operational SOL account."""
        return _set_once(
            self,
            "operational_sol_account",
            v,
            "Parameter operational sol account pubkey was already set",
        )

    def with_treasury_msol_account(self, v: Pubkey) -> ChangeAuthorityData:
        """Set the new treasury mSOL account."""
        return _set_once(
            self,
            "treasury_msol_account",
            v,
            "Parameter treasury msol account pubkey was already set",
        )


@instruction_accounts(ID, ChangeAuthorityData)
@dataclass
class ChangeAuthorityAccounts(InstructionAccounts):
    """Accounts of the change-authority instruction."""

    marinade: Pubkey = account(mut=True)
    admin_authority: Pubkey = account(signer=True)


@instruction_data([10, 24, 168, 119, 86, 48, 225, 17])
@dataclass(frozen=True)
class ConfigLpData(InstructionData):
    """New liquidity pool parameters; unset ones stay as they are."""

    min_fee: Fee | None = borsh_field(option(struct(Fee)))
    max_fee: Fee | None = borsh_field(option(struct(Fee)))
    liquidity_target: int | None = borsh_field(option(U64))
    treasury_cut: Fee | None = borsh_field(option(struct(Fee)))

    def with_min_fee(self, v: Fee) -> ConfigLpData:
        """Set the minimum fee."""
        return _set_once(self, "min_fee", v, "Min fee was already set")

    def with_max_fee(self, v: Fee) -> ConfigLpData:
        """Set the maximum fee."""
        return _set_once(self, "max_fee", v, "Max fee was already set")

    def with_liquidity_target(self, v: int) -> ConfigLpData:
        """Set the liquidity target."""
        return _set_once(self, "liquidity_target", v, "Liquidity target was already set")

    def with_treasury_cut(self, v: Fee) -> ConfigLpData:
        """Set the treasury cut."""
        return _set_once(self, "treasury_cut", v, "Treasury cut was already set")


@instruction_accounts(ID, ConfigLpData)
@dataclass
class ConfigLpAccounts(InstructionAccounts):
    """Accounts of the config-lp instruction."""

    marinade: Pubkey = account(mut=True)
    admin_authority: Pubkey = account(signer=True)


@instruction_data([67, 3, 34, 114, 190, 185, 17, 62])
@dataclass(frozen=True)
class ConfigMarinadeData(InstructionData):
    """New program parameters; unset ones stay as they are."""

    rewards_fee: Fee | None = borsh_field(option(struct(Fee)))
    slots_for_stake_delta: int | None = borsh_field(option(U64))
    min_stake: int | None = borsh_field(option(U64))
    min_deposit: int | None = borsh_field(option(U64))
    min_withdraw: int | None = borsh_field(option(U64))
    staking_sol_cap: int | None = borsh_field(option(U64))
    liquidity_sol_cap: int | None = borsh_field(option(U64))
    auto_add_validator_enabled: bool | None = borsh_field(option(BOOL))

    def with_rewards_fee(self, v: Fee) -> ConfigMarinadeData:
        """Set the rewards fee."""
        return _set_once(self, "rewards_fee", v, "Parameter rewards_fee was already set")

    def with_slots_for_stake_delta(self, v: int) -> ConfigMarinadeData:
        """Set the slots before epoch end when stake-delta may start."""
        return _set_once(
            self,
            "slots_for_stake_delta",
            v,
            "Parameter slots_for_stake_delta was already set",
        )

    def with_min_stake(self, v: int) -> ConfigMarinadeData:
        """Set the minimal stake delegation."""
        return _set_once(self, "min_stake", v, "Parameter min_stake was already set")

    def with_min_deposit(self, v: int) -> ConfigMarinadeData:
        """Set the minimal deposit."""
        return _set_once(self, "min_deposit", v, "Parameter min_deposit was already set")

    def with_min_withdraw(self, v: int) -> ConfigMarinadeData:
        """Set the minimal withdrawal."""
        return _set_once(self, "min_withdraw", v, "Parameter min_withdraw was already set")

    def with_staking_sol_cap(self, v: int) -> ConfigMarinadeData:
        """Set the staking cap."""
        return _set_once(
            self, "staking_sol_cap", v, "Parameter staking_sol_cap was already set"
        )

    def with_liquidity_sol_cap(self, v: int) -> ConfigMarinadeData:
        """Set the liquidity pool cap."""
        return _set_once(
            self, "liquidity_sol_cap", v, "Parameter liquidity_sol_cap was already set"
        )

    def with_auto_add_validator_enabled(self, v: bool) -> ConfigMarinadeData:
        """Enable or disable adding validators on stake account deposit."""
        return _set_once(
            self,
            "auto_add_validator_enabled",
            v,
            "Parameter auto_add_validator_enabled was already set",
        )


@instruction_accounts(ID, ConfigMarinadeData)
@dataclass
class ConfigMarinadeAccounts(InstructionAccounts):
    """Accounts of the config-marinade instruction."""

    marinade: Pubkey = account(mut=True)
    admin_authority: Pubkey = account(signer=True)


@instruction_data([27, 90, 97, 209, 17, 115, 7, 40])
@dataclass(frozen=True)
class ConfigValidatorSystemData(InstructionData):
    """Extra stake-delta runs allowed in the current epoch."""

    extra_runs: int = borsh_field(U32)


@instruction_accounts(ID, ConfigValidatorSystemData)
@dataclass
class ConfigValidatorSystemAccounts(InstructionAccounts):
    """Accounts of the config-validator-system instruction."""

    marinade: Pubkey = account(mut=True)
    manager_authority: Pubkey = account(signer=True)


@instruction_data([1, 2, 3, 4, 5, 6, 7, 8])
@dataclass(frozen=True)
class LiqPoolInitializeData(InstructionData):
    """Initial liquidity pool parameters, nested in the initialize data."""

    lp_liquidity_target: int = borsh_field(U64)
    lp_max_fee: Fee = borsh_field(struct(Fee))
    lp_min_fee: Fee = borsh_field(struct(Fee))
    lp_treasury_cut: Fee = borsh_field(struct(Fee))


@instruction_data([175, 175, 109, 31, 13, 152, 155, 237])
@dataclass(frozen=True)
class InitializeData(InstructionData):
    """Parameters of a new program state."""

    admin_authority: Pubkey = borsh_field(PUBKEY)
    validator_manager_authority: Pubkey = borsh_field(PUBKEY)
    min_stake: int = borsh_field(U64)
    reward_fee: Fee = borsh_field(struct(Fee))
    liq_pool: LiqPoolInitializeData = borsh_field(struct(LiqPoolInitializeData))
    additional_stake_record_space: int = borsh_field(U32)
    additional_validator_record_space: int = borsh_field(U32)
    slots_for_stake_delta: int = borsh_field(U64)


@instruction_accounts(ID, LiqPoolInitializeData)
@dataclass
class LiqPoolInitializeAccounts(InstructionAccounts):
    """Liquidity pool accounts of the initialize instruction."""

    lp_mint: Pubkey = account()
    sol_leg_pda: Pubkey = account()
    msol_leg: Pubkey = account()


@instruction_accounts(ID, InitializeData)
@dataclass
class InitializeAccounts(InstructionAccounts):
    """Accounts of the initialize instruction."""

    creator_authority: Pubkey = account(signer=True)
    marinade: Pubkey = account()
    reserve_pda: Pubkey = account()
    stake_list: Pubkey = account(mut=True)
    validator_list: Pubkey = account(mut=True)
    msol_mint: Pubkey = account()
    operational_sol_account: Pubkey = account()
    liq_pool: LiqPoolInitializeAccounts = account()
    treasury_msol_account: Pubkey = account()
    clock: Pubkey = account()
    rent: Pubkey = account()