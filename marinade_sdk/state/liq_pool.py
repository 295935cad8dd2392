"""The SOL/mSOL liquidity pool state and its fee curve."""

from __future__ import annotations

from dataclasses import dataclass

from marinade_sdk.calc import proportional
from marinade_sdk.codec import PUBKEY, U8, U64, BorshStruct, borsh_field, struct
from marinade_sdk.errors import CommonError, MarinadeError, ProgramError, ProgramErrorKind
from marinade_sdk.pubkey import (
    ID,
    TOKEN_PROGRAM_ID,
    Pubkey,
    create_with_seed,
    find_program_address,
)
from marinade_sdk.state.fee import Fee

_U64_MAX = 2**64 - 1
LIQUIDITY_CAP_REACHED = 3782


@dataclass
class LiqPool(BorshStruct):
    """Liquidity pool accounts, fee curve parameters and LP supply."""

    LP_MINT_AUTHORITY_SEED = b"liq_mint"
    SOL_LEG_SEED = b"liq_sol"
    MSOL_LEG_AUTHORITY_SEED = b"liq_st_sol_authority"
    MSOL_LEG_SEED = "liq_st_sol"

    lp_mint: Pubkey = borsh_field(PUBKEY)
    lp_mint_authority_bump_seed: int = borsh_field(U8)
    sol_leg_bump_seed: int = borsh_field(U8)
    msol_leg_authority_bump_seed: int = borsh_field(U8)
    msol_leg: Pubkey = borsh_field(PUBKEY)
    lp_liquidity_target: int = borsh_field(U64)
    lp_max_fee: Fee = borsh_field(struct(Fee))
    lp_min_fee: Fee = borsh_field(struct(Fee))
    treasury_cut: Fee = borsh_field(struct(Fee))
    lp_supply: int = borsh_field(U64)
    lent_from_sol_leg: int = borsh_field(U64)
    liquidity_sol_cap: int = borsh_field(U64)

    @staticmethod
    def find_lp_mint_authority(state: Pubkey) -> tuple[Pubkey, int]:
        """Address and bump of the LP mint authority of a state."""
        return find_program_address([bytes(state), LiqPool.LP_MINT_AUTHORITY_SEED], ID)

    @staticmethod
    def find_sol_leg_address(state: Pubkey) -> tuple[Pubkey, int]:
        """Address and bump of the pool's SOL leg of a state."""
        return find_program_address([bytes(state), LiqPool.SOL_LEG_SEED], ID)

    @staticmethod
    def find_msol_leg_authority(state: Pubkey) -> tuple[Pubkey, int]:
        """Address and bump of the authority over the pool's mSOL leg."""
        return find_program_address([bytes(state), LiqPool.MSOL_LEG_AUTHORITY_SEED], ID)

    @staticmethod
    def default_msol_leg_address(state: Pubkey) -> Pubkey:
        """The usual token account address of the pool's mSOL leg."""
        return create_with_seed(state, LiqPool.MSOL_LEG_SEED, TOKEN_PROGRAM_ID)

    def delta(self) -> int:
        """Spread between the maximum and minimum fee, never negative."""
        return max(0, self.lp_max_fee.basis_points - self.lp_min_fee.basis_points)

    def linear_fee(self, lamports: int) -> Fee:
        """Fee falling linearly from the maximum at zero liquidity to the minimum at target."""
        if lamports >= self.lp_liquidity_target:
            return self.lp_min_fee
        reduction = proportional(self.delta(), lamports, self.lp_liquidity_target)
        return Fee(self.lp_max_fee.basis_points - reduction)

    def on_lp_mint(self, amount: int) -> None:
        """Account for newly minted LP tokens."""
        total = self.lp_supply + amount
        if total > _U64_MAX:
            raise OverflowError("lp_supply overflow")
        self.lp_supply = total

    def on_lp_burn(self, amount: int) -> None:
        """Account for burnt LP tokens."""
        if amount > self.lp_supply:
            raise MarinadeError(CommonError.CalculationFailure)
        self.lp_supply -= amount

    def check_liquidity_cap(self, transfering_lamports: int, sol_leg_balance: int) -> None:
        """Raise when adding lamports would take the SOL leg above its cap."""
        result_amount = sol_leg_balance + transfering_lamports
        if result_amount > _U64_MAX:
            raise ProgramError(ProgramErrorKind.INVALID_ARGUMENT, "SOL overflow")
        if result_amount > self.liquidity_sol_cap:
            raise ProgramError.custom(
                LIQUIDITY_CAP_REACHED,
                f"Liquidity cap reached {result_amount}/{self.liquidity_sol_cap}",
            )