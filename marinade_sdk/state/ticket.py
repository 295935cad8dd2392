"""Tickets for SOL that becomes claimable after a delayed unstake."""

from __future__ import annotations

from dataclasses import dataclass

from marinade_sdk.anchor import AccountData
from marinade_sdk.codec import PUBKEY, U64, borsh_field
from marinade_sdk.pubkey import ID, Pubkey


@dataclass
class DelayedUnstakeTicket(AccountData):
    """SOL owed to a beneficiary once the unstake it was ordered for is done."""

    DISCRIMINATOR = bytes([133, 77, 18, 98, 211, 1, 231, 3])
    OWNER = ID

    state_address: Pubkey = borsh_field(PUBKEY)
    beneficiary: Pubkey = borsh_field(PUBKEY)
    lamports_amount: int = borsh_field(U64)
    created_epoch: int = borsh_field(U64)