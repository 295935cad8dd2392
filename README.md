# marinade_sdk

A pure-Python library for building instructions for the Marinade liquid
staking program and for reading its on-chain account data. It has no
dependencies outside the standard library.

## What it provides

- `marinade_sdk.pubkey`: the `Pubkey` type, `b58encode` and `b58decode`,
  and program derived addresses (`find_program_address`,
  `create_program_address`, `create_with_seed`). `ID` is the program's
  address.
- `marinade_sdk.errors`: `CommonError` codes, `ProgramError` with its
  `ProgramErrorKind`, and `MarinadeError`, a custom program error carrying
  a `CommonError` (reported as its code plus 300).
- `marinade_sdk.calc`: share and value arithmetic on unsigned 64-bit
  amounts (`proportional`, `shares_from_value`, `value_from_shares`).
- `marinade_sdk.codec`: a Borsh encoder and decoder for dataclasses
  (`BorshStruct`, `borsh_field`, `option`, `struct`, and kinds such as
  `U8`, `U32`, `U64`, `BOOL`, `PUBKEY`).
- `marinade_sdk.anchor`: `AccountMeta`, `Instruction`,
  `InstructionBuilder`, `InstructionData`, and discriminator-checked account
  deserialisation through `AccountData`. Failures raise
  `AccountDeserializeError`; `anchor_error_code` maps them to
  `AnchorErrorCode`.
- `marinade_sdk.derive`: the `instruction_data`, `instruction_accounts` and
  `account` declarations that describe instruction payloads and their
  account lists, and the `InstructionAccounts` base class.
- `marinade_sdk.instructions.admin`: the initialize and configuration
  instructions: `InitializeData`/`InitializeAccounts` (with the nested
  `LiqPoolInitializeData`/`LiqPoolInitializeAccounts`),
  `ChangeAuthorityData`/`ChangeAuthorityAccounts`,
  `ConfigLpData`/`ConfigLpAccounts`,
  `ConfigMarinadeData`/`ConfigMarinadeAccounts` and
  `ConfigValidatorSystemData`/`ConfigValidatorSystemAccounts`.
- `marinade_sdk.state`: account layouts `Fee`, `List`, `LiqPool`,
  `StakeSystem` and `StakeRecord`, `ValidatorSystem` and `ValidatorRecord`,
  and `DelayedUnstakeTicket`.

## Installing

```
pip install .
```

## Building an instruction

```python
from marinade_sdk.anchor import InstructionBuilder
from marinade_sdk.instructions.admin import ConfigMarinadeAccounts, ConfigMarinadeData
from marinade_sdk.pubkey import Pubkey
from marinade_sdk.state.fee import Fee

accounts = ConfigMarinadeAccounts(
    marinade=Pubkey.new_unique(),
    admin_authority=Pubkey.new_unique(),
)
data = ConfigMarinadeData().with_min_stake(1_000_000_000).with_rewards_fee(Fee.parse("2"))
instruction = InstructionBuilder(accounts, data).instruction()
```

`instruction.program_id` is the program's `ID`. `instruction.data` holds
the eight-byte discriminator followed by the Borsh-encoded arguments.
`instruction.accounts` lists each `AccountMeta` in declaration order, marked
writable or signer as declared; accounts of a nested account set follow the
set's own addresses.

The `with_*` methods of the configuration data return a new value and raise
`ValueError` if that parameter was already set. `InstructionBuilder` raises
`TypeError` when the data is not the type the accounts declare.

## Reading account data

```python
from marinade_sdk.state.ticket import DelayedUnstakeTicket

ticket = DelayedUnstakeTicket.try_deserialize(account_bytes)
```

`try_deserialize` checks the eight-byte discriminator first;
`try_deserialize_unchecked` skips that check. Records in the stake and
validator lists are read with `StakeSystem.get` and `ValidatorSystem.get`.

## Fees

```python
from marinade_sdk.state.fee import Fee

fee = Fee.parse("4.5")   # 450 basis points
fee.apply(10_000)        # 450
str(fee)                 # "4.5%"
```

A fee above 100% raises `MarinadeError`.

## What it does not do

The package builds instructions and decodes account data; it does not sign
or send transactions, and it does not talk to a cluster. Of the program's
instructions, only initialize and the configuration instructions listed
above are defined here; instructions for deposits, unstaking, liquidity and
validator management are not.

## Running the tests

```
pip install .[test]
pytest
```