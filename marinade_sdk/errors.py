"""Error codes of the liquid staking program and the generic program errors."""

from __future__ import annotations

from enum import Enum, IntEnum

ERROR_CODE_OFFSET = 300


class CommonError(IntEnum):
    """Errors shared by the program's calculations and checks."""

    WrongReserveOwner = 0
    NonEmptyReserveData = 1
    InvalidInitialReserveLamports = 2
    ZeroValidatorChunkSize = 3
    TooBigValidatorChunkSize = 4
    ZeroCreditChunkSize = 5
    TooBigCreditChunkSize = 6
    TooLowCreditFee = 7
    InvalidMintAuthority = 8
    MintHasInitialSupply = 9
    InvalidOwnerFeeState = 10
    InvalidProgramId = 6116
    UnexpectedAccount = 65140
    CalculationFailure = 51619
    AccountWithLockup = 45694
    NumberTooLow = 7892
    NumberTooHigh = 7893
    FeeTooHigh = 4052
    FeesWrongWayRound = 4053
    LiquidityTargetTooLow = 4054
    TicketNotDue = 4055
    TicketNotReady = 4056
    WrongBeneficiary = 4057
    StakeAccountNotUpdatedYet = 4058
    StakeNotDelegated = 4059
    StakeAccountIsEmergencyUnstaking = 4060
    InsufficientLiquidity = 4205
    InvalidValidator = 47525

    def program_error_code(self) -> int:
        """The custom program error code this error is reported as."""
        return int(self) + ERROR_CODE_OFFSET

    def __str__(self) -> str:
        return self.name


class ProgramErrorKind(Enum):
    """Kinds of error a program may return."""

    CUSTOM = "custom program error"
    INVALID_ARGUMENT = "invalid program argument"
    INVALID_INSTRUCTION_DATA = "invalid instruction data"
    INVALID_ACCOUNT_DATA = "invalid account data for instruction"
    ACCOUNT_DATA_TOO_SMALL = "account data too small for instruction"
    BORSH_IO_ERROR = "failed to serialize or deserialize account data"


class ProgramError(Exception):
    """An error as a program reports it: a kind, plus a code for custom errors."""

    def __init__(
        self, kind: ProgramErrorKind, message: str = "", *, code: int | None = None
    ) -> None:
        if kind is ProgramErrorKind.CUSTOM and code is None:
            raise ValueError("a custom program error needs a code")
        self.kind = kind
        self.code = code
        self.message = message
        text = f"{kind.value}: {code:#x}" if code is not None else kind.value
        super().__init__(f"{text} ({message})" if message else text)

    @classmethod
    def custom(cls, code: int, message: str = "") -> ProgramError:
        """Build a custom error with the given numeric code."""
        return cls(ProgramErrorKind.CUSTOM, message, code=code)


class MarinadeError(ProgramError):
    """A custom program error carrying one of the CommonError codes."""

    def __init__(self, error: CommonError, message: str = "") -> None:
        self.error = error
        super().__init__(
            ProgramErrorKind.CUSTOM,
            message or error.name,
            code=error.program_error_code(),
        )