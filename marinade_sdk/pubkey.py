"""Account addresses, their base58 text form and program-derived addresses."""

from __future__ import annotations

import hashlib
import itertools
from collections.abc import Iterable
from dataclasses import dataclass
from typing import ClassVar

PUBKEY_BYTES = 32
MAX_SEED_LEN = 32
MAX_SEEDS = 16
PDA_MARKER = b"ProgramDerivedAddress"

_ALPHABET = "123456789ABCDEFGHJKLMNPQRSTUVWXYZabcdefghijkmnopqrstuvwxyz"
_INDEX = {char: value for value, char in enumerate(_ALPHABET)}

# Edwards25519 field prime and curve constant d = -121665/121666.
_P = 2**255 - 19
_D = (-121665 * pow(121666, -1, _P)) % _P


class PubkeyError(ValueError):
    """Raised for malformed addresses or seeds that cannot derive one."""


def b58encode(data: bytes) -> str:
    """Encode bytes with the base58 alphabet used for account addresses."""
    data = bytes(data)
    stripped = data.lstrip(b"\0")
    zeros = len(data) - len(stripped)
    number = int.from_bytes(stripped, "big")
    digits = []
    while number:
        number, remainder = divmod(number, 58)
        digits.append(_ALPHABET[remainder])
    return "1" * zeros + "".join(reversed(digits))


def b58decode(text: str) -> bytes:
    """Decode base58 text into bytes."""
    stripped = text.lstrip("1")
    zeros = len(text) - len(stripped)
    number = 0
    for char in stripped:
        try:
            number = number * 58 + _INDEX[char]
        except KeyError:
            raise PubkeyError(f"invalid base58 character {char!r}") from None
    body = number.to_bytes((number.bit_length() + 7) // 8, "big")
    return b"\0" * zeros + body


def _on_curve(raw: bytes) -> bool:
    y = (int.from_bytes(raw, "little") & ((1 << 255) - 1)) % _P
    y2 = y * y % _P
    u = (y2 - 1) % _P
    v = (_D * y2 + 1) % _P
    x2 = u * pow(v, -1, _P) % _P
    return x2 == 0 or pow(x2, (_P - 1) // 2, _P) == 1


@dataclass(frozen=True, order=True)
class Pubkey:
    """A 32-byte account address."""

    raw: bytes

    _counter: ClassVar[itertools.count] = itertools.count(1)

    def __post_init__(self) -> None:
        if not isinstance(self.raw, (bytes, bytearray, memoryview)):
            raise TypeError("Pubkey expects bytes")
        raw = bytes(self.raw)
        if len(raw) != PUBKEY_BYTES:
            raise PubkeyError(f"a pubkey is {PUBKEY_BYTES} bytes, got {len(raw)}")
        object.__setattr__(self, "raw", raw)

    @classmethod
    def from_string(cls, text: str) -> Pubkey:
        """Parse a base58 address."""
        return cls(b58decode(text))

    @classmethod
    def new_unique(cls) -> Pubkey:
        """Return a fresh address, distinct from every other made this way."""
        return cls(next(cls._counter).to_bytes(8, "big") + bytes(PUBKEY_BYTES - 8))

    @classmethod
    def default(cls) -> Pubkey:
        """Return the all-zero address."""
        return cls(bytes(PUBKEY_BYTES))

    def is_on_curve(self) -> bool:
        """Whether the bytes decompress to a point on the ed25519 curve."""
        return _on_curve(self.raw)

    def __bytes__(self) -> bytes:
        return self.raw

    def __str__(self) -> str:
        return b58encode(self.raw)

    def __repr__(self) -> str:
        return f"Pubkey({self})"


def _check_seeds(seeds: list[bytes], limit: int) -> None:
    if len(seeds) > limit:
        raise PubkeyError(f"at most {MAX_SEEDS} seeds are allowed")
    for seed in seeds:
        if len(seed) > MAX_SEED_LEN:
            raise PubkeyError(f"seed longer than {MAX_SEED_LEN} bytes")


def create_program_address(seeds: Iterable[bytes], program_id: Pubkey) -> Pubkey:
    """Derive the address of seeds under a program; it must lie off the curve."""
    seeds = [bytes(seed) for seed in seeds]
    _check_seeds(seeds, MAX_SEEDS)
    digest = hashlib.sha256()
    for seed in seeds:
        digest.update(seed)
    digest.update(bytes(program_id))
    digest.update(PDA_MARKER)
    candidate = Pubkey(digest.digest())
    if candidate.is_on_curve():
        raise PubkeyError("invalid seeds, address must fall off the curve")
    return candidate


def find_program_address(seeds: Iterable[bytes], program_id: Pubkey) -> tuple[Pubkey, int]:
    """Find the first valid address with a bump seed counting down from 255."""
    seeds = [bytes(seed) for seed in seeds]
    _check_seeds(seeds, MAX_SEEDS - 1)
    for bump in range(255, 0, -1):
        try:
            return create_program_address([*seeds, bytes([bump])], program_id), bump
        except PubkeyError:
            continue
    raise PubkeyError("unable to find a viable program address bump seed")


def create_with_seed(base: Pubkey, seed: str | bytes, owner: Pubkey) -> Pubkey:
    """Derive an address from a base address, a text seed and an owner program."""
    seed_bytes = seed.encode() if isinstance(seed, str) else bytes(seed)
    if len(seed_bytes) > MAX_SEED_LEN:
        raise PubkeyError(f"seed longer than {MAX_SEED_LEN} bytes")
    owner_bytes = bytes(owner)
    if owner_bytes[-len(PDA_MARKER):] == PDA_MARKER:
        raise PubkeyError("owner may not end with the program-derived marker")
    return Pubkey(hashlib.sha256(bytes(base) + seed_bytes + owner_bytes).digest())


ID = Pubkey(
    bytes(
        [
            5, 69, 227, 101, 190, 242, 113, 173, 117, 53, 3, 103, 86, 93, 164, 13,
            163, 54, 220, 28, 135, 155, 177, 84, 138, 122, 252, 197, 90, 169, 57, 30,
        ]
    )
)
SYSTEM_PROGRAM_ID = Pubkey.default()
TOKEN_PROGRAM_ID = Pubkey.from_string("TokenkegQfeZyiNwAJbNbGKPFXCWuBvf9Ss623VQ5DA")
BPF_LOADER_ID = Pubkey.from_string("BPFLoader2111111111111111111111111111111111")