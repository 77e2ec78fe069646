"""
Variant Parameters

VariantParams defines the fixed data of one Skein variant: word width,
rotation table, key-schedule parity constant and config schema.
All parameters are immutable and hashable.
"""

from dataclasses import dataclass
from typing import Tuple


@dataclass(frozen=True)
class VariantParams:
    """
    Public parameters of a Threefish/UBI hash variant.

    The rotation table is exact data. It is never derived at runtime.
    """

    name: str
    """Human-readable variant name."""

    word_bits: int
    """Width of one state word (32 or 64)."""

    rotations: Tuple[Tuple[int, int, int, int], ...]
    """Rotation constants R[d % 8][j] for elementary round d and mix j."""

    parity: int
    """Key-schedule constant XORed into the ninth key word."""

    schema: bytes
    """4-byte schema identifier written at the start of the config block."""

    default_output_bits: int
    """Digest length used when the caller does not ask for another."""

    state_words: int = 8
    """Number of words in the chaining state and in a block."""

    rounds: int = 72
    """Elementary rounds of the keyed mix network."""

    version: int = 1
    """Config block version number."""

    @property
    def word_bytes(self) -> int:
        return self.word_bits // 8

    @property
    def block_bytes(self) -> int:
        """Size of one UBI block in bytes."""
        return self.state_words * self.word_bytes

    @property
    def state_bits(self) -> int:
        return self.state_words * self.word_bits


# =============================================================================
# SKEIN-512 (64-bit words, v1.2 constants)
# =============================================================================

SKEIN_512 = VariantParams(
    name="Skein-512",
    word_bits=64,
    rotations=(
        (46, 36, 19, 37),
        (33, 27, 14, 42),
        (17, 49, 36, 39),
        (44, 9, 54, 56),
        (39, 30, 34, 24),
        (13, 50, 10, 17),
        (25, 29, 39, 43),
        (8, 35, 56, 22),
    ),
    parity=0x5555555555555555,
    schema=b"SHA3",
    default_output_bits=512,
)


# =============================================================================
# HALF-SKEIN-256 (32-bit words)
# =============================================================================

# Rotations come from the base-100 expansion of pi, each value n mapped to
# 2 + (n % 28), so 0, 1 and 31 never occur.
HALF_SKEIN_256 = VariantParams(
    name="Half-Skein-256",
    word_bits=32,
    rotations=(
        (5, 16, 17, 10),
        (11, 9, 7, 25),
        (6, 12, 20, 28),
        (17, 12, 6, 25),
        (24, 2, 2, 21),
        (17, 15, 13, 11),
        (21, 12, 4, 22),
        (15, 23, 18, 5),
    ),
    parity=0x55555555,
    schema=b"hSkn",
    default_output_bits=256,
)
