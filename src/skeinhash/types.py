"""
Type System and Tag Registry for skeinhash

Word-level helpers, the UBI type-tag registry and the tweak record.
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import IntEnum
from typing import Tuple


State = Tuple[int, ...]


class InvalidInput(ValueError):
    """Raised when input bytes cannot be packed into whole words."""


# =============================================================================
# TAG REGISTRY (Domain Separation)
# =============================================================================

class UbiType(IntEnum):
    """
    Type field of the UBI tweak.
    Every UBI call carries exactly one of these tags, so configuration,
    message and output data can never be confused with each other.
    Tags are 6 bits wide.
    """
    KEY = 0
    CONFIG = 4
    PERSONALIZATION = 8
    PUBLIC_KEY = 12
    KEY_ID = 16
    NONCE = 20
    MESSAGE = 48
    OUTPUT = 63


# =============================================================================
# WORD ARITHMETIC
# =============================================================================

def word_mask(bits: int) -> int:
    """All-ones mask for a word of the given width."""
    return (1 << bits) - 1


def rotl(x: int, n: int, bits: int) -> int:
    """Rotate a word left by n bits."""
    return ((x << n) | (x >> (bits - n))) & word_mask(bits)


def rotr(x: int, n: int, bits: int) -> int:
    """Rotate a word right by n bits."""
    return ((x >> n) | (x << (bits - n))) & word_mask(bits)


# =============================================================================
# TWEAK
# =============================================================================

POSITION_BITS = 96
TYPE_SHIFT = 120
FIRST_BIT = 126
LAST_BIT = 127


@dataclass(frozen=True)
class Tweak:
    """
    Per-block UBI tweak.

    position: bytes processed so far, including this block
              (unpadded length on the final block)
    first:    set only on the first block of a UBI call
    last:     set only on the final block of a UBI call
    type:     the UBI type tag of the call
    """
    position: int
    first: bool
    last: bool
    type: UbiType

    def to_int(self) -> int:
        """128-bit little-endian tweak value."""
        value = self.position & word_mask(POSITION_BITS)
        value |= (int(self.type) & 0x3F) << TYPE_SHIFT
        if self.first:
            value |= 1 << FIRST_BIT
        if self.last:
            value |= 1 << LAST_BIT
        return value

    def flags(self) -> int:
        """Upper 64 bits of the tweak: type, first and last."""
        return self.to_int() >> 64

    def words(self, bits: int) -> State:
        """
        Tweak words for a cipher of the given word width.

        The 128-bit tweak is split little-endian into 128 / bits words,
        followed by one derived word: the XOR of all the others.
        """
        value = self.to_int()
        mask = word_mask(bits)
        words = [(value >> (bits * i)) & mask for i in range(128 // bits)]
        extra = 0
        for w in words:
            extra ^= w
        words.append(extra)
        return tuple(words)
