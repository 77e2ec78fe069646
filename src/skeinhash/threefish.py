"""
The Keyed Mix Network: Threefish

A tweakable block cipher over an 8-word state. Each elementary round
applies four add-rotate-xor mixes; every fourth round a subkey built
from the key words, the tweak words and the subkey counter is added.

The cipher is a bijection on the state for a fixed key and tweak;
decrypt() is its exact inverse.
"""

from __future__ import annotations
from typing import List, Sequence

from .params import VariantParams
from .types import State, rotl, rotr, word_mask


# Mix pairing for elementary round d: (EVEN[4*(d%4)+j], ODD[4*(d%4)+j])
EVEN = (0, 2, 4, 6, 2, 4, 6, 0, 4, 6, 0, 2, 6, 0, 2, 4)
ODD = (1, 3, 5, 7, 1, 7, 5, 3, 1, 3, 5, 7, 1, 7, 5, 3)

ROUNDS_PER_SUBKEY = 4


class Threefish:
    """
    Threefish with the word width and constants of one variant.

    key:   8 words (the chaining state in UBI)
    tweak: tweak words including the derived XOR word (3 or 5 of them)
    """

    def __init__(self, params: VariantParams):
        self.params = params
        self.bits = params.word_bits
        self.mask = word_mask(params.word_bits)
        self.words = params.state_words
        self.subkey_count = params.rounds // ROUNDS_PER_SUBKEY + 1

    def expand_key(self, key: Sequence[int]) -> List[int]:
        """Append the parity word: constant XOR every key word."""
        parity = self.params.parity
        for k in key:
            parity ^= k
        return list(key) + [parity]

    def subkey(self, key: Sequence[int], tweak: Sequence[int], s: int) -> List[int]:
        """Subkey number s for an expanded key and tweak."""
        n = self.words
        m = self.mask
        kw = len(key)
        tw = len(tweak)
        sk = [key[(s + i) % kw] for i in range(n)]
        sk[n - 3] = (sk[n - 3] + tweak[s % tw]) & m
        sk[n - 2] = (sk[n - 2] + tweak[(s + 1) % tw]) & m
        sk[n - 1] = (sk[n - 1] + s) & m
        return sk

    def encrypt(self, key: Sequence[int], tweak: Sequence[int], block: Sequence[int]) -> State:
        """Encrypt one block. The block is the cipher's initial state."""
        m = self.mask
        bits = self.bits
        rot = self.params.rotations
        k = self.expand_key(key)
        x = list(block)

        for d in range(self.params.rounds):
            if d % ROUNDS_PER_SUBKEY == 0:
                sk = self.subkey(k, tweak, d // ROUNDS_PER_SUBKEY)
                for i in range(self.words):
                    x[i] = (x[i] + sk[i]) & m
            base = 4 * (d % 4)
            r = rot[d % 8]
            for j in range(4):
                a = EVEN[base + j]
                b = ODD[base + j]
                x[a] = (x[a] + x[b]) & m
                x[b] = rotl(x[b], r[j], bits) ^ x[a]

        sk = self.subkey(k, tweak, self.subkey_count - 1)
        return tuple((x[i] + sk[i]) & m for i in range(self.words))

    def decrypt(self, key: Sequence[int], tweak: Sequence[int], block: Sequence[int]) -> State:
        """Invert encrypt()."""
        m = self.mask
        bits = self.bits
        rot = self.params.rotations
        k = self.expand_key(key)

        sk = self.subkey(k, tweak, self.subkey_count - 1)
        x = [(block[i] - sk[i]) & m for i in range(self.words)]

        for d in reversed(range(self.params.rounds)):
            base = 4 * (d % 4)
            r = rot[d % 8]
            for j in reversed(range(4)):
                a = EVEN[base + j]
                b = ODD[base + j]
                x[b] = rotr(x[b] ^ x[a], r[j], bits)
                x[a] = (x[a] - x[b]) & m
            if d % ROUNDS_PER_SUBKEY == 0:
                sk = self.subkey(k, tweak, d // ROUNDS_PER_SUBKEY)
                for i in range(self.words):
                    x[i] = (x[i] - sk[i]) & m

        return tuple(x)
