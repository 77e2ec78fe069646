"""
Unique Block Iteration (UBI)

UBI(G, M, type) chains a message through Threefish in
Matyas-Meyer-Oseas mode:

    H_0 = G
    H_i = E(key=H_{i-1}, tweak=T_i, plaintext=M_i) XOR M_i

Each tweak T_i records the byte position, first/last flags and the
type tag of the call, so data processed under different tags can
never collide even if the bytes are identical.
"""

from __future__ import annotations
from typing import List, Sequence

from .engine import RoundFunction, bytes_to_words, fold_blocks
from .threefish import Threefish
from .types import State, Tweak, UbiType


def ubi_pad(data: bytes, block_bytes: int) -> bytes:
    """
    Zero-pad data to a whole number of blocks.

    Empty data becomes one zero block, so every call has a real block
    to carry the first and last flags. Block-aligned data is left alone.
    """
    if not data:
        return bytes(block_bytes)
    remainder = len(data) % block_bytes
    if remainder:
        return bytes(data) + bytes(block_bytes - remainder)
    return bytes(data)


def block_count(length: int, block_bytes: int) -> int:
    """Number of blocks a UBI call over `length` bytes processes."""
    return max(1, -(-length // block_bytes))


def make_tweak(
    type_: UbiType,
    index: int,
    blocks: int,
    length: int,
    block_bytes: int
) -> Tweak:
    """Tweak for block `index` of a call over `length` unpadded bytes."""
    last = index == blocks - 1
    position = length if last else (index + 1) * block_bytes
    return Tweak(position=position, first=index == 0, last=last, type=type_)


def tweak_schedule(type_: UbiType, length: int, block_bytes: int) -> List[Tweak]:
    """Every tweak a UBI call over `length` bytes will use, in order."""
    blocks = block_count(length, block_bytes)
    return [make_tweak(type_, i, blocks, length, block_bytes) for i in range(blocks)]


class UbiRound(RoundFunction):
    """
    One UBI call seen as a round function over its blocks.

    The tweak of each block is a pure function of the block index,
    the call's type tag and the unpadded data length.
    """

    def __init__(self, cipher: Threefish, type_: UbiType, length: int):
        self.cipher = cipher
        self.type = type_
        self.length = length
        self.block_bytes = cipher.params.block_bytes
        self.blocks = block_count(length, self.block_bytes)

    def tweak(self, index: int) -> Tweak:
        return make_tweak(self.type, index, self.blocks, self.length, self.block_bytes)

    def process(self, state: State, block: Sequence[int], index: int) -> State:
        tweak = self.tweak(index).words(self.cipher.bits)
        encrypted = self.cipher.encrypt(state, tweak, block)
        # Feed-forward
        return tuple(c ^ p for c, p in zip(encrypted, block))


def ubi(cipher: Threefish, chain: Sequence[int], type_: UbiType, data: bytes) -> State:
    """
    Run one UBI call.

    Args:
        cipher: Threefish instance of the variant
        chain: current chaining state, used as the cipher key
        type_: UBI type tag of the data
        data: bytes to process (any length)

    Returns:
        The chaining state after the last block
    """
    params = cipher.params
    padded = ubi_pad(data, params.block_bytes)
    words = bytes_to_words(padded, params.word_bytes)
    round_function = UbiRound(cipher, type_, len(data))
    return fold_blocks(tuple(chain), words, params.state_words, round_function)
