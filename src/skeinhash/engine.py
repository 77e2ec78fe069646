"""
The Block Hash Engine: Padded Block Iteration

Every primitive in this package shares one skeleton:

    digest = format(fold_blocks(initial_state, to_words(pad(message)), round_function))

The engine owns framing (padding, word packing, block splitting) and
digest extraction. The round function owns all diffusion.
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import List, Optional, Sequence

from .types import InvalidInput, State


# =============================================================================
# WORD PACKING
# =============================================================================

def bytes_to_words(data: bytes, word_bytes: int, byteorder: str = 'little') -> List[int]:
    """Pack bytes into fixed-width words."""
    if len(data) % word_bytes:
        raise InvalidInput(
            f"Length {len(data)} is not a multiple of the {word_bytes}-byte word width"
        )
    return [
        int.from_bytes(data[i:i + word_bytes], byteorder)
        for i in range(0, len(data), word_bytes)
    ]


def words_to_bytes(words: Sequence[int], word_bytes: int, byteorder: str = 'little') -> bytes:
    """Serialize words back to bytes."""
    return b''.join(w.to_bytes(word_bytes, byteorder) for w in words)


# =============================================================================
# ROUND FUNCTION
# =============================================================================

class RoundFunction(ABC):
    """
    Abstract compression step folded over the message blocks.
    The round function is the algorithm-specific core.
    """

    @abstractmethod
    def process(self, state: State, block: Sequence[int], index: int) -> State:
        """Return the new state after absorbing block number `index`."""
        pass


def fold_blocks(
    state: State,
    words: Sequence[int],
    block_words: int,
    round_function: RoundFunction
) -> State:
    """
    Feed blocks of `block_words` words through the round function.

    Blocks are processed strictly in order: each output state is the
    input of the next block.
    """
    for index, offset in enumerate(range(0, len(words), block_words)):
        state = round_function.process(state, words[offset:offset + block_words], index)
    return state


# =============================================================================
# ENGINE
# =============================================================================

class BlockHashEngine:
    """
    Generic padded block iteration.

    Subclasses change padding or digest extraction by overriding
    pad(), round_function_for(), compress() or format(). The default
    is a 0x80-marker pad, a single fold from the initial state, and
    emission of the trailing `digest_words` words of the final state.
    """

    MESSAGE_UNIT = 2        # Bytes per input character (UTF-16 code unit)
    PAD_MARKER = 0x80

    def __init__(
        self,
        round_function: Optional[RoundFunction],
        initial_state: Sequence[int],
        word_bits: int = 32,
        block_words: int = 16,
        digest_words: int = 8,
        byteorder: str = 'little',
        pad_residue: int = 0
    ):
        self.round_function = round_function
        self.initial_state: State = tuple(initial_state)
        self.word_bits = word_bits
        self.block_words = block_words
        self.digest_words = digest_words
        self.byteorder = byteorder
        self.pad_residue = pad_residue

    @property
    def word_bytes(self) -> int:
        return self.word_bits // 8

    @property
    def block_bytes(self) -> int:
        return self.block_words * self.word_bytes

    @property
    def digest_size(self) -> int:
        """Digest length in bytes."""
        return self.digest_words * self.word_bytes

    def check_message(self, message: bytes) -> None:
        """Reject messages that are not whole input units."""
        if len(message) % self.MESSAGE_UNIT:
            raise InvalidInput(
                f"Message length {len(message)} is not a multiple of {self.MESSAGE_UNIT}"
            )

    def pad(self, message: bytes) -> bytes:
        """
        Append 0x80 and zero bytes until the length is congruent to
        pad_residue modulo the block size.

        The marker is always written, so an empty or block-aligned
        message still gets a pad block of its own.
        """
        padded = bytearray(message)
        padded.append(self.PAD_MARKER)
        while len(padded) % self.block_bytes != self.pad_residue:
            padded.append(0)
        return bytes(padded)

    def to_words(self, padded: bytes) -> List[int]:
        return bytes_to_words(padded, self.word_bytes, self.byteorder)

    def round_function_for(self, message: bytes) -> RoundFunction:
        """Round function used for this message."""
        if self.round_function is None:
            raise ValueError("No round function configured for this engine")
        return self.round_function

    def compress(self, message: bytes) -> State:
        """Run the round function over every block of the padded message."""
        words = self.to_words(self.pad(message))
        return fold_blocks(
            self.initial_state,
            words,
            self.block_words,
            self.round_function_for(message)
        )

    def format(self, state: State) -> str:
        """Lowercase hex of the trailing digest_words words."""
        if not 0 < self.digest_words <= len(state):
            raise ValueError(
                f"Cannot emit {self.digest_words} digest words from a {len(state)}-word state"
            )
        out = state[len(state) - self.digest_words:]
        return words_to_bytes(out, self.word_bytes, self.byteorder).hex()

    def digest(self, message: bytes) -> bytes:
        """Hash a message, returning raw digest bytes."""
        return bytes.fromhex(self.hash(message))

    def hash(self, message: bytes) -> str:
        """Hash a message, returning the lowercase hex digest."""
        self.check_message(message)
        return self.format(self.compress(message))
