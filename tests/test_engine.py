"""
Tests for the Generic Block Hash Engine

The engine is exercised with small round functions so that framing,
block order and digest extraction can be checked independently of
any real diffusion.
"""

import pytest

from skeinhash.engine import (
    BlockHashEngine, RoundFunction, bytes_to_words, words_to_bytes, fold_blocks
)
from skeinhash.types import InvalidInput


class XorRound(RoundFunction):
    """Folds each block into the state with XOR."""

    def process(self, state, block, index):
        return tuple(s ^ b for s, b in zip(state, block))


class RecordingRound(RoundFunction):
    """Records block indices and first words in call order."""

    def __init__(self):
        self.calls = []

    def process(self, state, block, index):
        self.calls.append((index, block[0]))
        return state


def make_engine(round_function=None, **kwargs):
    return BlockHashEngine(
        round_function or XorRound(),
        initial_state=(0,) * 16,
        **kwargs
    )


# =============================================================================
# PADDING
# =============================================================================

class TestPadding:
    """0x80 marker followed by zeros up to the block boundary."""

    def test_empty_message_gets_pad_block(self):
        padded = make_engine().pad(b"")
        assert padded == b"\x80" + bytes(63)

    def test_short_message(self):
        padded = make_engine().pad(b"ab")
        assert padded[:3] == b"ab\x80"
        assert len(padded) == 64

    def test_block_aligned_message_gets_extra_block(self):
        padded = make_engine().pad(bytes(64))
        assert len(padded) == 128
        assert padded[64] == 0x80

    def test_one_short_of_block(self):
        padded = make_engine().pad(bytes(63))
        assert len(padded) == 64
        assert padded[-1] == 0x80

    def test_pad_residue(self):
        engine = make_engine(pad_residue=56)
        assert len(engine.pad(b"")) == 56
        assert len(engine.pad(bytes(56))) == 120

    def test_message_not_mutated(self):
        msg = bytearray(b"abcd")
        make_engine().pad(msg)
        assert msg == bytearray(b"abcd")


# =============================================================================
# WORD PACKING
# =============================================================================

class TestWordPacking:
    """Bytes to fixed-width words and back."""

    def test_little_endian(self):
        assert bytes_to_words(b"\x01\x02\x03\x04", 4) == [0x04030201]

    def test_big_endian(self):
        assert bytes_to_words(b"\x01\x02\x03\x04", 4, "big") == [0x01020304]

    def test_64_bit_words(self):
        words = bytes_to_words(bytes(range(16)), 8)
        assert words == [0x0706050403020100, 0x0f0e0d0c0b0a0908]

    def test_partial_word_rejected(self):
        with pytest.raises(InvalidInput):
            bytes_to_words(b"\x01\x02\x03", 4)

    def test_words_to_bytes(self):
        assert words_to_bytes([0x04030201], 4) == b"\x01\x02\x03\x04"


# =============================================================================
# BLOCK FOLDING
# =============================================================================

class TestFoldBlocks:
    """Blocks are folded strictly in order with their index."""

    def test_order_and_indices(self):
        rf = RecordingRound()
        fold_blocks((0,), [10, 11, 20, 21, 30, 31], 2, rf)
        assert rf.calls == [(0, 10), (1, 20), (2, 30)]

    def test_state_threads_through_blocks(self):
        state = fold_blocks((0, 0), [1, 2, 4, 8], 2, XorRound())
        assert state == (1 ^ 4, 2 ^ 8)

    def test_engine_compress_uses_initial_state(self):
        engine = make_engine()
        state = engine.compress(b"")
        assert state[0] == 0x80
        assert all(w == 0 for w in state[1:])


# =============================================================================
# DIGEST FORMATTING
# =============================================================================

class TestFormat:
    """Trailing digest words, little-endian, lowercase hex."""

    def test_trailing_words_emitted(self):
        engine = make_engine(digest_words=2)
        assert engine.format((1, 2, 3, 4)) == "03000000" + "04000000"

    def test_fixed_length(self):
        engine = make_engine()
        for msg in (b"", b"ab", bytes(64), bytes(200)):
            assert len(engine.hash(msg)) == 2 * engine.digest_size

    def test_digest_matches_hex(self):
        engine = make_engine()
        assert engine.digest(b"abcd") == bytes.fromhex(engine.hash(b"abcd"))

    def test_odd_length_rejected(self):
        with pytest.raises(InvalidInput):
            make_engine().hash(b"abc")


# =============================================================================
# MISCONFIGURATION
# =============================================================================

class TestMisconfiguredEngine:
    """Bad engine setups fail loudly instead of producing a digest."""

    def test_missing_round_function(self):
        engine = BlockHashEngine(None, initial_state=(0,) * 16)
        with pytest.raises(ValueError):
            engine.hash(b"ab")

    def test_digest_wider_than_state(self):
        engine = make_engine(digest_words=20)
        with pytest.raises(ValueError):
            engine.hash(b"ab")

    def test_digest_width_equal_to_state(self):
        engine = make_engine(digest_words=16)
        assert len(engine.hash(b"ab")) == 128
