"""
Skein: The Complete Construction

Skein = Output ∘ UBI(MESSAGE) ∘ IV

The IV is the chaining state after the configuration UBI call (and,
when given, the key and the optional parameter calls). The message is
chained through one MESSAGE call, and the output phase re-keys the
cipher with that state and encrypts a counter, which is what rules
out length extension.

Usage:
    from skeinhash import skein512, Skein, SKEIN_512

    hex_digest = skein512(b"")
    hasher = Skein(SKEIN_512, output_bits=256, personalization=b"app v1")
    raw = hasher.digest(b"message bytes")
"""

from __future__ import annotations
import logging
import struct
from functools import lru_cache
from typing import Optional, Sequence

from .engine import BlockHashEngine, words_to_bytes
from .params import HALF_SKEIN_256, SKEIN_512, VariantParams
from .threefish import Threefish
from .types import State, UbiType
from .ubi import UbiRound, ubi, ubi_pad

logger = logging.getLogger(__name__)


# =============================================================================
# CONFIGURATION
# =============================================================================

def config_block(params: VariantParams, output_bits: int) -> bytes:
    """
    The 32-byte configuration string.

    schema (4) | version u16 | reserved u16 | output bits u64 |
    tree parameters (3) | reserved (13)
    """
    return (
        params.schema +
        struct.pack('<HHQ', params.version, 0, output_bits) +
        bytes(3) +
        bytes(13)
    )


def zero_state(params: VariantParams) -> State:
    return (0,) * params.state_words


@lru_cache(maxsize=None)
def config_chain(params: VariantParams, output_bits: int) -> State:
    """
    Chaining state after the configuration call from the zero state.

    Computed once per (variant, output length) and shared; the result
    is a tuple, so callers can never modify it.
    """
    logger.debug("Precomputing %s IV for %d output bits", params.name, output_bits)
    cipher = Threefish(params)
    return ubi(cipher, zero_state(params), UbiType.CONFIG, config_block(params, output_bits))


# =============================================================================
# SKEIN HASHER
# =============================================================================

class Skein(BlockHashEngine):
    """
    Skein hash over one variant's Threefish.

    Usage:
        # Plain hash
        Skein(SKEIN_512).hash(message)

        # Shorter or longer output
        Skein(SKEIN_512, output_bits=1024).hash(message)

        # Keyed hash with personalization
        Skein(SKEIN_512, key=k, personalization=b"my-app").hash(message)
    """

    def __init__(
        self,
        params: VariantParams = SKEIN_512,
        output_bits: Optional[int] = None,
        key: Optional[bytes] = None,
        personalization: Optional[bytes] = None,
        public_key: Optional[bytes] = None,
        key_id: Optional[bytes] = None,
        nonce: Optional[bytes] = None
    ):
        """
        Initialize a hasher and derive its IV.

        Args:
            params: Variant parameters (SKEIN_512 or HALF_SKEIN_256)
            output_bits: Digest length in bits (default: the variant's)
            key: Key bytes, processed before the configuration call
            personalization: Personalization string bytes
            public_key: Public key bytes
            key_id: Key identifier bytes
            nonce: Nonce bytes

        Parameters left as None are skipped entirely. An empty bytes
        value is a real (empty) UBI call.
        """
        if output_bits is None:
            output_bits = params.default_output_bits
        if output_bits <= 0 or output_bits % 8:
            raise ValueError(f"Output length must be a positive multiple of 8, got {output_bits}")

        self.params = params
        self.cipher = Threefish(params)
        self.output_bits = output_bits

        super().__init__(
            round_function=None,
            initial_state=self._initial_chain(
                key,
                (
                    (UbiType.PERSONALIZATION, personalization),
                    (UbiType.PUBLIC_KEY, public_key),
                    (UbiType.KEY_ID, key_id),
                    (UbiType.NONCE, nonce),
                ),
            ),
            word_bits=params.word_bits,
            block_words=params.state_words,
            digest_words=-(-output_bits // params.word_bits),
        )

    def _initial_chain(self, key: Optional[bytes], extras: Sequence) -> State:
        if key is None:
            chain = config_chain(self.params, self.output_bits)
        else:
            chain = ubi(self.cipher, zero_state(self.params), UbiType.KEY, _as_bytes(key, 'key'))
            chain = ubi(self.cipher, chain, UbiType.CONFIG,
                        config_block(self.params, self.output_bits))
        for type_, value in extras:
            if value is None:
                continue
            data = _as_bytes(value, type_.name.lower())
            logger.debug("Applying %s UBI call (%d bytes)", type_.name, len(data))
            chain = ubi(self.cipher, chain, type_, data)
        return chain

    @property
    def digest_size(self) -> int:
        return self.output_bits // 8

    def pad(self, message: bytes) -> bytes:
        """UBI zero padding."""
        return ubi_pad(message, self.params.block_bytes)

    def round_function_for(self, message: bytes) -> UbiRound:
        """The MESSAGE-tagged UBI call over this message."""
        return UbiRound(self.cipher, UbiType.MESSAGE, len(message))

    def compress(self, message: bytes) -> State:
        """
        Message phase followed by the output phase.

        Returns the concatenated output-phase states; format() truncates
        them to the requested length.
        """
        return self.output(super().compress(message))

    def output(self, chain: Sequence[int]) -> State:
        """Encrypt counters 0, 1, ... under the message-phase state."""
        blocks = -(-self.output_bits // self.params.state_bits)
        out: list = []
        for counter in range(blocks):
            out.extend(ubi(self.cipher, chain, UbiType.OUTPUT, struct.pack('<Q', counter)))
        return tuple(out)

    def format(self, state: State) -> str:
        """Lowercase hex of the first output_bits / 8 output bytes."""
        raw = words_to_bytes(state, self.params.word_bytes)
        return raw[:self.digest_size].hex()


def _as_bytes(value, name: str) -> bytes:
    if not isinstance(value, (bytes, bytearray, memoryview)):
        raise TypeError(f"{name} must be bytes, got {type(value).__name__}")
    return bytes(value)


# =============================================================================
# CONVENIENCE FUNCTIONS
# =============================================================================

def skein512(message: bytes) -> str:
    """Skein-512-512 hex digest of a message."""
    return Skein(SKEIN_512).hash(message)


def half_skein256(message: bytes) -> str:
    """Half-Skein-256 (32-bit words) hex digest of a message."""
    return Skein(HALF_SKEIN_256).hash(message)
