"""
skeinhash: Threefish/UBI Hashing in Pure Python

skeinhash = Output ∘ UBI(MESSAGE) ∘ IV over a generic block engine

- Generic padded block iteration with pluggable round functions
- Threefish keyed mix network (64-bit and 32-bit word variants)
- Tweak-driven UBI chaining with type-tag domain separation
- Skein-512-512 and Half-Skein-256 digest drivers

Usage:
    from skeinhash import skein512, half_skein256

    digest = skein512(b"")
    digest = half_skein256(b"\\x41\\xfb")

    # Strings are hashed as UTF-16-LE
    from skeinhash import skein512_text
    digest = skein512_text("hello")

    # Output length and optional parameters
    from skeinhash import Skein, SKEIN_512
    digest = Skein(SKEIN_512, output_bits=256, nonce=b"n0").hash(b"data")
"""

# Types
from .types import InvalidInput, Tweak, UbiType

# Parameters
from .params import VariantParams, SKEIN_512, HALF_SKEIN_256

# Engine
from .engine import BlockHashEngine, RoundFunction, fold_blocks

# Cipher and chaining
from .threefish import Threefish
from .ubi import UbiRound, ubi, ubi_pad, tweak_schedule

# Main API
from .skein import Skein, config_block, config_chain, skein512, half_skein256
from .encoding import encode_text, skein512_text, half_skein256_text

__version__ = "0.1.0"

__all__ = [
    # Version
    "__version__",
    # Types
    "InvalidInput",
    "Tweak",
    "UbiType",
    # Parameters
    "VariantParams",
    "SKEIN_512",
    "HALF_SKEIN_256",
    # Engine
    "BlockHashEngine",
    "RoundFunction",
    "fold_blocks",
    # Cipher and chaining
    "Threefish",
    "UbiRound",
    "ubi",
    "ubi_pad",
    "tweak_schedule",
    # Main API
    "Skein",
    "config_block",
    "config_chain",
    "skein512",
    "half_skein256",
    "encode_text",
    "skein512_text",
    "half_skein256_text",
]
