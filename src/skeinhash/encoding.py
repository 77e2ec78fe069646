"""
Text Input Wrappers

Strings are hashed as their UTF-16-LE code units, two bytes per
character, which always satisfies the engine's even-length rule.
"""

from .skein import half_skein256, skein512


def encode_text(text: str) -> bytes:
    """UTF-16-LE bytes of a string, without a byte-order mark."""
    return text.encode('utf-16-le', 'surrogatepass')


def skein512_text(text: str) -> str:
    return skein512(encode_text(text))


def half_skein256_text(text: str) -> str:
    return half_skein256(encode_text(text))
