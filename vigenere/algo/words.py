# vigenere/algo/words.py
import struct
import numpy as np
from vigenere.errors import InvalidConfiguration

WORD_SIZES = (1, 2, 4)

_FMT = {1: "<B", 2: "<H", 4: "<I"}
_DTYPE = {1: np.dtype("<u1"), 2: np.dtype("<u2"), 4: np.dtype("<u4")}

def check_word_size(word_size: int) -> int:
    if word_size not in WORD_SIZES:
        raise InvalidConfiguration(f"word size must be one of {WORD_SIZES}, got {word_size}")
    return word_size

def word_range(word_size: int) -> int:
    return 1 << (8 * check_word_size(word_size))

def dtype(word_size: int) -> np.dtype:
    return _DTYPE[check_word_size(word_size)]

def _bounds(buf, offset: int, word_size: int):
    if offset < 0 or offset + word_size > len(buf):
        raise IndexError(f"word at {offset} (+{word_size}) out of range for {len(buf)}-byte buffer")

def read_word(buf, offset: int, word_size: int = 1) -> int:
    """Little-endian unsigned word at `offset`."""
    check_word_size(word_size)
    _bounds(buf, offset, word_size)
    return struct.unpack_from(_FMT[word_size], buf, offset)[0]

def write_word(buf: bytearray, offset: int, value: int, word_size: int = 1) -> None:
    check_word_size(word_size)
    _bounds(buf, offset, word_size)
    struct.pack_into(_FMT[word_size], buf, offset, value % word_range(word_size))

def unpack(buf, word_size: int = 1) -> np.ndarray:
    """bytes -> 1D array of words (copy, so callers never alias the input)."""
    dt = dtype(word_size)
    if len(buf) % word_size:
        raise ValueError(f"buffer of {len(buf)} bytes is not a whole number of {word_size}-byte words")
    return np.frombuffer(bytes(buf), dtype=dt).copy()

def pack(words: np.ndarray, word_size: int = 1) -> bytes:
    return np.asarray(words).astype(dtype(word_size)).tobytes()

def align(buf, word_size: int, fill: int = 0x00) -> tuple[bytes, int]:
    """Pad `buf` up to the next word boundary; returns (padded, pad_count)."""
    check_word_size(word_size)
    pad = -len(buf) % word_size
    return bytes(buf) + bytes([fill]) * pad, pad
