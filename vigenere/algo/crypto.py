# vigenere/algo/crypto.py
import logging
from typing import Optional
import numpy as np
from vigenere.algo import words
from vigenere.errors import InvalidKey, InvalidConfiguration

logger = logging.getLogger(__name__)

INDEX_MODES = ("mod", "mask")

# widened mode: 8-bit symbols in, 32-bit words out
WIDE_SIZE = 4

def _is_pow2(n: int) -> bool:
    return n > 0 and (n & (n - 1)) == 0

def check_index_mode(index_mode: str) -> str:
    if index_mode not in INDEX_MODES:
        raise InvalidConfiguration(f"index mode must be one of {INDEX_MODES}, got {index_mode!r}")
    return index_mode

def _kstream(key_words: np.ndarray, n: int) -> np.ndarray:
    return key_words[np.arange(n, dtype=np.int64) % key_words.size].astype(np.int64)

def _ivstream(iv_words: np.ndarray, n: int, index_mode: str) -> np.ndarray:
    idx = np.arange(n, dtype=np.int64)
    if index_mode == "mask":
        if not _is_pow2(iv_words.size):
            raise InvalidConfiguration(f"mask indexing needs a power-of-two IV word count, got {iv_words.size}")
        idx &= iv_words.size - 1
    else:
        idx %= iv_words.size
    return iv_words[idx].astype(np.int64)

def transform(
    data: bytes,
    key: bytes,
    iv: Optional[bytes] = None,
    decrypt: bool = False,
    word_size: int = 1,
    index_mode: str = "mod",
    widen: bool = False,
) -> bytes:
    """Word-wise modular add (encrypt) or subtract (decrypt) of a cycled key and IV.

    Key and IV are zero-extended to a word boundary. With `widen`, the key and IV
    are read as bytes, encrypt writes one 32-bit word per input byte and decrypt
    narrows 32-bit words back to bytes.
    """
    if not key:
        raise InvalidKey("key must not be empty")
    check_index_mode(index_mode)
    words.check_word_size(word_size)
    if widen and word_size != 1:
        raise InvalidConfiguration("widened mode reads 8-bit words; word size must be 1")

    if widen:
        key_size = 1
        in_size, out_size = (WIDE_SIZE, 1) if decrypt else (1, WIDE_SIZE)
        R = words.word_range(WIDE_SIZE)
    else:
        key_size = in_size = out_size = word_size
        R = words.word_range(word_size)

    x = words.unpack(data, in_size).astype(np.int64)
    n = x.size
    k = _kstream(words.unpack(words.align(key, key_size)[0], key_size), n)
    if iv:
        v = _ivstream(words.unpack(words.align(iv, key_size)[0], key_size), n, index_mode)
    else:
        v = 0

    if decrypt:
        out = (((x - k - v) % R) + R) % R
        if widen:
            out %= words.word_range(1)
    else:
        out = (x + k + v) % R

    logger.debug("transform %s: %d words in, %d-byte words out",
                 "decrypt" if decrypt else "encrypt", n, out_size)
    return words.pack(out, out_size)

def derive_key(key: bytes, iv: bytes, word_size: int = 1) -> bytes:
    """Fold the IV into the key: transform(key, key=iv) with no IV of its own."""
    if not key:
        raise InvalidKey("key must not be empty")
    if not iv:
        raise InvalidKey("IV must not be empty")
    padded, _ = words.align(key, word_size)
    return transform(padded, iv, None, decrypt=False, word_size=word_size)
