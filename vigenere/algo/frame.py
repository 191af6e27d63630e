# vigenere/algo/frame.py
import logging
import struct
from dataclasses import dataclass
from typing import Optional
from vigenere.algo import crypto, words
from vigenere.errors import InvalidKey, MalformedCiphertext

logger = logging.getLogger(__name__)

FILL = 0x20  # plaintext filler up to the word boundary

@dataclass
class Frame:
    pad_count: int
    iv: bytes
    body: bytes

def has_marker(word_size: int) -> bool:
    """Only wider words ever need padding, so only they carry the count byte."""
    return words.check_word_size(word_size) > 1

def body_word_size(word_size: int, widen: bool) -> int:
    return crypto.WIDE_SIZE if widen else word_size

def build(iv: bytes, body: bytes, pad_count: Optional[int] = None) -> bytes:
    head = b"" if pad_count is None else struct.pack("<B", pad_count)
    return head + bytes(iv) + bytes(body)

def parse(payload: bytes, iv_length: int, marker: bool, word_size: int = 1, body_word: int = 1) -> Frame:
    start = 1 if marker else 0
    if len(payload) < start + iv_length:
        raise MalformedCiphertext(
            f"ciphertext is {len(payload)} bytes, need at least {start + iv_length}")
    pad_count = payload[0] if marker else 0
    iv = bytes(payload[start:start + iv_length])
    body = bytes(payload[start + iv_length:])
    if len(body) % body_word:
        raise MalformedCiphertext(f"body of {len(body)} bytes is not whole {body_word}-byte words")
    if pad_count >= word_size or (pad_count and not body):
        raise MalformedCiphertext(f"bad padding count {pad_count}")
    return Frame(pad_count, iv, body)

def seal(plaintext: bytes, key: bytes, iv: bytes, word_size: int = 1,
         index_mode: str = "mod", widen: bool = False, fill: int = FILL) -> bytes:
    """Pad, derive, transform and frame with the given IV (deterministic)."""
    if not key:
        raise InvalidKey("key must not be empty")
    marker = has_marker(word_size)
    padded, pad = words.align(plaintext, word_size, fill)
    derived = crypto.derive_key(key, iv, word_size)
    body = crypto.transform(padded, derived, iv, decrypt=False, word_size=word_size,
                            index_mode=index_mode, widen=widen)
    logger.debug("sealed %d bytes (+%d pad) into %d-byte body", len(plaintext), pad, len(body))
    return build(iv, body, pad if marker else None)

def unseal(payload: bytes, key: bytes, iv_length: int, word_size: int = 1,
           index_mode: str = "mod", widen: bool = False) -> bytes:
    if not key:
        raise InvalidKey("key must not be empty")
    fr = parse(payload, iv_length, has_marker(word_size), word_size,
               body_word_size(word_size, widen))
    derived = crypto.derive_key(key, fr.iv, word_size)
    padded = crypto.transform(fr.body, derived, fr.iv, decrypt=True, word_size=word_size,
                              index_mode=index_mode, widen=widen)
    logger.debug("unsealed %d-byte payload (pad %d)", len(payload), fr.pad_count)
    return padded[:len(padded) - fr.pad_count]
