# vigenere/engine.py
"""Engine facade: key generation plus IV-framed encrypt/decrypt.

Not secure. There is no integrity check, so decrypting with the wrong key
returns garbage rather than raising.
"""
import logging
import random
from dataclasses import dataclass
from typing import Optional
from vigenere.algo import crypto, frame, words
from vigenere.errors import InvalidConfiguration, InvalidKey
from vigenere.utils import rand

logger = logging.getLogger(__name__)

IV_LENGTHS = (8, 16, 32, 64, 128, 256)
DEFAULT_IV_LENGTH = 16

@dataclass(frozen=True)
class EngineConfig:
    iv_length: int = DEFAULT_IV_LENGTH
    word_size: int = 1
    widen: bool = False
    index_mode: str = "mod"
    random_source: str = "secure"

    def validate(self) -> "EngineConfig":
        if self.iv_length not in IV_LENGTHS:
            raise InvalidConfiguration(f"IV length must be one of {IV_LENGTHS}, got {self.iv_length}")
        words.check_word_size(self.word_size)
        if self.widen and self.word_size != 1:
            raise InvalidConfiguration("widened mode needs word size 1")
        crypto.check_index_mode(self.index_mode)
        if self.random_source not in rand.SOURCES:
            raise InvalidConfiguration(f"random source must be one of {rand.SOURCES}, got {self.random_source!r}")
        return self

class Engine:
    def __init__(self, iv_length: int = DEFAULT_IV_LENGTH, word_size: int = 1, widen: bool = False,
                 index_mode: str = "mod", random_source: str = "secure",
                 rng: Optional[random.Random] = None):
        self.config = EngineConfig(iv_length, word_size, widen, index_mode, random_source).validate()
        # only for reproducible tests; overrides random_source
        self._rng = rng

    @property
    def min_frame_size(self) -> int:
        return self.config.iv_length + (1 if frame.has_marker(self.config.word_size) else 0)

    def generate_key(self, length: Optional[int] = None) -> bytes:
        """Random bytes rounded up to a whole number of words. Not secure with source "fast"."""
        n = self.config.iv_length if length is None else int(length)
        if n < 1:
            raise InvalidKey(f"key length must be >= 1, got {n}")
        n += -n % self.config.word_size
        key = rand.random_bytes(n, self.config.random_source, self._rng)
        logger.debug("generated %d random bytes (%s)", n, self.config.random_source)
        return key

    def encrypt(self, plaintext: bytes, key: bytes) -> bytes:
        if not key:
            raise InvalidKey("key must not be empty")
        c = self.config
        iv = self.generate_key(c.iv_length)
        return frame.seal(plaintext, key, iv, c.word_size, c.index_mode, c.widen)

    def decrypt(self, ciphertext: bytes, key: bytes) -> bytes:
        c = self.config
        return frame.unseal(ciphertext, key, c.iv_length, c.word_size, c.index_mode, c.widen)

    def __repr__(self):
        c = self.config
        return f"Engine(iv_length={c.iv_length}, word_size={c.word_size}, widen={c.widen}, index_mode={c.index_mode!r})"
