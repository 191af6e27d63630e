# vigenere/utils/rand.py
# Byte sources for keys and IVs. "fast" is random.Random and is NOT secure.
import hashlib, random, secrets
from typing import Optional, Union

SOURCES = ("secure", "fast")

_fast = random.Random()

def seed_from_key(key: Union[str, bytes]) -> int:
    kb = key.encode("utf-8") if isinstance(key, str) else bytes(key)
    h = hashlib.blake2b(kb, digest_size=8).digest()
    return int.from_bytes(h, "little")

def rng_from_seed(seed: Union[int, str, bytes]) -> random.Random:
    return random.Random(seed if isinstance(seed, int) else seed_from_key(seed))

def random_bytes(n: int, source: str = "secure", rng: Optional[random.Random] = None) -> bytes:
    """n bytes from `rng` if given, else from the named source."""
    if rng is not None:
        return bytes(rng.getrandbits(8) for _ in range(n))
    if source == "secure":
        return secrets.token_bytes(n)
    if source == "fast":
        return bytes(_fast.getrandbits(8) for _ in range(n))
    raise ValueError(f"unknown random source {source!r}")
