# vigenere/errors.py

class VigenereError(ValueError):
    """Base for every recoverable engine error."""


class InvalidKey(VigenereError):
    pass


class InvalidConfiguration(VigenereError):
    pass


class MalformedCiphertext(VigenereError):
    pass
