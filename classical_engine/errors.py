"""
Error types raised by the cipher engine.

Every error carries a human-readable message meant to be shown to the
user verbatim. Errors are raised at the point of detection; since all
operations are pure, a failure never leaves partial state behind.
"""


class CipherError(Exception):
    """Base class for every error raised by the engine."""


class EmptyInputError(CipherError):
    """No text was supplied to a front end that requires some."""


class InvalidKeyError(CipherError, ValueError):
    """Key material is malformed or out of range for the chosen cipher."""


class SingularMatrixError(InvalidKeyError):
    """A Hill matrix has no inverse modulo 26."""


class DimensionMismatchError(CipherError, ValueError):
    """Matrix shapes are incompatible for the requested operation."""


class CharacterNotInGridError(CipherError, LookupError):
    """A Playfair lookup failed; the text was not preprocessed."""


class NoInverseError(CipherError, ValueError):
    """A value has no multiplicative inverse for the given modulus."""


class UnknownCipherError(CipherError, KeyError):
    """No cipher is registered under the requested name."""

    def __str__(self) -> str:
        # KeyError would otherwise repr() the message
        return str(self.args[0]) if self.args else ""
