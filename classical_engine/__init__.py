"""
Classical cipher engine: Caesar, Affine, Vigenere, Playfair, Hill,
Rail Fence and Row Transposition over the A-Z alphabet.
"""

__version__ = "1.0.0"

from .engine import (  # noqa: F401
    CIPHER_REGISTRY,
    CipherStrategy,
    decrypt,
    encrypt,
    get_cipher,
    load_plugins,
    register_cipher,
    transform,
)
from . import ciphers  # noqa: F401  registers the built-in ciphers
from .errors import (  # noqa: F401
    CharacterNotInGridError,
    CipherError,
    DimensionMismatchError,
    EmptyInputError,
    InvalidKeyError,
    NoInverseError,
    SingularMatrixError,
    UnknownCipherError,
)
from .keys import (  # noqa: F401
    AffineKey,
    CaesarKey,
    HillKey,
    PlayfairKey,
    RailFenceKey,
    TranspositionKey,
    VigenereKey,
)
