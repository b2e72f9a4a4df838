"""
Text normalization and the letter <-> index mapping shared by all ciphers.
"""

import string

ALPHABET = string.ascii_uppercase
MODULUS = len(ALPHABET)
PAD_CHAR = "X"


def normalize(text: str, preserve_spaces: bool = False) -> str:
    """
    Uppercase `text` and drop everything outside A-Z.

    With `preserve_spaces`, whitespace characters are kept in place as
    well. Total and deterministic: never raises, empty in gives empty out.
    """
    kept = []
    for char in text.upper():
        if char in ALPHABET or (preserve_spaces and char.isspace()):
            kept.append(char)
    return "".join(kept)


def letter_to_index(char: str) -> int:
    """A=0 ... Z=25."""
    return ord(char) - ord("A")


def index_to_letter(index: int) -> str:
    return ALPHABET[index % MODULUS]


def pad_to_multiple(letters: str, size: int, pad: str = PAD_CHAR) -> str:
    """Append `pad` until the length is a multiple of `size`."""
    remainder = len(letters) % size
    if remainder:
        letters += pad * (size - remainder)
    return letters
