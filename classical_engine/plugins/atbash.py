"""
Atbash Cipher Plugin - Example for the Cipher Engine Plugin System

To add your own cipher:

1. Create a new .py file in the plugins/ directory
2. Create a class extending CipherStrategy (injected by the loader)
3. Use the @register_cipher decorator
4. Add an entry to manifest.json with the file name and cipher name

CipherStrategy, register_cipher, and the `keys` and `errors` modules are
made available when this module is loaded by the plugin system.
"""

import string

# These are injected by the plugin loader - no explicit import needed
# from classical_engine.engine import CipherStrategy, register_cipher

ALPHABET = string.ascii_uppercase
MIRROR = dict(zip(ALPHABET, reversed(ALPHABET)))


@register_cipher
class AtbashCipher(CipherStrategy):
    """
    Atbash mirror substitution: A<->Z, B<->Y, ...

    Key-less and its own inverse. Uppercases the text; non-letters pass
    through unchanged, as with the built-in substitution ciphers.
    """

    name = "atbash"
    description = "Mirrors the alphabet, A<->Z (no key, example plugin)."

    def _mirror(self, text: str) -> str:
        return "".join(MIRROR.get(char, char) for char in text.upper())

    def encrypt(self, text: str, key=None) -> str:
        return self._mirror(text)

    def decrypt(self, text: str, key=None) -> str:
        return self._mirror(text)
