"""
Modular arithmetic over Z/mZ (m = 26 for the Latin alphabet).
"""

from .errors import NoInverseError
from .text import MODULUS


def gcd(a: int, b: int) -> int:
    """Euclidean algorithm; gcd(a, 0) == a."""
    return a if b == 0 else gcd(b, a % b)


def normalize_mod(x: int, m: int = MODULUS) -> int:
    """Reduce `x` into [0, m), negative values included."""
    return ((x % m) + m) % m


def is_unit(a: int, m: int = MODULUS) -> bool:
    """True when `a` is invertible modulo `m`."""
    return gcd(normalize_mod(a, m), m) == 1


def _egcd(a: int, b: int):
    if a == 0:
        return b, 0, 1
    g, y, x = _egcd(b % a, a)
    return g, x - (b // a) * y, y


def mod_inverse(a: int, m: int = MODULUS) -> int:
    """
    Return the unique x in [1, m) with a * x == 1 (mod m).

    Raises NoInverseError when gcd(a, m) != 1.
    """
    a = normalize_mod(a, m)
    g, x, _ = _egcd(a, m)
    if g != 1:
        raise NoInverseError(f"{a} has no inverse modulo {m} (gcd is {g}).")
    return normalize_mod(x, m)


def units(m: int = MODULUS):
    """All invertible residues modulo `m`, ascending."""
    return [a for a in range(1, m) if is_unit(a, m)]
