"""
Key material for each cipher, validated at construction.

Each key type is a frozen dataclass whose __post_init__ rejects bad
values with InvalidKeyError, so an algorithm never sees a malformed key.
`parse()` builds a key from the raw string a user typed on the command
line.
"""

import math
import re
from dataclasses import dataclass, field
from typing import Sequence, Tuple

from . import matrix as mx
from .errors import InvalidKeyError
from .modular import units
from .text import MODULUS

VALID_AFFINE_A = tuple(units(MODULUS))

_LETTERS = re.compile(r"^[A-Za-z]+$")
_SEPARATORS = re.compile(r"[,\s]+")


def _parse_int(raw: str, label: str) -> int:
    try:
        return int(raw.strip())
    except (AttributeError, TypeError, ValueError):
        raise InvalidKeyError(f"{label} must be an integer, got {raw!r}.") from None


def _require_int(value, label: str):
    if isinstance(value, bool) or not isinstance(value, int):
        raise InvalidKeyError(f"{label} must be an integer, got {value!r}.")


def _require_keyword(keyword) -> str:
    if not isinstance(keyword, str) or not _LETTERS.match(keyword.strip()):
        raise InvalidKeyError("Keyword must contain only letters")
    return keyword.strip().upper()


def _split_numbers(raw: str):
    return [part for part in _SEPARATORS.split(raw.strip()) if part]


@dataclass(frozen=True)
class CaesarKey:
    shift: int

    def __post_init__(self):
        _require_int(self.shift, "Shift value")
        if not 0 <= self.shift <= 25:
            raise InvalidKeyError("Shift value must be between 0 and 25")

    @classmethod
    def parse(cls, raw: str) -> "CaesarKey":
        return cls(_parse_int(raw, "Shift value"))


@dataclass(frozen=True)
class AffineKey:
    a: int
    b: int

    def __post_init__(self):
        _require_int(self.a, "a value")
        _require_int(self.b, "b value")
        if self.a not in VALID_AFFINE_A:
            raise InvalidKeyError(
                "a value must be one of: " + ", ".join(str(a) for a in VALID_AFFINE_A)
            )
        if not 0 <= self.b <= 25:
            raise InvalidKeyError("b value must be between 0 and 25")

    @classmethod
    def parse(cls, raw: str) -> "AffineKey":
        """Accepts "5,8", "5:8" or "5 8"."""
        parts = _split_numbers(raw.replace(":", ","))
        if len(parts) != 2:
            raise InvalidKeyError(f"Affine key needs two integers a,b, got {raw!r}.")
        return cls(_parse_int(parts[0], "a value"), _parse_int(parts[1], "b value"))


@dataclass(frozen=True)
class VigenereKey:
    keyword: str

    def __post_init__(self):
        object.__setattr__(self, "keyword", _require_keyword(self.keyword))

    @classmethod
    def parse(cls, raw: str) -> "VigenereKey":
        return cls(raw)

    @property
    def shifts(self) -> Tuple[int, ...]:
        return tuple(ord(char) - ord("A") for char in self.keyword)


@dataclass(frozen=True)
class PlayfairKey:
    keyword: str

    def __post_init__(self):
        object.__setattr__(self, "keyword", _require_keyword(self.keyword))

    @classmethod
    def parse(cls, raw: str) -> "PlayfairKey":
        return cls(raw)


@dataclass(frozen=True)
class HillKey:
    """
    Square integer matrix, n >= 2, whose determinant is a unit mod 26.

    The matrix is copied into a tuple of tuples so the key never aliases
    the caller's list.
    """

    matrix: Tuple[Tuple[int, ...], ...]

    def __post_init__(self):
        try:
            rows = tuple(tuple(row) for row in self.matrix)
        except TypeError:
            raise InvalidKeyError("Hill key must be a square matrix of integers.") from None
        if len(rows) < 2 or any(len(row) != len(rows) for row in rows):
            raise InvalidKeyError(
                f"Hill key must be a square matrix of size 2 or more, got {len(rows)} row(s)."
            )
        for i, row in enumerate(rows):
            for j, value in enumerate(row):
                if isinstance(value, bool) or not isinstance(value, int):
                    raise InvalidKeyError(
                        f"Matrix element at position ({i + 1},{j + 1}) must be a valid number"
                    )
        object.__setattr__(self, "matrix", rows)

        # raises SingularMatrixError before any text is touched
        mx.inverse(rows)

    @property
    def size(self) -> int:
        return len(self.matrix)

    def inverse(self) -> mx.Matrix:
        return mx.inverse(self.matrix)

    @classmethod
    def parse(cls, raw: str) -> "HillKey":
        """
        Rows separated by ';', entries by ',' or whitespace: "3,3;2,5".
        A bare list of n*n integers is also read row-major.
        """
        if ";" in raw:
            rows = [_split_numbers(row) for row in raw.split(";") if row.strip()]
        else:
            flat = _split_numbers(raw)
            size = math.isqrt(len(flat))
            if size * size != len(flat):
                raise InvalidKeyError(
                    f"Hill key needs n*n integers, got {len(flat)}. Separate rows with ';'."
                )
            rows = [flat[i * size:(i + 1) * size] for i in range(size)]
        return cls(tuple(
            tuple(_parse_int(value, f"Matrix element at position ({i + 1},{j + 1})")
                  for j, value in enumerate(row))
            for i, row in enumerate(rows)
        ))

    @classmethod
    def identity(cls, size: int = 2) -> "HillKey":
        return cls(tuple(tuple(row) for row in mx.identity(size)))


@dataclass(frozen=True)
class RailFenceKey:
    rails: int

    def __post_init__(self):
        _require_int(self.rails, "Number of rails")
        if self.rails < 1:
            raise InvalidKeyError("Number of rails must be 1 or more")

    @classmethod
    def parse(cls, raw: str) -> "RailFenceKey":
        return cls(_parse_int(raw, "Number of rails"))


@dataclass(frozen=True)
class TranspositionKey:
    """
    Column read-out ranks for row transposition.

    `order[i]` is the 0-based position at which column i is read. Two
    encodings build it:

    - `from_keyword("ZEBRAS")`: rank of each letter in a stable sort, so
      repeated letters are read left to right.
    - `from_permutation([6, 3, 2, 4, 1, 5])`: the number written above
      each column is its 1-based read-out position.

    Both spellings above give the same key.
    """

    order: Tuple[int, ...]
    source: str = field(default="", compare=False)

    def __post_init__(self):
        order = tuple(self.order)
        if not order:
            raise InvalidKeyError("Transposition key must not be empty")
        for rank in order:
            _require_int(rank, "Column rank")
        if sorted(order) != list(range(len(order))):
            raise InvalidKeyError(
                "Transposition key must be a permutation of column positions"
            )
        object.__setattr__(self, "order", order)

    @property
    def columns(self) -> int:
        return len(self.order)

    @property
    def read_sequence(self) -> Tuple[int, ...]:
        """Original column indices in the order they are read out."""
        return tuple(sorted(range(len(self.order)), key=self.order.__getitem__))

    @classmethod
    def from_keyword(cls, keyword: str) -> "TranspositionKey":
        keyword = _require_keyword(keyword)
        ranked = sorted(range(len(keyword)), key=keyword.__getitem__)
        order = [0] * len(keyword)
        for rank, column in enumerate(ranked):
            order[column] = rank
        return cls(tuple(order), source=keyword)

    @classmethod
    def from_permutation(cls, permutation: Sequence[int]) -> "TranspositionKey":
        numbers = list(permutation)
        for number in numbers:
            _require_int(number, "Column number")
        if sorted(numbers) != list(range(1, len(numbers) + 1)):
            raise InvalidKeyError(
                f"Numeric key must be a permutation of 1..{len(numbers)}, got {numbers}."
            )
        return cls(tuple(n - 1 for n in numbers), source=" ".join(str(n) for n in numbers))

    @classmethod
    def parse(cls, raw: str) -> "TranspositionKey":
        """
        Letters are a keyword. Digits are a permutation: "4312567" reads one
        digit per column, "10,2,1,..." or "10 2 1 ..." allows wider keys.
        """
        text = raw.strip()
        if _LETTERS.match(text):
            return cls.from_keyword(text)
        parts = _split_numbers(text)
        if len(parts) == 1 and parts[0].isdigit():
            parts = list(parts[0])
        if not parts or not all(part.isdigit() for part in parts):
            raise InvalidKeyError(
                "Keyword must contain only letters, or be a numeric permutation like 4312567"
            )
        return cls.from_permutation([int(part) for part in parts])
