"""
The seven classical ciphers, each registered as a CipherStrategy.

Substitution ciphers (Caesar, Affine, Vigenere) uppercase the text and
pass non-letters through in place. Positional ciphers normalize first:
Playfair and Hill keep letters only, Rail Fence and Row Transposition
keep letters and whitespace.
"""

from typing import Dict, List, Tuple

from . import matrix as mx
from .engine import CipherStrategy, register_cipher
from .errors import CharacterNotInGridError, InvalidKeyError, NoInverseError
from .keys import (
    AffineKey,
    CaesarKey,
    HillKey,
    PlayfairKey,
    RailFenceKey,
    TranspositionKey,
    VigenereKey,
)
from .log import log_info, log_warn
from .modular import mod_inverse
from .text import (
    ALPHABET,
    MODULUS,
    PAD_CHAR,
    index_to_letter,
    letter_to_index,
    normalize,
    pad_to_multiple,
)

PLAYFAIR_ALPHABET = "ABCDEFGHIKLMNOPQRSTUVWXYZ"  # I and J are combined
PLAYFAIR_SIZE = 5
MAX_RECOMMENDED_HILL_SIZE = 10


def _normalize_for(cipher_name: str, text: str, preserve_spaces: bool = False) -> str:
    cleaned = normalize(text, preserve_spaces)
    dropped = len(text) - len(cleaned)
    if dropped > 0:
        log_info(f"{cipher_name}: dropped {dropped} character(s) outside A-Z.")
    return cleaned

# ==========================================
#  SUBSTITUTION: Caesar / Affine / Vigenere
# ==========================================

def _shift(text: str, shift: int) -> str:
    result = []
    for char in text.upper():
        if char in ALPHABET:
            result.append(index_to_letter(letter_to_index(char) + shift))
        else:
            result.append(char)
    return "".join(result)


@register_cipher
class CaesarCipher(CipherStrategy):
    name = "caesar"
    description = "Shifts every letter a fixed number of places (key: shift 0-25)."
    key_type = CaesarKey
    key_help = "shift, e.g. 3"
    default_key = CaesarKey(3)

    def encrypt(self, text: str, key: CaesarKey) -> str:
        return _shift(text, key.shift)

    def decrypt(self, text: str, key: CaesarKey) -> str:
        return _shift(text, (MODULUS - key.shift) % MODULUS)


@register_cipher
class AffineCipher(CipherStrategy):
    name = "affine"
    description = "E(x) = (a*x + b) mod 26 with a coprime to 26 (key: a,b)."
    key_type = AffineKey
    key_help = "a,b e.g. 5,8"
    default_key = AffineKey(5, 8)

    def encrypt(self, text: str, key: AffineKey) -> str:
        result = []
        for char in text.upper():
            if char in ALPHABET:
                x = letter_to_index(char)
                result.append(index_to_letter(key.a * x + key.b))
            else:
                result.append(char)
        return "".join(result)

    def decrypt(self, text: str, key: AffineKey) -> str:
        try:
            a_inv = mod_inverse(key.a, MODULUS)
        except NoInverseError:
            raise InvalidKeyError("Invalid key: a must be coprime with 26") from None

        result = []
        for char in text.upper():
            if char in ALPHABET:
                y = letter_to_index(char)
                result.append(index_to_letter(a_inv * (y - key.b)))
            else:
                result.append(char)
        return "".join(result)

    def describe_key(self, key: AffineKey) -> str:
        a_inv = mod_inverse(key.a, MODULUS)
        return f"a={key.a} b={key.b} a^-1={a_inv}"


@register_cipher
class VigenereCipher(CipherStrategy):
    name = "vigenere"
    description = "Polyalphabetic shift driven by a repeating keyword (key: letters)."
    key_type = VigenereKey
    key_help = "keyword, e.g. LEMON"
    default_key = VigenereKey("KEY")

    def _apply(self, text: str, key: VigenereKey, sign: int) -> str:
        shifts = key.shifts
        key_index = 0  # advances on letters only
        result = []
        for char in text.upper():
            if char in ALPHABET:
                shift = shifts[key_index % len(shifts)]
                key_index += 1
                result.append(index_to_letter(letter_to_index(char) + sign * shift))
            else:
                result.append(char)
        return "".join(result)

    def encrypt(self, text: str, key: VigenereKey) -> str:
        return self._apply(text, key, 1)

    def decrypt(self, text: str, key: VigenereKey) -> str:
        return self._apply(text, key, -1)

# ==========================================
#  PLAYFAIR: 5x5 digraph substitution
# ==========================================

def playfair_grid(keyword: str) -> List[List[str]]:
    """
    5x5 grid: keyword letters first (J folded into I, first occurrence
    only), then the rest of the 25-letter alphabet in order.
    """
    used = []
    for char in keyword.upper().replace("J", "I"):
        if char in PLAYFAIR_ALPHABET and char not in used:
            used.append(char)
    used.extend(char for char in PLAYFAIR_ALPHABET if char not in used)
    return [used[row * PLAYFAIR_SIZE:(row + 1) * PLAYFAIR_SIZE] for row in range(PLAYFAIR_SIZE)]


def playfair_preprocess(text: str) -> str:
    """
    Letters only, J -> I, split into digraphs.

    A pair of equal letters gets an 'X' after the first letter and the
    second letter starts the next pair; an odd trailing letter is padded
    with 'X'.
    """
    letters = normalize(text).replace("J", "I")
    processed = []
    i = 0
    while i < len(letters):
        first = letters[i]
        second = letters[i + 1] if i + 1 < len(letters) else PAD_CHAR
        if first == second:
            processed.append(first + PAD_CHAR)
            i += 1
        else:
            processed.append(first + second)
            i += 2
    return "".join(processed)


def _grid_positions(grid: List[List[str]]) -> Dict[str, Tuple[int, int]]:
    return {char: (r, c) for r, row in enumerate(grid) for c, char in enumerate(row)}


def _find_position(positions: Dict[str, Tuple[int, int]], char: str) -> Tuple[int, int]:
    try:
        return positions[char]
    except KeyError:
        raise CharacterNotInGridError(f"Character '{char}' not found in Playfair grid.") from None


@register_cipher
class PlayfairCipher(CipherStrategy):
    name = "playfair"
    description = "Digraph substitution on a keyword-derived 5x5 grid (key: letters)."
    key_type = PlayfairKey
    key_help = "keyword, e.g. MONARCHY"
    default_key = PlayfairKey("MONARCHY")

    def _apply(self, letters: str, key: PlayfairKey, step: int) -> str:
        grid = playfair_grid(key.keyword)
        positions = _grid_positions(grid)
        result = []
        for i in range(0, len(letters), 2):
            r1, c1 = _find_position(positions, letters[i])
            r2, c2 = _find_position(positions, letters[i + 1])

            if r1 == r2:  # same row
                result.append(grid[r1][(c1 + step) % PLAYFAIR_SIZE])
                result.append(grid[r2][(c2 + step) % PLAYFAIR_SIZE])
            elif c1 == c2:  # same column
                result.append(grid[(r1 + step) % PLAYFAIR_SIZE][c1])
                result.append(grid[(r2 + step) % PLAYFAIR_SIZE][c2])
            else:  # rectangle
                result.append(grid[r1][c2])
                result.append(grid[r2][c1])
        return "".join(result)

    def encrypt(self, text: str, key: PlayfairKey) -> str:
        return self._apply(playfair_preprocess(text), key, 1)

    def decrypt(self, text: str, key: PlayfairKey) -> str:
        letters = _normalize_for(self.name, text).replace("J", "I")
        if len(letters) % 2:
            log_warn("playfair: odd-length ciphertext, padding with 'X'.")
            letters += PAD_CHAR
        return self._apply(letters, key, -1)

    def describe_key(self, key: PlayfairKey) -> str:
        return "\n".join(" ".join(row) for row in playfair_grid(key.keyword))

# ==========================================
#  HILL: n x n matrix over Z/26Z
# ==========================================

def _hill_blocks(letters: str, matrix) -> str:
    size = len(matrix)
    padded = pad_to_multiple(letters, size)
    result = []
    for start in range(0, len(padded), size):
        vector = [[letter_to_index(char)] for char in padded[start:start + size]]
        product = mx.multiply(matrix, vector)
        result.extend(index_to_letter(row[0]) for row in product)
    return "".join(result)


@register_cipher
class HillCipher(CipherStrategy):
    name = "hill"
    description = "Block cipher multiplying n-letter vectors by an invertible matrix (key: rows)."
    key_type = HillKey
    key_help = "matrix rows, e.g. 3,3;2,5"
    default_key = HillKey.identity(2)

    def _check_size(self, key: HillKey):
        if key.size > MAX_RECOMMENDED_HILL_SIZE:
            log_warn(
                f"hill: {key.size}x{key.size} key; cofactor determinant grows factorially with size."
            )

    def encrypt(self, text: str, key: HillKey) -> str:
        self._check_size(key)
        return _hill_blocks(_normalize_for(self.name, text), key.matrix)

    def decrypt(self, text: str, key: HillKey) -> str:
        self._check_size(key)
        inverse = key.inverse()
        return _hill_blocks(_normalize_for(self.name, text), inverse)

    def describe_key(self, key: HillKey) -> str:
        lines = ["key:"]
        lines.extend(" ".join(f"{v:3}" for v in row) for row in key.matrix)
        lines.append(f"det mod 26: {mx.determinant(key.matrix)}")
        lines.append("inverse:")
        lines.extend(" ".join(f"{v:3}" for v in row) for row in key.inverse())
        return "\n".join(lines)

# ==========================================
#  RAIL FENCE: zigzag transposition
# ==========================================

def zigzag_pattern(length: int, rails: int) -> List[int]:
    """Rail index for each position; depends only on length and rails."""
    if rails == 1:
        return [0] * length
    pattern = []
    rail = 0
    direction = 1
    for _ in range(length):
        pattern.append(rail)
        rail += direction
        if rail == rails - 1 or rail == 0:
            direction = -direction
    return pattern


@register_cipher
class RailFenceCipher(CipherStrategy):
    name = "railfence"
    description = "Writes text in a zigzag over N rails and reads row by row (key: rails)."
    key_type = RailFenceKey
    key_help = "number of rails, e.g. 3"
    default_key = RailFenceKey(3)

    def encrypt(self, text: str, key: RailFenceKey) -> str:
        text = _normalize_for(self.name, text, preserve_spaces=True)
        if key.rails == 1:
            return text

        fence = [[] for _ in range(key.rails)]
        for char, rail in zip(text, zigzag_pattern(len(text), key.rails)):
            fence[rail].append(char)
        return "".join("".join(row) for row in fence)

    def decrypt(self, text: str, key: RailFenceKey) -> str:
        text = _normalize_for(self.name, text, preserve_spaces=True)
        if key.rails == 1:
            return text

        pattern = zigzag_pattern(len(text), key.rails)

        # Slice the ciphertext into per-rail segments
        rail_counts = [0] * key.rails
        for rail in pattern:
            rail_counts[rail] += 1
        fence = []
        start = 0
        for count in rail_counts:
            fence.append(text[start:start + count])
            start += count

        # Replay the zigzag, consuming each rail in order
        rail_indexes = [0] * key.rails
        result = []
        for rail in pattern:
            result.append(fence[rail][rail_indexes[rail]])
            rail_indexes[rail] += 1
        return "".join(result)

# ==========================================
#  ROW TRANSPOSITION: keyed columnar
# ==========================================

@register_cipher
class RowTranspositionCipher(CipherStrategy):
    name = "rowtransposition"
    description = "Fills rows and reads columns in key order (key: keyword or 4312567)."
    key_type = TranspositionKey
    key_help = "keyword (ZEBRAS) or permutation (4312567)"
    default_key = TranspositionKey.from_keyword("ZEBRAS")

    def encrypt(self, text: str, key: TranspositionKey) -> str:
        text = _normalize_for(self.name, text, preserve_spaces=True)
        cols = key.columns
        rows = -(-len(text) // cols)

        result = []
        for col in key.read_sequence:
            for row in range(rows):
                index = row * cols + col
                if index < len(text):  # ragged last row
                    result.append(text[index])
        return "".join(result)

    def decrypt(self, text: str, key: TranspositionKey) -> str:
        text = _normalize_for(self.name, text, preserve_spaces=True)
        cols = key.columns
        rows = -(-len(text) // cols)
        full_rows, long_columns = divmod(len(text), cols)

        # Row-major fill leaves the first `long_columns` columns one taller
        col_lengths = [full_rows + (1 if col < long_columns else 0) for col in range(cols)]

        grid = [[""] * cols for _ in range(rows)]
        text_index = 0
        for col in key.read_sequence:
            for row in range(col_lengths[col]):
                grid[row][col] = text[text_index]
                text_index += 1

        return "".join("".join(row) for row in grid)

    def describe_key(self, key: TranspositionKey) -> str:
        ranks = " ".join(str(rank + 1) for rank in key.order)
        sequence = " ".join(str(col + 1) for col in key.read_sequence)
        return f"column ranks: {ranks}\nread order (columns): {sequence}"
