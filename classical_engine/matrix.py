"""
Integer matrix arithmetic modulo 26, used by the Hill cipher.

Matrices are plain lists of row lists. Every function builds and returns
a new matrix; inputs are never modified.

The determinant uses recursive cofactor expansion, which is O(n!) and
fine for the small keys the Hill cipher uses (n <= 10 in practice).
"""

from typing import List, Sequence

from .errors import DimensionMismatchError, NoInverseError, SingularMatrixError
from .modular import mod_inverse, normalize_mod
from .text import MODULUS

Matrix = List[List[int]]


def _shape(matrix: Sequence[Sequence[int]]):
    rows = len(matrix)
    cols = len(matrix[0]) if rows else 0
    if any(len(row) != cols for row in matrix):
        raise DimensionMismatchError("Matrix rows must all have the same length.")
    return rows, cols


def _require_square(matrix: Sequence[Sequence[int]]) -> int:
    rows, cols = _shape(matrix)
    if rows == 0 or rows != cols:
        raise DimensionMismatchError(f"Expected a non-empty square matrix, got {rows}x{cols}.")
    return rows


def identity(size: int) -> Matrix:
    return [[1 if i == j else 0 for j in range(size)] for i in range(size)]


def minor(matrix: Sequence[Sequence[int]], row: int, col: int) -> Matrix:
    """The matrix with `row` and `col` removed."""
    return [
        [value for j, value in enumerate(cells) if j != col]
        for i, cells in enumerate(matrix)
        if i != row
    ]


def determinant(matrix: Sequence[Sequence[int]]) -> int:
    """
    Determinant reduced into [0, 26).

    Closed form for 1x1 and 2x2; otherwise expands along the first row.
    Each recursive call reduces its own result, so intermediate sums stay
    small.
    """
    n = _require_square(matrix)

    if n == 1:
        return normalize_mod(matrix[0][0])

    if n == 2:
        return normalize_mod(matrix[0][0] * matrix[1][1] - matrix[0][1] * matrix[1][0])

    det = 0
    for j in range(n):
        if matrix[0][j] % MODULUS == 0:
            continue  # term vanishes mod 26
        sign = -1 if j % 2 else 1
        det += matrix[0][j] * sign * determinant(minor(matrix, 0, j))
    return normalize_mod(det)


def cofactor_matrix(matrix: Sequence[Sequence[int]]) -> Matrix:
    """cofactor[i][j] = (-1)^(i+j) * det(minor(M, i, j)), reduced mod 26."""
    n = _require_square(matrix)
    return [
        [normalize_mod((-1) ** (i + j) * determinant(minor(matrix, i, j))) for j in range(n)]
        for i in range(n)
    ]


def transpose(matrix: Sequence[Sequence[int]]) -> Matrix:
    return [list(column) for column in zip(*matrix)]


def adjugate(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Transpose of the cofactor matrix, with closed forms for n <= 2."""
    n = _require_square(matrix)
    if n == 1:
        return [[1]]
    if n == 2:
        (a, b), (c, d) = matrix
        return [
            [normalize_mod(d), normalize_mod(-b)],
            [normalize_mod(-c), normalize_mod(a)],
        ]
    return transpose(cofactor_matrix(matrix))


def inverse(matrix: Sequence[Sequence[int]]) -> Matrix:
    """
    Inverse modulo 26: adj(M) * det(M)^-1.

    Raises SingularMatrixError if det(M) is not a unit mod 26.
    """
    det = determinant(matrix)
    try:
        det_inv = mod_inverse(det, MODULUS)
    except NoInverseError:
        raise SingularMatrixError(
            f"Matrix is not invertible (determinant {det} shares a factor with {MODULUS}). "
            "Choose different values."
        ) from None

    return [[normalize_mod(value * det_inv) for value in row] for row in adjugate(matrix)]


def multiply(left: Sequence[Sequence[int]], right: Sequence[Sequence[int]]) -> Matrix:
    """Row-by-column product with every entry reduced mod 26."""
    rows_l, cols_l = _shape(left)
    rows_r, cols_r = _shape(right)
    if cols_l != rows_r:
        raise DimensionMismatchError(
            f"Cannot multiply a {rows_l}x{cols_l} matrix by a {rows_r}x{cols_r} matrix."
        )

    return [
        [
            normalize_mod(sum(left[i][k] * right[k][j] for k in range(cols_l)))
            for j in range(cols_r)
        ]
        for i in range(rows_l)
    ]


def reduce_mod(matrix: Sequence[Sequence[int]]) -> Matrix:
    """Copy of `matrix` with every entry reduced into [0, 26)."""
    return [[normalize_mod(value) for value in row] for row in matrix]
