import pytest

from classical_engine.errors import InvalidKeyError, SingularMatrixError
from classical_engine.keys import (
    VALID_AFFINE_A,
    AffineKey,
    CaesarKey,
    HillKey,
    PlayfairKey,
    RailFenceKey,
    TranspositionKey,
    VigenereKey,
)


@pytest.mark.parametrize("shift", [-1, 26, 100])
def test_caesar_shift_range(shift):
    with pytest.raises(InvalidKeyError, match="between 0 and 25"):
        CaesarKey(shift)


def test_caesar_parse():
    assert CaesarKey.parse(" 7 ") == CaesarKey(7)
    with pytest.raises(InvalidKeyError):
        CaesarKey.parse("three")
    with pytest.raises(InvalidKeyError):
        CaesarKey(True)


def test_affine_valid_a_values():
    assert VALID_AFFINE_A == (1, 3, 5, 7, 9, 11, 15, 17, 19, 21, 23, 25)


@pytest.mark.parametrize("a", [0, 2, 13, 26])
def test_affine_rejects_non_units(a):
    with pytest.raises(InvalidKeyError, match="a value must be one of"):
        AffineKey(a, 8)


def test_affine_b_range_and_parse():
    with pytest.raises(InvalidKeyError, match="b value"):
        AffineKey(5, 26)
    assert AffineKey.parse("5,8") == AffineKey(5, 8)
    assert AffineKey.parse("5:8") == AffineKey(5, 8)
    assert AffineKey.parse("5 8") == AffineKey(5, 8)
    with pytest.raises(InvalidKeyError):
        AffineKey.parse("5")


@pytest.mark.parametrize("keyword", ["", "  ", "LEM0N", "two words", 42])
def test_keyword_keys_reject_non_letters(keyword):
    with pytest.raises(InvalidKeyError, match="only letters"):
        VigenereKey(keyword)
    with pytest.raises(InvalidKeyError, match="only letters"):
        PlayfairKey(keyword)


def test_keyword_keys_uppercase():
    assert VigenereKey("lemon").keyword == "LEMON"
    assert VigenereKey("lemon").shifts == (11, 4, 12, 14, 13)
    assert PlayfairKey("Monarchy").keyword == "MONARCHY"


def test_hill_key_copies_matrix():
    rows = [[3, 3], [2, 5]]
    key = HillKey(rows)
    rows[0][0] = 1
    assert key.matrix == ((3, 3), (2, 5))
    assert key.size == 2


@pytest.mark.parametrize("matrix", [[[2, 4], [1, 2]], [[13, 0], [0, 1]]])
def test_hill_key_rejects_singular(matrix):
    with pytest.raises(SingularMatrixError):
        HillKey(matrix)


@pytest.mark.parametrize("matrix", [[[1]], [[1, 2, 3], [4, 5, 6]], [[1, 0], [0]], []])
def test_hill_key_rejects_bad_shape(matrix):
    with pytest.raises(InvalidKeyError, match="square matrix"):
        HillKey(matrix)


def test_hill_key_rejects_non_integers():
    with pytest.raises(InvalidKeyError, match=r"position \(1,2\)"):
        HillKey([[1, "a"], [0, 1]])


def test_hill_key_parse():
    assert HillKey.parse("3,3;2,5") == HillKey([[3, 3], [2, 5]])
    assert HillKey.parse("3 3 2 5") == HillKey([[3, 3], [2, 5]])
    assert HillKey.parse("6 24 1; 13 16 10; 20 17 15").size == 3
    with pytest.raises(InvalidKeyError, match="n\\*n"):
        HillKey.parse("1 2 3")
    with pytest.raises(InvalidKeyError, match="n\\*n"):
        HillKey.parse(" ".join(["1"] * 15))
    with pytest.raises(InvalidKeyError):
        HillKey.parse("1,x;0,1")


def test_hill_key_parse_flat_square_counts():
    assert HillKey.parse("6 24 1 13 16 10 20 17 15") == HillKey(
        [[6, 24, 1], [13, 16, 10], [20, 17, 15]]
    )
    flat_identity = " ".join("1" if i % 5 == 0 else "0" for i in range(16))
    assert HillKey.parse(flat_identity) == HillKey.identity(4)


def test_hill_identity():
    assert HillKey.identity(3).matrix == ((1, 0, 0), (0, 1, 0), (0, 0, 1))


def test_rail_fence_key():
    assert RailFenceKey(1).rails == 1
    with pytest.raises(InvalidKeyError):
        RailFenceKey(0)
    assert RailFenceKey.parse("4") == RailFenceKey(4)


def test_transposition_from_keyword_is_stable_rank():
    assert TranspositionKey.from_keyword("ZEBRAS").order == (5, 2, 1, 3, 0, 4)
    # repeated letters are ranked left to right
    assert TranspositionKey.from_keyword("BANANA").order == (3, 0, 4, 1, 5, 2)


def test_transposition_encodings_agree():
    keyword = TranspositionKey.from_keyword("zebras")
    numeric = TranspositionKey.from_permutation([6, 3, 2, 4, 1, 5])
    assert keyword == numeric
    assert keyword.read_sequence == (4, 2, 1, 3, 5, 0)


def test_transposition_rejects_bad_permutations():
    with pytest.raises(InvalidKeyError):
        TranspositionKey.from_permutation([1, 1, 2])
    with pytest.raises(InvalidKeyError):
        TranspositionKey.from_permutation([0, 1, 2])
    with pytest.raises(InvalidKeyError):
        TranspositionKey(())
    with pytest.raises(InvalidKeyError):
        TranspositionKey((0, 2))


def test_transposition_rejects_bool_column_numbers():
    with pytest.raises(InvalidKeyError, match="Column number"):
        TranspositionKey.from_permutation([True, 2])
    with pytest.raises(InvalidKeyError, match="Column number"):
        TranspositionKey.from_permutation([2.0, 1])


def test_transposition_parse():
    assert TranspositionKey.parse("4312567").order == (3, 2, 0, 1, 4, 5, 6)
    assert TranspositionKey.parse("ZEBRAS") == TranspositionKey.from_keyword("ZEBRAS")
    wide = TranspositionKey.parse("10,1,2,3,4,5,6,7,8,9")
    assert wide.columns == 10
    assert wide.order[0] == 9
    with pytest.raises(InvalidKeyError):
        TranspositionKey.parse("AB12")
