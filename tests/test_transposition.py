import pytest

from classical_engine.ciphers import RailFenceCipher, RowTranspositionCipher, zigzag_pattern
from classical_engine.keys import RailFenceKey, TranspositionKey

rail_fence = RailFenceCipher()
columnar = RowTranspositionCipher()

DISCOVERED = "WEAREDISCOVEREDFLEEATONCE"


# Rail Fence

def test_rail_fence_known_vector():
    assert rail_fence.encrypt(DISCOVERED, RailFenceKey(3)) == "WECRLTEERDSOEEFEAOCAIVDEN"
    assert rail_fence.decrypt("WECRLTEERDSOEEFEAOCAIVDEN", RailFenceKey(3)) == DISCOVERED


def test_zigzag_pattern():
    assert zigzag_pattern(8, 3) == [0, 1, 2, 1, 0, 1, 2, 1]
    assert zigzag_pattern(5, 2) == [0, 1, 0, 1, 0]
    assert zigzag_pattern(3, 1) == [0, 0, 0]


def test_two_rails():
    assert rail_fence.encrypt("HELLOWORLD", RailFenceKey(2)) == "HLOOLELWRD"


@pytest.mark.parametrize("rails", [1, 5, 100])
def test_degenerate_rails_are_identity(rails):
    text = "ABCDE"
    assert rail_fence.encrypt(text, RailFenceKey(rails)) == text
    assert rail_fence.decrypt(text, RailFenceKey(rails)) == text


@pytest.mark.parametrize("rails", range(1, 12))
def test_rail_fence_round_trip(rails):
    text = "WE ARE DISCOVERED FLEE AT ONCE"
    key = RailFenceKey(rails)
    assert rail_fence.decrypt(rail_fence.encrypt(text, key), key) == text


def test_rail_fence_drops_punctuation_keeps_spaces():
    assert rail_fence.encrypt("a b!", RailFenceKey(1)) == "A B"
    assert rail_fence.encrypt("", RailFenceKey(3)) == ""


# Row Transposition

ZEBRAS = TranspositionKey.from_keyword("ZEBRAS")


def test_columnar_ragged_known_vector():
    assert columnar.encrypt(DISCOVERED, ZEBRAS) == "EVLNACDTESEAROFODEECWIREE"


def test_columnar_ragged_decrypt():
    # 25 letters over 6 columns: only column 0 (read last) is long
    assert columnar.decrypt("EVLNACDTESEAROFODEECWIREE", ZEBRAS) == DISCOVERED


def test_columnar_full_rows_known_vector():
    plaintext = DISCOVERED + "QKJEU"
    ciphertext = "EVLNEACDTKESEAQROFOJDEECUWIREE"
    assert columnar.encrypt(plaintext, ZEBRAS) == ciphertext
    assert columnar.decrypt(ciphertext, ZEBRAS) == plaintext


def test_columnar_numeric_key():
    key = TranspositionKey.parse("4312567")
    plaintext = "ATTACKPOSTPONEDUNTILTWOAMXYZ"
    assert columnar.encrypt(plaintext, key) == "TTNAAPTMTSUOAODWCOIXKNLYPETZ"
    assert columnar.decrypt("TTNAAPTMTSUOAODWCOIXKNLYPETZ", key) == plaintext


def test_keyword_and_permutation_give_same_output():
    numeric = TranspositionKey.from_permutation([6, 3, 2, 4, 1, 5])
    assert columnar.encrypt(DISCOVERED, numeric) == columnar.encrypt(DISCOVERED, ZEBRAS)


@pytest.mark.parametrize("length", range(0, 20))
def test_columnar_round_trip_every_raggedness(length):
    text = "THEQUICKBROWNFOXJUMP"[:length]
    for key in (ZEBRAS, TranspositionKey.from_keyword("BANANA"), TranspositionKey.parse("4312567")):
        assert columnar.decrypt(columnar.encrypt(text, key), key) == text


def test_columnar_key_longer_than_text():
    assert columnar.encrypt("HI", ZEBRAS) == "IH"
    assert columnar.decrypt("IH", ZEBRAS) == "HI"


def test_columnar_preserves_spaces():
    text = "WE ARE DISCOVERED"
    ciphertext = columnar.encrypt(text, ZEBRAS)
    assert sorted(ciphertext) == sorted(text)
    assert columnar.decrypt(ciphertext, ZEBRAS) == text


def test_single_column_is_identity():
    key = TranspositionKey.from_keyword("A")
    assert columnar.encrypt("HELLO", key) == "HELLO"


def test_describe_key():
    text = columnar.describe_key(ZEBRAS)
    assert "column ranks: 6 3 2 4 1 5" in text
    assert "read order (columns): 5 3 2 4 6 1" in text
