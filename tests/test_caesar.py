import pytest

from langcipher.classical.monoalphabetic.caesar import (
    CaesarCipher,
    crack,
    crack_with_store,
    decrypt,
    encrypt,
    symbol_frequencies,
)
from langcipher.core.errors import (
    InvalidFormatError,
    NotFoundError,
    StoreUnavailableError,
    UniformFrequencyError,
    UnknownAlphabetSymbolError,
    UnknownSymbolError,
)
from langcipher.core.results import Lookup
from langcipher.lang.model import LanguageModel

PLAIN = "MEET ME AT THE TREE"


def test_three_symbol_alphabet(abc):
    assert encrypt("ABC", abc, 1) == "BCA"
    assert decrypt("BCA", abc, 1) == "ABC"


def test_case_and_pass_through_preserved(abc):
    assert encrypt("aBc", abc, 1) == "bCa"
    assert encrypt("A, b. (C)!", abc, 1) == "B, c. (A)!"


def test_negative_and_large_keys(abc):
    assert encrypt("A", abc, -1) == "C"
    assert encrypt("ABC", abc, 4) == encrypt("ABC", abc, 1)


def test_unknown_symbol_fails_without_output(abc):
    with pytest.raises(UnknownSymbolError) as ei:
        encrypt("ABD", abc, 1)
    assert ei.value.symbol == "D"
    assert ei.value.position == 2


def test_newline_is_not_pass_through(latin):
    with pytest.raises(UnknownSymbolError):
        encrypt("HI\nTHERE", latin, 1)


@pytest.mark.parametrize("message", ["", None])
def test_empty_message_is_invalid(abc, message):
    with pytest.raises(InvalidFormatError):
        encrypt(message, abc, 1)
    with pytest.raises(InvalidFormatError):
        decrypt(message, abc, 1)


def test_decrypt_inverts_encrypt(latin):
    message = "Hello, World - it's [fine] & ~done~!"
    for key in (-27, -3, 0, 1, 13, 25, 26, 40):
        assert decrypt(encrypt(message, latin, key), latin, key) == message


def test_symbol_frequencies_ignore_whitespace_and_case():
    freqs = symbol_frequencies("bB a\tA\nc")
    assert [(f.symbol, f.count) for f in freqs] == [("A", 2), ("B", 2), ("C", 1)]


def test_crack_recovers_key(latin):
    for key in (0, 3, 17, 25):
        ct = encrypt(PLAIN, latin, key)
        assert crack(ct, latin, "E") == key


def test_crack_key_is_reduced_mod_alphabet(latin):
    ct = encrypt(PLAIN, latin, 29)
    assert crack(ct, latin, "e") == 3


def test_crack_tie_goes_to_lowest_alphabet_index(latin):
    # B and A both appear twice; A sits lower in the alphabet
    assert crack("BBAAC", latin, "A") == 0
    assert crack("BBAAC", latin, "B") == 25


@pytest.mark.parametrize("message", ["ABC", "AAA", "A, B", "  ,,  "])
def test_crack_uniform_frequencies(latin, message):
    with pytest.raises(UniformFrequencyError):
        crack(message, latin, "E")


def test_crack_rejects_unknown_symbols(latin):
    with pytest.raises(UnknownAlphabetSymbolError) as ei:
        crack("AAB1", latin, "E")
    assert ei.value.symbol == "1"
    assert isinstance(ei.value, UnknownSymbolError)


def test_crack_rejects_reference_outside_alphabet(abc):
    with pytest.raises(UnknownAlphabetSymbolError):
        crack("AAB", abc, "E")


def test_crack_empty_message(latin):
    with pytest.raises(InvalidFormatError):
        crack("", latin, "E")


def test_cipher_object_crack_result(latin):
    cipher = CaesarCipher(latin)
    ct = cipher.encrypt(PLAIN.lower(), 5)
    r = cipher.crack(ct, "e")
    assert r.key == 5
    assert r.plaintext == PLAIN.lower()
    assert r.meta["reference"] == "E"
    assert r.meta["most_frequent"] == latin.shift("E", 5)
    assert r.to_dict()["cipher_name"] == "caesar"


def test_crack_with_store_uses_most_frequent_char(latin, store):
    LanguageModel(store).train("english", "eeee ttt aa", [" "])
    ct = encrypt(PLAIN, latin, 7)
    r = crack_with_store(ct, latin, store, "english")
    assert r.key == 7
    assert r.plaintext == PLAIN


def test_crack_with_store_unknown_language(latin, store):
    with pytest.raises(NotFoundError):
        crack_with_store(encrypt(PLAIN, latin, 1), latin, store, "klingon")


class _DownStore:
    def get_most_frequent_char(self, language):
        return Lookup.transient(OSError("connection refused"))


def test_crack_with_store_unreachable(latin):
    with pytest.raises(StoreUnavailableError):
        crack_with_store(encrypt(PLAIN, latin, 1), latin, _DownStore(), "english")


def test_cipher_object_cracks_multi_line_text(latin):
    ct = encrypt("MEET ME", latin, 3) + "\n" + encrypt("AT THE TREE", latin, 3) + "\t!"
    assert crack(ct, latin, "E") == 3

    r = CaesarCipher(latin).crack(ct, "E")
    assert r.key == 3
    assert r.plaintext == "MEET ME\nAT THE TREE\t!"
    assert r.meta["frequencies"]["H"] == 6
