import pytest

from langcipher.classical.common import PASS_THROUGH, build_alphabet, resolve_alphabet, shift
from langcipher.core.errors import InvalidAlphabetError, UnknownSymbolError


def test_space_separated_spec():
    a = build_alphabet("A B C")
    assert a.symbols == ("A", "B", "C")
    assert len(a) == 3
    assert str(a) == "A B C"


def test_adjacent_and_sequence_specs_are_case_folded():
    assert build_alphabet("abc").symbols == ("A", "B", "C")
    assert build_alphabet(["x", "Y", "z"]).symbols == ("X", "Y", "Z")


@pytest.mark.parametrize(
    "spec",
    [
        None,
        "",
        "   ",
        [],
        "A a",  # duplicate once case-folded
        "AB C",  # multi-character token
        "A ,",  # pass-through symbol
        ["A", ""],
    ],
)
def test_invalid_specs_rejected(spec):
    with pytest.raises(InvalidAlphabetError):
        build_alphabet(spec)


def test_membership_is_case_insensitive(abc):
    assert "a" in abc
    assert "C" in abc
    assert "D" not in abc
    assert "," not in abc


def test_index_of_unknown_symbol(abc):
    with pytest.raises(UnknownSymbolError) as ei:
        abc.index("z")
    assert ei.value.symbol == "z"


def test_presets():
    assert len(resolve_alphabet("latin")) == 26
    assert len(resolve_alphabet("LATIN-digits")) == 36
    assert resolve_alphabet("X Y").symbols == ("X", "Y")


def test_alphabet_and_pass_through_are_disjoint(latin):
    assert not any(sym in PASS_THROUGH for sym in latin.symbols)


def test_shift_wraps_both_directions(abc):
    assert shift("A", abc, 1) == "B"
    assert shift("C", abc, 1) == "A"
    assert shift("A", abc, -1) == "C"
    assert shift("B", abc, 7) == "C"
    assert shift("B", abc, -7) == "A"


def test_shift_preserves_case(abc):
    assert shift("a", abc, 1) == "b"
    assert shift("c", abc, 1) == "a"


def test_shift_is_a_bijection(latin):
    for key in range(-len(latin), 2 * len(latin)):
        images = {shift(s, latin, key) for s in latin.symbols}
        assert len(images) == len(latin)


def test_alphabet_is_immutable(abc):
    with pytest.raises(AttributeError):
        abc.symbols = ("Z",)
