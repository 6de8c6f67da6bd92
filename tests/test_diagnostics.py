"""Tests for the diagnostics contract: what is reported, of which kind, and where."""

import pytest
import tomlscan


def test_duplicate_key_positioned_at_second_key():
    """a = 1 / a = 2 gives one SemanticError at the second a."""
    text = "a = 1\na = 2\n"
    document, diagnostics = tomlscan.decode(text)
    assert [type(d) for d in diagnostics] == [tomlscan.SemanticError]
    assert diagnostics[0].position == 6
    assert document == {"a": 1}


def test_multiline_string_first_newline_trimmed():
    assert tomlscan.loads('s = """\nfoo\nbar"""') == {"s": "foo\nbar"}


@pytest.mark.parametrize("toml_str", ["n = 1__000", "n = _100", "n = 100_", "n = 0x_1"])
def test_bad_underscores_are_lexical(toml_str):
    """Misplaced underscores are a LexicalError and bind no value."""
    document, diagnostics = tomlscan.decode(toml_str)
    assert [type(d) for d in diagnostics] == [tomlscan.LexicalError]
    assert "n" not in document


def test_underscore_between_digits():
    assert tomlscan.loads("n = 1_000") == {"n": 1000}


def test_array_of_tables_twice():
    assert tomlscan.loads("[[fruit]]\n[[fruit]]\n") == {"fruit": [{}, {}]}


@pytest.mark.parametrize("text", ['"abc', 'k = "abc', "'abc", 'k = ["abc'])
def test_unterminated_string_at_end_of_input(text):
    """Exactly one StructuralError, and the decode returns."""
    _, diagnostics = tomlscan.decode(text)
    assert len(diagnostics) == 1
    assert isinstance(diagnostics[0], tomlscan.StructuralError)


def test_redefined_table_header():
    text = "[a]\nx=1\n[a]\n"
    _, diagnostics = tomlscan.decode(text)
    assert [type(d) for d in diagnostics] == [tomlscan.SemanticError]
    assert diagnostics[0].position == 8


def test_diagnostics_are_frozen_records():
    _, diagnostics = tomlscan.decode("a = 1\na = 2")
    d = diagnostics[0]
    with pytest.raises(AttributeError):
        d.position = 0
    assert d == tomlscan.SemanticError(6, d.message)
    assert d.kind == "semantic"


@pytest.mark.parametrize("text,kinds", [
    ("a = 1\nb = \"\\q\"\n", ["lexical"]),
    ("a = 1 b = 2\n", ["structural"]),
    ("a.b = 1\na = 2\n", ["semantic"]),
    ("a = 1\n= 2\nb = 01\nb = 3\nb = 4\n", ["structural", "lexical", "semantic"]),
])
def test_kinds(text, kinds):
    _, diagnostics = tomlscan.decode(text)
    assert [d.kind for d in diagnostics] == kinds


def test_positions_follow_crlf_normalization():
    """Positions are offsets into the text with CRLF read as LF."""
    _, diagnostics = tomlscan.decode("a = 1\r\na = 2\r\n")
    assert diagnostics[0].position == 6


def test_decode_is_repeatable():
    """Each call has its own state: decoding twice gives equal results."""
    text = "a = [1, 2]\n[t]\nb = {c = 1}\nbad =\n"
    assert tomlscan.decode(text) == tomlscan.decode(text)


if __name__ == "__main__":
    pytest.main([__file__, "-v"])
