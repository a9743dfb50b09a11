"""Tests for the escape-sequence aware string helpers."""

from eep.ansi import (
    RESET,
    Token,
    TokenKind,
    pad_visible,
    printable,
    strip_escapes,
    tokenize,
    truncate_visible,
    visible_length,
)

RED = "\x1b[31m"


def test_tokenize_classifies_units():
    tokens = list(tokenize(f"a{RED}b"))
    assert tokens == [
        Token(TokenKind.PRINTABLE, "a"),
        Token(TokenKind.ESCAPE, RED),
        Token(TokenKind.PRINTABLE, "b"),
    ]


def test_tokenize_256_color_sequence_is_one_token():
    tokens = list(tokenize("\x1b[38;5;213mX"))
    assert tokens[0] == Token(TokenKind.ESCAPE, "\x1b[38;5;213m")
    assert tokens[1] == Token(TokenKind.PRINTABLE, "X")


def test_tokenize_osc_sequence():
    """OSC runs to BEL or ESC backslash."""
    osc = "\x1b]0;title\x07"
    assert list(tokenize(osc + "x")) == [Token(TokenKind.ESCAPE, osc), Token(TokenKind.PRINTABLE, "x")]
    osc_st = "\x1b]8;;http://example.com\x1b\\"
    assert visible_length(osc_st + "link") == 4


def test_unterminated_sequence_swallows_rest():
    assert visible_length("ab\x1b[31") == 2


def test_visible_length_ignores_escapes():
    assert visible_length(f"{RED}hello{RESET}") == 5
    assert visible_length("") == 0


def test_strip_escapes():
    assert strip_escapes(f"{RED}he{RESET}llo") == "hello"


def test_truncate_visible_short_string_unchanged():
    """A string that fits is returned as-is."""
    s = f"{RED}hi{RESET}"
    assert truncate_visible(s, 5) == s


def test_truncate_visible_appends_reset_when_cut():
    result = truncate_visible(f"{RED}hello world", 5)
    assert strip_escapes(result) == "hello"
    assert result.startswith(RED)
    assert result.endswith(RESET)


def test_truncate_visible_to_zero():
    result = truncate_visible("abc", 0)
    assert visible_length(result) == 0
    assert result == RESET


def test_pad_visible():
    padded = pad_visible(f"{RED}ab", 5)
    assert visible_length(padded) == 5
    assert padded.endswith("   ")
    assert pad_visible("abcdef", 3) == "abcdef"


def test_truncate_fitting_string_ending_in_escape_is_unchanged():
    """Trailing escapes do not count as a cut."""
    s = f"abc{RESET}"
    assert truncate_visible(s, 3) == s
    s = f"{RED}abc{RED}"
    assert truncate_visible(s, 3) == s


def test_printable_replaces_control_characters():
    assert printable("a\x1b[31mb\tc\x7f") == "a?[31mb?c?"
    assert printable("plain text") == "plain text"
    assert len(printable("\x00\x1f")) == 2
