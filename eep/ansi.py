"""Escape-sequence aware measurement and truncation of styled strings.

Status bar segments carry embedded SGR color sequences. Those sequences take
no room on screen, so every length and substring operation here counts only
printable characters:

- tokenize(): split a string into printable characters and escape sequences
- visible_length(): count printable characters
- truncate_visible(): cut to a printable width, ending in a reset if cut
- pad_visible(): right-pad with spaces up to a printable width
- printable(): neutralize control characters in untrusted text
"""

import re
from enum import Enum
from typing import Iterator, NamedTuple

from .constants import EditorConstants

ESC = EditorConstants.ESC
RESET = EditorConstants.RESET

_CONTROL_CHARS = re.compile(r"[\x00-\x1f\x7f]")


class TokenKind(Enum):
    PRINTABLE = "printable"
    ESCAPE = "escape"


class Token(NamedTuple):
    kind: TokenKind
    text: str


def _escape_end(s: str, pos: int) -> int:
    """Return the index just past the escape sequence that starts at pos.

    CSI sequences (ESC [) run up to and including their final byte
    (0x40-0x7E). OSC sequences (ESC ]) run up to BEL or ESC \\. Any other
    escape is ESC plus one character. An unterminated sequence swallows the
    rest of the string.
    """
    n = len(s)
    if pos + 1 >= n:
        return n
    introducer = s[pos + 1]
    if introducer == '[':
        j = pos + 2
        while j < n and not ('\x40' <= s[j] <= '\x7e'):
            j += 1
        return min(j + 1, n)
    if introducer == ']':
        j = pos + 2
        while j < n:
            if s[j] == '\x07':
                return j + 1
            if s[j] == ESC and j + 1 < n and s[j + 1] == '\\':
                return j + 2
            j += 1
        return n
    return pos + 2


def tokenize(s: str) -> Iterator[Token]:
    """Classify each unit of s as a printable character or an escape sequence."""
    i = 0
    n = len(s)
    while i < n:
        if s[i] == ESC:
            end = _escape_end(s, i)
            yield Token(TokenKind.ESCAPE, s[i:end])
            i = end
        else:
            yield Token(TokenKind.PRINTABLE, s[i])
            i += 1


def visible_length(s: str) -> int:
    """Number of printable characters in s; escape sequences count as zero."""
    return sum(1 for token in tokenize(s) if token.kind is TokenKind.PRINTABLE)


def strip_escapes(s: str) -> str:
    """Return s with every escape sequence removed."""
    return ''.join(token.text for token in tokenize(s) if token.kind is TokenKind.PRINTABLE)


def truncate_visible(s: str, max_len: int) -> str:
    """Cut s down to at most max_len printable characters.

    Escape sequences before the cut point are kept. If anything was cut off,
    the result ends with a reset sequence so styling does not bleed into
    whatever follows. A string that already fits is returned unchanged.
    """
    out: list[str] = []
    count = 0
    cut = False
    for token in tokenize(s):
        if token.kind is TokenKind.PRINTABLE:
            if count >= max_len:
                cut = True
                break
            count += 1
        out.append(token.text)
    result = ''.join(out)
    if cut and not result.endswith(RESET):
        result += RESET
    return result


def printable(s: str) -> str:
    """Replace control characters (ESC included) with '?', one for one.

    Document text is shown as-is on screen, so it must not carry sequences
    the terminal would act on. Replacement keeps column positions intact.
    """
    return _CONTROL_CHARS.sub('?', s)


def pad_visible(s: str, width: int) -> str:
    """Right-pad s with spaces so its printable length is at least width."""
    return s + ' ' * max(0, width - visible_length(s))
