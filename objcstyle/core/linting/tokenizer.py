"""Objective-C Tokenizer.

Lexes Objective-C (and C / Objective-C++) source text into a flat token
stream. The stream is only meant to be good enough to locate declarations:
it does not understand the grammar, and it never fails on code it does not
recognise. The one hard error is a block comment that never closes, since
everything after it would be misread.

Token Kinds
-----------
    IDENTIFIER     Names and keywords (interface, static, const, ...)
    DIRECTIVE      @-keywords: @interface, @property, @end, ...
    NUMBER         Integer and floating literals, with suffixes
    STRING         "..." and @"..." literals
    CHAR           '...' literals
    PUNCTUATION    Operators and separators, multi-character ones merged
    COMMENT        // and /* */ comments
    PREPROCESSOR   A whole # line, including backslash continuations

Usage
-----
    tokens = tokenize(source)
    for token in significant_tokens(tokens):
        print(token.line, token.value)
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import List, Optional, Set

from objcstyle.core.exceptions import TokenizeError
from objcstyle.core.logging import get_logger

logger = get_logger(__name__)

MAX_TOKENS = 1_000_000  # Hard bound on tokens produced for one file


class TokenType(Enum):
    """Kinds of lexical tokens."""

    IDENTIFIER = "identifier"
    DIRECTIVE = "directive"
    NUMBER = "number"
    STRING = "string"
    CHAR = "char"
    PUNCTUATION = "punctuation"
    COMMENT = "comment"
    PREPROCESSOR = "preprocessor"


@dataclass(frozen=True)
class Token:
    """Immutable lexical token.

    line and column are 1-based; end_line is the last line the token
    touches (equal to line for single-line tokens).
    """

    type: TokenType
    value: str
    line: int
    column: int
    end_line: int

    def is_punct(self, value: str) -> bool:
        """Check for a punctuation token with the given text."""
        return self.type == TokenType.PUNCTUATION and self.value == value

    def is_ident(self, value: Optional[str] = None) -> bool:
        """Check for an identifier, optionally with the given text."""
        if self.type != TokenType.IDENTIFIER:
            return False
        return value is None or self.value == value


_IDENTIFIER = re.compile(r"(?:[^\W\d]|\$)[\w$]*")
_NUMBER = re.compile(
    r"(?:0[xX][0-9A-Fa-f]+|0[bB][01]+|\d+\.?\d*(?:[eE][+-]?\d+)?|\.\d+(?:[eE][+-]?\d+)?)"
    r"[uUlLfF]*"
)
_STRING = re.compile(r'"(?:[^"\\\n]|\\.)*"?', re.DOTALL)
_CHAR = re.compile(r"'(?:[^'\\\n]|\\.)*'?", re.DOTALL)

_PUNCTUATORS_3 = ("...", "<<=", ">>=")
_PUNCTUATORS_2 = (
    "->", "++", "--", "<<", ">>", "<=", ">=", "==", "!=", "&&", "||", "::",
    "+=", "-=", "*=", "/=", "%=", "&=", "|=", "^=", "##",
)


def _find_trailing_comment(text: str) -> int:
    """Return the index of a // or /* comment outside literals, or -1."""
    quote: Optional[str] = None
    i = 0
    while i < len(text):
        ch = text[i]
        if quote:
            if ch == "\\":
                i += 2
                continue
            if ch == quote:
                quote = None
        elif ch in ('"', "'"):
            quote = ch
        elif ch == "/" and text[i + 1 : i + 2] in ("/", "*"):
            return i
        i += 1
    return -1


def _preprocessor_end(source: str, pos: int) -> int:
    """Return the end index of a preprocessor line starting at pos."""
    end = source.find("\n", pos)
    while end != -1:
        stripped = source[pos:end].rstrip("\r")
        if not stripped.endswith("\\"):
            break
        end = source.find("\n", end + 1)
    return len(source) if end == -1 else end


class _Scanner:
    """Stateful single-pass scanner behind tokenize()."""

    def __init__(self, source: str) -> None:
        self.source = source
        self.pos = 0
        self.line = 1
        self.line_start = 0
        self.at_line_start = True
        self.tokens: List[Token] = []

    def _emit(self, token_type: TokenType, value: str) -> None:
        column = self.pos - self.line_start + 1
        newlines = value.count("\n")
        self.tokens.append(
            Token(token_type, value, self.line, column, self.line + newlines)
        )
        if newlines:
            self.line += newlines
            self.line_start = self.pos + value.rfind("\n") + 1
        self.pos += len(value)
        self.at_line_start = False

    def _scan_comment(self) -> bool:
        source, pos = self.source, self.pos
        if source.startswith("//", pos):
            end = source.find("\n", pos)
            end = len(source) if end == -1 else end
            self._emit(TokenType.COMMENT, source[pos:end].rstrip("\r"))
            return True
        if source.startswith("/*", pos):
            end = source.find("*/", pos + 2)
            if end == -1:
                raise TokenizeError(
                    f"Unterminated block comment starting at line {self.line}",
                    line=self.line,
                )
            self._emit(TokenType.COMMENT, source[pos : end + 2])
            return True
        return False

    def _scan_preprocessor(self) -> None:
        end = _preprocessor_end(self.source, self.pos)
        text = self.source[self.pos : end].rstrip("\r")
        cut = _find_trailing_comment(text)
        if cut > 0:
            text = text[:cut]
        self._emit(TokenType.PREPROCESSOR, text.rstrip())
        # Whitespace between the directive and a trailing comment
        while self.pos < end and self.source[self.pos] in " \t":
            self.pos += 1

    def _scan_at(self) -> None:
        source, pos = self.source, self.pos
        if source.startswith('@"', pos):
            match = _STRING.match(source, pos + 1)
            assert match is not None
            self._emit(TokenType.STRING, "@" + match.group(0))
            return
        match = _IDENTIFIER.match(source, pos + 1)
        if match:
            self._emit(TokenType.DIRECTIVE, "@" + match.group(0))
            return
        self._emit(TokenType.PUNCTUATION, "@")

    def _scan_punctuation(self) -> None:
        source, pos = self.source, self.pos
        for candidates in (_PUNCTUATORS_3, _PUNCTUATORS_2):
            for punct in candidates:
                if source.startswith(punct, pos):
                    self._emit(TokenType.PUNCTUATION, punct)
                    return
        self._emit(TokenType.PUNCTUATION, source[pos])

    def _scan_token(self) -> None:
        source, pos = self.source, self.pos
        ch = source[pos]

        if self._scan_comment():
            return
        if ch == "#" and self.at_line_start:
            self._scan_preprocessor()
            return
        if ch == "@":
            self._scan_at()
            return
        if ch == '"':
            self._emit(TokenType.STRING, _STRING.match(source, pos).group(0))
            return
        if ch == "'":
            self._emit(TokenType.CHAR, _CHAR.match(source, pos).group(0))
            return

        match = _NUMBER.match(source, pos)
        if match and (ch.isdigit() or ch == "."):
            self._emit(TokenType.NUMBER, match.group(0))
            return

        match = _IDENTIFIER.match(source, pos)
        if match:
            self._emit(TokenType.IDENTIFIER, match.group(0))
            return

        self._scan_punctuation()

    def run(self) -> List[Token]:
        source = self.source
        length = len(source)
        while self.pos < length:
            ch = source[self.pos]
            if ch == "\n":
                self.pos += 1
                self.line += 1
                self.line_start = self.pos
                self.at_line_start = True
                continue
            if ch in " \t\r\f\v":
                self.pos += 1
                continue
            self._scan_token()
            if len(self.tokens) >= MAX_TOKENS:
                logger.warning("Token limit reached, truncating", limit=MAX_TOKENS)
                break
        return self.tokens


def tokenize(source: str) -> List[Token]:
    """Lex source text into tokens.

    Args:
        source: Complete file contents.

    Returns:
        Tokens in source order, comments included.

    Raises:
        TokenizeError: If a block comment is never closed.
    """
    return _Scanner(source).run()


def significant_tokens(tokens: List[Token]) -> List[Token]:
    """Return tokens without comments."""
    return [t for t in tokens if t.type != TokenType.COMMENT]


def comment_line_ranges(tokens: List[Token]) -> Set[int]:
    """Return continuation lines of block comments.

    The first line of a block comment is not included: it is positioned
    like code, while the lines after it are usually aligned with spaces.
    """
    lines: Set[int] = set()
    for token in tokens:
        if token.type == TokenType.COMMENT and token.value.startswith("/*"):
            lines.update(range(token.line + 1, token.end_line + 1))
    return lines
