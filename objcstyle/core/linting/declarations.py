"""Declaration Extractor.

Walks the token stream produced by the tokenizer and records the
declarations that naming rules care about: classes, protocols, categories,
methods, properties, instance variables, constants, enumerations and value
macros.

This is deliberately not a parser. It recognises declaration shapes at the
places they can occur and skips everything else by balanced-brace matching,
so method and function bodies are never inspected. Malformed input never
raises; extraction stops at the end of the stream.

Recognised Shapes
-----------------
    @interface Name : Super <Protocols> { ivars }     CLASS, INSTANCE_VARIABLE
    @interface Name (Category)                        CATEGORY
    @interface Name ()                                EXTENSION
    @protocol Name <Protocols>                        PROTOCOL
    @property (attributes) Type *name;                PROPERTY
    - (Type)part:(Type)arg part:(Type)arg;            METHOD
    static NSString * const XYZKey = @"...";          CONSTANT
    typedef NS_ENUM(NSInteger, Name) { ... };         ENUMERATION, ENUMERATOR
    #define NAME value                                MACRO
"""

from __future__ import annotations

import re
from dataclasses import dataclass
from enum import Enum
from typing import Callable, Dict, List, Optional, Tuple

from objcstyle.core.linting.tokenizer import Token, TokenType, significant_tokens

ENUM_MACROS = frozenset(
    {"NS_ENUM", "NS_OPTIONS", "NS_CLOSED_ENUM", "NS_ERROR_ENUM", "CF_ENUM", "CF_OPTIONS"}
)

# Identifiers that qualify a declaration without being its name
QUALIFIERS = frozenset(
    {
        "const", "static", "extern", "volatile", "register", "inline",
        "unsigned", "signed", "long", "short", "struct", "enum", "union",
        "__weak", "__strong", "__unsafe_unretained", "__autoreleasing", "__block",
        "_Nullable", "_Nonnull", "_Null_unspecified", "__nullable", "__nonnull",
        "nullable", "nonnull", "IBOutlet", "IBInspectable", "__kindof",
        "FOUNDATION_EXPORT", "FOUNDATION_EXTERN", "UIKIT_EXTERN", "APPKIT_EXTERN",
    }
)

_ATTRIBUTE_MACRO = re.compile(r"^[A-Z][A-Z0-9]*(?:_[A-Z0-9]+)+$")
_DEFINE = re.compile(r"^#\s*define\s+([A-Za-z_]\w*)(\(?)(.*)$", re.DOTALL)


class DeclarationKind(Enum):
    """Kinds of extracted declarations."""

    CLASS = "class"
    PROTOCOL = "protocol"
    CATEGORY = "category"
    EXTENSION = "extension"
    METHOD = "method"
    PROPERTY = "property"
    INSTANCE_VARIABLE = "instance_variable"
    CONSTANT = "constant"
    ENUMERATION = "enumeration"
    ENUMERATOR = "enumerator"
    MACRO = "macro"


@dataclass(frozen=True)
class Declaration:
    """A named declaration and where it occurs.

    For methods, name is the full selector ("initWithFrame:style:") and
    line/column point at the leading '-' or '+'.
    """

    kind: DeclarationKind
    name: str
    line: int
    column: int
    container: Optional[str] = None
    superclass: Optional[str] = None
    selector_parts: Tuple[str, ...] = ()
    argument_names: Tuple[str, ...] = ()
    is_class_method: bool = False
    value: str = ""


def _is_attribute_macro(name: str) -> bool:
    return bool(_ATTRIBUTE_MACRO.match(name))


def _split_top_level(
    tokens: List[Token], separator: str = ",", angle_brackets: bool = True
) -> List[List[Token]]:
    """Split tokens on separator outside (), [], {} and, optionally, <>.

    Expressions such as enumerator initializers pass angle_brackets=False
    so that comparisons and shifts do not open a bracket.
    """
    openers = ("(", "[", "{", "<") if angle_brackets else ("(", "[", "{")
    closers = (")", "]", "}", ">") if angle_brackets else (")", "]", "}")
    segments: List[List[Token]] = [[]]
    depth = 0
    for token in tokens:
        if token.type == TokenType.PUNCTUATION:
            if token.value in openers:
                depth += 1
            elif token.value in closers:
                depth = max(depth - 1, 0)
            elif token.value == ">>" and angle_brackets:
                depth = max(depth - 2, 0)
            elif token.value == separator and depth == 0:
                segments.append([])
                continue
        segments[-1].append(token)
    return [segment for segment in segments if segment]


def _block_or_pointer_name(tokens: List[Token]) -> Optional[Token]:
    """Find the name in `(^name)` or `(*name)` declarators."""
    for i in range(len(tokens) - 2):
        if not (
            tokens[i].is_punct("(")
            and tokens[i + 1].type == TokenType.PUNCTUATION
            and tokens[i + 1].value in ("^", "*")
        ):
            continue
        for token in tokens[i + 2 : i + 5]:
            if token.type != TokenType.IDENTIFIER:
                break
            if token.value not in QUALIFIERS:
                return token
    return None


def declared_name(tokens: List[Token]) -> Optional[Token]:
    """Return the token naming a single C declarator.

    The name is the last plain identifier outside brackets, ignoring
    qualifiers, function-like attributes and trailing attribute macros
    such as UI_APPEARANCE_SELECTOR. Scanning stops at a bitfield ':'.
    """
    special = _block_or_pointer_name(tokens)
    if special is not None:
        return special

    candidates: List[Token] = []
    depth = 0
    for i, token in enumerate(tokens):
        if token.type == TokenType.PUNCTUATION:
            if token.value in ("(", "[", "<"):
                depth += 1
            elif token.value in (")", "]", ">"):
                depth = max(depth - 1, 0)
            elif token.value == ">>":
                depth = max(depth - 2, 0)
            elif token.value == ":" and depth == 0:
                break
            continue
        if token.type != TokenType.IDENTIFIER or depth > 0:
            continue
        following = tokens[i + 1] if i + 1 < len(tokens) else None
        if following is not None and following.is_punct("("):
            continue
        if token.value in QUALIFIERS:
            continue
        candidates.append(token)

    # Type, name, then macros: a two-candidate declarator is "Type NAME"
    while len(candidates) > 2 and _is_attribute_macro(candidates[-1].value):
        candidates.pop()
    return candidates[-1] if candidates else None


class DeclarationExtractor:
    """Single-pass declaration extractor over significant tokens."""

    def __init__(self, tokens: List[Token]) -> None:
        self._tokens = significant_tokens(tokens)
        self._pos = 0
        self._container: Optional[str] = None
        self._declarations: List[Declaration] = []
        self._directives: Dict[str, Callable[[], None]] = {
            "@interface": self._parse_interface,
            "@implementation": self._parse_implementation,
            "@protocol": self._parse_protocol,
            "@property": self._parse_property,
            "@end": self._parse_end,
            "@class": self._skip_statement,
            "@synthesize": self._skip_statement,
            "@dynamic": self._skip_statement,
            "@import": self._skip_statement,
        }

    # ------------------------------------------------------------------
    # Cursor helpers
    # ------------------------------------------------------------------

    def _peek(self, offset: int = 0) -> Optional[Token]:
        index = self._pos + offset
        if index < len(self._tokens):
            return self._tokens[index]
        return None

    def _peek_is_punct(self, value: str, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.is_punct(value)

    def _peek_is_ident(self, offset: int = 0) -> bool:
        token = self._peek(offset)
        return token is not None and token.type == TokenType.IDENTIFIER

    def _at_end(self) -> bool:
        return self._pos >= len(self._tokens)

    def _skip_balanced(self, open_: str, close: str) -> None:
        """Skip from an opening token past its matching closing token."""
        depth = 0
        while not self._at_end():
            token = self._tokens[self._pos]
            self._pos += 1
            if token.is_punct(open_):
                depth += 1
            elif token.is_punct(close):
                depth -= 1
                if depth <= 0:
                    return
            elif open_ == "<" and token.is_punct(">>"):
                depth -= 2
                if depth <= 0:
                    return

    def _skip_statement(self) -> None:
        """Skip up to and including the next ';'."""
        while not self._at_end():
            token = self._tokens[self._pos]
            self._pos += 1
            if token.is_punct(";"):
                return

    def _emit(self, kind: DeclarationKind, token: Token, **kwargs: object) -> None:
        self._declarations.append(
            Declaration(
                kind=kind, name=token.value, line=token.line, column=token.column, **kwargs
            )
        )

    # ------------------------------------------------------------------
    # Entry point
    # ------------------------------------------------------------------

    def extract(self) -> List[Declaration]:
        """Return all declarations in source order."""
        while not self._at_end():
            start = self._pos
            self._parse_next()
            if self._pos == start:
                self._pos += 1
        return self._declarations

    def _parse_next(self) -> None:
        token = self._tokens[self._pos]

        if token.type == TokenType.PREPROCESSOR:
            self._parse_macro(token)
            self._pos += 1
            return

        if token.type == TokenType.DIRECTIVE:
            handler = self._directives.get(token.value)
            if handler is not None:
                handler()
            else:
                self._pos += 1
            return

        if (
            self._container is not None
            and token.type == TokenType.PUNCTUATION
            and token.value in ("-", "+")
            and self._peek_is_punct("(", 1)
        ):
            self._parse_method()
            return

        if token.is_punct("{"):
            self._skip_balanced("{", "}")
            return
        if token.is_punct(";") or token.is_punct("}"):
            self._pos += 1
            return

        self._parse_statement()

    # ------------------------------------------------------------------
    # Objective-C containers
    # ------------------------------------------------------------------

    def _parse_interface(self) -> None:
        self._pos += 1
        name_token = self._peek()
        if name_token is None or name_token.type != TokenType.IDENTIFIER:
            return
        self._pos += 1
        self._container = name_token.value

        if self._peek_is_punct("<"):
            self._skip_balanced("<", ">")  # lightweight generics

        if self._peek_is_punct("("):
            self._pos += 1
            category = self._peek() if self._peek_is_ident() else None
            while not self._at_end() and not self._peek_is_punct(")"):
                self._pos += 1
            self._pos += 1
            if category is not None:
                self._emit(DeclarationKind.CATEGORY, category, container=name_token.value)
            else:
                self._emit(DeclarationKind.EXTENSION, name_token)
        else:
            superclass: Optional[str] = None
            if self._peek_is_punct(":"):
                self._pos += 1
                if self._peek_is_ident():
                    superclass = self._tokens[self._pos].value
                    self._pos += 1
            self._emit(DeclarationKind.CLASS, name_token, superclass=superclass)

        if self._peek_is_punct("<"):
            self._skip_balanced("<", ">")
        if self._peek_is_punct("{"):
            self._parse_ivar_block()

    def _parse_implementation(self) -> None:
        self._pos += 1
        if not self._peek_is_ident():
            return
        self._container = self._tokens[self._pos].value
        self._pos += 1
        if self._peek_is_punct("("):
            self._skip_balanced("(", ")")
        if self._peek_is_punct(":"):
            self._pos += 1
            if self._peek_is_ident():
                self._pos += 1
        if self._peek_is_punct("{"):
            self._parse_ivar_block()

    def _parse_protocol(self) -> None:
        self._pos += 1
        name_token = self._peek()
        if name_token is None or name_token.type != TokenType.IDENTIFIER:
            return  # @protocol(Name) expression
        self._pos += 1
        if self._peek_is_punct(";") or self._peek_is_punct(","):
            self._skip_statement()  # forward declaration
            return
        self._emit(DeclarationKind.PROTOCOL, name_token)
        self._container = name_token.value
        if self._peek_is_punct("<"):
            self._skip_balanced("<", ">")

    def _parse_end(self) -> None:
        self._pos += 1
        self._container = None

    def _parse_ivar_block(self) -> None:
        self._pos += 1  # '{'
        statement: List[Token] = []
        while not self._at_end():
            token = self._tokens[self._pos]
            if token.is_punct("}"):
                self._pos += 1
                break
            if token.is_punct("{"):
                self._skip_balanced("{", "}")
                continue
            self._pos += 1
            if token.type in (TokenType.DIRECTIVE, TokenType.PREPROCESSOR):
                continue
            if token.is_punct(";"):
                self._emit_variables(statement, DeclarationKind.INSTANCE_VARIABLE)
                statement = []
                continue
            statement.append(token)

    def _emit_variables(self, statement: List[Token], kind: DeclarationKind) -> None:
        for segment in _split_top_level(statement):
            name = declared_name(segment)
            if name is not None:
                self._emit(kind, name, container=self._container)

    def _parse_property(self) -> None:
        self._pos += 1
        if self._peek_is_punct("("):
            self._skip_balanced("(", ")")
        statement: List[Token] = []
        while not self._at_end():
            token = self._tokens[self._pos]
            if token.type in (TokenType.DIRECTIVE, TokenType.PREPROCESSOR):
                break
            self._pos += 1
            if token.is_punct(";"):
                break
            statement.append(token)
        self._emit_variables(statement, DeclarationKind.PROPERTY)

    # ------------------------------------------------------------------
    # Methods
    # ------------------------------------------------------------------

    def _parse_method(self) -> None:
        sign = self._tokens[self._pos]
        self._pos += 1
        self._skip_balanced("(", ")")  # return type

        parts: List[str] = []
        arguments: List[str] = []
        while not self._at_end():
            token = self._tokens[self._pos]
            if token.type == TokenType.IDENTIFIER and self._peek_is_punct(":", 1):
                parts.append(token.value)
                self._pos += 2
            elif token.is_punct(":"):
                parts.append("")
                self._pos += 1
            elif not parts and token.type == TokenType.IDENTIFIER:
                parts.append(token.value)
                self._pos += 1
                break
            else:
                break
            if self._peek_is_punct("("):
                self._skip_balanced("(", ")")
            if self._peek_is_ident():
                arguments.append(self._tokens[self._pos].value)
                self._pos += 1

        if parts:
            if arguments or self._selector_has_colons(parts):
                selector = "".join(f"{part}:" for part in parts)
            else:
                selector = parts[0]
            self._declarations.append(
                Declaration(
                    kind=DeclarationKind.METHOD,
                    name=selector,
                    line=sign.line,
                    column=sign.column,
                    container=self._container,
                    selector_parts=tuple(parts),
                    argument_names=tuple(arguments),
                    is_class_method=sign.value == "+",
                )
            )
        self._skip_method_tail()

    @staticmethod
    def _selector_has_colons(parts: List[str]) -> bool:
        return len(parts) > 1 or parts[0] == ""

    def _skip_method_tail(self) -> None:
        """Skip attributes after a signature, then the ';' or the body."""
        while not self._at_end():
            token = self._tokens[self._pos]
            if token.type == TokenType.DIRECTIVE:
                return
            if token.is_punct(";"):
                self._pos += 1
                return
            if token.is_punct("{"):
                self._skip_balanced("{", "}")
                return
            if token.is_punct("("):
                self._skip_balanced("(", ")")
                continue
            self._pos += 1

    # ------------------------------------------------------------------
    # C-level statements
    # ------------------------------------------------------------------

    def _collect_statement(self) -> Tuple[List[Token], Optional[str]]:
        """Collect tokens up to ';' (consumed) or '{' (left in place)."""
        collected: List[Token] = []
        while not self._at_end():
            token = self._tokens[self._pos]
            if token.type in (TokenType.DIRECTIVE, TokenType.PREPROCESSOR):
                return collected, None
            if token.is_punct(";"):
                self._pos += 1
                return collected, ";"
            if token.is_punct("}"):
                return collected, None
            if token.is_punct("{"):
                if any(t.is_punct("=") for t in collected):
                    # brace initializer or block literal
                    self._skip_balanced("{", "}")
                    continue
                return collected, "{"
            collected.append(token)
            self._pos += 1
        return collected, None

    def _parse_statement(self) -> None:
        collected, terminator = self._collect_statement()
        if not collected:
            return

        values = [t.value for t in collected if t.type == TokenType.IDENTIFIER]
        if terminator == "{" and values == ["extern"] and len(collected) == 2:
            self._pos += 1  # extern "C" { ... } keeps its contents visible
            return
        if any(v in ENUM_MACROS for v in values) or "enum" in values:
            self._parse_enum(collected, terminator)
            return
        if terminator == "{":
            self._skip_balanced("{", "}")
            if values and values[0] == "typedef":
                self._skip_statement()
            return
        if values and values[0] != "typedef":
            self._parse_constant(collected)

    def _parse_constant(self, collected: List[Token]) -> None:
        declarator: List[Token] = []
        depth = 0
        has_const = False
        for token in collected:
            if token.is_punct("="):
                break
            if token.is_punct("(") or token.is_punct("["):
                if depth == 0 and token.is_punct("("):
                    if _block_or_pointer_name(collected) is None:
                        return  # function prototype
                depth += 1
            elif token.is_punct(")") or token.is_punct("]"):
                depth = max(depth - 1, 0)
            elif token.is_ident("const") and depth == 0:
                has_const = True
            declarator.append(token)
        if not has_const:
            return
        name = declared_name(declarator)
        if name is not None:
            self._emit(DeclarationKind.CONSTANT, name, container=self._container)

    def _parse_enum(self, collected: List[Token], terminator: Optional[str]) -> None:
        name_token = self._enum_name_from_header(collected)
        if terminator != "{":
            return  # forward declaration or variable of enum type

        enumerators = self._parse_enum_body()
        trailing, _ = self._collect_statement()
        declarators = _split_top_level(trailing)
        is_typedef = any(token.is_ident("typedef") for token in collected)
        if declarators and (name_token is None or is_typedef):
            # typedef enum _Tag {...} Name; is known by Name
            name_token = declared_name(declarators[0]) or name_token

        enum_name = name_token.value if name_token is not None else None
        if name_token is not None:
            self._emit(DeclarationKind.ENUMERATION, name_token)
        for token in enumerators:
            self._emit(DeclarationKind.ENUMERATOR, token, container=enum_name)

    @staticmethod
    def _enum_name_from_header(collected: List[Token]) -> Optional[Token]:
        for i, token in enumerate(collected):
            if token.value in ENUM_MACROS and i + 1 < len(collected) and collected[i + 1].is_punct("("):
                inner: List[Token] = []
                depth = 0
                for inner_token in collected[i + 1 :]:
                    if inner_token.is_punct("("):
                        depth += 1
                        if depth == 1:
                            continue
                    elif inner_token.is_punct(")"):
                        depth -= 1
                        if depth == 0:
                            break
                    inner.append(inner_token)
                arguments = _split_top_level(inner)
                if len(arguments) >= 2:
                    return declared_name(arguments[-1])
                return None
            if token.is_ident("enum"):
                following = collected[i + 1] if i + 1 < len(collected) else None
                if following is not None and following.type == TokenType.IDENTIFIER:
                    return following
                return None
        return None

    def _parse_enum_body(self) -> List[Token]:
        self._pos += 1  # '{'
        body: List[Token] = []
        depth = 0
        while not self._at_end():
            token = self._tokens[self._pos]
            self._pos += 1
            if token.is_punct("{"):
                depth += 1
            elif token.is_punct("}"):
                if depth == 0:
                    break
                depth -= 1
            if token.type != TokenType.PREPROCESSOR:
                body.append(token)

        enumerators: List[Token] = []
        for segment in _split_top_level(body, angle_brackets=False):
            first = segment[0]
            if first.type == TokenType.IDENTIFIER:
                enumerators.append(first)
        return enumerators

    # ------------------------------------------------------------------
    # Preprocessor
    # ------------------------------------------------------------------

    def _parse_macro(self, token: Token) -> None:
        match = _DEFINE.match(token.value)
        if not match or match.group(2):
            return  # not a define, or a function-like macro
        value = match.group(3).replace("\\\r\n", " ").replace("\\\n", " ").strip()
        if not value:
            return  # include guard or feature flag
        name = match.group(1)
        self._declarations.append(
            Declaration(
                kind=DeclarationKind.MACRO,
                name=name,
                line=token.line,
                column=token.column,
                container=None,
                value=value,
            )
        )


def extract_declarations(tokens: List[Token]) -> List[Declaration]:
    """Extract declarations from a token stream.

    Args:
        tokens: Output of tokenize(); comments are ignored.

    Returns:
        Declarations in source order.
    """
    return DeclarationExtractor(tokens).extract()
