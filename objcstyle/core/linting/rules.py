"""Style Rule Catalogue.

Each rule pairs metadata (id, category, severity, message) with an
independent predicate. Predicates never look at each other's results, so
switching one rule off cannot change what another reports.

Rule Targets
------------
    DECLARATION  check(declaration, context), for the declaration kinds
                 listed on the rule
    LINE         check(source_line, context), once per physical line
    FILE         check(source, context), once per file

Rule Ids
--------
    OBJC0xx  file level      OBJC1xx  naming      FMT2xx  formatting
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, replace
from enum import Enum
from typing import Any, Callable, Dict, FrozenSet, List, Optional, Set

from objcstyle.core.config import LintConfig
from objcstyle.core.linting.declarations import Declaration, DeclarationKind
from objcstyle.core.linting.report import RuleCategory, ViolationSeverity

TAB_WIDTH = 4  # Columns a tab counts for in line length checks

# Naming convention patterns
UPPER_CAMEL_PATTERN = re.compile(r"^[A-Z][A-Za-z0-9]*$")
# lowerCamelCase, or a leading acronym such as URLForKey
LOWER_CAMEL_PATTERN = re.compile(r"^(?:[a-z][A-Za-z0-9]*|[A-Z]{2,}(?:[a-z0-9][A-Za-z0-9]*)?)$")
IVAR_PATTERN = re.compile(r"^_(?:[a-z][A-Za-z0-9]*|[A-Z]{2,}(?:[a-z0-9][A-Za-z0-9]*)?)$")
K_CONSTANT_PATTERN = re.compile(r"^k[A-Z][A-Za-z0-9]*$")
GETTER_PREFIX_PATTERN = re.compile(r"^get[A-Z0-9_]")
CAMEL_WORD_PATTERN = re.compile(r"[A-Z]+(?![a-z])|[A-Z][a-z0-9]*|[a-z0-9]+")


class RuleTarget(Enum):
    """What a rule predicate is applied to."""

    DECLARATION = "declaration"
    LINE = "line"
    FILE = "file"


@dataclass(frozen=True)
class SourceLine:
    """One physical line of a source file, without its line terminator."""

    number: int
    text: str


@dataclass
class Finding:
    """Raw predicate result, turned into a StyleViolation by the linter.

    params are extra fields for the rule's message template.
    """

    line: int
    column: int
    name: str = ""
    params: Dict[str, Any] = field(default_factory=dict)


@dataclass
class RuleContext:
    """Per-file state handed to every predicate."""

    config: LintConfig
    file_path: str
    source: str
    lines: List[str]
    comment_lines: Set[int] = field(default_factory=set)

    @classmethod
    def for_source(
        cls,
        config: LintConfig,
        file_path: str,
        source: str,
        comment_lines: Optional[Set[int]] = None,
    ) -> "RuleContext":
        """Build a context, splitting source into lines."""
        return cls(
            config=config,
            file_path=file_path,
            source=source,
            lines=split_lines(source),
            comment_lines=set(comment_lines or ()),
        )

    def line_text(self, number: int) -> str:
        """Return the text of a 1-based line, or "" when out of range."""
        if 1 <= number <= len(self.lines):
            return self.lines[number - 1]
        return ""


RuleCheck = Callable[[Any, RuleContext], List[Finding]]


@dataclass
class StyleRule:
    """Style convention rule."""

    rule_id: str
    title: str
    category: RuleCategory
    severity: ViolationSeverity
    target: RuleTarget
    check: RuleCheck
    message_template: str
    recommendation: str
    kinds: FrozenSet[DeclarationKind] = frozenset()
    enabled: bool = True

    def applies_to(self, declaration: Declaration) -> bool:
        """Check whether this rule inspects the given declaration."""
        return self.target == RuleTarget.DECLARATION and declaration.kind in self.kinds

    def format_message(self, finding: Finding) -> str:
        """Render the message template for a finding."""
        return self.message_template.format(name=finding.name, **finding.params)

    def to_dict(self) -> Dict[str, Any]:
        """Convert rule metadata to dictionary."""
        return {
            "rule_id": self.rule_id,
            "title": self.title,
            "category": self.category.value,
            "severity": self.severity.value,
            "target": self.target.value,
            "kinds": sorted(kind.value for kind in self.kinds),
            "recommendation": self.recommendation,
            "enabled": self.enabled,
        }


def split_lines(source: str) -> List[str]:
    """Split source into physical lines, dropping \\r of CRLF endings."""
    lines = source.split("\n")
    if lines and lines[-1] == "":
        lines.pop()
    return [line[:-1] if line.endswith("\r") else line for line in lines]


# ----------------------------------------------------------------------
# Naming helpers
# ----------------------------------------------------------------------


def camel_words(name: str) -> List[str]:
    """Split a camel-case name into words, keeping acronyms together."""
    return CAMEL_WORD_PATTERN.findall(name)


def leading_prefix_length(name: str) -> int:
    """Length of the all-capitals prefix before the first word of name.

    "XYZWidget" has a three letter prefix; the "W" starts "Widget".
    """
    count = 0
    while count < len(name) and name[count].isupper():
        count += 1
    if count < len(name) and name[count].islower():
        count -= 1
    return max(count, 0)


def has_type_prefix(name: str, context: RuleContext) -> bool:
    """Check name against the configured or default namespace prefix."""
    naming = context.config.naming
    if naming.class_prefixes:
        return any(
            name.startswith(prefix) and len(name) > len(prefix)
            for prefix in naming.class_prefixes
        )
    return leading_prefix_length(name) >= naming.min_prefix_length


def _finding(declaration: Declaration, **params: Any) -> Finding:
    return Finding(
        line=declaration.line,
        column=declaration.column,
        name=declaration.name,
        params=params,
    )


def _pattern_check(pattern: re.Pattern) -> RuleCheck:
    """Build a predicate that flags declaration names not matching pattern."""

    def check(declaration: Declaration, context: RuleContext) -> List[Finding]:
        if pattern.match(declaration.name):
            return []
        return [_finding(declaration)]

    return check


# ----------------------------------------------------------------------
# Declaration predicates
# ----------------------------------------------------------------------


def _no_findings(subject: Any, context: RuleContext) -> List[Finding]:
    # OBJC000 is raised by the linter when tokenizing fails
    return []


def check_type_prefix(declaration: Declaration, context: RuleContext) -> List[Finding]:
    if has_type_prefix(declaration.name, context):
        return []
    naming = context.config.naming
    if naming.class_prefixes:
        expected = " or ".join(naming.class_prefixes)
    else:
        expected = f"at least {naming.min_prefix_length} capital letters"
    return [_finding(declaration, expected=expected)]


def check_class_hierarchy(declaration: Declaration, context: RuleContext) -> List[Finding]:
    superclass = declaration.superclass
    if not superclass or superclass in context.config.naming.root_classes:
        return []
    words = camel_words(superclass)
    if not words:
        return []
    suffix = words[-1]
    if declaration.name.endswith(suffix) and declaration.name != suffix:
        return []
    return [_finding(declaration, superclass=superclass, suffix=suffix)]


def check_selector_parts(declaration: Declaration, context: RuleContext) -> List[Finding]:
    for part in declaration.selector_parts:
        if part and not LOWER_CAMEL_PATTERN.match(part):
            return [_finding(declaration, part=part)]
    return []


def check_getter_prefix(declaration: Declaration, context: RuleContext) -> List[Finding]:
    # get is reserved for methods returning values through pointer arguments
    if declaration.argument_names or len(declaration.selector_parts) != 1:
        return []
    if GETTER_PREFIX_PATTERN.match(declaration.name):
        return [_finding(declaration)]
    return []


def check_argument_names(declaration: Declaration, context: RuleContext) -> List[Finding]:
    return [
        _finding(declaration, argument=argument)
        for argument in declaration.argument_names
        if not LOWER_CAMEL_PATTERN.match(argument)
    ]


def check_constant_name(declaration: Declaration, context: RuleContext) -> List[Finding]:
    name = declaration.name
    if K_CONSTANT_PATTERN.match(name):
        return []
    if UPPER_CAMEL_PATTERN.match(name) and has_type_prefix(name, context):
        return []
    return [_finding(declaration)]


def check_enumerator_prefix(declaration: Declaration, context: RuleContext) -> List[Finding]:
    enum_name = declaration.container
    if not enum_name or declaration.name.startswith(enum_name):
        return []
    return [_finding(declaration, enumeration=enum_name)]


def check_value_macro(declaration: Declaration, context: RuleContext) -> List[Finding]:
    return [_finding(declaration, value=declaration.value)]


def _closing_paren(text: str, start: int) -> int:
    """Index of the ')' matching the '(' at start, or -1 if not on this line."""
    depth = 0
    for index in range(start, len(text)):
        if text[index] == "(":
            depth += 1
        elif text[index] == ")":
            depth -= 1
            if depth == 0:
                return index
    return -1


def check_method_spacing(declaration: Declaration, context: RuleContext) -> List[Finding]:
    text = context.line_text(declaration.line)
    sign = declaration.column - 1
    if sign >= len(text) or text[sign] not in "-+":
        return []

    after_sign = text[sign + 1 :]
    open_paren = sign + 1 + (len(after_sign) - len(after_sign.lstrip(" \t")))
    if open_paren >= len(text) or text[open_paren] != "(":
        return []

    problems: List[str] = []
    if text[sign + 1 : open_paren] != " ":
        problems.append("use one space after the scope sign")
    close_paren = _closing_paren(text, open_paren)
    if close_paren != -1 and text[close_paren + 1 : close_paren + 2] in (" ", "\t"):
        problems.append("remove the space after the return type")
    if not problems:
        return []
    return [_finding(declaration, problem="; ".join(problems))]


def check_pointer_binding(declaration: Declaration, context: RuleContext) -> List[Finding]:
    text = context.line_text(declaration.line)
    prefix = text[: declaration.column - 1]
    stripped = prefix.rstrip()
    if not stripped.endswith("*"):
        return []  # not a pointer, or `Type * const name`
    star = len(stripped) - 1
    while star > 0 and stripped[star - 1] == "*":
        star -= 1
    space_after = len(prefix) > len(stripped)
    space_before = star > 0 and stripped[star - 1] in " \t("
    if space_before and not space_after:
        return []
    return [_finding(declaration)]


# ----------------------------------------------------------------------
# Line and file predicates
# ----------------------------------------------------------------------


def check_indentation(line: SourceLine, context: RuleContext) -> List[Finding]:
    text = line.text
    if not text.strip() or line.number in context.comment_lines:
        return []
    indent = text[: len(text) - len(text.lstrip(" \t"))]
    if not indent:
        return []
    style = context.config.formatting.indent_style
    if style == "tabs" and indent.startswith(" "):
        return [Finding(line.number, 1, params={"style": "tabs", "found": "spaces"})]
    if style == "spaces" and "\t" in indent:
        return [Finding(line.number, 1, params={"style": "spaces", "found": "tabs"})]
    return []


def check_trailing_whitespace(line: SourceLine, context: RuleContext) -> List[Finding]:
    stripped = line.text.rstrip(" \t")
    if len(stripped) == len(line.text):
        return []
    return [Finding(line.number, len(stripped) + 1)]


def check_line_length(line: SourceLine, context: RuleContext) -> List[Finding]:
    limit = context.config.formatting.max_line_length
    if limit <= 0:
        return []
    length = len(line.text.expandtabs(TAB_WIDTH))
    if length <= limit:
        return []
    return [Finding(line.number, limit + 1, params={"length": length, "limit": limit})]


def check_final_newline(source: str, context: RuleContext) -> List[Finding]:
    if not source:
        return []
    lines = context.lines
    if not source.endswith("\n"):
        if not context.config.formatting.require_final_newline:
            return []
        last = lines[-1] if lines else ""
        return [
            Finding(len(lines), len(last) + 1, params={"problem": "missing final newline"})
        ]

    blank = 0
    for text in reversed(lines):
        if text.strip():
            break
        blank += 1
    if blank == 0:
        return []
    first_blank = len(lines) - blank + 1
    return [
        Finding(first_blank, 1, params={"problem": f"{blank} blank line(s) at end of file"})
    ]


# ----------------------------------------------------------------------
# Default rules
# ----------------------------------------------------------------------

_FILE_RULES = [
    StyleRule(
        rule_id="OBJC000",
        title="Tokenizable source",
        category=RuleCategory.SYNTAX,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.FILE,
        check=_no_findings,
        message_template="File could not be tokenized: {detail}",
        recommendation="Close the unterminated block comment",
    ),
]

_TYPE_RULES = [
    StyleRule(
        rule_id="OBJC101",
        title="Class naming",
        category=RuleCategory.CLASS,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.CLASS}),
        check=_pattern_check(UPPER_CAMEL_PATTERN),
        message_template="Class '{name}' should be UpperCamelCase without underscores",
        recommendation="Rename to UpperCamelCase (e.g., XYZPhotoViewController)",
    ),
    StyleRule(
        rule_id="OBJC102",
        title="Type prefix",
        category=RuleCategory.CLASS,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset(
            {DeclarationKind.CLASS, DeclarationKind.PROTOCOL, DeclarationKind.ENUMERATION}
        ),
        check=check_type_prefix,
        message_template="Type '{name}' should start with a namespace prefix ({expected})",
        recommendation="Prefix type names with your project prefix (e.g., XYZ)",
    ),
    StyleRule(
        rule_id="OBJC103",
        title="Class hierarchy naming",
        category=RuleCategory.CLASS,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.CLASS}),
        check=check_class_hierarchy,
        message_template=(
            "Class '{name}' inherits from {superclass} and should end with '{suffix}'"
        ),
        recommendation="End subclass names with the last word of the superclass",
    ),
    StyleRule(
        rule_id="OBJC104",
        title="Protocol naming",
        category=RuleCategory.PROTOCOL,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.PROTOCOL}),
        check=_pattern_check(UPPER_CAMEL_PATTERN),
        message_template="Protocol '{name}' should be UpperCamelCase without underscores",
        recommendation="Rename to UpperCamelCase (e.g., XYZTableViewDelegate)",
    ),
    StyleRule(
        rule_id="OBJC105",
        title="Category naming",
        category=RuleCategory.CATEGORY,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.CATEGORY}),
        check=_pattern_check(UPPER_CAMEL_PATTERN),
        message_template="Category '{name}' should be UpperCamelCase without underscores",
        recommendation="Rename to UpperCamelCase (e.g., XYZAdditions)",
    ),
]

_METHOD_RULES = [
    StyleRule(
        rule_id="OBJC106",
        title="Method naming",
        category=RuleCategory.METHOD,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.METHOD}),
        check=check_selector_parts,
        message_template=(
            "Selector part '{part}' of '{name}' should be lowerCamelCase without underscores"
        ),
        recommendation="Rename to lowerCamelCase (e.g., initWithFrame:style:)",
    ),
    StyleRule(
        rule_id="OBJC107",
        title="Getter naming",
        category=RuleCategory.METHOD,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.METHOD}),
        check=check_getter_prefix,
        message_template="Getter '{name}' should not use a 'get' prefix",
        recommendation="Name getters after the value they return (e.g., title)",
    ),
    StyleRule(
        rule_id="OBJC108",
        title="Argument naming",
        category=RuleCategory.METHOD,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.METHOD}),
        check=check_argument_names,
        message_template="Argument '{argument}' of '{name}' should be lowerCamelCase",
        recommendation="Rename to lowerCamelCase (e.g., newTitle)",
    ),
    StyleRule(
        rule_id="FMT204",
        title="Method signature spacing",
        category=RuleCategory.WHITESPACE,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.METHOD}),
        check=check_method_spacing,
        message_template="Method '{name}' signature spacing: {problem}",
        recommendation="Declare methods as '- (ReturnType)selector'",
    ),
]

_VARIABLE_RULES = [
    StyleRule(
        rule_id="OBJC109",
        title="Property naming",
        category=RuleCategory.PROPERTY,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.PROPERTY}),
        check=_pattern_check(LOWER_CAMEL_PATTERN),
        message_template="Property '{name}' should be lowerCamelCase",
        recommendation="Rename to lowerCamelCase (e.g., firstName)",
    ),
    StyleRule(
        rule_id="OBJC110",
        title="Instance variable naming",
        category=RuleCategory.VARIABLE,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.INSTANCE_VARIABLE}),
        check=_pattern_check(IVAR_PATTERN),
        message_template="Instance variable '{name}' should be _lowerCamelCase",
        recommendation="Prefix with an underscore and use lowerCamelCase (e.g., _firstName)",
    ),
    StyleRule(
        rule_id="OBJC111",
        title="Constant naming",
        category=RuleCategory.CONSTANT,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.CONSTANT}),
        check=check_constant_name,
        message_template="Constant '{name}' should be kUpperCamelCase or prefixed UpperCamelCase",
        recommendation="Rename (e.g., kAnimationDuration or XYZErrorDomain)",
    ),
    StyleRule(
        rule_id="FMT205",
        title="Pointer declaration spacing",
        category=RuleCategory.WHITESPACE,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset(
            {
                DeclarationKind.PROPERTY,
                DeclarationKind.INSTANCE_VARIABLE,
                DeclarationKind.CONSTANT,
            }
        ),
        check=check_pointer_binding,
        message_template="The '*' in the declaration of '{name}' should bind to the name",
        recommendation="Write pointer declarations as 'NSString *name'",
    ),
]

_ENUMERATION_RULES = [
    StyleRule(
        rule_id="OBJC112",
        title="Enumeration naming",
        category=RuleCategory.ENUMERATION,
        severity=ViolationSeverity.ERROR,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.ENUMERATION}),
        check=_pattern_check(UPPER_CAMEL_PATTERN),
        message_template="Enumeration '{name}' should be UpperCamelCase without underscores",
        recommendation="Rename to UpperCamelCase (e.g., XYZButtonStyle)",
    ),
    StyleRule(
        rule_id="OBJC113",
        title="Enumerator naming",
        category=RuleCategory.ENUMERATION,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.ENUMERATOR}),
        check=check_enumerator_prefix,
        message_template="Enumerator '{name}' should start with '{enumeration}'",
        recommendation="Prefix values with the type name (e.g., XYZButtonStyleRounded)",
    ),
    StyleRule(
        rule_id="OBJC114",
        title="Value macros",
        category=RuleCategory.MACRO,
        severity=ViolationSeverity.INFO,
        target=RuleTarget.DECLARATION,
        kinds=frozenset({DeclarationKind.MACRO}),
        check=check_value_macro,
        message_template="Macro '{name}' defines a value; prefer a typed constant",
        recommendation="Use 'static const' or an extern constant instead of #define",
    ),
]

_FORMATTING_RULES = [
    StyleRule(
        rule_id="FMT201",
        title="Indentation style",
        category=RuleCategory.WHITESPACE,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.LINE,
        check=check_indentation,
        message_template="Line is indented with {found}; indent with {style}",
        recommendation="Configure your editor to indent with the project's style",
    ),
    StyleRule(
        rule_id="FMT202",
        title="Trailing whitespace",
        category=RuleCategory.WHITESPACE,
        severity=ViolationSeverity.WARNING,
        target=RuleTarget.LINE,
        check=check_trailing_whitespace,
        message_template="Trailing whitespace",
        recommendation="Remove whitespace at the end of the line",
    ),
    StyleRule(
        rule_id="FMT203",
        title="Line length",
        category=RuleCategory.LAYOUT,
        severity=ViolationSeverity.INFO,
        target=RuleTarget.LINE,
        check=check_line_length,
        message_template="Line is {length} characters long (limit {limit})",
        recommendation="Break long lines, aligning message arguments on colons",
    ),
    StyleRule(
        rule_id="FMT206",
        title="Final newline",
        category=RuleCategory.LAYOUT,
        severity=ViolationSeverity.INFO,
        target=RuleTarget.FILE,
        check=check_final_newline,
        message_template="File should end with exactly one newline ({problem})",
        recommendation="End the file with a single newline character",
    ),
]


def default_rules() -> List[StyleRule]:
    """Get fresh copies of the default rules.

    Returns:
        Default rules ordered by rule id.
    """
    rules = (
        _FILE_RULES
        + _TYPE_RULES
        + _METHOD_RULES
        + _VARIABLE_RULES
        + _ENUMERATION_RULES
        + _FORMATTING_RULES
    )
    return sorted((replace(rule) for rule in rules), key=lambda r: r.rule_id)
