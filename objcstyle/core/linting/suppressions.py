"""Inline suppression comments.

    NSString* legacy;  // objcstyle:disable=FMT205
    // objcstyle:disable-next-line=OBJC101
    @interface legacy_class : NSObject
    /* objcstyle:disable-file=FMT201 */

Without "=ids" a directive covers every rule. OBJC000 cannot be
suppressed: a file that does not tokenize has no comments to read.
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field
from typing import Dict, FrozenSet, List, Set

from objcstyle.core.linting.tokenizer import Token, TokenType

ALL_RULES = "*"
UNSUPPRESSIBLE = frozenset({"OBJC000"})

_DIRECTIVE = re.compile(
    r"objcstyle:(disable-next-line|disable-file|disable)(?![\w-])"
    r"(?:\s*=\s*([A-Za-z0-9]+(?:\s*,\s*[A-Za-z0-9]+)*))?"
)


def _parse_ids(raw: str) -> FrozenSet[str]:
    if not raw:
        return frozenset({ALL_RULES})
    return frozenset(part.strip().upper() for part in raw.split(",") if part.strip())


@dataclass
class Suppressions:
    """Rule ids suppressed per line and for the whole file."""

    by_line: Dict[int, Set[str]] = field(default_factory=dict)
    file_wide: Set[str] = field(default_factory=set)

    def add_line(self, line: int, rule_ids: FrozenSet[str]) -> None:
        self.by_line.setdefault(line, set()).update(rule_ids)

    def is_suppressed(self, rule_id: str, line: int) -> bool:
        """Check whether rule_id is suppressed on the given line."""
        if rule_id in UNSUPPRESSIBLE:
            return False
        for rule_ids in (self.file_wide, self.by_line.get(line, ())):
            if ALL_RULES in rule_ids or rule_id in rule_ids:
                return True
        return False

    def __len__(self) -> int:
        return len(self.by_line) + (1 if self.file_wide else 0)


def parse_suppressions(tokens: List[Token]) -> Suppressions:
    """Collect suppression directives from comment tokens.

    Args:
        tokens: Output of tokenize().

    Returns:
        Suppressions found in the file.
    """
    suppressions = Suppressions()
    for token in tokens:
        if token.type != TokenType.COMMENT:
            continue
        for match in _DIRECTIVE.finditer(token.value):
            kind, raw_ids = match.group(1), match.group(2) or ""
            rule_ids = _parse_ids(raw_ids)
            line = token.line + token.value.count("\n", 0, match.start())
            if kind == "disable-file":
                suppressions.file_wide.update(rule_ids)
            elif kind == "disable-next-line":
                suppressions.add_line(line + 1, rule_ids)
            else:
                suppressions.add_line(line, rule_ids)
    return suppressions
