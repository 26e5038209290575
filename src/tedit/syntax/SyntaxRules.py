# tedit/syntax/SyntaxRules.py
"""Data model for keyword-based syntax coloring.

A `SyntaxRuleSet` is an ordered list of `SyntaxDefinition`s, one per group of
file extensions. Each definition holds an ordered list of `SyntaxRule`s that map
exact keywords to an RGB color. Order matters everywhere: the first definition
whose extension matches is selected, and the first rule containing a keyword
colors it.
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional


@dataclass(frozen=True)
class SyntaxRule:
    """Exact-match keywords sharing one RGB color."""

    tokens: tuple[str, ...]
    color: tuple[int, int, int]


@dataclass(frozen=True)
class SyntaxDefinition:
    """Rules that apply to files ending with one of ``extensions``."""

    extensions: tuple[str, ...]
    rules: tuple[SyntaxRule, ...] = ()
    # keyword -> index of the first rule listing it
    _index: dict[str, int] = field(default_factory=dict, init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        for rule_idx, rule in enumerate(self.rules):
            for token in rule.tokens:
                self._index.setdefault(token, rule_idx)

    def applies_to(self, filename: str) -> bool:
        """True if ``filename`` ends with any of the extensions (plain suffix match)."""
        return any(filename.endswith(ext) for ext in self.extensions)

    def rule_index_for(self, word: str) -> Optional[int]:
        """Index of the first rule (in file order) listing ``word``, or None."""
        return self._index.get(word)


@dataclass(frozen=True)
class RuleParseError:
    """One skipped line of a rule file."""

    line_no: int
    text: str
    reason: str

    def __str__(self) -> str:
        return f"line {self.line_no}: {self.reason} ({self.text!r})"


@dataclass(frozen=True)
class SyntaxRuleSet:
    """All definitions loaded from a rule file, in file order."""

    definitions: tuple[SyntaxDefinition, ...] = ()
    errors: tuple[RuleParseError, ...] = ()

    def __len__(self) -> int:
        return len(self.definitions)

    def __iter__(self) -> Iterator[SyntaxDefinition]:
        return iter(self.definitions)

    def __bool__(self) -> bool:
        return bool(self.definitions)

    def select_for(self, filename: Optional[str]) -> Optional[SyntaxDefinition]:
        """First definition whose extension list matches ``filename``, or None."""
        if not filename:
            return None
        for definition in self.definitions:
            if definition.applies_to(filename):
                return definition
        return None
