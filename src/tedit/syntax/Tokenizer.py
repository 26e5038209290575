# tedit/syntax/Tokenizer.py
"""Splits a line into highlightable spans.

Identifier runs (``[A-Za-z_][A-Za-z0-9_]*``) are looked up in the selected
`SyntaxDefinition`; everything between them is passed through uncolored.
"""

import re
from typing import Iterator, Optional

from tedit.syntax.SyntaxRules import SyntaxDefinition


IDENTIFIER_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")

# (text, rule index or None)
Span = tuple[str, Optional[int]]


def iter_identifiers(line: str) -> Iterator[tuple[int, int, str]]:
    """Yields ``(start, end, word)`` for every maximal identifier run in ``line``."""
    for m in IDENTIFIER_RE.finditer(line):
        yield m.start(), m.end(), m.group()


def highlight_line(line: str, definition: Optional[SyntaxDefinition]) -> list[Span]:
    """Splits ``line`` into spans covering it exactly, in order.

    Each span carries the index of the rule that colors it, or None. With no
    definition the whole line is one uncolored span. Joining the span texts
    always reproduces ``line``.
    """
    if not line:
        return []
    if definition is None or not definition.rules:
        return [(line, None)]

    spans: list[Span] = []
    pos = 0
    for start, end, word in iter_identifiers(line):
        rule_idx = definition.rule_index_for(word)
        if rule_idx is None:
            continue
        if start > pos:
            spans.append((line[pos:start], None))
        spans.append((word, rule_idx))
        pos = end
    if pos < len(line):
        spans.append((line[pos:], None))
    return spans
