# tedit/syntax/RuleLoader.py
"""RuleLoader.py
================
Parser for the rule-definition language used by ``highlight.syntax``.

File format::

    # comment
    SYNTAX ".h" && ".c"
    {
        "int", "double" = (255,0,0);
        "for", "while"  = (0,255,0);
    }

Grammar (one construct per line)::

    definition := "SYNTAX" ext_list "{" rule* "}"
    ext_list   := STRING ("&&" STRING)*
    rule       := STRING ("," STRING)* "=" "(" INT "," INT "," INT ")" [";"]

Each line is split into tokens by `tokenize_line` and then matched against the
grammar. A line that does not fit is recorded as a `RuleParseError` and
skipped; the file is never rejected as a whole. Blank lines and lines starting
with ``#`` or ``/`` are ignored, and an unquoted ``#`` or ``//`` ends a line.
"""

import logging
import re
from dataclasses import dataclass
from pathlib import Path
from typing import Iterable, Optional, Union

from tedit.syntax.SyntaxRules import (
    RuleParseError,
    SyntaxDefinition,
    SyntaxRule,
    SyntaxRuleSet,
)


logger = logging.getLogger("tedit.syntax")

SYNTAX_KEYWORD = "SYNTAX"

_PUNCTUATION = {
    "{": "LBRACE",
    "}": "RBRACE",
    "=": "EQUALS",
    "(": "LPAREN",
    ")": "RPAREN",
    ",": "COMMA",
    ";": "SEMI",
}
_INT_RE = re.compile(r"[+-]?\d+")
_WORD_RE = re.compile(r"[A-Za-z_][A-Za-z0-9_]*")


class RuleSyntaxError(ValueError):
    """Raised by the line tokenizer and grammar for a malformed line."""


@dataclass(frozen=True)
class LexToken:
    kind: str
    value: str


def tokenize_line(line: str) -> list[LexToken]:
    """Splits one line of a rule file into tokens.

    Quoted strings may contain any character except an unescaped ``"``;
    ``\\"`` and ``\\\\`` are escapes. An unquoted ``#`` or ``//`` starts a
    trailing comment.

    Raises:
        RuleSyntaxError: On an unterminated string or an unexpected character.
    """
    tokens: list[LexToken] = []
    i, n = 0, len(line)
    while i < n:
        ch = line[i]
        if ch.isspace():
            i += 1
        elif ch == "#" or line.startswith("//", i):
            break
        elif ch == '"':
            i += 1
            chars: list[str] = []
            while i < n and line[i] != '"':
                if line[i] == "\\" and i + 1 < n and line[i + 1] in ('"', "\\"):
                    i += 1
                chars.append(line[i])
                i += 1
            if i >= n:
                raise RuleSyntaxError("unterminated string")
            i += 1
            tokens.append(LexToken("STRING", "".join(chars)))
        elif line.startswith("&&", i):
            tokens.append(LexToken("AND", "&&"))
            i += 2
        elif ch in _PUNCTUATION:
            tokens.append(LexToken(_PUNCTUATION[ch], ch))
            i += 1
        elif (m := _INT_RE.match(line, i)) is not None:
            tokens.append(LexToken("INT", m.group()))
            i = m.end()
        elif (m := _WORD_RE.match(line, i)) is not None:
            tokens.append(LexToken("WORD", m.group()))
            i = m.end()
        else:
            raise RuleSyntaxError(f"unexpected character {ch!r}")
    return tokens


def _kinds(tokens: list[LexToken]) -> list[str]:
    return [t.kind for t in tokens]


def parse_header(tokens: list[LexToken]) -> tuple[tuple[str, ...], bool]:
    """Parses ``SYNTAX ext_list ["{"]``.

    Returns:
        The extensions and whether the opening brace was on the same line.
    """
    if not tokens or tokens[0] != LexToken("WORD", SYNTAX_KEYWORD):
        raise RuleSyntaxError("expected SYNTAX")
    body = tokens[1:]
    opens_block = bool(body) and body[-1].kind == "LBRACE"
    if opens_block:
        body = body[:-1]

    extensions: list[str] = []
    for pos, tok in enumerate(body):
        expected = "STRING" if pos % 2 == 0 else "AND"
        if tok.kind != expected:
            raise RuleSyntaxError(f"expected {expected} in extension list, got {tok.value!r}")
        if tok.kind == "STRING":
            extensions.append(tok.value)
    if not extensions or body[-1].kind != "STRING":
        raise RuleSyntaxError("empty or dangling extension list")
    return tuple(extensions), opens_block


def parse_rule(tokens: list[LexToken]) -> SyntaxRule:
    """Parses ``STRING ("," STRING)* "=" "(" INT "," INT "," INT ")" [";"]``."""
    kinds = _kinds(tokens)
    if "EQUALS" not in kinds:
        raise RuleSyntaxError("missing '='")
    eq = kinds.index("EQUALS")

    words: list[str] = []
    for pos, tok in enumerate(tokens[:eq]):
        expected = "STRING" if pos % 2 == 0 else "COMMA"
        if tok.kind != expected:
            raise RuleSyntaxError(f"expected {expected} in keyword list, got {tok.value!r}")
        if tok.kind == "STRING":
            words.append(tok.value)
    if not words or kinds[eq - 1] != "STRING":
        raise RuleSyntaxError("empty or dangling keyword list")

    color = tokens[eq + 1:]
    if color and color[-1].kind == "SEMI":
        color = color[:-1]
    if not color or color[0].kind != "LPAREN":
        raise RuleSyntaxError("missing '('")
    if _kinds(color) != ["LPAREN", "INT", "COMMA", "INT", "COMMA", "INT", "RPAREN"]:
        raise RuleSyntaxError("color must be (r, g, b)")
    r, g, b = (int(color[i].value) for i in (1, 3, 5))
    return SyntaxRule(tokens=tuple(words), color=(r, g, b))


def _is_skippable(stripped: str) -> bool:
    return not stripped or stripped.startswith(("#", "/"))


def parse_rules(lines: Iterable[str]) -> SyntaxRuleSet:
    """Parses rule-file text (already split into lines) into a `SyntaxRuleSet`.

    Malformed lines are recorded in ``SyntaxRuleSet.errors`` and skipped.
    """
    definitions: list[SyntaxDefinition] = []
    errors: list[RuleParseError] = []

    extensions: Optional[tuple[str, ...]] = None
    rules: list[SyntaxRule] = []
    state = "top"  # top -> expect_brace -> body -> top

    def fail(line_no: int, text: str, reason: str) -> None:
        errors.append(RuleParseError(line_no, text, reason))
        logger.warning("highlight rules: line %d skipped: %s", line_no, reason)

    def close_definition() -> None:
        nonlocal extensions, rules
        if extensions is not None:
            definitions.append(SyntaxDefinition(extensions=extensions, rules=tuple(rules)))
        extensions, rules = None, []

    for line_no, raw in enumerate(lines, start=1):
        stripped = raw.strip()
        if _is_skippable(stripped):
            continue

        try:
            tokens = tokenize_line(stripped)
        except RuleSyntaxError as e:
            fail(line_no, stripped, str(e))
            continue
        if not tokens:
            continue

        if state == "expect_brace":
            if _kinds(tokens) == ["LBRACE"]:
                state = "body"
                continue
            fail(line_no, stripped, "expected '{' after SYNTAX header")
            extensions, state = None, "top"
            if tokens[0] != LexToken("WORD", SYNTAX_KEYWORD):
                continue
            # A new header right after a dropped one starts a fresh definition.

        if state == "body":
            if tokens[0].kind == "RBRACE":
                close_definition()
                state = "top"
                if _kinds(tokens[1:]) not in ([], ["SEMI"]):
                    fail(line_no, stripped, "unexpected text after '}'")
                continue
            if tokens[0] == LexToken("WORD", SYNTAX_KEYWORD):
                logger.warning("highlight rules: line %d opens a new SYNTAX block before '}', closing the previous one.", line_no)
                close_definition()
                state = "top"
            else:
                try:
                    rules.append(parse_rule(tokens))
                except RuleSyntaxError as e:
                    fail(line_no, stripped, str(e))
                continue

        # state == "top"
        try:
            extensions, opens_block = parse_header(tokens)
        except RuleSyntaxError as e:
            fail(line_no, stripped, str(e))
            continue
        state = "body" if opens_block else "expect_brace"

    if state == "body":
        logger.warning("highlight rules: unterminated SYNTAX block at end of file, keeping %d rule(s).", len(rules))
        close_definition()

    return SyntaxRuleSet(definitions=tuple(definitions), errors=tuple(errors))


def load_syntax_rules(path: Union[str, Path]) -> SyntaxRuleSet:
    """Loads a rule file. A missing or unreadable file yields an empty rule set."""
    path = Path(path)
    if not path.is_file():
        logger.info("No syntax rule file at '%s'; highlighting disabled.", path)
        return SyntaxRuleSet()
    try:
        with path.open("r", encoding="utf-8", errors="replace") as f:
            rule_set = parse_rules(f)
    except OSError as e:
        logger.error("Could not read syntax rule file '%s': %s", path, e)
        return SyntaxRuleSet()

    logger.info(
        "Loaded %d syntax definition(s) from '%s' (%d line(s) skipped).",
        len(rule_set.definitions), path, len(rule_set.errors),
    )
    return rule_set
