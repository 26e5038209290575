# tedit/syntax/__init__.py
"""Keyword highlighting: rule data model, rule-file loader and line tokenizer."""

from .RuleLoader import load_syntax_rules, parse_rules
from .SyntaxRules import RuleParseError, SyntaxDefinition, SyntaxRule, SyntaxRuleSet
from .Tokenizer import highlight_line


__all__ = [
    "RuleParseError",
    "SyntaxDefinition",
    "SyntaxRule",
    "SyntaxRuleSet",
    "highlight_line",
    "load_syntax_rules",
    "parse_rules",
]
