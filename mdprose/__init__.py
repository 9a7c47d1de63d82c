"""Markdown to rich-text editor document conversion."""

from mdprose.config import DEFAULT_IGNORES, ProcessOptions
from mdprose.exceptions import MarkdownProcessError, NestingTooDeepError, UnmappedNodeError
from mdprose.logging_config import configure_logging
from mdprose.models import DocNode, Mark, Root, SourceNode
from mdprose.parser import parse_markdown
from mdprose.process import MarkdownProcess, markdown_to_document
from mdprose.references import build_reference_index
from mdprose.resolver import apply_mark, parse_node
from mdprose.rules import Rule, RuleRegistry, default_rules

__all__ = [
    # Pipeline
    "MarkdownProcess",
    "markdown_to_document",
    "parse_markdown",
    "parse_node",
    "apply_mark",
    "build_reference_index",
    # Rules
    "Rule",
    "RuleRegistry",
    "default_rules",
    # Config
    "ProcessOptions",
    "DEFAULT_IGNORES",
    "configure_logging",
    # Models
    "DocNode",
    "Mark",
    "Root",
    "SourceNode",
    # Errors
    "MarkdownProcessError",
    "UnmappedNodeError",
    "NestingTooDeepError",
]
