"""Markdown → rich-text document conversion pipeline.

parse → collect definitions → drop ignored subtrees → resolve with the rules.
"""

from collections.abc import Mapping
from typing import Any

from loguru import logger

from mdprose.config import ProcessOptions
from mdprose.models import Definition, DocNode, SourceNode
from mdprose.parser import parse_markdown
from mdprose.references import build_reference_index
from mdprose.resolver import parse_node
from mdprose.rules import Rule, RuleRegistry, default_rules
from mdprose.tree import remove


class MarkdownProcess:
    """Converts markdown into a document tree using an instance-owned rule registry.

    The registry persists across calls; the reference index (``sources``) is
    rebuilt on every call. Not safe for concurrent use of one instance.
    """

    def __init__(
        self,
        options: ProcessOptions | Mapping[str, Any] | None = None,
        rules: RuleRegistry | None = None,
    ):
        if options is None:
            options = ProcessOptions()
        elif not isinstance(options, ProcessOptions):
            options = ProcessOptions(**options)
        self.options = options
        self.rules = rules if rules is not None else default_rules()
        self.sources: dict[str, Definition] = {}
        self.depth = 0

    def add_rule(self, name: str, rule: Rule) -> None:
        self.rules.add_rule(name, rule)

    def remove_rule(self, name: str) -> None:
        self.rules.remove_rule(name)

    def parse(self, md: str) -> DocNode:
        """Convert markdown text to the document tree."""
        return self.transform(parse_markdown(md))

    def transform(self, tree: SourceNode) -> DocNode:
        """Convert an already parsed source tree. The tree is filtered in place."""
        self.sources.clear()
        self.sources.update(build_reference_index(tree))

        removed = remove(tree, self.options.ignores, cascade=self.options.cascade)
        logger.debug(f"Collected {len(self.sources)} definitions, removed {removed} ignored nodes")

        self.depth = 0
        return parse_node(tree, self)


def markdown_to_document(md: str, **options: Any) -> DocNode:
    """One-shot conversion with a fresh process and the default rules."""
    return MarkdownProcess(options).parse(md)
