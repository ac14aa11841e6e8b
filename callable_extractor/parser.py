"""Tree-sitter parser adapter for Python source.

Turns source text into a tree-sitter Tree. Every node carries its start
point, so the declaration line of a node is ``node.start_point[0] + 1``.
"""

import logging
from typing import Any, Optional, Union

import tree_sitter_python
from tree_sitter import Language, Parser, Tree

from .config import ParserOptions
from .errors import ParseError

logger = logging.getLogger(__name__)

_parser: Optional[Parser] = None


def _get_parser() -> Parser:
    """Get or create the shared Python parser."""
    global _parser
    if _parser is None:
        parser = Parser()
        parser.language = Language(tree_sitter_python.language())
        _parser = parser
    return _parser


def safe_decode(data: bytes) -> str:
    """Decode bytes to string, replacing invalid UTF-8."""
    try:
        return data.decode("utf-8")
    except UnicodeDecodeError:
        return data.decode("utf-8", errors="replace")


def node_text(node: Any, source: bytes) -> str:
    return safe_decode(source[node.start_byte:node.end_byte])


def parse_source(
    source: Union[str, bytes],
    options: Optional[ParserOptions] = None,
    source_name: str = "<source>",
) -> Tree:
    """Parse Python source into a tree-sitter Tree.

    Args:
        source: Source text, as str or UTF-8 bytes
        options: Parser options; defaults to error-recovering parsing
        source_name: Name used in error and log messages

    Returns:
        Parsed tree-sitter Tree

    Raises:
        ParseError: If tree-sitter fails, or the tree has errors and
            error recovery is disabled
    """
    options = options or ParserOptions()
    if isinstance(source, str):
        source = source.encode("utf-8")

    try:
        tree = _get_parser().parse(source)
    except Exception as e:
        logger.error(f"Tree-sitter parse failed for {source_name}: {e}")
        raise ParseError(source_name, e)

    if tree.root_node.has_error:
        if not options.error_recovery:
            raise ParseError(source_name, SyntaxError("source contains syntax errors"))
        logger.warning(f"Recovered from syntax errors while parsing {source_name}")

    return tree
