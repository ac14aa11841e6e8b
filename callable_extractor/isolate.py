"""Isolate a located callable as standalone source.

A def is only meaningful in its original slot: decorators such as
``@staticmethod`` or ``@property`` belong to the class body, and a
function's declared name binds in its enclosing scope. The isolator strips
those, regenerates the code with ``ast.unparse`` (which drops comments),
restores ``async`` textually and runs the result through the lowering pass.
"""

import ast
import copy
import logging
from typing import Optional

from .classifier import CallableKind, callable_kind, is_callable_node
from .config import CompilerOptions
from .errors import CallableNotFound
from .lowering import lower
from .parser import node_text, safe_decode
from .walker import NodePath

logger = logging.getLogger(__name__)

# Name given to a function declaration once its own name is cleared
ANONYMOUS_NAME = "__anonymous__"


def extract_callable_code(
    path: NodePath,
    source: bytes,
    options: Optional[CompilerOptions] = None,
) -> str:
    """Regenerate a callable candidate as standalone code.

    Args:
        path: Located candidate
        source: Source bytes the candidate's tree was parsed from
        options: Lowering options

    Returns:
        Isolated code: a lambda expression or a single def statement

    Raises:
        CallableNotFound: If the node is not a callable candidate
        SyntaxError: If the candidate's text does not parse on its own
    """
    if not is_callable_node(path.node):
        raise CallableNotFound()

    kind = callable_kind(path)
    node = copy.copy(_parse_fragment(path, source))

    is_async = False
    if kind in (CallableKind.METHOD, CallableKind.FUNCTION):
        is_async = isinstance(node, ast.AsyncFunctionDef)
        if is_async:
            node = ast.copy_location(
                ast.FunctionDef(**{name: getattr(node, name) for name in node._fields}),
                node,
            )
        node.decorator_list = []
    if kind is CallableKind.FUNCTION:
        node.name = ANONYMOUS_NAME

    code = ast.unparse(node)
    if is_async:
        code = f"async {code}"

    logger.debug(f"Isolated {kind.value} at line {path.line}")
    return lower(code, options)


def _parse_fragment(path: NodePath, source: bytes) -> ast.AST:
    text = node_text(path.node, source)
    if path.node.type == "lambda":
        # Parentheses let a lambda span lines the way it did in its call site
        return ast.parse(f"({text})", mode="eval").body

    line_start = source.rfind(b"\n", 0, path.node.start_byte) + 1
    indent = safe_decode(source[line_start:path.node.start_byte])
    if not indent:
        return ast.parse(text).body[0]
    # A nested def keeps its original indentation under a dummy block, since
    # string literals may hold lines that sit left of the def
    module = ast.parse(f"if True:\n{indent}{text}")
    return module.body[0].body[0]
