"""Lowering pass for isolated code.

Re-parses isolated code against the configured target grammar and, by
default, strips type annotations. Annotations in an isolated callable refer
to names from its original module that are not available once the code is
compiled on its own.
"""

import ast
from typing import Optional

from .config import CompilerOptions


class _AnnotationStripper(ast.NodeTransformer):
    """Remove parameter, return and variable annotations."""

    def _strip_arguments(self, args: ast.arguments) -> None:
        for arg in (*args.posonlyargs, *args.args, *args.kwonlyargs):
            arg.annotation = None
        if args.vararg is not None:
            args.vararg.annotation = None
        if args.kwarg is not None:
            args.kwarg.annotation = None

    def visit_FunctionDef(self, node):
        self._strip_arguments(node.args)
        node.returns = None
        self.generic_visit(node)
        return node

    visit_AsyncFunctionDef = visit_FunctionDef

    def visit_Lambda(self, node):
        self._strip_arguments(node.args)
        self.generic_visit(node)
        return node

    def visit_AnnAssign(self, node):
        # A bare annotation declares nothing at runtime
        if node.value is None:
            return ast.copy_location(ast.Pass(), node)
        assign = ast.Assign(targets=[node.target], value=node.value)
        return ast.copy_location(assign, node)


def lower(code: str, options: Optional[CompilerOptions] = None) -> str:
    """Lower isolated code to the configured target.

    Args:
        code: Standalone source of one callable
        options: Target grammar version and annotation handling

    Returns:
        Regenerated source text

    Raises:
        SyntaxError: If the code does not parse at the target version
    """
    options = options or CompilerOptions()
    tree = ast.parse(code, mode="exec", feature_version=options.target_version)
    if options.strip_annotations:
        tree = ast.fix_missing_locations(_AnnotationStripper().visit(tree))
    return ast.unparse(tree)
