"""Invocable handles over isolated code.

Each call compiles the isolated code into a fresh namespace made of the
builtins plus the handle's scope. Free variables of the callable resolve
against that namespace, so scope entries are visible only to the call that
published them and nothing is left behind once it returns. Overlapping
calls, including suspended coroutines, never see each other's scope.
"""

import ast
import builtins
import logging
from typing import Any, Mapping, Optional

from .errors import ScopeCollision

logger = logging.getLogger(__name__)


def check_scope(scope: Mapping[str, Any]) -> None:
    """Raise ScopeCollision for the first scope name that shadows a builtin.

    Every name is checked before any is published.
    """
    ambient = vars(builtins)
    for name in scope:
        if name in ambient:
            raise ScopeCollision(name)


def build_namespace(scope: Mapping[str, Any], safe: bool = True) -> dict[str, Any]:
    if not safe:
        check_scope(scope)
    namespace: dict[str, Any] = {"__builtins__": builtins}
    namespace.update(scope)
    return namespace


def compile_callable(code: str, namespace: dict[str, Any]) -> Any:
    """Turn isolated code into a live function bound to namespace.

    A lambda is evaluated as an expression; a def is executed and the
    function it binds is returned.
    """
    tree = ast.parse(code)
    if len(tree.body) != 1:
        raise ValueError(f"Expected a single callable, got {len(tree.body)} statements")
    statement = tree.body[0]

    if isinstance(statement, ast.Expr):
        return eval(compile(code, "<callable>", "eval"), namespace)
    if isinstance(statement, (ast.FunctionDef, ast.AsyncFunctionDef)):
        exec(compile(tree, "<callable>", "exec"), namespace)
        return namespace[statement.name]
    raise ValueError(f"Not a callable: {type(statement).__name__}")


def call_code(
    code: str,
    args: tuple = (),
    context: Any = None,
    scope: Optional[Mapping[str, Any]] = None,
    safe: bool = True,
    kwargs: Optional[Mapping[str, Any]] = None,
    bound: Optional[bool] = None,
) -> Any:
    """Compile code with scope and call it.

    Args:
        code: Isolated code
        args: Positional arguments for the callable
        context: Object passed as ``self`` when the call is bound
        scope: Free variables visible to the callable for this call
        safe: If False, scope names that shadow builtins raise ScopeCollision
        kwargs: Keyword arguments for the callable
        bound: Pass context as the first argument; None binds only when
            context is set

    Returns:
        The callable's return value (a coroutine for async callables)
    """
    namespace = build_namespace(scope or {}, safe)
    func = compile_callable(code, namespace)
    if bound is None:
        bound = context is not None
    if bound:
        args = (context, *args)
    logger.debug(f"Calling isolated code with {len(args)} args, scope={sorted(scope or {})}")
    return func(*args, **(kwargs or {}))


class Invocable:
    """Handle for calling an isolated callable.

    ``context``, ``scope`` and ``safe`` may be changed between calls; each
    call reads their current values. A bound handle (an instance method or
    classmethod) always receives ``context`` as its first argument, even
    when it is None. Other handles ignore ``context``.
    """

    def __init__(
        self,
        code: str,
        context: Any = None,
        scope: Optional[dict[str, Any]] = None,
        safe: bool = True,
        bound: bool = False,
    ):
        self.code = code
        self.context = context
        self.scope = scope if scope is not None else {}
        self.safe = safe
        self.bound = bound

    def call(self, *args, **kwargs) -> Any:
        return call_code(self.code, args, self.context, self.scope, self.safe, kwargs, self.bound)

    __call__ = call

    def __repr__(self) -> str:
        return f"Invocable(code={self.code!r}, safe={self.safe}, bound={self.bound})"
