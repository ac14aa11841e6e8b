"""Recognise callable nodes and derive their names and owners."""

import ast
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional

from .parser import node_text
from .walker import NodePath, get_parent_node_by_type

CALLABLE_TYPES = ("function_definition", "lambda")


class CallableKind(Enum):
    METHOD = "method"
    FUNCTION = "function"
    LAMBDA = "lambda"


@dataclass
class CallableInfo:
    """Derived identity of a callable candidate."""
    name: str
    owner: str
    kind: CallableKind
    line: int
    is_async: bool = False
    decorators: list[str] = field(default_factory=list)
    class_attribute: bool = False

    @property
    def is_bound(self) -> bool:
        """Whether calls pass the context as the first argument."""
        if self.kind is CallableKind.LAMBDA:
            return self.class_attribute
        return self.kind is CallableKind.METHOD and "staticmethod" not in self.decorators


def is_callable_node(node: Any) -> bool:
    # The "lambda" keyword token shares its type with the lambda expression
    return node.is_named and node.type in CALLABLE_TYPES


def is_async_node(node: Any) -> bool:
    return node.type == "function_definition" and any(
        child.type == "async" for child in node.children
    )


def callable_kind(path: NodePath) -> Optional[CallableKind]:
    """Classify a candidate, or return None for any other node.

    A def is a method when its enclosing block is a class body, directly
    or through a decorated_definition.
    """
    if not is_callable_node(path.node):
        return None
    if path.node.type == "lambda":
        return CallableKind.LAMBDA

    parent = path.parent
    if parent is not None and parent.node.type == "decorated_definition":
        parent = parent.parent
    if (
        parent is not None
        and parent.node.type == "block"
        and parent.parent is not None
        and parent.parent.node.type == "class_definition"
    ):
        return CallableKind.METHOD
    return CallableKind.FUNCTION


def get_decorators(path: NodePath, source: bytes) -> list[str]:
    """Decorator expressions of a def, without the leading @."""
    parent = path.parent
    if parent is None or parent.node.type != "decorated_definition":
        return []
    return [
        node_text(child, source).lstrip("@").strip()
        for child in parent.node.children
        if child.type == "decorator"
    ]


def get_owner_name(path: NodePath, source: bytes) -> str:
    """Name of the nearest enclosing class, or '' if there is none."""
    owner = get_parent_node_by_type(path, "class_definition")
    if owner is None:
        return ""
    name = owner.child_by_field_name("name")
    return node_text(name, source) if name is not None else ""


def get_callable_name(path: NodePath, source: bytes) -> str:
    """Derive a candidate's name.

    Fallback chain: declared def name, then the key a lambda is passed
    under (keyword argument or dict key), then the target of the nearest
    enclosing assignment.
    """
    name = path.node.child_by_field_name("name")
    if name is not None and path.node.type == "function_definition":
        return node_text(name, source)
    return _get_key_name(path, source) or _get_assignment_name(path, source)


def describe_callable(path: NodePath, source: bytes) -> CallableInfo:
    kind = callable_kind(path)
    if kind is None:
        raise ValueError(f"Not a callable node: {path.node.type}")
    return CallableInfo(
        name=get_callable_name(path, source),
        owner=get_owner_name(path, source),
        kind=kind,
        line=path.line,
        is_async=is_async_node(path.node),
        decorators=get_decorators(path, source),
        class_attribute=is_class_attribute(path),
    )


def is_class_attribute(path: NodePath) -> bool:
    """Whether a lambda is assigned in a class body and so becomes a method.

    Only lambdas taking at least one parameter qualify; the first one
    receives the instance.
    """
    if path.node.type != "lambda" or path.node.child_by_field_name("parameters") is None:
        return False
    assignment = path.parent
    if assignment is None or assignment.node.type != "assignment":
        return False
    statement = assignment.parent
    block = statement.parent if statement is not None else None
    return (
        statement is not None
        and statement.node.type == "expression_statement"
        and block is not None
        and block.node.type == "block"
        and block.parent is not None
        and block.parent.node.type == "class_definition"
    )


def _get_key_name(path: NodePath, source: bytes) -> str:
    parent = path.parent
    if parent is None:
        return ""
    if parent.node.type == "keyword_argument":
        key = parent.node.child_by_field_name("name")
    elif parent.node.type == "pair":
        key = parent.node.child_by_field_name("key")
    else:
        return ""
    if key is None:
        return ""
    if key.type == "identifier":
        return node_text(key, source)
    if key.type == "string":
        try:
            value = ast.literal_eval(node_text(key, source))
        except (ValueError, SyntaxError):
            # f-strings and other non-literal keys have no static name
            return ""
        return value if isinstance(value, str) else ""
    return ""


def _get_assignment_name(path: NodePath, source: bytes) -> str:
    assignment = get_parent_node_by_type(path, "assignment")
    if assignment is None:
        return ""
    left = assignment.child_by_field_name("left")
    if left is None:
        return ""
    if left.type == "identifier":
        return node_text(left, source)
    if left.type == "attribute":
        attr = left.child_by_field_name("attribute")
        return node_text(attr, source) if attr is not None else ""
    return ""
