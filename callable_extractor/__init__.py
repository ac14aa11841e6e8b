"""Extract callables from Python source and invoke them in isolation."""

from .classifier import CALLABLE_TYPES, CallableInfo, CallableKind, is_callable_node
from .config import CompilerOptions, ExtractorOptions, ParserOptions
from .errors import CallableNotFound, FileTooLargeError, ParseError, ScopeCollision
from .extractor import CallableExtractor
from .invocable import Invocable
from .isolate import ANONYMOUS_NAME, extract_callable_code
from .walker import NodePath, get_parent_node_by_type, walk

__all__ = [
    "ANONYMOUS_NAME",
    "CALLABLE_TYPES",
    "CallableExtractor",
    "CallableInfo",
    "CallableKind",
    "CallableNotFound",
    "CompilerOptions",
    "ExtractorOptions",
    "FileTooLargeError",
    "Invocable",
    "NodePath",
    "ParseError",
    "ParserOptions",
    "ScopeCollision",
    "extract_callable_code",
    "get_parent_node_by_type",
    "is_callable_node",
    "walk",
]
