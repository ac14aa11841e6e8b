"""Locate callables in Python source and hand them out as Invocable handles.

Example:

    extractor = CallableExtractor.from_file("service.py")
    fn = extractor.get_callable_by_name("_normalize", "Service")
    fn.context = SimpleNamespace(prefix="x-")
    assert fn.call("abc") == "x-abc"
"""

import logging
from pathlib import Path
from typing import Any, Mapping, Optional, Union

from .classifier import CALLABLE_TYPES, CallableInfo, describe_callable, is_callable_node
from .config import MAX_FILE_SIZE, OptionsLike, resolve_options
from .errors import CallableNotFound, FileTooLargeError
from .invocable import Invocable, call_code
from .isolate import extract_callable_code
from .parser import parse_source, safe_decode
from .walker import NodePath, walk

logger = logging.getLogger(__name__)


class CallableExtractor:
    """Extract callables from one piece of Python source.

    The source is parsed once; candidates are the defs and lambdas of the
    tree in document order. Lookups number candidates from 1.
    """

    def __init__(self, source: Union[str, bytes], options: OptionsLike = None, source_name: str = "<source>"):
        self.options = resolve_options(options)
        self.source = source.encode("utf-8") if isinstance(source, str) else source
        self.code = safe_decode(self.source)
        self.tree = parse_source(self.source, self.options.parser_options, source_name)
        self.node_paths = walk(self.tree.root_node, CALLABLE_TYPES)
        logger.debug(f"Walked {len(self.node_paths)} callable-typed nodes in {source_name}")

    @classmethod
    def from_file(cls, file_path: Union[str, Path], options: OptionsLike = None) -> "CallableExtractor":
        """Build an extractor from a UTF-8 source file.

        Raises:
            FileTooLargeError: If the file exceeds MAX_FILE_SIZE
        """
        file_path = Path(file_path)
        file_size = file_path.stat().st_size
        if file_size > MAX_FILE_SIZE:
            raise FileTooLargeError(file_path, file_size, MAX_FILE_SIZE)
        return cls(file_path.read_bytes(), options, source_name=str(file_path))

    def get_callable(self, position: int = 1) -> Invocable:
        """Return the position-th callable in the source."""
        pos = 1
        for path in self.node_paths:
            if is_callable_node(path.node):
                if position == pos:
                    return self._create_invocable(path)
                pos += 1

        raise CallableNotFound()

    def get_callable_by_line_number(self, line_number: int, position: int = 1) -> Invocable:
        """Return the position-th callable declared on line_number (1-based).

        Position disambiguates several callables on one line, such as lambdas
        passed side by side to the same call.
        """
        pos = 1
        for path in self.node_paths:
            if path.line == line_number and is_callable_node(path.node):
                if position == pos:
                    return self._create_invocable(path)
                pos += 1

        raise CallableNotFound()

    def get_callable_by_line_content(self, partial_content: str, position: int = 1) -> Invocable:
        """Look up callables on the first line containing partial_content."""
        for idx, line in enumerate(self.code.split("\n")):
            if partial_content in line:
                return self.get_callable_by_line_number(idx + 1, position)

        raise CallableNotFound()

    def get_callable_by_name(self, callable_name: str, class_name: str = "") -> Invocable:
        """Return the callable named callable_name, owned by class_name.

        Lambdas are named after the key they are passed under or the variable
        they are assigned to. Without a class name, a callable outside any
        class wins over a method of the same name; a method is returned only
        when nothing else matches.
        """
        fallback: Optional[NodePath] = None
        for path in self.node_paths:
            if not is_callable_node(path.node):
                continue
            info = describe_callable(path, self.source)
            if info.name != callable_name:
                continue
            if class_name:
                if info.owner == class_name:
                    return self._create_invocable(path)
            elif not info.owner:
                return self._create_invocable(path)
            elif fallback is None:
                fallback = path

        if fallback is not None:
            return self._create_invocable(fallback)
        raise CallableNotFound()

    def callables(self) -> list[CallableInfo]:
        """Describe every candidate, in lookup order."""
        return [
            describe_callable(path, self.source)
            for path in self.node_paths
            if is_callable_node(path.node)
        ]

    def call(
        self,
        code: str,
        args: tuple = (),
        context: Any = None,
        scope: Optional[Mapping[str, Any]] = None,
        safe: bool = True,
        kwargs: Optional[Mapping[str, Any]] = None,
        bound: Optional[bool] = None,
    ) -> Any:
        """Call isolated code directly, without building a handle."""
        return call_code(code, tuple(args), context, scope, safe, kwargs, bound)

    def _create_invocable(self, path: NodePath) -> Invocable:
        code = extract_callable_code(path, self.source, self.options.compiler_options)
        info = describe_callable(path, self.source)
        logger.debug(f"Located {info.kind.value} {info.name or '<anonymous>'} at line {info.line}")
        return Invocable(code, bound=info.is_bound)
