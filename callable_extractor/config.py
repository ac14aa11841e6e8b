"""Options for parsing and lowering, with their defaults.

Options may be given as an ``ExtractorOptions`` instance or as a plain mapping:

    {"parser_options": {"error_recovery": False},
     "compiler_options": {"target_version": (3, 11)}}

Mapping entries are merged over the defaults, so callers only name what they
change.
"""

import os
import sys
from dataclasses import dataclass, field, replace
from typing import Any, Mapping, Optional, Union

# File size limit for CallableExtractor.from_file; override with
# CALLABLE_EXTRACTOR_MAX_FILE_SIZE
DEFAULT_MAX_FILE_SIZE = 5_000_000  # 5MB
MAX_FILE_SIZE = int(os.environ.get("CALLABLE_EXTRACTOR_MAX_FILE_SIZE", DEFAULT_MAX_FILE_SIZE))

# Lowering accepts whatever the running interpreter can parse
DEFAULT_TARGET_VERSION = sys.version_info[:2]


@dataclass(frozen=True)
class ParserOptions:
    """Options for the tree-sitter parse.

    With error_recovery enabled, syntax errors elsewhere in the file do not
    prevent locating a well-formed callable.
    """

    error_recovery: bool = True


@dataclass(frozen=True)
class CompilerOptions:
    """Options for the lowering pass applied to isolated code."""

    target_version: tuple[int, int] = DEFAULT_TARGET_VERSION
    strip_annotations: bool = True


@dataclass(frozen=True)
class ExtractorOptions:
    parser_options: ParserOptions = field(default_factory=ParserOptions)
    compiler_options: CompilerOptions = field(default_factory=CompilerOptions)


OptionsLike = Union[ExtractorOptions, Mapping[str, Any], None]


def resolve_options(options: OptionsLike = None) -> ExtractorOptions:
    """Merge user options over the defaults.

    Args:
        options: None, an ExtractorOptions, or a mapping with optional
            "parser_options" and "compiler_options" entries

    Returns:
        A complete ExtractorOptions

    Raises:
        TypeError: If the mapping names an unknown section or option
    """
    if options is None:
        return ExtractorOptions()
    if isinstance(options, ExtractorOptions):
        return options

    unknown = set(options) - {"parser_options", "compiler_options"}
    if unknown:
        raise TypeError(f"Unknown option sections: {', '.join(sorted(unknown))}")

    return ExtractorOptions(
        parser_options=_merge(ParserOptions(), options.get("parser_options")),
        compiler_options=_merge(CompilerOptions(), options.get("compiler_options")),
    )


def _merge(default, overrides: Optional[Any]):
    if overrides is None:
        return default
    if isinstance(overrides, type(default)):
        return overrides
    values = dict(overrides)
    if "target_version" in values:
        values["target_version"] = tuple(values["target_version"])
    # replace() raises TypeError for unknown fields
    return replace(default, **values)
