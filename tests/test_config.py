"""Tests for option resolution."""

import sys

import pytest

from callable_extractor.config import (
    DEFAULT_TARGET_VERSION,
    CompilerOptions,
    ExtractorOptions,
    ParserOptions,
    resolve_options,
)


class TestResolveOptions:
    def test_defaults(self):
        options = resolve_options()
        assert options.parser_options.error_recovery is True
        assert options.compiler_options.target_version == DEFAULT_TARGET_VERSION
        assert DEFAULT_TARGET_VERSION == sys.version_info[:2]
        assert options.compiler_options.strip_annotations is True

    def test_instance_passes_through(self):
        options = ExtractorOptions(parser_options=ParserOptions(error_recovery=False))
        assert resolve_options(options) is options

    def test_mapping_merged_over_defaults(self):
        options = resolve_options({"compiler_options": {"target_version": [3, 12]}})
        assert options.compiler_options == CompilerOptions(target_version=(3, 12))
        assert options.parser_options == ParserOptions()

    def test_section_instances_accepted(self):
        compiler = CompilerOptions(strip_annotations=False)
        options = resolve_options({"compiler_options": compiler})
        assert options.compiler_options is compiler

    def test_unknown_section(self):
        with pytest.raises(TypeError, match="bundler_options"):
            resolve_options({"bundler_options": {}})

    def test_unknown_option(self):
        with pytest.raises(TypeError):
            resolve_options({"parser_options": {"plugins": ["jsx"]}})
