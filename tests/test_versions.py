"""
Tests for schema lookup and version detection.
"""

import pytest

from toolcfg.schemas import (
    CMOCK_2_6,
    GCOVR_7_0,
    CMockSchemaGenerator,
    GcovrSchemaGenerator,
    UnknownSchemaError,
    create_generator,
    detect_version,
    get_schema,
    supported_tools,
    supported_versions,
)


class TestRegistry:
    def test_tools(self):
        assert supported_tools() == ["cmock", "gcovr"]

    def test_versions(self):
        assert supported_versions("cmock") == ["2.6"]
        assert supported_versions("gcovr") == ["7.0"]

    def test_newest_by_default(self):
        assert get_schema("gcovr") is GCOVR_7_0
        assert get_schema("cmock", "2.6") is CMOCK_2_6

    def test_unknown_tool(self):
        with pytest.raises(UnknownSchemaError, match="Unknown tool 'lcov'"):
            get_schema("lcov")

    def test_unknown_version(self):
        with pytest.raises(UnknownSchemaError, match="2.5"):
            get_schema("cmock", "2.5")

    def test_create_generator(self):
        assert isinstance(create_generator("cmock"), CMockSchemaGenerator)
        generator = create_generator("gcovr", "out/gcovr.cfg", "7.0")
        assert isinstance(generator, GcovrSchemaGenerator)
        assert str(generator.output_path) == "out/gcovr.cfg"


class TestDetectCmock:
    def test_from_output(self):
        assert detect_version("cmock", version_output="CMock 2.6.0") == "2.6"

    def test_output_wins_over_tag(self):
        assert detect_version("cmock", version_output="2.6.1", tag="v2.5.3") == "2.6"

    def test_from_tag(self):
        assert detect_version("cmock", tag="v2.6.0") == "2.6"

    def test_tag_without_v(self):
        assert detect_version("cmock", tag="2.6.2") == "2.6"

    def test_unsupported(self):
        assert detect_version("cmock", tag="v2.5.3") is None

    def test_unparseable(self):
        assert detect_version("cmock", tag="main") is None

    def test_nothing_given(self):
        assert detect_version("cmock") is None


class TestDetectGcovr:
    def test_exact(self):
        assert detect_version("gcovr", version_output="gcovr 7.0\n\nCopyright") == "7.0"

    def test_compatible_major(self):
        assert detect_version("gcovr", version_output="gcovr 7.2.1") == "7.0"

    def test_other_major(self):
        assert detect_version("gcovr", version_output="gcovr 8.3") is None

    def test_needs_tool_name(self):
        assert detect_version("gcovr", version_output="7.0") is None

    def test_tag_ignored(self):
        assert detect_version("gcovr", tag="7.0") is None


def test_unknown_tool_detection():
    with pytest.raises(UnknownSchemaError):
        detect_version("lcov", version_output="lcov 2.0")
