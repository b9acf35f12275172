"""
Tests for core models: field specs, schema definitions and rules.
"""

import pytest
from pydantic import ValidationError

from toolcfg.core.models import (
    ONLY_IF_TRUE,
    FieldKind,
    FieldSpec,
    RenderedConfig,
    RenderWarning,
    RuleKind,
    SchemaDefinition,
    SerializationRule,
    only_if_different_from,
)
from toolcfg.schemas import CMOCK_2_6, GCOVR_7_0


class TestSerializationRule:
    def test_different_from_needs_reference(self):
        with pytest.raises(ValidationError):
            SerializationRule(kind=RuleKind.ONLY_IF_DIFFERENT_FROM_DEFAULT)

    def test_str(self):
        assert str(ONLY_IF_TRUE) == "only_if_true"
        assert str(only_if_different_from("0")) == "only_if_different_from_default('0')"

    def test_frozen(self):
        with pytest.raises(ValidationError):
            ONLY_IF_TRUE.kind = RuleKind.ALWAYS


class TestFieldSpec:
    def test_bool_default_checked(self):
        with pytest.raises(ValidationError):
            FieldSpec(key="flag", kind=FieldKind.BOOL, default="yes")

    def test_list_default_checked(self):
        with pytest.raises(ValidationError):
            FieldSpec(key="items", kind=FieldKind.LIST, default="a;b")

    def test_default_value_is_fresh_list(self):
        spec = FieldSpec(key="items", kind=FieldKind.LIST, default=("a",))
        first = spec.default_value()
        first.append("b")
        assert spec.default_value() == ["a"]

    def test_quote_restricted(self):
        with pytest.raises(ValidationError):
            FieldSpec(key="s", kind=FieldKind.STRING, default="", quote="`")


class TestSchemaDefinition:
    def test_duplicate_keys_rejected(self):
        spec = FieldSpec(key="same", kind=FieldKind.STRING, default="")
        with pytest.raises(ValidationError, match="duplicate"):
            SchemaDefinition(tool="t", version="1.0", fields=(spec, spec))

    def test_field_lookup(self):
        assert GCOVR_7_0.field("sort").default == "uncovered-number"
        with pytest.raises(KeyError):
            GCOVR_7_0.field("nope")

    def test_cmock_field_order(self):
        assert CMOCK_2_6.keys[:6] == [
            "mock_path",
            "mock_prefix",
            "mock_suffix",
            "includes",
            "plugins",
            "treat_as",
        ]

    def test_gcovr_recognized_keys(self):
        assert set(GCOVR_7_0.keys) == {
            "search-path", "filter", "exclude", "exclude-directories",
            "exclude-unreachable-branches", "exclude-throw-branches",
            "exclude-function-lines", "fail-under-line", "fail-under-branch",
            "fail-under-function", "fail-under-decision", "html-high-threshold",
            "html-medium-threshold", "html-title", "html-self-contained", "sort",
            "gcov-executable", "decisions", "calls",
        }

    def test_tokens(self):
        assert CMOCK_2_6.bool_tokens == ("1", "0")
        assert GCOVR_7_0.bool_tokens == ("yes", "no")


class TestOutputs:
    def test_warning_str(self):
        assert str(RenderWarning(scope="mapping", message="invalid entry: x")) == (
            "mapping: invalid entry: x"
        )

    def test_rendered_config_path(self):
        rendered = RenderedConfig(path="out/cmock.yml", text="")
        assert rendered.path.name == "cmock.yml"
