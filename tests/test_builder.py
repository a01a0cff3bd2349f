"""Tests for FormSchemaBuilder."""
import pytest

from unival.core.errors import ErrorCode, FormUsageError, RuleConfigurationError
from unival.forms import FormRenderer, FormSchema, FormSchemaBuilder, HtmlAdapter, RenderOptions, generate


class RecordingAdapter(FormRenderer):
    """Adapter that hands back what it was given."""

    def render_form(self, schema, options):
        return {"schema": schema, "options": options}


class TestBuild:

    def test_entries_follow_config_order(self, signup_config):
        schema, _ = FormSchemaBuilder.build(signup_config)

        assert isinstance(schema, FormSchema)
        assert list(schema) == ["email", "password", "age", "bio"]

    def test_normalized_rules_win_over_entry_keys(self):
        schema, _ = FormSchemaBuilder.build([
            {"name": "age", "min": 2, "label": "Your age", "rules": "min:5"},
        ])

        assert schema["age"].min == 5
        assert schema["age"].label == "Your age"
        assert schema["age"].name == "age"

    def test_explicit_false_in_rules_clears_entry_flag(self):
        schema, _ = FormSchemaBuilder.build([
            {"name": "nick", "required": True, "type": "email", "rules": {"required": False, "type": "text"}},
        ])

        assert schema["nick"].required is False
        assert schema["nick"].type == "text"
        assert schema["nick"].email is False

    def test_unset_rule_keys_keep_entry_values(self):
        schema, _ = FormSchemaBuilder.build([{"name": "nick", "required": True, "rules": {"max": 20}}])

        assert schema["nick"].required is True
        assert schema["nick"].max == 20

    def test_ui_kept_only_when_mapping(self):
        schema, _ = FormSchemaBuilder.build([
            {"name": "a", "ui": {"variant": "floating"}},
            {"name": "b", "ui": "floating"},
        ])

        assert schema["a"].ui.variant == "floating"
        assert schema["b"].ui is None

    def test_non_mapping_and_nameless_entries_are_skipped(self):
        schema, _ = FormSchemaBuilder.build(["email", None, {"rules": "required"}, {"name": "", "rules": "x"}, {"name": "ok"}])

        assert list(schema) == ["ok"]

    def test_submit_entry_updates_options(self, signup_config):
        schema, options = FormSchemaBuilder.build(signup_config, {"submit": {"attrs": {"data-x": "1"}}})

        assert "submit" not in schema
        assert options.submit.text == "Create account"
        assert options.submit.class_name == "btn"
        assert options.submit.attrs == {"data-x": "1"}

    def test_repeated_name_keeps_first_position(self):
        schema, _ = FormSchemaBuilder.build([
            {"name": "a", "rules": "min:1"},
            {"name": "b"},
            {"name": "a", "rules": "min:9"},
        ])

        assert list(schema) == ["a", "b"]
        assert schema["a"].min == 9

    def test_malformed_pattern_raises_at_build_time(self):
        with pytest.raises(RuleConfigurationError):
            FormSchemaBuilder.build([{"name": "slug", "rules": "pattern:(unclosed"}])


class TestGenerate:

    def test_empty_config_renders_form_with_submit_only(self, adapter):
        html = FormSchemaBuilder.generate([], adapter, {})

        assert html.startswith("<form ")
        assert '<button type="submit">Submit</button>' in html
        assert "field-group" not in html
        assert html.endswith("</form>")

    @pytest.mark.parametrize("config", [None, {"name": "email"}, "email"])
    def test_non_list_config_is_a_usage_error(self, adapter, config):
        with pytest.raises(FormUsageError) as exc_info:
            FormSchemaBuilder.generate(config, adapter, {})

        assert exc_info.value.code is ErrorCode.E7001_INVALID_ARGUMENT
        assert isinstance(exc_info.value, TypeError)

    def test_missing_adapter_is_a_usage_error(self):
        with pytest.raises(FormUsageError) as exc_info:
            FormSchemaBuilder.generate([], None, {})

        assert exc_info.value.code is ErrorCode.E7002_MISSING_ADAPTER

    def test_adapter_receives_schema_and_resolved_options(self, signup_config):
        out = FormSchemaBuilder.generate(signup_config, RecordingAdapter(), {"formId": "signup"})

        assert list(out["schema"]) == ["email", "password", "age", "bio"]
        assert isinstance(out["options"], RenderOptions)
        assert out["options"].form.id == "signup"
        assert out["options"].submit.text == "Create account"

    def test_adapter_class_is_instantiated(self):
        html = FormSchemaBuilder.generate([{"name": "email"}], HtmlAdapter)

        assert 'data-field="email"' in html

    def test_adapter_without_render_form_falls_back_to_basic_renderer(self):
        html = FormSchemaBuilder.generate([{"name": "email", "rules": "required|email"}], object(), {})

        assert '<input type="email" name="email" id="email" required>' in html
        assert '<button type="submit">Submit</button>' in html
        assert "data-field" not in html

    def test_fields_render_in_config_order(self, adapter, signup_config):
        html = generate(signup_config, adapter)

        positions = [html.index(f'data-field="{name}"') for name in ("email", "password", "age", "bio")]
        assert positions == sorted(positions)
        assert html.index("Create account") > positions[-1]

    def test_explicit_false_in_rules_drops_required_attribute(self):
        html = generate([{"name": "x", "required": True, "rules": {"required": False}}], HtmlAdapter(), {})

        assert '<input type="text" name="x" id="x">' in html
        assert "required" not in html
