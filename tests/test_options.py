"""Tests for render option resolution and settings-backed defaults."""
import pytest

from unival.core.config import Settings, get_settings
from unival.core.errors import FormUsageError
from unival.forms import RenderOptions, resolve_options


class TestDefaults:

    def test_defaults(self):
        options = resolve_options()

        assert options.form.id == "generated-form"
        assert options.form.action == "#"
        assert options.form.method == "POST"
        assert options.form.class_name == "form"
        assert options.submit.text == "Submit"
        assert options.classes.field_group == "field-group"
        assert options.classes.error == "error-msg"
        assert options.classes.hint == "hint"

    def test_defaults_follow_environment(self, monkeypatch):
        monkeypatch.setenv("UNIVAL_SUBMIT_TEXT", "Send")
        monkeypatch.setenv("UNIVAL_FORM_METHOD", "GET")
        get_settings.cache_clear()

        options = resolve_options()

        assert options.submit.text == "Send"
        assert options.form.method == "GET"

    def test_settings_model(self):
        settings = Settings(FORM_ID="contact")

        assert settings.FORM_ID == "contact"
        assert settings.INPUT_ERROR_CLASS == "input-error"


class TestResolution:

    def test_flat_legacy_keys(self):
        options = resolve_options({
            "formId": "signup",
            "action": "/join",
            "method": "post",
            "className": "stacked",
            "submitText": "Join",
        })

        assert (options.form.id, options.form.action, options.form.method) == ("signup", "/join", "post")
        assert options.form.class_name == "stacked"
        assert options.submit.text == "Join"

    def test_nested_values_win(self):
        options = resolve_options({"formId": "flat", "form": {"id": "nested"}, "submitText": "A", "submit": {"text": "B"}})

        assert options.form.id == "nested"
        assert options.submit.text == "B"

    def test_snake_and_camel_case_section_keys(self):
        options = resolve_options({
            "form": {"class_name": "snake"},
            "classes": {"fieldGroup": "group", "error": "oops"},
            "submit": {"className": "btn"},
        })

        assert options.form.class_name == "snake"
        assert options.classes.field_group == "group"
        assert options.classes.error == "oops"
        assert options.submit.class_name == "btn"

    def test_empty_id_and_text_fall_back_to_defaults(self):
        options = resolve_options({"form": {"id": ""}, "submit": {"text": ""}})

        assert options.form.id == "generated-form"
        assert options.submit.text == "Submit"

    def test_resolved_options_are_copied(self):
        original = resolve_options({"formId": "a"})
        copy = resolve_options(original)
        copy.form.id = "b"

        assert isinstance(copy, RenderOptions)
        assert original.form.id == "a"

    @pytest.mark.parametrize("options", [["form"], "signup", {"form": {"attrs": "nope"}}])
    def test_invalid_options_are_usage_errors(self, options):
        with pytest.raises(FormUsageError):
            resolve_options(options)
