"""Tests for the Form facade."""
import pytest

from unival.forms import Form, HtmlAdapter


class TestForm:

    @pytest.mark.asyncio
    async def test_validate_delegates_to_engine(self, signup_rules):
        form = Form(signup_rules)

        result = await form.validate({"email": "ada@example.com", "password": "short", "age": "30"})

        assert result.errors == {"password": "Must be at least 8 characters"}

    def test_render_uses_basic_markup_and_tracks_form_id(self):
        form = Form({"email": "required|email"})

        html = form.render({"formId": "signup"})

        assert html.splitlines()[0] == '<form action="#" method="POST" class="form" id="signup">'
        assert '<label for="email">Email</label>' in html
        assert '<input type="email" name="email" id="email" required>' in html
        assert '<span class="error-msg" id="error-email" data-error-for="email"></span>' in html
        assert form.form_id == "signup"

    def test_render_defaults(self):
        form = Form()

        html = form.render()

        assert form.form_id == "generated-form"
        assert '<button type="submit">Submit</button>' in html

    def test_from_config_keeps_order_and_submit_entry(self, signup_config):
        form = Form.from_config(signup_config)

        assert list(form.rules) == ["email", "password", "age", "bio"]
        html = form.generate(HtmlAdapter(), {"form": {"id": "signup"}})
        assert ">Create account</button>" in html
        assert form.form_id == "signup"

    @pytest.mark.asyncio
    async def test_from_config_rules_validate(self, signup_config):
        form = Form.from_config(signup_config)

        result = await form.validate({"email": "", "password": "longenough", "age": "12"})

        assert set(result.errors) == {"email", "age"}

    def test_generate_from_rules_mapping(self):
        html = Form({"city": "required"}).generate(HtmlAdapter)

        assert 'data-field="city"' in html

    def test_input_error_class(self):
        assert Form().input_error_class == "input-error"
        assert Form(input_error_class="is-invalid").input_error_class == "is-invalid"
