"""Tests for the default HTML adapter."""
import pytest

from unival.forms import FieldView, FormSchemaBuilder, HtmlAdapter, RenderContext, build_attrs, escape, to_html_attributes
from unival.validation import normalize_rules


def render(config, options=None, adapter=None):
    return FormSchemaBuilder.generate(config, adapter or HtmlAdapter(), options or {})


class TestHelpers:

    def test_escape(self):
        assert escape('<a href="x">&\'</a>') == "&lt;a href=&quot;x&quot;&gt;&amp;&#x27;&lt;/a&gt;"
        assert escape(None) == ""

    def test_boolean_attributes(self):
        assert build_attrs({"required": True, "disabled": False, "title": None, "id": "x"}) == 'required id="x"'

    def test_attribute_values_are_escaped(self):
        assert build_attrs({"value": '"><script>'}) == 'value="&quot;&gt;&lt;script&gt;"'

    def test_to_html_attributes(self):
        attrs = to_html_attributes(normalize_rules("required|number|min:2|max:4|minValue:1|maxValue:9|pattern:^\\d+$"))

        assert attrs == {
            "type": "number",
            "required": True,
            "minlength": 2,
            "maxlength": 4,
            "min": 1,
            "max": 9,
            "pattern": "^\\d+$",
        }

    def test_unknown_type_maps_to_text(self):
        assert to_html_attributes(normalize_rules({"type": "fancy"}))["type"] == "text"
        assert to_html_attributes(None) == {}


class TestFieldMarkup:

    def test_default_layout(self):
        html = render([{"name": "email", "rules": "required|email"}])

        assert html == "\n".join([
            '<form id="generated-form" action="#" method="POST" class="form">',
            '<div class="field-group" data-field="email">',
            '  <label for="email">Email</label>',
            '  <input type="email" name="email" id="email" required>',
            '  <span class="error-msg" id="error-email" data-error-for="email"></span>',
            "</div>",
            '<button type="submit">Submit</button>',
            "</form>",
        ])

    def test_optional_field_has_no_required_attribute(self):
        html = render([{"name": "nickname", "rules": "min:3"}])

        assert 'minlength="3"' in html
        assert "required" not in html

    def test_label_precedence(self):
        html = render([
            {"name": "first_name"},
            {"name": "last-name", "label": "Surname"},
            {"name": "nick", "label": "Nick", "ui": {"label": "Handle"}},
        ])

        assert ">First Name</label>" in html
        assert ">Surname</label>" in html
        assert ">Handle</label>" in html
        assert ">Nick</label>" not in html

    def test_text_is_escaped(self):
        html = render([{"name": "q", "label": "<b>Q&A</b>", "placeholder": 'say "hi"'}])

        assert "&lt;b&gt;Q&amp;A&lt;/b&gt;" in html
        assert 'placeholder="say &quot;hi&quot;"' in html
        assert "<b>" not in html

    def test_floating_layout(self):
        html = render([{"name": "email", "rules": "email", "ui": {"variant": "floating"}}])

        assert '<div class="field-group form-floating" data-field="email">' in html
        assert html.index("<input") < html.index("<label")
        assert 'placeholder="Email"' in html
        assert 'id="error-email"' in html

    def test_hint_block(self):
        html = render([{"name": "bio", "hint": "Keep it short"}])

        assert '<small class="hint" id="hint-bio">Keep it short</small>' in html
        assert html.index("hint-bio") < html.index("error-bio")

    def test_classes_are_joined(self):
        html = render(
            [{"name": "city", "className": "wide", "ui": {"wrapperClass": "col", "errorClass": "red"}}],
            {"classes": {"input": "form-control", "label": "form-label"}},
        )

        assert 'class="form-control wide"' in html
        assert '<div class="field-group col" data-field="city">' in html
        assert '<label for="city" class="form-label">' in html
        assert 'class="error-msg red"' in html

    def test_explicit_attributes_win(self):
        html = render([{"name": "phone", "rules": "number", "attrs": {"type": "tel", "autocomplete": "tel"}}])

        assert '<input type="tel" name="phone" id="phone" autocomplete="tel">' in html

    def test_custom_id_is_used_by_label(self):
        html = render([{"name": "email", "id": "signup-email"}])

        assert '<label for="signup-email">' in html
        assert 'id="signup-email"' in html
        assert 'id="error-email"' in html


class TestControls:

    def test_textarea(self):
        html = render([{"name": "bio", "rules": "max:280", "ui": {"control": "textarea"}}])

        assert '<textarea name="bio" id="bio" maxlength="280"></textarea>' in html
        assert "<input" not in html

    def test_select_with_options(self):
        html = render([{
            "name": "color",
            "placeholder": "Pick one",
            "options": ["red", ("g", "Green"), {"value": "b", "label": "Blue & Navy"}],
            "value": "g",
            "ui": {"control": "select"},
        }])

        assert '<select name="color" id="color">' in html
        assert '  <option value="">Pick one</option>' in html
        assert '  <option value="red">red</option>' in html
        assert '  <option value="g" selected>Green</option>' in html
        assert '  <option value="b">Blue &amp; Navy</option>' in html

    def test_unknown_control_falls_back_to_input(self):
        html = render([{"name": "when", "ui": {"control": "datepicker"}}])

        assert '<input type="text" name="when" id="when">' in html

    def test_registered_control(self):
        adapter = HtmlAdapter()
        adapter.register_control("toggle", lambda view, ctx: f"<x-toggle {ctx.build_attrs({'name': view.name})}></x-toggle>")

        html = render([{"name": "notify", "ui": {"control": "toggle"}}], adapter=adapter)

        assert '<x-toggle name="notify"></x-toggle>' in html


class TestCustomRender:

    def test_override_output_is_used_verbatim(self):
        seen = {}

        def stars(view, ctx):
            seen["view"], seen["ctx"] = view, ctx
            return f'<fieldset {ctx.build_attrs({"data-field": view.name})}>{ctx.escape(view.label)}</fieldset>'

        html = render([
            {"name": "rating", "label": "Rate <us>", "ui": {"render": stars}},
            {"name": "comment"},
        ])

        assert '<fieldset data-field="rating">Rate &lt;us&gt;</fieldset>' in html
        assert 'id="error-rating"' not in html
        assert 'data-field="comment"' in html
        assert isinstance(seen["view"], FieldView)
        assert isinstance(seen["ctx"], RenderContext)
        assert seen["view"].error_id == "error-rating"
        assert seen["ctx"].options.form.id == "generated-form"


class TestFormAndSubmit:

    def test_form_attributes_and_submit_options(self):
        html = render([], {
            "form": {"id": "signup", "action": "/join", "method": "post", "className": "", "attrs": {"novalidate": True}},
            "submit": {"text": "Join <now>", "className": "btn", "attrs": {"disabled": False}},
        })

        assert html.splitlines()[0] == '<form id="signup" action="/join" method="post" novalidate>'
        assert '<button type="submit" class="btn">Join &lt;now&gt;</button>' in html

    @pytest.mark.parametrize("options", [None, {}])
    def test_render_form_accepts_raw_schema(self, options):
        html = HtmlAdapter().render_form({"email": "required|email"}, options)

        assert '<input type="email" name="email" id="email" required>' in html
