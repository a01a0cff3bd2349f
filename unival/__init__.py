"""unival: declarative field validation and form rendering.

One rule definition drives both sides:

    from unival import Form, HtmlAdapter

    form = Form({"email": "required|email", "age": "number|minValue:18"})
    html = form.generate(HtmlAdapter)
    result = await form.validate({"email": "ada@example.com", "age": "21"})
"""
from unival.core.errors import AppErrorException, FormUsageError, RuleConfigurationError
from unival.validation import (
    RuleDescriptor,
    UIOptions,
    ValidationResult,
    normalize_rules,
    validate,
    validate_sync,
)
from unival.forms import (
    Form,
    FormSchemaBuilder,
    FormRenderer,
    HtmlAdapter,
    RenderOptions,
    SubmitCoordinator,
    generate,
)

__version__ = "0.1.0"

__all__ = [
    "AppErrorException",
    "FormUsageError",
    "RuleConfigurationError",
    "RuleDescriptor",
    "UIOptions",
    "ValidationResult",
    "normalize_rules",
    "validate",
    "validate_sync",
    "Form",
    "FormSchemaBuilder",
    "FormRenderer",
    "HtmlAdapter",
    "RenderOptions",
    "SubmitCoordinator",
    "generate",
    "__version__",
]
