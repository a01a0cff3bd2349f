# Core module exports
from unival.core.config import get_settings, Settings
from unival.core.logging import (
    configure_logging,
    get_logger,
    bind_context,
    clear_context,
    validation_logger,
    render_logger,
    cli_logger,
)
