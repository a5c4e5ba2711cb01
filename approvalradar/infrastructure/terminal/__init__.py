"""Terminal output."""

from approvalradar.infrastructure.terminal.renderer import (
    OnDisable,
    RenderMode,
    StatusLineRenderer,
    is_terminal,
)

__all__ = ["OnDisable", "RenderMode", "StatusLineRenderer", "is_terminal"]
