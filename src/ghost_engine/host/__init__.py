"""Host-side helpers that execute action codes."""

from .caret import CaretEdit, apply_action, column_of, line_bounds

__all__ = ["CaretEdit", "apply_action", "column_of", "line_bounds"]
