"""Declarative keymap registry and default bindings."""

from .models import ActionRef, Binding, KeySequence, KeyStroke, mode_key
from .registry import KeymapConflictError, KeymapRegistry
from .resolver import KeymapResolver, ResolutionMatch, ResolutionResult
from .defaults import DEFAULT_BINDINGS, default_actions, load_default_keymaps

__all__ = [
    "ActionRef",
    "Binding",
    "KeySequence",
    "KeyStroke",
    "mode_key",
    "KeymapRegistry",
    "KeymapConflictError",
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
    "DEFAULT_BINDINGS",
    "default_actions",
    "load_default_keymaps",
]
