"""Mode manager coordinating the Normal/Insert/Command pipelines."""

from __future__ import annotations

from typing import Dict, Optional, Type

from modal_editor.keymaps import KeymapRegistry, KeymapResolver, load_default_keymaps
from modal_editor.runtime import telemetry

from .base_mode import EditorMode, KeyInput, Mode, ModeContext, ModeResult


class ModeManager:
    """Owns the active mode, performs transitions, and dispatches key events."""

    def __init__(
        self,
        context: ModeContext,
        *,
        keymap_registry: KeymapRegistry | None = None,
        keymap_resolver: KeymapResolver | None = None,
        load_defaults: bool = True,
    ) -> None:
        self.context = context
        self._modes: Dict[EditorMode, Mode] = {}
        self._active: Optional[EditorMode] = None
        self.logger = telemetry.get_logger("modal_editor.modes")
        self.keymap_registry = keymap_registry or KeymapRegistry(
            logger_name="modal_editor.keymaps"
        )
        if load_defaults and keymap_registry is None:
            load_default_keymaps(self.keymap_registry)
        self.keymap_resolver = keymap_resolver or KeymapResolver(
            self.keymap_registry, logger_name="modal_editor.keymaps"
        )
        self.context.extras.setdefault("keymap_registry", self.keymap_registry)
        self.context.extras.setdefault("keymap_resolver", self.keymap_resolver)
        self.context.extras.setdefault("mode_manager", self)

    @property
    def active_mode(self) -> Optional[Mode]:
        if self._active is None:
            return None
        return self._modes.get(self._active)

    @property
    def mode(self) -> EditorMode:
        if self._active is None:
            raise RuntimeError("No active mode registered")
        return self._active

    def register_mode(
        self,
        mode_cls: Type[Mode],
        /,
        *mode_args: object,
        **mode_kwargs: object,
    ) -> Mode:
        mode = mode_cls(self.context, *mode_args, **mode_kwargs)
        if mode.name in self._modes:
            raise ValueError(f"Mode '{mode.name.value}' already registered")
        self._modes[mode.name] = mode
        if self._active is None:
            self._active = mode.name
            mode.on_enter(None)
        return mode

    def switch_mode(self, name: EditorMode | str) -> None:
        target = EditorMode(name)
        if target not in self._modes:
            raise KeyError(f"Unknown mode '{target.value}'")
        previous = self.active_mode
        if previous and previous.name == target:
            return
        if previous:
            previous.on_exit(target)
        self._active = target
        self._modes[target].on_enter(previous.name if previous else None)
        telemetry.record_event("mode.switch", data={"mode": target.value})

    def handle_key(self, key: KeyInput) -> ModeResult:
        mode = self.active_mode
        if mode is None:
            raise RuntimeError("No active mode registered")
        with telemetry.span(
            name=f"mode::{mode.name.value}",
            component=True,
            metadata={"key": key.key, "mode": mode.name.value},
        ):
            result = mode.handle_key(key)
        if result.switch_to:
            self.switch_mode(result.switch_to)
        return result
