"""Keymap registry responsible for storing actions and bindings."""

from __future__ import annotations

from typing import Dict, Iterable, Iterator, Optional

from modal_editor.runtime.telemetry import span

from .models import ActionRef, Binding, mode_key


class KeymapConflictError(RuntimeError):
    """Raised when a new binding claims a key sequence already in use."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns action references and binding metadata, indexed per mode."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._actions: Dict[str, ActionRef] = {}
        self._bindings: Dict[str, Binding] = {}
        # mode -> key signature -> binding id
        self._mode_index: Dict[str, Dict[str, str]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_action(self, action_id: str) -> ActionRef:
        try:
            return self._actions[action_id]
        except KeyError as exc:
            raise KeyError(f"Action '{action_id}' is not registered") from exc

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_action(self, action: ActionRef, *, replace: bool = False) -> ActionRef:
        with span(
            "keymaps::register_action",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"action_id": action.id},
        ):
            if not replace and action.id in self._actions:
                raise ValueError(f"Action '{action.id}' already registered")
            self._actions[action.id] = action
            return action

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            if binding.action_id not in self._actions:
                handle.add_metadata("missing_action", binding.action_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown action '{binding.action_id}'"
                )

            conflict = self.detect_conflict(binding)
            if conflict is not None and conflict.id != binding.id and not replace:
                handle.add_metadata("conflicts", conflict.id)
                raise KeymapConflictError(binding, (conflict,))

            if binding.id in self._bindings and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            if replace:
                for stale in (conflict, self._bindings.get(binding.id)):
                    if stale is not None:
                        self._remove_binding(stale)

            self._bindings[binding.id] = binding
            self._mode_index.setdefault(binding.mode, {})[
                binding.key_signature
            ] = binding.id
            self._revision += 1
            return binding

    def iter_bindings(self, mode: Optional[str] = None) -> Iterator[Binding]:
        if mode is None:
            yield from self._bindings.values()
            return
        for binding_id in self._mode_index.get(mode_key(mode), {}).values():
            yield self._bindings[binding_id]

    def detect_conflict(self, binding: Binding) -> Optional[Binding]:
        match_id = self._mode_index.get(binding.mode, {}).get(binding.key_signature)
        if match_id is None:
            return None
        return self._bindings[match_id]

    def _remove_binding(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        if mode_bucket.get(binding.key_signature) == binding.id:
            del mode_bucket[binding.key_signature]
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
]
