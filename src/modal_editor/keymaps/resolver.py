"""Trie-based keymap resolution with telemetry instrumentation."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Dict, Literal, Optional, Sequence

from modal_editor.runtime.telemetry import span

from .models import ActionRef, Binding, mode_key
from .registry import KeymapRegistry


@dataclass(slots=True)
class TrieNode:
    """Single trie node tracking a binding and child transitions."""

    binding_id: Optional[str] = None
    children: Dict[str, "TrieNode"] = field(default_factory=dict)

    def child(self, token: str) -> "TrieNode":
        return self.children.setdefault(token, TrieNode())

    def next_tokens(self) -> tuple[str, ...]:
        return tuple(sorted(self.children.keys()))


@dataclass(slots=True)
class KeymapTrie:
    """Concrete trie built for a given mode."""

    mode: str
    root: TrieNode = field(default_factory=TrieNode)

    def add_binding(self, binding: Binding) -> None:
        node = self.root
        for token in binding.sequence.tokens:
            node = node.child(token)
        node.binding_id = binding.id


@dataclass(frozen=True, slots=True)
class ResolutionMatch:
    """Resolved binding paired with its action."""

    binding: Binding
    action: ActionRef


@dataclass(frozen=True, slots=True)
class ResolutionResult:
    """Outcome returned from the resolver."""

    status: Literal["match", "pending", "miss"]
    match: Optional[ResolutionMatch] = None
    consumed: int = 0
    next_expected: tuple[str, ...] = ()


class KeymapResolver:
    """Builds mode-specific tries and resolves sequences.

    A sequence that ends on a bound node resolves to ``match`` even when
    longer bindings share the prefix; a sequence that ends on an unbound
    interior node is ``pending``.
    """

    def __init__(
        self, registry: KeymapRegistry, *, logger_name: str | None = None
    ) -> None:
        self._registry = registry
        self._logger_name = logger_name
        self._cache: Dict[str, tuple[int, KeymapTrie]] = {}

    def resolve(self, mode: str, tokens: Sequence[str]) -> ResolutionResult:
        key = mode_key(mode)
        normalized = tuple(tokens)
        with span(
            "keymaps::resolve",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"mode": key, "length": len(normalized)},
        ) as handle:
            node = self._ensure_trie(key).root
            consumed = 0
            for token in normalized:
                child = node.children.get(token)
                if child is None:
                    handle.add_metadata("status", "miss")
                    return ResolutionResult(status="miss", consumed=consumed)
                node = child
                consumed += 1

            if node.binding_id is not None:
                binding = self._registry.get_binding(node.binding_id)
                action = self._registry.get_action(binding.action_id)
                handle.add_metadata("status", "match")
                handle.add_metadata("binding_id", binding.id)
                return ResolutionResult(
                    status="match",
                    match=ResolutionMatch(binding=binding, action=action),
                    consumed=consumed,
                )

            next_expected = node.next_tokens()
            if next_expected and consumed:
                handle.add_metadata("status", "pending")
                return ResolutionResult(
                    status="pending",
                    consumed=consumed,
                    next_expected=next_expected,
                )

            handle.add_metadata("status", "miss")
            return ResolutionResult(status="miss", consumed=consumed)

    def _ensure_trie(self, mode: str) -> KeymapTrie:
        revision = self._registry.revision()
        cached = self._cache.get(mode)
        if cached and cached[0] == revision:
            return cached[1]

        trie = KeymapTrie(mode=mode)
        for binding in self._registry.iter_bindings(mode):
            trie.add_binding(binding)
        self._cache[mode] = (revision, trie)
        return trie


__all__ = [
    "KeymapResolver",
    "ResolutionResult",
    "ResolutionMatch",
]
