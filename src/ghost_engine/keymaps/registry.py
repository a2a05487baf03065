"""Keymap registry holding the bindings of every mode."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Optional

from ghost_engine.modes.base_mode import EditorMode, KeyEvent
from ghost_engine.runtime.telemetry import span

from .models import Binding


@dataclass(slots=True)
class RegistryStats:
    """Lightweight snapshot describing registry state."""

    binding_count: int
    modes: tuple[str, ...]


class KeymapConflictError(RuntimeError):
    """Raised when a new binding would match the same key event as existing ones."""

    def __init__(self, binding: Binding, conflicts: Iterable[Binding]):
        conflicts_tuple = tuple(conflicts)
        message = (
            f"Binding '{binding.id}' conflicts with {[b.id for b in conflicts_tuple]}"
        )
        super().__init__(message)
        self.binding = binding
        self.conflicts = conflicts_tuple


class KeymapRegistry:
    """Owns bindings, indexed by mode and key for constant-time lookup."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._bindings: Dict[str, Binding] = {}
        self._mode_index: Dict[EditorMode, Dict[str, list[str]]] = {}
        self._logger_name = logger_name
        self._revision = 0

    def revision(self) -> int:
        return self._revision

    def get_binding(self, binding_id: str) -> Binding:
        try:
            return self._bindings[binding_id]
        except KeyError as exc:
            raise KeyError(f"Binding '{binding_id}' is not registered") from exc

    def register_binding(self, binding: Binding, *, replace: bool = False) -> Binding:
        with span(
            "keymaps::register_binding",
            logger_name=self._logger_name,
            component="keymaps",
            metadata={"binding_id": binding.id, "mode": binding.mode},
        ) as handle:
            conflicts = self.detect_conflicts(binding)
            if conflicts and not replace:
                handle.add_metadata(
                    "conflicts", ",".join(conflict.id for conflict in conflicts)
                )
                raise KeymapConflictError(binding, conflicts)

            if replace:
                for conflict in conflicts:
                    self._remove_binding(conflict)
                existing = self._bindings.get(binding.id)
                if existing:
                    self._remove_binding(existing)
            elif binding.id in self._bindings:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            self._bindings[binding.id] = binding
            self._index_binding(binding)
            self._revision += 1
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[Binding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._remove_binding(binding)
        self._revision += 1
        return binding

    def lookup(self, mode: EditorMode, event: KeyEvent) -> Optional[Binding]:
        """Return the binding matching ``event`` in ``mode``, if any."""

        for binding_id in self._mode_index.get(mode, {}).get(event.key, ()):
            binding = self._bindings[binding_id]
            if binding.matches(event):
                return binding
        return None

    def stats(self) -> RegistryStats:
        return RegistryStats(
            binding_count=len(self._bindings),
            modes=tuple(sorted(mode.value for mode in self._mode_index)),
        )

    def detect_conflicts(self, binding: Binding) -> list[Binding]:
        conflicts: list[Binding] = []
        for match_id in self._mode_index.get(binding.mode, {}).get(binding.key, ()):
            existing = self._bindings[match_id]
            if existing.id != binding.id and existing.overlaps(binding):
                conflicts.append(existing)
        return conflicts

    def _index_binding(self, binding: Binding) -> None:
        by_key = self._mode_index.setdefault(binding.mode, {})
        by_key.setdefault(binding.key, []).append(binding.id)

    def _remove_binding(self, binding: Binding) -> None:
        self._bindings.pop(binding.id, None)
        mode_bucket = self._mode_index.get(binding.mode)
        if not mode_bucket:
            return
        ids = mode_bucket.get(binding.key)
        if not ids:
            return
        if binding.id in ids:
            ids.remove(binding.id)
        if not ids:
            mode_bucket.pop(binding.key, None)
        if not mode_bucket:
            self._mode_index.pop(binding.mode, None)


__all__ = [
    "KeymapRegistry",
    "KeymapConflictError",
    "RegistryStats",
]
