"""Command registry: command lookup, key bindings and dispatch."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Dict, Iterable, Iterator, Mapping, Optional

from luminol.runtime.telemetry import span

from .models import CommandRef, KeyBinding, normalize_key


@dataclass(slots=True)
class RegistryStats:
    command_count: int
    binding_count: int
    keys: tuple[str, ...]


class CommandConflictError(RuntimeError):
    """Raised when a binding would shadow another one in the same context."""

    def __init__(self, binding: KeyBinding, conflicts: Iterable[KeyBinding]):
        conflicts_tuple = tuple(conflicts)
        super().__init__(
            f"Binding '{binding.id}' on '{binding.key}' conflicts with "
            f"{[b.id for b in conflicts_tuple]}"
        )
        self.binding = binding
        self.conflicts = conflicts_tuple


class CommandRegistry:
    """Owns command references and the key bindings that trigger them."""

    def __init__(self, *, logger_name: str | None = None) -> None:
        self._commands: Dict[str, CommandRef] = {}
        self._bindings: Dict[str, KeyBinding] = {}
        self._key_index: Dict[str, set[str]] = {}
        self._logger_name = logger_name or "luminol.commands"

    def get_command(self, command_id: str) -> CommandRef:
        try:
            return self._commands[command_id]
        except KeyError as exc:
            raise KeyError(f"Command '{command_id}' is not registered") from exc

    def has_command(self, command_id: str) -> bool:
        return command_id in self._commands

    def register_command(
        self, command: CommandRef, *, replace: bool = False
    ) -> CommandRef:
        if not replace and command.id in self._commands:
            raise ValueError(f"Command '{command.id}' already registered")
        self._commands[command.id] = command
        return command

    def register_binding(
        self, binding: KeyBinding, *, replace: bool = False
    ) -> KeyBinding:
        with span(
            "commands::register_binding",
            logger_name=self._logger_name,
            component="commands",
            metadata={"binding_id": binding.id, "key": binding.key},
        ) as handle:
            if binding.command_id not in self._commands:
                handle.add_metadata("missing_command", binding.command_id)
                raise KeyError(
                    f"Binding '{binding.id}' references unknown command "
                    f"'{binding.command_id}'"
                )

            existing = self._bindings.get(binding.id)
            if existing is not None and not replace:
                raise ValueError(f"Binding id '{binding.id}' already registered")

            conflicts = [
                other
                for other in self.detect_conflicts(binding)
                if other.id != binding.id
            ]
            if conflicts and not replace:
                handle.add_metadata("conflicts", ",".join(b.id for b in conflicts))
                raise CommandConflictError(binding, conflicts)

            for stale in [*conflicts, *([existing] if existing else [])]:
                self._drop(stale)

            self._bindings[binding.id] = binding
            self._key_index.setdefault(binding.key, set()).add(binding.id)
            return binding

    def unregister_binding(self, binding_id: str) -> Optional[KeyBinding]:
        binding = self._bindings.get(binding_id)
        if binding is None:
            return None
        self._drop(binding)
        return binding

    def iter_bindings(self, key: Optional[str] = None) -> Iterator[KeyBinding]:
        if key is None:
            yield from self._bindings.values()
            return
        for binding_id in sorted(self._key_index.get(normalize_key(key), ())):
            yield self._bindings[binding_id]

    def bindings_for(self, command_id: str) -> tuple[KeyBinding, ...]:
        return tuple(b for b in self._bindings.values() if b.command_id == command_id)

    def resolve(
        self, key: str, context: Optional[Mapping[str, bool]] = None
    ) -> Optional[KeyBinding]:
        """Pick the highest-priority binding on ``key`` allowed by ``context``."""

        ctx = context or {}
        candidates = [b for b in self.iter_bindings(key) if b.allows(ctx)]
        if not candidates:
            return None
        candidates.sort(key=lambda b: (-b.priority, b.id))
        return candidates[0]

    def execute(self, command_id: str, *args: object, **kwargs: object) -> object:
        command = self.get_command(command_id)
        with span(
            f"commands::{command.telemetry_name}",
            logger_name=self._logger_name,
            component="commands",
            metadata={"command": command.id},
        ):
            return command(*args, **kwargs)

    def stats(self) -> RegistryStats:
        return RegistryStats(
            command_count=len(self._commands),
            binding_count=len(self._bindings),
            keys=tuple(sorted(self._key_index)),
        )

    def detect_conflicts(self, binding: KeyBinding) -> list[KeyBinding]:
        conflicts: list[KeyBinding] = []
        for other_id in self._key_index.get(binding.key, ()):
            other = self._bindings[other_id]
            if _contexts_overlap(binding, other):
                conflicts.append(other)
        return conflicts

    def _drop(self, binding: KeyBinding) -> None:
        self._bindings.pop(binding.id, None)
        bucket = self._key_index.get(binding.key)
        if bucket is None:
            return
        bucket.discard(binding.id)
        if not bucket:
            self._key_index.pop(binding.key, None)


def _contexts_overlap(left: KeyBinding, right: KeyBinding) -> bool:
    """Whether some flag assignment enables both bindings at once."""

    left_map = left.when_map
    right_map = right.when_map
    for flag, expected in left_map.items():
        if flag in right_map and right_map[flag] != expected:
            return False
    return True


__all__ = ["CommandConflictError", "CommandRegistry", "RegistryStats"]
