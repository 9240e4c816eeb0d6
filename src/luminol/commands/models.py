"""Dataclasses describing commands and the keys bound to them."""

from __future__ import annotations

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Callable, Iterable, Mapping

MODIFIER_ORDER = ("ctrl", "alt", "shift", "meta")


def normalize_key(token: str) -> str:
    """Canonical ``mod+mod+key`` form, modifiers lower-cased and ordered."""

    parts = [part.strip() for part in token.split("+") if part.strip()]
    if not parts:
        raise ValueError("key cannot be empty")
    key = parts[-1]
    modifiers = {part.lower() for part in parts[:-1]}
    unknown = modifiers.difference(MODIFIER_ORDER)
    if unknown:
        raise ValueError(f"Unknown modifier(s) {sorted(unknown)} in '{token}'")
    ordered = [mod for mod in MODIFIER_ORDER if mod in modifiers]
    if ordered or len(key) > 1:
        key = key.lower()
    return "+".join([*ordered, key])


@dataclass(frozen=True, slots=True)
class WhenClause:
    """Boolean condition on an engine flag gating a binding."""

    flag: str
    expected: bool = True

    def __post_init__(self) -> None:
        if not self.flag:
            raise ValueError("flag cannot be empty")

    @classmethod
    def parse(cls, expression: str) -> "WhenClause":
        expr = expression.strip()
        if not expr:
            raise ValueError("expression cannot be empty")
        if expr.startswith("!"):
            return cls(expr[1:], False)
        return cls(expr, True)

    def evaluate(self, context: Mapping[str, bool]) -> bool:
        return bool(context.get(self.flag, False)) is self.expected


@dataclass(frozen=True, slots=True)
class CommandRef:
    """A named, host-invokable command."""

    id: str
    handler: Callable[..., object]
    description: str = ""
    telemetry_name: str | None = None
    metadata: Mapping[str, object] = field(default_factory=dict)

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("CommandRef id cannot be empty")
        if not callable(self.handler):
            raise TypeError("handler must be callable")
        object.__setattr__(self, "metadata", MappingProxyType(dict(self.metadata)))
        if self.telemetry_name is None:
            object.__setattr__(self, "telemetry_name", self.id)

    def __call__(self, *args: object, **kwargs: object) -> object:
        return self.handler(*args, **kwargs)


@dataclass(frozen=True, slots=True)
class KeyBinding:
    """Associates one key token with a command, optionally gated by flags."""

    id: str
    key: str
    command_id: str
    description: str = ""
    when: tuple[WhenClause, ...] = ()
    priority: int = 0

    def __post_init__(self) -> None:
        if not self.id:
            raise ValueError("binding id cannot be empty")
        if not self.command_id:
            raise ValueError("binding command_id cannot be empty")
        object.__setattr__(self, "key", normalize_key(self.key))
        object.__setattr__(self, "when", _normalize_when(self.when))

    @property
    def when_map(self) -> Mapping[str, bool]:
        return MappingProxyType({clause.flag: clause.expected for clause in self.when})

    def allows(self, context: Mapping[str, bool]) -> bool:
        return all(clause.evaluate(context) for clause in self.when)


def _normalize_when(clauses: Iterable[WhenClause | str]) -> tuple[WhenClause, ...]:
    return tuple(
        clause if isinstance(clause, WhenClause) else WhenClause.parse(str(clause))
        for clause in clauses
    )


__all__ = ["CommandRef", "KeyBinding", "WhenClause", "normalize_key"]
