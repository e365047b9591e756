from __future__ import annotations

from typing import Dict, Optional, Tuple, TYPE_CHECKING

if TYPE_CHECKING:
    from .value import Value

class Scope:
    def __init__(self, parent: Optional[Scope] = None) -> None:
        self.parent = parent
        self.variables: Dict[str, Value] = {}

    def __repr__(self) -> str:
        return f'<Scope variables={list(self.variables)!r} parent={self.parent!r}>'

    def __contains__(self, name: str) -> bool:
        return name in self.variables

    def get(self, name: str) -> Tuple[Optional[Value], bool]:
        if name in self.variables:
            return self.variables[name], True

        if self.parent is not None:
            return self.parent.get(name)

        return None, False

    def set(self, name: str, value: Value) -> Value:
        self.variables[name] = value
        return value

    def resolve(self, name: str) -> Optional[Scope]:
        """Returns the nearest scope that binds `name`."""
        if name in self.variables:
            return self

        if self.parent is not None:
            return self.parent.resolve(name)

        return None

    def assign(self, name: str, value: Value) -> Value:
        scope = self.resolve(name)
        if scope is None:
            scope = self

        return scope.set(name, value)

    def child(self) -> Scope:
        return Scope(self)
