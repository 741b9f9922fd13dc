"""
Roles de usuario y consultas de capacidad.

Los roles se guardan en Mongo como lista de strings (`["Employee", "Manager"]`).
Aquí se convierten a un conjunto inmutable para no comparar strings en los servicios.
"""
from __future__ import annotations

from enum import Enum
from typing import FrozenSet, Iterable, Iterator, Optional


class Role(str, Enum):
    ADMIN = "Admin"
    MANAGER = "Manager"
    EMPLOYEE = "Employee"

    @classmethod
    def parse(cls, value: object) -> Optional["Role"]:
        """Devuelve el Role para `value` o None si no es un rol conocido."""
        try:
            return cls(value)
        except ValueError:
            return None


class RoleSet:
    """Conjunto inmutable de roles con consultas de capacidad."""

    __slots__ = ("_roles",)

    def __init__(self, roles: Iterable[Role] = ()) -> None:
        self._roles: FrozenSet[Role] = frozenset(roles)

    @classmethod
    def from_strings(cls, values: Optional[Iterable[object]]) -> "RoleSet":
        """Construye desde el array almacenado; ignora valores desconocidos."""
        if not values or isinstance(values, (str, bytes)):
            return cls()
        parsed = (Role.parse(v) for v in values)
        return cls(r for r in parsed if r is not None)

    def has(self, role: Role) -> bool:
        return role in self._roles

    @property
    def is_manager_or_admin(self) -> bool:
        return self.has(Role.ADMIN) or self.has(Role.MANAGER)

    @property
    def is_employee(self) -> bool:
        return self.has(Role.EMPLOYEE)

    @property
    def is_empty(self) -> bool:
        return not self._roles

    def to_strings(self) -> list[str]:
        return sorted(r.value for r in self._roles)

    def __contains__(self, role: object) -> bool:
        return role in self._roles

    def __iter__(self) -> Iterator[Role]:
        return iter(self._roles)

    def __len__(self) -> int:
        return len(self._roles)

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, RoleSet):
            return NotImplemented
        return self._roles == other._roles

    def __hash__(self) -> int:
        return hash(self._roles)

    def __repr__(self) -> str:
        return f"RoleSet({self.to_strings()!r})"
