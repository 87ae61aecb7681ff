# daogen/index.py
from __future__ import annotations
from typing import TYPE_CHECKING, List, Optional, Tuple

from daogen.errors import DeclarationError

if TYPE_CHECKING:
    from daogen.entity import Entity
    from daogen.property import Property

ASC = "ASC"
DESC = "DESC"

class Index:
    """
    Ordered, directional group of properties of one entity.

    Holds the properties it indexes but does not own them; they belong to
    the entity the index is attached to. A property can appear only once.
    A missing name is left to the renderer (see synthesize_name).
    """

    def __init__(self, name: Optional[str] = None, unique: bool = False) -> None:
        self.name = name
        self.unique = unique
        self._entity: Optional["Entity"] = None
        self._members: List[Tuple["Property", str]] = []

    # ---- declaration -----------------------------------------------------------

    def add_property(self, prop: "Property", order: Optional[str] = None) -> "Index":
        if order is not None:
            order = order.upper()
            if order not in (ASC, DESC):
                raise DeclarationError(f"Index order must be ASC or DESC, got {order!r}")
        if any(p is prop for p, _ in self._members):
            raise DeclarationError(f"{prop} is already part of index {self.name or '<unnamed>'}")
        if self._entity is not None and prop.entity is not self._entity:
            raise DeclarationError(
                f"{prop} cannot join an index of entity {self._entity.class_name}"
            )
        self._touch()
        self._members.append((prop, order or ASC))
        return self

    def add_property_asc(self, prop: "Property") -> "Index":
        return self.add_property(prop, ASC)

    def add_property_desc(self, prop: "Property") -> "Index":
        return self.add_property(prop, DESC)

    def make_unique(self) -> "Index":
        self._touch()
        self.unique = True
        return self

    def set_name(self, name: Optional[str]) -> "Index":
        self._touch()
        self.name = name
        return self

    def _touch(self) -> None:
        if self._entity is not None:
            self._entity.schema.touch()

    def attach(self, entity: "Entity") -> None:
        if self._entity is not None and self._entity is not entity:
            raise DeclarationError(
                f"Index already attached to entity {self._entity.class_name}"
            )
        for prop, _ in self._members:
            if prop.entity is not entity:
                raise DeclarationError(f"{prop} does not belong to entity {entity.class_name}")
        self._entity = entity

    # ---- accessors -------------------------------------------------------------

    @property
    def entity(self) -> Optional["Entity"]:
        return self._entity

    @property
    def properties(self) -> List["Property"]:
        return [p for p, _ in self._members]

    @property
    def orders(self) -> List[str]:
        return [o for _, o in self._members]

    @property
    def members(self) -> List[Tuple["Property", str]]:
        return list(self._members)

    def synthesize_name(self, table_name: str) -> str:
        """IDX_<TABLE>_<COLUMN>[_DESC]... for renderers that need a concrete name."""
        parts = [f"IDX_{table_name}"]
        for prop, order in self._members:
            parts.append(prop.column_name)
            if order == DESC:
                parts.append("DESC")
        return "_".join(parts)

    def __repr__(self) -> str:
        cols = ", ".join(f"{p.property_name} {o}" for p, o in self._members)
        return f"Index({self.name!r}, unique={self.unique}, [{cols}])"
