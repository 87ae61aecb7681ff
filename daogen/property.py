# daogen/property.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, Dict, Optional

from daogen.errors import DeclarationError, ResolutionStateError
from daogen.index import Index
from daogen.naming import cap_first, db_name, uncap_first
from daogen.property_types import PropertyType

if TYPE_CHECKING:
    from daogen.entity import Entity
    from daogen.schema import Schema

logger = logging.getLogger(__name__)


class PropertyBuilder:
    """
    Fluent declaration of a single property. Every call only records
    configuration; derived values are computed by Schema.resolve().
    """

    def __init__(self, schema: "Schema", entity: "Entity", property_type: PropertyType, property_name: str) -> None:
        self.property = Property(schema, entity, property_type, property_name)

    def _touch(self) -> None:
        self.property.schema.touch()

    def column_name(self, column_name: str) -> "PropertyBuilder":
        self._touch()
        self.property._explicit_column_name = column_name
        return self

    def column_type(self, column_type: str) -> "PropertyBuilder":
        self._touch()
        self.property._explicit_column_type = column_type
        return self

    def primary_key(self) -> "PropertyBuilder":
        self._touch()
        self.property._primary_key = True
        return self

    def primary_key_asc(self) -> "PropertyBuilder":
        self._touch()
        self.property._primary_key = True
        self.property._pk_asc = True
        return self

    def primary_key_desc(self) -> "PropertyBuilder":
        self._touch()
        self.property._primary_key = True
        self.property._pk_desc = True
        return self

    def autoincrement(self) -> "PropertyBuilder":
        prop = self.property
        if not prop._primary_key or prop.property_type is not PropertyType.LONG:
            raise DeclarationError(
                f"AUTOINCREMENT is only available to primary key properties of type LONG ({prop})"
            )
        self._touch()
        prop._pk_autoincrement = True
        return self

    def unique(self) -> "PropertyBuilder":
        self._touch()
        self.property._unique = True
        return self

    def not_null(self) -> "PropertyBuilder":
        self._touch()
        self.property._not_null = True
        return self

    def index(self) -> "PropertyBuilder":
        index = Index()
        index.add_property(self.property)
        self.property.entity.add_index(index)
        return self

    def index_asc(self, name: Optional[str] = None, unique: bool = False) -> "PropertyBuilder":
        index = Index(name=name, unique=unique)
        index.add_property_asc(self.property)
        self.property.entity.add_index(index)
        return self

    def index_desc(self, name: Optional[str] = None, unique: bool = False) -> "PropertyBuilder":
        index = Index(name=name, unique=unique)
        index.add_property_desc(self.property)
        self.property.entity.add_index(index)
        return self

    def add_value(self, name: str, ordinal: int) -> "PropertyBuilder":
        prop = self.property
        if prop.property_type is not PropertyType.ENUM:
            raise DeclarationError(f"Only ENUM properties take symbolic values ({prop})")
        existing = prop._enum_values.get(name)
        if existing is not None and existing != ordinal:
            raise DeclarationError(
                f"Enum value {name!r} of {prop} already registered as {existing}"
            )
        self._touch()
        prop._enum_values[name] = int(ordinal)
        return self

    def get_property(self) -> "Property":
        return self.property


class Property:
    """
    One column of an entity.

    Declaration-time fields are set through PropertyBuilder. Derived fields
    (column name/type, constraints, target type, enum type name) are filled
    in by the second pass and may only be read once the owning schema has
    left the declaring phase.
    """

    def __init__(self, schema: "Schema", entity: "Entity", property_type: PropertyType, property_name: str) -> None:
        self.schema = schema
        # registry key into schema; entities are looked up, not held
        self._entity_key = entity.class_name
        self._property_type = PropertyType(property_type)
        self._property_name = uncap_first(property_name)

        self._explicit_column_name: Optional[str] = None
        self._explicit_column_type: Optional[str] = None

        self._primary_key = False
        self._pk_asc = False
        self._pk_desc = False
        self._pk_autoincrement = False
        self._unique = False
        self._not_null = False

        self._enum_values: Dict[str, int] = {}

        # ---- initialized in 2nd pass
        self._column_name: Optional[str] = None
        self._column_type: Optional[str] = None
        self._constraints: Optional[str] = None
        self._target_type: Optional[str] = None
        self._enum_type_name: Optional[str] = None

        self._ordinal: Optional[int] = None
        self._ordinal_cycle: Optional[int] = None

    # ---- identity / declaration ------------------------------------------------

    @property
    def entity(self) -> "Entity":
        return self.schema.get_entity(self._entity_key)

    @property
    def class_name(self) -> str:
        return self._entity_key

    @property
    def property_name(self) -> str:
        return self._property_name

    @property_name.setter
    def property_name(self, name: str) -> None:
        if uncap_first(name) != self._property_name and self.entity.has_property(name):
            raise DeclarationError(f"{self._entity_key} already declares property {uncap_first(name)!r}")
        self.schema.touch()
        self._property_name = uncap_first(name)

    @property
    def property_type(self) -> PropertyType:
        return self._property_type

    @property_type.setter
    def property_type(self, property_type: PropertyType) -> None:
        property_type = PropertyType(property_type)
        if self._pk_autoincrement and property_type is not PropertyType.LONG:
            raise DeclarationError(f"AUTOINCREMENT {self} must stay of type LONG, got {property_type.value}")
        self.schema.touch()
        self._property_type = property_type

    @property
    def primary_key(self) -> bool:
        return self._primary_key

    @property
    def pk_asc(self) -> bool:
        return self._pk_asc

    @property
    def pk_desc(self) -> bool:
        return self._pk_desc

    @property
    def autoincrement(self) -> bool:
        return self._pk_autoincrement

    @property
    def unique(self) -> bool:
        return self._unique

    @property
    def not_null(self) -> bool:
        return self._not_null

    @property
    def enum_values(self) -> Dict[str, int]:
        return dict(self._enum_values)

    @property
    def ordinal(self) -> Optional[int]:
        return self._ordinal

    @ordinal.setter
    def ordinal(self, value: int) -> None:
        cycle = self.schema.resolution_cycle
        if self._ordinal_cycle == cycle:
            raise ResolutionStateError(f"Ordinal of {self} already assigned in resolution cycle {cycle}")
        self._ordinal = value
        self._ordinal_cycle = cycle

    # ---- derived (read after resolution) ----------------------------------------

    def _derived(self, value):
        self.schema.require_resolved(self)
        return value

    @property
    def column_name(self) -> str:
        return self._derived(self._column_name)

    @property
    def column_type(self) -> str:
        return self._derived(self._column_type)

    @property
    def constraints(self) -> Optional[str]:
        return self._derived(self._constraints)

    @property
    def target_type(self) -> str:
        return self._derived(self._target_type)

    @property
    def enum_type_name(self) -> Optional[str]:
        return self._derived(self._enum_type_name)

    # ---- resolution -------------------------------------------------------------

    def init_second_pass(self) -> None:
        self._column_name = None
        self._column_type = None
        self._constraints = None
        self._target_type = None
        self._enum_type_name = None

        self._init_constraints()
        self._column_type = self._explicit_column_type or self.schema.map_to_db_type(self._property_type)
        self._column_name = self._explicit_column_name or db_name(self._property_name)

        if self._property_type is PropertyType.ENUM:
            self._enum_type_name = cap_first(self._property_name)
            package = self.schema.default_package
            prefix = f"{package}." if package and package.strip() else ""
            self._target_type = f"{prefix}{self._entity_key}.{self._enum_type_name}"
            return

        if self._not_null:
            self._target_type = self.schema.map_to_target_type_not_null(self._property_type)
        else:
            self._target_type = self.schema.map_to_target_type_nullable(self._property_type)

    def _init_constraints(self) -> None:
        parts = []
        if self._primary_key:
            parts.append("PRIMARY KEY")
            if self._pk_asc:
                parts.append("ASC")
            # both ASC and DESC are emitted when both were declared
            if self._pk_desc:
                parts.append("DESC")
            if self._pk_autoincrement:
                parts.append("AUTOINCREMENT")
        # String PKs are always NOT NULL: SQLite accepts several NULL PK rows otherwise
        if self._not_null or (self._primary_key and self._property_type is PropertyType.STRING):
            parts.append("NOT NULL")
        if self._unique:
            parts.append("UNIQUE")
        constraints = " ".join(parts).strip()
        self._constraints = constraints or None

    def init_third_pass(self) -> None:
        # Nothing to do so far
        pass

    def clone(self) -> "Property":
        """
        Copy of this property with the same schema, entity, type and name,
        resolved on its own. Flags, enum values and index membership are not
        copied, and the copy is not added to the entity.
        """
        self.schema.require_resolved(self)
        prop = Property(self.schema, self.entity, self._property_type, self._property_name)
        prop.init_second_pass()
        prop.init_third_pass()
        logger.debug("Cloned %s", prop)
        return prop

    def __repr__(self) -> str:
        return f"Property {self._property_name} of {self._entity_key}"
