# daogen/entity.py
from __future__ import annotations
import logging
from typing import TYPE_CHECKING, List, Optional

from daogen.errors import DeclarationError
from daogen.index import Index
from daogen.naming import db_name, uncap_first
from daogen.property import Property, PropertyBuilder
from daogen.property_types import PropertyType

if TYPE_CHECKING:
    from daogen.schema import Schema

logger = logging.getLogger(__name__)


class Entity:
    """
    A table-like group of properties: one generated class, one table.
    Properties and indexes keep declaration order.
    """

    def __init__(self, schema: "Schema", class_name: str) -> None:
        self.schema = schema
        self.class_name = class_name
        self._properties: List[Property] = []
        self._indexes: List[Index] = []

        # optional overrides, defaulted in 2nd pass
        self._explicit_table_name: Optional[str] = None
        self._explicit_package: Optional[str] = None
        self._explicit_dao_class_name: Optional[str] = None

        self._table_name: Optional[str] = None
        self._package: Optional[str] = None
        self._dao_class_name: Optional[str] = None
        self._pk_properties: List[Property] = []
        self._non_pk_properties: List[Property] = []
        self._pk_property: Optional[Property] = None
        self._pk_type: Optional[str] = None

    # ---- declaration -----------------------------------------------------------

    def add_property(self, property_type: PropertyType, property_name: str) -> PropertyBuilder:
        if self.has_property(property_name):
            raise DeclarationError(f"{self.class_name} already declares property {uncap_first(property_name)!r}")
        self.schema.touch()
        builder = PropertyBuilder(self.schema, self, PropertyType(property_type), property_name)
        self._properties.append(builder.property)
        return builder

    def add_id_property(self, autoincrement: bool = False) -> PropertyBuilder:
        builder = self.add_property(PropertyType.LONG, "id").column_name("_id").primary_key()
        if autoincrement:
            builder.autoincrement()
        return builder

    def add_boolean_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BOOLEAN, name)

    def add_byte_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BYTE, name)

    def add_short_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.SHORT, name)

    def add_int_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.INT, name)

    def add_long_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.LONG, name)

    def add_float_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.FLOAT, name)

    def add_double_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.DOUBLE, name)

    def add_string_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.STRING, name)

    def add_byte_array_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.BYTE_ARRAY, name)

    def add_date_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.DATE, name)

    def add_enum_property(self, name: str) -> PropertyBuilder:
        return self.add_property(PropertyType.ENUM, name)

    def add_index(self, index: Index) -> "Entity":
        if any(i is index for i in self._indexes):
            raise DeclarationError(f"Index already registered on entity {self.class_name}")
        self.schema.touch()
        index.attach(self)
        self._indexes.append(index)
        return self

    def set_table_name(self, table_name: Optional[str]) -> "Entity":
        self.schema.touch()
        self._explicit_table_name = table_name
        return self

    def set_package(self, package: Optional[str]) -> "Entity":
        self.schema.touch()
        self._explicit_package = package
        return self

    def set_dao_class_name(self, dao_class_name: Optional[str]) -> "Entity":
        self.schema.touch()
        self._explicit_dao_class_name = dao_class_name
        return self

    # ---- accessors -------------------------------------------------------------

    @property
    def properties(self) -> List[Property]:
        return list(self._properties)

    @property
    def indexes(self) -> List[Index]:
        return list(self._indexes)

    def has_property(self, property_name: str) -> bool:
        name = uncap_first(property_name)
        return any(p.property_name == name for p in self._properties)

    def get_property(self, property_name: str) -> Property:
        # names are stored lower-camel, look them up the same way
        name = uncap_first(property_name)
        for prop in self._properties:
            if prop.property_name == name:
                return prop
        raise KeyError(f"{self.class_name} has no property {property_name!r}")

    @property
    def table_name(self) -> str:
        self.schema.require_resolved(self)
        return self._table_name

    @property
    def package(self) -> Optional[str]:
        self.schema.require_resolved(self)
        return self._package

    @property
    def dao_class_name(self) -> str:
        self.schema.require_resolved(self)
        return self._dao_class_name

    @property
    def pk_properties(self) -> List[Property]:
        self.schema.require_resolved(self)
        return list(self._pk_properties)

    @property
    def non_pk_properties(self) -> List[Property]:
        self.schema.require_resolved(self)
        return list(self._non_pk_properties)

    @property
    def pk_property(self) -> Optional[Property]:
        self.schema.require_resolved(self)
        return self._pk_property

    @property
    def pk_type(self) -> Optional[str]:
        self.schema.require_resolved(self)
        return self._pk_type

    # ---- resolution -------------------------------------------------------------

    def init_second_pass(self) -> None:
        self._table_name = self._explicit_table_name or db_name(self.class_name)
        self._package = self._explicit_package or self.schema.default_package
        self._dao_class_name = self._explicit_dao_class_name or f"{self.class_name}Dao"

        self._pk_properties = []
        self._non_pk_properties = []
        for ordinal, prop in enumerate(self._properties):
            prop.ordinal = ordinal
            prop.init_second_pass()
            if prop.primary_key:
                self._pk_properties.append(prop)
            else:
                self._non_pk_properties.append(prop)

        if len(self._pk_properties) == 1:
            self._pk_property = self._pk_properties[0]
            self._pk_type = self.schema.map_to_target_type_nullable(self._pk_property.property_type)
        else:
            self._pk_property = None
            self._pk_type = None
        logger.debug(
            "Entity %s: table=%s properties=%d pk=%d indexes=%d",
            self.class_name, self._table_name, len(self._properties),
            len(self._pk_properties), len(self._indexes),
        )

    def init_third_pass(self) -> None:
        for prop in self._properties:
            prop.init_third_pass()

    def __repr__(self) -> str:
        return f"Entity {self.class_name}"
