# daogen/type_mapping.py
from __future__ import annotations
from typing import Dict

from daogen.errors import UnmappedTypeError
from daogen.property_types import PropertyType

# ---- storage (SQLite affinity) ----------------------------------------------

DB_TYPES: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "INTEGER",
    PropertyType.BYTE: "INTEGER",
    PropertyType.SHORT: "INTEGER",
    PropertyType.INT: "INTEGER",
    PropertyType.LONG: "INTEGER",
    PropertyType.FLOAT: "REAL",
    PropertyType.DOUBLE: "REAL",
    PropertyType.STRING: "TEXT",
    PropertyType.BYTE_ARRAY: "BLOB",
    # stored as epoch millis
    PropertyType.DATE: "INTEGER",
    # stored as the registered ordinal
    PropertyType.ENUM: "INTEGER",
}

# ---- target (generated Python) ----------------------------------------------

TARGET_TYPES_NOT_NULL: Dict[PropertyType, str] = {
    PropertyType.BOOLEAN: "bool",
    PropertyType.BYTE: "int",
    PropertyType.SHORT: "int",
    PropertyType.INT: "int",
    PropertyType.LONG: "int",
    PropertyType.FLOAT: "float",
    PropertyType.DOUBLE: "float",
    PropertyType.STRING: "str",
    PropertyType.BYTE_ARRAY: "bytes",
    PropertyType.DATE: "datetime.datetime",
    PropertyType.ENUM: "int",
}

TARGET_TYPES_NULLABLE: Dict[PropertyType, str] = {
    pt: f"Optional[{py}]" for pt, py in TARGET_TYPES_NOT_NULL.items()
}


def _lookup(table: Dict[PropertyType, str], property_type, label: str) -> str:
    try:
        return table[PropertyType(property_type)]
    except (KeyError, ValueError) as e:
        raise UnmappedTypeError(f"No {label} mapping for property type {property_type!r}") from e


def map_to_db_type(property_type: PropertyType) -> str:
    return _lookup(DB_TYPES, property_type, "storage type")


def map_to_target_type_not_null(property_type: PropertyType) -> str:
    return _lookup(TARGET_TYPES_NOT_NULL, property_type, "not-null target type")


def map_to_target_type_nullable(property_type: PropertyType) -> str:
    return _lookup(TARGET_TYPES_NULLABLE, property_type, "nullable target type")
