# daogen/property_types.py
from __future__ import annotations
from enum import Enum

class PropertyType(str, Enum):
    BYTE = "BYTE"
    SHORT = "SHORT"
    INT = "INT"
    LONG = "LONG"
    BOOLEAN = "BOOLEAN"
    FLOAT = "FLOAT"
    DOUBLE = "DOUBLE"
    STRING = "STRING"
    BYTE_ARRAY = "BYTE_ARRAY"
    DATE = "DATE"
    ENUM = "ENUM"
