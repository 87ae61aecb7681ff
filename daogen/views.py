# daogen/views.py
"""
Read-only snapshot of a resolved schema, handed to renderers.

The code renderer needs per property: name, target type, column name and
type, constraints (None when no clause applies), ordinal and, for enums,
the type name and symbolic values. The DDL renderer needs per entity the
ordered columns and indexes.
"""
from __future__ import annotations
from typing import TYPE_CHECKING, Dict, List, Optional

from pydantic import BaseModel, Field

from daogen.property_types import PropertyType

if TYPE_CHECKING:
    from daogen.entity import Entity
    from daogen.index import Index
    from daogen.property import Property
    from daogen.schema import Schema

class PropertyView(BaseModel):
    propertyName: str
    propertyType: PropertyType
    targetType: str
    columnName: str
    columnType: str
    constraints: Optional[str] = None
    ordinal: int
    primaryKey: bool = False
    autoincrement: bool = False
    unique: bool = False
    notNull: bool = False
    enumTypeName: Optional[str] = None
    enumValues: Dict[str, int] = Field(default_factory=dict)

class IndexColumnView(BaseModel):
    columnName: str
    propertyName: str
    order: str

class IndexView(BaseModel):
    name: Optional[str] = None
    unique: bool = False
    columns: List[IndexColumnView]

class EntityView(BaseModel):
    className: str
    tableName: str
    package: Optional[str] = None
    daoClassName: str
    pkType: Optional[str] = None
    properties: List[PropertyView]
    indexes: List[IndexView] = Field(default_factory=list)

class SchemaView(BaseModel):
    version: int
    defaultPackage: Optional[str] = None
    entities: List[EntityView]

# ---- builders -----------------------------------------------------------------

def property_view(prop: "Property") -> PropertyView:
    return PropertyView(
        propertyName=prop.property_name,
        propertyType=prop.property_type,
        targetType=prop.target_type,
        columnName=prop.column_name,
        columnType=prop.column_type,
        constraints=prop.constraints,
        ordinal=prop.ordinal,
        primaryKey=prop.primary_key,
        autoincrement=prop.autoincrement,
        unique=prop.unique,
        notNull=prop.not_null,
        enumTypeName=prop.enum_type_name,
        enumValues=prop.enum_values,
    )

def index_view(index: "Index") -> IndexView:
    return IndexView(
        name=index.name,
        unique=index.unique,
        columns=[
            IndexColumnView(columnName=p.column_name, propertyName=p.property_name, order=o)
            for p, o in index.members
        ],
    )

def entity_view(entity: "Entity") -> EntityView:
    return EntityView(
        className=entity.class_name,
        tableName=entity.table_name,
        package=entity.package,
        daoClassName=entity.dao_class_name,
        pkType=entity.pk_type,
        properties=[property_view(p) for p in entity.properties],
        indexes=[index_view(i) for i in entity.indexes],
    )

def schema_view(schema: "Schema") -> SchemaView:
    schema.require_resolved(schema)
    return SchemaView(
        version=schema.version,
        defaultPackage=schema.default_package,
        entities=[entity_view(e) for e in schema.entities],
    )
