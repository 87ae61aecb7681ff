# daogen/meta_models.py
from __future__ import annotations
from typing import Dict, List, Optional
from pydantic import BaseModel, Field

from daogen.property_types import PropertyType

class IndexOrder(BaseModel):
    name: Optional[str] = None
    order: str = "ASC"
    unique: Optional[bool] = None

class PropertyMeta(BaseModel):
    propertyName: str
    propertyType: PropertyType
    columnName: Optional[str] = None
    columnType: Optional[str] = None
    primaryKey: Optional[bool] = None
    pkAsc: Optional[bool] = None
    pkDesc: Optional[bool] = None
    autoincrement: Optional[bool] = None
    unique: Optional[bool] = None
    notNull: Optional[bool] = None
    index: Optional[IndexOrder] = None
    enumValues: Optional[Dict[str, int]] = None

class IndexColumnMeta(BaseModel):
    propertyName: str
    order: str = "ASC"

class IndexMeta(BaseModel):
    name: Optional[str] = None
    unique: Optional[bool] = None
    columns: List[IndexColumnMeta]

class EntityMeta(BaseModel):
    className: str
    tableName: Optional[str] = None
    package: Optional[str] = None
    daoClassName: Optional[str] = None
    idProperty: Optional[bool] = None
    idAutoincrement: Optional[bool] = None
    properties: List[PropertyMeta] = Field(default_factory=list)
    indexes: Optional[List[IndexMeta]] = None

class SchemaMeta(BaseModel):
    version: int = 1
    defaultPackage: Optional[str] = None
    entities: List[EntityMeta]
