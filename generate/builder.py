# generate/builder.py
from __future__ import annotations
import logging
from typing import Optional

from daogen.entity import Entity
from daogen.errors import DeclarationError
from daogen.index import Index
from daogen.meta_models import EntityMeta, PropertyMeta, SchemaMeta
from daogen.schema import Schema

logger = logging.getLogger(__name__)

def _declare_property(entity: Entity, pm: PropertyMeta) -> None:
    builder = entity.add_property(pm.propertyType, pm.propertyName)
    if pm.columnName:
        builder.column_name(pm.columnName)
    if pm.columnType:
        builder.column_type(pm.columnType)

    # pk flags before autoincrement: its precondition reads them
    if pm.primaryKey:
        builder.primary_key()
    if pm.pkAsc:
        builder.primary_key_asc()
    if pm.pkDesc:
        builder.primary_key_desc()
    if pm.autoincrement:
        builder.autoincrement()

    if pm.unique:
        builder.unique()
    if pm.notNull:
        builder.not_null()

    if pm.index is not None:
        if pm.index.order.upper() == "DESC":
            builder.index_desc(pm.index.name, bool(pm.index.unique))
        else:
            builder.index_asc(pm.index.name, bool(pm.index.unique))

    for name, ordinal in (pm.enumValues or {}).items():
        builder.add_value(name, ordinal)

def _declare_entity(schema: Schema, em: EntityMeta) -> None:
    entity = schema.add_entity(em.className)
    if em.tableName:
        entity.set_table_name(em.tableName)
    if em.package:
        entity.set_package(em.package)
    if em.daoClassName:
        entity.set_dao_class_name(em.daoClassName)
    if em.idProperty:
        entity.add_id_property(autoincrement=bool(em.idAutoincrement))

    for pm in em.properties:
        _declare_property(entity, pm)

    for im in (em.indexes or []):
        index = Index(name=im.name, unique=bool(im.unique))
        for col in im.columns:
            try:
                prop = entity.get_property(col.propertyName)
            except KeyError as e:
                raise DeclarationError(
                    f"Index {im.name or '<unnamed>'} of {em.className} references unknown property {col.propertyName!r}"
                ) from e
            index.add_property(prop, col.order)
        entity.add_index(index)

def build_schema(meta: SchemaMeta, default_package: Optional[str] = None) -> Schema:
    """
    Declare every entity, property and index of `meta` through the builder
    API. The returned schema is NOT resolved; call Schema.resolve().
    `default_package` applies only when the document does not set one.
    """
    schema = Schema(version=meta.version, default_package=meta.defaultPackage or default_package)
    for em in meta.entities:
        _declare_entity(schema, em)
    logger.debug("Declared %d entities for schema v%s", len(meta.entities), meta.version)
    return schema
