# adapters/sqlalchemy_tables.py
from __future__ import annotations
import io
import logging
from typing import Dict, Optional

from sqlalchemy import Column, Index as SAIndex, MetaData, Table, types
from sqlalchemy.dialects import mssql, postgresql, sqlite
from sqlalchemy.schema import CreateIndex, CreateTable

from daogen.entity import Entity
from daogen.index import DESC
from daogen.schema import Schema

logger = logging.getLogger(__name__)

class RawColumnType(types.UserDefinedType):
    """Column type compiled verbatim, for explicit column types the catalog does not know."""
    cache_ok = True

    def __init__(self, spec: str) -> None:
        self.spec = spec

    def get_col_spec(self, **kw) -> str:
        return self.spec

def sqlalchemy_type(column_type: str):
    """Map a resolved storage type -> SQLAlchemy column type."""
    ct = (column_type or "").strip().upper()
    if ct == "INTEGER":
        return types.Integer()
    if ct == "REAL":
        return types.REAL()
    if ct == "TEXT":
        return types.Text()
    if ct == "BLOB":
        return types.LargeBinary()
    return RawColumnType(column_type)

def _table_for_entity(entity: Entity, metadata: MetaData) -> Table:
    columns = []
    has_autoincrement = False
    for prop in entity.properties:
        has_autoincrement = has_autoincrement or prop.autoincrement
        columns.append(
            Column(
                prop.column_name,
                sqlalchemy_type(prop.column_type),
                primary_key=prop.primary_key,
                # constraints already folds string PKs into NOT NULL
                nullable=not (prop.constraints and "NOT NULL" in prop.constraints),
                unique=prop.unique or None,
                autoincrement=True if prop.autoincrement else "auto",
                info={
                    "propertyName": prop.property_name,
                    "targetType": prop.target_type,
                    "constraints": prop.constraints,
                    "ordinal": prop.ordinal,
                },
            )
        )

    kwargs = {"sqlite_autoincrement": True} if has_autoincrement else {}
    table = Table(entity.table_name, metadata, *columns, info={"className": entity.class_name}, **kwargs)

    # Table.indexes is a set; keep declaration order for CREATE INDEX
    ordered = []
    for index in entity.indexes:
        exprs = []
        for prop, order in index.members:
            col = table.c[prop.column_name]
            exprs.append(col.desc() if order == DESC else col)
        ordered.append(SAIndex(index.name or index.synthesize_name(entity.table_name), *exprs, unique=index.unique))
    table.info["indexes"] = ordered
    return table

def build_metadata(schema: Schema, metadata: Optional[MetaData] = None) -> MetaData:
    """
    One Table per entity (declaration order) and one Index per declared index
    of a resolved schema. Unnamed indexes get IDX_<TABLE>_<COLUMNS> names;
    table.info["indexes"] lists them in declaration order.

    Primary key ASC/DESC has no SQLAlchemy column option and is not carried
    into the Table: the DDL gets a plain PRIMARY KEY. The full clause stays
    available as column.info["constraints"].
    """
    schema.require_resolved(schema)
    metadata = metadata if metadata is not None else MetaData()
    tables: Dict[str, Table] = {}
    for entity in schema.entities:
        tables[entity.class_name] = _table_for_entity(entity, metadata)
    logger.info("Built SQLAlchemy tables: %s", ", ".join(t.name for t in tables.values()))
    return metadata

# ---- DDL ------------------------------------------------------------------------

DIALECTS = {
    "sqlite": sqlite.dialect,
    "postgres": postgresql.dialect,
    "mssql": mssql.dialect,
}

class DDLRenderer:
    """CREATE TABLE / CREATE INDEX statements compiled for one dialect (no DB driver needed)."""

    def __init__(self, dialect: str = "sqlite") -> None:
        factory = DIALECTS.get((dialect or "").lower())
        if factory is None:
            raise ValueError(f"Unknown dialect {dialect!r}. Use one of: {' | '.join(DIALECTS)}")
        self.dialect_name = dialect.lower()
        self._dialect = factory()

    def render(self, schema: Schema) -> str:
        metadata = build_metadata(schema)
        buf = io.StringIO()
        for table in metadata.tables.values():
            buf.write(str(CreateTable(table).compile(dialect=self._dialect)).strip())
            buf.write(";\n\n")
            for index in table.info["indexes"]:
                buf.write(str(CreateIndex(index).compile(dialect=self._dialect)).strip())
                buf.write(";\n\n")
        return buf.getvalue()
