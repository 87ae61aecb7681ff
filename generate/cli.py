# generate/cli.py
from __future__ import annotations
import logging
from pathlib import Path
from typing import Optional

import typer

from adapters.json_loader import JsonDocumentLoader
from adapters.json_view import JsonViewRenderer
from adapters.sqlalchemy_tables import DIALECTS, DDLRenderer
from core.ports import SchemaLoader, SchemaRenderer
from daogen.errors import DaoGenError
from daogen.schema import Schema
from daogen.settings import get_settings
from generate.builder import build_schema

settings = get_settings()
logging.basicConfig(level=getattr(logging, settings.LOG_LEVEL, logging.INFO))
logger = logging.getLogger("generate.cli")

app = typer.Typer(help="Schema definition and resolution CLI")

# ---------------------------
# Core utilities
# ---------------------------
def _resolved_schema(path: Optional[str], loader: SchemaLoader = JsonDocumentLoader()) -> Schema:
    try:
        meta = loader.load(path or settings.SCHEMA_PATH)
        return build_schema(meta, default_package=settings.DEFAULT_PACKAGE).resolve()
    except DaoGenError as e:
        logger.debug("Schema load failed", exc_info=True)
        typer.echo(f"❌ {e}")
        raise typer.Exit(code=1)

def _emit(renderer: SchemaRenderer, schema: Schema, out: Optional[str]) -> None:
    text = renderer.render(schema)
    if out is None:
        typer.echo(text)
        return
    Path(out).write_text(text, encoding="utf-8")
    typer.echo(f"✅ Written to {out}")

# ---------------------------
# Commands
# ---------------------------
@app.command(help="Validate a schema document and check that it resolves.")
def validate(path: Optional[str] = typer.Argument(None, help="Schema document (default: DAOGEN_SCHEMA_PATH)")):
    schema = _resolved_schema(path)
    typer.echo(f"✅ Schema v{schema.version} is valid ({len(schema.entities)} entities).")

@app.command(help="Print the resolved schema graph as JSON.")
def resolve(
    path: Optional[str] = typer.Argument(None, help="Schema document (default: DAOGEN_SCHEMA_PATH)"),
    out: Optional[str] = typer.Option(None, help="Output .json file path (default: stdout)"),
):
    _emit(JsonViewRenderer(), _resolved_schema(path), out)

@app.command(help="Export CREATE TABLE / CREATE INDEX DDL for the resolved schema.")
def export_ddl(
    path: Optional[str] = typer.Argument(None, help="Schema document (default: DAOGEN_SCHEMA_PATH)"),
    dialect: Optional[str] = typer.Option(None, help="Target dialect: sqlite | postgres | mssql"),
    out: Optional[str] = typer.Option(None, help="Output .sql file path (default: stdout)"),
):
    dialect = dialect or settings.DIALECT
    if dialect.lower() not in DIALECTS:
        typer.echo(f"❌ Unknown dialect. Use one of: {' | '.join(DIALECTS)}")
        raise typer.Exit(code=2)
    _emit(DDLRenderer(dialect), _resolved_schema(path), out)

if __name__ == "__main__":
    app()
