# core/ports.py
from __future__ import annotations
from pathlib import Path
from typing import Protocol

from daogen.meta_models import SchemaMeta
from daogen.schema import Schema

class SchemaLoader(Protocol):
    """Produces the declarative document a Schema is built from."""
    def load(self, path: str | Path) -> SchemaMeta: ...

class SchemaRenderer(Protocol):
    """
    Turns a resolved schema into text (DDL, JSON snapshot, ...).
    Implementations must refuse an unresolved schema.
    """
    def render(self, schema: Schema) -> str: ...
