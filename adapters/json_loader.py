# adapters/json_loader.py
from __future__ import annotations
from pathlib import Path

from daogen.meta_models import SchemaMeta
from generate.loader import load_document

class JsonDocumentLoader:
    """Loads a JSON schema document validated against modelSchema.json."""
    def load(self, path: str | Path) -> SchemaMeta:
        return load_document(path)
