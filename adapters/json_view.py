# adapters/json_view.py
from __future__ import annotations

from daogen.schema import Schema

class JsonViewRenderer:
    """Resolved schema snapshot as JSON, the hand-off format for code templates."""
    def __init__(self, indent: int = 2) -> None:
        self.indent = indent

    def render(self, schema: Schema) -> str:
        return schema.export().model_dump_json(indent=self.indent)
