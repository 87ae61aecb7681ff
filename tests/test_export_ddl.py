import json
import sys
from pathlib import Path
from subprocess import PIPE, run

import pytest
from sqlalchemy import create_engine, inspect

from adapters.json_view import JsonViewRenderer
from adapters.sqlalchemy_tables import DDLRenderer, RawColumnType, build_metadata
from daogen.errors import ResolutionStateError
from daogen.schema import Schema
from generate.builder import build_schema
from generate.loader import load_document

ROOT = Path(__file__).resolve().parents[1]

@pytest.fixture
def schema(notes_schema_path):
    return build_schema(load_document(notes_schema_path)).resolve()

def _cli(*args):
    cmd = [sys.executable, "-m", "generate.cli", *args]
    return run(cmd, stdout=PIPE, stderr=PIPE, text=True, cwd=ROOT)

# ---- adapters --------------------------------------------------------------------

def test_metadata_tables_and_indexes(schema):
    md = build_metadata(schema)
    assert list(md.tables) == ["NOTE", "tags"]

    note = md.tables["NOTE"]
    assert [c.name for c in note.columns] == ["_id", "TEXT", "COMMENT", "CREATED_AT", "STATUS"]
    assert note.c["_id"].primary_key
    assert not note.c["TEXT"].nullable
    assert note.c["COMMENT"].nullable
    assert note.c["STATUS"].info["targetType"] == "app.models.Note.Status"
    assert {i.name for i in note.indexes} == {"IDX_NOTE_CREATED_AT_DESC", "IDX_NOTE_TEXT_STATUS"}

    tags = md.tables["tags"]
    assert not tags.c["CODE"].nullable
    assert isinstance(tags.c["LABEL"].type, RawColumnType)

def test_metadata_requires_resolved_schema(notes_schema_path):
    with pytest.raises(ResolutionStateError):
        build_metadata(build_schema(load_document(notes_schema_path)))

def test_sqlite_ddl(schema):
    ddl = DDLRenderer("sqlite").render(schema)
    assert "CREATE TABLE" in ddl
    assert "AUTOINCREMENT" in ddl
    assert "VARCHAR(40)" in ddl
    assert "CREATE UNIQUE INDEX" in ddl
    assert ddl.index("CREATE TABLE \"NOTE\"") < ddl.index("CREATE TABLE tags")

def test_sqlite_ddl_executes(schema, tmp_path):
    ddl = DDLRenderer("sqlite").render(schema)
    engine = create_engine(f"sqlite:///{tmp_path / 'notes.db'}")
    with engine.begin() as conn:
        for stmt in filter(None, (s.strip() for s in ddl.split(";"))):
            conn.exec_driver_sql(stmt)
    insp = inspect(engine)
    assert set(insp.get_table_names()) == {"NOTE", "tags"}
    assert {i["name"] for i in insp.get_indexes("NOTE")} == {"IDX_NOTE_CREATED_AT_DESC", "IDX_NOTE_TEXT_STATUS"}

def test_unknown_dialect():
    with pytest.raises(ValueError):
        DDLRenderer("oracle")

def test_json_view_renderer(schema):
    data = json.loads(JsonViewRenderer().render(schema))
    assert data["version"] == 2
    assert data["entities"][1]["tableName"] == "tags"

# ---- CLI -----------------------------------------------------------------------------

def test_cli_validate(notes_schema_path):
    proc = _cli("validate", str(notes_schema_path))
    assert proc.returncode == 0, f"CLI failed: {proc.stderr}"
    assert "2 entities" in proc.stdout

def test_cli_validate_rejects_bad_document(tmp_path):
    bad = tmp_path / "bad.json"
    bad.write_text('{"entities": [{"className": "Note", "properties": [{"propertyName": "x", "propertyType": "MONEY"}]}]}', encoding="utf-8")
    proc = _cli("validate", str(bad))
    assert proc.returncode == 1
    assert "Schema validation failed" in proc.stdout

def test_cli_resolve_writes_json(notes_schema_path, tmp_path):
    out = tmp_path / "resolved.json"
    proc = _cli("resolve", str(notes_schema_path), f"--out={out}")
    assert proc.returncode == 0, f"CLI failed: {proc.stderr}"
    data = json.loads(out.read_text(encoding="utf-8"))
    assert data["entities"][0]["properties"][0]["constraints"] == "PRIMARY KEY AUTOINCREMENT"

def test_export_ddl_generates_file(notes_schema_path, tmp_path):
    out = tmp_path / "schema.sql"
    proc = _cli("export-ddl", str(notes_schema_path), "--dialect=sqlite", f"--out={out}")
    assert proc.returncode == 0, f"CLI failed: {proc.stderr}"
    assert out.exists(), "schema.sql not created"
    content = out.read_text(encoding="utf-8")
    assert "CREATE TABLE" in content

def test_export_ddl_unknown_dialect(notes_schema_path):
    proc = _cli("export-ddl", str(notes_schema_path), "--dialect=oracle")
    assert proc.returncode == 2

# ---- declaration order / pk sort flags --------------------------------------------------

def test_indexes_rendered_in_declaration_order():
    s = Schema()
    item = s.add_entity("Item")
    item.add_id_property()
    item.add_string_property("zeta").index_asc("Z_IDX")
    item.add_string_property("alpha").index_asc("A_IDX")
    s.resolve()

    table = build_metadata(s).tables["ITEM"]
    assert [i.name for i in table.info["indexes"]] == ["Z_IDX", "A_IDX"]
    ddl = DDLRenderer("sqlite").render(s)
    assert ddl.index("Z_IDX") < ddl.index("A_IDX")

def test_pk_sort_order_kept_in_column_info_only():
    s = Schema()
    s.add_entity("Event").add_long_property("id").primary_key_desc()
    s.resolve()

    column = build_metadata(s).tables["EVENT"].c["ID"]
    assert column.info["constraints"] == "PRIMARY KEY DESC"
    ddl = DDLRenderer("sqlite").render(s)
    assert "PRIMARY KEY" in ddl
    assert "DESC" not in ddl
