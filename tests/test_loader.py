import json

import pytest

from adapters.json_loader import JsonDocumentLoader
from daogen.errors import DeclarationError
from daogen.property_types import PropertyType
from generate.builder import build_schema
from generate.loader import InvalidSchemaError, load_document, validate_document

def test_load_document(notes_schema_path):
    meta = load_document(notes_schema_path)
    assert meta.version == 2
    assert [e.className for e in meta.entities] == ["Note", "Tag"]
    assert meta.entities[0].properties[3].propertyType is PropertyType.ENUM

def test_loader_port(notes_schema_path):
    assert JsonDocumentLoader().load(notes_schema_path).defaultPackage == "app.models"

def test_missing_file(tmp_path):
    with pytest.raises(InvalidSchemaError):
        load_document(tmp_path / "nope.json")

def test_broken_json(tmp_path):
    p = tmp_path / "schema.json"
    p.write_text("{ not json", encoding="utf-8")
    with pytest.raises(InvalidSchemaError):
        load_document(p)

def test_unknown_property_type_rejected():
    doc = {"entities": [{"className": "Note", "properties": [{"propertyName": "x", "propertyType": "DECIMAL"}]}]}
    with pytest.raises(InvalidSchemaError) as exc:
        validate_document(doc)
    assert "entities/0/properties/0/propertyType" in str(exc.value)

def test_unknown_key_rejected():
    with pytest.raises(InvalidSchemaError):
        validate_document({"entities": [], "tables": []})

def test_non_object_document():
    with pytest.raises(InvalidSchemaError):
        validate_document([])

def test_local_schema_override(tmp_path):
    spec = tmp_path / "strict.json"
    spec.write_text(json.dumps({"type": "object", "required": ["entities", "version"]}), encoding="utf-8")
    with pytest.raises(InvalidSchemaError):
        validate_document({"$schema": str(spec), "entities": []})

def test_build_schema_from_document(notes_schema_path):
    schema = build_schema(load_document(notes_schema_path)).resolve()
    note = schema.get_entity("Note")
    tag = schema.get_entity("Tag")

    id_prop, text, comment, created, status = note.properties
    assert id_prop.column_name == "_id"
    assert id_prop.constraints == "PRIMARY KEY AUTOINCREMENT"
    assert text.target_type == "str"
    assert comment.target_type == "Optional[str]"
    assert status.target_type == "app.models.Note.Status"
    assert status.enum_values == {"DRAFT": 0, "PUBLISHED": 1}

    created_idx, composite = note.indexes
    assert created_idx.orders == ["DESC"] and created_idx.name is None
    assert composite.name == "IDX_NOTE_TEXT_STATUS" and composite.unique
    assert composite.members == [(text, "ASC"), (status, "DESC")]

    code, label = tag.properties
    assert tag.table_name == "tags"
    assert code.constraints == "PRIMARY KEY NOT NULL"
    assert label.column_type == "VARCHAR(40)"
    assert label.constraints == "UNIQUE"

def test_default_package_fallback():
    meta = validate_document({"entities": [{"className": "Note", "properties": [
        {"propertyName": "kind", "propertyType": "ENUM"}]}]})
    schema = build_schema(meta, default_package="fallback.pkg").resolve()
    assert schema.get_entity("Note").properties[0].target_type == "fallback.pkg.Note.Kind"

def test_document_autoincrement_on_string_fails():
    meta = validate_document({"entities": [{"className": "Note", "properties": [
        {"propertyName": "code", "propertyType": "STRING", "primaryKey": True, "autoincrement": True}]}]})
    with pytest.raises(DeclarationError):
        build_schema(meta)

def test_index_on_unknown_property_fails():
    meta = validate_document({"entities": [{"className": "Note", "properties": [],
        "indexes": [{"columns": [{"propertyName": "ghost"}]}]}]})
    with pytest.raises(DeclarationError):
        build_schema(meta)

def test_capitalized_property_names_resolve_in_indexes():
    meta = validate_document({"entities": [{"className": "Note",
        "properties": [{"propertyName": "Title", "propertyType": "STRING"}],
        "indexes": [{"name": "IDX_TITLE", "columns": [{"propertyName": "Title"}]}]}]})
    schema = build_schema(meta).resolve()
    note = schema.get_entity("Note")
    title = note.properties[0]
    assert title.property_name == "title"
    assert note.indexes[0].properties == [title]

def test_duplicate_property_in_document_fails():
    meta = validate_document({"entities": [{"className": "Note", "properties": [
        {"propertyName": "title", "propertyType": "STRING"},
        {"propertyName": "Title", "propertyType": "INT"}]}]})
    with pytest.raises(DeclarationError):
        build_schema(meta)
