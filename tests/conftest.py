from pathlib import Path

import pytest

DATA = Path(__file__).parent / "data"

@pytest.fixture
def notes_schema_path() -> Path:
    return DATA / "notes.schema.json"
