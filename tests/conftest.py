# ABOUTME: Shared pytest fixtures for mediadb tests.
# ABOUTME: Provides a wide-terminal CLI runner and saved-record JSON files in older shapes.

import json
from pathlib import Path

import pytest
from click.testing import CliRunner


@pytest.fixture
def fixtures_dir() -> Path:
    """Path to the test fixtures directory."""
    return Path(__file__).parent / "fixtures"


@pytest.fixture
def runner() -> CliRunner:
    """CliRunner with a wide terminal so Rich tables do not wrap cell text."""
    return CliRunner(env={"COLUMNS": "200", "MEDIADB_OMDB_KEY": None})


@pytest.fixture
def legacy_book_file(tmp_path: Path) -> Path:
    """A book saved by an older release: camelCase keys, user fields at the top level."""
    data = {
        "type": "book",
        "title": "Dune",
        "englishTitle": "Dune",
        "year": "1965",
        "dataSource": "OpenLibraryAPI",
        "id": "/works/OL893415W",
        "author": "Frank Herbert",
        "onlineRating": 4.3,
        "read": True,
        "personalRating": 9,
        "coverPath": "covers/dune.jpg",
    }
    filepath = tmp_path / "dune.json"
    filepath.write_text(json.dumps(data), encoding="utf-8")
    return filepath


@pytest.fixture
def untyped_record_file(tmp_path: Path) -> Path:
    """A saved record that never recorded its media type."""
    filepath = tmp_path / "untyped.json"
    filepath.write_text(json.dumps({"title": "Portal 2", "developers": ["Valve"]}), encoding="utf-8")
    return filepath
