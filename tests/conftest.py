#!/usr/bin/env python3
"""Shared pytest fixtures for the json-lookahead test suite."""

import pytest
import json
import pathlib
import sys
from typing import Any, Dict

# Add parent directory to path for imports
sys.path.insert(0, str(pathlib.Path(__file__).parent.parent))

from tests.fixtures.generate_test_data import (
    generate_flat_json,
    generate_nested_json,
    generate_corrupted_json,
    generate_mixed_json,
    generate_unicode_json,
)


# ============================================================================
# Tokenizer backend
# ============================================================================

@pytest.fixture(autouse=True)
def python_backend(monkeypatch):
    """Pin the pure-python ijson backend so token timing is deterministic."""
    monkeypatch.setenv('LOOKAHEAD_BACKEND', 'python')
    monkeypatch.delenv('JSON_CHUNK_SIZE', raising=False)


# ============================================================================
# File Fixtures
# ============================================================================

@pytest.fixture
def small_json_file(tmp_path) -> pathlib.Path:
    """Create a small array of 100 flat records."""
    json_file = tmp_path / "small.json"
    generate_flat_json(100, str(json_file))
    return json_file


@pytest.fixture
def nested_json_file(tmp_path) -> pathlib.Path:
    """Create a document nested 10 levels deep."""
    json_file = tmp_path / "nested.json"
    generate_nested_json(10, 2, str(json_file))
    return json_file


@pytest.fixture
def corrupted_json_file(tmp_path) -> pathlib.Path:
    """Create an array of 50 records missing its closing bracket."""
    json_file = tmp_path / "corrupted.json"
    generate_corrupted_json(50, str(json_file))
    return json_file


@pytest.fixture
def mixed_json_file(tmp_path) -> pathlib.Path:
    json_file = tmp_path / "mixed.json"
    generate_mixed_json(60, str(json_file))
    return json_file


@pytest.fixture
def unicode_json_file(tmp_path) -> pathlib.Path:
    """Create a JSON file with Unicode characters."""
    json_file = tmp_path / "unicode.json"
    generate_unicode_json(100, str(json_file))
    return json_file


# ============================================================================
# FastAPI Test Client
# ============================================================================

@pytest.fixture
def fastapi_client():
    """Create a FastAPI test client for the inspection service."""
    from fastapi.testclient import TestClient
    from lookahead_service.app import app

    return TestClient(app)


# ============================================================================
# Test Data Fixtures
# ============================================================================

@pytest.fixture
def complex_json_structure() -> Dict[str, Any]:
    """Generate a complex JSON structure for testing."""
    return {
        "metadata": {
            "version": "1.0",
            "timestamp": "2024-01-01T00:00:00Z"
        },
        "data": {
            "users": [
                {
                    "id": i,
                    "profile": {
                        "name": f"User {i}",
                        "settings": {
                            "notifications": True,
                            "theme": "dark"
                        }
                    },
                    "activity": [
                        {"action": f"action_{j}", "timestamp": j}
                        for j in range(5)
                    ]
                }
                for i in range(10)
            ]
        }
    }


@pytest.fixture
def complex_json_file(tmp_path, complex_json_structure) -> pathlib.Path:
    json_file = tmp_path / "complex.json"
    json_file.write_text(json.dumps(complex_json_structure))
    return json_file


# ============================================================================
# Test Markers
# ============================================================================

def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line("markers", "slow: marks tests as slow")
    config.addinivalue_line("markers", "integration: marks integration tests")
    config.addinivalue_line("markers", "benchmark: marks benchmark tests")
