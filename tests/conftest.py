"""
Pytest configuration and shared fixtures for the entity_codegen test suite.
"""

import json
from pathlib import Path

import pytest

from entity_codegen.codegen.core.config import GeneratorConfig
from entity_codegen.codegen.core.schema import Entity, Project
from entity_codegen.codegen.languages.go import create_go_generator
from entity_codegen.codegen.service import GeneratorService
from entity_codegen.codegen.store import InMemoryEntityStore


USER_FIELDS = [
    {"name": "name", "type": "string", "required": True, "length": 100},
    {"name": "email", "type": "string", "required": True, "length": 255},
]


@pytest.fixture(scope="session")
def project_root():
    """Return the project root directory."""
    return Path(__file__).parent.parent


@pytest.fixture
def user_fields():
    """Field list of the reference User entity."""
    return [dict(field) for field in USER_FIELDS]


@pytest.fixture
def project():
    return Project(id=1, name="Acme Billing", description="Billing backend")


@pytest.fixture
def user_entity(user_fields):
    """User entity with its fields stored as JSON text, as the API returns them."""
    return Entity(
        id=1,
        project_id=1,
        name="User",
        table_name="users",
        fields=json.dumps(user_fields),
        description="Application user",
    )


@pytest.fixture
def make_entity():
    """Factory for entities with a custom field list."""

    def _make(name="Order", table_name="orders", fields=None, entity_id=2, project_id=1):
        return Entity(
            id=entity_id,
            project_id=project_id,
            name=name,
            table_name=table_name,
            fields=fields if fields is not None else [{"name": "total", "type": "decimal", "required": True}],
        )

    return _make


@pytest.fixture
def store(project, user_entity):
    store = InMemoryEntityStore()
    store.add_project(project)
    store.add_entity(user_entity)
    return store


@pytest.fixture
def generator():
    """Go generator with default configuration."""
    return create_go_generator(GeneratorConfig(module_path="github.com/acme/billing"))


@pytest.fixture
def service(store, generator):
    return GeneratorService(store, generator)


@pytest.fixture
def user_context(generator, project, user_entity):
    return generator.prepare_context(project, user_entity)


@pytest.fixture
def entity_document(user_fields):
    """Entity document in the shape exported by the entity management API."""
    return {
        "project": {"id": 7, "name": "Acme Billing"},
        "entities": [
            {"name": "User", "table_name": "users", "fields": user_fields},
            {
                "name": "InvoiceLine",
                "table_name": "invoice_lines",
                "fields": [
                    {"name": "amount", "type": "decimal", "required": True},
                    {"name": "note", "type": "text"},
                ],
            },
        ],
    }


@pytest.fixture
def document_file(tmp_path, entity_document):
    """Entity document written to a temporary JSON file."""
    path = tmp_path / "entities.json"
    path.write_text(json.dumps(entity_document), encoding="utf-8")
    return path
