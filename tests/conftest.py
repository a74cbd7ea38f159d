# (c) Copyright Datacraft, 2026
"""Shared fixtures: schema and relationship files on disk, app and client."""
import pytest
from fastapi.testclient import TestClient

from authz_server.config import Settings
from authz_server.main import create_app
from authz_server.rebac import (
	RelationshipChecker,
	RelationshipStore,
	build_permission_map,
	load_schema,
)


SCHEMA_TEXT = """
// test schema
definition user {}

definition global {
	relation admin: user
	permission full_access = admin
}

definition system {
	relation owner: user
	relation manager: user
	relation staff: user

	permission read = owner + manager + staff
	permission write = owner + manager
	permission delete = owner
}

definition document {
	relation owner: user
	permission delete = owner
}
"""

RELATIONSHIPS_TEXT = """
relationships:
  - resource: global:main
    relation: admin
    subject: user:root
  - resource: system:sys-001
    relation: owner
    subject: user:alice
  - resource: system:sys-001
    relation: staff
    subject: carol
  - resource: document:42
    relation: owner
    subject: alice
"""


@pytest.fixture
def zed_schema():
	return load_schema(SCHEMA_TEXT)


@pytest.fixture
def permission_map(zed_schema):
	return build_permission_map(zed_schema)


@pytest.fixture
def store() -> RelationshipStore:
	return RelationshipStore.load(RELATIONSHIPS_TEXT)


@pytest.fixture
def checker(store, permission_map) -> RelationshipChecker:
	return RelationshipChecker(store, permission_map)


@pytest.fixture
def settings(tmp_path) -> Settings:
	schema_path = tmp_path / "schema.zed"
	schema_path.write_text(SCHEMA_TEXT)
	relationships_path = tmp_path / "relationships.yaml"
	relationships_path.write_text(RELATIONSHIPS_TEXT)
	return Settings(
		schema_path=str(schema_path),
		relationships_path=str(relationships_path),
		service_name="test-authz",
	)


@pytest.fixture
def client(settings) -> TestClient:
	return TestClient(create_app(settings))
