# (c) Copyright Datacraft, 2026
"""Relationship-Based Access Control (ReBAC) - Zed schema driven module."""
from .definitions import Definition, Schema, SchemaParser, load_schema, load_schema_file
from .permissions import PermissionMap, PermissionResolver, build_permission_map
from .tuples import Relationship, RelationshipStore, UserRelationship, normalize_subject
from .checker import AuthDecision, RelationshipChecker

__all__ = [
	'Definition',
	'Schema',
	'SchemaParser',
	'load_schema',
	'load_schema_file',
	'PermissionMap',
	'PermissionResolver',
	'build_permission_map',
	'Relationship',
	'RelationshipStore',
	'UserRelationship',
	'normalize_subject',
	'AuthDecision',
	'RelationshipChecker',
]
