# (c) Copyright Datacraft, 2026
"""Relation to permission mapping derived from the schema."""
import logging
from typing import Protocol

from .definitions import Schema

logger = logging.getLogger(__name__)


class PermissionResolver(Protocol):
	"""Answers which permissions a relation grants."""

	def permissions_for(self, relation: str) -> frozenset[str]:
		...

	def grants(self, relation: str, permission: str) -> bool:
		...


class PermissionMap:
	"""
	Flat mapping from relation name to the permissions it grants.

	Relation names are not qualified by definition: a relation called
	``owner`` grants the union of permissions mentioning ``owner`` in any
	definition.
	"""

	def __init__(self, mapping: dict[str, frozenset[str]] | None = None):
		self._mapping: dict[str, frozenset[str]] = dict(mapping or {})

	def permissions_for(self, relation: str) -> frozenset[str]:
		return self._mapping.get(relation, frozenset())

	def grants(self, relation: str, permission: str) -> bool:
		return permission in self.permissions_for(relation)

	def __len__(self) -> int:
		return len(self._mapping)

	def __contains__(self, relation: str) -> bool:
		return relation in self._mapping

	def to_dict(self) -> dict[str, list[str]]:
		return {
			relation: sorted(permissions)
			for relation, permissions in self._mapping.items()
		}


def build_permission_map(schema: Schema) -> PermissionMap:
	"""
	Build the relation -> permissions map.

	A permission is granted by a relation when the relation name occurs
	anywhere in the permission expression of the same definition. The
	expression is not evaluated, so ``manager`` also matches
	``managers_extended``.
	"""
	collected: dict[str, set[str]] = {}

	for definition in schema.definitions.values():
		for relation_name in definition.relations:
			for permission_name, expression in definition.permissions.items():
				if relation_name in expression:
					collected.setdefault(relation_name, set()).add(permission_name)

	permission_map = PermissionMap({
		relation: frozenset(permissions)
		for relation, permissions in collected.items()
	})

	logger.info(f"Built permission map from Zed schema: {len(permission_map)} relations")
	for relation, permissions in permission_map.to_dict().items():
		logger.debug(f"  - {relation}: {permissions}")

	return permission_map
