# (c) Copyright Datacraft, 2026
"""Relationship tuples storage and management."""
import logging
import threading
from pathlib import Path
from typing import Iterable

import yaml
from pydantic import BaseModel, ConfigDict, ValidationError

from authz_server.exceptions import ConfigLoadError

logger = logging.getLogger(__name__)

USER_PREFIX = 'user:'


def normalize_subject(subject: str) -> str:
	"""Strip a single leading ``user:`` prefix."""
	if subject.startswith(USER_PREFIX):
		return subject[len(USER_PREFIX):]
	return subject


class Relationship(BaseModel):
	"""
	Relationship tuple granting ``relation`` on ``resource`` to ``subject``.

	Format: resource#relation@subject
	Example: system:sys-001#owner@user:alice
	"""
	model_config = ConfigDict(frozen=True)

	resource: str
	relation: str
	subject: str

	def __str__(self):
		return f"{self.resource}#{self.relation}@{self.subject}"


class UserRelationship(BaseModel):
	"""Relation held by a user on a resource."""
	model_config = ConfigDict(frozen=True)

	resource: str
	relation: str


class RelationshipConfig(BaseModel):
	"""Layout of the relationships YAML file."""
	relationships: list[Relationship] = []


class RelationshipStore:
	"""
	In-memory store of relationship tuples.

	Duplicates are kept. Mutations only live as long as the process; a
	restart reverts to the relationships file. Every access goes through
	one lock and reads hand out copies.
	"""

	def __init__(self, relationships: Iterable[Relationship] = ()):
		self._lock = threading.Lock()
		self._relationships: list[Relationship] = list(relationships)

	@classmethod
	def load(cls, text: str) -> "RelationshipStore":
		"""
		Build a store from YAML text.

		Expected layout:
		```
		relationships:
		  - resource: system:sys-001
		    relation: owner
		    subject: user:alice
		```
		"""
		try:
			# BaseLoader keeps scalars as written: 00123 stays "00123", not 83
			data = yaml.load(text, Loader=yaml.BaseLoader)
		except yaml.YAMLError as exc:
			raise ConfigLoadError(f"Failed to parse YAML: {exc}") from exc

		if data is None:
			data = {}
		if not isinstance(data, dict):
			raise ConfigLoadError("Relationships config must be a mapping")
		if not data.get('relationships'):
			data = {**data, 'relationships': []}

		try:
			config = RelationshipConfig.model_validate(data)
		except ValidationError as exc:
			raise ConfigLoadError(f"Invalid relationships config: {exc}") from exc

		return cls(config.relationships)

	@classmethod
	def load_file(cls, path: str | Path) -> "RelationshipStore":
		"""Build a store from a YAML file."""
		try:
			text = Path(path).read_text(encoding='utf-8')
		except (OSError, UnicodeDecodeError) as exc:
			raise ConfigLoadError(f"Failed to read config file {path}: {exc}") from exc

		store = cls.load(text)
		logger.info(f"Loaded {len(store)} relationships from {path}")
		return store

	def list_relationships(self) -> list[Relationship]:
		"""All tuples in insertion order."""
		with self._lock:
			return list(self._relationships)

	def add(self, relationship: Relationship) -> bool:
		"""Append a tuple. Duplicates are not collapsed."""
		with self._lock:
			self._relationships.append(relationship)
		logger.info(f"Added relationship {relationship}")
		return True

	def remove(self, relationship: Relationship) -> bool:
		"""Remove the first exact match, if any."""
		with self._lock:
			for index, existing in enumerate(self._relationships):
				if existing == relationship:
					del self._relationships[index]
					break
			else:
				return False
		logger.info(f"Removed relationship {relationship}")
		return True

	def exists(self, relationship: Relationship) -> bool:
		with self._lock:
			return relationship in self._relationships

	def find(self, subject: str, resource: str) -> list[Relationship]:
		"""Tuples for the normalized subject on exactly this resource."""
		subject = normalize_subject(subject)
		with self._lock:
			return [
				rel for rel in self._relationships
				if rel.resource == resource and normalize_subject(rel.subject) == subject
			]

	def relationships_for_user(
		self,
		user: str,
		resource: str | None = None,
	) -> list[UserRelationship]:
		"""Relations held by a user, optionally limited to one resource."""
		user = normalize_subject(user)
		with self._lock:
			return [
				UserRelationship(resource=rel.resource, relation=rel.relation)
				for rel in self._relationships
				if normalize_subject(rel.subject) == user
				and (not resource or rel.resource == resource)
			]

	def __len__(self) -> int:
		with self._lock:
			return len(self._relationships)
