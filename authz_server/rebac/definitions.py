# (c) Copyright Datacraft, 2026
"""Zed schema definitions and line based schema parser."""
import logging
import re
from dataclasses import dataclass, field
from pathlib import Path

from authz_server.exceptions import SchemaLoadError

logger = logging.getLogger(__name__)


@dataclass
class Definition:
	"""
	Object type declared in the schema.

	Relations map a relation name to the subject type it accepts,
	permissions map a permission name to its raw expression, e.g.
	``owner + manager``.
	"""
	name: str
	relations: dict[str, str] = field(default_factory=dict)
	permissions: dict[str, str] = field(default_factory=dict)


@dataclass
class Schema:
	"""All definitions of a schema, keyed by definition name."""
	definitions: dict[str, Definition] = field(default_factory=dict)

	def get_definition(self, name: str) -> Definition | None:
		return self.definitions.get(name)

	def __len__(self) -> int:
		return len(self.definitions)

	def to_dict(self) -> dict:
		return {
			name: {
				'relations': dict(definition.relations),
				'permissions': dict(definition.permissions),
			}
			for name, definition in self.definitions.items()
		}


class SchemaParser:
	"""
	Parser for the subset of the Zed schema language used here.

	Schema format:
	```
	definition system {
		relation owner: user
		relation manager: user
		permission read = owner + manager
	}
	```

	Only headers, relation and permission declarations and closing
	braces are recognized. Permission expressions are kept verbatim.
	"""

	COMMENT_PREFIXES = ('//', '/*', '*')

	DEFINITION_PATTERN = re.compile(r'^definition\s+(\w+)\s*\{')
	RELATION_PATTERN = re.compile(r'^\s*relation\s+(\w+):\s*(\w+)')
	PERMISSION_PATTERN = re.compile(r'^\s*permission\s+(\w+)\s*=\s*(.+)')

	def parse(self, text: str) -> Schema:
		"""Parse schema text into a Schema. Never fails."""
		schema = Schema()
		current: Definition | None = None

		for raw_line in text.splitlines():
			line = raw_line.strip()

			if not line or line.startswith(self.COMMENT_PREFIXES):
				continue

			match = self.DEFINITION_PATTERN.match(line)
			if match:
				current = Definition(name=match.group(1))
				schema.definitions[current.name] = current
				# definition user {}
				if line.endswith('}'):
					current = None
				continue

			if current is not None:
				match = self.RELATION_PATTERN.match(line)
				if match:
					current.relations[match.group(1)] = match.group(2)
					continue

				match = self.PERMISSION_PATTERN.match(line)
				if match:
					current.permissions[match.group(1)] = match.group(2).strip()
					continue

			if line == '}':
				current = None

		return schema


def load_schema(text: str) -> Schema:
	"""Parse schema text, failing when no definition is recognized."""
	schema = SchemaParser().parse(text)

	if not schema.definitions:
		raise SchemaLoadError("No definitions found in schema")

	logger.info(f"Parsed Zed schema: {len(schema)} definitions loaded")
	for name, definition in schema.definitions.items():
		logger.debug(
			f"  - {name}: {len(definition.relations)} relations, "
			f"{len(definition.permissions)} permissions"
		)

	return schema


def load_schema_file(path: str | Path) -> Schema:
	"""Read and parse a schema file."""
	try:
		text = Path(path).read_text(encoding='utf-8')
	except (OSError, UnicodeDecodeError) as exc:
		raise SchemaLoadError(f"Failed to open schema file {path}: {exc}") from exc

	return load_schema(text)
