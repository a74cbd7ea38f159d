# (c) Copyright Datacraft, 2026
"""Relationship store tests."""
import threading

import pytest

from authz_server.exceptions import ConfigLoadError
from authz_server.rebac import (
	PermissionMap,
	Relationship,
	RelationshipChecker,
	RelationshipStore,
	UserRelationship,
	normalize_subject,
)


def rel(resource, relation, subject):
	return Relationship(resource=resource, relation=relation, subject=subject)


class TestNormalizeSubject:

	def test_strips_single_user_prefix(self):
		assert normalize_subject("user:alice") == "alice"
		assert normalize_subject("alice") == "alice"
		assert normalize_subject("user:user:alice") == "user:alice"

	def test_other_prefixes_kept(self):
		assert normalize_subject("group:eng") == "group:eng"


class TestLoad:
	"""Loading the relationships YAML."""

	def test_load_preserves_order(self, store):
		relationships = store.list_relationships()
		assert relationships[0] == rel("global:main", "admin", "user:root")
		assert relationships[-1] == rel("document:42", "owner", "alice")
		assert len(store) == 4

	def test_empty_document_is_empty_store(self):
		assert len(RelationshipStore.load("")) == 0
		assert len(RelationshipStore.load("relationships:\n")) == 0

	def test_invalid_yaml_fails(self):
		with pytest.raises(ConfigLoadError):
			RelationshipStore.load("relationships: [unclosed")

	def test_non_mapping_fails(self):
		with pytest.raises(ConfigLoadError):
			RelationshipStore.load("- resource: a\n")

	def test_missing_field_fails(self):
		with pytest.raises(ConfigLoadError):
			RelationshipStore.load(
				"relationships:\n  - resource: system:1\n    relation: owner\n"
			)

	def test_non_list_relationships_fails(self):
		with pytest.raises(ConfigLoadError):
			RelationshipStore.load("relationships: nope\n")

	def test_missing_file_fails(self, tmp_path):
		with pytest.raises(ConfigLoadError):
			RelationshipStore.load_file(tmp_path / "missing.yaml")

	def test_scalars_kept_verbatim(self):
		"""IDs that look like numbers, times or booleans stay as written."""
		store = RelationshipStore.load(
			"relationships:\n"
			"  - {resource: system:sys-001, relation: owner, subject: 00123}\n"
			"  - {resource: system:sys-001, relation: owner, subject: 12:30}\n"
			"  - {resource: system:sys-001, relation: owner, subject: 1e3}\n"
			"  - {resource: system:sys-001, relation: owner, subject: yes}\n"
			"  - {resource: document:007, relation: owner, subject: alice}\n"
		)
		assert [r.subject for r in store.list_relationships()] == [
			"00123", "12:30", "1e3", "yes", "alice",
		]
		assert store.exists(rel("document:007", "owner", "alice"))

	def test_numeric_looking_subject_is_checked_verbatim(self):
		store = RelationshipStore.load(
			"relationships:\n"
			"  - resource: system:sys-001\n"
			"    relation: owner\n"
			"    subject: user:00123\n"
		)
		checker = RelationshipChecker(store, PermissionMap({"owner": frozenset({"read"})}))
		assert checker.check("00123", "system:sys-001", "read")
		assert not checker.check("83", "system:sys-001", "read")
		assert not checker.check("123", "system:sys-001", "read")


class TestMutations:
	"""add / remove semantics."""

	def test_add_appends_duplicates(self):
		store = RelationshipStore()
		tuple_ = rel("system:1", "owner", "alice")
		assert store.add(tuple_) is True
		assert store.add(tuple_) is True
		assert store.list_relationships() == [tuple_, tuple_]

	def test_remove_after_add_once(self):
		store = RelationshipStore()
		tuple_ = rel("system:1", "owner", "alice")
		store.add(tuple_)
		assert store.remove(tuple_) is True
		assert store.remove(tuple_) is False
		assert len(store) == 0

	def test_remove_takes_one_copy(self):
		store = RelationshipStore()
		tuple_ = rel("system:1", "owner", "alice")
		store.add(tuple_)
		store.add(tuple_)
		assert store.remove(tuple_) is True
		assert store.list_relationships() == [tuple_]

	def test_remove_requires_exact_subject(self):
		"""Removal compares the literal subject, prefix included."""
		store = RelationshipStore([rel("system:1", "owner", "user:alice")])
		assert store.remove(rel("system:1", "owner", "alice")) is False
		assert len(store) == 1

	def test_remove_keeps_order_of_others(self):
		a = rel("system:1", "owner", "alice")
		b = rel("system:1", "staff", "bob")
		c = rel("system:2", "owner", "carol")
		store = RelationshipStore([a, b, c])
		store.remove(b)
		assert store.list_relationships() == [a, c]

	def test_list_is_a_snapshot(self):
		store = RelationshipStore([rel("system:1", "owner", "alice")])
		snapshot = store.list_relationships()
		store.add(rel("system:2", "owner", "alice"))
		assert len(snapshot) == 1

	def test_exists(self, store):
		assert store.exists(rel("document:42", "owner", "alice"))
		assert not store.exists(rel("document:42", "owner", "bob"))

	def test_concurrent_adds_are_not_lost(self):
		store = RelationshipStore()

		def worker(n):
			for i in range(200):
				store.add(rel(f"system:{n}", "owner", f"user{i}"))

		threads = [threading.Thread(target=worker, args=(n,)) for n in range(8)]
		for thread in threads:
			thread.start()
		for thread in threads:
			thread.join()

		assert len(store) == 8 * 200

	def test_concurrent_mutations_and_reads(self):
		"""Writers add and remove their own tuples while readers check and list."""
		base = [rel("system:base", "owner", "alice")]
		store = RelationshipStore(base)
		checker = RelationshipChecker(store, PermissionMap({"owner": frozenset({"read"})}))
		errors = []
		done = threading.Event()

		def writer(n):
			try:
				for i in range(300):
					tuple_ = rel(f"system:{n}-{i}", "owner", f"user:writer{n}")
					store.add(tuple_)
					if i % 2 == 0:
						assert store.remove(tuple_) is True
			except Exception as e:
				errors.append(e)

		def reader():
			try:
				while not done.is_set():
					assert checker.check("alice", "system:base", "read")
					checker.check("writer0", "system:0-1", "read")
					store.relationships_for_user("writer1")
					store.list_relationships()
			except Exception as e:
				errors.append(e)

		readers = [threading.Thread(target=reader) for _ in range(4)]
		writers = [threading.Thread(target=writer, args=(n,)) for n in range(4)]
		for thread in readers + writers:
			thread.start()
		for thread in writers:
			thread.join()
		done.set()
		for thread in readers:
			thread.join()

		assert errors == []
		assert len(store) == 1 + 4 * 150
		assert store.list_relationships()[0] == base[0]
		assert len(store.relationships_for_user("writer2")) == 150
		assert checker.check("writer3", "system:3-299", "read")
		assert not checker.check("writer3", "system:3-298", "read")


class TestRelationshipsForUser:

	def test_added_tuple_visible_both_prefix_forms(self):
		store = RelationshipStore()
		store.add(rel("system:1", "owner", "user:dave"))
		store.add(rel("system:2", "staff", "dave"))
		expected = [
			UserRelationship(resource="system:1", relation="owner"),
			UserRelationship(resource="system:2", relation="staff"),
		]
		assert store.relationships_for_user("dave") == expected
		assert store.relationships_for_user("user:dave") == expected

	def test_resource_filter(self, store):
		assert store.relationships_for_user("alice", "document:42") == [
			UserRelationship(resource="document:42", relation="owner"),
		]

	def test_unknown_user_empty(self, store):
		assert store.relationships_for_user("nobody") == []
