"""Unit tests for schema discovery."""

from reldoc.codec.schema import discover_schema


class TestDiscoverSchema:
    """Tests for discover_schema()."""

    def test_splits_scalars_and_children(self, customers):
        schema = discover_schema(customers[0])

        assert schema.scalar_keys == ["id", "name", "address.city", "address.zip"]
        assert schema.child_keys == ["orders", "tags"]

    def test_empty_child_collection_is_still_a_child_key(self):
        schema = discover_schema({"id": 1, "orders": []})

        assert schema.scalar_keys == ["id"]
        assert schema.child_keys == ["orders"]

    def test_nested_collections_are_not_child_keys(self):
        schema = discover_schema({"id": 1, "meta": {"history": [1, 2]}})

        assert schema.scalar_keys == ["id"]
        assert schema.child_keys == []
