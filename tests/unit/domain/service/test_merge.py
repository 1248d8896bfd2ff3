"""Unit tests for metadata merge."""

from linkage.domain.service import merge_metadata, merge_records
from linkage.domain.value import document_from_json
from tests.conftest import make_user


def _merge(primary: dict, secondary: dict) -> dict:
    return merge_metadata(
        document_from_json(primary), document_from_json(secondary)
    ).to_json()


class TestMergeMetadata:
    """Tests for merge_metadata."""

    def test_takes_secondary_value_for_missing_keys(self):
        """Keys only in secondary are copied over."""
        assert _merge({"lang": "en"}, {"theme": "dark"}) == {
            "lang": "en",
            "theme": "dark",
        }

    def test_primary_scalar_wins(self):
        """Primary scalars are never overwritten."""
        assert _merge({"lang": "en"}, {"lang": "fr"}) == {"lang": "en"}

    def test_primary_null_still_wins(self):
        """A null in primary is a value, not an absence."""
        assert _merge({"lang": None}, {"lang": "fr"}) == {"lang": None}

    def test_sequences_concatenate_secondary_first(self):
        """Shared sequences are secondary followed by primary."""
        assert _merge({"tags": ["a", "b"]}, {"tags": ["c"]}) == {
            "tags": ["c", "a", "b"]
        }

    def test_sequences_keep_duplicates(self):
        """Concatenation does not deduplicate."""
        assert _merge({"tags": ["x"]}, {"tags": ["x"]}) == {"tags": ["x", "x"]}

    def test_nested_mappings_merge_recursively(self):
        """Shared mappings are merged with the same rules."""
        primary = {"prefs": {"theme": "light", "langs": ["en"]}}
        secondary = {"prefs": {"theme": "dark", "langs": ["fr"], "tz": "UTC"}}

        assert _merge(primary, secondary) == {
            "prefs": {"theme": "light", "langs": ["fr", "en"], "tz": "UTC"}
        }

    def test_scalar_versus_sequence_primary_wins(self):
        """Different kinds resolve to primary's value."""
        assert _merge({"tags": "x"}, {"tags": ["y"]}) == {"tags": "x"}
        assert _merge({"tags": ["y"]}, {"tags": "x"}) == {"tags": ["y"]}

    def test_mapping_versus_scalar_primary_wins(self):
        """A mapping against a scalar keeps primary's value."""
        assert _merge({"prefs": 1}, {"prefs": {"theme": "dark"}}) == {"prefs": 1}

    def test_empty_documents(self):
        """Merging with an empty document returns the other side."""
        assert _merge({}, {}) == {}
        assert _merge({"a": 1}, {}) == {"a": 1}
        assert _merge({}, {"a": [1]}) == {"a": [1]}

    def test_preserves_every_primary_key_and_scalar(self):
        """Every primary key survives with its scalar unchanged."""
        primary = {"a": 1, "b": "two", "c": True, "d": None, "e": 2.5}
        secondary = {"a": 9, "b": ["x"], "c": {"k": 1}, "f": "new"}

        merged = _merge(primary, secondary)

        for key, value in primary.items():
            assert merged[key] == value
        assert merged["f"] == "new"

    def test_key_order_primary_then_secondary_only(self):
        """Primary keys come first, then secondary-only keys."""
        merged = _merge({"b": 1, "a": 2}, {"z": 0, "a": 5, "c": 3})

        assert list(merged) == ["b", "a", "z", "c"]

    def test_does_not_modify_inputs(self):
        """Merge is pure."""
        primary = document_from_json({"tags": ["a"], "prefs": {"x": 1}})
        secondary = document_from_json({"tags": ["b"], "prefs": {"y": 2}})
        primary_before = primary.to_json()
        secondary_before = secondary.to_json()

        merge_metadata(primary, secondary)

        assert primary.to_json() == primary_before
        assert secondary.to_json() == secondary_before


class TestMergeRecords:
    """Tests for merge_records."""

    def test_merges_both_documents_independently(self):
        """User and app metadata are merged separately."""
        primary = make_user(
            "auth0|1",
            user_metadata={"lang": "en"},
            app_metadata={"plan": "pro", "roles": ["admin"]},
        )
        secondary = make_user(
            "google-oauth2|2",
            user_metadata={"lang": "fr", "tags": ["x"]},
            app_metadata={"plan": "free", "roles": ["viewer"]},
        )

        result = merge_records(primary, secondary)

        assert result.merged_user_metadata.to_json() == {
            "lang": "en",
            "tags": ["x"],
        }
        assert result.merged_app_metadata.to_json() == {
            "plan": "pro",
            "roles": ["viewer", "admin"],
        }
