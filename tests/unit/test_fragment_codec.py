"""
Unit tests for the Fragment map views and read_map.
"""
import pytest
from pydantic import BaseModel

from conceptdb import ErrorKind, Fragment, TableError, count_occurrences, read_map

from sample_records import Counter, Note, Tagged, Task


class Nested(BaseModel):
    name: str
    inner: Task


@pytest.mark.unit
class TestStringMap:
    """Tests for to_string_map and its inverse."""

    def test_round_trip_model(self, task):
        mapping = Fragment(task).to_string_map()

        assert mapping == {"title": "write report", "status": "open"}
        assert read_map(mapping, Task) == task

    def test_round_trip_dataclass(self):
        note = Note(subject="hello", body="world")

        mapping = Fragment(note).to_string_map()

        assert read_map(mapping, Note) == note

    def test_from_map_wraps_decoded_record(self, task):
        fragment = Fragment.from_map({"title": "write report", "status": "open"}, Task)

        assert fragment == Fragment(task)
        assert fragment.record_type is Task

    def test_numeric_field_rejected(self):
        with pytest.raises(TableError) as exc_info:
            Fragment(Counter(name="hits", count=3)).to_string_map()

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    def test_nested_object_rejected(self, task):
        with pytest.raises(TableError) as exc_info:
            Fragment(Nested(name="n", inner=task)).to_string_map()

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    @pytest.mark.parametrize("value", [True, None, ["a"]])
    def test_non_string_scalars_rejected(self, value):
        with pytest.raises(TableError) as exc_info:
            Fragment({"field": value}).to_string_map()

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    def test_read_map_shape_mismatch(self):
        """A string where the record expects an int is not coerced."""
        with pytest.raises(TableError) as exc_info:
            read_map({"name": "hits", "count": "3"}, Counter)

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    def test_read_map_missing_field(self):
        with pytest.raises(TableError) as exc_info:
            read_map({"title": "only title"}, Task)

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT


@pytest.mark.unit
class TestDerivedViews:
    """Tests for the optional map, list map and pairs."""

    def test_optional_map_marks_empty_as_absent(self):
        fragment = Fragment(Task(title="draft", status=""))

        assert fragment.to_optional_map() == {"title": "draft", "status": None}

    def test_optional_map_failure_is_hash_convert(self):
        with pytest.raises(TableError) as exc_info:
            Fragment(Counter(name="hits", count=3)).to_optional_map()

        assert exc_info.value.kind == ErrorKind.HASH_CONVERT

    def test_list_map(self):
        fragment = Fragment(Tagged(tags=["a", "b"], owners=[]))

        assert fragment.to_list_map() == {"tags": ["a", "b"], "owners": []}

    def test_list_map_rejects_plain_strings(self, task):
        with pytest.raises(TableError) as exc_info:
            Fragment(task).to_list_map()

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    def test_list_map_rejects_non_string_items(self):
        with pytest.raises(TableError) as exc_info:
            Fragment({"nums": [1, 2]}).to_list_map()

        assert exc_info.value.kind == ErrorKind.STRING_CONVERT

    def test_pairs_line_up(self, task):
        pairs = Fragment(task).pairs()

        assert pairs == [("title", "write report"), ("status", "open")]
        assert dict(pairs) == Fragment(task).to_string_map()

    def test_to_json(self, task):
        assert Fragment(task).to_json() == '{"title":"write report","status":"open"}'


@pytest.mark.unit
class TestCountOccurrences:

    def test_counts_trimmed_matches(self):
        assert count_occurrences(["a", " a ", "b", "a"], "a ") == 3

    def test_no_match(self):
        assert count_occurrences(["x", "y"], "z") == 0

    def test_stringifies_items(self):
        assert count_occurrences([1, "1", 2], "1") == 2
