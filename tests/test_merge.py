import copy

import pytest

from data_cleaner.errors import ValidationError
from data_cleaner.merge import (
    MergeEvaluator,
    deduplicate_fuzzy,
    find_fuzzy_duplicates,
    parse_field_list,
)


def _names(*values):
    return [{"name": value} for value in values]


def test_deduplicate_fuzzy_collapses_near_duplicate_names():
    records = _names("John Smith", "Jon Smith", "Jane Doe")
    result = deduplicate_fuzzy(records, ["name"], 0.8)

    assert result.records == [{"name": "John Smith"}, {"name": "Jane Doe"}]
    assert result.removed_count == 1
    assert result.kept_count == 2
    assert len(result.duplicate_groups) == 1
    group = result.duplicate_groups[0]
    assert group.keep_index == 0
    assert group.duplicate_indices == [1]
    assert group.similarity_scores == [pytest.approx(0.9)]


def test_deduplicate_does_not_mutate_input():
    records = [{"name": "John Smith", "tags": ["a"]}, {"name": "John Smith", "tags": ["b"]}]
    snapshot = copy.deepcopy(records)
    result = deduplicate_fuzzy(records, ["name"], 0.9)
    assert records == snapshot
    assert result.records == [snapshot[0]]
    assert result.records[0] is not records[0]


def test_grouping_is_greedy_not_transitive():
    # A~B and B~C at 0.8, but A vs C is only 0.6
    records = _names("abcdefghij", "abcdefghXY", "abcdefZZXY")
    groups = find_fuzzy_duplicates(records, ["name"], 0.8)
    assert [group.to_dict() for group in groups] == [
        {"keep_index": 0, "duplicate_indices": [1], "similarity_scores": [pytest.approx(0.8)]}
    ]
    result = deduplicate_fuzzy(records, ["name"], 0.8)
    assert [record["name"] for record in result.records] == ["abcdefghij", "abcdefZZXY"]


def test_every_index_belongs_to_at_most_one_group():
    records = _names("Alice", "Alicia", "Alice", "Bob", "Bobby", "Rob", "Alice")
    groups = find_fuzzy_duplicates(records, ["name"], 0.85)
    seen = set()
    for group in groups:
        members = [group.keep_index] + group.duplicate_indices
        assert len(group.duplicate_indices) == len(group.similarity_scores)
        assert group.keep_index not in group.duplicate_indices
        assert not seen.intersection(members)
        seen.update(members)


def test_average_skips_fields_empty_on_both_sides():
    evaluator = MergeEvaluator(["name", "email"])
    signals = evaluator.compute({"name": "Ann", "email": ""}, {"name": "Ann", "email": None})
    assert signals.fields_compared == 1
    assert signals.score == 1.0

    signals = evaluator.compute({"name": "Ann", "email": "ann@x.io"}, {"name": "Ann"})
    assert signals.fields_compared == 2
    assert signals.score == pytest.approx(0.5)


def test_all_fields_empty_scores_zero():
    evaluator = MergeEvaluator(["name"])
    assert evaluator.compute({}, {"name": None}).score == 0.0
    result = deduplicate_fuzzy([{"name": ""}, {"name": None}], ["name"], 0.5)
    assert result.removed_count == 0


def test_non_string_values_are_compared_as_text():
    result = deduplicate_fuzzy([{"zip": 2144}, {"zip": "2144"}], ["zip"], 1.0)
    assert result.removed_count == 1


def test_validation_errors_fail_fast():
    with pytest.raises(ValidationError, match="At least one field"):
        deduplicate_fuzzy(_names("a"), [], 0.8)
    with pytest.raises(ValidationError, match="At least one field"):
        deduplicate_fuzzy(_names("a"), ["  "], 0.8)
    with pytest.raises(ValidationError, match="between 0.0 and 1.0"):
        deduplicate_fuzzy(_names("a"), ["name"], 1.5)
    with pytest.raises(ValueError):
        find_fuzzy_duplicates(_names("a"), ["name"], -0.1)


def test_field_string_is_read_as_comma_separated_list():
    records = [{"na": "x", "name": "John Smith"}, {"na": "y", "name": "Jon Smith"}]
    result = deduplicate_fuzzy(records, "name", 0.8)
    assert result.removed_count == 1
    groups = find_fuzzy_duplicates(records, " name , na ", 0.1)
    assert [group.keep_index for group in groups] == [0]
    with pytest.raises(ValidationError, match="At least one field"):
        deduplicate_fuzzy(records, " , ", 0.8)


def test_parse_field_list():
    assert parse_field_list(" name, email ,,phone ") == ["name", "email", "phone"]
    assert parse_field_list("") == []
