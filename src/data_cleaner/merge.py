from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Mapping, Sequence, Set, Union

from .coercion import to_string
from .errors import ValidationError
from .models import DeduplicationResult, DuplicateGroup
from .similarity import fuzzy_match

logger = logging.getLogger(__name__)

DEFAULT_THRESHOLD = 0.8


@dataclass
class MergeSignals:
    score: float
    fields_compared: int


def validate_dedupe_settings(fields: Union[str, Sequence[str]], threshold: float) -> List[str]:
    if isinstance(fields, str):
        fields = parse_field_list(fields)
    cleaned = [field.strip() for field in fields or [] if field and field.strip()]
    if not cleaned:
        raise ValidationError("At least one field must be specified for duplicate checking")
    if threshold is None or not 0.0 <= threshold <= 1.0:
        raise ValidationError("Fuzzy threshold must be between 0.0 and 1.0")
    return cleaned


def parse_field_list(raw: str) -> List[str]:
    return [field.strip() for field in (raw or "").split(",") if field.strip()]


class MergeEvaluator:
    def __init__(self, fields: Sequence[str]):
        self.fields = list(fields)

    def compute(self, a: Mapping[str, Any], b: Mapping[str, Any]) -> MergeSignals:
        total = 0.0
        compared = 0
        for field in self.fields:
            value_a = to_string(a.get(field))
            value_b = to_string(b.get(field))
            if not value_a and not value_b:
                continue
            total += fuzzy_match(value_a, value_b)
            compared += 1
        score = total / compared if compared else 0.0
        return MergeSignals(score=score, fields_compared=compared)


def find_fuzzy_duplicates(
    records: Sequence[Mapping[str, Any]],
    fields: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> List[DuplicateGroup]:
    """
    Group near-duplicate records, keeping the first occurrence of each group.

    Each unclaimed record is compared with every later unclaimed record;
    matches join its group and are never compared again. Grouping is greedy
    rather than transitive: a record only joins a group when it is within
    ``threshold`` of that group's kept record.
    """
    fields = validate_dedupe_settings(fields, threshold)
    evaluator = MergeEvaluator(fields)
    groups: List[DuplicateGroup] = []
    processed: Set[int] = set()

    for i in range(len(records)):
        if i in processed:
            continue
        group = DuplicateGroup(keep_index=i)
        for j in range(i + 1, len(records)):
            if j in processed:
                continue
            signals = evaluator.compute(records[i], records[j])
            if signals.score >= threshold:
                group.add(j, signals.score)
                processed.add(j)
        if group.duplicate_indices:
            groups.append(group)

    logger.debug(
        "Compared %d record(s) on %s: %d duplicate group(s)", len(records), fields, len(groups)
    )
    return groups


def deduplicate_fuzzy(
    records: Sequence[Mapping[str, Any]],
    fields: Sequence[str],
    threshold: float = DEFAULT_THRESHOLD,
) -> DeduplicationResult:
    groups = find_fuzzy_duplicates(records, fields, threshold)
    removed: Set[int] = {index for group in groups for index in group.duplicate_indices}
    kept: List[Dict[str, Any]] = [
        dict(record) for index, record in enumerate(records) if index not in removed
    ]
    if removed:
        logger.info(
            "Removed %d fuzzy duplicate(s) from %d record(s)", len(removed), len(records)
        )
    return DeduplicationResult(records=kept, removed_count=len(removed), duplicate_groups=groups)


__all__ = [
    "DEFAULT_THRESHOLD",
    "MergeEvaluator",
    "MergeSignals",
    "deduplicate_fuzzy",
    "find_fuzzy_duplicates",
    "parse_field_list",
    "validate_dedupe_settings",
]
