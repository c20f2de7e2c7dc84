from __future__ import annotations

from dataclasses import asdict, dataclass, field
from typing import Any, Dict, List, Mapping, Union

RecordValue = Union[str, int, float, bool, None, Dict[str, Any], List[Any]]
Record = Mapping[str, RecordValue]


def _prefixed(payload: Dict[str, Any], prefix: str) -> Dict[str, Any]:
    return {f"{prefix}{key}": value for key, value in payload.items()}


@dataclass
class ParsedName:
    full: str = ""
    first_name: str = ""
    middle_name: str = ""
    last_name: str = ""
    prefix: str = ""
    suffix: str = ""
    initials: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "full": self.full,
            "first_name": self.first_name,
            "middle_name": self.middle_name,
            "last_name": self.last_name,
            "prefix": self.prefix,
            "suffix": self.suffix,
            "initials": self.initials,
        }

    def to_prefixed_dict(self, prefix: str = "name_") -> Dict[str, str]:
        return _prefixed(self.to_dict(), prefix)


@dataclass
class ParsedPhoneNumber:
    original: str = ""
    e164: str = ""
    national: str = ""
    international: str = ""
    country_code: str = ""
    area_code: str = ""
    local_number: str = ""
    extension: str = ""
    is_valid: bool = False

    def to_dict(self) -> Dict[str, Any]:
        return {
            "original": self.original,
            "e164": self.e164,
            "national": self.national,
            "international": self.international,
            "country_code": self.country_code,
            "area_code": self.area_code,
            "local_number": self.local_number,
            "extension": self.extension,
            "is_valid": self.is_valid,
        }

    def to_prefixed_dict(self, prefix: str = "phone_") -> Dict[str, Any]:
        return _prefixed(self.to_dict(), prefix)


@dataclass
class ParsedAddress:
    original: str = ""
    street_number: str = ""
    street_name: str = ""
    unit: str = ""
    city: str = ""
    state: str = ""
    postal_code: str = ""
    country: str = ""
    street_address: str = ""

    def to_dict(self) -> Dict[str, str]:
        return {
            "original": self.original,
            "street_number": self.street_number,
            "street_name": self.street_name,
            "unit": self.unit,
            "city": self.city,
            "state": self.state,
            "postal_code": self.postal_code,
            "country": self.country,
            "street_address": self.street_address,
        }

    def to_prefixed_dict(self, prefix: str = "address_") -> Dict[str, str]:
        return _prefixed(self.to_dict(), prefix)


@dataclass
class ExtractedData:
    emails: List[str] = field(default_factory=list)
    phones: List[str] = field(default_factory=list)
    urls: List[str] = field(default_factory=list)
    dates: List[str] = field(default_factory=list)
    amounts: List[str] = field(default_factory=list)
    hashtags: List[str] = field(default_factory=list)
    mentions: List[str] = field(default_factory=list)
    numbers: List[str] = field(default_factory=list)

    def to_dict(self) -> Dict[str, List[str]]:
        return {key: list(values) for key, values in asdict(self).items()}

    def select(self, categories: List[str]) -> Dict[str, List[str]]:
        payload = self.to_dict()
        return {category: payload[category] for category in categories if category in payload}


@dataclass
class DuplicateGroup:
    keep_index: int
    duplicate_indices: List[int] = field(default_factory=list)
    similarity_scores: List[float] = field(default_factory=list)

    def add(self, index: int, score: float) -> None:
        self.duplicate_indices.append(index)
        self.similarity_scores.append(score)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "keep_index": self.keep_index,
            "duplicate_indices": list(self.duplicate_indices),
            "similarity_scores": list(self.similarity_scores),
        }


@dataclass
class DeduplicationResult:
    records: List[Dict[str, Any]]
    removed_count: int
    duplicate_groups: List[DuplicateGroup] = field(default_factory=list)

    @property
    def kept_count(self) -> int:
        return len(self.records)

    def to_dict(self) -> Dict[str, Any]:
        return {
            "records": [dict(record) for record in self.records],
            "removed_count": self.removed_count,
            "duplicate_groups": [group.to_dict() for group in self.duplicate_groups],
        }


__all__ = [
    "DeduplicationResult",
    "DuplicateGroup",
    "ExtractedData",
    "ParsedAddress",
    "ParsedName",
    "ParsedPhoneNumber",
    "Record",
    "RecordValue",
]
