"""Minimal scalar selection for a type.

When a fragment spread has to be replaced by plain fields (to break a
fragment cycle), the spread is swapped for a compact "summary" of the
type: its non-null scalars plus a few likely-identifying nullable ones.
"""

import re
from dataclasses import dataclass

from graphql import is_scalar_type

from .inspector import is_non_null_field, unwrap_type
from .parser import SchemaParser

FALLBACK_FIELDS = ["id"]
MAX_NULLABLE_FIELDS = 3

IDENTIFYING_NAME = re.compile(r"id|name|title|email|type", re.IGNORECASE)


@dataclass
class ScalarCandidate:
    name: str
    non_null: bool

    @property
    def score(self) -> float:
        score = 0.0
        if self.non_null:
            score += 2
        if IDENTIFYING_NAME.search(self.name):
            score += 1
        if len(self.name) <= 5:
            score += 0.5
        return score


def minimal_scalar_fields(type_name: str, schema: SchemaParser) -> list[str]:
    """Pick a deterministic, compact list of scalar field names for a type.

    All non-null scalars are kept, followed by the best three nullable ones.
    Ties keep declaration order. Unknown types and types without scalar
    fields fall back to ``["id"]``.
    """
    type_ = schema.get_type(type_name)
    if type_ is None or not hasattr(type_, "fields"):
        return list(FALLBACK_FIELDS)

    candidates = [
        ScalarCandidate(name=name, non_null=is_non_null_field(field.type))
        for name, field in type_.fields.items()
        if is_scalar_type(unwrap_type(field.type))
    ]
    candidates.sort(key=lambda c: c.score, reverse=True)

    non_null = [c.name for c in candidates if c.non_null]
    nullable = [c.name for c in candidates if not c.non_null]
    chosen = non_null + nullable[:MAX_NULLABLE_FIELDS]
    return chosen or list(FALLBACK_FIELDS)
