"""
Operator filter translation.

Turns the declarative per-field filter used by list requests, e.g.

    {"age": {"gte": "5"}, "type": {"eq": "Cat"}}

(or its query-string form `age[gte]=5&type[eq]=Cat`) into a `FilterQuery`: a
mapping of field name to a predicate of typed comparison values. Stores
evaluate a FilterQuery as the conjunction of every field predicate.

Only the five comparison operators in `Operator` are honoured. Any other tag is
dropped silently, so `age[neq]=3` imposes no constraint.
"""

from __future__ import annotations

import math
import operator as _op
import re
from dataclasses import dataclass
from enum import Enum
from typing import Any, Callable, Dict, Iterable, Mapping, Optional, Tuple, Union

FILTERABLE_FIELDS: Tuple[str, ...] = ("age", "cost", "type", "name")
NUMERIC_FIELDS = frozenset({"age", "cost"})
TEXT_FIELDS = frozenset({"type", "name"})


class Operator(str, Enum):
    """Closed set of comparison operators accepted in filters."""

    EQ = "eq"
    GT = "gt"
    GTE = "gte"
    LT = "lt"
    LTE = "lte"

    @property
    def sql(self) -> str:
        return _SQL_TOKENS[self]

    def compare(self, left: Any, right: Any) -> bool:
        """Evaluate `left <op> right`."""
        return _PY_FUNCS[self](left, right)


_SQL_TOKENS: Dict[Operator, str] = {
    Operator.EQ: "=",
    Operator.GT: ">",
    Operator.GTE: ">=",
    Operator.LT: "<",
    Operator.LTE: "<=",
}

_PY_FUNCS: Dict[Operator, Callable[[Any, Any], bool]] = {
    Operator.EQ: _op.eq,
    Operator.GT: _op.gt,
    Operator.GTE: _op.ge,
    Operator.LT: _op.lt,
    Operator.LTE: _op.le,
}

_OPERATORS_BY_TAG: Dict[str, Operator] = {member.value: member for member in Operator}

_NUMBER = re.compile(r"\s*[+-]?([0-9]+\.?[0-9]*|\.[0-9]+)([eE][+-]?[0-9]+)?\s*")


@dataclass(frozen=True)
class NumericValue:
    value: Union[int, float]


@dataclass(frozen=True)
class TextValue:
    value: str


FilterValue = Union[NumericValue, TextValue]
FieldPredicate = Dict[Operator, FilterValue]
FilterQuery = Dict[str, FieldPredicate]
OperatorSet = Mapping[str, str]
FilterSpec = Mapping[str, Optional[OperatorSet]]


def coerce_value(raw: str) -> FilterValue:
    """
    Decide once whether a raw filter value is numeric.

    The whole string has to be an ASCII decimal literal; "5" becomes
    NumericValue(5), "2.5" NumericValue(2.5), while "5 cats", "", "nan",
    "1_000" and non-ASCII digits stay text.
    """
    if _NUMBER.fullmatch(raw) is None:
        return TextValue(raw)
    try:
        return NumericValue(int(raw))
    except ValueError:
        pass
    try:
        number = float(raw)
    except ValueError:
        return TextValue(raw)
    if not math.isfinite(number):
        return TextValue(raw)
    return NumericValue(number)


def translate_operator_set(ops: Optional[OperatorSet]) -> FieldPredicate:
    """
    Translate one field's operator set into a predicate.

    Parameters
    ----------
    ops : Mapping[str, str] | None
        Operator tag to raw string value, e.g. {"gte": "5"}.

    Returns
    -------
    FieldPredicate
        At most one entry per recognised operator; empty when nothing applies.
    """
    predicate: FieldPredicate = {}
    if not ops:
        return predicate
    for tag, raw in ops.items():
        operator = _OPERATORS_BY_TAG.get(tag)
        if operator is None or raw is None:
            continue
        predicate[operator] = coerce_value(str(raw))
    return predicate


def compose_filter(spec: Optional[FilterSpec]) -> FilterQuery:
    """
    Build the conjunctive query for the filterable fields.

    Fields whose predicate is empty are omitted entirely rather than stored as
    an empty mapping.
    """
    query: FilterQuery = {}
    if not spec:
        return query
    for field in FILTERABLE_FIELDS:
        predicate = translate_operator_set(spec.get(field))
        if predicate:
            query[field] = predicate
    return query


def value_matches_field(field: str, value: FilterValue) -> bool:
    """
    Whether a typed value can be compared against a field at all.

    A text value against a numeric column (or the reverse) never matches.
    """
    if field in NUMERIC_FIELDS:
        return isinstance(value, NumericValue)
    if field in TEXT_FIELDS:
        return isinstance(value, TextValue)
    return True


_PARAM_KEY = re.compile(r"^(?P<field>[A-Za-z_][A-Za-z0-9_]*)\[(?P<op>[A-Za-z]+)\]$")


def parse_filter_params(params: Iterable[Tuple[str, str]] | Mapping[str, str]) -> Dict[str, Dict[str, str]]:
    """
    Parse query-string style pairs such as ("type[eq]", "Bird") into a FilterSpec.

    Keys that are not of the form `field[op]` are ignored. Unknown operators are
    kept here and dropped later by `translate_operator_set`.
    """
    pairs = params.items() if isinstance(params, Mapping) else params
    spec: Dict[str, Dict[str, str]] = {}
    for key, value in pairs:
        match = _PARAM_KEY.match(key)
        if match is None:
            continue
        spec.setdefault(match.group("field"), {})[match.group("op")] = value
    return spec


__all__ = [
    "FILTERABLE_FIELDS",
    "FieldPredicate",
    "FilterQuery",
    "FilterSpec",
    "FilterValue",
    "NumericValue",
    "Operator",
    "OperatorSet",
    "TextValue",
    "coerce_value",
    "compose_filter",
    "parse_filter_params",
    "translate_operator_set",
    "value_matches_field",
]
