# Copyright (c) Nex-AGI. All rights reserved.
#
# Licensed under the Apache License, Version 2.0 (the "License");
# you may not use this file except in compliance with the License.
# You may obtain a copy of the License at
#
#     http://www.apache.org/licenses/LICENSE-2.0
#
# Unless required by applicable law or agreed to in writing, software
# distributed under the License is distributed on an "AS IS" BASIS,
# WITHOUT WARRANTIES OR CONDITIONS OF ANY KIND, either express or implied.
# See the License for the specific language governing permissions and
# limitations under the License.

"""Query DSL models.

Serializable description of a REST list query: sort order, bracket-path
filters (with ``$and``/``$or``/``$not`` groups), pagination and relation
population. Instances are validated by pydantic, so settings can be built
either from the models directly or from plain dicts.
"""

from __future__ import annotations

from collections.abc import Mapping
from enum import Enum
from typing import Annotated, Any

from pydantic import BaseModel, ConfigDict, Discriminator, StrictFloat, StrictInt, StrictStr, Tag, field_validator


class SortOrder(str, Enum):
    """Sort direction"""

    ASC = "asc"
    DESC = "desc"


class ComparisonOperator(str, Enum):
    """Comparison operators, valued by their wire token"""

    EQ = "$eq"  # equal
    GT = "$gt"  # greater than
    GTE = "$gte"  # greater than or equal
    IN = "$in"  # contained in list
    LT = "$lt"  # less than
    LTE = "$lte"  # less than or equal
    NULL = "$null"  # is null
    LIKE = "$like"  # pattern match


class LogicalOperator(str, Enum):
    """Logical grouping operators"""

    AND = "$and"
    OR = "$or"
    NOT = "$not"


# List items are strict: booleans and numeric strings are not coerced.
FilterValue = str | int | float | bool | None | list[StrictStr | StrictInt | StrictFloat]

_LOGICAL_TOKENS = frozenset(op.value for op in LogicalOperator)


def _operator_token(value: Any) -> Any:
    """Prefix bare operator names (``"eq"``) with ``$``."""
    if isinstance(value, Enum):
        return value.value
    if isinstance(value, str) and not value.startswith("$"):
        return f"${value}"
    return value


class QueryModel(BaseModel):
    """Base class for query DSL models"""

    model_config = ConfigDict(extra="forbid", frozen=True)


class Sort(QueryModel):
    """Single sort criterion"""

    field: str
    order: SortOrder = SortOrder.ASC

    @classmethod
    def asc(cls, field: str) -> Sort:
        return cls(field=field, order=SortOrder.ASC)

    @classmethod
    def desc(cls, field: str) -> Sort:
        return cls(field=field, order=SortOrder.DESC)


class Filter(QueryModel):
    """Single field filter.

    ``field`` may be a dotted path (``"user.profile.email"``) that walks
    nested relations. When ``relation`` is set it is emitted as an extra
    leading path segment and ``operator`` is not emitted.
    """

    field: str
    operator: ComparisonOperator | None = None
    value: FilterValue
    relation: str | None = None

    @field_validator("operator", mode="before")
    @classmethod
    def _coerce_operator(cls, value: Any) -> Any:
        return _operator_token(value)

    @classmethod
    def eq(cls, field: str, value: FilterValue, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.EQ, value=value, relation=relation)

    @classmethod
    def gt(cls, field: str, value: str | int | float, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.GT, value=value, relation=relation)

    @classmethod
    def gte(cls, field: str, value: str | int | float, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.GTE, value=value, relation=relation)

    @classmethod
    def lt(cls, field: str, value: str | int | float, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.LT, value=value, relation=relation)

    @classmethod
    def lte(cls, field: str, value: str | int | float, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.LTE, value=value, relation=relation)

    @classmethod
    def like(cls, field: str, value: str, relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.LIKE, value=value, relation=relation)

    @classmethod
    def in_(cls, field: str, value: list[str | int | float], relation: str | None = None) -> Filter:
        return cls(field=field, operator=ComparisonOperator.IN, value=value, relation=relation)

    @classmethod
    def null(cls, field: str, value: bool = True, relation: str | None = None) -> Filter:
        """Match records where ``field`` is (or, with ``value=False``, is not) null."""
        return cls(field=field, operator=ComparisonOperator.NULL, value=value, relation=relation)


class LogicalFilter(QueryModel):
    """Group of plain filters combined by a logical operator.

    Groups are flat: children are always plain ``Filter`` objects.
    """

    operator: LogicalOperator
    filters: list[Filter]

    @field_validator("operator", mode="before")
    @classmethod
    def _coerce_operator(cls, value: Any) -> Any:
        return _operator_token(value)

    @classmethod
    def and_(cls, *filters: Filter) -> LogicalFilter:
        return cls(operator=LogicalOperator.AND, filters=list(filters))

    @classmethod
    def or_(cls, *filters: Filter) -> LogicalFilter:
        return cls(operator=LogicalOperator.OR, filters=list(filters))

    @classmethod
    def not_(cls, *filters: Filter) -> LogicalFilter:
        return cls(operator=LogicalOperator.NOT, filters=list(filters))


def _filter_kind(value: Any) -> str:
    """Tag a raw ``filters`` element as ``"logical"`` or ``"plain"``.

    An element is a logical group iff its ``operator`` belongs to the logical
    vocabulary. Comparison and logical tokens never overlap.
    """
    if isinstance(value, Mapping):
        operator = value.get("operator")
    else:
        operator = getattr(value, "operator", None)
    token = _operator_token(operator)
    if isinstance(token, str) and token in _LOGICAL_TOKENS:
        return "logical"
    return "plain"


AnyFilter = Annotated[
    Annotated[Filter, Tag("plain")] | Annotated[LogicalFilter, Tag("logical")],
    Discriminator(_filter_kind),
]


class Pagination(QueryModel):
    """Offset pagination. ``limit`` is mandatory."""

    limit: int | float
    offset: int | float | None = None


class QueryBuilderSettings(QueryModel):
    """Root query description. Every member is optional."""

    sort: list[Sort] | None = None
    filters: list[AnyFilter] | None = None
    pagination: Pagination | None = None
    populate: list[str] | str | None = None
