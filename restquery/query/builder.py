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

"""Query string builder.

Serializes ``QueryBuilderSettings`` into a bracket-path query string::

    sort[0]=title&sort[0]=:desc
    filters[center][id][$eq]=123
    filters[$and][0][status][$eq]=active
    pagination[limit]=10&pagination[offset]=0
    populate=department,projects
"""

from __future__ import annotations

import json
import logging
import math
from collections.abc import Mapping, Sequence
from decimal import Decimal
from typing import Any
from urllib.parse import urlencode

from .dsl import Filter, FilterValue, LogicalFilter, Pagination, QueryBuilderSettings, Sort, SortOrder

logger = logging.getLogger(__name__)

# Ordered multi-map: repeated keys are significant and must not collapse.
QueryParams = list[tuple[str, str]]


def build_query(settings: QueryBuilderSettings | Mapping[str, Any]) -> str:
    """Build a URL-encoded query string from query settings.

    Args:
        settings: ``QueryBuilderSettings`` instance, or a plain mapping that
            is validated into one

    Returns:
        URL-encoded query string, without the leading ``?``

    Raises:
        pydantic.ValidationError: if a mapping does not describe valid settings
        TypeError: if ``settings`` is neither a model nor a mapping

    Examples:
        >>> build_query({"pagination": {"limit": 10}})
        'pagination%5Blimit%5D=10'

        >>> build_query(
        ...     QueryBuilderSettings(
        ...         sort=[Sort.desc("title")],
        ...         filters=[Filter.eq("center.id", 123)],
        ...     )
        ... )
        'sort%5B0%5D=title&sort%5B0%5D=%3Adesc&filters%5Bcenter%5D%5Bid%5D%5B%24eq%5D=123'
    """
    params = to_query_params(settings)
    logger.debug("Built query string with %d parameters", len(params))
    return urlencode(params)


def to_query_params(settings: QueryBuilderSettings | Mapping[str, Any]) -> QueryParams:
    """Expand query settings into ordered ``(key, value)`` pairs.

    Pairs are emitted as sort, filters, pagination, populate. Keys and values
    are not percent-encoded yet.
    """
    settings = _coerce_settings(settings)
    params: QueryParams = []

    if settings.sort:
        params.extend(_sort_params(settings.sort))
    if settings.filters:
        for filter_ in settings.filters:
            if isinstance(filter_, LogicalFilter):
                params.extend(_logical_filter_params(filter_))
            else:
                params.append(_filter_param("filters", filter_))
    if settings.pagination is not None:
        params.extend(_pagination_params(settings.pagination))
    # An empty string means "not supplied"; an empty list still emits the key.
    if settings.populate is not None and settings.populate != "":
        params.append(("populate", _populate_value(settings.populate)))

    return params


def _coerce_settings(settings: QueryBuilderSettings | Mapping[str, Any]) -> QueryBuilderSettings:
    if isinstance(settings, QueryBuilderSettings):
        return settings
    if isinstance(settings, Mapping):
        return QueryBuilderSettings.model_validate(settings)
    raise TypeError(f"Expected QueryBuilderSettings or a mapping, got {type(settings).__name__}")


def get_nested_filter_string(field: str) -> str:
    """Convert a dotted field path to its bracket path.

    Examples:
        >>> get_nested_filter_string("center.id")
        '[center][id]'
        >>> get_nested_filter_string("title")
        '[title]'
    """
    return "".join(f"[{part}]" for part in field.split("."))


# ============================================================================
# Value formatting
# ============================================================================


def _format_number(value: int | float) -> str:
    """Render a number the way a JavaScript number prints.

    Fixed notation is used for magnitudes in ``[1e-6, 1e21)``,
    scientific notation (``1e+21``, ``1e-7``) outside it.
    """
    if isinstance(value, int):
        return str(value)
    if math.isnan(value):
        return "NaN"
    if math.isinf(value):
        return "Infinity" if value > 0 else "-Infinity"
    if value == 0:
        return "0"

    sign = "-" if value < 0 else ""
    # repr() gives the shortest digit string that round-trips
    _, digit_tuple, exponent = Decimal(repr(abs(value))).as_tuple()
    digits = "".join(str(d) for d in digit_tuple).rstrip("0")
    exponent = int(exponent) + len(digit_tuple) - len(digits)
    k = len(digits)
    n = exponent + k

    if k <= n <= 21:
        return f"{sign}{digits}{'0' * (n - k)}"
    if 0 < n <= 21:
        return f"{sign}{digits[:n]}.{digits[n:]}"
    if -6 < n <= 0:
        return f"{sign}0.{'0' * -n}{digits}"
    e = n - 1
    mantissa = digits if k == 1 else f"{digits[0]}.{digits[1:]}"
    return f"{sign}{mantissa}e{'+' if e >= 0 else '-'}{abs(e)}"


def _json_item(value: str | int | float) -> str:
    if isinstance(value, str):
        return json.dumps(value, ensure_ascii=False)
    if isinstance(value, float) and not math.isfinite(value):
        return "null"
    return _format_number(value)


def format_filter_value(value: FilterValue) -> str:
    """Format a filter value for the query string.

    Lists become a compact JSON array literal, ``None`` becomes ``"null"``,
    booleans become ``"true"``/``"false"``. Numbers print as in JavaScript,
    inside lists as well.

    Examples:
        >>> format_filter_value([1, 2, 3])
        '[1,2,3]'
        >>> format_filter_value(None)
        'null'
        >>> format_filter_value(True)
        'true'
        >>> format_filter_value(1e-7)
        '1e-7'
    """
    if isinstance(value, list):
        return f"[{','.join(_json_item(v) for v in value)}]"
    if value is None:
        return "null"
    if isinstance(value, bool):
        return "true" if value else "false"
    if isinstance(value, float):
        return _format_number(value)
    return str(value)


# ============================================================================
# Section encoders
# ============================================================================


def _sort_params(sort: Sequence[Sort]) -> QueryParams:
    """Encode sort criteria.

    A descending entry repeats its key with a ``:desc`` value.
    """
    params: QueryParams = []
    for index, entry in enumerate(sort):
        key = f"sort[{index}]"
        params.append((key, entry.field))
        if entry.order == SortOrder.DESC:
            params.append((key, f":{entry.order.value}"))
    return params


def _filter_param(prefix: str, filter_: Filter) -> tuple[str, str]:
    """Encode one plain filter under ``prefix``.

    With a relation the key is ``prefix[relation][path...]``; otherwise it is
    ``prefix[path...][operator]``, the operator part omitted when unset.
    """
    if filter_.relation:
        key = f"{prefix}[{filter_.relation}]{get_nested_filter_string(filter_.field)}"
    else:
        operator = f"[{filter_.operator.value}]" if filter_.operator is not None else ""
        key = f"{prefix}{get_nested_filter_string(filter_.field)}{operator}"
    return key, format_filter_value(filter_.value)


def _logical_filter_params(filter_: LogicalFilter) -> QueryParams:
    """Encode a logical group as one indexed pair per child."""
    return [
        _filter_param(f"filters[{filter_.operator.value}][{index}]", child)
        for index, child in enumerate(filter_.filters)
    ]


def _pagination_params(pagination: Pagination) -> QueryParams:
    params: QueryParams = [("pagination[limit]", _format_number(pagination.limit))]
    # offset=0 is emitted
    if pagination.offset is not None:
        params.append(("pagination[offset]", _format_number(pagination.offset)))
    return params


def _populate_value(populate: list[str] | str) -> str:
    if isinstance(populate, str):
        return populate
    return ",".join(populate)
