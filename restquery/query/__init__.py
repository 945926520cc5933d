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

"""Query DSL and bracket-path query string builder."""

from .builder import QueryParams, build_query, format_filter_value, get_nested_filter_string, to_query_params
from .dsl import (
    AnyFilter,
    ComparisonOperator,
    Filter,
    FilterValue,
    LogicalFilter,
    LogicalOperator,
    Pagination,
    QueryBuilderSettings,
    Sort,
    SortOrder,
)

__all__ = [
    # Query DSL models
    "QueryBuilderSettings",
    "Sort",
    "SortOrder",
    "Filter",
    "LogicalFilter",
    "AnyFilter",
    "FilterValue",
    "ComparisonOperator",
    "LogicalOperator",
    "Pagination",
    # Builder functions
    "build_query",
    "to_query_params",
    "get_nested_filter_string",
    "format_filter_value",
    "QueryParams",
]
