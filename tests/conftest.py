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

"""
Pytest configuration and fixtures for restquery tests.
"""

import pytest

from restquery.query import Filter, LogicalFilter, Pagination, QueryBuilderSettings, Sort


@pytest.fixture
def comprehensive_settings() -> QueryBuilderSettings:
    """Settings touching every section: sort, filters, pagination and populate."""
    return QueryBuilderSettings(
        sort=[Sort.asc("eventStart")],
        filters=[
            Filter.gte("eventStart", 1700000000),
            LogicalFilter.and_(
                Filter.eq("department.id", 123),
                Filter.eq("status", "active"),
            ),
        ],
        pagination=Pagination(limit=10, offset=0),
        populate=["department", "projects", "manager"],
    )
