# /tests/conftest.py

import math
from typing import Any, Dict, List, Optional

import pytest
from unittest.mock import AsyncMock, MagicMock


def make_list_response(
    items: List[Dict[str, Any]],
    page: int = 1,
    limit: int = 10,
    total: Optional[int] = None,
    total_pages: Optional[int] = None,
) -> Dict[str, Any]:
    """Builds a list-endpoint response in the backend's wire format."""
    total = len(items) if total is None else total
    total_pages = math.ceil(total / limit) if total_pages is None else total_pages
    return {
        "success": True,
        "count": len(items),
        "total": total,
        "pagination": {
            "page": page,
            "limit": limit,
            "totalPages": total_pages,
            "hasNextPage": page < total_pages,
            "hasPrevPage": page > 1,
        },
        "data": items,
    }


@pytest.fixture
def list_response():
    """Exposes the response builder to tests."""
    return make_list_response


@pytest.fixture
def mock_notify():
    """A synchronous notify capability that records every message."""
    return MagicMock(return_value=None)


@pytest.fixture
def confirm_yes():
    return MagicMock(return_value=True)


@pytest.fixture
def confirm_no():
    return MagicMock(return_value=False)


@pytest.fixture
def mock_remove():
    return AsyncMock(return_value={"success": True})


@pytest.fixture
def sample_students():
    """Two raw student records exactly as the students endpoint returns them."""
    return [
        {
            "_id": "stu_1",
            "name": "Asha Verma",
            "rollNumber": "CS2024001",
            "dateOfBirth": "2004-03-15T00:00:00.000Z",
            "address": {"street": "12 Park Lane", "city": "Pune", "state": "MH", "zipCode": "411001", "country": ""},
            "status": "Active",
        },
        {
            "_id": "stu_2",
            "name": "Ravi Iyer",
            "rollNumber": "CS2024002",
            "dateOfBirth": None,
            "status": "Inactive",
        },
    ]
