"""
Tests for the Result pattern used by services
"""

import pytest
from services.common.result import Result, PagedResult


class TestResult:

    def test_success(self):
        result = Result.success({'id': 1}, metadata={'source': 'form'})

        assert result.is_success
        assert not result.is_failure
        assert bool(result) is True
        assert result.data == {'id': 1}
        assert result.metadata == {'source': 'form'}
        assert result.unwrap() == {'id': 1}

    def test_failure(self):
        result = Result.failure("Contact with id 4 not found", code="NOT_FOUND")

        assert result.is_failure
        assert bool(result) is False
        assert result.error_code == "NOT_FOUND"
        assert result.unwrap_or([]) == []

    def test_unwrap_failure_raises(self):
        with pytest.raises(ValueError, match="not found"):
            Result.failure("not found").unwrap()

    def test_repr(self):
        assert repr(Result.failure("boom", code="X")) == "Result.failure(error='boom', code='X')"
        assert repr(Result.success(3)) == "Result.success(data=3)"


class TestPagedResult:

    def test_paginated(self):
        result = PagedResult.paginated(data=['a', 'b'], total=21, page=1, per_page=10)

        assert result.is_success
        assert result.total_pages == 3
        assert result.page == 1
        assert result.data == ['a', 'b']

    def test_paginated_zero_per_page(self):
        assert PagedResult.paginated(data=[], total=5, page=1, per_page=0).total_pages == 0
