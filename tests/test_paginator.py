"""
Tests for the paginator.
"""

import pytest

from syld.core.services.paginator import page, remaining

ITEMS = list("abcdefg")


class TestPage:
    def test_first_page(self):
        assert page(ITEMS, limit=3, offset=0) == ["a", "b", "c"]

    def test_middle_page(self):
        assert page(ITEMS, limit=3, offset=3) == ["d", "e", "f"]

    def test_short_last_page(self):
        assert page(ITEMS, limit=3, offset=6) == ["g"]

    def test_zero_limit_means_all(self):
        assert page(ITEMS, limit=0, offset=2) == ITEMS[2:]

    def test_offset_past_end(self):
        assert page(ITEMS, limit=3, offset=100) == []

    def test_empty_input(self):
        assert page([], limit=5) == []

    def test_contiguous_slice(self):
        for limit in range(0, 9):
            for offset in range(0, 9):
                result = page(ITEMS, limit, offset)
                end = len(ITEMS) if limit == 0 else offset + limit
                assert result == ITEMS[offset:end]

    def test_input_not_mutated(self):
        items = list(ITEMS)
        page(items, 2, 1)
        assert items == ITEMS

    @pytest.mark.parametrize("limit,offset", [(-1, 0), (0, -1)])
    def test_negative_rejected(self, limit, offset):
        with pytest.raises(ValueError):
            page(ITEMS, limit, offset)


class TestRemaining:
    def test_remaining(self):
        assert remaining(ITEMS, limit=3, offset=0) == 4
        assert remaining(ITEMS, limit=3, offset=6) == 0

    def test_no_limit(self):
        assert remaining(ITEMS, limit=0) == 0

    def test_offset_past_end(self):
        assert remaining(ITEMS, limit=3, offset=50) == 0
