"""
Tests for the allocator — equal and weighted splits, minimum amounts.
"""

import pytest

from syld.core.models.budget import AllocationStrategy, Budget
from syld.core.models.package import PackageManager, PackageRecord
from syld.core.models.project import Project
from syld.core.services.allocator import (
    AllocationError,
    EmptyProjectSet,
    allocate,
    package_count_weights,
    split_equal,
    split_weighted,
)


def project(key: str, display_name: str | None = None, packages: int = 1) -> Project:
    members = tuple(
        PackageRecord(manager=PackageManager.PACMAN, name=f"{key}-{i}") for i in range(packages)
    )
    return Project(key=key, display_name=display_name or key.upper(), members=members)


A, B, C = project("a"), project("b"), project("c")


class TestSplitEqual:
    def test_even(self):
        assert split_equal(9, 3) == [3, 3, 3]

    def test_remainder_goes_first(self):
        assert split_equal(11, 3) == [4, 4, 3]

    def test_less_than_count(self):
        assert split_equal(2, 5) == [1, 1, 0, 0, 0]

    def test_no_shares(self):
        assert split_equal(10, 0) == []


class TestSplitWeighted:
    def test_proportional(self):
        assert split_weighted(100, [1, 3]) == [25, 75]

    def test_largest_remainder(self):
        # 10 * 1/3 = 3.33, 10 * 2/3 = 6.67 → leftover unit to the larger remainder
        assert split_weighted(10, [1, 2]) == [3, 7]

    def test_tie_goes_to_earlier(self):
        assert split_weighted(1, [1, 1]) == [1, 0]

    def test_all_zero_falls_back_to_equal(self):
        assert split_weighted(10, [0, 0, 0]) == [4, 3, 3]

    def test_negative_rejected(self):
        with pytest.raises(ValueError):
            split_weighted(10, [1, -1])

    def test_exact_sum(self):
        for amount in (1, 7, 99, 1000, 12345):
            for weights in ([1, 1, 1], [5, 3, 2, 7], [1, 0, 0, 9], [13, 17]):
                assert sum(split_weighted(amount, weights)) == amount


class TestAllocate:
    def test_equal_three_way(self):
        plan = allocate([A, B, C], Budget(amount=10))
        assert plan.amounts() == {"a": 4, "b": 3, "c": 3}
        assert plan.total == 10

    def test_order_follows_sort_key(self):
        plan = allocate([C, A, B], Budget(amount=10))
        assert [e.key for e in plan.entries] == ["a", "b", "c"]
        assert plan.entries[0].amount == 4

    def test_weighted(self):
        plan = allocate(
            [A, B],
            Budget(amount=100),
            strategy=AllocationStrategy.WEIGHTED,
            weights={"a": 1, "b": 0},
        )
        assert plan.amounts() == {"a": 100, "b": 0}

    def test_weighted_missing_key_weighs_zero(self):
        plan = allocate(
            [A, B],
            Budget(amount=50),
            strategy=AllocationStrategy.WEIGHTED,
            weights={"b": 2},
        )
        assert plan.amounts() == {"a": 0, "b": 50}

    def test_weighted_by_package_count(self):
        big, small = project("big", packages=3), project("small", packages=1)
        weights = package_count_weights([big, small])
        assert weights == {"big": 3, "small": 1}
        plan = allocate(
            [big, small],
            Budget(amount=400),
            strategy=AllocationStrategy.WEIGHTED,
            weights=weights,
        )
        assert plan.amounts() == {"big": 300, "small": 100}

    def test_empty_project_set(self):
        with pytest.raises(EmptyProjectSet) as exc:
            allocate([], Budget(amount=5))
        assert exc.value.hint
        assert isinstance(exc.value, AllocationError)

    def test_zero_budget_gives_empty_plan(self):
        plan = allocate([A], Budget(amount=0))
        assert plan.is_empty
        assert plan.entries == []

    def test_zero_budget_with_no_projects(self):
        assert allocate([], Budget(amount=0)).is_empty

    def test_duplicate_projects_counted_once(self):
        plan = allocate([A, A, B], Budget(amount=10))
        assert plan.amounts() == {"a": 5, "b": 5}

    def test_exact_sum_property(self):
        projects = [project(k) for k in "abcdefg"]
        for n in range(1, len(projects) + 1):
            for amount in (1, 3, 10, 99, 1001):
                plan = allocate(projects[:n], Budget(amount=amount))
                assert plan.total == amount
                assert all(e.amount >= 0 for e in plan.entries)

    def test_plan_records_inputs(self):
        budget = Budget(amount=10, currency="EUR")
        plan = allocate([A], budget, min_amount=2)
        assert plan.budget == budget
        assert plan.strategy == AllocationStrategy.EQUAL
        assert plan.min_amount == 2


class TestMinimumAmount:
    def test_below_minimum_redistributed(self):
        plan = allocate(
            [A, B],
            Budget(amount=100),
            strategy=AllocationStrategy.WEIGHTED,
            weights={"a": 9, "b": 1},
            min_amount=20,
        )
        assert plan.amounts() == {"a": 100}
        assert plan.excluded == ["b"]
        assert plan.total == 100

    def test_never_emits_below_minimum(self):
        projects = [project(k) for k in "abcdefgh"]
        for amount in (5, 17, 40, 100):
            for minimum in (1, 3, 5, 12):
                try:
                    plan = allocate(projects, Budget(amount=amount), min_amount=minimum)
                except EmptyProjectSet:
                    continue
                assert all(e.amount >= minimum for e in plan.entries)
                assert plan.total == amount

    def test_equal_split_drops_all_and_recomputes(self):
        # 10 over 4 → [3, 3, 2, 2]; min 3 drops c and d, then 10 over 2 → [5, 5]
        projects = [project(k) for k in "abcd"]
        plan = allocate(projects, Budget(amount=10), min_amount=3)
        assert plan.amounts() == {"a": 5, "b": 5}
        assert plan.excluded == ["c", "d"]

    def test_excluded_in_sort_order(self):
        projects = [
            project("z", "Zeta", packages=1),
            project("y", "Alpha", packages=1),
            project("x", "Mid", packages=10),
        ]
        plan = allocate(
            projects,
            Budget(amount=120),
            strategy=AllocationStrategy.WEIGHTED,
            weights=package_count_weights(projects),
            min_amount=20,
        )
        assert plan.amounts() == {"x": 120}
        assert plan.excluded == ["y", "z"]

    def test_nobody_clears_minimum(self):
        with pytest.raises(EmptyProjectSet) as exc:
            allocate([A, B], Budget(amount=10), min_amount=50)
        assert "minimum" in exc.value.hint.lower()

    def test_single_project_below_minimum(self):
        with pytest.raises(EmptyProjectSet):
            allocate([A], Budget(amount=5), min_amount=6)

    def test_negative_minimum_rejected(self):
        with pytest.raises(ValueError):
            allocate([A], Budget(amount=10), min_amount=-1)
