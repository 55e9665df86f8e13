"""
Tests for the resolution table and the resolver.
"""

import itertools

import pytest

from syld.core.data import DataRegistry, get_registry
from syld.core.models.package import PackageManager, PackageRecord
from syld.core.services.resolution_table import (
    Mapped,
    ResolutionTable,
    ResolutionTableError,
    Unmapped,
)
from syld.core.services.resolver import Resolver, dedupe, resolve


def pacman(name: str, **kw) -> PackageRecord:
    return PackageRecord(manager=PackageManager.PACMAN, name=name, **kw)


def apt(name: str, **kw) -> PackageRecord:
    return PackageRecord(manager=PackageManager.APT, name=name, **kw)


FOO_TABLE = [
    {
        "key": "foo",
        "display_name": "Foo",
        "homepage": "https://foo.example",
        "packages": {"pacman": ["libfoo1", "libfoo-utils"], "apt": ["libfoo"]},
    },
]


CURL_BASE = [
    {
        "key": "curl",
        "display_name": "curl",
        "homepage": "https://a.example",
        "packages": {"pacman": ["curl"]},
    },
]

CURL_OVERRIDE = [
    {
        "key": "curl",
        "display_name": "Zed cURL",
        "homepage": "https://b.example",
        "packages": {"apt": ["curl"]},
    },
]


# ── Resolution table ────────────────────────────────────────────


class TestResolutionTable:
    def test_lookup_mapped(self):
        table = ResolutionTable(FOO_TABLE)
        result = table.lookup(PackageManager.PACMAN, "libfoo1")
        assert result == Mapped(key="foo", display_name="Foo", homepage="https://foo.example")

    def test_lookup_is_per_manager(self):
        table = ResolutionTable(FOO_TABLE)
        assert isinstance(table.lookup("apt", "libfoo1"), Unmapped)

    def test_lookup_unmapped(self):
        result = ResolutionTable().lookup("pacman", "curl")
        assert result == Unmapped(package_name="curl")
        assert result.key == "curl"
        assert result.display_name == "curl"
        assert result.homepage is None

    def test_display_name_defaults_to_key(self):
        table = ResolutionTable([{"key": "bar", "packages": {"apt": ["bar"]}}])
        assert table.lookup("apt", "bar").display_name == "bar"

    def test_missing_key_rejected(self):
        with pytest.raises(ResolutionTableError):
            ResolutionTable([{"display_name": "No key"}])

    def test_unknown_manager_rejected(self):
        with pytest.raises(ResolutionTableError, match="brew"):
            ResolutionTable([{"key": "x", "packages": {"brew": ["x"]}}])

    def test_conflicting_names_rejected(self):
        with pytest.raises(ResolutionTableError, match="declared twice"):
            ResolutionTable([
                {"key": "x", "display_name": "X"},
                {"key": "x", "display_name": "Ex"},
            ])

    def test_packages_must_be_mapping(self):
        with pytest.raises(ResolutionTableError):
            ResolutionTable([{"key": "x", "packages": ["x"]}])

    def test_merged_override_wins(self):
        base = ResolutionTable(FOO_TABLE)
        override = ResolutionTable([
            {"key": "bar", "display_name": "Bar", "packages": {"pacman": ["libfoo1"]}},
        ])
        merged = base.merged(override)
        assert merged.lookup("pacman", "libfoo1").key == "bar"
        assert merged.lookup("pacman", "libfoo-utils").key == "foo"
        assert merged.project_count == 2
        # Originals untouched
        assert base.lookup("pacman", "libfoo1").key == "foo"

    def test_merged_override_renames_base_packages(self):
        base = ResolutionTable(CURL_BASE)
        merged = base.merged(ResolutionTable(CURL_OVERRIDE))
        assert merged.lookup("pacman", "curl") == merged.lookup("apt", "curl")
        assert merged.lookup("pacman", "curl").display_name == "Zed cURL"

    def test_redeclared_key_shares_one_homepage(self):
        table = ResolutionTable([
            {"key": "x", "homepage": "https://one.example", "packages": {"pacman": ["x"]}},
            {"key": "x", "homepage": "https://two.example", "packages": {"apt": ["x"]}},
        ])
        assert table.lookup("pacman", "x").homepage == "https://two.example"
        assert table.lookup("apt", "x").homepage == "https://two.example"

    def test_redeclared_key_keeps_homepage_when_omitted(self):
        table = ResolutionTable([
            {"key": "x", "homepage": "https://one.example", "packages": {"pacman": ["x"]}},
            {"key": "x", "packages": {"apt": ["x"]}},
        ])
        assert table.lookup("apt", "x").homepage == "https://one.example"

    def test_len_and_contains(self):
        table = ResolutionTable(FOO_TABLE)
        assert len(table) == 3
        assert ("apt", "libfoo") in table
        assert table.project("foo").display_name == "Foo"
        assert table.project("nope") is None


class TestBuiltinCatalog:
    def test_catalog_loads(self):
        table = DataRegistry().resolution_table
        assert table.project_count > 10
        assert table.lookup("apt", "libcurl4").key == "curl"
        assert table.lookup("flatpak", "org.mozilla.firefox").key == "firefox"

    def test_registry_is_cached(self):
        assert get_registry() is get_registry()
        assert get_registry().resolution_table is get_registry().resolution_table


# ── Resolver ────────────────────────────────────────────────────


class TestResolver:
    def test_unmapped_fallback_sorted(self):
        """Unknown packages become their own projects, sorted by name."""
        projects = resolve([pacman("git"), pacman("curl")])
        assert [p.key for p in projects] == ["curl", "git"]
        assert all(p.package_count == 1 for p in projects)

    def test_mapped_packages_grouped(self):
        table = ResolutionTable(FOO_TABLE)
        projects = resolve([pacman("libfoo1"), pacman("libfoo-utils")], table)
        assert len(projects) == 1
        foo = projects[0]
        assert foo.key == "foo"
        assert foo.display_name == "Foo"
        assert {m.name for m in foo.members} == {"libfoo1", "libfoo-utils"}

    def test_groups_across_managers(self):
        table = ResolutionTable(FOO_TABLE)
        projects = resolve([pacman("libfoo1"), apt("libfoo")], table)
        assert len(projects) == 1
        assert projects[0].managers == ["apt", "pacman"]

    def test_order_independent(self):
        table = ResolutionTable(FOO_TABLE)
        records = [
            pacman("libfoo1"),
            apt("libfoo"),
            pacman("zlib"),
            apt("Alpha"),
            pacman("beta"),
        ]
        expected = resolve(records, table)
        for perm in itertools.permutations(records):
            assert resolve(list(perm), table) == expected

    def test_order_independent_with_merged_table(self):
        table = ResolutionTable(CURL_BASE).merged(ResolutionTable(CURL_OVERRIDE))
        for perm in itertools.permutations([pacman("curl"), apt("curl")]):
            (curl,) = resolve(list(perm), table)
            assert curl.display_name == "Zed cURL"
            assert curl.homepage == "https://b.example"

    def test_deterministic(self, records):
        resolver = Resolver(get_registry().resolution_table)
        assert resolver.resolve(records) == resolver.resolve(records)

    def test_case_insensitive_sort(self):
        projects = resolve([pacman("zsh"), pacman("Bash"), pacman("awk")])
        assert [p.display_name for p in projects] == ["awk", "Bash", "zsh"]

    def test_same_display_name_ties_break_by_key(self):
        table = ResolutionTable([
            {"key": "b-proj", "display_name": "Same", "packages": {"pacman": ["b"]}},
            {"key": "a-proj", "display_name": "Same", "packages": {"pacman": ["a"]}},
        ])
        projects = resolve([pacman("b"), pacman("a")], table)
        assert [p.key for p in projects] == ["a-proj", "b-proj"]

    def test_duplicates_dropped(self):
        projects = resolve([pacman("curl", version="1"), pacman("curl", version="2")])
        assert len(projects) == 1
        assert projects[0].members[0].version == "1"

    def test_empty_input(self):
        assert resolve([]) == []

    def test_homepage_from_table(self):
        table = ResolutionTable(FOO_TABLE)
        (foo,) = resolve([pacman("libfoo1", url="https://elsewhere.example")], table)
        assert foo.homepage == "https://foo.example"

    def test_homepage_falls_back_to_member_url(self):
        (curl,) = resolve([pacman("curl", url="https://curl.se")])
        assert curl.homepage == "https://curl.se"

    def test_fallback_key_adopts_table_name(self):
        """An unmapped package whose name equals a table key joins that project."""
        table = ResolutionTable([
            {"key": "git", "display_name": "Git", "packages": {"apt": ["git-man"]}},
        ])
        projects = resolve([pacman("git"), apt("git-man")], table)
        assert len(projects) == 1
        assert projects[0].display_name == "Git"
        assert projects[0].package_count == 2

    def test_resolver_uses_builtin_catalog(self, records):
        projects = Resolver(get_registry().resolution_table).resolve(records)
        by_key = {p.key: p for p in projects}
        assert by_key["curl"].package_count == 2
        assert by_key["git"].display_name == "Git"
        assert "firefox" in by_key
        assert "zlib" in by_key


class TestDedupe:
    def test_keeps_first(self):
        first = pacman("curl", version="1")
        out = dedupe([first, pacman("curl", version="2"), apt("curl")])
        assert out[0] is first
        assert len(out) == 2
