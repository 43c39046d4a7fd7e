"""Unit tests for runtime layouts and best-match resolution."""

import pytest

from sharedrt.runtime import (
    RUNTIME_LAYOUTS,
    FrameworkIndex,
    InstallGroup,
    Version,
    find_version_for_file,
    get_runtime_layout,
    parse_version_dir,
    resolve,
)
from sharedrt.runtime.resolver import best_minor_version, minor_distance
from tests.helpers.install_tree import make_group


class TestRuntimeLayouts:
    """Test the declarative runtime layouts."""

    def test_all_layouts_have_required_fields(self):
        """All layouts should have required fields."""
        required_fields = ["display_name", "launcher_name", "primary_family"]

        for name, layout in RUNTIME_LAYOUTS.items():
            for field in required_fields:
                assert getattr(layout, field), f"{name} missing {field}"

    def test_get_runtime_layout_valid(self):
        """Should return layout for a known runtime."""
        layout = get_runtime_layout("dotnet")
        assert layout.launcher_name == "dotnet.exe"
        assert layout.primary_family == "Microsoft.NETCore.App"
        assert layout.env_vars == ["PATH", "DOTNET_ROOT(x86)", "DOTNET_ROOT"]

    def test_get_runtime_layout_invalid(self):
        """Should raise ValueError for an unknown runtime."""
        with pytest.raises(ValueError, match="not supported"):
            get_runtime_layout("jvm")


class TestMinorDistance:
    """Test the minor version distance heuristic."""

    def test_exact_is_zero(self):
        assert minor_distance(2, 2) == 0

    def test_above_ranks_by_gap(self):
        assert minor_distance(2, 3) < minor_distance(2, 5)

    def test_any_above_beats_any_below(self):
        """Even a far newer minor beats the closest older one."""
        worst_above = max(minor_distance(2, m) for m in range(2, 200))
        best_below = min(minor_distance(2, m) for m in range(0, 2))
        assert worst_above < best_below

    def test_largest_parsed_minor_still_beats_any_below(self):
        """The law holds for every minor a directory name can produce."""
        largest = parse_version_dir("1.2147483647.0").minor
        oversized = parse_version_dir("1.2147483650.0").minor

        assert minor_distance(1, largest) < minor_distance(1, 0)
        assert minor_distance(1, oversized) == minor_distance(1, 0)

    def test_below_ranks_by_gap(self):
        assert minor_distance(5, 4) < minor_distance(5, 3) < minor_distance(5, 0)


class TestBestMinorVersion:
    """Test tie-breaking between two candidates."""

    def test_closer_wins(self):
        a = make_group("2.3.0")
        b = make_group("2.1.0")
        assert best_minor_version(1, a, b) is b
        assert best_minor_version(1, b, a) is b

    def test_stable_beats_prerelease_on_tie(self):
        stable = make_group("2.1.0", root="/a")
        preview = make_group("2.1.0-preview1", root="/b")
        assert best_minor_version(1, stable, preview) is stable
        assert best_minor_version(1, preview, stable) is stable

    def test_incumbent_kept_on_full_tie(self):
        a = make_group("2.1.0", root="/a")
        b = make_group("2.1.1", root="/b")
        assert best_minor_version(1, a, b) is a


def build(*groups):
    return FrameworkIndex(groups).groups


class TestResolve:
    """Test the tiered search."""

    def test_exact_minor_with_core_wins_over_newer_patch(self):
        """2.1.0 with the core family beats a newer 2.1.3 without it."""
        core = make_group("2.1.0", core=True)
        aux = make_group("2.1.3", core=False, family="Microsoft.AspNetCore.App")

        assert resolve(build(core, aux), 2, 1, 64) is core

    def test_exact_minor_without_core(self):
        """Without a core group, the newest exact minor is used."""
        older = make_group("2.1.0", core=False)
        newer = make_group("2.1.3", core=False)
        other_minor = make_group("2.2.0", core=True)

        assert resolve(build(older, newer, other_minor), 2, 1, 64) is newer

    def test_closest_higher_minor(self):
        groups = build(make_group("3.0.0"), make_group("3.1.0"), make_group("3.2.0"))

        assert resolve(groups, 3, 1, 64).version == Version(3, 1, 0)
        assert resolve(groups, 3, 0, 64).version == Version(3, 0, 0)

    def test_higher_minor_beats_lower(self):
        groups = build(make_group("2.0.0"), make_group("2.2.0"))

        assert resolve(groups, 2, 1, 64).version == Version(2, 2, 0)

    def test_lower_minor_when_nothing_higher(self):
        groups = build(make_group("2.0.0"), make_group("2.1.0"))

        assert resolve(groups, 2, 5, 64).version == Version(2, 1, 0)

    def test_oversized_minor_resolves_as_zero(self):
        """A minor too large for 32 bits ranks as minor 0, not as a far newer minor."""
        oversized = InstallGroup(
            paths=("/dotnet/shared/Microsoft.NETCore.App/2.4294967296.0",),
            bitness=64,
            version=parse_version_dir("2.4294967296.0"),
            has_runtime_app_path=True,
        )
        groups = build(oversized, make_group("2.5.0"))

        assert resolve(groups, 2, 0, 64) is oversized
        assert resolve(groups, 2, 2, 64).version == Version(2, 5, 0)

    def test_stable_preferred_over_prerelease_same_minor_distance(self):
        stable = make_group("3.1.0", core=False, root="/a")
        preview = make_group("3.1.0-preview1", core=False, root="/b")

        assert resolve(build(stable, preview), 3, 2, 64) is stable

    def test_alternate_bitness_major_minor_before_same_bitness_major_only(self):
        """Tier 1 at the other bitness beats tier 2 at the requested bitness."""
        x64_other_major = make_group("5.0.0", bitness=64)
        x86_match = make_group("3.1.0", bitness=32)

        assert resolve(build(x64_other_major, x86_match), 3, 1, 64) is x86_match

    def test_bitness_fallback(self):
        """Only a 32-bit install of another version is still returned."""
        x86 = make_group("5.0.1", bitness=32)

        assert resolve(build(x86), 5, 0, 64) is x86

    def test_bitness_only_tier_prefers_core(self):
        aux_newer = make_group("6.0.0", core=False)
        core_older = make_group("5.0.0", core=True)

        assert resolve(build(aux_newer, core_older), 9, 0, 64) is core_older

    def test_bitness_only_tier_newest_when_no_core(self):
        groups = build(make_group("5.0.0", core=False), make_group("6.0.0", core=False))

        assert resolve(groups, 9, 0, 64).version == Version(6, 0, 0)

    def test_nothing_installed(self):
        assert resolve((), 3, 1, 64) is None

    def test_deterministic(self):
        groups = build(
            make_group("3.1.0", core=False, root="/a"),
            make_group("3.1.0", core=False, root="/b"),
            make_group("3.1.0-rc1", root="/c"),
        )

        assert resolve(groups, 3, 1, 64) is resolve(groups, 3, 1, 64)

    @pytest.mark.parametrize("bitness", [0, 16, 96, 128])
    def test_invalid_bitness(self, bitness):
        with pytest.raises(ValueError, match="32 or 64"):
            resolve(build(make_group("3.1.0")), 3, 1, bitness)


class TestFindVersionForFile:
    """Test reverse lookups."""

    def test_file_inside_member_dir(self):
        group = make_group("2.1.0", root="/install", family="CoreApp")

        version = find_version_for_file(build(group), "/install/shared/CoreApp/2.1.0/lib.dll")

        assert version == Version(2, 1, 0)

    def test_file_outside(self):
        group = make_group("2.1.0", root="/install", family="CoreApp")

        assert find_version_for_file(build(group), "/elsewhere/lib.dll") is None

    def test_sibling_prefix_is_not_inside(self):
        group = make_group("2.1.0", root="/install", family="CoreApp")

        assert find_version_for_file(build(group), "/install/shared/CoreApp/2.1.01/lib.dll") is None

    def test_reports_group_version_for_any_member(self):
        """A file in a later member reports the group's first-member version."""
        from sharedrt.runtime import InstallGroup

        group = InstallGroup(
            paths=(
                "/dn/shared/Microsoft.AspNetCore.App/3.0.0-preview-18579-0056",
                "/dn/shared/Microsoft.NETCore.App/3.0.0-preview-27216-02",
            ),
            bitness=64,
            version=Version(3, 0, 0, "preview-18579-0056"),
            has_runtime_app_path=True,
        )

        version = find_version_for_file(
            (group,), "/dn/shared/Microsoft.NETCore.App/3.0.0-preview-27216-02/System.dll"
        )

        assert version == Version(3, 0, 0, "preview-18579-0056")

    def test_none_filename_rejected(self):
        with pytest.raises(ValueError):
            find_version_for_file((), None)
