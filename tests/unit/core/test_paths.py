"""Tests for the lexical path helpers."""

import pytest

from pphp_routes.core.paths import (
    is_absolute_path,
    normalize_path,
    relative_to_root,
    resolve_path,
)


class TestNormalizePath:
    def test_empty_string(self):
        assert normalize_path("") == ""

    def test_strips_leading_dot_slash(self):
        assert normalize_path("./src/app/index.php") == "src/app/index.php"

    def test_strips_repeated_dot_slash(self):
        assert normalize_path("././src/a.php") == "src/a.php"

    def test_converts_backslashes(self):
        assert normalize_path("src\\app\\index.php") == "src/app/index.php"

    def test_collapses_duplicate_separators(self):
        assert normalize_path("src//app///index.php") == "src/app/index.php"

    def test_drops_interior_dot_segments(self):
        assert normalize_path("src/./app/index.php") == "src/app/index.php"

    def test_keeps_parent_segments(self):
        assert normalize_path("src/../lib/a.php") == "src/../lib/a.php"

    def test_drops_trailing_slash(self):
        assert normalize_path("node_modules/") == "node_modules"

    def test_keeps_absolute_root(self):
        assert normalize_path("//var//www/") == "/var/www"
        assert normalize_path("/") == "/"

    def test_windows_drive_path(self):
        assert normalize_path("C:\\proj\\src\\a.php") == "C:/proj/src/a.php"

    def test_dot_only_normalizes_to_empty(self):
        assert normalize_path("./") == ""
        assert normalize_path(".") == ""

    @pytest.mark.parametrize(
        "path",
        [
            "",
            "./src//app\\x.php",
            "/abs/./path//",
            ".\\.\\a",
            "C:\\Users\\me\\",
            "../up/./x",
            "//",
        ],
    )
    def test_idempotent(self, path):
        once = normalize_path(path)
        assert normalize_path(once) == once


class TestIsAbsolutePath:
    def test_posix_absolute(self):
        assert is_absolute_path("/var/www") is True

    def test_windows_drive(self):
        assert is_absolute_path("C:/proj") is True
        assert is_absolute_path("d:\\proj") is True
        assert is_absolute_path("C:") is True

    def test_relative(self):
        assert is_absolute_path("src/app") is False
        assert is_absolute_path("./src") is False
        assert is_absolute_path("") is False


class TestResolvePath:
    def test_relative_joined_to_base(self):
        assert resolve_path("src/a.php", "/proj") == "/proj/src/a.php"

    def test_absolute_ignores_base(self):
        assert resolve_path("/etc/hosts", "/proj") == "/etc/hosts"

    def test_collapses_parent_segments(self):
        assert resolve_path("src/../lib/a.php", "/proj") == "/proj/lib/a.php"

    def test_parent_escapes_base(self):
        assert resolve_path("../other/a.php", "/proj") == "/other/a.php"

    def test_parent_above_filesystem_root_is_dropped(self):
        assert resolve_path("/../../a") == "/a"

    def test_relative_without_base_keeps_leading_parents(self):
        assert resolve_path("../a/../b") == "../b"

    def test_windows_drive(self):
        assert resolve_path("..\\lib\\a.php", "C:\\proj\\src") == "C:/proj/lib/a.php"
        assert resolve_path("C:\\proj\\..") == "C:"

    def test_empty_path_resolves_to_base(self):
        assert resolve_path("", "/proj") == "/proj"


class TestRelativeToRoot:
    def test_inside_root(self):
        assert relative_to_root("/proj/src/a.php", "/proj") == "src/a.php"

    def test_root_itself(self):
        assert relative_to_root("/proj", "/proj") == ""

    def test_outside_root(self):
        assert relative_to_root("/other/a.php", "/proj") is None

    def test_sibling_with_shared_prefix_is_outside(self):
        assert relative_to_root("/project2/a.php", "/proj") is None

    def test_filesystem_root(self):
        assert relative_to_root("/a/b", "/") == "a/b"

    def test_case_sensitive_by_default(self):
        assert relative_to_root("/Proj/a.php", "/proj") is None

    def test_case_insensitive(self):
        assert relative_to_root("/Proj/A.php", "/proj", case_insensitive=True) == "A.php"
