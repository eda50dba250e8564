"""Tests for the route segment parser."""

import re

import pytest

from pphp_routes.core.parser import (
    PathSegment,
    SegmentType,
    find_misplaced_catch_all,
    parse_path,
    parse_path_segment,
)
from pphp_routes.exceptions import MalformedPathError


class TestPathSegment:
    def test_frozen_dataclass(self):
        segment = PathSegment("users", SegmentType.STATIC, "users")
        with pytest.raises(AttributeError):
            segment.name = "changed"

    def test_is_parameter(self):
        assert PathSegment("id", SegmentType.DYNAMIC, "[id]").is_parameter is True
        assert PathSegment("slug", SegmentType.CATCH_ALL, "[...slug]").is_parameter is True
        assert PathSegment("users", SegmentType.STATIC, "users").is_parameter is False
        assert PathSegment("admin", SegmentType.GROUP, "(admin)").is_parameter is False

    def test_to_url_segment(self):
        assert PathSegment("users", SegmentType.STATIC, "users").to_url_segment() == "users"
        assert PathSegment("id", SegmentType.DYNAMIC, "[id]").to_url_segment() == "{id}"
        assert (
            PathSegment("slug", SegmentType.CATCH_ALL, "[...slug]").to_url_segment()
            == "{...slug}"
        )
        assert PathSegment("admin", SegmentType.GROUP, "(admin)").to_url_segment() is None

    def test_to_pattern_segment(self):
        assert PathSegment("users", SegmentType.STATIC, "users").to_pattern_segment() == "users"
        assert PathSegment("id", SegmentType.DYNAMIC, "[id]").to_pattern_segment() == "([^/]+)"
        assert (
            PathSegment("slug", SegmentType.CATCH_ALL, "[...slug]").to_pattern_segment() == "(.+)"
        )
        assert PathSegment("admin", SegmentType.GROUP, "(admin)").to_pattern_segment() is None

    def test_static_pattern_escapes_metacharacters(self):
        segment = PathSegment("v1.0", SegmentType.STATIC, "v1.0")
        pattern = segment.to_pattern_segment()
        assert pattern == "v1\\.0"
        assert re.fullmatch(pattern, "v1.0")
        assert not re.fullmatch(pattern, "v1x0")

    def test_static_pattern_keeps_hyphen_unescaped(self):
        segment = PathSegment("my-page", SegmentType.STATIC, "my-page")
        assert segment.to_pattern_segment() == "my-page"


class TestParsePathSegment:
    def test_static_segment(self):
        segment = parse_path_segment("users")
        assert segment == PathSegment("users", SegmentType.STATIC, "users")

    def test_group_segment(self):
        segment = parse_path_segment("(marketing)")
        assert segment.name == "marketing"
        assert segment.segment_type == SegmentType.GROUP
        assert segment.original == "(marketing)"

    def test_dynamic_segment(self):
        segment = parse_path_segment("[id]")
        assert segment.name == "id"
        assert segment.segment_type == SegmentType.DYNAMIC

    def test_catch_all_segment(self):
        segment = parse_path_segment("[...slug]")
        assert segment.name == "slug"
        assert segment.segment_type == SegmentType.CATCH_ALL
        assert segment.original == "[...slug]"

    def test_names_are_not_restricted(self):
        assert parse_path_segment("[userId]").name == "userId"
        assert parse_path_segment("(Admin Area)").name == "Admin Area"

    @pytest.mark.parametrize("segment", ["[id", "id]", "(group", "group)", "[]", "()", "[", "("])
    def test_unbalanced_or_empty_wrappers_are_static(self, segment):
        parsed = parse_path_segment(segment)
        assert parsed.segment_type == SegmentType.STATIC
        assert parsed.name == segment

    def test_catch_all_marker_without_name_is_static(self):
        assert parse_path_segment("[...]").segment_type == SegmentType.STATIC

    def test_mixed_wrappers_are_static(self):
        assert parse_path_segment("(id]").segment_type == SegmentType.STATIC
        assert parse_path_segment("[id)").segment_type == SegmentType.STATIC

    def test_empty_segment_raises(self):
        with pytest.raises(MalformedPathError, match="Empty"):
            parse_path_segment("")


class TestParsePath:
    def test_parses_in_order(self):
        segments = parse_path(["(shop)", "products", "[id]", "[...rest]"])
        assert [s.segment_type for s in segments] == [
            SegmentType.GROUP,
            SegmentType.STATIC,
            SegmentType.DYNAMIC,
            SegmentType.CATCH_ALL,
        ]

    def test_catch_all_in_middle_is_accepted(self):
        segments = parse_path(["docs", "[...slug]", "edit"])
        assert segments[1].segment_type == SegmentType.CATCH_ALL
        assert segments[2].segment_type == SegmentType.STATIC

    def test_empty_list(self):
        assert parse_path([]) == []


class TestFindMisplacedCatchAll:
    def test_terminal_catch_all(self):
        assert find_misplaced_catch_all(parse_path(["blog", "[...slug]"])) is None

    def test_catch_all_followed_by_static(self):
        segments = parse_path(["docs", "[...slug]", "edit"])
        assert find_misplaced_catch_all(segments) == segments[1]

    def test_catch_all_followed_by_group_only(self):
        assert find_misplaced_catch_all(parse_path(["[...slug]", "(meta)"])) is None

    def test_no_catch_all(self):
        assert find_misplaced_catch_all(parse_path(["users", "[id]"])) is None
