"""Path segment parser for file-based routes.

Classifies route directory names once, so every later stage works on
tagged segments instead of re-inspecting brackets:
- users -> static segment (emitted verbatim)
- [id] -> {id} (dynamic segment, one path component)
- [...slug] -> {...slug} (catch-all segment, one or more components)
- (marketing) -> skipped (route group, not in URL)
"""

import re
from dataclasses import dataclass
from enum import Enum

from pphp_routes.exceptions import MalformedPathError

CATCH_ALL_MARKER = "..."

_REGEX_METACHARACTERS = re.compile(r"[.^$*+?()\[\]{}|\\]")


class SegmentType(Enum):
    """Type of a route path segment."""

    STATIC = "static"
    DYNAMIC = "dynamic"
    CATCH_ALL = "catch_all"
    GROUP = "group"


@dataclass(frozen=True)
class PathSegment:
    """A parsed route path segment with type and name."""

    name: str
    segment_type: SegmentType
    original: str

    @property
    def is_parameter(self) -> bool:
        """Check if this segment captures part of the URL."""
        return self.segment_type in (SegmentType.DYNAMIC, SegmentType.CATCH_ALL)

    def to_url_segment(self) -> str | None:
        """Convert this segment to its display form in a route URL.

        Returns:
            URL segment string, or None for GROUP segments.

        Examples:
            STATIC "users" -> "users"
            DYNAMIC "id" -> "{id}"
            CATCH_ALL "slug" -> "{...slug}"
            GROUP "marketing" -> None
        """
        match self.segment_type:
            case SegmentType.STATIC:
                return self.name
            case SegmentType.DYNAMIC:
                return f"{{{self.name}}}"
            case SegmentType.CATCH_ALL:
                return f"{{{CATCH_ALL_MARKER}{self.name}}}"
            case SegmentType.GROUP:
                return None

    def to_pattern_segment(self) -> str | None:
        """Convert this segment to its regular expression source.

        Static text is escaped so that the pattern matches the literal
        segment and nothing else.

        Examples:
            STATIC "users" -> "users"
            STATIC "v1.0" -> "v1\\.0"
            DYNAMIC "id" -> "([^/]+)"
            CATCH_ALL "slug" -> "(.+)"
            GROUP "marketing" -> None
        """
        match self.segment_type:
            case SegmentType.STATIC:
                return _REGEX_METACHARACTERS.sub(r"\\\g<0>", self.name)
            case SegmentType.DYNAMIC:
                return "([^/]+)"
            case SegmentType.CATCH_ALL:
                return "(.+)"
            case SegmentType.GROUP:
                return None


def _unwrap(segment: str, opening: str, closing: str) -> str | None:
    """Return the inner text of a segment wrapped in opening/closing, if any."""
    if len(segment) > 2 and segment.startswith(opening) and segment.endswith(closing):
        return segment[1:-1]
    return None


def parse_path_segment(segment: str) -> PathSegment:
    """Classify a single directory name.

    Rules are checked in order and the first match wins. Anything that
    is not a well-formed group or bracket segment, including unbalanced
    brackets such as "[id", is treated as static text.

    Args:
        segment: Directory name, without any '/'.

    Returns:
        PathSegment with detected type and extracted name.

    Raises:
        MalformedPathError: If segment is empty.

    Examples:
        "users" -> PathSegment(name="users", segment_type=STATIC, ...)
        "(admin)" -> PathSegment(name="admin", segment_type=GROUP, ...)
        "[id]" -> PathSegment(name="id", segment_type=DYNAMIC, ...)
        "[...slug]" -> PathSegment(name="slug", segment_type=CATCH_ALL, ...)
    """
    if not segment:
        raise MalformedPathError("Empty path segment")

    if (inner := _unwrap(segment, "(", ")")) is not None:
        return PathSegment(name=inner, segment_type=SegmentType.GROUP, original=segment)

    if (inner := _unwrap(segment, "[", "]")) is not None:
        if inner.startswith(CATCH_ALL_MARKER):
            name = inner[len(CATCH_ALL_MARKER) :]
            if name:
                return PathSegment(
                    name=name,
                    segment_type=SegmentType.CATCH_ALL,
                    original=segment,
                )
        else:
            return PathSegment(name=inner, segment_type=SegmentType.DYNAMIC, original=segment)

    return PathSegment(name=segment, segment_type=SegmentType.STATIC, original=segment)


def parse_path(path_parts: list[str]) -> list[PathSegment]:
    """Classify a list of directory names.

    Args:
        path_parts: Directory names from a route path, in order.

    Returns:
        List of parsed PathSegment objects.

    Raises:
        MalformedPathError: If any part is empty.

    Examples:
        ["blog", "[id]"] -> [PathSegment(STATIC, "blog"), PathSegment(DYNAMIC, "id")]
    """
    return [parse_path_segment(part) for part in path_parts]


def find_misplaced_catch_all(
    segments: list[PathSegment] | tuple[PathSegment, ...],
) -> PathSegment | None:
    """Find a catch-all segment that has URL segments after it.

    Group segments after a catch-all are ignored since they never reach
    the URL.

    Returns:
        The first offending catch-all segment, or None.
    """
    catch_all: PathSegment | None = None
    for segment in segments:
        if segment.segment_type == SegmentType.GROUP:
            continue
        if catch_all is not None:
            return catch_all
        if segment.segment_type == SegmentType.CATCH_ALL:
            catch_all = segment
    return None
