"""Route compiler for file-based PHP routes.

Turns a flat list of project-relative file paths into route descriptors.
Every index file under the routes root becomes one route; layout files
and a small table of special pages are recognized alongside.
"""

import logging
import re
from collections.abc import Mapping, Sequence
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from pphp_routes.core.parser import (
    PathSegment,
    SegmentType,
    find_misplaced_catch_all,
    parse_path,
)
from pphp_routes.core.paths import normalize_path, resolve_path
from pphp_routes.exceptions import (
    CatchAllPositionError,
    MalformedPathError,
    RoutingToolkitError,
    SchemaError,
    UnmatchedRouteConvention,
)

logger = logging.getLogger(__name__)

_DUPLICATE_SLASHES = re.compile(r"/{2,}")


def _default_special_pages() -> Mapping[str, str]:
    return MappingProxyType({"not-found.php": "not-found", "error.php": "error"})


@dataclass(frozen=True)
class RouteConvention:
    """Naming convention that decides which files are routes.

    Attributes:
        routes_root: Project-relative directory holding the route tree.
        index_file: File name that marks a directory as a route.
        layout_file: File name of layout templates.
        special_pages: File name (directly under routes_root) -> special kind.
    """

    routes_root: str = "src/app"
    index_file: str = "index.php"
    layout_file: str = "layout.php"
    special_pages: Mapping[str, str] = field(default_factory=_default_special_pages)

    @property
    def root_prefix(self) -> str:
        """Normalized routes root with a trailing slash, or '' for the project root."""
        root = normalize_path(self.routes_root)
        return f"{root}/" if root else ""

    def strip(self, file_path: str, file_name: str) -> str | None:
        """Extract the route path between the routes root and file_name.

        Args:
            file_path: Normalized project-relative path.
            file_name: Expected trailing file name.

        Returns:
            The directory path inside the routes root ('' for the root
            itself), or None when file_path does not follow the convention.
        """
        prefix = self.root_prefix
        if file_path == prefix + file_name:
            return ""

        suffix = "/" + file_name
        if not file_path.startswith(prefix) or not file_path.endswith(suffix):
            return None
        return file_path[len(prefix) : -len(suffix)]


DEFAULT_CONVENTION = RouteConvention()


@dataclass(frozen=True)
class RouteDescriptor:
    """A compiled route derived from one index file.

    Attributes:
        url: Display URL (e.g., /users/{id})
        path: Route directory path below the routes root, '' for the root
        file_path: Normalized project-relative path of the index file
        is_dynamic: True if any segment captures part of the URL
        dynamic_segments: Names of captured segments, in path order
        pattern: Anchored regular expression source matching the URL
        route_groups: Names of route groups, in path order
        segments: Parsed segments of path
    """

    url: str
    path: str
    file_path: str
    is_dynamic: bool
    dynamic_segments: tuple[str, ...]
    pattern: str
    route_groups: tuple[str, ...]
    segments: tuple[PathSegment, ...] = ()

    def matches(self, url_path: str) -> bool:
        """Check if a concrete request path matches this route's pattern."""
        return re.match(self.pattern, url_path) is not None

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "path": self.path,
            "filePath": self.file_path,
            "isDynamic": self.is_dynamic,
            "dynamicSegments": list(self.dynamic_segments),
            "pattern": self.pattern,
            "routeGroups": list(self.route_groups),
        }


@dataclass(frozen=True)
class LayoutDescriptor:
    """A layout file listed for context. Layouts are never routes."""

    url: str
    path: str
    file_path: str
    route_groups: tuple[str, ...]

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": self.url,
            "path": self.path,
            "filePath": self.file_path,
            "routeGroups": list(self.route_groups),
        }


@dataclass(frozen=True)
class SpecialPage:
    """A reserved page such as the not-found or error page."""

    file_path: str
    special: str

    def to_dict(self) -> dict[str, Any]:
        return {
            "url": None,
            "path": None,
            "filePath": self.file_path,
            "special": self.special,
        }


@dataclass(frozen=True)
class RouteIssue:
    """A problem found while listing one input path.

    Attributes:
        file_path: The offending input, or None for whole-input problems.
        error: Exception value describing the problem. It is never raised.
    """

    file_path: str | None
    error: RoutingToolkitError

    def to_dict(self) -> dict[str, Any]:
        return {
            "file": self.file_path,
            "kind": type(self.error).__name__,
            "message": str(self.error),
        }


@dataclass(frozen=True)
class RouteListing:
    """Result of listing routes from a file list."""

    routes: tuple[RouteDescriptor, ...] = ()
    specials: tuple[SpecialPage, ...] = ()
    layouts: tuple[LayoutDescriptor, ...] = ()
    issues: tuple[RouteIssue, ...] = ()

    def to_dict(self, *, include_layouts: bool = False) -> dict[str, Any]:
        payload: dict[str, Any] = {
            "routes": [r.to_dict() for r in self.routes],
            "specials": [s.to_dict() for s in self.specials],
        }
        if include_layouts:
            payload["layouts"] = [layout.to_dict() for layout in self.layouts]
        if self.issues:
            payload["issues"] = [issue.to_dict() for issue in self.issues]
        return payload


def _root_route(file_path: str) -> RouteDescriptor:
    return RouteDescriptor(
        url="/",
        path="",
        file_path=file_path,
        is_dynamic=False,
        dynamic_segments=(),
        pattern="^/$",
        route_groups=(),
    )


def build_route(
    file_path: str,
    convention: RouteConvention = DEFAULT_CONVENTION,
) -> RouteDescriptor | None:
    """Compile an index file path into a RouteDescriptor.

    Args:
        file_path: Project-relative path, normalized or not.
        convention: Routes root and file naming to apply.

    Returns:
        RouteDescriptor, or None if file_path is not an index file under
        the routes root. '..' segments are collapsed first, so a path
        that climbs out of the routes root returns None.

    Raises:
        MalformedPathError: If file_path is empty after normalization.

    Examples:
        "src/app/index.php" -> url "/", pattern "^/$"
        "src/app/users/[id]/index.php" -> url "/users/{id}", pattern "^/users/([^/]+)$"
        "src/app/(marketing)/about/index.php" -> url "/about", route_groups ("marketing",)
    """
    normalized = resolve_path(file_path)
    if not normalized:
        raise MalformedPathError(f"Path is empty after normalization: {file_path!r}")

    route_path = convention.strip(normalized, convention.index_file)
    if route_path is None:
        return None
    if not route_path:
        return _root_route(normalized)

    segments = parse_path(route_path.split("/"))

    url = ""
    pattern = ""
    dynamic_segments: list[str] = []
    route_groups: list[str] = []

    for segment in segments:
        if segment.segment_type == SegmentType.GROUP:
            route_groups.append(segment.name)
            continue
        if segment.is_parameter:
            dynamic_segments.append(segment.name)
        url += f"/{segment.to_url_segment()}"
        pattern += f"/{segment.to_pattern_segment()}"

    return RouteDescriptor(
        url=_DUPLICATE_SLASHES.sub("/", url) or "/",
        path=route_path,
        file_path=normalized,
        is_dynamic=bool(dynamic_segments),
        dynamic_segments=tuple(dynamic_segments),
        # A route made only of groups serves the same URL as the root
        pattern=f"^{pattern or '/'}$",
        route_groups=tuple(route_groups),
        segments=tuple(segments),
    )


def require_route(
    file_path: str,
    convention: RouteConvention = DEFAULT_CONVENTION,
) -> RouteDescriptor:
    """Compile an index file path, raising if it is not a route.

    Raises:
        MalformedPathError: If file_path is empty after normalization.
        UnmatchedRouteConvention: If file_path is not a route index file.
    """
    route = build_route(file_path, convention)
    if route is None:
        raise UnmatchedRouteConvention(
            f"{file_path!r} is not a '{convention.index_file}' file under "
            f"'{convention.routes_root}'"
        )
    return route


def build_layout(
    file_path: str,
    convention: RouteConvention = DEFAULT_CONVENTION,
) -> LayoutDescriptor | None:
    """Describe a layout file, or return None if file_path is not one.

    The layout URL keeps every non-group segment as written, so
    "src/app/blog/[id]/layout.php" has url "/blog/[id]".
    """
    normalized = resolve_path(file_path)
    layout_path = convention.strip(normalized, convention.layout_file)
    if layout_path is None:
        return None

    route_groups: list[str] = []
    url = ""
    for segment in parse_path(layout_path.split("/")) if layout_path else []:
        if segment.segment_type == SegmentType.GROUP:
            route_groups.append(segment.name)
            continue
        url += f"/{segment.original}"

    return LayoutDescriptor(
        url=_DUPLICATE_SLASHES.sub("/", url) or "/",
        path=layout_path,
        file_path=normalized,
        route_groups=tuple(route_groups),
    )


def match_special_page(
    file_path: str,
    convention: RouteConvention = DEFAULT_CONVENTION,
) -> SpecialPage | None:
    """Recognize a reserved page by exact, case-insensitive path match."""
    normalized = resolve_path(file_path)
    for file_name, special in convention.special_pages.items():
        if normalized.lower() == (convention.root_prefix + file_name).lower():
            return SpecialPage(file_path=normalized, special=special)
    return None


def sort_routes(routes: Sequence[RouteDescriptor]) -> list[RouteDescriptor]:
    """Order routes static-first, then by URL.

    The sort is stable, so routes with equal keys keep their input order.
    """
    return sorted(routes, key=lambda r: (r.is_dynamic, r.url))


def _schema_issue(files: Any) -> RouteIssue | None:
    if not isinstance(files, list | tuple):
        return RouteIssue(
            file_path=None,
            error=SchemaError(f"File list must be an array of strings, got {type(files).__name__}"),
        )
    for index, item in enumerate(files):
        if not isinstance(item, str):
            return RouteIssue(
                file_path=None,
                error=SchemaError(
                    f"File list must be an array of strings, item {index} is "
                    f"{type(item).__name__}"
                ),
            )
    return None


def list_routes(
    files: Sequence[str],
    convention: RouteConvention = DEFAULT_CONVENTION,
    *,
    include_layouts: bool = False,
) -> RouteListing:
    """List routes, special pages and (optionally) layouts from a file list.

    Each path is processed on its own: a bad entry is reported as an
    issue and never affects the other entries.

    Args:
        files: Project-relative file paths.
        convention: Routes root and file naming to apply.
        include_layouts: Also describe layout files.

    Returns:
        RouteListing with routes sorted by sort_routes(), specials in
        convention order, layouts in input order, and any issues found.
    """
    if (schema_issue := _schema_issue(files)) is not None:
        logger.warning("Rejected file list", extra={"reason": str(schema_issue.error)})
        return RouteListing(issues=(schema_issue,))

    routes: list[RouteDescriptor] = []
    layouts: list[LayoutDescriptor] = []
    specials: dict[str, SpecialPage] = {}
    issues: list[RouteIssue] = []

    for raw in files:
        try:
            route = build_route(raw, convention)
        except MalformedPathError as exc:
            issues.append(RouteIssue(file_path=raw, error=exc))
            continue

        if route is not None:
            routes.append(route)
            if (catch_all := find_misplaced_catch_all(route.segments)) is not None:
                logger.warning(
                    "Catch-all segment is not the last URL segment",
                    extra={"file": route.file_path, "segment": catch_all.original},
                )
                issues.append(
                    RouteIssue(
                        file_path=route.file_path,
                        error=CatchAllPositionError(
                            f"Catch-all '{catch_all.original}' is not the last segment "
                            f"in '{route.path}'"
                        ),
                    )
                )

        if (special := match_special_page(raw, convention)) is not None:
            specials.setdefault(special.special, special)

        if include_layouts and (layout := build_layout(raw, convention)) is not None:
            layouts.append(layout)

    ordered_specials = tuple(
        specials[kind] for kind in convention.special_pages.values() if kind in specials
    )

    logger.info(
        "Listed routes",
        extra={
            "file_count": len(files),
            "route_count": len(routes),
            "special_count": len(ordered_specials),
            "issue_count": len(issues),
        },
    )

    return RouteListing(
        routes=tuple(sort_routes(routes)),
        specials=ordered_specials,
        layouts=tuple(layouts),
        issues=tuple(issues),
    )


def routes_as_map(listing: RouteListing, *, include_layouts: bool = False) -> dict[str, Any]:
    """Key a listing's records for lookup.

    Routes are keyed by URL, specials by "special:<kind>" and layouts by
    "layout:<url>". Later records replace earlier ones with the same key.
    """
    mapping: dict[str, Any] = {}
    for route in listing.routes:
        mapping[route.url] = route.to_dict()
    for special in listing.specials:
        mapping[f"special:{special.special}"] = special.to_dict()
    if include_layouts:
        for layout in listing.layouts:
            mapping[f"layout:{layout.url}"] = layout.to_dict()
    return mapping
