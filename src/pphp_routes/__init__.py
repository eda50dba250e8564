"""Route listing and file exclusion tools for Prisma PHP projects."""

# Primary API — the pure pipelines
from pphp_routes.config import ProjectConfig
from pphp_routes.core.excludes import (
    ExcludeKind,
    Excluded,
    ExclusionRule,
    FilterResult,
    Included,
    compile_exclusion_rules,
    evaluate_exclusion,
    filter_files,
)
from pphp_routes.core.parser import PathSegment, SegmentType, parse_path_segment
from pphp_routes.core.paths import normalize_path
from pphp_routes.core.routes import (
    LayoutDescriptor,
    RouteConvention,
    RouteDescriptor,
    RouteListing,
    SpecialPage,
    build_route,
    list_routes,
    routes_as_map,
    sort_routes,
)

# Exceptions — for error handling
from pphp_routes.exceptions import (
    CatchAllPositionError,
    FileListNotFoundError,
    MalformedPathError,
    ProjectNotFoundError,
    RoutingToolkitError,
    SchemaError,
    UnmatchedRouteConvention,
)

# HTTP surface and project loading
from pphp_routes.fastapi.router import create_tools_router
from pphp_routes.project import find_project_root, load_config, load_file_list

__all__ = [
    # Route compiler
    "build_route",
    "list_routes",
    "routes_as_map",
    "sort_routes",
    "LayoutDescriptor",
    "PathSegment",
    "RouteConvention",
    "RouteDescriptor",
    "RouteListing",
    "SegmentType",
    "SpecialPage",
    "normalize_path",
    "parse_path_segment",
    # Exclusion matcher
    "compile_exclusion_rules",
    "evaluate_exclusion",
    "filter_files",
    "ExcludeKind",
    "Excluded",
    "ExclusionRule",
    "FilterResult",
    "Included",
    # Project
    "ProjectConfig",
    "create_tools_router",
    "find_project_root",
    "load_config",
    "load_file_list",
    # Exceptions
    "CatchAllPositionError",
    "FileListNotFoundError",
    "MalformedPathError",
    "ProjectNotFoundError",
    "RoutingToolkitError",
    "SchemaError",
    "UnmatchedRouteConvention",
]

__version__ = "0.1.0"
