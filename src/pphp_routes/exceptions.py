"""Exception hierarchy for route listing and exclusion errors."""


class RoutingToolkitError(Exception):
    """Base exception for all pphp-routes errors.

    Catching this exception will catch every error raised by the
    package, and every error value stored in a result's issue list.

    Example:
        try:
            config = load_config(root)
        except RoutingToolkitError as e:
            logger.error(f"Cannot inspect project: {e}")
    """


class SchemaError(RoutingToolkitError):
    """Raised when input data has the wrong shape.

    Examples:
        - files-list.json is not a JSON array of strings
        - excludeFiles in prisma-php.json is not a list of strings

    Example:
        SchemaError("files-list.json must be a JSON array of strings, got dict")
    """


class MalformedPathError(RoutingToolkitError):
    """Raised when a path cannot be used by the operation that received it.

    Example:
        MalformedPathError("Path is empty after normalization: './'")
    """


class CatchAllPositionError(MalformedPathError):
    """Reported when a catch-all segment is followed by further segments.

    The route still compiles, but its catch-all group absorbs every
    literal segment that comes after it.

    Example:
        CatchAllPositionError(
            "Catch-all '[...slug]' is not the last segment in 'docs/[...slug]/edit'"
        )
    """


class UnmatchedRouteConvention(RoutingToolkitError):
    """Raised when a path is not a route file under the routes root.

    Batch listing filters such paths out silently. Only
    ``require_route`` raises it.

    Example:
        UnmatchedRouteConvention("'src/lib/util.php' is not a route index file")
    """


class ProjectNotFoundError(RoutingToolkitError):
    """Raised when no prisma-php.json exists at or above the workspace.

    Example:
        ProjectNotFoundError("Not a Prisma PHP project: prisma-php.json not found in /work")
    """


class FileListNotFoundError(RoutingToolkitError):
    """Raised when settings/files-list.json does not exist.

    Example:
        FileListNotFoundError("Missing ./settings/files-list.json; cannot list routes.")
    """
