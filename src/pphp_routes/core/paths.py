"""Lexical path helpers shared by the route and exclusion pipelines.

All functions here work on strings only. Nothing touches the filesystem,
so results do not depend on the host platform or the working directory.
"""

import re

_DRIVE_PATTERN = re.compile(r"^[A-Za-z]:(?:/|$)")


def normalize_path(path: str) -> str:
    """Normalize a path to forward slashes with no empty or '.' segments.

    Back-slashes become forward slashes, repeated separators collapse,
    and leading or interior './' segments are dropped. A trailing slash
    is dropped as well. '..' segments are kept; see resolve_path().

    Args:
        path: Any path string, relative or absolute.

    Returns:
        The canonical path, or an empty string for empty input.

    Examples:
        "./src//app\\index.php" -> "src/app/index.php"
        "/var/www/./site/" -> "/var/www/site"
        "./" -> ""
    """
    if not path:
        return ""

    posix = path.replace("\\", "/")
    parts = [part for part in posix.split("/") if part not in ("", ".")]
    normalized = "/".join(parts)

    if posix.startswith("/"):
        return "/" + normalized
    return normalized


def is_absolute_path(path: str) -> bool:
    """Check if a path is absolute in either POSIX or Windows drive form."""
    posix = path.replace("\\", "/")
    return posix.startswith("/") or bool(_DRIVE_PATTERN.match(posix))


def resolve_path(path: str, base: str = "") -> str:
    """Resolve a path against a base directory without touching the disk.

    Relative paths are joined onto base; '..' segments are collapsed
    lexically. An absolute path ignores base.

    Args:
        path: Path to resolve.
        base: Directory that relative paths are relative to.

    Returns:
        Normalized resolved path.

    Examples:
        ("src/../lib/a.php", "/proj") -> "/proj/lib/a.php"
        ("/etc/hosts", "/proj") -> "/etc/hosts"
    """
    normalized = normalize_path(path)
    if base and not is_absolute_path(normalized):
        normalized = normalize_path(f"{base}/{normalized}")
    return _collapse_parent_refs(normalized)


def relative_to_root(path: str, root: str, *, case_insensitive: bool = False) -> str | None:
    """Express a resolved path relative to a resolved root.

    Args:
        path: Resolved path (see resolve_path()).
        root: Resolved project root.
        case_insensitive: Compare path prefixes ignoring case.

    Returns:
        The root-relative path ('' for the root itself), or None when
        path lies outside root.
    """
    if _fold(path, case_insensitive) == _fold(root, case_insensitive):
        return ""

    prefix = root if root.endswith("/") else root + "/"
    head = path[: len(prefix)]
    if _fold(head, case_insensitive) == _fold(prefix, case_insensitive):
        return path[len(prefix) :]
    return None


def _fold(value: str, case_insensitive: bool) -> str:
    return value.lower() if case_insensitive else value


def _split_anchor(path: str) -> tuple[str, str]:
    """Split a normalized path into its absolute anchor and the remainder."""
    if path.startswith("/"):
        return "/", path[1:]
    if _DRIVE_PATTERN.match(path):
        drive, _, rest = path.partition("/")
        return drive + "/", rest
    return "", path


def _collapse_parent_refs(path: str) -> str:
    anchor, rest = _split_anchor(path)
    stack: list[str] = []

    for part in rest.split("/") if rest else []:
        if part != "..":
            stack.append(part)
        elif stack and stack[-1] != "..":
            stack.pop()
        elif not anchor:
            # '..' above a relative start cannot be collapsed
            stack.append(part)

    if anchor.endswith(":/"):
        # Drive roots normalize without a trailing slash ("C:")
        return "/".join([anchor[:-1], *stack])
    return anchor + "/".join(stack)
