"""Typed view over a project's prisma-php.json."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any

from pphp_routes.core.routes import RouteConvention
from pphp_routes.exceptions import SchemaError

DEFAULT_ROUTES_ROOT = "src/app"


@dataclass(frozen=True)
class ProjectConfig:
    """Settings read from prisma-php.json.

    Attributes:
        project_name: ``projectName``, if set
        version: ``version``, if set
        exclude_files: ``excludeFiles`` entries, verbatim
        routes_root: ``routesRoot``, the directory holding route files
        raw: The whole decoded document
    """

    project_name: str | None = None
    version: str | None = None
    exclude_files: tuple[str, ...] = ()
    routes_root: str = DEFAULT_ROUTES_ROOT
    raw: Mapping[str, Any] = field(default_factory=dict, compare=False)

    @classmethod
    def from_mapping(cls, data: Any) -> "ProjectConfig":
        """Validate a decoded prisma-php.json document.

        Raises:
            SchemaError: If data is not an object, or a known field has the
                wrong type.
        """
        if not isinstance(data, dict):
            raise SchemaError(f"prisma-php.json must be a JSON object, got {type(data).__name__}")

        exclude_files = data.get("excludeFiles", [])
        if not isinstance(exclude_files, list) or not all(
            isinstance(entry, str) for entry in exclude_files
        ):
            raise SchemaError("excludeFiles must be an array of strings")

        routes_root = data.get("routesRoot", DEFAULT_ROUTES_ROOT)
        if not isinstance(routes_root, str):
            raise SchemaError(f"routesRoot must be a string, got {type(routes_root).__name__}")

        return cls(
            project_name=_optional_str(data, "projectName"),
            version=_optional_str(data, "version"),
            exclude_files=tuple(exclude_files),
            routes_root=routes_root,
            raw=data,
        )

    def route_convention(self) -> RouteConvention:
        return RouteConvention(routes_root=self.routes_root)


def _optional_str(data: Mapping[str, Any], key: str) -> str | None:
    value = data.get(key)
    if value is not None and not isinstance(value, str):
        raise SchemaError(f"{key} must be a string, got {type(value).__name__}")
    return value
