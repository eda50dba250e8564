"""Router factory exposing the route tools over HTTP.

Composes project loading, the route compiler and the exclusion matcher
into a FastAPI router. Config and the file list are read on every
request, so edits to the project show up without a restart.
"""

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from pathlib import Path
from typing import Any

from fastapi import APIRouter, HTTPException
from pydantic import BaseModel, Field

from pphp_routes.core.excludes import compile_exclusion_rules, filter_files
from pphp_routes.core.routes import list_routes, routes_as_map
from pphp_routes.exceptions import (
    FileListNotFoundError,
    ProjectNotFoundError,
    RoutingToolkitError,
    SchemaError,
)
from pphp_routes.project import annotate_exists, load_config, load_file_list, require_config

logger = logging.getLogger(__name__)


class FilterFilesRequest(BaseModel):
    """Body of POST /files/filter."""

    files: list[str] = Field(default_factory=list)
    base: str | None = None


# Error type -> HTTP status for errors raised while reading the project
ERROR_STATUS_CODES: dict[type[RoutingToolkitError], int] = {
    ProjectNotFoundError: 404,
    FileListNotFoundError: 404,
    SchemaError: 422,
}


@contextmanager
def _http_errors() -> Iterator[None]:
    """Translate toolkit errors into HTTP errors with a detail message."""
    try:
        yield
    except RoutingToolkitError as exc:
        status_code = 500
        for error_type, code in ERROR_STATUS_CODES.items():
            if isinstance(exc, error_type):
                status_code = code
                break
        logger.warning(
            "Route tool request failed",
            extra={"error": type(exc).__name__, "status_code": status_code},
        )
        raise HTTPException(status_code=status_code, detail=str(exc)) from exc


def create_tools_router(
    root: str | Path,
    *,
    prefix: str = "",
    case_insensitive: bool = False,
) -> APIRouter:
    """Create a FastAPI APIRouter serving route listing and file filtering.

    Args:
        root: Project root holding prisma-php.json.
        prefix: Optional URL prefix for all endpoints.
        case_insensitive: Compare paths ignoring case when filtering files.

    Returns:
        An APIRouter with GET /routes, POST /files/filter and GET /config.

    Example:
        from fastapi import FastAPI
        from pphp_routes import create_tools_router, find_project_root

        app = FastAPI()
        app.include_router(create_tools_router(find_project_root()), prefix="/pphp")
    """
    base = Path(root).resolve()
    router = APIRouter(prefix=prefix)

    @router.get("/routes", tags=["routes"])
    def get_routes(
        verify_files: bool = False,
        include_layouts: bool = False,
        as_map: bool = False,
    ) -> dict[str, Any]:
        """List file-based routes from settings/files-list.json.

        Layouts are skipped unless requested; not-found.php and error.php
        are reported as special pages.
        """
        with _http_errors():
            config = require_config(base)
            files = load_file_list(base)

        listing = list_routes(files, config.route_convention(), include_layouts=include_layouts)

        if as_map:
            payload = routes_as_map(listing, include_layouts=include_layouts)
            records = list(payload.values())
        else:
            payload = listing.to_dict(include_layouts=include_layouts)
            records = [*payload["routes"], *payload["specials"], *payload.get("layouts", [])]

        if verify_files:
            annotate_exists(base, records)

        return payload

    @router.post("/files/filter", tags=["files"])
    def post_filter_files(request: FilterFilesRequest) -> dict[str, Any]:
        """Split files into included and skipped using excludeFiles."""
        with _http_errors():
            config = require_config(base)
            rules = compile_exclusion_rules(
                config.exclude_files,
                base.as_posix(),
                case_insensitive=case_insensitive,
            )

        result = filter_files(
            request.files,
            rules,
            base.as_posix(),
            base=request.base,
            exclude_files=config.exclude_files,
        )
        return result.to_dict()

    @router.get("/config", tags=["config"])
    def get_config() -> dict[str, Any]:
        """Return the raw contents of prisma-php.json, or {} when absent."""
        with _http_errors():
            config = load_config(base)
        return dict(config.raw) if config is not None else {}

    logger.info(
        "Created route tools router",
        extra={"root": str(base), "prefix": prefix or "(none)"},
    )

    return router
