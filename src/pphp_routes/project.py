"""Project discovery and the files the route tools read.

This is the only module that touches the filesystem. Everything it
returns is plain data for the pure pipelines in ``pphp_routes.core``.
"""

import json
import logging
from collections.abc import Iterable
from pathlib import Path
from typing import Any

from pphp_routes.config import ProjectConfig
from pphp_routes.exceptions import FileListNotFoundError, ProjectNotFoundError, SchemaError

logger = logging.getLogger(__name__)

CONFIG_FILE = "prisma-php.json"
FILE_LIST = Path("settings") / "files-list.json"


def find_project_root(start: str | Path | None = None) -> Path:
    """Find the nearest directory at or above start holding prisma-php.json.

    Returns:
        The project root, or the resolved start directory when no config
        file exists on the way up.
    """
    start_dir = Path(start or Path.cwd()).resolve()
    for directory in (start_dir, *start_dir.parents):
        if (directory / CONFIG_FILE).is_file():
            return directory
    return start_dir


def load_config(root: str | Path) -> ProjectConfig | None:
    """Read prisma-php.json from the project root.

    Returns:
        ProjectConfig, or None when the file does not exist.

    Raises:
        SchemaError: If the file is not valid JSON or has the wrong shape.
    """
    config_path = Path(root) / CONFIG_FILE
    if not config_path.is_file():
        return None

    try:
        data = json.loads(config_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON in {config_path}: {exc}") from exc

    config = ProjectConfig.from_mapping(data)
    logger.debug(
        "Loaded project config",
        extra={"path": str(config_path), "exclude_count": len(config.exclude_files)},
    )
    return config


def require_config(root: str | Path) -> ProjectConfig:
    """Read prisma-php.json, raising if the project has none.

    Raises:
        ProjectNotFoundError: If prisma-php.json does not exist.
        SchemaError: If the file is not valid JSON or has the wrong shape.
    """
    config = load_config(root)
    if config is None:
        raise ProjectNotFoundError(
            f"Not a Prisma PHP project: {CONFIG_FILE} was not found in {Path(root)}"
        )
    return config


def load_file_list(root: str | Path) -> list[str]:
    """Read settings/files-list.json.

    Raises:
        FileListNotFoundError: If the file does not exist.
        SchemaError: If the file is not a JSON array of strings.
    """
    list_path = Path(root) / FILE_LIST
    if not list_path.is_file():
        raise FileListNotFoundError(
            f"Missing ./{FILE_LIST.as_posix()}; cannot list routes. Generate this file and retry."
        )

    try:
        data = json.loads(list_path.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        raise SchemaError(f"Invalid JSON in {FILE_LIST.as_posix()}: {exc}") from exc

    if not isinstance(data, list) or not all(isinstance(item, str) for item in data):
        raise SchemaError(
            f"{FILE_LIST.as_posix()} must be a JSON array of strings (relative file paths)"
        )
    return data


def annotate_exists(root: str | Path, records: Iterable[dict[str, Any]]) -> None:
    """Add an ``exists`` flag to serialized records in place.

    Each record's ``filePath`` is resolved against root.
    """
    base = Path(root)
    for record in records:
        file_path = record.get("filePath")
        if isinstance(file_path, str):
            record["exists"] = (base / file_path).exists()
