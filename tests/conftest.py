"""Shared pytest fixtures for pphp-routes tests."""

import json
from pathlib import Path
from typing import Any

import pytest


@pytest.fixture
def create_project(tmp_path: Path):
    """Create a Prisma PHP project skeleton in tmp_path.

    Returns a callable that accepts:
    - config: dict written to prisma-php.json (None to omit the file)
    - files: list written to settings/files-list.json (None to omit it)
    - touch: relative paths of files to create on disk

    Returns the project root.
    """

    def _create(
        config: dict[str, Any] | None = None,
        files: Any = None,
        touch: list[str] | None = None,
    ) -> Path:
        if config is not None:
            (tmp_path / "prisma-php.json").write_text(json.dumps(config))

        if files is not None:
            settings = tmp_path / "settings"
            settings.mkdir(exist_ok=True)
            (settings / "files-list.json").write_text(json.dumps(files))

        for rel in touch or []:
            target = tmp_path / rel
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text("<?php\n")

        return tmp_path

    return _create


@pytest.fixture
def sample_files() -> list[str]:
    """Return a files-list.json payload covering every route shape."""
    return [
        "./src/app/index.php",
        "./src/app/layout.php",
        "./src/app/not-found.php",
        "./src/app/error.php",
        "./src/app/users/index.php",
        "./src/app/users/[id]/index.php",
        "./src/app/blog/[...slug]/index.php",
        "./src/app/(marketing)/about/index.php",
        "./src/app/(marketing)/layout.php",
        "./src/app/css/tailwind.css",
        "./src/Lib/Auth/Auth.php",
    ]
