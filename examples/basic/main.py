"""Basic example serving the route tools for a sample project.

This minimal FastAPI application mounts create_tools_router() on the
project/ directory next to this file.

Run with:
    uvicorn main:app --reload

Available endpoints:
    GET  /pphp/routes        - List routes (?include_layouts, ?verify_files, ?as_map)
    POST /pphp/files/filter  - Split files into included and skipped
    GET  /pphp/config        - Raw prisma-php.json
"""

from pathlib import Path

from fastapi import FastAPI

from pphp_routes import create_tools_router

app = FastAPI(title="Basic Example")
app.include_router(create_tools_router(Path(__file__).parent / "project", prefix="/pphp"))
