"""FastAPI integration for pphp-routes."""

from pphp_routes.fastapi.router import create_tools_router

__all__ = ["create_tools_router"]
