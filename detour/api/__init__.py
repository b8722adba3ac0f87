"""
Detour API Package

This package contains the FastAPI application components: the catch-all
redirect router, the services that build redirects, and dependencies.

Subpackages:
- routers: FastAPI route definitions
- services: Request translation logic

Modules:
- deps: Dependency injection utilities
"""
