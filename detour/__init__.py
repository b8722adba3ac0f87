"""
Permanent Detour

A tiny FastAPI service which redirects requests for a legacy library
catalogue (III Sierra WebPAC, Voyager WebVoyage) to the equivalent Primo VE
pages, keeping old permalinks and bookmarked searches working after a
catalogue migration.

Packages:
- api: FastAPI router, redirect and advanced search services
- core: Settings, the legacy ID map and redirect rule sets
- schemas: Pydantic schemas for translated searches
- utils: ID parsing, file and logging helpers
- cli: Command-line interface

Usage:
    # Run the server
    permanentdetour serve --primo myinst --vid 01MYINST_INST:VU1 mappings.csv

    # Or with uvicorn, configured from PERMANENTDETOUR_* variables
    uvicorn --factory detour.main:create_app_from_env
"""

__version__ = "0.1.0"
