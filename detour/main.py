# detour/main.py
from __future__ import annotations

from typing import Optional

from fastapi import FastAPI

from detour import __version__
from detour.api.routers.redirect_router import router as redirect_router
from detour.api.services.redirect_service import Detourer
from detour.core.id_map import IdMap, load_id_map_files
from detour.core.rule_sets import get_rule_set
from detour.core.settings import Settings, get_settings


def create_app(settings: Settings, id_map: Optional[IdMap] = None) -> FastAPI:
    """
    Build the redirect app.

    The ID map is loaded from settings.mapping_files unless one is passed
    in. Loading happens here, before the app exists, so a bad mapping file
    stops startup instead of serving with a partial map.
    """
    if id_map is None:
        id_map = load_id_map_files(settings.mapping_files)

    detourer = Detourer(
        id_map=id_map,
        rule_set=get_rule_set(settings.rule_set),
        base_url=settings.destination_base_url,
        vid=settings.vid,
        status_code=settings.redirect_status_code,
    )

    # No docs routes: every path belongs to the legacy catalogue
    app = FastAPI(
        title="Permanent Detour",
        version=__version__,
        docs_url=None,
        redoc_url=None,
        openapi_url=None,
    )
    app.state.settings = settings
    app.state.detourer = detourer

    app.include_router(redirect_router)

    return app


def create_app_from_env() -> FastAPI:
    """Uvicorn factory: uvicorn --factory detour.main:create_app_from_env"""
    return create_app(get_settings())
