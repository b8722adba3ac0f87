from __future__ import annotations

from fastapi import Request

from detour.api.services.redirect_service import Detourer


def get_detourer(request: Request) -> Detourer:
    return request.app.state.detourer
