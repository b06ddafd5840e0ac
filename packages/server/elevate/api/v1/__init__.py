"""
API v1 Router

Owner endpoints live under their entity prefix; team membership shares the
/teams prefix.
"""

from fastapi import APIRouter
from . import arts, organizations, teams

router = APIRouter()

router.include_router(organizations.router, prefix="/organizations", tags=["Organizations"])
router.include_router(arts.router, prefix="/arts", tags=["ARTs"])
router.include_router(teams.router, prefix="/teams", tags=["Teams"])


@router.get("/", tags=["API"])
async def api_root():
    """API root: version and available endpoints."""
    return {
        "api": "v1",
        "version": "0.1.0",
        "endpoints": [
            "/organizations/{organization_key}/owners",
            "/arts/{art_key}/owners",
            "/teams/{team_key}/owners",
            "/teams/{team_key}/members",
        ],
    }
