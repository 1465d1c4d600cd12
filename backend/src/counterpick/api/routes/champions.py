"""Champion catalog endpoints."""

from typing import Optional

from fastapi import APIRouter, HTTPException, Request

from counterpick.utils.role_normalizer import normalize_role

router = APIRouter(prefix="/api/champions", tags=["champions"])


@router.get("")
async def list_champions(request: Request, role: Optional[str] = None):
    """List the champion catalog, optionally filtered by role."""
    catalog = request.app.state.catalog
    if role is None:
        champions = catalog.all()
    else:
        if normalize_role(role) is None:
            raise HTTPException(status_code=400, detail=f"Unknown role: {role}")
        champions = catalog.by_role(role)
    return {"champions": [c.to_dict() for c in champions], "count": len(champions)}
