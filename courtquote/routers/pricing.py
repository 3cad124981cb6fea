from fastapi import APIRouter, Depends, HTTPException
from sqlalchemy.orm import Session

from ..catalog import load_catalog, seed_pricing
from ..config import settings
from ..database import get_db
from ..errors import CatalogUnavailable

router = APIRouter(prefix="/pricing", tags=["pricing"])


@router.get("/seed")
def seed_default_pricing(db: Session = Depends(get_db)):
    """Seed the default pricing catalog. Safe to run multiple times, an existing row is left alone."""
    seeded = seed_pricing(db, settings.PRICING_CATEGORY)
    return {"ok": True, "seeded": seeded, "category": settings.PRICING_CATEGORY}


@router.get("/")
def get_pricing(db: Session = Depends(get_db)):
    """The active catalog tables."""
    try:
        catalog = load_catalog(db, settings.PRICING_CATEGORY)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=404, detail=str(e))
    return {
        "category": catalog.category,
        "version": catalog.version,
        **catalog.to_dict(),
    }
