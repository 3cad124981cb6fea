from fastapi import APIRouter, Body, Depends, HTTPException
from fastapi.responses import Response
from sqlalchemy.orm import Session

from ..catalog import load_catalog
from ..config import settings
from ..database import get_db
from ..errors import CatalogUnavailable, PersistenceUnavailable, QuotationValidationError
from ..estimator import EstimationEngine
from ..normalizer import normalize_request
from ..pdf_generator import generate_quotation_pdf
from ..quotation_builder import issue_quotation, quotation_to_dict
from ..repository import QuotationRepository
from ..sports import SPORTS, priced_equipment

router = APIRouter(prefix="/quotations", tags=["quotations"])


def _catalog(db: Session):
    try:
        return load_catalog(db, settings.PRICING_CATEGORY)
    except CatalogUnavailable as e:
        raise HTTPException(status_code=500, detail=str(e))


def _normalized(payload: dict):
    try:
        return normalize_request(payload)
    except QuotationValidationError as e:
        raise HTTPException(status_code=400, detail={"message": e.message, "code": e.code})


@router.get("/sports-config")
def sports_config():
    return {"sports": SPORTS}


@router.get("/equipment/{sport}")
def sport_equipment(sport: str, db: Session = Depends(get_db)):
    """Default equipment for a sport, priced from the catalog."""
    return priced_equipment(sport, _catalog(db))


@router.post("/estimate")
def estimate_quotation(payload: dict = Body(...), db: Session = Depends(get_db)):
    """Price a request without creating a quotation."""
    request = _normalized(payload)
    engine = EstimationEngine(_catalog(db))
    breakdown = engine.estimate(request)
    return {
        "area": engine.resolve_area(request),
        "featureShape": request.feature_shape.value,
        "pricing": breakdown.to_pricing_dict(),
    }


@router.post("/", status_code=201)
def create_quotation(payload: dict = Body(...), db: Session = Depends(get_db)):
    """
    Create a quotation from a legacy- or current-shape request.

    400 for missing client info / sport / base & flooring,
    500 when pricing data is unavailable, 503 when the store is.
    """
    request = _normalized(payload)
    engine = EstimationEngine(_catalog(db))
    try:
        quotation = issue_quotation(QuotationRepository(db), request, engine)
    except PersistenceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return quotation_to_dict(quotation)


@router.get("/")
def list_quotations(skip: int = 0, limit: int = 50, db: Session = Depends(get_db)):
    try:
        quotations = QuotationRepository(db).list(skip=skip, limit=limit)
    except PersistenceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    return [quotation_to_dict(q) for q in quotations]


def _get_or_404(quotation_number: str, db: Session):
    try:
        quotation = QuotationRepository(db).get(quotation_number)
    except PersistenceUnavailable as e:
        raise HTTPException(status_code=503, detail=str(e))
    if not quotation:
        raise HTTPException(status_code=404, detail="Quotation not found")
    return quotation


@router.get("/{quotation_number}")
def get_quotation(quotation_number: str, db: Session = Depends(get_db)):
    return quotation_to_dict(_get_or_404(quotation_number, db))


@router.get("/{quotation_number}/pdf")
def download_pdf(quotation_number: str, db: Session = Depends(get_db)):
    """Render the quotation as a PDF attachment."""
    quotation = _get_or_404(quotation_number, db)
    pdf_bytes = generate_quotation_pdf(quotation_to_dict(quotation))
    filename = f"Quotation-{quotation.quotation_number}.pdf"
    return Response(
        content=pdf_bytes,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
