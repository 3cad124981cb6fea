"""
Quotation record builder: canonical request + cost breakdown -> Quotation.

Every record carries both schema generations so a reader written against
either one sees correct data:

  projectInfo:  sport        + gameType (same value)
  requirements: additionalFeatures{...} + lighting / roof blocks
                legacy list kept as legacyAdditionalFeatures
  pricing:      shedCost     + roofCost (same value)
"""

import logging
from datetime import datetime

from . import models
from .config import settings
from .errors import DuplicateQuotationNumber, PersistenceUnavailable
from .estimator import EstimationEngine
from .schemas import CanonicalRequest, CostBreakdown, FeatureOption

logger = logging.getLogger(__name__)

NUMBER_WIDTH = 6


def format_quotation_number(sequence: int, prefix: str = None) -> str:
    """NXR000001 style: prefix plus the sequence zero-padded to six digits."""
    if prefix is None:
        prefix = settings.QUOTATION_PREFIX
    return f"{prefix}{str(sequence).zfill(NUMBER_WIDTH)}"


class QuotationBuilder:

    def __init__(self, prefix: str = None):
        self.prefix = settings.QUOTATION_PREFIX if prefix is None else prefix

    def build(
        self,
        request: CanonicalRequest,
        breakdown: CostBreakdown,
        prior_count: int,
        area: float,
    ) -> models.Quotation:
        """
        Assemble an unsaved Quotation numbered prior_count + 1.

        area is the resolved court area the breakdown was priced with; it is
        recorded on base/flooring so the document prints what was charged.
        """
        client = request.client_info
        project = request.project_info

        return models.Quotation(
            quotation_number=format_quotation_number(prior_count + 1, self.prefix),
            status=models.QuotationStatus.PENDING.value,
            created_at=datetime.utcnow(),
            client_name=client.name,
            client_email=client.email,
            client_phone=client.phone,
            client_address=client.address,
            sport=project.sport,
            game_type=project.sport,
            construction_type=project.construction_type,
            court_size=project.court_size,
            court_type=project.court_type,
            custom_area=project.custom_area,
            court_area=area,
            feature_shape=request.feature_shape.value,
            project_json=_project_document(request),
            requirements_json=_requirements_document(request, area),
            base_cost=breakdown.base_cost,
            flooring_cost=breakdown.flooring_cost,
            equipment_cost=breakdown.equipment_cost,
            drainage_cost=breakdown.drainage_cost,
            fencing_cost=breakdown.fencing_cost,
            lighting_cost=breakdown.lighting_cost,
            shed_cost=breakdown.shed_cost,
            roof_cost=breakdown.roof_cost,
            additional_cost=breakdown.additional_cost,
            total_cost=breakdown.total_cost,
        )


def issue_quotation(repository, request: CanonicalRequest, engine: EstimationEngine,
                    builder: QuotationBuilder = None, max_attempts: int = None) -> models.Quotation:
    """
    Price, number and persist a quotation.

    A number collision means an older record already holds the reserved
    number; reserve the next one and try again. Raises PersistenceUnavailable
    once max_attempts reservations have all collided.
    """
    builder = builder or QuotationBuilder()
    attempts = max_attempts or settings.NUMBERING_MAX_ATTEMPTS

    area = engine.resolve_area(request)
    breakdown = engine.estimate(request)

    for attempt in range(1, attempts + 1):
        prior_count = repository.reserve_prior_count()
        quotation = builder.build(request, breakdown, prior_count, area)
        try:
            saved = repository.insert(quotation)
        except DuplicateQuotationNumber as e:
            logger.warning(
                "Quotation number %s taken (attempt %d/%d), reserving another",
                e.quotation_number, attempt, attempts,
            )
            continue
        logger.info("Issued quotation %s total=%s", saved.quotation_number, saved.total_cost)
        return saved

    raise PersistenceUnavailable("Could not allocate a quotation number, please retry")


# --- Record documents ---

def _feature_dict(option: FeatureOption, sizing_field: str) -> dict:
    return {
        "required": option.required,
        "type": option.type,
        sizing_field: getattr(option, sizing_field),
    }


def _project_document(request: CanonicalRequest) -> dict:
    project = request.project_info
    return {
        "constructionType": project.construction_type,
        "sport": project.sport,
        "courtSize": project.court_size,
        "customArea": project.custom_area,
        "gameType": project.sport,
        "courtType": project.court_type,
    }


def _requirements_document(request: CanonicalRequest, area: float) -> dict:
    requirements = request.requirements
    features = requirements.additional_features
    return {
        "base": {"type": requirements.base.type, "area": area},
        "flooring": {"type": requirements.flooring.type, "area": area},
        "equipment": [
            {
                "id": item.id,
                "name": item.name,
                "quantity": item.quantity,
                "unitCost": item.unit_cost,
                "totalCost": item.total_cost,
            }
            for item in requirements.equipment
        ],
        "additionalFeatures": {
            "drainage": _feature_dict(features.drainage, "area"),
            "fencing": _feature_dict(features.fencing, "length"),
            "lighting": _feature_dict(features.lighting, "quantity"),
            "shed": _feature_dict(features.shed, "area"),
        },
        "lighting": _feature_dict(requirements.lighting, "quantity"),
        "roof": _feature_dict(requirements.roof, "area"),
        "legacyAdditionalFeatures": [
            {"name": feature.name, "cost": feature.cost}
            for feature in requirements.legacy_features
        ],
        "featureShape": request.feature_shape.value,
    }


def quotation_to_dict(q: models.Quotation) -> dict:
    """
    The persisted record as the API returns it and the renderer reads it.

    requirements.additionalFeatures is always the object form. A legacy
    submission's {name, cost} array is under
    requirements.legacyAdditionalFeatures, and its total is pricing.additionalCost.
    """
    return {
        "id": q.id,
        "quotationNumber": q.quotation_number,
        "status": q.status,
        "createdAt": q.created_at.isoformat() if q.created_at else None,
        "clientInfo": {
            "name": q.client_name,
            "email": q.client_email,
            "phone": q.client_phone,
            "address": q.client_address,
        },
        "projectInfo": dict(q.project_json or {}),
        "requirements": dict(q.requirements_json or {}),
        "pricing": {
            "baseCost": q.base_cost,
            "flooringCost": q.flooring_cost,
            "equipmentCost": q.equipment_cost,
            "drainageCost": q.drainage_cost,
            "fencingCost": q.fencing_cost,
            "lightingCost": q.lighting_cost,
            "shedCost": q.shed_cost,
            "roofCost": q.roof_cost,
            "additionalCost": q.additional_cost,
            "totalCost": q.total_cost,
        },
    }
