"""
Estimation engine: CanonicalRequest + PricingCatalog -> CostBreakdown.

Pure math, no I/O. Area × rate for the court itself, rate × sizing field for
each add-on, client line totals for equipment.

Every line is rounded on its own (half up) so a printed line always matches
its rate × quantity; the total is the exact sum of the rounded lines and can
differ by ±1 from rounding the unrounded sum once.
"""

import logging
import math

from .catalog import PricingCatalog
from .models import FeatureShape
from .schemas import CanonicalRequest, CostBreakdown

logger = logging.getLogger(__name__)

DEFAULT_AREA = 100.0
DRAINAGE_KEY = "drainage-system"


def round_currency(amount: float) -> int:
    """Round to the nearest whole currency unit, halves up."""
    whole = math.floor(amount)
    return int(whole + 1) if amount - whole >= 0.5 else int(whole)


class EstimationEngine:
    """
    Turns a canonical request into an itemized cost breakdown.
    Never raises for a well-formed request: unknown types price at 0.
    """

    def __init__(self, catalog: PricingCatalog):
        self.catalog = catalog

    def resolve_area(self, request: CanonicalRequest) -> float:
        """
        Standard construction uses the catalog area for the sport; anything
        else uses the client's custom area. Both fall back to DEFAULT_AREA
        when zero. A negative custom area is not clamped and prices negative.
        """
        project = request.project_info
        if project.construction_type == "standard":
            return self.catalog.standard_area(project.sport) or DEFAULT_AREA
        return project.custom_area or DEFAULT_AREA

    def estimate(self, request: CanonicalRequest) -> CostBreakdown:
        area = self.resolve_area(request)
        requirements = request.requirements

        costs = {
            "base_cost": round_currency(self.catalog.base_rate(requirements.base.type) * area),
            "flooring_cost": round_currency(self.catalog.flooring_rate(requirements.flooring.type) * area),
            "equipment_cost": self._calculate_equipment_cost(requirements.equipment),
        }

        if request.feature_shape == FeatureShape.CURRENT:
            costs.update(self._calculate_current_features(request, area))
        else:
            costs.update(self._calculate_legacy_features(request, area))

        breakdown = CostBreakdown(total_cost=sum(costs.values()), **costs)
        logger.info(
            "Estimated %s (%s, area %s): %s",
            request.project_info.sport, request.project_info.construction_type,
            area, breakdown.to_pricing_dict(),
        )
        return breakdown

    def _calculate_equipment_cost(self, equipment: list) -> float:
        """Sum of client-supplied line totals, not recomputed from unit cost."""
        return sum(item.total_cost for item in equipment)

    def _calculate_current_features(self, request: CanonicalRequest, area: float) -> dict:
        features = request.requirements.additional_features
        costs = {"drainage_cost": 0, "fencing_cost": 0, "lighting_cost": 0, "shed_cost": 0}

        if features.drainage.required:
            costs["drainage_cost"] = round_currency(self.catalog.feature_rate(DRAINAGE_KEY) * area)

        fencing = features.fencing
        if fencing.required and fencing.type:
            costs["fencing_cost"] = round_currency(
                self.catalog.feature_rate(fencing.type) * (fencing.length or 0)
            )

        lighting = features.lighting
        if lighting.required and lighting.type:
            costs["lighting_cost"] = round_currency(
                self.catalog.feature_rate(lighting.type) * (lighting.quantity or 1)
            )

        shed = features.shed
        if shed.required and shed.type:
            costs["shed_cost"] = round_currency(
                self.catalog.feature_rate(shed.type) * (shed.area or area)
            )

        return costs

    def _calculate_legacy_features(self, request: CanonicalRequest, area: float) -> dict:
        requirements = request.requirements
        costs = {"lighting_cost": 0, "shed_cost": 0, "additional_cost": 0}

        lighting = requirements.lighting
        if lighting.required and lighting.type:
            costs["lighting_cost"] = round_currency(
                self.catalog.lighting_rate(lighting.type) * (lighting.quantity or 1)
            )

        # Legacy roof prices into the shed line
        roof = requirements.roof
        if roof.required and roof.type:
            costs["shed_cost"] = round_currency(
                self.catalog.roof_rate(roof.type) * (roof.area or area)
            )

        costs["additional_cost"] = sum(feature.cost for feature in requirements.legacy_features)
        return costs


def estimate(request: CanonicalRequest, catalog: PricingCatalog) -> CostBreakdown:
    return EstimationEngine(catalog).estimate(request)
