from pydantic import BaseModel, Field
from typing import Optional, List

from .models import FeatureShape


class ClientInfo(BaseModel):
    name: str
    email: str
    phone: str
    address: str


class ProjectInfo(BaseModel):
    sport: str
    construction_type: str = "standard"
    court_size: str = "standard"
    court_type: str = "outdoor"
    custom_area: float = 0.0


class MaterialChoice(BaseModel):
    type: str
    area: Optional[float] = None


class EquipmentItem(BaseModel):
    id: Optional[str] = None
    name: str = ""
    quantity: float = 0.0
    unit_cost: float = 0.0
    total_cost: float = 0.0


class FeatureOption(BaseModel):
    """One optional add-on. Only the sizing field relevant to the feature is set."""
    required: bool = False
    type: Optional[str] = None
    area: Optional[float] = None
    length: Optional[float] = None
    quantity: Optional[float] = None


class AdditionalFeatures(BaseModel):
    drainage: FeatureOption = Field(default_factory=FeatureOption)
    fencing: FeatureOption = Field(default_factory=FeatureOption)
    lighting: FeatureOption = Field(default_factory=FeatureOption)
    shed: FeatureOption = Field(default_factory=FeatureOption)


class LegacyFeature(BaseModel):
    name: str = ""
    cost: float = 0.0


class Requirements(BaseModel):
    base: MaterialChoice
    flooring: MaterialChoice
    equipment: List[EquipmentItem] = []
    additional_features: AdditionalFeatures = Field(default_factory=AdditionalFeatures)
    # Legacy blocks, always populated, mirrored from additional_features when current-shape
    lighting: FeatureOption = Field(default_factory=FeatureOption)
    roof: FeatureOption = Field(default_factory=FeatureOption)
    legacy_features: List[LegacyFeature] = []


class CanonicalRequest(BaseModel):
    """A submission after normalization, carrying both schema generations."""
    client_info: ClientInfo
    project_info: ProjectInfo
    requirements: Requirements
    feature_shape: FeatureShape = FeatureShape.CURRENT


class CostBreakdown(BaseModel):
    base_cost: float = 0.0
    flooring_cost: float = 0.0
    equipment_cost: float = 0.0
    drainage_cost: float = 0.0
    fencing_cost: float = 0.0
    lighting_cost: float = 0.0
    shed_cost: float = 0.0
    additional_cost: float = 0.0
    total_cost: float = 0.0

    @property
    def roof_cost(self) -> float:
        return self.shed_cost

    def itemized(self) -> dict:
        """The eight line items that make up total_cost."""
        return {
            "base_cost": self.base_cost,
            "flooring_cost": self.flooring_cost,
            "equipment_cost": self.equipment_cost,
            "drainage_cost": self.drainage_cost,
            "fencing_cost": self.fencing_cost,
            "lighting_cost": self.lighting_cost,
            "shed_cost": self.shed_cost,
            "additional_cost": self.additional_cost,
        }

    def to_pricing_dict(self) -> dict:
        """camelCase pricing block with both shedCost and roofCost."""
        return {
            "baseCost": self.base_cost,
            "flooringCost": self.flooring_cost,
            "equipmentCost": self.equipment_cost,
            "drainageCost": self.drainage_cost,
            "fencingCost": self.fencing_cost,
            "lightingCost": self.lighting_cost,
            "shedCost": self.shed_cost,
            "roofCost": self.roof_cost,
            "additionalCost": self.additional_cost,
            "totalCost": self.total_cost,
        }
