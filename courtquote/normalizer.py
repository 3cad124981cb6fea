"""
Request normalizer: raw submission in, CanonicalRequest out.

Two generations of the form post to the same endpoint:

  legacy:  requirements.lighting / requirements.roof blocks,
           requirements.additionalFeatures = [{"name", "cost"}, ...]
  current: requirements.additionalFeatures = {
               "drainage": {"required", "type", "area"},
               "fencing":  {"required", "type", "length"},
               "lighting": {"required", "type", "quantity"},
               "shed":     {"required", "type", "area"},
           }

Shape detection happens here and nowhere else. The canonical request carries
both field families (lighting <-> additional_features.lighting,
roof <-> additional_features.shed) plus a feature_shape tag, so the estimator
and every reader downstream can stay shape-agnostic.

Validation is fail-fast, in order: client info, sport, base/flooring.
"""

import logging
import math

from .errors import MissingClientInfo, MissingRequirements, MissingSport
from .models import FeatureShape
from .schemas import (
    AdditionalFeatures,
    CanonicalRequest,
    ClientInfo,
    EquipmentItem,
    FeatureOption,
    LegacyFeature,
    MaterialChoice,
    ProjectInfo,
    Requirements,
)

logger = logging.getLogger(__name__)

CLIENT_FIELDS = ("name", "email", "phone", "address")


def normalize_request(raw) -> CanonicalRequest:
    """
    Validate and canonicalize a raw quotation request.

    Raises MissingClientInfo, MissingSport or MissingRequirements for the
    first violation found.
    """
    if not isinstance(raw, dict):
        raise MissingClientInfo()

    client_info = _client_info(raw.get("clientInfo"))

    project = _mapping(raw.get("projectInfo"))
    sport = _text(project.get("sport")) or _text(project.get("gameType"))
    if not sport:
        raise MissingSport()

    requirements = _mapping(raw.get("requirements"))
    base = _material(requirements.get("base"))
    flooring = _material(requirements.get("flooring"))
    if base is None or flooring is None:
        raise MissingRequirements()

    project_info = ProjectInfo(
        sport=sport,
        construction_type=_text(project.get("constructionType")) or "standard",
        court_size=_text(project.get("courtSize")) or "standard",
        court_type=_text(project.get("courtType")) or "outdoor",
        custom_area=_number(project.get("customArea")),
    )

    raw_features = requirements.get("additionalFeatures")
    if isinstance(raw_features, dict):
        feature_shape = FeatureShape.CURRENT
        additional_features = AdditionalFeatures(
            drainage=_feature(raw_features.get("drainage"), "area"),
            fencing=_feature(raw_features.get("fencing"), "length"),
            lighting=_feature(raw_features.get("lighting"), "quantity"),
            shed=_feature(raw_features.get("shed"), "area"),
        )
        lighting = additional_features.lighting.model_copy()
        roof = additional_features.shed.model_copy()
        legacy_features = []
    else:
        # List or absent: the flat lighting/roof blocks are authoritative
        feature_shape = FeatureShape.LEGACY
        lighting = _feature(requirements.get("lighting"), "quantity")
        roof = _feature(requirements.get("roof"), "area")
        additional_features = AdditionalFeatures(
            lighting=lighting.model_copy(),
            shed=roof.model_copy(),
        )
        legacy_features = []
        if isinstance(raw_features, list):
            legacy_features = [_legacy_feature(item) for item in raw_features]

    canonical = CanonicalRequest(
        client_info=client_info,
        project_info=project_info,
        requirements=Requirements(
            base=base,
            flooring=flooring,
            equipment=_equipment(requirements.get("equipment")),
            additional_features=additional_features,
            lighting=lighting,
            roof=roof,
            legacy_features=legacy_features,
        ),
        feature_shape=feature_shape,
    )
    logger.debug("Normalized %s-shape request for sport %s", feature_shape.value, sport)
    return canonical


# --- Field helpers ---

def _client_info(value) -> ClientInfo:
    info = _mapping(value)
    fields = {}
    for field in CLIENT_FIELDS:
        text = _text(info.get(field))
        if not text:
            raise MissingClientInfo()
        fields[field] = text
    return ClientInfo(**fields)


def _material(value):
    """base/flooring block -> MaterialChoice, or None when no type was chosen."""
    block = _mapping(value)
    material_type = _text(block.get("type"))
    if not material_type:
        return None
    return MaterialChoice(type=material_type, area=_optional_number(block.get("area")))


def _feature(value, sizing_field: str) -> FeatureOption:
    block = _mapping(value)
    if not block:
        return FeatureOption()
    return FeatureOption(**{
        "required": bool(block.get("required")),
        "type": _text(block.get("type")) or None,
        sizing_field: _optional_number(block.get(sizing_field)),
    })


def _legacy_feature(item) -> LegacyFeature:
    if isinstance(item, dict):
        name = _text(item.get("name")) or _text(item.get("id"))
        return LegacyFeature(name=name, cost=_number(item.get("cost")))
    return LegacyFeature(name=_text(item))


def _equipment(value) -> list:
    if not isinstance(value, list):
        return []
    items = []
    for item in value:
        if not isinstance(item, dict):
            continue
        items.append(EquipmentItem(
            id=_text(item.get("id")) or None,
            name=_text(item.get("name")),
            quantity=_number(item.get("quantity")),
            unit_cost=_number(item.get("unitCost")),
            total_cost=_number(item.get("totalCost")),
        ))
    return items


def _mapping(value) -> dict:
    return value if isinstance(value, dict) else {}


def _text(value) -> str:
    """Trimmed string form of a scalar; empty for None, containers and booleans."""
    if value is None or isinstance(value, (bool, dict, list)):
        return ""
    return str(value).strip()


def _optional_number(value):
    """Lenient numeric parse: numbers and numeric strings, else None."""
    if value is None or isinstance(value, (dict, list)):
        return None
    if isinstance(value, bool):
        return float(value)
    try:
        number = float(str(value).strip()) if isinstance(value, str) else float(value)
    except (TypeError, ValueError):
        return None
    if not math.isfinite(number):
        return None
    return number


def _number(value, default: float = 0.0) -> float:
    number = _optional_number(value)
    return default if number is None else number
