"""
Pricing catalog: unit rates and standard court areas.

Rates live in the `pricings` table, one row per category ("default"), and are
loaded once per process. Lookups are total: an unknown table or key prices at
0 instead of raising, so a catalog that lags behind the form options quotes
the missing line at zero cost.

DEFAULT_PRICING is seeded on first startup (see main.auto_seed).
"""

import logging
import math

from sqlalchemy.exc import SQLAlchemyError

from . import models
from .errors import CatalogUnavailable

logger = logging.getLogger(__name__)

# Catalog table name -> Pricing column
TABLE_COLUMNS = {
    "base": "base",
    "flooring": "flooring",
    "courtSizes": "court_sizes",
    "additionalFeatures": "additional_features",
    "lighting": "lighting",
    "roof": "roof",
    "equipment": "equipment",
}

# Rates in INR. Base/flooring per sq. unit of court area, features per unit of
# their own sizing field (area, running length or fixture count).
DEFAULT_PRICING = {
    "base": {
        "concrete": 110,
        "pcc": 95,
        "asphalt": 90,
        "wbm": 70,
    },
    "flooring": {
        "acrylic": 65,
        "synthetic-turf": 120,
        "pu-synthetic": 140,
        "rubber": 180,
        "pvc-vinyl": 90,
        "modular-tiles": 110,
        "wooden": 350,
    },
    "courtSizes": {
        "basketball": 420,
        "badminton": 82,
        "boxcricket": 600,
        "football": 800,
        "gymflooring": 100,
        "pickleball": 82,
        "running-track": 400,
        "tennis": 260,
        "volleyball": 162,
    },
    "additionalFeatures": {
        "drainage-system": 45,
        "chain-link-fencing": 850,
        "welded-mesh-fencing": 1100,
        "led-flood-light": 11500,
        "metal-halide-light": 8500,
        "metal-shed": 350,
        "polycarbonate-shed": 450,
        "tensile-shed": 600,
    },
    "lighting": {
        "led": 11500,
        "metal-halide": 8500,
    },
    "roof": {
        "metal": 350,
        "polycarbonate": 450,
        "tensile": 600,
    },
    "equipment": {
        "basketball-hoop": 45000,
        "basketball-backboard": 18000,
        "basketball-poles": 22000,
        "badminton-posts": 12000,
        "badminton-net": 1500,
        "cricket-net": 25000,
        "cricket-matting": 18000,
        "cricket-stumps": 1200,
        "football-goalpost": 35000,
        "football-net": 4500,
        "pickleball-net": 6000,
        "pickleball-posts": 9000,
        "track-lane-marking": 40000,
        "starting-blocks": 7500,
        "tennis-net": 8000,
        "tennis-posts": 15000,
        "volleyball-posts": 14000,
        "volleyball-net": 3000,
    },
}


class PricingCatalog:
    """
    Read-only snapshot of one pricing category.

    Every lookup goes through rate(), which never fails.
    """

    def __init__(self, tables: dict, category: str = "default", version: int = 1):
        self.category = category
        self.version = version
        self._tables = {}
        for name in TABLE_COLUMNS:
            table = tables.get(name) or {}
            if not isinstance(table, dict):
                raise ValueError(f"catalog table {name!r} must be a mapping")
            self._tables[name] = {str(k): _validated_rate(name, k, v) for k, v in table.items()}

    @classmethod
    def from_row(cls, row: models.Pricing) -> "PricingCatalog":
        tables = {name: getattr(row, column) for name, column in TABLE_COLUMNS.items()}
        return cls(tables, category=row.category, version=row.version or 1)

    def rate(self, table: str, key) -> float:
        """Rate for key in table; 0 when the table, key or value is missing."""
        if key is None:
            return 0.0
        return self._tables.get(table, {}).get(str(key)) or 0.0

    def base_rate(self, base_type) -> float:
        return self.rate("base", base_type)

    def flooring_rate(self, flooring_type) -> float:
        return self.rate("flooring", flooring_type)

    def feature_rate(self, feature_type) -> float:
        return self.rate("additionalFeatures", feature_type)

    def lighting_rate(self, lighting_type) -> float:
        return self.rate("lighting", lighting_type)

    def roof_rate(self, roof_type) -> float:
        return self.rate("roof", roof_type)

    def equipment_unit_cost(self, item_id) -> float:
        return self.rate("equipment", item_id)

    def standard_area(self, sport) -> float:
        """Catalog standard area for a sport, 0 when unknown."""
        return self.rate("courtSizes", sport)

    def to_dict(self) -> dict:
        return {name: dict(table) for name, table in self._tables.items()}


def _validated_rate(table: str, key, value) -> float:
    if value is None:
        return 0.0
    if isinstance(value, bool):
        raise ValueError(f"{table}.{key}: rate must be a number")
    try:
        rate = float(value)
    except (TypeError, ValueError):
        raise ValueError(f"{table}.{key}: rate must be a number, got {value!r}")
    if math.isnan(rate) or rate < 0:
        raise ValueError(f"{table}.{key}: rate must be non-negative, got {value!r}")
    return rate


# --- Process-wide cache ---

_CATALOGS = {}


def load_catalog(db, category: str = "default") -> PricingCatalog:
    """
    Return the catalog for category, reading it from the database on first use.

    Raises CatalogUnavailable if the row is missing, invalid, or the database
    cannot be read.
    """
    cached = _CATALOGS.get(category)
    if cached is not None:
        return cached

    try:
        row = db.query(models.Pricing).filter(models.Pricing.category == category).first()
    except SQLAlchemyError as e:
        logger.error("Pricing lookup failed for category %s: %s", category, e)
        raise CatalogUnavailable("Pricing data could not be read") from e

    if row is None:
        raise CatalogUnavailable("Pricing data not found")

    try:
        catalog = PricingCatalog.from_row(row)
    except ValueError as e:
        logger.error("Invalid pricing data for category %s: %s", category, e)
        raise CatalogUnavailable(f"Pricing data is invalid: {e}") from e

    _CATALOGS[category] = catalog
    logger.info("Loaded pricing catalog %r (version %d)", category, catalog.version)
    return catalog


def clear_catalog_cache():
    _CATALOGS.clear()


def seed_pricing(db, category: str = "default", tables: dict = None) -> bool:
    """Insert the pricing row for category if absent. Returns True if seeded."""
    existing = db.query(models.Pricing).filter(models.Pricing.category == category).first()
    if existing:
        return False
    data = tables or DEFAULT_PRICING
    db.add(models.Pricing(
        category=category,
        version=1,
        **{column: dict(data.get(name, {})) for name, column in TABLE_COLUMNS.items()},
    ))
    db.commit()
    _CATALOGS.pop(category, None)
    return True
