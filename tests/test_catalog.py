"""
Pricing catalog tests.

Tests:
1-4.   Total lookups (unknown table / key / None price at 0)
5-7.   Rate validation (negative, non-numeric, boolean)
8-11.  load_catalog (missing row, caching, invalid row, category)
12-14. seed_pricing + /api/pricing endpoints
"""

import pytest

from courtquote import models
from courtquote.catalog import (
    DEFAULT_PRICING,
    PricingCatalog,
    clear_catalog_cache,
    load_catalog,
    seed_pricing,
)
from courtquote.errors import CatalogUnavailable


# ============================================================
# Total lookups
# ============================================================

def test_known_rates(sample_catalog):
    assert sample_catalog.base_rate("concrete") == 110
    assert sample_catalog.flooring_rate("acrylic") == 65
    assert sample_catalog.feature_rate("drainage-system") == 45
    assert sample_catalog.lighting_rate("led") == 11500
    assert sample_catalog.roof_rate("metal") == 350
    assert sample_catalog.equipment_unit_cost("tennis-net") == 8000
    assert sample_catalog.standard_area("tennis") == 260


def test_unknown_key_prices_at_zero(sample_catalog):
    assert sample_catalog.base_rate("granite") == 0
    assert sample_catalog.standard_area("curling") == 0


def test_unknown_table_prices_at_zero(sample_catalog):
    assert sample_catalog.rate("heating", "underfloor") == 0


def test_none_key_prices_at_zero(sample_catalog):
    assert sample_catalog.flooring_rate(None) == 0


def test_missing_tables_are_empty():
    catalog = PricingCatalog({"base": {"concrete": 110}})
    assert catalog.base_rate("concrete") == 110
    assert catalog.flooring_rate("acrylic") == 0
    assert catalog.to_dict()["equipment"] == {}


# ============================================================
# Rate validation
# ============================================================

def test_negative_rate_rejected():
    with pytest.raises(ValueError):
        PricingCatalog({"base": {"concrete": -5}})


def test_non_numeric_rate_rejected():
    with pytest.raises(ValueError):
        PricingCatalog({"flooring": {"acrylic": "cheap"}})


def test_boolean_rate_rejected():
    with pytest.raises(ValueError):
        PricingCatalog({"roof": {"metal": True}})


def test_numeric_string_rate_accepted():
    catalog = PricingCatalog({"base": {"concrete": "110"}})
    assert catalog.base_rate("concrete") == 110.0


# ============================================================
# load_catalog
# ============================================================

def test_load_catalog_missing_row(db):
    with pytest.raises(CatalogUnavailable, match="Pricing data not found"):
        load_catalog(db, "default")


def test_load_catalog_is_cached(db, pricing):
    first = load_catalog(db, "default")
    row = db.query(models.Pricing).filter(models.Pricing.category == "default").first()
    row.base = {"concrete": 999}
    db.commit()
    assert load_catalog(db, "default") is first
    assert load_catalog(db, "default").base_rate("concrete") == 110

    clear_catalog_cache()
    assert load_catalog(db, "default").base_rate("concrete") == 999


def test_load_catalog_invalid_row(db):
    seed_pricing(db, "default", {"base": {"concrete": -1}})
    with pytest.raises(CatalogUnavailable, match="invalid"):
        load_catalog(db, "default")


def test_load_catalog_by_category(db, pricing):
    seed_pricing(db, "premium", {**DEFAULT_PRICING, "flooring": {"acrylic": 80}})
    assert load_catalog(db, "default").flooring_rate("acrylic") == 65
    assert load_catalog(db, "premium").flooring_rate("acrylic") == 80


# ============================================================
# Seeding
# ============================================================

def test_seed_pricing_is_idempotent(db):
    assert seed_pricing(db, "default") is True
    assert seed_pricing(db, "default") is False
    assert db.query(models.Pricing).count() == 1


def test_pricing_seed_endpoint(client):
    response = client.get("/api/pricing/seed")
    assert response.status_code == 200
    assert response.json() == {"ok": True, "seeded": True, "category": "default"}

    again = client.get("/api/pricing/seed")
    assert again.json()["seeded"] is False


def test_pricing_endpoint(client, pricing):
    response = client.get("/api/pricing/")
    assert response.status_code == 200
    data = response.json()
    assert data["category"] == "default"
    assert data["version"] == 1
    assert data["courtSizes"]["tennis"] == 260
    assert data["additionalFeatures"]["drainage-system"] == 45


def test_pricing_endpoint_without_catalog(client):
    response = client.get("/api/pricing/")
    assert response.status_code == 404
