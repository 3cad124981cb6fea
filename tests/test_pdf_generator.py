"""
PDF document tests.

Tests:
1-3. Amount and quantity formatting
4-6. Line items (skips zero lines, legacy roof, legacy list)
7-8. Rendering
"""

from courtquote.pdf_generator import _fmt, _fmt_qty, _safe, build_line_items, generate_quotation_pdf


def _sample_quotation(**pricing):
    """A stored current-shape tennis quotation as quotation_to_dict() returns it."""
    costs = {
        "baseCost": 28600,
        "flooringCost": 16900,
        "equipmentCost": 0,
        "drainageCost": 11700,
        "fencingCost": 0,
        "lightingCost": 0,
        "shedCost": 0,
        "roofCost": 0,
        "additionalCost": 0,
    }
    costs.update(pricing)
    costs["totalCost"] = sum(v for k, v in costs.items() if k != "roofCost")
    return {
        "id": 1,
        "quotationNumber": "NXR000001",
        "status": "pending",
        "createdAt": "2026-03-02T10:15:00",
        "clientInfo": {
            "name": "Asha Rao",
            "email": "asha@example.com",
            "phone": "+91 9876543210",
            "address": "12 MG Road, Bangalore",
        },
        "projectInfo": {
            "constructionType": "standard",
            "sport": "tennis",
            "gameType": "tennis",
            "courtSize": "standard",
            "courtType": "outdoor",
            "customArea": 0,
        },
        "requirements": {
            "base": {"type": "concrete", "area": 260},
            "flooring": {"type": "acrylic", "area": 260},
            "equipment": [],
            "additionalFeatures": {
                "drainage": {"required": True, "type": None, "area": None},
                "fencing": {"required": False, "type": None, "length": None},
                "lighting": {"required": False, "type": None, "quantity": None},
                "shed": {"required": False, "type": None, "area": None},
            },
            "lighting": {"required": False, "type": None, "quantity": None},
            "roof": {"required": False, "type": None, "area": None},
            "legacyAdditionalFeatures": [],
            "featureShape": "current",
        },
        "pricing": costs,
    }


# ============================================================
# Formatting
# ============================================================

def test_fmt_indian_grouping():
    assert _fmt(0) == "0.00"
    assert _fmt(999) == "999.00"
    assert _fmt(45500) == "45,500.00"
    assert _fmt(1234567) == "12,34,567.00"
    assert _fmt(123456789.5) == "12,34,56,789.50"
    assert _fmt("n/a") == "0.00"


def test_fmt_qty():
    assert _fmt_qty(260) == "260"
    assert _fmt_qty(12.5) == "12.50"
    assert _fmt_qty(None) == "-"


def test_safe_replaces_rupee_sign():
    assert _safe("₹ 500") == "Rs. 500"
    assert _safe(None) == ""


# ============================================================
# Line items
# ============================================================

def test_line_items_skip_zero_lines():
    rows = build_line_items(_sample_quotation())
    titles = [row["title"] for row in rows]
    assert titles == ["BASE CONSTRUCTION (CONCRETE)", "FLOORING (ACRYLIC)", "DRAINAGE SYSTEM"]
    base = rows[0]
    assert base["qty"] == 260
    assert base["rate"] == 110
    assert base["amount"] == 28600


def test_line_items_legacy_roof():
    quotation = _sample_quotation(shedCost=105000, roofCost=105000, drainageCost=0)
    quotation["requirements"]["additionalFeatures"]["shed"] = {}
    quotation["requirements"]["roof"] = {"required": True, "type": "metal", "area": 300}
    shed = next(row for row in build_line_items(quotation) if row["title"].startswith("SHED"))
    assert shed["title"] == "SHED STRUCTURE (METAL)"
    assert shed["qty"] == 300
    assert shed["rate"] == 350


def test_line_items_legacy_list():
    quotation = _sample_quotation(additionalCost=3700)
    quotation["requirements"]["legacyAdditionalFeatures"] = [
        {"name": "Scoreboard", "cost": 2500},
        {"name": "Benches", "cost": 1200},
    ]
    titles = [row["title"] for row in build_line_items(quotation)]
    assert "SCOREBOARD" in titles
    assert "BENCHES" in titles


# ============================================================
# Rendering
# ============================================================

def test_generate_pdf_bytes():
    pdf_bytes = generate_quotation_pdf(_sample_quotation())
    assert isinstance(pdf_bytes, bytes)
    assert pdf_bytes[:5] == b"%PDF-"
    assert len(pdf_bytes) > 1000


def test_generate_pdf_many_lines_paginates():
    quotation = _sample_quotation(equipmentCost=60 * 1000)
    quotation["requirements"]["equipment"] = [
        {"id": f"item-{i}", "name": f"Item {i}", "quantity": 1, "unitCost": 1000, "totalCost": 1000}
        for i in range(60)
    ]
    pdf_bytes = generate_quotation_pdf(quotation, company={"name": "Test Courts"})
    assert pdf_bytes[:5] == b"%PDF-"
