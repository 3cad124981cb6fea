"""
Request normalizer tests.

Tests:
1-5.   Validation order and messages
6-9.   Legacy shape (flat lighting/roof, list features, absent features)
10-13. Current shape (object features, mirrored legacy blocks)
14-17. Defaults and lenient parsing
"""

import pytest

from courtquote.errors import MissingClientInfo, MissingRequirements, MissingSport
from courtquote.models import FeatureShape
from courtquote.normalizer import normalize_request

from conftest import current_request, legacy_request


# ============================================================
# Validation
# ============================================================

@pytest.mark.parametrize("field", ["name", "email", "phone", "address"])
def test_missing_client_field(field):
    request = legacy_request()
    request["clientInfo"][field] = "   "
    with pytest.raises(MissingClientInfo) as exc:
        normalize_request(request)
    assert exc.value.code == "missing_client_info"
    assert exc.value.message == "Please complete all client information fields"


def test_missing_sport():
    request = legacy_request()
    request["projectInfo"]["sport"] = ""
    with pytest.raises(MissingSport) as exc:
        normalize_request(request)
    assert exc.value.message == "Sport selection is required"


def test_missing_base_or_flooring():
    request = legacy_request()
    request["requirements"]["flooring"] = {"type": ""}
    with pytest.raises(MissingRequirements) as exc:
        normalize_request(request)
    assert exc.value.message == "Please select base and flooring types"


def test_client_info_checked_before_sport():
    request = legacy_request()
    request["clientInfo"] = {}
    request["projectInfo"] = {}
    request["requirements"] = {}
    with pytest.raises(MissingClientInfo):
        normalize_request(request)


def test_sport_checked_before_requirements():
    request = legacy_request()
    request["projectInfo"] = {}
    request["requirements"] = {}
    with pytest.raises(MissingSport):
        normalize_request(request)


def test_non_dict_payload():
    with pytest.raises(MissingClientInfo):
        normalize_request(["not", "a", "request"])


# ============================================================
# Legacy shape
# ============================================================

def test_legacy_shape_detected():
    request = legacy_request()
    request["requirements"]["lighting"] = {"required": True, "type": "led", "quantity": 4}
    request["requirements"]["roof"] = {"required": True, "type": "metal", "area": 300}
    canonical = normalize_request(request)

    assert canonical.feature_shape == FeatureShape.LEGACY
    assert canonical.requirements.lighting.type == "led"
    assert canonical.requirements.lighting.quantity == 4
    assert canonical.requirements.roof.area == 300
    # Mirrored into the current-shape family
    assert canonical.requirements.additional_features.lighting.type == "led"
    assert canonical.requirements.additional_features.shed.type == "metal"
    assert canonical.requirements.additional_features.shed.area == 300


def test_legacy_feature_list_parsed():
    request = legacy_request()
    request["requirements"]["additionalFeatures"] = [
        {"name": "Scoreboard", "cost": 2500},
        {"name": "Benches", "cost": "1200"},
    ]
    canonical = normalize_request(request)
    features = canonical.requirements.legacy_features
    assert [f.name for f in features] == ["Scoreboard", "Benches"]
    assert [f.cost for f in features] == [2500, 1200]


def test_absent_features_treated_as_legacy():
    request = legacy_request()
    del request["requirements"]["additionalFeatures"]
    request["requirements"]["lighting"] = {"required": True, "type": "led", "quantity": 2}
    canonical = normalize_request(request)
    assert canonical.feature_shape == FeatureShape.LEGACY
    assert canonical.requirements.lighting.quantity == 2
    assert canonical.requirements.legacy_features == []


def test_game_type_accepted_for_sport():
    request = legacy_request()
    request["projectInfo"] = {"gameType": "badminton"}
    canonical = normalize_request(request)
    assert canonical.project_info.sport == "badminton"


# ============================================================
# Current shape
# ============================================================

def test_current_shape_detected():
    canonical = normalize_request(current_request(
        drainage={"required": True},
        fencing={"required": True, "type": "chain-link-fencing", "length": "80"},
    ))
    assert canonical.feature_shape == FeatureShape.CURRENT
    features = canonical.requirements.additional_features
    assert features.drainage.required is True
    assert features.fencing.length == 80
    assert canonical.requirements.legacy_features == []


def test_current_shape_mirrors_legacy_blocks():
    canonical = normalize_request(current_request(
        lighting={"required": True, "type": "led-flood-light", "quantity": 6},
        shed={"required": True, "type": "metal-shed", "area": 250},
    ))
    assert canonical.requirements.lighting.type == "led-flood-light"
    assert canonical.requirements.lighting.quantity == 6
    assert canonical.requirements.roof.type == "metal-shed"
    assert canonical.requirements.roof.area == 250


def test_current_shape_ignores_flat_blocks():
    request = current_request()
    request["requirements"]["lighting"] = {"required": True, "type": "led", "quantity": 9}
    canonical = normalize_request(request)
    assert canonical.requirements.lighting.required is False
    assert canonical.requirements.lighting.quantity is None


def test_missing_feature_entries_default_off():
    request = current_request()
    request["requirements"]["additionalFeatures"] = {}
    canonical = normalize_request(request)
    assert canonical.feature_shape == FeatureShape.CURRENT
    assert canonical.requirements.additional_features.drainage.required is False


# ============================================================
# Defaults and parsing
# ============================================================

def test_project_defaults():
    request = legacy_request()
    request["projectInfo"] = {"sport": "tennis"}
    project = normalize_request(request).project_info
    assert project.construction_type == "standard"
    assert project.court_size == "standard"
    assert project.court_type == "outdoor"
    assert project.custom_area == 0


def test_custom_area_string_parsed():
    request = legacy_request()
    request["projectInfo"]["customArea"] = " 450.5 "
    assert normalize_request(request).project_info.custom_area == 450.5


def test_bad_numbers_fall_back():
    request = legacy_request()
    request["projectInfo"]["customArea"] = "lots"
    request["requirements"]["equipment"] = [
        {"id": "tennis-net", "name": "Tennis Net", "quantity": "x", "totalCost": "nan"},
    ]
    canonical = normalize_request(request)
    assert canonical.project_info.custom_area == 0
    item = canonical.requirements.equipment[0]
    assert item.quantity == 0
    assert item.total_cost == 0


def test_client_fields_trimmed():
    request = legacy_request()
    request["clientInfo"]["name"] = "  Asha Rao  "
    assert normalize_request(request).client_info.name == "Asha Rao"
