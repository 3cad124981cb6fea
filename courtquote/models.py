from sqlalchemy import Column, Integer, String, Float, DateTime, Text, JSON
from datetime import datetime
from .database import Base
import enum


class QuotationStatus(str, enum.Enum):
    PENDING = "pending"


class FeatureShape(str, enum.Enum):
    """Which generation of the request schema a submission arrived in."""
    CURRENT = "current"   # additionalFeatures is an object of drainage/fencing/lighting/shed
    LEGACY = "legacy"     # flat lighting/roof blocks, additionalFeatures is a list


class Pricing(Base):
    """Rate tables, one row per pricing category."""
    __tablename__ = "pricings"

    id = Column(Integer, primary_key=True, index=True)
    category = Column(String, unique=True, nullable=False, default="default")
    version = Column(Integer, nullable=False, default=1)
    base = Column(JSON, default=dict)                  # {construction material: rate per unit area}
    flooring = Column(JSON, default=dict)              # {flooring material: rate per unit area}
    court_sizes = Column(JSON, default=dict)           # {sport: standard area}
    additional_features = Column(JSON, default=dict)   # {feature type: rate}
    lighting = Column(JSON, default=dict)              # legacy lighting rates
    roof = Column(JSON, default=dict)                  # legacy roof rates
    equipment = Column(JSON, default=dict)             # {equipment id: unit cost}
    updated_at = Column(DateTime, default=datetime.utcnow, onupdate=datetime.utcnow)


class SequenceCounter(Base):
    """Named monotonic counters, incremented with a single UPDATE."""
    __tablename__ = "sequence_counters"

    name = Column(String, primary_key=True)
    value = Column(Integer, nullable=False, default=0)


class Quotation(Base):
    """Persisted quotation, written once at submission, never updated."""
    __tablename__ = "quotations"

    id = Column(Integer, primary_key=True, index=True)
    quotation_number = Column(String, unique=True, nullable=False, index=True)
    status = Column(String, default=QuotationStatus.PENDING.value)
    created_at = Column(DateTime, default=datetime.utcnow)

    # Client
    client_name = Column(String, nullable=False)
    client_email = Column(String, nullable=False)
    client_phone = Column(String, nullable=False)
    client_address = Column(Text, nullable=False)

    # Project: current and legacy names side by side
    sport = Column(String, nullable=False)
    game_type = Column(String, nullable=True)  # legacy name for sport
    construction_type = Column(String, default="standard")
    court_size = Column(String, default="standard")
    court_type = Column(String, default="outdoor")
    custom_area = Column(Float, default=0.0)
    court_area = Column(Float, nullable=False)
    feature_shape = Column(String, default=FeatureShape.CURRENT.value)

    # Normalized documents (camelCase, dual-shape)
    project_json = Column(JSON, nullable=False)
    requirements_json = Column(JSON, nullable=False)

    # Pricing
    base_cost = Column(Float, nullable=False)
    flooring_cost = Column(Float, nullable=False)
    equipment_cost = Column(Float, default=0.0)
    drainage_cost = Column(Float, default=0.0)
    fencing_cost = Column(Float, default=0.0)
    lighting_cost = Column(Float, default=0.0)
    shed_cost = Column(Float, default=0.0)
    roof_cost = Column(Float, default=0.0)  # legacy alias of shed_cost
    additional_cost = Column(Float, default=0.0)
    total_cost = Column(Float, nullable=False)
