"""
Quotation persistence: the numbering counter and the append-only table.

Numbering uses a counter row bumped with a single UPDATE and committed on its
own, so a reservation survives a rolled-back insert and no two submissions
ever read the same value. The unique index on quotation_number backs this up
for records written before the counter existed.
"""

import logging

from sqlalchemy import update
from sqlalchemy.exc import IntegrityError, OperationalError, TimeoutError as PoolTimeoutError

from . import models
from .errors import DuplicateQuotationNumber, PersistenceUnavailable

logger = logging.getLogger(__name__)

QUOTATION_COUNTER = "quotation"

_UNAVAILABLE = (OperationalError, PoolTimeoutError)


class QuotationRepository:

    def __init__(self, db):
        self.db = db

    def count_existing(self) -> int:
        try:
            return self.db.query(models.Quotation).count()
        except _UNAVAILABLE as e:
            self.db.rollback()
            raise PersistenceUnavailable("Quotation store unavailable") from e

    def reserve_prior_count(self) -> int:
        """
        Atomically advance the quotation counter and return its previous value.
        The first call seeds the counter from the number of existing records.
        """
        try:
            self._ensure_counter()
            self.db.execute(
                update(models.SequenceCounter)
                .where(models.SequenceCounter.name == QUOTATION_COUNTER)
                .values(value=models.SequenceCounter.value + 1)
            )
            current = self.db.query(models.SequenceCounter.value).filter(
                models.SequenceCounter.name == QUOTATION_COUNTER
            ).scalar()
            self.db.commit()
        except _UNAVAILABLE as e:
            self.db.rollback()
            raise PersistenceUnavailable("Quotation counter unavailable") from e
        return current - 1

    def _ensure_counter(self):
        exists = self.db.query(models.SequenceCounter).filter(
            models.SequenceCounter.name == QUOTATION_COUNTER
        ).first()
        if exists:
            return
        self.db.add(models.SequenceCounter(name=QUOTATION_COUNTER, value=self.count_existing()))
        try:
            self.db.commit()
        except IntegrityError:
            # Another submission created it first
            self.db.rollback()

    def insert(self, quotation: models.Quotation) -> models.Quotation:
        """Persist a new quotation; DuplicateQuotationNumber on a number collision."""
        self.db.add(quotation)
        try:
            self.db.commit()
        except IntegrityError as e:
            self.db.rollback()
            raise DuplicateQuotationNumber(quotation.quotation_number) from e
        except _UNAVAILABLE as e:
            self.db.rollback()
            raise PersistenceUnavailable("Quotation store unavailable") from e
        self.db.refresh(quotation)
        return quotation

    def get(self, quotation_number: str):
        try:
            return self.db.query(models.Quotation).filter(
                models.Quotation.quotation_number == quotation_number
            ).first()
        except _UNAVAILABLE as e:
            self.db.rollback()
            raise PersistenceUnavailable("Quotation store unavailable") from e

    def list(self, skip: int = 0, limit: int = 50) -> list:
        try:
            return self.db.query(models.Quotation).order_by(
                models.Quotation.created_at.desc(), models.Quotation.id.desc()
            ).offset(skip).limit(limit).all()
        except _UNAVAILABLE as e:
            self.db.rollback()
            raise PersistenceUnavailable("Quotation store unavailable") from e
