"""
Failure taxonomy for quotation submission.

Validation kinds are client-correctable (HTTP 400). CatalogUnavailable is
fatal to the request (HTTP 500). PersistenceUnavailable is retryable by the
caller (HTTP 503). DuplicateQuotationNumber stays internal: it only ever
triggers a numbering retry.
"""


class QuotationError(Exception):
    """Base class for every failure raised by the quotation core."""


class QuotationValidationError(QuotationError):
    code = "validation_error"
    message = "Invalid quotation request"

    def __init__(self, message: str = None):
        super().__init__(message or self.message)
        self.message = message or self.message


class MissingClientInfo(QuotationValidationError):
    code = "missing_client_info"
    message = "Please complete all client information fields"


class MissingSport(QuotationValidationError):
    code = "missing_sport"
    message = "Sport selection is required"


class MissingRequirements(QuotationValidationError):
    code = "missing_requirements"
    message = "Please select base and flooring types"


class CatalogUnavailable(QuotationError):
    """Pricing data could not be loaded. Not retried automatically."""


class PersistenceUnavailable(QuotationError):
    """Database unreachable, timed out, or numbering retries exhausted."""


class DuplicateQuotationNumber(QuotationError):
    """A quotation number collided with an existing record."""

    def __init__(self, quotation_number: str):
        super().__init__(f"Quotation number {quotation_number} already exists")
        self.quotation_number = quotation_number
