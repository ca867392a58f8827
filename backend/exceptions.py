"""
Custom exception classes for the rental domain.

This module defines domain-specific exceptions that provide better error handling
and clearer error messages throughout the application. Every exception carries a
machine-readable ``code`` so external layers can map it to a response without
inspecting message text.
"""


class DomainError(Exception):
    """Base exception for all domain errors"""

    code = "DOMAIN_ERROR"
    status_code = 500

    def __init__(
        self,
        message: str,
        code: str | None = None,
        status_code: int | None = None,
        details: dict | None = None,
    ):
        self.message = message
        if code is not None:
            self.code = code
        if status_code is not None:
            self.status_code = status_code
        self.details = details or {}
        super().__init__(self.message)


class ConfigurationError(DomainError):
    """Raised when there's a configuration issue"""

    code = "CONFIGURATION_ERROR"

    def __init__(self, message: str, missing_keys: list[str] | None = None):
        details = {"missing_keys": missing_keys} if missing_keys else {}
        super().__init__(message, details=details)


class ValidationError(DomainError):
    """Raised when a value object or entity receives malformed input"""

    code = "VALIDATION_ERROR"
    status_code = 400

    def __init__(self, message: str, field: str | None = None):
        self.field = field
        details = {"field": field} if field else {}
        super().__init__(message, details=details)


class BusinessRuleViolationError(DomainError):
    """Raised when an entity guard rejects an operation"""

    code = "BUSINESS_RULE_VIOLATION"
    status_code = 422

    def __init__(self, message: str, rule: str | None = None):
        self.rule = rule
        details = {"rule": rule} if rule else {}
        super().__init__(message, details=details)


class InvalidStatusTransitionError(BusinessRuleViolationError):
    """Raised when a status change is not in the entity's allow-list"""

    code = "INVALID_STATUS_TRANSITION"

    def __init__(self, entity: str, current: str, target: str):
        self.entity = entity
        self.current = current
        self.target = target
        super().__init__(
            f"Invalid {entity.lower()} status transition from {current} to {target}",
            rule="status_transition",
        )
        self.details.update({"entity": entity, "from": current, "to": target})


class EntityNotFoundError(DomainError):
    """Raised by repositories when a lookup misses"""

    code = "ENTITY_NOT_FOUND"
    status_code = 404

    def __init__(self, entity_type: str, identifier: str):
        self.entity_type = entity_type
        self.identifier = identifier
        super().__init__(
            f"{entity_type} not found: {identifier}",
            details={"entity_type": entity_type, "identifier": identifier},
        )


class AggregationError(DomainError):
    """Raised when building a read model fails unexpectedly"""

    code = "AGGREGATION_ERROR"

    def __init__(self, context: str, message: str | None = None):
        self.context = context
        super().__init__(
            message or f"Failed to aggregate {context}",
            details={"context": context},
        )


# Apartment

class ApartmentNotFoundError(EntityNotFoundError):
    def __init__(self, unit_code: str):
        super().__init__("Apartment", unit_code)


class InvalidUnitCodeError(ValidationError):
    def __init__(self, unit_code: str):
        super().__init__(f"Invalid unit code format: {unit_code}", "unit_code")


class InvalidRentalAmountError(ValidationError):
    def __init__(self, amount, field: str = "base_rent"):
        super().__init__(f"Rental amount must be positive, got: {amount}", field)


class InvalidAirbnbLinkError(ValidationError):
    def __init__(self, link: str):
        super().__init__(f"Invalid Airbnb link format: {link}", "airbnb_link")


# Payment

class PaymentNotFoundError(EntityNotFoundError):
    def __init__(self, payment_id: str):
        super().__init__("Payment", payment_id)


class InvalidPaymentAmountError(BusinessRuleViolationError):
    def __init__(self, amount):
        super().__init__(
            f"Payment amount must be greater than zero, got: {amount}",
            rule="positive_amount",
        )


class PaymentProofRequiredError(BusinessRuleViolationError):
    def __init__(self, payment_id: str):
        super().__init__(
            f"Payment {payment_id} has no proof document",
            rule="proof_required",
        )


# Contract

class ContractNotFoundError(EntityNotFoundError):
    def __init__(self, contract_id: str):
        super().__init__("Contract", contract_id)


class InvalidContractDatesError(ValidationError):
    def __init__(self, message: str = "Contract end date must be after start date"):
        super().__init__(message, "end_date")


# User

class UserNotFoundError(EntityNotFoundError):
    def __init__(self, phone_number: str):
        super().__init__("User", phone_number)


# Relationship

class RelationshipNotFoundError(EntityNotFoundError):
    def __init__(self, unit_code: str, phone_number: str):
        super().__init__("UserApartmentRelation", f"{unit_code}-{phone_number}")
