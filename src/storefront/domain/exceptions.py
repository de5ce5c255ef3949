"""Domain-level exceptions.

All business rule violations are expressed as subclasses of DomainException
so the CLI layer can catch them uniformly and display user-friendly messages.

The hierarchy mirrors how callers are expected to react:

- ``ValidationError``: bad input, rejected before anything is persisted.
- ``ExternalServiceError``: a collaborator failed; safe to retry.
- ``IntegrityError``: the operation would break an invariant and was
  rejected as a whole.
- ``EntityNotFoundError``: the 404-equivalent outcome.
"""


class DomainException(Exception):
    """Base class for all domain errors."""


class ValidationError(DomainException):
    """A business rule or invariant was violated."""


class InvalidQuantity(ValidationError):
    """A cart quantity below one was requested."""


class EmptyCart(ValidationError):
    """Checkout was attempted with nothing in the cart."""


class MissingAddress(ValidationError):
    """Checkout was attempted without a delivery address."""


class InvalidAmount(ValidationError):
    """A payment amount was zero or negative."""


class EntityNotFoundError(DomainException):
    """A requested entity does not exist."""


class OrderNotFound(EntityNotFoundError):
    """The order does not exist or is not visible to the caller."""


class IntentNotFound(EntityNotFoundError):
    """No payment intent is known under the given identifier."""


class ExternalServiceError(DomainException):
    """An external collaborator failed; the operation may be retried."""


class GatewayUnavailable(ExternalServiceError):
    """The payment processor could not be reached or answered badly."""


class IntegrityError(DomainException):
    """The operation was rejected atomically to protect an invariant."""


class SignatureMismatch(IntegrityError):
    """A payment confirmation failed signature verification."""


class IntentAlreadyUsed(SignatureMismatch):
    """A payment intent was confirmed a second time."""


class InsufficientStock(IntegrityError):
    """A line asks for more units than the catalog has in stock."""


class InvalidTransition(IntegrityError):
    """The requested status is not reachable for this order and role."""


class ConcurrentTransition(InvalidTransition):
    """The order status changed underneath the request."""


class PaymentVerificationFailed(IntegrityError):
    """A gateway payment could not be confirmed; no order was created."""


class PermissionDenied(DomainException):
    """The acting principal's role does not allow the operation."""


class PaymentCancelled(DomainException):
    """The customer abandoned the external payment step."""
