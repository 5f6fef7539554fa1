"""Domain errors shared by all marketplace services.

Each error is a DRF `APIException`, so raising it from a service inside a view
produces a response with a distinct status code and `code` without any extra
mapping in the views.
"""

from rest_framework import status
from rest_framework.exceptions import APIException


class MarketplaceError(APIException):
    """Base class for errors raised by the order/dispute/review services."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Request could not be processed."
    default_code = "error"


class NotFoundError(MarketplaceError):
    """The referenced order, response, dispute, review or user does not exist."""

    status_code = status.HTTP_404_NOT_FOUND
    default_detail = "Not found."
    default_code = "not_found"

    @classmethod
    def for_resource(cls, resource: str, field: str, value):
        return cls(f"{resource} with {field} {value} not found.")


class ForbiddenError(MarketplaceError):
    """The actor lacks the role or relationship required for the action."""

    status_code = status.HTTP_403_FORBIDDEN
    default_detail = "You are not allowed to perform this action."
    default_code = "forbidden"


class ConflictError(MarketplaceError):
    """The action is well-formed but illegal in the current state."""

    status_code = status.HTTP_409_CONFLICT
    default_detail = "The action conflicts with the current state."
    default_code = "conflict"


class ValidationError(MarketplaceError):
    """Malformed input, rejected before any state is touched."""

    status_code = status.HTTP_400_BAD_REQUEST
    default_detail = "Invalid input."
    default_code = "invalid"
