"""
Core Application - Infrastructure & Base Classes

Generic, reusable building blocks shared by the domain apps
(authentication, otp). Nothing in here knows about users or codes.

Models (import from core.models):
    - BaseModel: Abstract model with timestamps (created_at, updated_at)

Services (import from core.services):
    - BaseService: Base class for service layer (logger, atomic)

Exceptions (import from core.exceptions):
    - BaseApplicationError: Base exception with error codes and HTTP status
    - ValidationError, AuthenticationError, PermissionDeniedError,
      NotFoundError, ConflictError, GoneError, RateLimitError,
      ExternalServiceError

Exception handling (core.exception_handlers):
    - api_exception_handler: DRF EXCEPTION_HANDLER for BaseApplicationError

Views (import from core.views):
    - health_check: Liveness endpoint for Docker and load balancers
"""
