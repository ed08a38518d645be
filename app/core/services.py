"""
Base service layer patterns for business logic encapsulation.

Services encapsulate business logic separate from views and models.
Views handle HTTP concerns, models handle data, services handle logic.
Expected failures are raised as core.exceptions.BaseApplicationError
subclasses; the API layer maps them to responses.

Usage:
    from core.services import BaseService

    class AccountService(BaseService):
        @classmethod
        def create(cls, email: str, password: str) -> User:
            with cls.atomic():
                user = User.objects.create_user(email=email, password=password)
                Profile.objects.create(user=user)

            cls.get_logger().info(f"Created user {user.id}")
            return user

Related:
    - core.exceptions: Domain error hierarchy
    - core.exception_handlers: Error to HTTP response mapping
"""

from __future__ import annotations

import logging
from contextlib import contextmanager
from typing import TYPE_CHECKING

from django.db import transaction

if TYPE_CHECKING:
    from collections.abc import Generator


class BaseService:
    """
    Base class for service layer classes.

    Provides common utilities for services:
    - Logging setup per service
    - Database transaction management

    Design Notes:
        - Use @staticmethod or @classmethod (no instance state)
        - Services should be stateless
        - Raise core.exceptions subclasses for expected failures
    """

    @classmethod
    def get_logger(cls) -> logging.Logger:
        """
        Get logger for this service.

        Returns a logger named after the service class for
        easy filtering in logs.
        """
        return logging.getLogger(f"{cls.__module__}.{cls.__name__}")

    @classmethod
    @contextmanager
    def atomic(cls) -> Generator[None, None, None]:
        """
        Execute operations in a database transaction.

        All database operations within this context manager are
        wrapped in a transaction. If any operation raises, all
        changes are rolled back and the exception propagates.

        Nested use creates a savepoint, so a service can call another
        service that opens its own atomic block.

        Example:
            with cls.atomic():
                user = User.objects.create(email=email)
                Profile.objects.create(user=user)
                # If Profile creation fails, User is also rolled back
        """
        with transaction.atomic():
            yield
