"""
Helper functions for domain-specific operations.

This module provides domain-aware utility functions for:
- Slug generation (with model uniqueness checking)
- Data masking (email - PII handling in logs)

Usage:
    from toolkit.helpers import mask_email, slugify_unique

    masked = mask_email("user@example.com")  # u***@example.com
    handle = slugify_unique("Jane", Profile, "handle")  # "jane" or "jane-1"
"""

from __future__ import annotations

from django.utils.text import slugify


def slugify_unique(
    value: str,
    model_class,
    field_name: str = "slug",
    fallback: str = "item",
    max_length: int | None = None,
) -> str:
    """
    Generate a unique slug for a model instance.

    If the base slug already exists, appends a number suffix.

    Args:
        value: String to slugify
        model_class: Django model class to check uniqueness against
        field_name: Name of the slug field on the model
        fallback: Base used when `value` slugifies to an empty string
        max_length: Trim the base so base + suffix fits the column

    Returns:
        Unique slug string

    Example:
        slugify_unique("Jane", Profile, "handle")      # "jane", then "jane-1"
        slugify_unique("李", Profile, "handle", "user")  # "user"
    """
    base_slug = slugify(value) or fallback
    if max_length:
        # Leave room for a "-NNNN" suffix
        base_slug = base_slug[: max_length - 5].strip("-") or fallback

    slug = base_slug
    counter = 1

    while model_class.objects.filter(**{field_name: slug}).exists():
        slug = f"{base_slug}-{counter}"
        counter += 1

    return slug


def mask_email(email: str) -> str:
    """
    Mask email for display.

    Keeps first character and domain visible.

    Args:
        email: Email address to mask

    Returns:
        Masked email (e.g., "j***@example.com")
    """
    if not email or "@" not in email:
        return "***"

    local, domain = email.rsplit("@", 1)

    if len(local) > 1:
        masked_local = local[0] + "***"
    else:
        masked_local = "***"

    return f"{masked_local}@{domain}"
