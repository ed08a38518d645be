"""
Toolkit - Domain-Specific Utilities & Services.

Key components:
    - services/email.py: EmailService (template rendering + Django mail)
    - helpers.py: mask_email, slugify_unique

Usage:
    from toolkit.services.email import EmailService
    from toolkit.helpers import mask_email, slugify_unique

Note:
    This app has no models. It's installed so its templates and tests
    are discovered.
"""
