"""
Authentication models.

This module defines the core authentication models:
- User: Custom user model with email-based authentication (slim, auth-focused)
- Profile: Name, public handle and address (OneToOne with User)
- LinkedAccount: Tracks authentication providers linked to a user

Related files:
    - managers.py: Custom user manager for email-based creation
    - services.py: AuthService and PasswordService business logic
    - hooks.py: Marks email verified when an "email" OTP is verified

Security:
    - User passwords hashed with Django's password hashers
    - Email verification is proven with a one-time password (see otp app)
    - Deleted accounts are deactivated (is_active=False), never removed
"""

from django.contrib.auth.models import AbstractBaseUser, PermissionsMixin
from django.conf import settings
from django.db import models

from core.models import BaseModel
from authentication.managers import UserManager


class User(AbstractBaseUser, PermissionsMixin):
    """
    Custom User model using email as the primary identifier.

    Profile data (names, handle, address) is stored in the Profile model.
    OAuth provider tracking is handled by LinkedAccount.

    Fields:
        email: Primary identifier, unique, used for login
        email_verified_at: When the address was verified (null until then)
        is_active: False for deleted accounts
        is_staff: Whether the user can access Django admin
        date_joined: When the user account was created
        updated_at: When the user record was last modified

    Usage:
        user = User.objects.create_user(
            email='user@example.com',
            password='securepassword'
        )
        user.is_email_verified  # False until the email OTP is verified
    """

    email = models.EmailField(
        unique=True,
        db_index=True,
        max_length=254,
        help_text="User's email address (primary identifier)",
    )

    email_verified_at = models.DateTimeField(
        null=True,
        blank=True,
        help_text="When the user's email was verified (empty if unverified)",
    )

    # Account status flags
    is_active = models.BooleanField(
        default=True,
        help_text="Whether this user account is active. Deselect instead of deleting.",
    )
    is_staff = models.BooleanField(
        default=False,
        help_text="Whether the user can access the admin site.",
    )

    # Timestamps
    date_joined = models.DateTimeField(
        auto_now_add=True,
        help_text="When the user account was created",
    )
    updated_at = models.DateTimeField(
        auto_now=True,
        help_text="When the user record was last modified",
    )

    USERNAME_FIELD = "email"
    EMAIL_FIELD = "email"
    REQUIRED_FIELDS = []

    objects = UserManager()

    class Meta:
        verbose_name = "user"
        verbose_name_plural = "users"
        ordering = ["-date_joined"]

    def __str__(self):
        return self.email

    @property
    def is_email_verified(self):
        return self.email_verified_at is not None

    def get_full_name(self):
        """
        Return the user's full name from profile.

        Returns:
            str: Full name from profile, or email if no profile/name set.
        """
        try:
            return self.profile.full_name or self.email
        except Profile.DoesNotExist:
            return self.email

    def get_short_name(self):
        try:
            return self.profile.first_name or self.email.split("@")[0]
        except Profile.DoesNotExist:
            return self.email.split("@")[0]


class Profile(BaseModel):
    """
    Extended user profile data.

    Fields:
        user: OneToOne link to User (also serves as primary key)
        first_name: User's first name
        last_name: User's last name
        handle: Unique public slug, generated from the first name
        address: Optional postal address

    Note:
        Profiles are created by AuthService.ensure_profile during
        registration and social sign-up.
    """

    user = models.OneToOneField(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="profile",
        primary_key=True,
        help_text="User this profile belongs to",
    )

    first_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="User's first name",
    )
    last_name = models.CharField(
        max_length=150,
        blank=True,
        help_text="User's last name",
    )

    handle = models.SlugField(
        max_length=64,
        unique=True,
        help_text="Unique public handle generated from the first name",
    )

    address = models.CharField(
        max_length=255,
        blank=True,
        help_text="User's postal address",
    )

    class Meta:
        db_table = "authentication_profile"
        verbose_name = "profile"
        verbose_name_plural = "profiles"

    def __str__(self):
        return self.handle or str(self.user)

    @property
    def full_name(self):
        return f"{self.first_name} {self.last_name}".strip()


class LinkedAccount(BaseModel):
    """
    Tracks authentication providers linked to a user account.

    A user can sign in with email/password, Google, and Apple; each method
    gets one row here.

    Usage:
        user.linked_accounts.filter(provider='google').exists()

        LinkedAccount.objects.create(
            user=user,
            provider=LinkedAccount.Provider.GOOGLE,
            provider_user_id='google123',
        )
    """

    class Provider(models.TextChoices):
        """Authentication provider choices."""

        EMAIL = "email", "Email"
        GOOGLE = "google", "Google"
        APPLE = "apple", "Apple"

    user = models.ForeignKey(
        settings.AUTH_USER_MODEL,
        on_delete=models.CASCADE,
        related_name="linked_accounts",
        help_text="User this linked account belongs to",
    )

    provider = models.CharField(
        max_length=20,
        choices=Provider.choices,
        db_index=True,
        help_text="Authentication provider",
    )

    provider_user_id = models.CharField(
        max_length=255,
        help_text="Unique identifier from the provider",
    )

    class Meta:
        db_table = "authentication_linked_account"
        verbose_name = "linked account"
        verbose_name_plural = "linked accounts"
        constraints = [
            models.UniqueConstraint(
                fields=["provider", "provider_user_id"],
                name="unique_provider_user",
            ),
        ]
        indexes = [
            models.Index(
                fields=["user", "provider"],
                name="auth_linked_user_provider_idx",
            ),
        ]

    def __str__(self):
        return f"{self.get_provider_display()} account for {self.user}"
