"""
Authentication application.

This app provides user accounts, email/password and social sign-in,
JWT issuance, and the account side of the OTP workflow (email
verification and OTP-gated password changes).

Key components:
    - User model: Custom email-based user
    - Profile model: Names, handle, address
    - AuthService: register, login, logout, token issuance
    - PasswordService: OTP-gated password change
    - OAuth adapters: Google and Apple social authentication
    - hooks.py: "email" activation hook for the otp app

Usage:
    from authentication.models import User, Profile
    from authentication.services import AuthService
"""
