"""
Tests for the otp app.

This package contains test modules for:
- test_managers.py: OTP store (queryset/manager)
- test_services.py: OTPService issue/verify
- test_hooks.py: ActivationHookRegistry
- test_dispatchers.py: delivery dispatchers
- test_tasks.py: email and purge tasks
- test_views.py: /api/v1/auth/otp/ endpoints

Usage:
    pytest otp/tests/
"""
