"""
Tests for authentication app.

This package contains test modules for:
- test_models.py: User and Profile model tests
- test_managers.py: UserManager tests
- test_services.py: AuthService and PasswordService tests
- test_hooks.py: "email" activation hook tests
- test_views.py: API endpoint tests
- test_adapters.py: allauth adapter tests
- test_signals.py / test_tasks.py: welcome email tests

Usage:
    pytest authentication/tests/
    pytest authentication/tests/test_services.py
"""
