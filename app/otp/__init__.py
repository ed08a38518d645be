"""
One-time password application.

Issues and verifies short-lived numeric codes scoped to a (user, operation)
pair, and runs the side effect registered for an operation once a code is
verified.

Key components:
    - OneTimePassword model + manager: the code store
    - OTPService: issue() and verify()
    - Delivery dispatchers: hand issued codes to a delivery channel
    - Activation hooks: per-operation effects run on successful verification

Usage:
    from otp.services import OTPService

    OTPService.issue("user@example.com", "email")
    result = OTPService.verify("user@example.com", "email", "123456")
"""
