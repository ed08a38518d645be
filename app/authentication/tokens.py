"""
JWT helpers built on SimpleJWT.

Usage:
    from authentication.tokens import issue_tokens

    tokens = issue_tokens(user)  # {"access": "...", "refresh": "..."}
"""

from typing import TypedDict

from rest_framework_simplejwt.tokens import RefreshToken


class TokenPair(TypedDict):
    access: str
    refresh: str


def issue_tokens(user) -> TokenPair:
    """Mint a fresh refresh token for `user` and its access token."""
    refresh = RefreshToken.for_user(user)
    return {"access": str(refresh.access_token), "refresh": str(refresh)}
