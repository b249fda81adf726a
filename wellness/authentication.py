"""
Custom authentication backend for token-based auth.

This module defines a subclass of Django REST framework's
``TokenAuthentication`` that pins the ``keyword`` used in the
``Authorization`` header.  Keeping it out of the view modules avoids
circular imports when the REST framework loads authentication classes
during initialization.
"""
from __future__ import annotations

from rest_framework import authentication


class TokenAuthentication(authentication.TokenAuthentication):
    """Token authentication using the ``Token`` keyword.

    The mobile client sends ``Authorization: Token <key>``; JWT bearer
    tokens are handled by SimpleJWT alongside this class.
    """

    keyword = 'Token'
