"""
Authentication application.

This app is the Identity Provider for the project: it stores users,
authenticates credentials and issues JWTs whose generation claim is
checked on every request.

Key components:
    - User model: Custom email-based user with a display name
    - AccountService: Registration, login and credential changes
    - GenerationJWTAuthentication: Rejects tokens from older credential generations

Usage:
    from authentication.models import User
    from authentication.services import AccountService
"""
