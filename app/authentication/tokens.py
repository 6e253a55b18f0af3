"""
JWT issuing and verification on top of djangorestframework-simplejwt.

Every token carries the user's current token generation in the `gen` claim.
Changing display name, email or password bumps the generation, so tokens
issued before the change stop authenticating (both access and refresh).

Related files:
    - models.py: User.token_generation / rotate_token_generation()
    - services.py: AccountService issues tokens on login
    - config/settings.py: REST_FRAMEWORK / SIMPLE_JWT wiring
"""

from __future__ import annotations

from typing import TYPE_CHECKING

from django.contrib.auth import get_user_model
from rest_framework_simplejwt.authentication import JWTAuthentication
from rest_framework_simplejwt.exceptions import InvalidToken
from rest_framework_simplejwt.serializers import TokenRefreshSerializer
from rest_framework_simplejwt.settings import api_settings
from rest_framework_simplejwt.tokens import RefreshToken

if TYPE_CHECKING:
    from authentication.models import User

GENERATION_CLAIM = "gen"


def issue_tokens(user: "User") -> dict[str, str]:
    """
    Create an access/refresh pair for the user.

    Besides the user id, tokens carry the display name, the email and the
    token generation. Claims set on the refresh token are copied onto the
    access token.
    """
    refresh = RefreshToken.for_user(user)
    refresh[GENERATION_CLAIM] = user.token_generation
    refresh["display_name"] = user.display_name
    refresh["email"] = user.email
    return {
        "refresh": str(refresh),
        "access": str(refresh.access_token),
    }


def is_current_generation(token, user: "User") -> bool:
    return token.get(GENERATION_CLAIM) == user.token_generation


class GenerationJWTAuthentication(JWTAuthentication):
    """
    JWT authentication that rejects tokens from an older credential generation.

    Resolves the request user exactly once; views receive `request.user`
    and pass it explicitly into services.
    """

    def get_user(self, validated_token):
        user = super().get_user(validated_token)
        if not is_current_generation(validated_token, user):
            raise InvalidToken("Token has been invalidated by a credential change")
        return user


class GenerationTokenRefreshSerializer(TokenRefreshSerializer):
    """Refresh serializer applying the same generation check as authentication."""

    def validate(self, attrs):
        refresh = self.token_class(attrs["refresh"])
        user_id = refresh.payload.get(api_settings.USER_ID_CLAIM)

        user = (
            get_user_model()
            .objects.filter(**{api_settings.USER_ID_FIELD: user_id})
            .first()
        )
        if user is None or not user.is_active or not is_current_generation(refresh, user):
            raise InvalidToken("Token has been invalidated by a credential change")

        return super().validate(attrs)
