"""
Authentication views.

This module provides API views for:
- Registration and login (JWT issuing)
- User directory (list, retrieve)
- Self-service account management for the current user

Related files:
    - serializers.py: Request/response serialization
    - services.py: Business logic (AccountService)
    - tokens.py: Token issuing and the generation check
    - urls.py: URL routing

Note:
    Token refresh is served by simplejwt's TokenRefreshView, configured with
    GenerationTokenRefreshSerializer in settings.
"""

from drf_spectacular.utils import OpenApiResponse, extend_schema, extend_schema_view
from rest_framework import status, viewsets
from rest_framework.permissions import AllowAny, IsAuthenticated
from rest_framework.response import Response
from rest_framework.views import APIView

from authentication.serializers import (
    DisplayNameUpdateSerializer,
    EmailUpdateSerializer,
    LoginSerializer,
    PasswordChangeSerializer,
    RegisterSerializer,
    TokenPairSerializer,
    UserSerializer,
)
from authentication.services import AccountService
from core.views import service_error_response


# =============================================================================
# Registration & Login
# =============================================================================


class RegisterView(APIView):
    """
    POST: Create an account

    URL: /api/v1/auth/register/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_register",
        summary="Register new account",
        tags=["Auth"],
        request=RegisterSerializer,
        responses={
            201: UserSerializer,
            400: OpenApiResponse(description="Invalid input or weak password"),
            409: OpenApiResponse(description="Email already registered"),
        },
    )
    def post(self, request):
        serializer = RegisterSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.register(**serializer.validated_data)
        if not result.success:
            return service_error_response(result)

        return Response(UserSerializer(result.data).data, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    """
    POST: Exchange email and password for a JWT pair

    URL: /api/v1/auth/login/
    """

    permission_classes = [AllowAny]
    authentication_classes = []

    @extend_schema(
        operation_id="auth_login",
        summary="Log in",
        tags=["Auth"],
        request=LoginSerializer,
        responses={
            200: TokenPairSerializer,
            401: OpenApiResponse(description="Invalid email or password"),
        },
    )
    def post(self, request):
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.login(**serializer.validated_data)
        if not result.success:
            return service_error_response(result)

        return Response(result.data)


# =============================================================================
# User Directory
# =============================================================================


@extend_schema_view(
    list=extend_schema(
        operation_id="list_users",
        summary="List users",
        tags=["Users"],
    ),
    retrieve=extend_schema(
        operation_id="get_user",
        summary="Get user",
        tags=["Users"],
    ),
)
class UserViewSet(viewsets.ReadOnlyModelViewSet):
    """
    list:
        All active users, ordered by id.

    retrieve:
        A single active user.
    """

    permission_classes = [IsAuthenticated]
    serializer_class = UserSerializer

    def get_queryset(self):
        return AccountService.list_users()

    def retrieve(self, request, pk=None):
        result = AccountService.get_user(pk)
        if not result.success:
            return service_error_response(result)
        return Response(UserSerializer(result.data).data)


# =============================================================================
# Current User
# =============================================================================


class MeView(APIView):
    """
    GET: Current user
    DELETE: Delete the current user's account

    URL: /api/v1/users/me/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="get_current_user",
        summary="Get current user",
        tags=["Users"],
        responses={200: UserSerializer},
    )
    def get(self, request):
        return Response(UserSerializer(request.user).data)

    @extend_schema(
        operation_id="delete_current_user",
        summary="Delete account",
        description=(
            "Delete the current user's account. Room memberships are removed; "
            "messages already sent stay in their rooms without a sender."
        ),
        tags=["Users"],
        responses={204: None},
    )
    def delete(self, request):
        result = AccountService.delete_account(request.user)
        if not result.success:
            return service_error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)


class DisplayNameView(APIView):
    """
    PUT: Change display name (invalidates issued tokens)

    URL: /api/v1/users/me/display-name/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="update_display_name",
        summary="Change display name",
        tags=["Users"],
        request=DisplayNameUpdateSerializer,
        responses={200: UserSerializer},
    )
    def put(self, request):
        serializer = DisplayNameUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.change_display_name(
            request.user, serializer.validated_data["display_name"]
        )
        if not result.success:
            return service_error_response(result)
        return Response(UserSerializer(result.data).data)


class EmailView(APIView):
    """
    PUT: Change email (invalidates issued tokens)

    URL: /api/v1/users/me/email/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="update_email",
        summary="Change email",
        tags=["Users"],
        request=EmailUpdateSerializer,
        responses={
            200: UserSerializer,
            409: OpenApiResponse(description="Email already registered"),
        },
    )
    def put(self, request):
        serializer = EmailUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.change_email(request.user, serializer.validated_data["email"])
        if not result.success:
            return service_error_response(result)
        return Response(UserSerializer(result.data).data)


class PasswordView(APIView):
    """
    PUT: Change password (invalidates issued tokens)

    URL: /api/v1/users/me/password/
    """

    permission_classes = [IsAuthenticated]

    @extend_schema(
        operation_id="change_password",
        summary="Change password",
        tags=["Users"],
        request=PasswordChangeSerializer,
        responses={
            204: None,
            400: OpenApiResponse(description="Wrong current password or weak new password"),
        },
    )
    def put(self, request):
        serializer = PasswordChangeSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)

        result = AccountService.change_password(
            request.user,
            serializer.validated_data["current_password"],
            serializer.validated_data["new_password"],
        )
        if not result.success:
            return service_error_response(result)
        return Response(status=status.HTTP_204_NO_CONTENT)
