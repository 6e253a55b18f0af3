"""
URL configuration for authentication app.

URL structure:
    /api/v1/auth/register/              - Create account (POST)
    /api/v1/auth/login/                 - Obtain JWT pair (POST)
    /api/v1/auth/token/refresh/         - Refresh access token (POST)

    /api/v1/users/                      - List users (GET)
    /api/v1/users/{id}/                 - Get user (GET)
    /api/v1/users/me/                   - Current user (GET, DELETE)
    /api/v1/users/me/display-name/      - Change display name (PUT)
    /api/v1/users/me/email/             - Change email (PUT)
    /api/v1/users/me/password/          - Change password (PUT)
"""

from django.urls import path
from rest_framework_simplejwt.views import TokenRefreshView

from authentication.views import (
    DisplayNameView,
    EmailView,
    LoginView,
    MeView,
    PasswordView,
    RegisterView,
    UserViewSet,
)

app_name = "authentication"

urlpatterns = [
    path("register/", RegisterView.as_view(), name="register"),
    path("login/", LoginView.as_view(), name="login"),
    path("token/refresh/", TokenRefreshView.as_view(), name="token-refresh"),
]

user_urlpatterns = [
    path("", UserViewSet.as_view({"get": "list"}), name="user-list"),
    path("me/", MeView.as_view(), name="me"),
    path("me/display-name/", DisplayNameView.as_view(), name="me-display-name"),
    path("me/email/", EmailView.as_view(), name="me-email"),
    path("me/password/", PasswordView.as_view(), name="me-password"),
    path("<int:pk>/", UserViewSet.as_view({"get": "retrieve"}), name="user-detail"),
]
