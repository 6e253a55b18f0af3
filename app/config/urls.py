"""
URL configuration for the Django application.

The `urlpatterns` list routes URLs to views. This is the root URL configuration
that includes all app-specific routes.

URL Structure:
    /                              - ReDoc API documentation
    /admin/                        - Django admin interface
    /health/                       - Health check endpoint (for load balancers, Docker)
    /schema/                       - OpenAPI schema (YAML)
    /api/v1/auth/                  - Authentication endpoints
        register/                  - Create account
        login/                     - Email/password login (JWT pair)
        token/refresh/             - Refresh access token
    /api/v1/users/                 - User directory and account management
        me/                        - Current user (GET/DELETE)
        me/display-name/           - Change display name
        me/email/                  - Change email
        me/password/               - Change password
        {id}/                      - User detail
    /api/v1/chat/                  - Chat endpoints
        rooms/                     - Room list/create
        rooms/{id}/                - Room rename/delete
        rooms/{id}/messages/       - Room transcript/send message
        messages/me/               - Messages sent by the current user
        messages/{id}/             - Message edit/delete

For more information, see:
https://docs.djangoproject.com/en/5.2/topics/http/urls/
"""

from django.contrib import admin
from django.urls import include, path
from drf_spectacular.views import SpectacularAPIView, SpectacularRedocView

from authentication.urls import user_urlpatterns
from core.views import health_check

# =============================================================================
# API v1 Routes
# =============================================================================
# All routes here are prefixed with /api/v1/ automatically
api_v1_patterns = [
    # Registration, login, token refresh
    path("auth/", include("authentication.urls")),
    # User directory and self-service
    path("users/", include((user_urlpatterns, "users"))),
    # Chat
    path("chat/", include("chat.urls")),
]

urlpatterns = [
    # Documentation
    path("", SpectacularRedocView.as_view(url_name="schema"), name="redoc"),
    path("schema/", SpectacularAPIView.as_view(), name="schema"),
    # Admin
    path("admin/", admin.site.urls),
    # Health check (Docker, Kubernetes, load balancers)
    path("health/", health_check, name="health_check"),
    # API v1
    path("api/v1/", include(api_v1_patterns)),
]

# =============================================================================
# Admin Site Customization
# =============================================================================
admin.site.site_header = "Chat Rooms Admin"
admin.site.site_title = "Chat Rooms Admin"
admin.site.index_title = "Rooms, members and messages"
