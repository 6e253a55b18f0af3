"""
URL configuration for chat API.

URL Structure:
    Rooms:
        /rooms/                  GET, POST
        /rooms/{id}/             PUT, PATCH, DELETE
        /rooms/{id}/messages/    GET, POST

    Messages:
        /messages/me/            GET
        /messages/{id}/          PUT, PATCH, DELETE

All URLs are prefixed with /api/v1/chat/ in the main URL configuration.
"""

from django.urls import include, path
from rest_framework.routers import DefaultRouter

from chat.views import MessageViewSet, RoomViewSet

router = DefaultRouter()
router.register(r"rooms", RoomViewSet, basename="room")
router.register(r"messages", MessageViewSet, basename="message")

app_name = "chat"

urlpatterns = [
    path("", include(router.urls)),
]
