"""
API tests for registration, login, token refresh and account management.

URL Structure:
    /api/v1/auth/register/, /api/v1/auth/login/, /api/v1/auth/token/refresh/
    /api/v1/users/, /api/v1/users/{id}/, /api/v1/users/me/...
"""

from django.urls import reverse
from rest_framework import status

from authentication.models import User


class TestRegisterView:
    url = "/api/v1/auth/register/"

    def test_register_returns_created_user(self, api_client, valid_registration_data, db):
        response = api_client.post(self.url, valid_registration_data, format="json")

        assert response.status_code == status.HTTP_201_CREATED
        assert response.data["email"] == "newuser@example.com"
        assert response.data["display_name"] == "newcomer"
        assert "password" not in response.data

    def test_register_duplicate_email_returns_409(self, api_client, user):
        response = api_client.post(
            self.url,
            {"email": user.email, "display_name": "x", "password": "Str0ng-Passw0rd!"},
            format="json",
        )

        assert response.status_code == status.HTTP_409_CONFLICT
        assert response.data["error_code"] == "EMAIL_EXISTS"

    def test_register_missing_fields_returns_400(self, api_client, db):
        response = api_client.post(self.url, {"email": "x@example.com"}, format="json")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestLoginAndRefresh:
    def test_login_then_access_protected_endpoint(self, api_client, user, password):
        response = api_client.post(
            reverse("authentication:login"),
            {"email": user.email, "password": password},
            format="json",
        )
        assert response.status_code == status.HTTP_200_OK

        api_client.credentials(HTTP_AUTHORIZATION=f"Bearer {response.data['access']}")
        me = api_client.get(reverse("users:me"))

        assert me.status_code == status.HTTP_200_OK
        assert me.data["email"] == user.email

    def test_login_bad_password_returns_401(self, api_client, user):
        response = api_client.post(
            reverse("authentication:login"),
            {"email": user.email, "password": "nope"},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED
        assert response.data["error_code"] == "INVALID_CREDENTIALS"

    def test_refresh_issues_new_access_token(self, api_client, tokens):
        response = api_client.post(
            reverse("authentication:token-refresh"),
            {"refresh": tokens["refresh"]},
            format="json",
        )

        assert response.status_code == status.HTTP_200_OK
        assert "access" in response.data

    def test_refresh_after_password_change_is_rejected(
        self, api_client, authenticated_client, tokens, password
    ):
        authenticated_client.put(
            reverse("users:me-password"),
            {"current_password": password, "new_password": "N3w-Passw0rd!!"},
            format="json",
        )

        response = api_client.post(
            reverse("authentication:token-refresh"),
            {"refresh": tokens["refresh"]},
            format="json",
        )

        assert response.status_code == status.HTTP_401_UNAUTHORIZED


class TestUserDirectoryViews:
    def test_list_requires_authentication(self, api_client, db):
        response = api_client.get(reverse("users:user-list"))

        assert response.status_code == status.HTTP_401_UNAUTHORIZED

    def test_list_users(self, authenticated_client, user, other_user):
        response = authenticated_client.get(reverse("users:user-list"))

        assert response.status_code == status.HTTP_200_OK
        emails = [item["email"] for item in response.data["results"]]
        assert emails == [user.email, other_user.email]

    def test_retrieve_user(self, authenticated_client, other_user):
        response = authenticated_client.get(
            reverse("users:user-detail", kwargs={"pk": other_user.id})
        )

        assert response.status_code == status.HTTP_200_OK
        assert response.data["display_name"] == "bob"

    def test_retrieve_unknown_user_returns_404(self, authenticated_client):
        response = authenticated_client.get(
            reverse("users:user-detail", kwargs={"pk": 999999})
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.data["error_code"] == "USER_NOT_FOUND"


class TestMeViews:
    def test_change_display_name_invalidates_old_token(self, authenticated_client, user):
        response = authenticated_client.put(
            reverse("users:me-display-name"), {"display_name": "Alice"}, format="json"
        )
        assert response.status_code == status.HTTP_200_OK
        assert response.data["display_name"] == "Alice"

        # The client still sends the token issued before the change
        stale = authenticated_client.get(reverse("users:me"))

        assert stale.status_code == status.HTTP_401_UNAUTHORIZED

    def test_change_email_conflict_returns_409(self, authenticated_client, other_user):
        response = authenticated_client.put(
            reverse("users:me-email"), {"email": other_user.email}, format="json"
        )

        assert response.status_code == status.HTTP_409_CONFLICT

    def test_change_password_with_wrong_current_returns_400(self, authenticated_client):
        response = authenticated_client.put(
            reverse("users:me-password"),
            {"current_password": "wrong", "new_password": "N3w-Passw0rd!!"},
            format="json",
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.data["error_code"] == "INVALID_PASSWORD"

    def test_delete_account(self, authenticated_client, user):
        response = authenticated_client.delete(reverse("users:me"))

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert not User.objects.filter(id=user.id).exists()
