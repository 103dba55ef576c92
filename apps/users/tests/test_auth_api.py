"""API tests for authentication endpoints."""

from __future__ import annotations

from django.urls import reverse
from rest_framework import status
from rest_framework.test import APITestCase

from apps.users.models import User


class AuthAPITests(APITestCase):
    def setUp(self) -> None:
        self.user = User.objects.create_user(
            username="alice",
            email="alice@example.com",
            password="CorrectHorse42",
        )

    def test_signup_creates_user_and_logs_in(self) -> None:
        payload = {"username": "bob", "email": "Bob@Example.com", "password": "Battery-Staple-9"}

        response = self.client.post(reverse("auth:signup"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_201_CREATED, response.data)
        self.assertEqual(response.data["user"]["username"], "bob")
        self.assertTrue(User.objects.filter(username="bob", email="bob@example.com").exists())

        me = self.client.get(reverse("auth:me"))
        self.assertEqual(me.status_code, status.HTTP_200_OK, me.data)
        self.assertEqual(me.data["username"], "bob")

    def test_signup_never_stores_plaintext_password(self) -> None:
        payload = {"username": "carol", "email": "carol@example.com", "password": "Battery-Staple-9"}
        self.client.post(reverse("auth:signup"), payload, format="json")
        user = User.objects.get(username="carol")
        self.assertNotEqual(user.password, payload["password"])
        self.assertTrue(user.check_password(payload["password"]))

    def test_signup_duplicate_username_conflicts(self) -> None:
        payload = {"username": "alice", "email": "other@example.com", "password": "Battery-Staple-9"}
        response = self.client.post(reverse("auth:signup"), payload, format="json")
        self.assertEqual(response.status_code, status.HTTP_409_CONFLICT, response.data)
        self.assertEqual(response.data["code"], "auth.duplicate_user")

    def test_signup_reports_every_invalid_field(self) -> None:
        response = self.client.post(reverse("auth:signup"), {"email": "nope"}, format="json")
        self.assertEqual(response.status_code, status.HTTP_400_BAD_REQUEST, response.data)
        self.assertEqual(set(response.data["errors"]), {"username", "email", "password"})

    def test_login_with_wrong_password_is_rejected(self) -> None:
        response = self.client.post(
            reverse("auth:login"), {"username": "alice", "password": "wrong"}, format="json"
        )
        self.assertEqual(response.status_code, status.HTTP_401_UNAUTHORIZED, response.data)
        self.assertEqual(response.data["code"], "auth.unauthenticated")

    def test_login_redirects_back_once_to_requested_path(self) -> None:
        listings_url = reverse("listings:listing-list")
        blocked = self.client.post(listings_url, {}, format="json")
        self.assertEqual(blocked.status_code, status.HTTP_401_UNAUTHORIZED)

        credentials = {"username": "alice", "password": "CorrectHorse42"}
        response = self.client.post(reverse("auth:login"), credentials, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(response.data["redirect_to"], listings_url)

        again = self.client.post(reverse("auth:login"), credentials, format="json")
        self.assertIsNone(again.data["redirect_to"])

    def test_logout_requires_session_and_ends_it(self) -> None:
        anonymous = self.client.get(reverse("auth:logout"))
        self.assertEqual(anonymous.status_code, status.HTTP_401_UNAUTHORIZED)

        self.client.force_login(self.user)
        response = self.client.get(reverse("auth:logout"))
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertEqual(self.client.get(reverse("auth:me")).status_code, status.HTTP_401_UNAUTHORIZED)

    def test_anonymous_logout_is_not_replayed_after_login(self) -> None:
        self.client.get(reverse("auth:logout"))

        credentials = {"username": "alice", "password": "CorrectHorse42"}
        response = self.client.post(reverse("auth:login"), credentials, format="json")
        self.assertEqual(response.status_code, status.HTTP_200_OK, response.data)
        self.assertIsNone(response.data["redirect_to"])
        self.assertEqual(self.client.get(reverse("auth:me")).status_code, status.HTTP_200_OK)
