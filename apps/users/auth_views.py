"""Views for authentication flows (signup, login, logout, current user)."""

from __future__ import annotations

from django.contrib.auth import login, logout  # type: ignore
from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from shared.application.validation import validate_payload
from shared.domain.errors import Unauthenticated

from . import identity
from .auth_serializers import LoginSerializer, SignupSerializer
from .context import RequestContext, pop_return_path
from .serializers import UserSerializer


def _session_payload(request, user) -> dict:
    return {
        "user": UserSerializer(user).data,
        "redirect_to": pop_return_path(request.session),
    }


class SignupView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        data = validate_payload(SignupSerializer, request.data)
        user = identity.register(data["username"], data["email"], data["password"])
        login(request, user)
        return Response(_session_payload(request, user), status=status.HTTP_201_CREATED)


class LoginView(APIView):
    permission_classes = [AllowAny]

    def post(self, request):  # type: ignore
        data = validate_payload(LoginSerializer, request.data)
        user = identity.verify(data["username"], data["password"], request=request)
        if user is None:
            raise Unauthenticated("Invalid username or password.")
        login(request, user)
        return Response(_session_payload(request, user), status=status.HTTP_200_OK)


class LogoutView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        return self._logout(request)

    def post(self, request):  # type: ignore
        return self._logout(request)

    def _logout(self, request):  # type: ignore
        RequestContext.from_request(request).require_identity(remember=False)
        logout(request)
        return Response({"detail": "Logged out."}, status=status.HTTP_200_OK)


class MeView(APIView):
    permission_classes = [AllowAny]

    def get(self, request):  # type: ignore
        user = RequestContext.from_request(request).require_identity()
        return Response(UserSerializer(user).data)
