"""Views for authentication flows (signup, login)."""

from __future__ import annotations

import logging

from rest_framework import status
from rest_framework.permissions import AllowAny
from rest_framework.response import Response
from rest_framework.views import APIView

from .auth_serializers import LoginResponseSerializer, LoginSerializer, SignupSerializer
from .exceptions import InvalidCredentials, PasswordMismatch
from .services import create_identity, verify_credentials
from .tokens import issue_token

logger = logging.getLogger(__name__)


class SignupView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]
    serializer_class = SignupSerializer

    def post(self, request):  # type: ignore
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        data = serializer.validated_data
        if data["password"] != data["confirm_password"]:
            raise PasswordMismatch()
        create_identity(
            email=data["email"],
            username=data["username"],
            phone=data["phone"],
            raw_password=data["password"],
            role=data["role"],
        )
        return Response({"message": "User registered successfully."}, status=status.HTTP_201_CREATED)


class LoginView(APIView):
    authentication_classes: list = []
    permission_classes = [AllowAny]
    serializer_class = LoginSerializer

    def post(self, request):  # type: ignore
        serializer = LoginSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        try:
            user = verify_credentials(**serializer.validated_data)
        except InvalidCredentials:
            logger.warning("Login failed: invalid credentials")
            raise
        logger.info(f"Identity {user.pk} logged in")
        payload = LoginResponseSerializer({"token": issue_token(user), "role": user.role}).data
        return Response(payload, status=status.HTTP_200_OK)
