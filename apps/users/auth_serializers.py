"""Request schemas for authentication flows (signup, login)."""

from __future__ import annotations

from rest_framework import serializers  # type: ignore

from .models import PHONE_VALIDATOR, CustomUser


class SignupSerializer(serializers.Serializer):
    email = serializers.EmailField()
    username = serializers.CharField(max_length=150)
    phone = serializers.CharField(max_length=20, validators=[PHONE_VALIDATOR])
    password = serializers.CharField(write_only=True, trim_whitespace=False)
    confirm_password = serializers.CharField(write_only=True, trim_whitespace=False)
    role = serializers.ChoiceField(choices=CustomUser.Role.choices, default=CustomUser.Role.STUDENT)


class LoginSerializer(serializers.Serializer):
    email = serializers.EmailField()
    password = serializers.CharField(write_only=True, trim_whitespace=False)


class LoginResponseSerializer(serializers.Serializer):
    token = serializers.CharField()
    role = serializers.CharField()
