"""DRF exception handler rendering every failure as ``{"code", "detail"}``."""

from __future__ import annotations

import logging

from django.db import DatabaseError  # type: ignore
from rest_framework import status  # type: ignore
from rest_framework.response import Response  # type: ignore
from rest_framework.views import exception_handler  # type: ignore

from shared.domain.errors import DomainError

logger = logging.getLogger(__name__)


def _first_code(codes) -> str:
    if isinstance(codes, str):
        return codes
    if isinstance(codes, dict):
        if len(codes) == 1 and "detail" in codes:
            return _first_code(codes["detail"])
        return "invalid"
    if isinstance(codes, list) and codes:
        return _first_code(codes[0])
    return "error"


def api_exception_handler(exc, context):
    view = context.get("view")
    view_name = type(view).__name__ if view is not None else "unknown"

    if isinstance(exc, DomainError):
        if exc.status_code >= 500:
            logger.error(f"{view_name}: {exc.code}: {exc.message}")
        return Response({"code": exc.code, "detail": exc.message}, status=exc.status_code)

    response = exception_handler(exc, context)
    if response is not None:
        # Http404 and Django's PermissionDenied arrive untranslated; their codes live on the rendered detail.
        codes = exc.get_codes() if hasattr(exc, "get_codes") else None
        if isinstance(response.data, dict) and "detail" in response.data:
            codes = getattr(response.data["detail"], "code", None) or codes
            response.data = {"code": _first_code(codes), "detail": response.data["detail"]}
        else:
            response.data = {"code": "invalid", "detail": response.data}
        return response

    if isinstance(exc, DatabaseError):
        logger.error(f"{view_name}: persistence failure: {exc}", exc_info=exc)
        return Response(
            {"code": "internal", "detail": "Server error."},
            status=status.HTTP_500_INTERNAL_SERVER_ERROR,
        )

    return None
