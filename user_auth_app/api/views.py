"""Auth API views.

Implements cookie-session signup, login, logout and "who am I", plus the
self-service password change and profile endpoints. Signup and login issue a
signed session token and set it as an HTTP-only cookie.
"""

import logging

from rest_framework import status
from rest_framework.exceptions import AuthenticationFailed
from rest_framework.response import Response
from rest_framework.views import APIView

from common.exceptions import error_response
from user_auth_app.authentication import OptionalCookieTokenAuthentication
from user_auth_app.services import IncorrectPassword, change_password, create_account
from user_auth_app.tokens import clear_session_cookie, issue_token_for, set_session_cookie
from .permissions import AllowAnyAuthEntry, HasRouteRole
from .serializers import (
    ChangePasswordSerializer,
    LoginSerializer,
    PasswordUpdateSerializer,
    ProfileUpdateSerializer,
    SignupSerializer,
    UserSerializer,
)

logger = logging.getLogger(__name__)


def _session_response(user, message, status_code):
    """Return the user payload and attach a fresh session cookie."""
    response = Response(
        {"success": True, "message": message, "user": UserSerializer(user).data},
        status=status_code,
    )
    set_session_cookie(response, issue_token_for(user))
    return response


def password_change_error(user, serializer):
    """Apply a validated password change; return a 400 response if the current password is wrong."""
    data = serializer.validated_data
    try:
        change_password(user, data["currentPassword"], data["newPassword"])
    except IncorrectPassword:
        return error_response("Current password is incorrect", status.HTTP_400_BAD_REQUEST)
    return None


class SignupView(APIView):
    """POST /api/auth/signup -> create a USER account and start a session."""

    authentication_classes = [OptionalCookieTokenAuthentication]
    permission_classes = [AllowAnyAuthEntry]

    def post(self, request, *args, **kwargs):
        serializer = SignupSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        user = create_account(**serializer.validated_data)
        return _session_response(user, "User registered successfully", status.HTTP_201_CREATED)


class LoginView(APIView):
    """POST /api/auth/login -> validate credentials and start a session."""

    authentication_classes = [OptionalCookieTokenAuthentication]
    permission_classes = [AllowAnyAuthEntry]

    def post(self, request, *args, **kwargs):
        serializer = LoginSerializer(data=request.data, context={"request": request})
        serializer.is_valid(raise_exception=True)
        user = serializer.validated_data["user"]
        if user is None:
            logger.info("Failed login attempt")
            raise AuthenticationFailed("Invalid email or password")
        return _session_response(user, "Login successful", status.HTTP_200_OK)


class LogoutView(APIView):
    """POST /api/auth/logout -> clear the session cookie."""

    authentication_classes = [OptionalCookieTokenAuthentication]
    permission_classes = [AllowAnyAuthEntry]

    def post(self, request, *args, **kwargs):
        response = Response({"success": True, "message": "Logout successful"}, status=status.HTTP_200_OK)
        clear_session_cookie(response)
        return response


class MeView(APIView):
    """GET /api/auth/me -> the freshly loaded current user."""

    permission_classes = [HasRouteRole]
    role_scope = "authenticated"

    def get(self, request, *args, **kwargs):
        return Response({"success": True, "user": UserSerializer(request.user).data})


class ChangePasswordView(APIView):
    """POST /api/auth/change-password {currentPassword, newPassword}."""

    permission_classes = [HasRouteRole]
    role_scope = "authenticated"

    def post(self, request, *args, **kwargs):
        serializer = ChangePasswordSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        failed = password_change_error(request.user, serializer)
        if failed is not None:
            return failed
        return Response({"success": True, "message": "Password changed successfully"})


class UpdatePasswordView(APIView):
    """PUT /api/users/update-password {currentPassword, newPassword, confirmPassword}."""

    permission_classes = [HasRouteRole]
    role_scope = "authenticated"

    def put(self, request, *args, **kwargs):
        serializer = PasswordUpdateSerializer(data=request.data)
        serializer.is_valid(raise_exception=True)
        failed = password_change_error(request.user, serializer)
        if failed is not None:
            return failed
        return Response({"success": True, "message": "Password updated successfully"})


class ProfileView(APIView):
    """GET/PUT /api/users/profile -> read or update the user's own name/address."""

    permission_classes = [HasRouteRole]
    role_scope = "authenticated"

    def get(self, request, *args, **kwargs):
        return Response({"success": True, "data": UserSerializer(request.user).data})

    def put(self, request, *args, **kwargs):
        serializer = ProfileUpdateSerializer(request.user, data=request.data, partial=True)
        serializer.is_valid(raise_exception=True)
        user = serializer.save()
        return Response(
            {"success": True, "message": "Profile updated successfully", "data": UserSerializer(user).data}
        )
