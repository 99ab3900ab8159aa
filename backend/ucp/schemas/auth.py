"""Request schemas for login, registration and password reset."""

from ucp.schemas.fields import Email, Password, RequestModel, Secret, UserMail, Username


class LoginRequest(RequestModel):
    """Credentials for POST /auth and POST /auth/admin."""

    usermail: UserMail
    password: Secret


class RegisterRequest(RequestModel):
    """New account details for POST /auth/new."""

    username: Username
    email: Email
    password: Password


class PasswordResetRequest(RequestModel):
    """Address to send a forgot-password link to."""

    email: Email


class PasswordResetConfirm(RequestModel):
    """New password submitted with a forgot-password code."""

    password: Password
