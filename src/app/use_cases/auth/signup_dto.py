"""
Signup Use Case DTOs (Data Transfer Objects)

Command/Response pattern for clean architecture separation:
- SignupCommand: Input to use case (validated business intent)
- SignupResponse: Output from use case (structured result)
"""

from pydantic import BaseModel


class SignupCommand(BaseModel):
    """
    Signup command - represents validated signup intent

    Created by API layer after request validation passes.
    Contains only business-relevant data (no HTTP concerns).
    """

    username: str
    email: str
    password: str


class UserInfo(BaseModel):
    """User information in authentication responses"""

    id: str
    username: str
    email: str
    name: str


class SignupResponse(BaseModel):
    """
    Signup response - structured output from use case

    The new account is logged in straight away, so the response carries
    a session token as well.
    """

    message: str
    token: str
    user: UserInfo
    expires_at: str
