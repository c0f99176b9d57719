"""
Identity Value Object

The authenticated caller, resolved from a session for a single request
and passed explicitly into every use case.
"""

from pydantic import BaseModel, ConfigDict


class Identity(BaseModel):
    """Minimal authenticated principal carried by a session"""

    model_config = ConfigDict(frozen=True)

    id: str
    username: str
    email: str = ""
