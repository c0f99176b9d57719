"""
Organization Use Case DTOs (Data Transfer Objects)
"""

from typing import Any, Dict

from pydantic import BaseModel


class JoinOrganizationResponse(BaseModel):
    """Response for join organization use case"""

    organization: Dict[str, Any]
    membership: Dict[str, Any]
