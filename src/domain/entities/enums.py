"""
Domain Enums

Enumeration types used by the entity store and the access policy.
"""

from enum import Enum


class EntityName(str, Enum):
    """Entity names the service itself knows about"""

    user = "User"
    session = "Session"
    organization = "Organization"
    organization_member = "OrganizationMember"
    airtable_connection = "AirtableConnection"
    pdf_template = "PDFTemplate"
    section = "Section"
    generated_pdf = "GeneratedPDF"
    polling_config = "PollingConfig"


class EntityCategory(str, Enum):
    """Access-control family an entity name belongs to"""

    personal_or_shared = "personal_or_shared"
    auth_only = "auth_only"
    organization = "organization"
    organization_member = "organization_member"
    unregistered = "unregistered"


class Operation(str, Enum):
    """Operation requested on an entity"""

    read = "read"
    list = "list"
    create = "create"
    update = "update"
    delete = "delete"


class Decision(str, Enum):
    """Outcome of an access check"""

    allow = "allow"
    deny = "deny"


class OrganizationRole(str, Enum):
    """Role of a user within an organization"""

    owner = "owner"
    member = "member"
