# Importing the models registers every table on Base.metadata.

from legate.app.models.user import User
from legate.app.models.estate import Estate, EstateCollaborator, EstateRole
from legate.app.models.invoice import Invoice, InvoiceStatus, OUTSTANDING_STATUSES
from legate.app.models.workspace import InvoiceTerms, WorkspaceSettings

__all__ = [
    "User",
    "Estate",
    "EstateCollaborator",
    "EstateRole",
    "Invoice",
    "InvoiceStatus",
    "OUTSTANDING_STATUSES",
    "InvoiceTerms",
    "WorkspaceSettings",
]
