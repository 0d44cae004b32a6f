"""
Database entities for the Legal Aid service.

Importing this package registers every table with ``Base.metadata``.
"""

from .access import Permission, Role, RolePermission
from .activities import Activity
from .appeals import Appeal, AppealHearing
from .appointments import Appointment
from .billing import Payment, ServicePackage, ServiceRequest
from .cases import Case, CaseActivity, CaseAssignment
from .documents import Document
from .notifications import Notification
from .offices import Kebele, KebeleManager, Office
from .users import AuthSession, ClientProfile, CoordinatorProfile, LawyerProfile, User

__all__ = [
    "Activity",
    "Appeal",
    "AppealHearing",
    "Appointment",
    "AuthSession",
    "Case",
    "CaseActivity",
    "CaseAssignment",
    "ClientProfile",
    "CoordinatorProfile",
    "Document",
    "Kebele",
    "KebeleManager",
    "LawyerProfile",
    "Notification",
    "Office",
    "Payment",
    "Permission",
    "Role",
    "RolePermission",
    "ServicePackage",
    "ServiceRequest",
    "User",
]
