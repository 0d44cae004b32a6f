"""
Permission catalogue and system role templates.

The catalogue is seeded into the ``permissions`` table at startup; each
built-in ``UserRole`` gets a system ``Role`` row linked to its template.
"""

from __future__ import annotations

from typing import Dict, List, NamedTuple

from .enums import PermissionAction as A
from .enums import PermissionModule as M
from .enums import UserRole


class PermissionSpec(NamedTuple):
    name: str
    module: M
    action: A
    description: str


DEFAULT_PERMISSIONS: List[PermissionSpec] = [
    PermissionSpec("AUTH_LOGIN", M.AUTH, A.LOGIN, "Ability to login to the system"),
    PermissionSpec("AUTH_VERIFY", M.AUTH, A.VERIFY, "Verify user accounts"),
    PermissionSpec("AUTH_RESET_PASSWORD", M.AUTH, A.RESET_PASSWORD, "Reset user passwords"),
    PermissionSpec("USERS_CREATE", M.USERS, A.CREATE, "Create new users"),
    PermissionSpec("USERS_VIEW", M.USERS, A.READ, "View user details"),
    PermissionSpec("USERS_UPDATE", M.USERS, A.UPDATE, "Update user information"),
    PermissionSpec("USERS_DELETE", M.USERS, A.DELETE, "Delete users"),
    PermissionSpec("USERS_MANAGE", M.USERS, A.MANAGE, "Manage user status"),
    PermissionSpec("ROLES_CREATE", M.ROLES, A.CREATE, "Create new roles"),
    PermissionSpec("ROLES_VIEW", M.ROLES, A.READ, "View roles and permissions"),
    PermissionSpec("ROLES_UPDATE", M.ROLES, A.UPDATE, "Update roles"),
    PermissionSpec("ROLES_DELETE", M.ROLES, A.DELETE, "Delete roles"),
    PermissionSpec("ROLES_ASSIGN", M.ROLES, A.ASSIGN, "Assign roles to users"),
    PermissionSpec("CASES_CREATE", M.CASES, A.CREATE, "Create new cases"),
    PermissionSpec("CASES_VIEW", M.CASES, A.READ, "View case details"),
    PermissionSpec("CASES_UPDATE", M.CASES, A.UPDATE, "Update case information"),
    PermissionSpec("CASES_DELETE", M.CASES, A.DELETE, "Delete cases"),
    PermissionSpec("CASES_ASSIGN", M.CASES, A.ASSIGN, "Assign cases to lawyers"),
    PermissionSpec("CASES_APPROVE", M.CASES, A.APPROVE, "Approve case actions"),
    PermissionSpec("DOCUMENTS_CREATE", M.DOCUMENTS, A.CREATE, "Upload documents"),
    PermissionSpec("DOCUMENTS_VIEW", M.DOCUMENTS, A.READ, "View documents"),
    PermissionSpec("DOCUMENTS_UPDATE", M.DOCUMENTS, A.UPDATE, "Update documents"),
    PermissionSpec("DOCUMENTS_DELETE", M.DOCUMENTS, A.DELETE, "Delete documents"),
    PermissionSpec("DOCUMENTS_APPROVE", M.DOCUMENTS, A.APPROVE, "Approve or reject documents"),
    PermissionSpec("APPOINTMENTS_CREATE", M.APPOINTMENTS, A.CREATE, "Book appointments"),
    PermissionSpec("APPOINTMENTS_VIEW", M.APPOINTMENTS, A.READ, "View appointments"),
    PermissionSpec("APPOINTMENTS_UPDATE", M.APPOINTMENTS, A.UPDATE, "Update appointments"),
    PermissionSpec("APPOINTMENTS_DELETE", M.APPOINTMENTS, A.DELETE, "Cancel appointments"),
    PermissionSpec("SERVICES_CREATE", M.SERVICES, A.CREATE, "Create service packages"),
    PermissionSpec("SERVICES_VIEW", M.SERVICES, A.READ, "View service packages and requests"),
    PermissionSpec("SERVICES_UPDATE", M.SERVICES, A.UPDATE, "Update service requests"),
    PermissionSpec("SERVICES_ASSIGN", M.SERVICES, A.ASSIGN, "Assign service requests"),
    PermissionSpec("BILLING_CREATE", M.BILLING, A.CREATE, "Create payments"),
    PermissionSpec("BILLING_VIEW", M.BILLING, A.READ, "View billing information"),
    PermissionSpec("BILLING_UPDATE", M.BILLING, A.UPDATE, "Update payment status"),
    PermissionSpec("REPORTS_VIEW", M.REPORTS, A.READ, "View reports"),
    PermissionSpec("REPORTS_EXPORT", M.REPORTS, A.EXPORT, "Export reports"),
    PermissionSpec("SETTINGS_VIEW", M.SETTINGS, A.READ, "View system settings"),
    PermissionSpec("SETTINGS_UPDATE", M.SETTINGS, A.UPDATE, "Update system settings"),
    PermissionSpec("AUDIT_VIEW", M.AUDIT, A.READ, "View audit logs"),
]

ALL_PERMISSION_NAMES: List[str] = [spec.name for spec in DEFAULT_PERMISSIONS]

SYSTEM_ROLE_PERMISSIONS: Dict[UserRole, List[str]] = {
    UserRole.SUPER_ADMIN: ALL_PERMISSION_NAMES,
    UserRole.ADMIN: [
        "AUTH_LOGIN", "AUTH_VERIFY",
        "USERS_CREATE", "USERS_VIEW", "USERS_UPDATE", "USERS_MANAGE",
        "ROLES_VIEW", "ROLES_CREATE", "ROLES_UPDATE", "ROLES_ASSIGN",
        "CASES_VIEW", "CASES_UPDATE", "CASES_ASSIGN",
        "DOCUMENTS_VIEW", "DOCUMENTS_UPDATE", "DOCUMENTS_APPROVE",
        "APPOINTMENTS_VIEW", "APPOINTMENTS_UPDATE",
        "SERVICES_CREATE", "SERVICES_VIEW", "SERVICES_UPDATE", "SERVICES_ASSIGN",
        "BILLING_VIEW", "BILLING_UPDATE",
        "REPORTS_VIEW", "REPORTS_EXPORT",
        "SETTINGS_VIEW", "SETTINGS_UPDATE",
        "AUDIT_VIEW",
    ],
    UserRole.LAWYER: [
        "AUTH_LOGIN",
        "CASES_VIEW", "CASES_UPDATE",
        "DOCUMENTS_VIEW", "DOCUMENTS_CREATE", "DOCUMENTS_UPDATE",
        "APPOINTMENTS_VIEW", "APPOINTMENTS_CREATE", "APPOINTMENTS_UPDATE",
        "REPORTS_VIEW",
        "BILLING_VIEW",
    ],
    UserRole.COORDINATOR: [
        "AUTH_LOGIN",
        "CASES_CREATE", "CASES_VIEW", "CASES_UPDATE", "CASES_ASSIGN",
        "DOCUMENTS_VIEW", "DOCUMENTS_APPROVE",
        "APPOINTMENTS_VIEW", "APPOINTMENTS_CREATE", "APPOINTMENTS_UPDATE",
        "SERVICES_VIEW",
    ],
    UserRole.CLIENT: [
        "AUTH_LOGIN",
        "CASES_CREATE", "CASES_VIEW",
        "DOCUMENTS_CREATE", "DOCUMENTS_VIEW",
        "APPOINTMENTS_VIEW", "APPOINTMENTS_CREATE",
        "SERVICES_VIEW",
        "BILLING_VIEW", "BILLING_CREATE",
    ],
    UserRole.KEBELE_MANAGER: [
        "AUTH_LOGIN",
        "CASES_VIEW",
        "DOCUMENTS_VIEW",
        "REPORTS_VIEW",
    ],
}

SYSTEM_ROLE_DESCRIPTIONS: Dict[UserRole, str] = {
    UserRole.SUPER_ADMIN: "Full access to every part of the platform",
    UserRole.ADMIN: "Manages users, case assignment, billing and reports",
    UserRole.LAWYER: "Works assigned cases and files appeals",
    UserRole.COORDINATOR: "Triages intake, reviews documents and assigns lawyers in an office",
    UserRole.CLIENT: "Registers cases, uploads documents and books appointments",
    UserRole.KEBELE_MANAGER: "Follows the cases of residents of one kebele",
}
