"""Domain enums shared by entities, schemas and services."""

from __future__ import annotations

from enum import Enum


class UserRole(str, Enum):
    """Built-in account roles. Route guards check against these."""

    SUPER_ADMIN = "SUPER_ADMIN"
    ADMIN = "ADMIN"
    LAWYER = "LAWYER"
    COORDINATOR = "COORDINATOR"
    CLIENT = "CLIENT"
    KEBELE_MANAGER = "KEBELE_MANAGER"


class UserStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    SUSPENDED = "SUSPENDED"
    BANNED = "BANNED"


class Gender(str, Enum):
    MALE = "MALE"
    FEMALE = "FEMALE"
    OTHER = "OTHER"


class ClientSearchField(str, Enum):
    NAME = "name"
    PHONE = "phone"


class OfficeStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"
    MAINTENANCE = "MAINTENANCE"


class CoordinatorType(str, Enum):
    PERMANENT = "PERMANENT"
    PROJECT_BASED = "PROJECT_BASED"


class CoordinatorStatus(str, Enum):
    ACTIVE = "ACTIVE"
    INACTIVE = "INACTIVE"


class CaseCategory(str, Enum):
    """Area of law a case belongs to. Also used for lawyer specializations."""

    FAMILY = "FAMILY"
    CRIMINAL = "CRIMINAL"
    CIVIL = "CIVIL"
    PROPERTY = "PROPERTY"
    LABOR = "LABOR"
    COMMERCIAL = "COMMERCIAL"
    CONSTITUTIONAL = "CONSTITUTIONAL"
    ADMINISTRATIVE = "ADMINISTRATIVE"
    HUMAN_RIGHTS = "HUMAN_RIGHTS"
    OTHER = "OTHER"


class Priority(str, Enum):
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"
    URGENT = "URGENT"


class CaseStatus(str, Enum):
    """Lifecycle status of a case."""

    PENDING = "PENDING"  # Registered, waiting for triage.
    ACTIVE = "ACTIVE"  # A lawyer accepted the case.
    IN_PROGRESS = "IN_PROGRESS"
    RESOLVED = "RESOLVED"
    CANCELLED = "CANCELLED"  # Rejected by the coordinator or withdrawn.


class AssignmentStatus(str, Enum):
    PENDING = "PENDING"
    ACCEPTED = "ACCEPTED"
    REJECTED = "REJECTED"
    COMPLETED = "COMPLETED"


class CaseActivityType(str, Enum):
    CREATED = "CREATED"
    STATUS_CHANGE = "STATUS_CHANGE"
    COORDINATOR_ASSIGNED = "COORDINATOR_ASSIGNED"
    LAWYER_ASSIGNED = "LAWYER_ASSIGNED"
    ASSIGNMENT_RESPONSE = "ASSIGNMENT_RESPONSE"
    DOCUMENT_UPLOAD = "DOCUMENT_UPLOAD"
    NOTE = "NOTE"
    REJECTED = "REJECTED"
    APPEAL_FILED = "APPEAL_FILED"


class AppealStatus(str, Enum):
    PENDING = "PENDING"
    SCHEDULED = "SCHEDULED"
    HEARD = "HEARD"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"
    WITHDRAWN = "WITHDRAWN"


class HearingStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    POSTPONED = "POSTPONED"
    CANCELLED = "CANCELLED"


class DocumentStatus(str, Enum):
    PENDING = "PENDING"
    APPROVED = "APPROVED"
    REJECTED = "REJECTED"


class DocumentType(str, Enum):
    APPLICATION = "APPLICATION"
    IDENTIFICATION = "IDENTIFICATION"
    EVIDENCE = "EVIDENCE"
    COURT_FILING = "COURT_FILING"
    INCOME_PROOF = "INCOME_PROOF"
    OTHER = "OTHER"


class AppointmentStatus(str, Enum):
    SCHEDULED = "SCHEDULED"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"
    RESCHEDULED = "RESCHEDULED"
    NO_SHOW = "NO_SHOW"


class ServiceRequestStatus(str, Enum):
    PENDING = "PENDING"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"
    CANCELLED = "CANCELLED"


class PaymentStatus(str, Enum):
    PENDING = "PENDING"
    COMPLETED = "COMPLETED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"
    REFUNDED = "REFUNDED"


class PaymentMethod(str, Enum):
    CHAPA = "CHAPA"
    TELEBIRR = "TELEBIRR"
    CBE_BIRR = "CBE_BIRR"
    MPESA = "MPESA"
    CASH = "CASH"
    BANK_TRANSFER = "BANK_TRANSFER"


class NotificationType(str, Enum):
    CASE_UPDATE = "CASE_UPDATE"
    TASK_ASSIGNED = "TASK_ASSIGNED"
    APPOINTMENT = "APPOINTMENT"
    APPOINTMENT_REMINDER = "APPOINTMENT_REMINDER"
    DOCUMENT_REVIEW = "DOCUMENT_REVIEW"
    PAYMENT = "PAYMENT"
    APPEAL = "APPEAL"
    SYSTEM = "SYSTEM"


class NotificationPriority(str, Enum):
    LOW = "LOW"
    NORMAL = "NORMAL"
    HIGH = "HIGH"


class NotificationStatus(str, Enum):
    UNREAD = "UNREAD"
    READ = "READ"


class PermissionModule(str, Enum):
    AUTH = "AUTH"
    USERS = "USERS"
    ROLES = "ROLES"
    CASES = "CASES"
    DOCUMENTS = "DOCUMENTS"
    APPOINTMENTS = "APPOINTMENTS"
    SERVICES = "SERVICES"
    BILLING = "BILLING"
    REPORTS = "REPORTS"
    SETTINGS = "SETTINGS"
    AUDIT = "AUDIT"


class PermissionAction(str, Enum):
    LOGIN = "LOGIN"
    VERIFY = "VERIFY"
    RESET_PASSWORD = "RESET_PASSWORD"
    CREATE = "CREATE"
    READ = "READ"
    UPDATE = "UPDATE"
    DELETE = "DELETE"
    MANAGE = "MANAGE"
    ASSIGN = "ASSIGN"
    APPROVE = "APPROVE"
    EXPORT = "EXPORT"
