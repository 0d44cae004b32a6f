"""Initial schema for the Legal Aid service

Revision ID: 20260301_000000
Revises: None
Create Date: 2026-03-01 00:00:00.000000

Creates every table of the service:
- Offices, kebeles and kebele managers
- Users, role profiles and auth sessions
- Custom roles and the permission catalogue
- Cases, assignments, case activities and appeals
- Documents, appointments, notifications
- Service packages, service requests and payments
- The admin audit log

System roles and permissions are seeded by the application on startup.

Revision format: YYYYMMDD_HHMMSS_description

"""

from typing import Sequence, Union

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic.
revision: str = "20260301_000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps(updated: bool = True) -> list:
    columns = [sa.Column("created_at", sa.DateTime(), nullable=False)]
    if updated:
        columns.append(sa.Column("updated_at", sa.DateTime(), nullable=False))
    return columns


def upgrade() -> None:
    """Create all tables."""

    # Access control
    op.create_table(
        "roles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("is_system_role", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.Index("ix_roles_name", "name"),
    )
    op.create_table(
        "permissions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(64), nullable=False),
        sa.Column("module", sa.String(32), nullable=False),
        sa.Column("action", sa.String(32), nullable=False),
        sa.Column("description", sa.String(255), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.Index("ix_permissions_name", "name"),
    )
    op.create_table(
        "role_permissions",
        sa.Column("role_id", sa.Integer(), nullable=False),
        sa.Column("permission_id", sa.Integer(), nullable=False),
        sa.PrimaryKeyConstraint("role_id", "permission_id"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.ForeignKeyConstraint(["permission_id"], ["permissions.id"]),
    )

    # Offices
    op.create_table(
        "offices",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("location", sa.String(255), nullable=False),
        sa.Column("region", sa.String(128), nullable=True),
        sa.Column("address", sa.String(255), nullable=True),
        sa.Column("contact_email", sa.String(255), nullable=True),
        sa.Column("contact_phone", sa.String(32), nullable=True),
        sa.Column("capacity", sa.Integer(), nullable=False, server_default="100"),
        sa.Column("status", sa.String(32), nullable=False, server_default="ACTIVE"),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
        sa.Index("ix_offices_name", "name"),
        sa.Index("ix_offices_status", "status"),
    )

    # Users
    op.create_table(
        "users",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("full_name", sa.String(255), nullable=False),
        sa.Column("password_hash", sa.String(255), nullable=False),
        sa.Column("role", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="ACTIVE"),
        sa.Column("is_admin", sa.Boolean(), nullable=False, server_default=sa.false()),
        sa.Column("role_id", sa.Integer(), nullable=True),
        sa.Column("last_login_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("email"),
        sa.UniqueConstraint("phone"),
        sa.ForeignKeyConstraint(["role_id"], ["roles.id"]),
        sa.Index("ix_users_email", "email"),
        sa.Index("ix_users_role", "role"),
        sa.Index("ix_users_status", "status"),
        sa.Index("ix_users_role_id", "role_id"),
    )

    # Kebeles
    op.create_table(
        "kebeles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("kebele_name", sa.String(128), nullable=False),
        sa.Column("kebele_number", sa.String(32), nullable=False),
        sa.Column("sub_city", sa.String(128), nullable=True),
        sa.Column("district", sa.String(128), nullable=True),
        sa.Column("region", sa.String(128), nullable=True),
        sa.Column("office_id", sa.Integer(), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("kebele_number"),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.Index("ix_kebeles_kebele_name", "kebele_name"),
        sa.Index("ix_kebeles_office_id", "office_id"),
    )
    op.create_table(
        "kebele_managers",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("kebele_id", sa.Integer(), nullable=False),
        sa.Column("position", sa.String(128), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["kebele_id"], ["kebeles.id"]),
        sa.Index("ix_kebele_managers_kebele_id", "kebele_id"),
    )

    # Role profiles
    op.create_table(
        "client_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("office_id", sa.Integer(), nullable=True),
        sa.Column("age", sa.Integer(), nullable=True),
        sa.Column("gender", sa.String(16), nullable=True),
        sa.Column("phone", sa.String(32), nullable=True),
        sa.Column("region", sa.String(128), nullable=True),
        sa.Column("zone", sa.String(128), nullable=True),
        sa.Column("wereda", sa.String(128), nullable=True),
        sa.Column("kebele", sa.String(128), nullable=True),
        sa.Column("house_number", sa.String(32), nullable=True),
        sa.Column("monthly_income", sa.Float(), nullable=True),
        sa.Column("is_disabled", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.Index("ix_client_profiles_office_id", "office_id"),
        sa.Index("ix_client_profiles_kebele", "kebele"),
    )
    op.create_table(
        "lawyer_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("office_id", sa.Integer(), nullable=False),
        sa.Column("specializations", sa.Text(), nullable=False, server_default="[]"),
        sa.Column("experience_years", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("license_number", sa.String(64), nullable=True),
        sa.Column("max_caseload", sa.Integer(), nullable=False, server_default="20"),
        sa.Column("current_caseload", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("is_available", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("rating", sa.Float(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.Index("ix_lawyer_profiles_office_id", "office_id"),
    )
    op.create_table(
        "coordinator_profiles",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("office_id", sa.Integer(), nullable=False),
        sa.Column("coordinator_type", sa.String(32), nullable=False, server_default="PERMANENT"),
        sa.Column("status", sa.String(32), nullable=False, server_default="ACTIVE"),
        sa.Column("qualifications", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.Index("ix_coordinator_profiles_office_id", "office_id"),
        sa.Index("ix_coordinator_profiles_status", "status"),
    )
    op.create_table(
        "auth_sessions",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("token", sa.String(1024), nullable=False),
        sa.Column("user_agent", sa.String(512), nullable=True),
        sa.Column("ip_address", sa.String(64), nullable=True),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column("expires_at", sa.DateTime(), nullable=False),
        sa.Column("last_used_at", sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("token"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.Index("ix_auth_sessions_user_id", "user_id"),
        sa.Index("ix_auth_sessions_token", "token"),
        sa.Index("ix_auth_sessions_expires_at", "expires_at"),
    )

    # Cases
    op.create_table(
        "cases",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("category", sa.String(32), nullable=False),
        sa.Column("priority", sa.String(16), nullable=False, server_default="MEDIUM"),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("client_id", sa.Integer(), nullable=True),
        sa.Column("client_name", sa.String(255), nullable=False),
        sa.Column("client_phone", sa.String(32), nullable=True),
        sa.Column("office_id", sa.Integer(), nullable=False),
        sa.Column("lawyer_id", sa.Integer(), nullable=True),
        sa.Column("coordinator_id", sa.Integer(), nullable=True),
        sa.Column("region", sa.String(128), nullable=True),
        sa.Column("zone", sa.String(128), nullable=True),
        sa.Column("wereda", sa.String(128), nullable=True),
        sa.Column("kebele", sa.String(128), nullable=True),
        sa.Column("house_number", sa.String(32), nullable=True),
        sa.Column("request_details", sa.Text(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("resolved_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["office_id"], ["offices.id"]),
        sa.ForeignKeyConstraint(["lawyer_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["coordinator_id"], ["users.id"]),
        sa.Index("ix_cases_category", "category"),
        sa.Index("ix_cases_status", "status"),
        sa.Index("ix_cases_client_id", "client_id"),
        sa.Index("ix_cases_office_id", "office_id"),
        sa.Index("ix_cases_lawyer_id", "lawyer_id"),
        sa.Index("ix_cases_coordinator_id", "coordinator_id"),
        sa.Index("ix_cases_kebele", "kebele"),
        sa.Index("ix_cases_created_at", "created_at"),
    )
    op.create_table(
        "case_assignments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.Integer(), nullable=False),
        sa.Column("assigned_to_id", sa.Integer(), nullable=False),
        sa.Column("assigned_by_id", sa.Integer(), nullable=True),
        sa.Column("assignee_role", sa.String(32), nullable=False),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("assigned_at", sa.DateTime(), nullable=False),
        sa.Column("completed_at", sa.DateTime(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"]),
        sa.ForeignKeyConstraint(["assigned_to_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["assigned_by_id"], ["users.id"]),
        sa.Index("ix_case_assignments_case_id", "case_id"),
        sa.Index("ix_case_assignments_assigned_to_id", "assigned_to_id"),
        sa.Index("ix_case_assignments_assignee_role", "assignee_role"),
        sa.Index("ix_case_assignments_status", "status"),
    )
    op.create_table(
        "case_activities",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("activity_type", sa.String(32), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"]),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.Index("ix_case_activities_case_id", "case_id"),
        sa.Index("ix_case_activities_created_at", "created_at"),
    )

    # Appeals
    op.create_table(
        "appeals",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.Integer(), nullable=False),
        sa.Column("lawyer_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("decision", sa.Text(), nullable=True),
        sa.Column("filed_at", sa.DateTime(), nullable=False),
        sa.Column("decided_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"]),
        sa.ForeignKeyConstraint(["lawyer_id"], ["users.id"]),
        sa.Index("ix_appeals_case_id", "case_id"),
        sa.Index("ix_appeals_lawyer_id", "lawyer_id"),
        sa.Index("ix_appeals_status", "status"),
    )
    op.create_table(
        "appeal_hearings",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("appeal_id", sa.Integer(), nullable=False),
        sa.Column("scheduled_date", sa.DateTime(), nullable=False),
        sa.Column("location", sa.String(255), nullable=False, server_default="To be determined"),
        sa.Column("status", sa.String(32), nullable=False, server_default="SCHEDULED"),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["appeal_id"], ["appeals.id"]),
        sa.Index("ix_appeal_hearings_appeal_id", "appeal_id"),
    )

    # Documents
    op.create_table(
        "documents",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("file_name", sa.String(255), nullable=False),
        sa.Column("file_path", sa.String(512), nullable=False),
        sa.Column("file_size", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("mime_type", sa.String(128), nullable=True),
        sa.Column("document_type", sa.String(32), nullable=False, server_default="APPLICATION"),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("uploaded_by_id", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.Integer(), nullable=True),
        sa.Column("kebele", sa.String(128), nullable=True),
        sa.Column("reviewed_by_id", sa.Integer(), nullable=True),
        sa.Column("reviewed_at", sa.DateTime(), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["uploaded_by_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"]),
        sa.ForeignKeyConstraint(["reviewed_by_id"], ["users.id"]),
        sa.Index("ix_documents_status", "status"),
        sa.Index("ix_documents_uploaded_by_id", "uploaded_by_id"),
        sa.Index("ix_documents_case_id", "case_id"),
        sa.Index("ix_documents_created_at", "created_at"),
    )

    # Appointments
    op.create_table(
        "appointments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("coordinator_id", sa.Integer(), nullable=False),
        sa.Column("case_id", sa.Integer(), nullable=True),
        sa.Column("scheduled_time", sa.DateTime(), nullable=False),
        sa.Column("duration", sa.Integer(), nullable=False, server_default="30"),
        sa.Column("purpose", sa.String(255), nullable=False),
        sa.Column("case_type", sa.String(32), nullable=True),
        sa.Column("venue", sa.String(255), nullable=True),
        sa.Column("notes", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="SCHEDULED"),
        sa.Column("reminder_sent", sa.Boolean(), nullable=False, server_default=sa.false()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["coordinator_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["case_id"], ["cases.id"]),
        sa.Index("ix_appointments_client_id", "client_id"),
        sa.Index("ix_appointments_coordinator_id", "coordinator_id"),
        sa.Index("ix_appointments_scheduled_time", "scheduled_time"),
        sa.Index("ix_appointments_status", "status"),
    )

    # Notifications
    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=False),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("message", sa.Text(), nullable=False),
        sa.Column("type", sa.String(32), nullable=False, server_default="SYSTEM"),
        sa.Column("priority", sa.String(16), nullable=False, server_default="NORMAL"),
        sa.Column("status", sa.String(16), nullable=False, server_default="UNREAD"),
        sa.Column("link", sa.String(512), nullable=True),
        sa.Column("read_at", sa.DateTime(), nullable=True),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.Index("ix_notifications_user_id", "user_id"),
        sa.Index("ix_notifications_status", "status"),
        sa.Index("ix_notifications_created_at", "created_at"),
    )

    # Billing
    op.create_table(
        "service_packages",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("name", sa.String(128), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("price", sa.Float(), nullable=False, server_default="0"),
        sa.Column("currency", sa.String(8), nullable=False, server_default="ETB"),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("name"),
    )
    op.create_table(
        "service_requests",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("package_id", sa.Integer(), nullable=True),
        sa.Column("title", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("payment_status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("quoted_price", sa.Float(), nullable=True),
        sa.Column("assigned_lawyer_id", sa.Integer(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"]),
        sa.ForeignKeyConstraint(["package_id"], ["service_packages.id"]),
        sa.ForeignKeyConstraint(["assigned_lawyer_id"], ["users.id"]),
        sa.Index("ix_service_requests_client_id", "client_id"),
        sa.Index("ix_service_requests_status", "status"),
        sa.Index("ix_service_requests_payment_status", "payment_status"),
    )
    op.create_table(
        "payments",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("service_request_id", sa.Integer(), nullable=False),
        sa.Column("client_id", sa.Integer(), nullable=False),
        sa.Column("amount", sa.Float(), nullable=False),
        sa.Column("currency", sa.String(8), nullable=False, server_default="ETB"),
        sa.Column("method", sa.String(32), nullable=False, server_default="CHAPA"),
        sa.Column("status", sa.String(32), nullable=False, server_default="PENDING"),
        sa.Column("tx_ref", sa.String(64), nullable=False),
        sa.Column("checkout_url", sa.String(1024), nullable=True),
        sa.Column("provider_reference", sa.String(128), nullable=True),
        sa.Column("paid_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tx_ref"),
        sa.ForeignKeyConstraint(["service_request_id"], ["service_requests.id"]),
        sa.ForeignKeyConstraint(["client_id"], ["users.id"]),
        sa.Index("ix_payments_service_request_id", "service_request_id"),
        sa.Index("ix_payments_client_id", "client_id"),
        sa.Index("ix_payments_status", "status"),
        sa.Index("ix_payments_tx_ref", "tx_ref"),
    )

    # Audit log
    op.create_table(
        "activities",
        sa.Column("id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Integer(), nullable=True),
        sa.Column("action", sa.String(64), nullable=False),
        sa.Column("details", sa.Text(), nullable=False, server_default="{}"),
        *_timestamps(updated=False),
        sa.PrimaryKeyConstraint("id"),
        sa.ForeignKeyConstraint(["user_id"], ["users.id"]),
        sa.Index("ix_activities_user_id", "user_id"),
        sa.Index("ix_activities_action", "action"),
        sa.Index("ix_activities_created_at", "created_at"),
    )


def downgrade() -> None:
    """Drop all tables created in upgrade."""
    op.drop_table("activities")
    op.drop_table("payments")
    op.drop_table("service_requests")
    op.drop_table("service_packages")
    op.drop_table("notifications")
    op.drop_table("appointments")
    op.drop_table("documents")
    op.drop_table("appeal_hearings")
    op.drop_table("appeals")
    op.drop_table("case_activities")
    op.drop_table("case_assignments")
    op.drop_table("cases")
    op.drop_table("auth_sessions")
    op.drop_table("coordinator_profiles")
    op.drop_table("lawyer_profiles")
    op.drop_table("client_profiles")
    op.drop_table("kebele_managers")
    op.drop_table("kebeles")
    op.drop_table("users")
    op.drop_table("offices")
    op.drop_table("role_permissions")
    op.drop_table("permissions")
    op.drop_table("roles")
