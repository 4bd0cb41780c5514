"""
============================================================
TARJETA CRC (Class / Responsibilities / Collaborators)
============================================================
Class: 001_scheduling_foundation (Alembic Migration)

Responsibilities:
  - Crear el esquema base: users, scheduled_emails, audit_records,
    delivery_configuration.
  - Declarar CHECKs que reflejan las invariantes del ciclo de vida
    (status cerrado, error_message solo en Failed, puerto válido,
    singleton de configuración).
  - Índices para las queries reales (due, pendientes por owner,
    historial, auditoría newest-first).

Collaborators:
  - PostgreSQL 14+
  - infrastructure/repositories/postgres/* (usan este esquema como contrato)

Policy:
  - Migración BASELINE. Downgrade NO soportado.
  - Evolución futura con migraciones aditivas (002+).
============================================================
"""

from typing import Sequence, Union

import sqlalchemy as sa
from alembic import op
from sqlalchemy.dialects import postgresql

revision: str = "001_scheduling_foundation"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
    ]


def upgrade() -> None:
    # =========================================================
    # 1) USERS (perfil; id = id del servicio de auth)
    # =========================================================
    op.create_table(
        "users",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("email", sa.String(320), nullable=False),
        sa.Column(
            "role",
            sa.String(50),
            nullable=False,
            server_default=sa.text("'Usuário Padrão'"),
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_users"),
        sa.CheckConstraint(
            "role IN ('Usuário Padrão', 'Administrador')", name="ck_users_role"
        ),
    )
    op.execute("CREATE UNIQUE INDEX uq_users_lower_email ON users (lower(email))")

    # =========================================================
    # 2) SCHEDULED EMAILS
    # =========================================================
    op.create_table(
        "scheduled_emails",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("owner_id", postgresql.UUID(as_uuid=True), nullable=False),
        sa.Column("sender", sa.String(320), nullable=False),
        sa.Column("recipients", postgresql.ARRAY(sa.Text), nullable=False),
        sa.Column(
            "cc",
            postgresql.ARRAY(sa.Text),
            nullable=False,
            server_default=sa.text("ARRAY[]::text[]"),
        ),
        sa.Column("subject", sa.Text, nullable=False),
        sa.Column("body", sa.Text, nullable=False),
        sa.Column("scheduled_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("sent_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column(
            "status",
            sa.String(20),
            nullable=False,
            server_default=sa.text("'Scheduled'"),
        ),
        sa.Column("error_message", sa.Text, nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id", name="pk_scheduled_emails"),
        sa.ForeignKeyConstraint(
            ["owner_id"],
            ["users.id"],
            name="fk_scheduled_emails_owner_id__users",
            ondelete="RESTRICT",
        ),
        sa.CheckConstraint(
            "status IN ('Scheduled', 'Sent', 'Failed', 'Cancelled')",
            name="ck_scheduled_emails_status",
        ),
        sa.CheckConstraint(
            "cardinality(recipients) >= 1", name="ck_scheduled_emails_recipients"
        ),
        sa.CheckConstraint(
            "error_message IS NULL OR status = 'Failed'",
            name="ck_scheduled_emails_error_only_failed",
        ),
        sa.CheckConstraint(
            "sent_at IS NULL OR status IN ('Sent', 'Failed')",
            name="ck_scheduled_emails_sent_at_terminal",
        ),
    )

    # Due query: WHERE status = 'Scheduled' AND scheduled_at <= now ORDER BY scheduled_at
    op.execute(
        "CREATE INDEX ix_scheduled_emails_due "
        "ON scheduled_emails (scheduled_at) WHERE status = 'Scheduled'"
    )
    op.create_index(
        "ix_scheduled_emails_owner_created",
        "scheduled_emails",
        ["owner_id", "created_at"],
    )
    op.create_index("ix_scheduled_emails_created_at", "scheduled_emails", ["created_at"])

    # =========================================================
    # 3) AUDIT RECORDS (append-only)
    # =========================================================
    op.create_table(
        "audit_records",
        sa.Column("id", postgresql.UUID(as_uuid=True), nullable=False),
        # NULL para acciones del dispatcher (sin contexto de usuario)
        sa.Column("actor_id", postgresql.UUID(as_uuid=True), nullable=True),
        sa.Column("action", sa.String(50), nullable=False),
        sa.Column("details", sa.Text, nullable=False, server_default=sa.text("''")),
        sa.Column(
            "timestamp",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_audit_records"),
        sa.CheckConstraint(
            "action IN ('CreatedSchedule', 'CancelledSchedule', 'DeliveredSchedule', "
            "'DeliveryFailed', 'ConfigurationUpdated', 'RegisteredAccount', 'LoggedIn')",
            name="ck_audit_records_action",
        ),
    )
    op.create_index("ix_audit_records_timestamp", "audit_records", ["timestamp"])
    op.create_index("ix_audit_records_actor_id", "audit_records", ["actor_id"])
    op.create_index("ix_audit_records_action", "audit_records", ["action"])

    # Append-only: ningún UPDATE / DELETE pasa.
    op.execute(
        """
        CREATE FUNCTION audit_records_append_only() RETURNS trigger AS $$
        BEGIN
            RAISE EXCEPTION 'audit_records is append-only';
        END;
        $$ LANGUAGE plpgsql
        """
    )
    op.execute(
        "CREATE TRIGGER trg_audit_records_append_only "
        "BEFORE UPDATE OR DELETE ON audit_records "
        "FOR EACH ROW EXECUTE FUNCTION audit_records_append_only()"
    )

    # =========================================================
    # 4) DELIVERY CONFIGURATION (singleton id = 'default')
    # =========================================================
    op.create_table(
        "delivery_configuration",
        sa.Column("id", sa.String(20), nullable=False),
        sa.Column("smtp_host", sa.String(255), nullable=False),
        sa.Column("smtp_port", sa.Integer, nullable=False),
        sa.Column("smtp_user", sa.String(255), nullable=False),
        sa.Column("smtp_credential", sa.Text, nullable=False),
        sa.Column(
            "use_tls", sa.Boolean, nullable=False, server_default=sa.text("true")
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.PrimaryKeyConstraint("id", name="pk_delivery_configuration"),
        sa.CheckConstraint("id = 'default'", name="ck_delivery_configuration_singleton"),
        sa.CheckConstraint(
            "smtp_port BETWEEN 1 AND 65535", name="ck_delivery_configuration_port"
        ),
    )


def downgrade() -> None:
    """Baseline: downgrade no soportado por política."""
    raise NotImplementedError(
        "Baseline: downgrade no soportado. Para resetear, recrear la base de datos."
    )
