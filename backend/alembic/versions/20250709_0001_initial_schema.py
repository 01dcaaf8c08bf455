"""Initial Pump Master schema: users, refresh tokens, pumps and inspections."""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


revision = "20250709_0001"
down_revision = None
branch_labels = None
depends_on = None


USER_ROLES = ("Admin", "Manager", "Technician", "Inspector")
PUMP_TYPES = ("Centrifugal", "Submersible", "Diaphragm", "Piston", "Gear")
INSPECTION_STATUSES = ("Scheduled", "InProgress", "Completed", "Failed")


def _enum_type(name: str, values: tuple[str, ...]) -> sa.Enum:
    return sa.Enum(*values, name=name, native_enum=False, create_constraint=True)


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("user_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("username", sa.String(length=50), nullable=False, unique=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column(
            "role",
            _enum_type("user_role_enum", USER_ROLES),
            nullable=False,
            server_default="Manager",
        ),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
    )

    op.create_table(
        "refresh_tokens",
        sa.Column("refresh_token_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("token", sa.String(length=128), nullable=False, unique=True),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("revoked_at", sa.DateTime(timezone=True), nullable=True),
    )
    op.create_index("refresh_tokens_user_idx", "refresh_tokens", ["user_id"])

    op.create_table(
        "pumps",
        sa.Column("pump_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("name", sa.String(length=100), nullable=False),
        sa.Column(
            "type",
            _enum_type("pump_type_enum", PUMP_TYPES),
            nullable=False,
            server_default="Centrifugal",
        ),
        sa.Column("area", sa.String(length=100), nullable=False),
        sa.Column("latitude", sa.Float(), nullable=False),
        sa.Column("longitude", sa.Float(), nullable=False),
        sa.Column("flow_rate", sa.Float(), nullable=False),
        sa.Column("offset", sa.Float(), nullable=False, server_default="0"),
        sa.Column("current_pressure", sa.Float(), nullable=False),
        sa.Column("min_pressure", sa.Float(), nullable=False),
        sa.Column("max_pressure", sa.Float(), nullable=False),
        sa.Column(
            "last_updated",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column(
            "user_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.CheckConstraint("min_pressure <= max_pressure", name="ck_pumps_pressure_range"),
    )
    op.create_index("pumps_user_idx", "pumps", ["user_id"])
    op.create_index("pumps_area_idx", "pumps", ["area"])

    op.create_table(
        "pump_inspections",
        sa.Column("inspection_id", sa.Integer(), primary_key=True, autoincrement=True),
        sa.Column("inspection_date", sa.DateTime(timezone=True), nullable=False),
        sa.Column("notes", sa.String(length=500), nullable=True),
        sa.Column("pressure_reading", sa.Float(), nullable=False),
        sa.Column("flow_rate_reading", sa.Float(), nullable=False),
        sa.Column(
            "status",
            _enum_type("inspection_status_enum", INSPECTION_STATUSES),
            nullable=False,
            server_default="Completed",
        ),
        sa.Column("is_operational", sa.Boolean(), nullable=False),
        sa.Column(
            "pump_id",
            sa.Integer(),
            sa.ForeignKey("pumps.pump_id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column(
            "inspector_id",
            sa.Integer(),
            sa.ForeignKey("users.user_id", ondelete="CASCADE"),
            nullable=False,
        ),
    )
    op.create_index(
        "pump_inspections_pump_date_idx",
        "pump_inspections",
        ["pump_id", "inspection_date"],
    )
    op.create_index("pump_inspections_inspector_idx", "pump_inspections", ["inspector_id"])


def downgrade() -> None:
    op.drop_index("pump_inspections_inspector_idx", table_name="pump_inspections")
    op.drop_index("pump_inspections_pump_date_idx", table_name="pump_inspections")
    op.drop_table("pump_inspections")
    op.drop_index("pumps_area_idx", table_name="pumps")
    op.drop_index("pumps_user_idx", table_name="pumps")
    op.drop_table("pumps")
    op.drop_index("refresh_tokens_user_idx", table_name="refresh_tokens")
    op.drop_table("refresh_tokens")
    op.drop_table("users")
