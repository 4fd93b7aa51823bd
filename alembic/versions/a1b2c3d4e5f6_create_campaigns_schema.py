"""create_campaigns_schema

Revision ID: a1b2c3d4e5f6
Revises:
Create Date: 2026-10-19 00:00:00.000000

Initial schema:
  - tenants (caller-supplied string ids, soft-deleted via status)
  - campaigns and participants, scoped by tenant_id
  - challenges (global catalog)
  - campaign_challenges, campaign_participants and participant_challenges
    association tables with their uniqueness constraints
"""

from __future__ import annotations

import sqlalchemy as sa

from alembic import op

# revision identifiers, used by Alembic
revision: str = "a1b2c3d4e5f6"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def _timestamps() -> list[sa.Column]:
    return [
        sa.Column("created_at", sa.DateTime(), nullable=False),
        sa.Column("updated_at", sa.DateTime(), nullable=False),
    ]


def upgrade() -> None:
    op.create_table(
        "tenants",
        sa.Column("id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        sa.Column("deleted_at", sa.DateTime(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_tenant_status", "tenants", ["status"], unique=False)

    op.create_table(
        "campaigns",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("start_time", sa.DateTime(), nullable=True),
        sa.Column("end_time", sa.DateTime(), nullable=True),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_campaign_tenant_created", "campaigns", ["tenant_id", "created_at"], unique=False)
    op.create_index("idx_campaign_tenant_updated", "campaigns", ["tenant_id", "updated_at"], unique=False)

    op.create_table(
        "challenges",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("metadata", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("idx_challenge_created", "challenges", ["created_at"], unique=False)

    op.create_table(
        "participants",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("tenant_id", sa.String(255), nullable=False),
        sa.Column("name", sa.String(255), nullable=False),
        sa.Column("nickname", sa.String(255), nullable=False),
        sa.Column("status", sa.String(20), nullable=False, server_default="active"),
        *_timestamps(),
        sa.ForeignKeyConstraint(["tenant_id"], ["tenants.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("tenant_id", "nickname", name="uq_participants_tenant_nickname"),
    )
    op.create_index("idx_participant_tenant_created", "participants", ["tenant_id", "created_at"], unique=False)

    op.create_table(
        "campaign_challenges",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("campaign_id", sa.String(36), nullable=False),
        sa.Column("challenge_id", sa.String(36), nullable=False),
        sa.Column("display_name", sa.String(255), nullable=False),
        sa.Column("display_description", sa.Text(), nullable=True),
        sa.Column("evaluation_frequency", sa.String(100), nullable=False),
        sa.Column("reward_points", sa.Integer(), nullable=False),
        sa.Column("configuration", sa.JSON(), nullable=True),
        *_timestamps(),
        sa.ForeignKeyConstraint(["campaign_id"], ["campaigns.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["challenge_id"], ["challenges.id"]),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("campaign_id", "challenge_id", name="uq_campaign_challenges_campaign_challenge"),
    )
    op.create_index("idx_campaign_challenge_challenge", "campaign_challenges", ["challenge_id"], unique=False)

    op.create_table(
        "campaign_participants",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("participant_id", sa.String(36), nullable=False),
        sa.Column("campaign_id", sa.String(36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["campaign_id"], ["campaigns.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("participant_id", "campaign_id", name="uq_campaign_participants_participant_campaign"),
    )
    op.create_index("idx_campaign_participant_campaign", "campaign_participants", ["campaign_id"], unique=False)

    op.create_table(
        "participant_challenges",
        sa.Column("id", sa.String(36), nullable=False),
        sa.Column("participant_id", sa.String(36), nullable=False),
        sa.Column("challenge_id", sa.String(36), nullable=False),
        sa.Column("campaign_id", sa.String(36), nullable=False),
        *_timestamps(),
        sa.ForeignKeyConstraint(["participant_id"], ["participants.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["challenge_id"], ["challenges.id"], ondelete="CASCADE"),
        sa.ForeignKeyConstraint(["campaign_id"], ["campaigns.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("participant_id", "challenge_id", name="uq_participant_challenges_participant_challenge"),
    )
    op.create_index("idx_participant_challenge_campaign", "participant_challenges", ["campaign_id"], unique=False)
    op.create_index("idx_participant_challenge_challenge", "participant_challenges", ["challenge_id"], unique=False)


def downgrade() -> None:
    op.drop_index("idx_participant_challenge_challenge", table_name="participant_challenges")
    op.drop_index("idx_participant_challenge_campaign", table_name="participant_challenges")
    op.drop_table("participant_challenges")
    op.drop_index("idx_campaign_participant_campaign", table_name="campaign_participants")
    op.drop_table("campaign_participants")
    op.drop_index("idx_campaign_challenge_challenge", table_name="campaign_challenges")
    op.drop_table("campaign_challenges")
    op.drop_index("idx_participant_tenant_created", table_name="participants")
    op.drop_table("participants")
    op.drop_index("idx_challenge_created", table_name="challenges")
    op.drop_table("challenges")
    op.drop_index("idx_campaign_tenant_updated", table_name="campaigns")
    op.drop_index("idx_campaign_tenant_created", table_name="campaigns")
    op.drop_table("campaigns")
    op.drop_index("idx_tenant_status", table_name="tenants")
    op.drop_table("tenants")
