"""Initial schema — users, profiles, contacts, items, mails, notifications, saved_searches.

Revision ID: 001_initial
Revises: None
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "001_initial"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("uid", sa.Integer, primary_key=True),
        sa.Column("nickname", sa.String(255), nullable=False),
        sa.Column("username", sa.String(255), nullable=False, server_default=""),
        sa.Column("blocked", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_users_nickname", "users", ["nickname"], unique=True)

    op.create_table(
        "profiles",
        sa.Column("id", sa.Integer, primary_key=True),
        sa.Column("uid", sa.Integer, sa.ForeignKey("users.uid", ondelete="CASCADE"), nullable=False, unique=True),
        sa.Column("hide_friends", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("about", sa.Text, nullable=False, server_default=""),
        sa.Column("locality", sa.String(255), nullable=False, server_default=""),
    )

    op.create_table(
        "contacts",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("self", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("nick", sa.String(255), nullable=False, server_default=""),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("url", sa.String(255), nullable=False, server_default=""),
        sa.Column("nurl", sa.String(255), nullable=False, server_default=""),
        sa.Column("addr", sa.String(255), nullable=False, server_default=""),
        sa.Column("network", sa.String(4), nullable=False, server_default=""),
        sa.Column("location", sa.String(255), nullable=False, server_default=""),
        sa.Column("about", sa.Text, nullable=False, server_default=""),
        sa.Column("avatar", sa.String(255), nullable=False, server_default=""),
        sa.Column("rel", sa.Integer, nullable=False, server_default="0"),
        sa.Column("blocked", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("pending", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("hidden", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("archive", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_contacts_uid", "contacts", ["uid"])
    op.create_index("ix_contacts_nurl", "contacts", ["nurl"])
    op.create_index("ix_contacts_uid_rel_id", "contacts", ["uid", "rel", "id"])

    op.create_table(
        "items",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Integer, nullable=False),
        sa.Column("contact_id", sa.Integer, nullable=False, server_default="0"),
        sa.Column("author_id", sa.Integer, nullable=False, server_default="0"),
        sa.Column("parent_id", sa.Integer, nullable=True),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("body", sa.Text, nullable=False, server_default=""),
        sa.Column("source", sa.String(255), nullable=False, server_default=""),
        sa.Column("plink", sa.String(255), nullable=False, server_default=""),
        sa.Column("starred", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("private", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("deleted", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_items_uid", "items", ["uid"])

    op.create_table(
        "mails",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Integer, nullable=False),
        sa.Column("contact_id", sa.Integer, nullable=False),
        sa.Column("from_url", sa.String(255), nullable=False, server_default=""),
        sa.Column("from_name", sa.String(255), nullable=False, server_default=""),
        sa.Column("from_photo", sa.String(255), nullable=False, server_default=""),
        sa.Column("title", sa.String(255), nullable=False, server_default=""),
        sa.Column("body", sa.Text, nullable=False, server_default=""),
        sa.Column("seen", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("reply", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("uri", sa.String(255), nullable=False, server_default=""),
        sa.Column("parent_uri", sa.String(255), nullable=False, server_default=""),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_mails_uid", "mails", ["uid"])
    op.create_index("ix_mails_parent_uri", "mails", ["parent_uri"])

    op.create_table(
        "notifications",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Integer, nullable=False),
        sa.Column("type", sa.Integer, nullable=False, server_default="0"),
        sa.Column("name", sa.String(255), nullable=False, server_default=""),
        sa.Column("url", sa.String(255), nullable=False, server_default=""),
        sa.Column("photo", sa.String(255), nullable=False, server_default=""),
        sa.Column("msg", sa.Text, nullable=False, server_default=""),
        sa.Column("link", sa.String(255), nullable=False, server_default=""),
        sa.Column("iid", sa.Integer, nullable=False, server_default="0"),
        sa.Column("parent", sa.Integer, nullable=False, server_default="0"),
        sa.Column("otype", sa.String(10), nullable=False, server_default=""),
        sa.Column("verb", sa.String(100), nullable=False, server_default=""),
        sa.Column("seen", sa.Boolean, nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_notifications_uid", "notifications", ["uid"])

    op.create_table(
        "saved_searches",
        sa.Column("id", sa.Integer, primary_key=True, autoincrement=True),
        sa.Column("uid", sa.Integer, sa.ForeignKey("users.uid", ondelete="CASCADE"), nullable=False),
        sa.Column("term", sa.String(255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False, server_default=sa.func.now()),
    )
    op.create_index("ix_saved_searches_uid", "saved_searches", ["uid"])


def downgrade() -> None:
    op.drop_table("saved_searches")
    op.drop_table("notifications")
    op.drop_table("mails")
    op.drop_table("items")
    op.drop_table("contacts")
    op.drop_table("profiles")
    op.drop_table("users")
