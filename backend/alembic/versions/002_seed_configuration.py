"""Seed default configuration, password policies and built-in logos.

Revision ID: 002_seed_configuration
Revises: 001_initial
Create Date: 2026-10-18

Registration starts closed and untokenized, login open, directory auth off.
Password policies are full-match regexes. Built-in logos ship without
payloads (served as static assets); "admin" is protected.
"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "002_seed_configuration"
down_revision: Union[str, None] = "001_initial"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_CONFIGURATION = [
    ("registration", "0", "Allow teams to register (0/1)"),
    ("registration_type", "1", "Registration type (1: open, 2: tokenized)"),
    ("login", "1", "Allow teams to log in; admins always can (0/1)"),
    ("login_select", "0", "Log in by team id instead of team name (0/1)"),
    ("login_strongpasswords", "0", "Enforce the current password policy (0/1)"),
    ("password_type", "basic", "Name of the current password policy"),
    ("ldap", "0", "Verify registrations against LDAP (0/1)"),
    ("ldap_server", "ldap://localhost", "LDAP server URL"),
    ("ldap_port", "389", "LDAP server port"),
    ("ldap_domain_suffix", "@localhost", "Suffix appended to the team name to form the bind DN"),
]

_LOGOS = [
    ("badger", False), ("bear", False), ("eagle", False), ("falcon", False),
    ("fox", False), ("lion", False), ("owl", False), ("wolf", False),
    ("admin", True),
]

_PASSWORD_TYPES = [
    ("basic", r".{2,}", "At least 2 characters"),
    ("fair", r"(?=.*[a-z])(?=.*\d).{6,}", "6+ characters with a lowercase letter and a digit"),
    ("strong", r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d).{8,}", "8+ characters with lower, upper and digit"),
    ("complex", r"(?=.*[a-z])(?=.*[A-Z])(?=.*\d)(?=.*[^A-Za-z0-9]).{12,}", "12+ characters with lower, upper, digit and symbol"),
]


def upgrade() -> None:
    configuration = sa.table(
        "configuration",
        sa.column("field", sa.String),
        sa.column("value", sa.Text),
        sa.column("description", sa.Text),
    )
    logos = sa.table(
        "logos",
        sa.column("name", sa.String),
        sa.column("logo_type", sa.String),
        sa.column("enabled", sa.Boolean),
        sa.column("protected", sa.Boolean),
        sa.column("custom", sa.Boolean),
    )
    password_types = sa.table(
        "password_types",
        sa.column("field", sa.String),
        sa.column("value", sa.Text),
        sa.column("description", sa.Text),
    )
    op.bulk_insert(configuration, [
        {"field": f, "value": v, "description": d} for f, v, d in _CONFIGURATION
    ])
    op.bulk_insert(password_types, [
        {"field": f, "value": v, "description": d} for f, v, d in _PASSWORD_TYPES
    ])
    op.bulk_insert(logos, [
        {"name": n, "logo_type": "png", "enabled": True, "protected": p, "custom": False}
        for n, p in _LOGOS
    ])


def downgrade() -> None:
    op.execute("DELETE FROM logos WHERE custom = false")
    op.execute("DELETE FROM password_types")
    op.execute("DELETE FROM configuration")
