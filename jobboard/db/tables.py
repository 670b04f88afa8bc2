"""
Table definitions.

Only used to create the schema (metadata.create_all); queries are written
as plain SQL in the store. Enum columns are stored as text, membership is
enforced by the pydantic schemas before anything reaches the database.
"""

from sqlalchemy import (
    Boolean, Column, DateTime, ForeignKey, Integer, MetaData, String, Table, Text,
    UniqueConstraint, func, true,
)

metadata = MetaData()

users = Table(
    "users",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("username", String(150), nullable=False, unique=True),
    Column("password", String(255), nullable=False),
    Column("email", String(255), nullable=False, unique=True),
    Column("name", String(100), nullable=False),
    Column("role", String(20), nullable=False, server_default="jobseeker"),
    Column("company", String(200)),
    Column("location", String(200)),
    # JSON-encoded list of strings
    Column("skills", Text, nullable=False, server_default="[]"),
    Column("resume", String(255)),
    Column("bio", Text),
    Column("is_approved", Boolean, nullable=False, server_default=true()),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
)

jobs = Table(
    "jobs",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("title", String(200), nullable=False),
    Column("company", String(200), nullable=False),
    Column("description", Text, nullable=False),
    Column("location", String(200), nullable=False),
    Column("type", String(20), nullable=False),
    Column("salary", String(100)),
    Column("requirements", Text),
    Column("experience_level", String(20)),
    Column("posted_by", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("status", String(20), nullable=False, server_default="active", index=True),
    Column("created_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("deadline", DateTime),
)

applications = Table(
    "applications",
    metadata,
    Column("id", Integer, primary_key=True),
    Column("job_id", Integer, ForeignKey("jobs.id"), nullable=False, index=True),
    Column("user_id", Integer, ForeignKey("users.id"), nullable=False, index=True),
    Column("status", String(20), nullable=False, server_default="pending"),
    Column("cover_letter", Text),
    Column("applied_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    Column("updated_at", DateTime, nullable=False, server_default=func.current_timestamp()),
    UniqueConstraint("job_id", "user_id", name="uq_applications_job_user"),
)
