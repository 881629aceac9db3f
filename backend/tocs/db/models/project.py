from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tocs.db.base import Base

if TYPE_CHECKING:
    from tocs.db.models.endpoint import Endpoint
    from tocs.db.models.folder import Folder
    from tocs.db.models.schema_definition import SchemaDefinition
    from tocs.db.models.user import User
    from tocs.db.models.variable import Variable


class Project(Base):
    __tablename__ = "projects"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    slug: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    is_public: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    servers_json: Mapped[str] = mapped_column(Text, nullable=False, default="[]")
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)

    members: Mapped[list["ProjectMember"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )
    folders: Mapped[list["Folder"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )
    endpoints: Mapped[list["Endpoint"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )
    variables: Mapped[list["Variable"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )
    schemas: Mapped[list["SchemaDefinition"]] = relationship(
        back_populates="project", cascade="all, delete-orphan", passive_deletes=True
    )


class ProjectMember(Base):
    __tablename__ = "project_members"
    __table_args__ = (UniqueConstraint("user_id", "project_id", name="uq_project_members_user_project"),)

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    user_id: Mapped[str] = mapped_column(ForeignKey("users.id", ondelete="CASCADE"), nullable=False)
    role: Mapped[str] = mapped_column(Text, nullable=False)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)

    project: Mapped["Project"] = relationship(back_populates="members")
    user: Mapped["User"] = relationship(back_populates="memberships")
