from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Integer, String, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from tocs.db.base import Base

if TYPE_CHECKING:
    from tocs.db.models.folder import Folder
    from tocs.db.models.history import History
    from tocs.db.models.project import Project


class Endpoint(Base):
    __tablename__ = "endpoints"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    project_id: Mapped[str] = mapped_column(ForeignKey("projects.id", ondelete="CASCADE"), nullable=False)
    folder_id: Mapped[Optional[str]] = mapped_column(
        ForeignKey("folders.id", ondelete="CASCADE"), nullable=True
    )
    name: Mapped[str] = mapped_column(Text, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    type: Mapped[str] = mapped_column(Text, nullable=False, default="HTTP")
    method: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    path: Mapped[str] = mapped_column(Text, nullable=False)
    # GraphQL
    query: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    variables_json: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # WebSocket / Socket.IO / STOMP / MQTT / SSE
    ws_url: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    ws_protocol: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    # gRPC
    proto_file: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    service_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    method_name: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    sort_order: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    created_at: Mapped[str] = mapped_column(Text, nullable=False)
    updated_at: Mapped[str] = mapped_column(Text, nullable=False)

    project: Mapped["Project"] = relationship(back_populates="endpoints")
    folder: Mapped[Optional["Folder"]] = relationship(back_populates="endpoints")
    headers: Mapped[list["EndpointHeader"]] = relationship(
        back_populates="endpoint", cascade="all, delete-orphan", passive_deletes=True
    )
    parameters: Mapped[list["EndpointParameter"]] = relationship(
        back_populates="endpoint", cascade="all, delete-orphan", passive_deletes=True
    )
    body: Mapped[Optional["EndpointBody"]] = relationship(
        back_populates="endpoint", cascade="all, delete-orphan", passive_deletes=True, uselist=False
    )
    responses: Mapped[list["EndpointResponse"]] = relationship(
        back_populates="endpoint",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="EndpointResponse.status_code",
    )
    histories: Mapped[list["History"]] = relationship(
        back_populates="endpoint", cascade="all, delete-orphan", passive_deletes=True
    )


class EndpointHeader(Base):
    __tablename__ = "endpoint_headers"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    endpoint_id: Mapped[str] = mapped_column(ForeignKey("endpoints.id", ondelete="CASCADE"), nullable=False)
    key: Mapped[str] = mapped_column(Text, nullable=False)
    value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    required: Mapped[int] = mapped_column(Integer, nullable=False, default=0)

    endpoint: Mapped["Endpoint"] = relationship(back_populates="headers")


class EndpointParameter(Base):
    __tablename__ = "endpoint_parameters"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    endpoint_id: Mapped[str] = mapped_column(ForeignKey("endpoints.id", ondelete="CASCADE"), nullable=False)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    type: Mapped[str] = mapped_column(Text, nullable=False, default="STRING")
    location: Mapped[str] = mapped_column(Text, nullable=False, default="QUERY")
    required: Mapped[int] = mapped_column(Integer, nullable=False, default=0)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    default_value: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    example: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    endpoint: Mapped["Endpoint"] = relationship(back_populates="parameters")


class EndpointBody(Base):
    __tablename__ = "endpoint_bodies"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    endpoint_id: Mapped[str] = mapped_column(
        ForeignKey("endpoints.id", ondelete="CASCADE"), nullable=False, unique=True
    )
    content_type: Mapped[str] = mapped_column(Text, nullable=False)
    schema: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    example: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    endpoint: Mapped["Endpoint"] = relationship(back_populates="body")


class EndpointResponse(Base):
    __tablename__ = "endpoint_responses"

    id: Mapped[str] = mapped_column(String, primary_key=True)
    endpoint_id: Mapped[str] = mapped_column(ForeignKey("endpoints.id", ondelete="CASCADE"), nullable=False)
    status_code: Mapped[int] = mapped_column(Integer, nullable=False)
    description: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    content_type: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    schema: Mapped[Optional[str]] = mapped_column(Text, nullable=True)
    example: Mapped[Optional[str]] = mapped_column(Text, nullable=True)

    endpoint: Mapped["Endpoint"] = relationship(back_populates="responses")
