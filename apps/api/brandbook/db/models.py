import uuid
from datetime import datetime, timezone

from sqlalchemy import (
    JSON,
    Column,
    DateTime,
    ForeignKey,
    Index,
    Integer,
    LargeBinary,
    String,
    Text,
    Uuid,
)
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import relationship

from brandbook.core.constants import INITIAL_CLIENT_VERSION, ImportStatus

from .session import Base


def uuid4_str():
    return str(uuid.uuid4())


def utcnow():
    return datetime.now(timezone.utc)


# JSONB on Postgres, plain JSON elsewhere (tests run on SQLite)
JSONType = JSON().with_variant(JSONB(), "postgresql")


class Client(Base):
    """One client's brand guidelines working draft. `data` is the whole ClientRecord document."""
    __tablename__ = "clients"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    client_name = Column(String(255), nullable=False)
    industry = Column(String(255), nullable=True)
    current_version = Column(String(50), nullable=True, default=INITIAL_CLIENT_VERSION)
    data = Column(JSONType, nullable=False, default=dict)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    updated_at = Column(DateTime(timezone=True), nullable=False, default=utcnow, onupdate=utcnow)
    created_by = Column(String(255), nullable=True)
    updated_by = Column(String(255), nullable=True)

    versions = relationship("ClientVersion", back_populates="client")
    document_imports = relationship("DocumentImport", back_populates="client")

    __table_args__ = (
        Index("ix_clients_client_name", "client_name"),
        Index("ix_clients_updated_at", "updated_at"),
    )


class ClientVersion(Base):
    """Immutable snapshot of a client's data."""
    __tablename__ = "client_versions"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    client_id = Column(Uuid(as_uuid=False), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    version_number = Column(String(50), nullable=False)
    version_name = Column(String(255), nullable=True)
    description = Column(Text, nullable=True)
    data = Column(JSONType, nullable=False)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String(255), nullable=True)

    client = relationship("Client", back_populates="versions")

    __table_args__ = (
        Index("ix_client_versions_client_id", "client_id"),
        Index("ix_client_versions_client_version", "client_id", "version_number"),
    )


class DocumentImport(Base):
    """One import attempt (ImportRecord). Status moves pending → processing → ready_for_review → applied | failed."""
    __tablename__ = "document_imports"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    client_id = Column(Uuid(as_uuid=False), ForeignKey("clients.id", ondelete="CASCADE"), nullable=False)
    filename = Column(String(1024), nullable=False)
    file_id = Column(Uuid(as_uuid=False), ForeignKey("stored_blobs.id", ondelete="SET NULL"), nullable=True)
    file_type = Column(String(10), nullable=False)  # DocumentFormat value
    source_url = Column(Text, nullable=True)
    extracted_text = Column(Text, nullable=True)
    target_sections = Column(JSONType, nullable=True)
    extracted_fields = Column(JSONType, nullable=True)  # CandidateFieldTree
    status = Column(String(20), nullable=False, default=ImportStatus.PENDING.value)
    error_message = Column(Text, nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    created_by = Column(String(255), nullable=True)
    applied_at = Column(DateTime(timezone=True), nullable=True)
    applied_by = Column(String(255), nullable=True)

    client = relationship("Client", back_populates="document_imports")

    __table_args__ = (
        Index("ix_document_imports_client_id", "client_id"),
        Index("ix_document_imports_status", "status"),
    )


class StoredBlob(Base):
    """Uploaded or fetched file bytes (PDF/DOCX/text sources)."""
    __tablename__ = "stored_blobs"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    content = Column(LargeBinary, nullable=False)
    media_type = Column(String(255), nullable=True)
    size = Column(Integer, nullable=False, default=0)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)


class UploadSlot(Base):
    """Write-once upload handle. consumed_at is set when the single allowed upload lands."""
    __tablename__ = "upload_slots"

    id = Column(Uuid(as_uuid=False), primary_key=True, default=uuid4_str)
    blob_id = Column(Uuid(as_uuid=False), ForeignKey("stored_blobs.id", ondelete="SET NULL"), nullable=True)
    created_at = Column(DateTime(timezone=True), nullable=False, default=utcnow)
    expires_at = Column(DateTime(timezone=True), nullable=False)
    consumed_at = Column(DateTime(timezone=True), nullable=True)
