"""Tests for the ImportRecord state machine and persistence."""

import pytest

from brandbook.core.constants import DocumentFormat, ImportStatus
from brandbook.db.models import DocumentImport
from brandbook.services.imports.errors import InvalidTransition
from brandbook.services.imports.records import (
    can_transition,
    create_import,
    get_import,
    is_terminal,
    list_imports_for_client,
    mark_applied,
    mark_failed,
    mark_fields_extracted,
    mark_text_extracted,
    require_import,
    transition,
)

from conftest import missing_id


class TestTransitions:

    @pytest.mark.parametrize(
        "current,target",
        [
            (ImportStatus.PENDING, ImportStatus.PROCESSING),
            (ImportStatus.PROCESSING, ImportStatus.READY_FOR_REVIEW),
            (ImportStatus.READY_FOR_REVIEW, ImportStatus.APPLIED),
            (ImportStatus.PENDING, ImportStatus.FAILED),
            (ImportStatus.PROCESSING, ImportStatus.FAILED),
            (ImportStatus.READY_FOR_REVIEW, ImportStatus.FAILED),
        ],
    )
    def test_allowed(self, current, target):
        assert can_transition(current, target)

    @pytest.mark.parametrize(
        "current,target",
        [
            (ImportStatus.PENDING, ImportStatus.READY_FOR_REVIEW),
            (ImportStatus.PENDING, ImportStatus.APPLIED),
            (ImportStatus.PROCESSING, ImportStatus.PENDING),
            (ImportStatus.APPLIED, ImportStatus.FAILED),
            (ImportStatus.FAILED, ImportStatus.PENDING),
            (ImportStatus.FAILED, ImportStatus.PROCESSING),
        ],
    )
    def test_rejected(self, current, target):
        assert not can_transition(current, target)
        record = DocumentImport(id=missing_id(), status=current.value)
        with pytest.raises(InvalidTransition):
            transition(record, target)
        assert record.status == current.value

    def test_terminal(self):
        assert is_terminal(DocumentImport(status="applied"))
        assert is_terminal(DocumentImport(status="failed"))
        assert not is_terminal(DocumentImport(status="ready_for_review"))


class TestRecordLifecycle:

    @pytest.mark.asyncio
    async def test_happy_path(self, db, client_row):
        record = await create_import(
            db,
            client_id=client_row.id,
            filename="guide.md",
            file_type=DocumentFormat.MD,
            target_sections=["foundations"],
        )
        assert record.status == "pending"
        assert record.target_sections == ["foundations"]

        await mark_text_extracted(db, record, "# Guide")
        assert record.status == "processing"
        assert record.extracted_text == "# Guide"

        await mark_fields_extracted(db, record, {"foundations": {}})
        assert record.status == "ready_for_review"

        await mark_applied(db, record, applied_by="ops@acme.com")
        assert record.status == "applied"
        assert record.applied_at is not None
        assert record.applied_by == "ops@acme.com"

        with pytest.raises(InvalidTransition):
            await mark_failed(db, record, "too late")

    @pytest.mark.asyncio
    async def test_failed_carries_message(self, db, client_row):
        record = await create_import(db, client_id=client_row.id, filename="x.pdf", file_type="pdf")
        await mark_failed(db, record, "")
        assert record.status == "failed"
        assert record.error_message == "Import failed"

    @pytest.mark.asyncio
    async def test_lookup(self, db, client_row):
        record = await create_import(db, client_id=client_row.id, filename="a.txt", file_type=DocumentFormat.TXT)
        await create_import(db, client_id=client_row.id, filename="b.txt", file_type=DocumentFormat.TXT)
        assert (await get_import(db, record.id)).filename == "a.txt"
        assert {r.filename for r in await list_imports_for_client(db, client_row.id)} == {"a.txt", "b.txt"}
        assert await list_imports_for_client(db, missing_id()) == []
        with pytest.raises(LookupError):
            await require_import(db, missing_id())
