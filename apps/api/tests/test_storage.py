"""Tests for blob storage and write-once upload slots."""

from datetime import timedelta

import pytest
from sqlalchemy import select

from brandbook.core import create_upload_token
from brandbook.db.models import UploadSlot, utcnow
from brandbook.services.imports.errors import StorageFailed
from brandbook.services.storage import (
    blob_exists,
    delete_blob,
    issue_upload_url,
    read_blob,
    save_blob,
    store_upload,
)

from conftest import missing_id


class TestUploadSlots:

    @pytest.mark.asyncio
    async def test_upload_round_trip(self, db):
        issued = await issue_upload_url(db)
        blob_id = await store_upload(db, issued.token, b"# Brand guide", "text/markdown")
        assert await read_blob(db, blob_id) == (b"# Brand guide", "text/markdown")

        slot = (await db.execute(select(UploadSlot).where(UploadSlot.id == issued.slot_id))).scalar_one()
        assert slot.blob_id == blob_id
        assert slot.consumed_at is not None

    @pytest.mark.asyncio
    async def test_write_once(self, db):
        issued = await issue_upload_url(db)
        await store_upload(db, issued.token, b"first", "text/plain")
        with pytest.raises(StorageFailed) as exc:
            await store_upload(db, issued.token, b"second", "text/plain")
        assert exc.value.message == "Upload URL has already been used"

    @pytest.mark.asyncio
    async def test_bad_token(self, db):
        with pytest.raises(StorageFailed) as exc:
            await store_upload(db, "not-a-token", b"x", None)
        assert exc.value.message == "Upload URL is invalid or expired"

    @pytest.mark.asyncio
    async def test_token_for_unknown_slot(self, db):
        with pytest.raises(StorageFailed):
            await store_upload(db, create_upload_token(missing_id()), b"x", None)

    @pytest.mark.asyncio
    async def test_expired_slot(self, db):
        issued = await issue_upload_url(db)
        slot = (await db.execute(select(UploadSlot).where(UploadSlot.id == issued.slot_id))).scalar_one()
        slot.expires_at = utcnow() - timedelta(minutes=1)
        await db.flush()
        with pytest.raises(StorageFailed) as exc:
            await store_upload(db, issued.token, b"x", None)
        assert exc.value.message == "Upload URL is invalid or expired"

    @pytest.mark.asyncio
    async def test_empty_body(self, db):
        issued = await issue_upload_url(db)
        with pytest.raises(StorageFailed) as exc:
            await store_upload(db, issued.token, b"", None)
        assert not exc.value.too_large

    @pytest.mark.asyncio
    async def test_too_large(self, db, monkeypatch):
        from brandbook.core import get_settings

        monkeypatch.setattr(get_settings(), "max_upload_bytes", 4)
        issued = await issue_upload_url(db)
        with pytest.raises(StorageFailed) as exc:
            await store_upload(db, issued.token, b"12345", None)
        assert exc.value.too_large


class TestBlobs:

    @pytest.mark.asyncio
    async def test_save_read_delete(self, db):
        blob_id = await save_blob(db, b"%PDF-1.4", None)
        assert await blob_exists(db, blob_id)
        assert await read_blob(db, blob_id) == (b"%PDF-1.4", "application/octet-stream")

        await delete_blob(db, blob_id)
        assert not await blob_exists(db, blob_id)
        assert await read_blob(db, blob_id) is None

    @pytest.mark.asyncio
    async def test_missing_blob_is_not_an_error(self, db):
        await delete_blob(db, missing_id())
        await delete_blob(db, None)
        await delete_blob(db, "not-a-uuid")
        assert await read_blob(db, "not-a-uuid") is None
        assert not await blob_exists(db, missing_id())
