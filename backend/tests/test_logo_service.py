"""
VSRAdmin Backend - Logo Storage Unit Tests
===========================================

What:  Tests for LogoService and LocalBlobStore.
How:   Real files under pytest's tmp_path; uploads are Starlette UploadFiles
       over in-memory buffers.

What we test:
    ✅ Key derived from the DID only, never from the uploaded filename
    ✅ No upload → nothing written
    ✅ Re-upload for the same DID overwrites (last write wins)
    ✅ Storage root created lazily, including parents
    ✅ Unwritable root → FileWriteError
    ✅ Keys that could leave the root are refused
"""

import io

import pytest
from starlette.datastructures import UploadFile

from vsradmin.exceptions import FileWriteError
from vsradmin.services.logo_service import LocalBlobStore, LogoService


def make_upload(content: bytes, filename: str = "logo.png") -> UploadFile:
    return UploadFile(file=io.BytesIO(content), filename=filename)


class TestLogoService:

    def test_key_for_uses_did(self, logo_service):
        assert logo_service.key_for(42) == "42.jpg"

    @pytest.mark.asyncio
    async def test_associate_writes_did_keyed_file(self, logo_service, logo_root):
        key = await logo_service.associate(42, make_upload(b"PNGDATA", "my logo.png"))

        assert key == "42.jpg"
        assert (logo_root / "42.jpg").read_bytes() == b"PNGDATA"
        assert not (logo_root / "my logo.png").exists()

    @pytest.mark.asyncio
    async def test_associate_without_upload_is_noop(self, logo_service, logo_root):
        key = await logo_service.associate(42, None)

        assert key is None
        assert not logo_root.exists()

    @pytest.mark.asyncio
    async def test_reupload_overwrites(self, logo_service, logo_root):
        await logo_service.associate(42, make_upload(b"first version, longer"))
        await logo_service.associate(42, make_upload(b"second"))

        assert (logo_root / "42.jpg").read_bytes() == b"second"
        assert sorted(p.name for p in logo_root.iterdir()) == ["42.jpg"]

    @pytest.mark.asyncio
    async def test_distinct_dids_do_not_collide(self, logo_service, logo_root):
        await logo_service.associate(41, make_upload(b"a"))
        await logo_service.associate(42, make_upload(b"b"))

        assert (logo_root / "41.jpg").read_bytes() == b"a"
        assert (logo_root / "42.jpg").read_bytes() == b"b"

    @pytest.mark.asyncio
    async def test_store_failure_propagates(self, tmp_path):
        blocker = tmp_path / "not-a-dir"
        blocker.write_bytes(b"")
        service = LogoService(LocalBlobStore(str(blocker / "logos")), extension=".jpg")

        with pytest.raises(FileWriteError, match="Failed to save the restaurant logo"):
            await service.associate(42, make_upload(b"data"))


class TestLocalBlobStore:

    @pytest.mark.asyncio
    async def test_creates_nested_root_on_first_write(self, tmp_path):
        root = tmp_path / "a" / "b" / "restaurantlogo"
        store = LocalBlobStore(str(root))

        await store.write("7.jpg", b"x")

        assert (root / "7.jpg").read_bytes() == b"x"

    @pytest.mark.parametrize("key", ["", "../7.jpg", "sub/7.jpg"])
    def test_path_for_rejects_keys_outside_root(self, tmp_path, key):
        store = LocalBlobStore(str(tmp_path))

        with pytest.raises(FileWriteError):
            store.path_for(key)
