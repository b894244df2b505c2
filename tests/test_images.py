"""Tests for image storage and dimension normalization."""

from __future__ import annotations

import pytest
from pathlib import Path

from alwaysmemo.storage.images import ImageStore, image_reference, normalize_dimensions
from alwaysmemo.storage.paths import StoragePaths, is_valid_image_id

PNG_HEADER = bytes([0x89, 0x50, 0x4E, 0x47, 0x0D, 0x0A, 0x1A, 0x0A])


@pytest.fixture
def paths(tmp_path: Path) -> StoragePaths:
    return StoragePaths.from_root(tmp_path / "data")


@pytest.fixture
def store(paths: StoragePaths) -> ImageStore:
    return ImageStore(paths)


class TestNormalize:
    @pytest.mark.parametrize("size", [(1, 1), (300, 150), (640, 2000), (640, 1)])
    def test_narrow_unchanged(self, size):
        assert normalize_dimensions(*size) == size

    @pytest.mark.parametrize(
        "size, expected",
        [
            ((1400, 700), (640, 320)),
            ((1200, 600), (640, 320)),
            ((641, 100), (640, 100)),
            ((1000, 333), (640, 213)),
            ((1280, 1), (640, 1)),
            ((2560, 1), (640, 0)),
        ],
    )
    def test_wide_scaled(self, size, expected):
        assert normalize_dimensions(*size) == expected

    def test_rounds_half_up(self):
        # 641 * 0.5 == 320.5
        assert normalize_dimensions(1280, 641) == (640, 321)

    @pytest.mark.parametrize("size", [(0, 100), (100, 0), (-5, 10), (10, -5), (0, 0)])
    def test_non_positive_sentinel(self, size):
        assert normalize_dimensions(*size) == (0, 0)


class TestSaveImage:
    @pytest.mark.asyncio
    async def test_bytes_stored_unmodified(self, store: ImageStore, paths: StoragePaths):
        content = PNG_HEADER + b"\x00" * 32
        asset = await store.save_image(content, 1400, 700)

        assert paths.image_path(asset.id).read_bytes() == content
        assert (asset.width, asset.height) == (640, 320)
        assert asset.src == f"memo-image://{asset.id}"

    @pytest.mark.asyncio
    async def test_fresh_valid_ids(self, store: ImageStore):
        first = await store.save_image(PNG_HEADER, 10, 10)
        second = await store.save_image(PNG_HEADER, 10, 10)
        assert first.id != second.id
        assert is_valid_image_id(first.id)
        assert is_valid_image_id(second.id)

    @pytest.mark.asyncio
    async def test_unknown_dimensions(self, store: ImageStore, paths: StoragePaths):
        asset = await store.save_image(PNG_HEADER, 0, 0)
        assert (asset.width, asset.height) == (0, 0)
        assert paths.image_path(asset.id).exists()

    @pytest.mark.asyncio
    async def test_accepts_bytearray(self, store: ImageStore, paths: StoragePaths):
        asset = await store.save_image(bytearray(PNG_HEADER), 5, 5)
        assert paths.image_path(asset.id).read_bytes() == PNG_HEADER

    @pytest.mark.asyncio
    async def test_to_dict_shape(self, store: ImageStore):
        asset = await store.save_image(PNG_HEADER, 300, 150)
        assert asset.to_dict() == {
            "id": asset.id,
            "src": image_reference(asset.id),
            "width": 300,
            "height": 150,
        }

    @pytest.mark.asyncio
    async def test_write_error_propagates(self, tmp_path: Path):
        blocker = tmp_path / "blocker"
        blocker.write_text("file")
        store = ImageStore(StoragePaths.from_root(blocker))
        with pytest.raises(OSError):
            await store.save_image(PNG_HEADER, 1, 1)
