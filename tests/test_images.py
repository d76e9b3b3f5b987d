import pytest

from meme_vault.exceptions import LocalImportError
from meme_vault.services.images import (
    copy_into_vault,
    format_storage_size,
    get_storage_stats,
)


def test_copy_into_vault_creates_directory(tmp_path):
    source = tmp_path / "cat.webp"
    source.write_bytes(b"RIFF")
    images_dir = tmp_path / "support" / "images"

    copy = copy_into_vault(source, images_dir, "abc")

    assert copy == images_dir / "abc.webp"
    assert copy.read_bytes() == b"RIFF"


def test_copy_into_vault_rejects_directories(tmp_path):
    with pytest.raises(LocalImportError):
        copy_into_vault(tmp_path, tmp_path / "images", "abc")


def test_storage_stats_for_missing_directory(tmp_path):
    stats = get_storage_stats(tmp_path / "images")

    assert stats.image_count == 0
    assert stats.total_size_mb == 0
    assert stats.formatted == "0 KB"


def test_storage_stats_counts_files(tmp_path):
    images_dir = tmp_path / "images"
    images_dir.mkdir()
    (images_dir / "a.png").write_bytes(b"\0" * 1024 * 1024)
    (images_dir / "b.gif").write_bytes(b"\0" * 1024 * 1024 * 2)

    stats = get_storage_stats(images_dir)

    assert stats.image_count == 2
    assert stats.total_size_mb == 3.0
    assert stats.formatted == "3.0 MB"
    assert stats.model_dump(by_alias=True)["totalSizeMB"] == 3.0


@pytest.mark.parametrize(
    "mb, expected",
    [
        (0, "0 KB"),
        (0.5, "512 KB"),
        (1, "1.0 MB"),
        (12.34, "12.3 MB"),
        (1024, "1.0 GB"),
        (2560, "2.5 GB"),
    ],
)
def test_format_storage_size(mb, expected):
    assert format_storage_size(mb) == expected
