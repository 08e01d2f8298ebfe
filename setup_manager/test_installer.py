"""Tests for archive extraction and tool directory normalization."""

import io
import shutil
import tarfile

import pytest

from setup_manager.installer import extract_archive, merge_directory, normalize_directory

needs_tar = pytest.mark.skipif(
    shutil.which("tar") is None or shutil.which("gzip") is None,
    reason="tar/gzip not available"
)


def make_archive(path, files, mode="w:gz"):
    """Write a tar archive containing {member name: text}."""
    with tarfile.open(path, mode) as tar:
        for name, text in files.items():
            data = text.encode()
            info = tarfile.TarInfo(name)
            info.size = len(data)
            tar.addfile(info, io.BytesIO(data))
    return path


@needs_tar
def test_extract_gz_removes_archive(tmp_path):
    target = tmp_path / "references"
    target.mkdir()
    archive = make_archive(tmp_path / "chromosomes.tar.gz",
                           {"chromosomes/chr1.fa": ">chr1\nACGT\n"})

    assert extract_archive(archive, target, compression='gz') == target
    assert (target / "chromosomes" / "chr1.fa").read_text() == ">chr1\nACGT\n"
    assert not archive.exists()


@pytest.mark.skipif(shutil.which("tar") is None or shutil.which("bzip2") is None,
                    reason="tar/bzip2 not available")
def test_extract_bz2(tmp_path):
    archive = make_archive(tmp_path / "gatk.tar.bz2",
                           {"GenomeAnalysisTK-3.8/GenomeAnalysisTK.jar": "jar"},
                           mode="w:bz2")

    extract_archive(archive, tmp_path, compression='bz2')
    assert (tmp_path / "GenomeAnalysisTK-3.8" / "GenomeAnalysisTK.jar").exists()
    assert not archive.exists()


@needs_tar
def test_corrupt_archive_is_kept(tmp_path):
    archive = tmp_path / "genome.tar.gz"
    archive.write_bytes(b"<html>Google Drive - Virus scan warning</html>")

    with pytest.raises(RuntimeError, match="archive kept"):
        extract_archive(archive, tmp_path, compression='gz')
    assert archive.exists()


def test_unsupported_compression(tmp_path):
    archive = tmp_path / "data.zip"
    archive.write_bytes(b"PK")

    with pytest.raises(ValueError):
        extract_archive(archive, tmp_path, compression='zip')
    assert archive.exists()


def test_missing_archive(tmp_path):
    with pytest.raises(FileNotFoundError):
        extract_archive(tmp_path / "data.tar.gz", tmp_path)


def test_merge_into_missing_destination(tmp_path):
    source = tmp_path / "GenomeAnalysisTK-3.8-1-0-gf15c1c3ef"
    source.mkdir()
    (source / "GenomeAnalysisTK.jar").write_text("v3.8")

    dest = merge_directory(source, tmp_path / "gatk")

    assert (dest / "GenomeAnalysisTK.jar").read_text() == "v3.8"
    assert not source.exists()


def test_merge_replaces_empty_destination(tmp_path):
    source = tmp_path / "GenomeAnalysisTK-3.8"
    source.mkdir()
    (source / "GenomeAnalysisTK.jar").write_text("v3.8")
    (tmp_path / "gatk").mkdir()

    merge_directory(source, tmp_path / "gatk")

    assert (tmp_path / "gatk" / "GenomeAnalysisTK.jar").read_text() == "v3.8"
    assert not source.exists()


def test_merge_overwrites_existing_entries(tmp_path):
    dest = tmp_path / "gatk"
    (dest / "resources").mkdir(parents=True)
    (dest / "GenomeAnalysisTK.jar").write_text("old")
    (dest / "resources" / "old.txt").write_text("old")
    (dest / "notes.txt").write_text("keep")

    source = tmp_path / "GenomeAnalysisTK-3.8"
    (source / "resources").mkdir(parents=True)
    (source / "GenomeAnalysisTK.jar").write_text("new")
    (source / "resources" / "new.txt").write_text("new")

    merge_directory(source, dest)

    assert (dest / "GenomeAnalysisTK.jar").read_text() == "new"
    assert (dest / "resources" / "new.txt").exists()
    assert not (dest / "resources" / "old.txt").exists()
    assert (dest / "notes.txt").read_text() == "keep"
    assert not source.exists()


def test_normalize_is_repeatable(tmp_path):
    for run in ("first", "second"):
        versioned = tmp_path / "GenomeAnalysisTK-3.8-1-0-gf15c1c3ef"
        versioned.mkdir()
        (versioned / "GenomeAnalysisTK.jar").write_text(run)

        dest = normalize_directory(tmp_path, "GenomeAnalysisTK", "gatk")

        assert dest == tmp_path / "gatk"
        assert (dest / "GenomeAnalysisTK.jar").read_text() == run
        assert [p.name for p in tmp_path.iterdir()] == ["gatk"]


def test_normalize_without_versioned_directory(tmp_path):
    with pytest.raises(FileNotFoundError):
        normalize_directory(tmp_path, "GenomeAnalysisTK", "gatk")
