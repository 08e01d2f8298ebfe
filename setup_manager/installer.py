"""
Archive Installer - Unpack downloaded archives and give versioned tool
directories a stable name.

    tools/
        GenomeAnalysisTK-3.8-1-0-gf15c1c3ef/   ->   tools/gatk/
"""

import shutil
import subprocess
from pathlib import Path

TAR_FLAGS = {
    'gz': '-xzf',
    'bz2': '-xjf',
}


def extract_archive(archive, target_dir, compression: str = 'gz') -> Path:
    """
    Extract a tar archive into a directory and delete the archive.

    The archive is kept when extraction fails so it can be inspected or the
    extraction retried.

    Args:
        archive: Path to the .tar.gz / .tar.bz2 file
        target_dir: Directory to extract into
        compression: 'gz' or 'bz2'

    Returns:
        The target directory
    """
    archive = Path(archive)
    target_dir = Path(target_dir)

    if compression not in TAR_FLAGS:
        raise ValueError(f"Unsupported archive compression: {compression}")
    if not archive.exists():
        raise FileNotFoundError(f"Archive not found: {archive}")

    print(f"   -> Extracting {archive.name} into {target_dir}")
    try:
        subprocess.run(
            ["tar", TAR_FLAGS[compression], str(archive), "-C", str(target_dir)],
            check=True
        )
    except subprocess.CalledProcessError as e:
        raise RuntimeError(f"Extraction failed for {archive} (archive kept): {e}") from e

    archive.unlink()
    return target_dir


def merge_directory(source, dest) -> Path:
    """
    Move the contents of ``source`` into ``dest`` and remove ``source``.

    A missing or empty ``dest`` is simply replaced by ``source``. Entries
    already present in ``dest`` are overwritten by those from ``source``,
    so running this again after a fresh download refreshes the directory.
    """
    source = Path(source)
    dest = Path(dest)

    if dest.is_dir() and not any(dest.iterdir()):
        dest.rmdir()

    if not dest.exists():
        source.rename(dest)
        return dest

    for entry in source.iterdir():
        target = dest / entry.name
        if target.is_dir() and not target.is_symlink():
            shutil.rmtree(target)
        elif target.exists() or target.is_symlink():
            target.unlink()
        shutil.move(str(entry), str(target))

    source.rmdir()
    return dest


def normalize_directory(parent, prefix: str, canonical: str) -> Path:
    """
    Merge every ``<prefix>*`` directory below ``parent`` into ``parent/canonical``.

    Returns:
        Path of the canonical directory
    """
    parent = Path(parent)
    dest = parent / canonical

    versioned = sorted(
        p for p in parent.glob(f"{prefix}*")
        if p.is_dir() and p.name != canonical
    )
    if not versioned and not dest.exists():
        raise FileNotFoundError(f"No {prefix}* directory found in {parent}")

    for source in versioned:
        merge_directory(source, dest)

    return dest
