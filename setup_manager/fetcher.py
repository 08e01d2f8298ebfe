"""
Remote Fetcher - Download single files with wget, or with curl from the
large-file host that asks for a confirmation token first.

A failed fetch never leaves a destination file behind, so later steps
cannot mistake a partial download for a valid archive.
"""

import os
import shutil
import subprocess
import tempfile
from pathlib import Path

from .config import LARGE_FILE_URL


def require_downloader(program: str = "wget") -> str:
    """Return the path of the HTTP client, or fail if it is not on PATH."""
    path = shutil.which(program)
    if path is None:
        raise RuntimeError(f"{program} needs to be available and in PATH")
    return path


def _discard(dest: Path):
    if dest.exists():
        dest.unlink()


def fetch_url(url: str, dest) -> Path:
    """
    Download a directly reachable URL.

    Args:
        url: HTTP(S) or FTP URL
        dest: Destination file path

    Returns:
        Path of the downloaded file
    """
    dest = Path(dest)
    try:
        subprocess.run(
            ["wget", "-q", "--show-progress", "-O", str(dest), url],
            check=True
        )
    except subprocess.CalledProcessError as e:
        _discard(dest)
        raise RuntimeError(f"Download failed: {url} ({e})") from e

    if not dest.exists() or dest.stat().st_size == 0:
        _discard(dest)
        raise RuntimeError(f"Download produced no data: {url}")

    return dest


def read_confirm_token(cookie_file: Path) -> str:
    """
    Pick the confirmation token out of a curl cookie jar.

    The host sets a ``download_warning`` cookie; its value (last field of the
    line) is the token expected by the second request.
    """
    with open(cookie_file, 'r') as f:
        for line in f:
            if 'download' in line:
                fields = line.split()
                if fields:
                    return fields[-1]
    return ""


def fetch_large_file(file_id: str, dest) -> Path:
    """
    Download a file from the large-file host using the cookie-confirm flow.

    The first request stores the session cookies in a temporary jar, the
    second one repeats the request with the confirmation token and writes the
    body to ``dest``.

    Args:
        file_id: File identifier on the host
        dest: Destination file path

    Returns:
        Path of the downloaded file
    """
    require_downloader("curl")
    dest = Path(dest)
    temp_dir = tempfile.mkdtemp(prefix=f'cookie_{file_id}_')
    cookie_file = Path(temp_dir) / f"cookie-{file_id}"

    try:
        subprocess.run(
            ["curl", "-s", "-L", "-c", str(cookie_file),
             f"{LARGE_FILE_URL}&id={file_id}", "-o", os.devnull],
            check=True
        )

        token = read_confirm_token(cookie_file) if cookie_file.exists() else ""
        if not token:
            raise RuntimeError(f"No confirmation token received for {file_id}")

        subprocess.run(
            ["curl", "-L", "--fail", "-b", str(cookie_file),
             f"{LARGE_FILE_URL}&confirm={token}&id={file_id}", "-o", str(dest)],
            check=True
        )

        if not dest.exists() or dest.stat().st_size == 0:
            raise RuntimeError(f"Download produced no data: {file_id}")

    except subprocess.CalledProcessError as e:
        _discard(dest)
        raise RuntimeError(f"Download failed: {file_id} ({e})") from e
    except RuntimeError:
        _discard(dest)
        raise

    finally:
        shutil.rmtree(temp_dir, ignore_errors=True)

    return dest
