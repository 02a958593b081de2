"""Archive extraction.

This module provides an Extractor that:
- Streams .tar.gz archives through tarfile's ``data`` filter, which keeps
  relative symlinks (bin/npm, bin/python3) and rejects entries that would
  escape the destination
- Extracts .zip archives entry by entry, preserving Unix permissions
- Reports failures with the underlying library message preserved
"""

from __future__ import annotations

import shutil
import stat
import tarfile
import zipfile
from dataclasses import dataclass
from pathlib import Path, PurePosixPath

from rti.core.result import Err, Ok, Result

__all__ = ["Extractor", "ExtractError", "ExtractResult"]


@dataclass(frozen=True, slots=True)
class ExtractError:
    """Extraction error details.

    Attributes:
        archive: Path to the archive that failed
        message: Human-readable error message
    """

    archive: Path
    message: str

    def __str__(self) -> str:
        return f"{self.message}: {self.archive}"


@dataclass(frozen=True, slots=True)
class ExtractResult:
    """Result of an extraction.

    Attributes:
        dest: Directory the archive was extracted into
        files_count: Number of regular files written
        skipped: Number of unsafe entries ignored
    """

    dest: Path
    files_count: int
    skipped: int = 0


class Extractor:
    """Archive extractor dispatching on the file extension.

    Usage:
        result = Extractor().extract(archive_path, scratch_dir)
        if is_ok(result):
            print(f"Extracted {result.value.files_count} files")
    """

    def extract(self, archive: Path, dest: Path) -> Result[ExtractResult, ExtractError]:
        """Extract ``archive`` into ``dest`` (created if missing)."""
        if not archive.exists():
            return Err(ExtractError(archive=archive, message="Archive not found"))

        name = archive.name.lower()
        # Path.suffixes splits on every dot, which breaks names like node-v24.12.0-...
        if name.endswith((".tar.gz", ".tgz")):
            return self._extract_tar_gz(archive, dest)
        if name.endswith(".zip"):
            return self._extract_zip(archive, dest)
        return Err(ExtractError(archive=archive, message=f"Unsupported archive format: {archive.name}"))

    def _extract_tar_gz(self, archive: Path, dest: Path) -> Result[ExtractResult, ExtractError]:
        try:
            dest.mkdir(parents=True, exist_ok=True)
            files_count = 0
            skipped = 0
            # Stream mode: members are decompressed and written one by one
            with tarfile.open(archive, "r|gz") as tar:
                for member in tar:
                    try:
                        tar.extract(member, dest, filter="data")
                    except tarfile.FilterError:
                        skipped += 1
                        continue
                    if member.isreg():
                        files_count += 1
            return Ok(ExtractResult(dest=dest, files_count=files_count, skipped=skipped))
        except (tarfile.TarError, EOFError) as e:
            return Err(ExtractError(archive=archive, message=f"Tar extraction failed: {e}"))
        except OSError as e:
            return Err(ExtractError(archive=archive, message=f"IO error: {e}"))

    def _safe_relative_path(self, member_name: str) -> Path | None:
        """Return a sanitized relative extraction path, or None if unsafe."""
        normalized = member_name.replace("\\", "/")
        if normalized.startswith("/"):
            return None
        parts = PurePosixPath(normalized).parts
        if not parts or any(part in {"", ".", ".."} for part in parts):
            return None
        if parts[0].endswith(":"):
            return None
        return Path(*parts)

    def _extract_zip(self, archive: Path, dest: Path) -> Result[ExtractResult, ExtractError]:
        try:
            dest.mkdir(parents=True, exist_ok=True)
            root = dest.resolve()
            files_count = 0
            skipped = 0

            with zipfile.ZipFile(archive, "r") as zf:
                for info in zf.infolist():
                    if info.is_dir():
                        continue

                    rel_path = self._safe_relative_path(info.filename)
                    unix_attrs = info.external_attr >> 16
                    if rel_path is None or stat.S_ISLNK(unix_attrs):
                        skipped += 1
                        continue

                    full_path = dest / rel_path
                    if not full_path.resolve().is_relative_to(root):
                        skipped += 1
                        continue

                    full_path.parent.mkdir(parents=True, exist_ok=True)
                    with zf.open(info) as src, open(full_path, "wb") as dst:
                        shutil.copyfileobj(src, dst)

                    mode = stat.S_IMODE(unix_attrs)
                    if mode:
                        full_path.chmod(mode)

                    files_count += 1

            return Ok(ExtractResult(dest=dest, files_count=files_count, skipped=skipped))
        except zipfile.BadZipFile as e:
            return Err(ExtractError(archive=archive, message=f"Invalid zip file: {e}"))
        except OSError as e:
            return Err(ExtractError(archive=archive, message=f"IO error: {e}"))
