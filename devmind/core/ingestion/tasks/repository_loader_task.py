"""
Repository loader task.

Shallow-clones a public GitHub repository into a temporary directory, walks
it in sorted order and splits every eligible file into fixed windows of
whole lines. The temporary directory is removed on every exit path.

Dependencies: git (subprocess), devmind.core.ingestion.policy
System role: Code extraction stage of repository ingestion
"""

import logging
import os
import re
import shutil
import subprocess
import tempfile
from collections.abc import Callable, Iterator
from pathlib import Path

from pydantic import BaseModel

from devmind.core.exceptions import PartialExtractionFailure, UpstreamFailure, ValidationError
from devmind.core.ingestion.models import LoadedSource
from devmind.core.ingestion.policy import (
    CLONE_TIMEOUT_SECONDS,
    CODE_EXTENSIONS,
    CODE_FILENAMES,
    CODE_LINES_PER_CHUNK,
    MAX_REPOSITORY_FILE_BYTES,
    SKIP_DIRS,
)
from devmind.models.chunk import Chunk, SourceType

logger = logging.getLogger(__name__)

GITHUB_URL_PATTERN = re.compile(
    r"^https?://(?:www\.)?github\.com/(?P<owner>[\w.-]+)/(?P<name>[\w.-]+?)(?:\.git)?/?$"
)

CloneFn = Callable[[str, Path], None]


class RepositoryReference(BaseModel):
    """Validated GitHub repository URL."""

    url: str
    owner: str
    name: str

    @property
    def label(self) -> str:
        """Repository label used in citations: owner/repo."""
        return f"{self.owner}/{self.name}"


def parse_repository_url(repo_url: str) -> RepositoryReference:
    """
    Validate a GitHub repository URL.

    Args:
        repo_url: URL of the form https://github.com/<owner>/<repo>[.git]

    Returns:
        RepositoryReference: Parsed owner and repository name

    Raises:
        ValidationError: When the URL does not name a GitHub repository
    """
    match = GITHUB_URL_PATTERN.match(repo_url.strip())
    if match is None:
        raise ValidationError("Invalid GitHub URL format", field="repoUrl")
    return RepositoryReference(url=repo_url.strip(), owner=match["owner"], name=match["name"])


def git_shallow_clone(url: str, destination: Path) -> None:
    """
    Clone the default branch at depth one.

    Raises:
        UpstreamFailure: When git is missing, times out or exits non-zero
    """
    env = {**os.environ, "GIT_TERMINAL_PROMPT": "0"}
    try:
        subprocess.run(
            ["git", "clone", "--depth", "1", "--", url, str(destination)],
            check=True,
            capture_output=True,
            text=True,
            timeout=CLONE_TIMEOUT_SECONDS,
            env=env,
        )
    except subprocess.CalledProcessError as e:
        stderr = (e.stderr or "").strip()
        raise UpstreamFailure(f"Failed to clone {url}: {stderr}", operation="clone") from e
    except subprocess.TimeoutExpired as e:
        raise UpstreamFailure(
            f"Cloning {url} timed out after {CLONE_TIMEOUT_SECONDS}s", operation="clone"
        ) from e
    except FileNotFoundError as e:
        raise UpstreamFailure("git executable not found", operation="clone") from e


def is_code_file(filename: str) -> bool:
    """True if the file name matches an indexed extension or a known extensionless name."""
    name = filename.lower()
    return name in CODE_FILENAMES or name.endswith(tuple(CODE_EXTENSIONS))


def line_windows(lines: list[str], window: int) -> Iterator[tuple[int, int, str]]:
    """
    Yield (line_start, line_end, text) for consecutive windows of whole lines.

    Line numbers are 1-based and inclusive; the last window may be shorter.
    """
    for offset in range(0, len(lines), window):
        block = lines[offset:offset + window]
        yield offset + 1, offset + len(block), "\n".join(block)


class RepositoryLoaderTask:
    """Turn a GitHub repository into line-window code chunks."""

    def __init__(self, clone: CloneFn = git_shallow_clone) -> None:
        """
        Initialize loader.

        Args:
            clone: Function cloning a repository URL into a destination path
        """
        self._clone = clone

    def load(self, repo_url: str, workspace_id: str) -> LoadedSource:
        """
        Clone, walk and chunk a repository.

        The URL is validated before any network action.

        Args:
            repo_url: Public GitHub repository URL
            workspace_id: Owning workspace

        Returns:
            LoadedSource: Code chunks in traversal order, labelled owner/repo

        Raises:
            ValidationError: Invalid GitHub URL
            UpstreamFailure: Clone failed
        """
        reference = parse_repository_url(repo_url)
        temp_dir = Path(tempfile.mkdtemp(prefix="devmind-"))
        checkout = temp_dir / reference.name

        try:
            logger.info(f"{__name__}:load - Cloning {reference.url}")
            self._clone(reference.url, checkout)
            chunks = list(self._walk(checkout, reference, workspace_id))
        finally:
            shutil.rmtree(temp_dir, ignore_errors=True)
            logger.debug(f"{__name__}:load - Removed {temp_dir}")

        logger.info(
            f"{__name__}:load - Extracted {len(chunks)} chunks",
            extra={"repo": reference.label, "workspace_id": workspace_id},
        )
        return LoadedSource(
            source_label=reference.label, source_type=SourceType.GITHUB, chunks=chunks
        )

    def _walk(
        self, root: Path, reference: RepositoryReference, workspace_id: str
    ) -> Iterator[Chunk]:
        for dirpath, dirnames, filenames in os.walk(root):
            dirnames[:] = sorted(d for d in dirnames if d not in SKIP_DIRS)

            for filename in sorted(filenames):
                if not is_code_file(filename):
                    continue

                path = Path(dirpath) / filename
                relative_path = path.relative_to(root).as_posix()
                try:
                    lines = self._read_lines(path, relative_path)
                except PartialExtractionFailure as e:
                    logger.warning(f"{__name__}:_walk - {e.message}")
                    continue

                for line_start, line_end, text in line_windows(lines, CODE_LINES_PER_CHUNK):
                    yield Chunk(
                        text=text,
                        source_type=SourceType.GITHUB,
                        source_label=reference.label,
                        workspace_id=workspace_id,
                        file_path=relative_path,
                        line_start=line_start,
                        line_end=line_end,
                        repo_label=reference.label,
                    )

    @staticmethod
    def _read_lines(path: Path, relative_path: str) -> list[str]:
        """
        Read a file as lines; empty list for files that are filtered out.

        Raises:
            PartialExtractionFailure: File could not be read
        """
        if path.is_symlink():
            raise PartialExtractionFailure(relative_path, "symbolic link")

        try:
            if path.stat().st_size > MAX_REPOSITORY_FILE_BYTES:
                logger.debug(f"{__name__}:_read_lines - Skipping large file {relative_path}")
                return []
            raw = path.read_bytes()
        except OSError as e:
            raise PartialExtractionFailure(relative_path, str(e)) from e

        # NUL byte marks binary content
        if not raw or b"\x00" in raw:
            return []
        return raw.decode("utf-8", errors="replace").splitlines()
