"""Reads existing documents from, and writes generated files to, an output tree.

Layout:
    <out>/fragments/<type-name>.fragment.gql
    <out>/documents/<name>.gql
"""

import logging
import os
import tempfile
from pathlib import Path

from .ir import GenerationResult

logger = logging.getLogger(__name__)


class OutputWriter:
    """Filesystem side of a generation run."""

    def __init__(self, out_dir: str | Path):
        self.out_dir = Path(out_dir)

    @property
    def fragments_dir(self) -> Path:
        return self.out_dir / GenerationResult.FRAGMENTS_DIR

    @property
    def documents_dir(self) -> Path:
        return self.out_dir / GenerationResult.DOCUMENTS_DIR

    def read_existing_documents(self) -> dict[str, str]:
        """Return the text of every ``*.gql`` file in the documents directory."""
        documents = {}
        if not self.documents_dir.is_dir():
            return documents
        for path in sorted(self.documents_dir.glob("*.gql")):
            if path.is_file():
                documents[path.name] = path.read_text(encoding="utf-8")
        logger.debug("Found %d existing documents in %s", len(documents), self.documents_dir)
        return documents

    def write(self, result: GenerationResult) -> list[Path]:
        """Write every generated file and return the written paths."""
        self.fragments_dir.mkdir(parents=True, exist_ok=True)
        self.documents_dir.mkdir(parents=True, exist_ok=True)

        written = []
        for relative, content in sorted(result.files.items()):
            path = self.out_dir / relative
            write_atomic(path, content.strip() + "\n")
            written.append(path)
        return written


def write_atomic(path: Path, content: str):
    """Replace ``path`` with ``content`` in one step."""
    path.parent.mkdir(parents=True, exist_ok=True)
    fd, tmp_name = tempfile.mkstemp(dir=path.parent, prefix=f".{path.name}.", suffix=".tmp")
    try:
        with os.fdopen(fd, "w", encoding="utf-8", newline="\n") as f:
            f.write(content)
        os.replace(tmp_name, path)
    except BaseException:
        if os.path.exists(tmp_name):
            os.unlink(tmp_name)
        raise
