import mimetypes
import os
from concurrent.futures import ThreadPoolExecutor, as_completed
from pathlib import Path
from typing import Any, Dict, List, Optional

from colored_logger import get_colored_logger
from .models import Document

logger = get_colored_logger(__name__)


def format_file_size(size: int) -> str:
    """Human-readable size such as '0 Bytes', '512 Bytes' or '1.5 KB'."""
    if size <= 0:
        return "0 Bytes"

    units = ["Bytes", "KB", "MB", "GB"]
    exponent = 0
    while exponent < len(units) - 1 and size >= 1024 ** (exponent + 1):
        exponent += 1

    value = round(size / (1024**exponent), 2)
    # 1.0 -> "1", 1.5 -> "1.5"
    text = str(int(value)) if value == int(value) else str(value)
    return f"{text} {units[exponent]}"


class DocumentLoader:
    """
    Reads plain-text files from a directory into Document objects.

    Documents are keyed by their path relative to the loaded directory so
    that tags recorded against them survive between runs.
    """

    def __init__(
        self,
        extensions: List[str] = None,
        recursive: bool = True,
        max_workers: int = 4,
        encoding: str = "utf-8",
    ):
        """
        Initialize the loader.

        Args:
            extensions: File extensions to load (default: ['.txt', '.md'])
            recursive: If True, search subdirectories recursively
            max_workers: Maximum threads used to read files
            encoding: Text encoding of the files
        """
        self.extensions = extensions or [".txt", ".md"]
        self.recursive = recursive
        self.max_workers = max_workers
        self.encoding = encoding

        self.stats = {"files_found": 0, "files_loaded": 0, "files_failed": 0}

    @classmethod
    def from_config(cls, config: Dict[str, Any]) -> "DocumentLoader":
        loader_config = config.get("loader", {})
        return cls(
            extensions=loader_config.get("extensions"),
            recursive=loader_config.get("recursive", True),
            max_workers=loader_config.get("max_workers", 4),
        )

    def load_directory(self, directory: str) -> List[Document]:
        """
        Load every matching file under directory.

        Files that cannot be read or decoded are logged and skipped.

        Args:
            directory: Root directory to scan

        Returns:
            Documents sorted by relative path
        """
        self.stats = {"files_found": 0, "files_loaded": 0, "files_failed": 0}

        if not os.path.isdir(directory):
            logger.error("Directory does not exist: %s", directory)
            return []

        root = Path(directory)
        files = self._find_files(root)
        self.stats["files_found"] = len(files)
        logger.debug("Found %d files to load in %s", len(files), directory)

        documents: Dict[str, Document] = {}
        if len(files) <= 1 or self.max_workers <= 1:
            for file_path in files:
                doc = self.load_file(file_path, root)
                if doc is not None:
                    documents[doc.id] = doc
        else:
            with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
                futures = [
                    executor.submit(self.load_file, file_path, root)
                    for file_path in files
                ]
                for future in as_completed(futures):
                    doc = future.result()
                    if doc is not None:
                        documents[doc.id] = doc

        self.stats["files_loaded"] = len(documents)
        self.stats["files_failed"] = len(files) - len(documents)
        logger.success(
            "Loaded %d documents from %s (%d failed)",
            self.stats["files_loaded"],
            directory,
            self.stats["files_failed"],
        )

        return [documents[doc_id] for doc_id in sorted(documents)]

    def load_file(
        self, file_path: Path, root: Optional[Path] = None
    ) -> Optional[Document]:
        """
        Build a Document from a single file.

        Args:
            file_path: File to read
            root: Directory the document id is made relative to. Defaults to
                the file's own directory.

        Returns:
            Document, or None if the file could not be read
        """
        file_path = Path(file_path)
        root = root or file_path.parent

        try:
            content = file_path.read_text(encoding=self.encoding)
            stat = file_path.stat()
        except (OSError, UnicodeDecodeError) as e:
            logger.warning("Skipping unreadable file %s: %s", file_path, e)
            return None

        mime_type, _ = mimetypes.guess_type(file_path.name)
        return Document(
            id=file_path.relative_to(root).as_posix(),
            name=file_path.name,
            content=content,
            size=stat.st_size,
            type=mime_type or "text/plain",
            upload_date=stat.st_mtime,
        )

    def _find_files(self, directory: Path) -> List[Path]:
        """Find all files with the configured extensions."""
        pattern = "**/*" if self.recursive else "*"

        files = set()
        for ext in self.extensions:
            for file_path in directory.glob(f"{pattern}{ext}"):
                if file_path.is_file():
                    files.add(file_path)

        return sorted(files)
