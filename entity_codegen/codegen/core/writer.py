"""
Artifact materialization.

Writers receive a relative path and rendered content. They are the only
part of the pipeline that touches storage.
"""

from abc import ABC, abstractmethod
from pathlib import Path
from typing import Union

from ...logging_config import get_logger

logger = get_logger(__name__)


class ArtifactWriteError(IOError):
    """Raised when an artifact cannot be written."""

    def __init__(self, path: str, cause: Exception):
        self.path = path
        self.cause = cause
        super().__init__(f"Failed to write {path}: {cause}")


class ArtifactWriter(ABC):
    """Destination for generated artifacts."""

    @abstractmethod
    def write(self, relative_path: str, content: str) -> Path:
        """
        Write one artifact.

        Raises:
            ArtifactWriteError: If the artifact cannot be stored
        """
        pass


class FileArtifactWriter(ArtifactWriter):
    """Writes artifacts below a root directory, creating folders as needed."""

    def __init__(self, root: Union[str, Path]):
        self.root = Path(root)

    def write(self, relative_path: str, content: str) -> Path:
        target = self.root / relative_path
        if not target.resolve().is_relative_to(self.root.resolve()):
            logger.error("Refusing to write %s outside %s", relative_path, self.root)
            raise ArtifactWriteError(
                relative_path, ValueError(f"path escapes the output root {self.root}")
            )

        try:
            target.parent.mkdir(parents=True, exist_ok=True)
            target.write_text(content, encoding="utf-8")
        except OSError as e:
            logger.error("Failed to write %s: %s", target, e)
            raise ArtifactWriteError(relative_path, e) from e

        logger.debug("Wrote %s (%d bytes)", target, len(content))
        return target
