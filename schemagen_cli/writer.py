"""Persists rendered artifacts to a directory."""

import logging
from pathlib import Path
from typing import Dict, List, Union

from .errors import OutputError

logger = logging.getLogger(__name__)


class OutputWriter:
    """Writes ``{file name: text}`` mappings below one output directory."""

    def __init__(self, directory: Union[str, Path]):
        self.directory = Path(directory)

    def _target(self, name: str) -> Path:
        path = (self.directory / name).resolve()
        if self.directory.resolve() not in path.parents:
            raise OutputError(f"Refusing to write outside {self.directory}: {name}", path=str(path))
        return path

    def write(self, files: Dict[str, str]) -> List[Path]:
        """Write every file as UTF-8, creating the directory first.

        Returns:
            Paths written, in the order of ``files``

        Raises:
            OutputError: If the directory or a file cannot be written
        """
        try:
            self.directory.mkdir(parents=True, exist_ok=True)
        except OSError as e:
            raise OutputError(f"Cannot create output directory {self.directory}: {e}", path=str(self.directory)) from e

        written = []
        for name, text in files.items():
            path = self._target(name)
            try:
                path.write_text(text, encoding="utf-8")
            except OSError as e:
                raise OutputError(f"Cannot write {path}: {e}", path=str(path)) from e
            logger.debug("Wrote %s (%d bytes)", path, len(text))
            written.append(path)
        logger.info("Wrote %d files to %s", len(written), self.directory)
        return written
