"""Reading and writing export artifacts on the filesystem."""

import logging
from pathlib import Path

from calmigrate.exceptions import MigratorError, ParseError
from calmigrate.models.artifact import ExportArtifact

logger = logging.getLogger(__name__)


class ArtifactFiles:
    """File transfer for export artifacts."""

    def write(self, artifact: ExportArtifact, dest_dir: Path) -> Path:
        """
        Write artifact bytes to dest_dir/<artifact name>.

        Returns:
            Path to written file

        Raises:
            MigratorError: If the file could not be written
        """
        path = dest_dir / artifact.name
        try:
            dest_dir.mkdir(parents=True, exist_ok=True)
            path.write_bytes(artifact.data)

            # Verify file was written
            if path.stat().st_size == 0:
                raise IOError(f"File was created but is empty: {path}")
        except OSError as e:
            # Remove empty file if it was created
            if path.exists() and path.stat().st_size == 0:
                try:
                    path.unlink()
                except OSError:
                    pass
            raise MigratorError(
                f"Could not export calendar to {path}: {e}", calendar=artifact.name
            ) from e

        logger.info(f"Wrote {len(artifact.data)} bytes to {path}")
        return path

    def read(self, path: Path) -> bytes:
        """
        Read artifact bytes from path.

        Raises:
            ParseError: If the file could not be read
        """
        try:
            return path.read_bytes()
        except OSError as e:
            raise ParseError(f'Failed to read file: "{path}"', str(path)) from e
