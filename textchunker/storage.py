from dataclasses import dataclass
from datetime import datetime, timezone
from pathlib import Path

from .models import ChunkingResult


@dataclass
class ChunkingPaths:
    document_id: str
    chunk_dir: Path
    chunk_file: Path


class ChunkingStorage:
    """Writes ChunkingResults as JSON under <data_dir>/<document_id>/chunks/."""

    def __init__(self, data_dir: str):
        self.data_dir = Path(data_dir)

    def build_paths(self, document_id: str) -> ChunkingPaths:
        timestamp = datetime.now(timezone.utc).strftime("%Y%m%d_%H%M%S_%f")
        chunk_dir = self.data_dir / document_id / "chunks"
        chunk_dir.mkdir(parents=True, exist_ok=True)
        chunk_file = chunk_dir / f"{document_id}_{timestamp}.json"
        return ChunkingPaths(
            document_id=document_id,
            chunk_dir=chunk_dir,
            chunk_file=chunk_file,
        )

    def save(self, result: ChunkingResult) -> ChunkingPaths:
        paths = self.build_paths(result.document_id)
        result.save(str(paths.chunk_file))
        return paths

    def latest(self, document_id: str) -> ChunkingResult | None:
        """Load the most recently saved result for a document, if any."""
        chunk_dir = self.data_dir / document_id / "chunks"
        files = sorted(chunk_dir.glob(f"{document_id}_*.json"))
        if not files:
            return None
        return ChunkingResult.load(str(files[-1]))
