import logging
from typing import Optional

from .chunker import DocumentChunker
from .config import ChunkingServiceConfig
from .exceptions import NoHeadersFoundError
from .models import ChunkingOptions, ChunkingResult
from .storage import ChunkingStorage

logger = logging.getLogger(__name__)


class ChunkingService:
    """
    Caller-side wrapper around DocumentChunker.

    Applies the prose fallback policy for sniffed CSV input and writes
    results through ChunkingStorage.
    """

    def __init__(self, config: ChunkingServiceConfig | None = None):
        self.config = config or ChunkingServiceConfig()
        self.chunker = DocumentChunker(self.config.options)
        self.storage = ChunkingStorage(self.config.data_dir)

    def chunk(
        self,
        text: str,
        document_id: str,
        options: Optional[ChunkingOptions] = None,
        is_csv: Optional[bool] = None,
        mime_type: Optional[str] = None,
    ) -> ChunkingResult:
        chunker = DocumentChunker(options) if options else self.chunker
        try:
            return chunker.chunk(text, document_id, is_csv=is_csv, mime_type=mime_type)
        except NoHeadersFoundError as exc:
            if is_csv is not None or not self.config.fallback_to_prose:
                raise
            logger.warning(
                f"Document {document_id} looked like CSV but has no headers ({exc}); "
                f"chunking as plain text"
            )
            return chunker.chunk(text, document_id, is_csv=False)

    def chunk_from_file(self, path: str, document_id: Optional[str] = None) -> ChunkingResult:
        return self.chunker.chunk_from_file(path, document_id)

    def chunk_and_save(
        self,
        text: str,
        document_id: str,
        options: Optional[ChunkingOptions] = None,
        is_csv: Optional[bool] = None,
        mime_type: Optional[str] = None,
    ) -> tuple[ChunkingResult, str]:
        result = self.chunk(text, document_id, options, is_csv, mime_type)
        paths = self.storage.save(result)
        logger.info(f"Saved {result.total_chunks} chunks to {paths.chunk_file}")
        return result, str(paths.chunk_file)
