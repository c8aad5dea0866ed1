import logging

from fastapi import FastAPI, HTTPException, Request
from fastapi.responses import JSONResponse

from .config import ChunkingServiceConfig
from .exceptions import ChunkingError
from .models import ChunkingResult, ChunkRequest
from .service import ChunkingService

logger = logging.getLogger(__name__)


def create_app(config: ChunkingServiceConfig | None = None) -> FastAPI:
    service = ChunkingService(config)
    app = FastAPI(
        title="Chunking Service",
        version="1.0.0",
        description="Structure-aware text and CSV chunking with metadata.",
    )

    # Covers InvalidOptionsError raised while the request body is validated.
    @app.exception_handler(ChunkingError)
    async def chunking_error_handler(request: Request, exc: ChunkingError) -> JSONResponse:
        return JSONResponse(status_code=422, content={"detail": str(exc)})

    @app.get("/health")
    def health() -> dict:
        return {"status": "ok"}

    @app.post("/chunk", response_model=ChunkingResult)
    def chunk(request: ChunkRequest) -> ChunkingResult:
        try:
            return service.chunk(
                request.text,
                request.document_id,
                options=request.options,
                is_csv=request.is_csv,
                mime_type=request.mime_type,
            )
        except ChunkingError:
            raise
        except Exception as exc:
            logger.exception(f"Chunking failed for document {request.document_id}")
            raise HTTPException(status_code=500, detail=str(exc)) from exc

    return app


app = create_app()
