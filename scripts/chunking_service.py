import argparse
import logging
from pathlib import Path
import sys

ROOT = Path(__file__).resolve().parents[1]
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from textchunker.app import create_app
from textchunker.config import ChunkingServiceConfig
from textchunker.logging_config import get_logger, setup_logging
from textchunker.models import ChunkingOptions
from textchunker.service import ChunkingService
import uvicorn

logger = get_logger("cli")


def build_config(args: argparse.Namespace) -> ChunkingServiceConfig:
    return ChunkingServiceConfig(
        data_dir=args.data_dir,
        options=ChunkingOptions(
            chunk_size=args.chunk_size,
            chunk_overlap=args.chunk_overlap,
            clean_redundant_data=args.clean,
        ),
    )


def run_chunk(args: argparse.Namespace) -> None:
    service = ChunkingService(build_config(args))
    path = Path(args.file)
    logger.info(f"Reading {path}")
    text = path.read_text(encoding="utf-8")
    is_csv = True if args.csv else None
    if is_csv is None and path.suffix.lower() == ".csv":
        is_csv = True
    result, stored_path = service.chunk_and_save(text, args.document_id or path.stem, is_csv=is_csv)
    print(f"document_id: {result.document_id}")
    print(f"output_path: {stored_path}")
    print(f"chunks: {result.total_chunks} ({'csv' if result.is_csv else 'prose'})")
    print(f"language: {result.language}")
    print(f"keywords: {', '.join(result.keywords[:10])}")
    if args.output:
        result.save(args.output)
        print(f"saved_copy: {args.output}")


def run_server(args: argparse.Namespace) -> None:
    logger.info(f"Serving chunking API on {args.host}:{args.port}")
    app = create_app(build_config(args))
    uvicorn.run(app, host=args.host, port=args.port)


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Chunking runner (CLI chunking or API server)."
    )
    parser.add_argument("--serve", action="store_true", help="Run FastAPI server")
    parser.add_argument("--host", default="0.0.0.0", help="Server host")
    parser.add_argument("--port", type=int, default=8002, help="Server port")
    parser.add_argument("--file", help="Path to an extracted text or CSV file")
    parser.add_argument("--document-id", help="Document id (defaults to the file name)")
    parser.add_argument("--csv", action="store_true", help="Force the CSV path")
    parser.add_argument("--chunk-size", type=int, default=768, help="Target characters per chunk")
    parser.add_argument("--chunk-overlap", type=int, default=80, help="Overlap characters")
    parser.add_argument("--clean", action="store_true", help="Strip repeated boilerplate")
    parser.add_argument("--data-dir", default="data/chunking", help="Output directory")
    parser.add_argument("--output", help="Optional extra output path for the chunk JSON")
    parser.add_argument("-v", "--verbose", action="store_true", help="Debug logging")
    args = parser.parse_args()

    setup_logging(level=logging.DEBUG if args.verbose else logging.INFO)

    if args.serve:
        run_server(args)
        return

    if not args.file:
        parser.error("Provide --file or use --serve to run the API.")
    run_chunk(args)


if __name__ == "__main__":
    main()
