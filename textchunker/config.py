from dataclasses import dataclass, field

from .models import ChunkingOptions


@dataclass
class ChunkingServiceConfig:
    data_dir: str = "data/chunking"
    options: ChunkingOptions = field(default_factory=ChunkingOptions)
    # Retry an auto-detected CSV as prose when it has no header row.
    fallback_to_prose: bool = True
