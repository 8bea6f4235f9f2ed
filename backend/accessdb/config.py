# config.py
# Settings read from the environment (and a .env file if present)

import os
from dataclasses import dataclass, field
from pathlib import Path
from typing import List

from dotenv import load_dotenv

load_dotenv()

DEFAULT_PORT = 3000
DEFAULT_MAX_BODY_BYTES = 1024 * 1024


@dataclass
class Settings:
    root_dir: Path
    host: str = "0.0.0.0"
    port: int = DEFAULT_PORT
    index_file: str = "add_app2.html"
    max_body_bytes: int = DEFAULT_MAX_BODY_BYTES
    cors_origins: List[str] = field(default_factory=lambda: ["*"])
    log_level: str = "INFO"

    def __post_init__(self):
        self.root_dir = Path(self.root_dir).resolve()

    @classmethod
    def from_env(cls) -> "Settings":
        origins = os.getenv("CORS_ORIGINS", "*")
        return cls(
            root_dir=Path(os.getenv("ACCESS_ROOT", ".")),
            host=os.getenv("HOST", "0.0.0.0"),
            port=int(os.getenv("PORT", DEFAULT_PORT)),
            index_file=os.getenv("INDEX_FILE", "add_app2.html"),
            max_body_bytes=int(os.getenv("MAX_BODY_BYTES", DEFAULT_MAX_BODY_BYTES)),
            cors_origins=[o.strip() for o in origins.split(",") if o.strip()],
            log_level=os.getenv("LOG_LEVEL", "INFO").upper(),
        )
