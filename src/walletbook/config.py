"""Application settings read from the environment."""

import os
from functools import lru_cache
from pathlib import Path
from typing import Optional


class Settings:
    def __init__(
        self,
        database_url: str,
        storage_dir: Path,
        public_url: Optional[str],
        log_level: str,
        user_id: Optional[str],
    ) -> None:
        self.database_url = database_url
        self.storage_dir = storage_dir
        self.public_url = public_url
        self.log_level = log_level
        self.user_id = user_id


def _ensure_data_dir() -> Path:
    root = Path(os.getenv("WALLETBOOK_DATA_DIR", str(Path.home() / ".walletbook"))).expanduser().resolve()
    root.mkdir(parents=True, exist_ok=True)
    return root


@lru_cache(maxsize=1)
def get_settings() -> Settings:
    data_dir = _ensure_data_dir()
    db_path = os.getenv("WALLETBOOK_DB_PATH", str(data_dir / "walletbook.db"))
    database_url = os.getenv("WALLETBOOK_DATABASE_URL", f"sqlite:///{db_path}")
    storage_dir = Path(os.getenv("WALLETBOOK_STORAGE_DIR", str(data_dir / "storage")))
    public_url = os.getenv("WALLETBOOK_PUBLIC_URL") or None
    log_level = os.getenv("WALLETBOOK_LOG_LEVEL", "WARNING").upper()
    user_id = os.getenv("WALLETBOOK_USER") or None
    return Settings(
        database_url=database_url,
        storage_dir=storage_dir,
        public_url=public_url,
        log_level=log_level,
        user_id=user_id,
    )
