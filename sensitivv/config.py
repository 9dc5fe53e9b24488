from __future__ import annotations

import os
from pathlib import Path
from typing import List


class Settings:
    """Centralized configuration for the Sensitivv service and client."""

    def __init__(self) -> None:
        base_dir = Path(__file__).resolve().parent
        repo_root = base_dir.parent
        data_root_default = repo_root / "data"

        # ---- Server (accounts/tests/reactions) ----
        self.data_root: Path = Path(
            os.environ.get("SENSITIVV_DATA_ROOT") or data_root_default
        ).expanduser()
        self.app_db_path: Path = Path(
            os.environ.get("SENSITIVV_DB_PATH") or (self.data_root / "sensitivv.db")
        ).expanduser()
        self.test_duration_days: int = int(os.environ.get("SENSITIVV_TEST_DURATION_DAYS") or "3")
        self.default_trial_period_days: int = int(os.environ.get("SENSITIVV_TRIAL_PERIOD_DAYS") or "5")
        self.host: str = os.environ.get("SENSITIVV_HOST") or "127.0.0.1"
        self.port: int = int(os.environ.get("SENSITIVV_PORT") or "5001")
        self.log_level: str = (os.environ.get("SENSITIVV_LOG_LEVEL") or "INFO").upper()

        # ---- Device client ----
        self.api_url: str = os.environ.get("SENSITIVV_API_URL") or f"http://127.0.0.1:{self.port}"
        self.http_timeout: float = float(os.environ.get("SENSITIVV_HTTP_TIMEOUT") or "30")
        self.session_dir: Path = Path(
            os.environ.get("SENSITIVV_SESSION_DIR") or "~/.sensitivv"
        ).expanduser()

        cors = os.environ.get("SENSITIVV_CORS_ORIGINS", "*")
        if cors.strip() == "*":
            self.cors_origins: List[str] = ["*"]
        else:
            self.cors_origins = [
                origin.strip() for origin in cors.split(",") if origin.strip()
            ]


settings = Settings()
