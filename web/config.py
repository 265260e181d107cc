"""Configuration for the channel suggestions service."""

from __future__ import annotations

import os
from dataclasses import dataclass
from pathlib import Path

from dotenv import load_dotenv

load_dotenv()


@dataclass(frozen=True)
class AppConfig:
    app_env: str
    secret_key: str
    max_videos: int
    output_folder: str

    @staticmethod
    def from_env() -> "AppConfig":
        output_folder = Path(os.getenv("OUTPUT_FOLDER", ".tmp/suggestions"))
        if not output_folder.is_absolute():
            output_folder = Path.cwd() / output_folder

        return AppConfig(
            app_env=os.getenv("APP_ENV", "development"),
            secret_key=os.getenv("SECRET_KEY", "dev-change-me"),
            max_videos=int(os.getenv("MAX_VIDEOS", "500")),
            output_folder=str(output_folder),
        )

    def to_flask_config(self) -> dict:
        return {
            "APP_ENV": self.app_env,
            "SECRET_KEY": self.secret_key,
            "MAX_VIDEOS": self.max_videos,
            "OUTPUT_FOLDER": self.output_folder,
        }
