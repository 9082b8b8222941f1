from enum import Enum
from pathlib import Path

from pydantic_settings import BaseSettings


ROOT = Path(__file__).parent


class Env(Enum):
    local = "local"
    dev = "dev"
    prod = "prod"


class Config(BaseSettings):
    env: Env = Env.local
    assets_dir: Path = ROOT / "assets"
    html_dir: Path = ROOT / "assets" / "html"
    log_level: str = "INFO"

    openai_api_key: str | None = None
    core_model: str = "gpt-4-turbo-preview"

    image_template: str = "https://image.pollinations.ai/prompt/{prompt}"
    image_width: int = 1024
    image_height: int = 768
    image_model: str = "flux"

    default_language: str = "he"
    auto_pair: bool = False

    theme_cookie: str = "sous-chef-theme"
    session_cookie: str = "sous-chef-session"
    max_sessions: int = 1000
