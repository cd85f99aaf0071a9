from pathlib import Path
import os

BASE_DIR_ENV = "PORTFOLIO_BASE_DIR"
CONTENT_DIR_ENV = "PORTFOLIO_CONTENT_DIR"
STATIC_DIR_ENV = "PORTFOLIO_STATIC_DIR"
OUTPUT_DIR_ENV = "PORTFOLIO_OUTPUT_DIR"


def _env_path(name: str, default: Path) -> Path:
    value = os.getenv(name)
    if value:
        return Path(value).expanduser()
    return default


BASE_DIR = _env_path(BASE_DIR_ENV, Path(__file__).resolve().parent)
CONTENT_DIR = _env_path(CONTENT_DIR_ENV, BASE_DIR / "templates")
STATIC_DIR = _env_path(STATIC_DIR_ENV, BASE_DIR / "static")
OUTPUT_DIR = _env_path(OUTPUT_DIR_ENV, BASE_DIR / "docs")

# Sub-path the exported site is hosted under (https://<user>.github.io/<prefix>/).
DEPLOY_PREFIX = os.getenv("PORTFOLIO_PREFIX", "portfolio")
CATEGORY_SECTION = os.getenv("PORTFOLIO_SECTION", "modeling")
FEATURE_DIR = os.getenv("PORTFOLIO_FEATURE_DIR", "behind-the-scenes")
STYLESHEET = "style.css"

HOST = os.getenv("PORTFOLIO_HOST", "127.0.0.1")
PORT = int(os.getenv("PORTFOLIO_PORT", "3000"))
LOG_LEVEL = os.getenv("PORTFOLIO_LOG_LEVEL", "INFO")
