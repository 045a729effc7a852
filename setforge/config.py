from pathlib import Path

from pydantic_settings import BaseSettings, SettingsConfigDict


class Settings(BaseSettings):
    """Application settings loaded from environment."""

    model_config = SettingsConfigDict(env_file=".env", env_prefix="SETFORGE_")

    log_level: str = "INFO"

    # Root holding one subdirectory per set (set/<setName>/cards.csv)
    sets_dir: Path = Path("set")

    # Report rendering
    top_n: int = 54
    binder_page_size: int = 9
    stylesheet_href: str = "../../../assets/style.css"


settings = Settings()


# =============================================================================
# SET DIRECTORY LAYOUT
# =============================================================================

CARDS_CSV_NAME = "cards.csv"
SET_JSON_NAME = "set.json"
OUTPUT_JSON_NAME = "output.json"
WWW_DIR_NAME = "www"
ASSETS_DIR_NAME = "assets"

# Checked in order; first existing file is used as the cover image
COVER_IMAGE_NAMES = ("cover.png", "cover.jpg", "cover.webp")

# Catalog and metadata files are pretty-printed with this indent
JSON_INDENT = 3

LOG_FORMAT = "%(asctime)s - %(name)s - %(levelname)s - %(message)s"
