"""CATMAT Preços configuration management.

Loads configuration from environment variables with sensible defaults.
Variable names: PORT, TOKEN, FIREBASE_*, plus CATALOG_* and PRICE_API_*.
"""

from __future__ import annotations

import os
from dataclasses import dataclass, field
from pathlib import Path

from dotenv import load_dotenv

# Load .env file if present
load_dotenv()

DEFAULT_PRICE_API_URL = (
    "https://dadosabertos.compras.gov.br/modulo-pesquisa-preco/1_consultarMaterial"
)


@dataclass
class ServerConfig:
    """HTTP listener settings."""

    host: str = "0.0.0.0"
    port: int = 3000


@dataclass
class PriceAPIConfig:
    """External price research API (compras.gov.br)."""

    base_url: str = DEFAULT_PRICE_API_URL
    token: str | None = None
    timeout_seconds: float = 30.0
    page_size: int = 100


@dataclass
class CatalogConfig:
    """CATMAT spreadsheet source and its derived JSON cache."""

    source_path: Path = Path("CATMAT.xlsx")
    cache_path: Path = Path("catmat.json")


@dataclass
class FirebaseConfig:
    """Client-side Firebase settings passed through to the landing page."""

    api_key: str | None = None
    auth_domain: str | None = None
    project_id: str | None = None
    storage_bucket: str | None = None
    messaging_sender_id: str | None = None
    app_id: str | None = None

    def as_client_config(self) -> dict[str, str | None]:
        """Shape expected by the Firebase JS SDK."""
        return {
            "apiKey": self.api_key,
            "authDomain": self.auth_domain,
            "projectId": self.project_id,
            "storageBucket": self.storage_bucket,
            "messagingSenderId": self.messaging_sender_id,
            "appId": self.app_id,
        }


@dataclass
class AppConfig:
    """Root application configuration."""

    log_level: str = "INFO"
    json_logs: bool = False

    server: ServerConfig = field(default_factory=ServerConfig)
    price_api: PriceAPIConfig = field(default_factory=PriceAPIConfig)
    catalog: CatalogConfig = field(default_factory=CatalogConfig)
    firebase: FirebaseConfig = field(default_factory=FirebaseConfig)

    @classmethod
    def from_env(cls) -> AppConfig:
        """Load configuration from environment variables.

        Optional (with defaults):
        - PORT / HOST: listener (default: 0.0.0.0:3000)
        - TOKEN: bearer token for the price API (no default)
        - PRICE_API_URL, PRICE_API_TIMEOUT, PRICE_API_PAGE_SIZE
        - CATALOG_SOURCE / CATALOG_CACHE: spreadsheet and JSON cache paths
        - FIREBASE_*: client config served at /firebase-config
        - LOG_LEVEL, JSON_LOGS

        Raises:
            ValueError: If a numeric variable cannot be parsed
        """
        return cls(
            log_level=os.getenv("LOG_LEVEL", "INFO"),
            json_logs=os.getenv("JSON_LOGS", "false").lower() == "true",
            server=ServerConfig(
                host=os.getenv("HOST", "0.0.0.0"),
                port=int(os.getenv("PORT", "3000")),
            ),
            price_api=PriceAPIConfig(
                base_url=os.getenv("PRICE_API_URL", DEFAULT_PRICE_API_URL),
                token=os.getenv("TOKEN") or None,
                timeout_seconds=float(os.getenv("PRICE_API_TIMEOUT", "30")),
                page_size=int(os.getenv("PRICE_API_PAGE_SIZE", "100")),
            ),
            catalog=CatalogConfig(
                source_path=Path(os.getenv("CATALOG_SOURCE", "CATMAT.xlsx")),
                cache_path=Path(os.getenv("CATALOG_CACHE", "catmat.json")),
            ),
            firebase=FirebaseConfig(
                api_key=os.getenv("FIREBASE_API_KEY"),
                auth_domain=os.getenv("FIREBASE_AUTH_DOMAIN"),
                project_id=os.getenv("FIREBASE_PROJECT_ID"),
                storage_bucket=os.getenv("FIREBASE_STORAGE_BUCKET"),
                messaging_sender_id=os.getenv("FIREBASE_MESSAGING_SENDER_ID"),
                app_id=os.getenv("FIREBASE_APP_ID"),
            ),
        )


# Singleton instance (lazy-loaded)
_config: AppConfig | None = None


def get_config() -> AppConfig:
    """Get or create singleton AppConfig instance from environment."""
    global _config
    if _config is None:
        _config = AppConfig.from_env()
    return _config


def reset_config() -> None:
    """Drop the cached AppConfig so the next get_config() re-reads the environment."""
    global _config
    _config = None
