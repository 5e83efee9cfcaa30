"""
Harness configuration, read from LINKA_* environment variables.
"""

from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_BASE_URL = "http://localhost:8081"
DEFAULT_WS_PATH = "/api/ws"


class HarnessSettings(BaseSettings):
    model_config = SettingsConfigDict(env_prefix="LINKA_", extra="ignore")

    base_url: str = DEFAULT_BASE_URL
    ws_path: str = DEFAULT_WS_PATH
    open_timeout: float = 5.0
    wait_timeout: float = 10.0

    @classmethod
    def from_env(cls) -> "HarnessSettings":
        return cls()

    @property
    def api_base(self) -> str:
        return f"{self.base_url.rstrip('/')}/api"

    @property
    def ws_url(self) -> str:
        """http://host → ws://host/api/ws, https → wss."""
        base = self.base_url.rstrip("/")
        if base.startswith("https://"):
            base = "wss://" + base[len("https://"):]
        elif base.startswith("http://"):
            base = "ws://" + base[len("http://"):]
        return f"{base}{self.ws_path}"
