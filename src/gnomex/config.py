from __future__ import annotations

import json
import os
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

APP = "gnomex"

HOME_URL = "https://extensions.gnome.org"
SEARCH_URL = HOME_URL + "/extension-query"
DOWNLOAD_URL_TEMPLATE = HOME_URL + "/extension-data/UUID.vVERSION.shell-extension.zip"

# extensions.gnome.org only answers browser-like clients.
USER_AGENT = "Mozilla/5.0 (X11; Ubuntu; Linux x86_64; rv:74.0) Gecko/20100101 Firefox/74.0"


def config_dir() -> Path:
    """
    Cross-platform config directory:
      - Windows: %APPDATA%\\gnomex
      - Linux: $XDG_CONFIG_HOME/gnomex or ~/.config/gnomex
    """
    if os.name == "nt":
        base = os.environ.get("APPDATA") or str(Path.home())
        return Path(base) / APP
    return Path(os.environ.get("XDG_CONFIG_HOME", str(Path.home() / ".config"))) / APP


def config_path() -> Path:
    return config_dir() / "config.json"


@dataclass
class Settings:
    search_url: str = SEARCH_URL
    download_url_template: str = DOWNLOAD_URL_TEMPLATE
    home_url: str = HOME_URL
    user_agent: str = USER_AGENT
    timeout_s: float = 2.0            # per catalog page request
    download_timeout_s: float = 30.0  # connect / per-read, not total duration
    chunk_size: int = 8192
    shell_command: str = "gnome-shell"
    extensions_command: str = "gnome-extensions"
    shell_version: str = ""           # empty = ask gnome-shell

    @staticmethod
    def load(path: Optional[Path] = None) -> "Settings":
        path = path or config_path()

        data: dict = {}

        if path.exists():
            try:
                data = json.loads(path.read_text(encoding="utf-8"))
            except (OSError, ValueError):
                data = {}
            if not isinstance(data, dict):
                data = {}

        s = Settings(
            search_url=str(data.get("search_url", Settings.search_url)),
            download_url_template=str(data.get("download_url_template", Settings.download_url_template)),
            home_url=str(data.get("home_url", Settings.home_url)),
            user_agent=str(data.get("user_agent", Settings.user_agent)),
            timeout_s=_float(data.get("timeout_s"), Settings.timeout_s),
            download_timeout_s=_float(data.get("download_timeout_s"), Settings.download_timeout_s),
            chunk_size=int(_float(data.get("chunk_size"), Settings.chunk_size)),
            shell_command=str(data.get("shell_command", Settings.shell_command)),
            extensions_command=str(data.get("extensions_command", Settings.extensions_command)),
            shell_version=str(data.get("shell_version", Settings.shell_version)),
        )

        # Environment overrides (highest priority)
        s.search_url = os.environ.get("GNOMEX_SEARCH_URL", s.search_url)
        s.download_url_template = os.environ.get("GNOMEX_DOWNLOAD_URL", s.download_url_template)
        s.home_url = os.environ.get("GNOMEX_HOME_URL", s.home_url)
        s.user_agent = os.environ.get("GNOMEX_USER_AGENT", s.user_agent)
        s.timeout_s = _float(os.environ.get("GNOMEX_TIMEOUT"), s.timeout_s)
        s.download_timeout_s = _float(os.environ.get("GNOMEX_DOWNLOAD_TIMEOUT"), s.download_timeout_s)
        s.shell_command = os.environ.get("GNOMEX_SHELL_CMD", s.shell_command)
        s.extensions_command = os.environ.get("GNOMEX_EXTENSIONS_CMD", s.extensions_command)
        s.shell_version = os.environ.get("GNOMEX_SHELL_VERSION", s.shell_version).strip()

        s.home_url = s.home_url.rstrip("/")
        if not s.timeout_s > 0:
            s.timeout_s = Settings.timeout_s
        if not s.download_timeout_s > 0:
            s.download_timeout_s = Settings.download_timeout_s
        if s.chunk_size <= 0:
            s.chunk_size = Settings.chunk_size

        return s


def _float(value: object, default: float) -> float:
    if value is None or value == "":
        return default
    try:
        return float(value)  # type: ignore[arg-type]
    except (TypeError, ValueError):
        return default
