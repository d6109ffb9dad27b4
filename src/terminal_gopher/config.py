"""Configuration handling for the terminal Gopher client."""

from dataclasses import dataclass
from pathlib import Path
import yaml


@dataclass
class Config:
    """Configuration settings for the Gopher client.

    Attributes:
        start_url: URL opened when none is given on the command line.
        wide: Start menus in wide mode instead of centered.
        timeout_seconds: Network connect and read timeout.
        encoding: Text encoding for server responses.
        download_directory: Where downloaded files are saved.
        log_file: File to write logs to. None disables logging output.
    """

    start_url: str = "gopher://terminal-gopher/1/home"
    wide: bool = False
    timeout_seconds: float = 10.0
    encoding: str = "utf-8"
    download_directory: str = "~/Downloads"
    log_file: str | None = None

    def get_download_path(self) -> Path:
        """Get download directory as expanded Path object."""
        return Path(self.download_directory).expanduser()


def load_config(path: str | Path) -> Config:
    """
    Load configuration from a YAML file.

    Args:
        path: Path to the YAML configuration file.

    Returns:
        Config object with loaded values.

    Raises:
        FileNotFoundError: If config file doesn't exist.
    """
    config_path = Path(path)

    if not config_path.exists():
        raise FileNotFoundError(f"Config file not found: {path}")

    with open(config_path) as f:
        data = yaml.safe_load(f) or {}

    # Extract sections
    browser = data.get("browser") or {}
    network = data.get("network") or {}
    downloads = data.get("downloads") or {}
    logs = data.get("logging") or {}

    return Config(
        start_url=browser.get("start_url", Config.start_url),
        wide=bool(browser.get("wide", Config.wide)),
        timeout_seconds=float(network.get("timeout_seconds", Config.timeout_seconds)),
        encoding=network.get("encoding", Config.encoding),
        download_directory=downloads.get("directory", Config.download_directory),
        log_file=logs.get("file", Config.log_file),
    )
