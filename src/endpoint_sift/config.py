"""Configuration dataclasses for the endpoint sifter."""
from __future__ import annotations

from dataclasses import dataclass, field


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) "
    "AppleWebKit/537.36 (KHTML, like Gecko) Chrome/74.0.3729.169 Safari/537.36"
)

DEFAULT_PATHS_FILE = "./paths"
DEFAULT_HOSTS_FILE = "./hosts"
DEFAULT_OUTPUT_DIR = "./out"


@dataclass(slots=True)
class FetchConfig:
    method: str = "GET"
    headers: tuple[str, ...] = tuple()
    concurrency: int = 20
    timeout: float = 10.0
    follow_redirects: bool = False
    delay_seconds: float = 0.0
    verify_tls: bool = False
    user_agent: str = DEFAULT_USER_AGENT


@dataclass(slots=True)
class OutputConfig:
    output_dir: str = DEFAULT_OUTPUT_DIR
    save_status: frozenset[int] = field(default_factory=frozenset)
    no_headers: bool = False
    verbose: bool = False


@dataclass(slots=True)
class DedupConfig:
    threshold: float = 0.80
    structural_weight: float = 0.3
    style_weight: float = 0.7

    def normalised_weights(self) -> tuple[float, float]:
        total = self.structural_weight + self.style_weight
        if total == 0:
            return (0.0, 0.0)
        return (
            self.structural_weight / total,
            self.style_weight / total,
        )
