"""Configuration dataclasses for the search and the demo driver."""

from __future__ import annotations

import json
import logging
from dataclasses import asdict, dataclass, field
from pathlib import Path

logger = logging.getLogger(__name__)

# An unreachable target can otherwise keep a circling snake searching
# forever.
DEMO_MAX_EXPLORED = 200_000


@dataclass(frozen=True)
class SearchConfig:
    """Cost weights and limits for :func:`~snake_pathfinder.search.find_path`.

    ``scale`` multiplies every real step so that the small
    ``non_hug_cost`` only breaks ties between equally long candidates.
    """

    scale: int = 1 << 31
    non_hug_cost: int = 1
    max_explored: int | None = None

    def __post_init__(self) -> None:
        if self.scale < 1:
            raise ValueError("scale must be at least 1.")
        if self.non_hug_cost < 0:
            raise ValueError("non_hug_cost must be >= 0.")
        if self.max_explored is not None and self.max_explored < 1:
            raise ValueError("max_explored must be at least 1.")


@dataclass(frozen=True)
class DemoConfig:
    """Settings for the headless "infinite snake" driver.

    Supports JSON serialization for reproducibility.
    """

    # Board
    width: int = 10
    height: int = 10

    # Snake
    initial_length: int = 3
    growth_per_target: int = 1

    # Run
    max_rounds: int = 100
    seed: int | None = None

    search: SearchConfig = field(
        default_factory=lambda: SearchConfig(max_explored=DEMO_MAX_EXPLORED),
    )

    def __post_init__(self) -> None:
        if self.initial_length < 1:
            raise ValueError("initial_length must be at least 1.")
        if self.initial_length > self.width:
            raise ValueError("initial_length must fit in the bottom row.")
        if self.growth_per_target < 0:
            raise ValueError("growth_per_target must be >= 0.")
        if self.max_rounds < 1:
            raise ValueError("max_rounds must be at least 1.")

    def to_dict(self) -> dict:
        """Serialize to a plain dict."""
        return asdict(self)

    def save(self, path: str | Path) -> None:
        """Write config to a JSON file."""
        p = Path(path)
        p.parent.mkdir(parents=True, exist_ok=True)
        p.write_text(json.dumps(self.to_dict(), indent=2))
        logger.info("Config saved to %s", p)

    @classmethod
    def load(cls, path: str | Path) -> DemoConfig:
        """Load config from a JSON file."""
        raw = json.loads(Path(path).read_text())
        search_data = raw.pop("search", None)
        if search_data is not None:
            raw["search"] = SearchConfig(**search_data)
        return cls(**raw)
