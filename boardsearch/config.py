from __future__ import annotations

import os
import tomllib
from dataclasses import dataclass, field

from boardsearch.engine.board import Side
from boardsearch.engine.movegen import make_generator
from boardsearch.eval import make_evaluator
from boardsearch.search.service import SearchEngine


CONFIG_ENV = "BOARDSEARCH_CONFIG"
DEPTH_ENV = "BOARDSEARCH_SEARCH_DEPTH"
GENERATORS = ("neighborhood", "side")
EVALUATORS = ("zero", "material")


@dataclass
class SearchConfig:
    depth: int = 3
    enable_pruning: bool = True
    generator: str = "neighborhood"  # "neighborhood" | "side"
    evaluator: str = "zero"  # "zero" | "material"


@dataclass
class ServerConfig:
    host: str = "0.0.0.0"
    port: int = 8000


@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    server: ServerConfig = field(default_factory=ServerConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "boardsearch.toml") -> "Config":
        """Load settings from a TOML file; a missing file yields defaults.

        Unknown sections and keys are ignored.

        Raises:
            ValueError: If a known key has the wrong type, ``depth`` is below 1,
                or a generator/evaluator name is unknown.
        """
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section, target in (("search", cfg.search), ("server", cfg.server)):
            for k, v in raw.get(section, {}).items():
                if hasattr(target, k):
                    setattr(target, k, _checked(f"{section}.{k}", getattr(target, k), v))
        if "log_level" in raw:
            cfg.log_level = _checked("log_level", cfg.log_level, raw["log_level"])
        cfg.validate()
        return cfg

    def validate(self) -> None:
        if self.search.depth < 1:
            raise ValueError("search.depth must be >= 1")
        if self.search.generator not in GENERATORS:
            raise ValueError(f"unknown move generator: {self.search.generator!r}")
        if self.search.evaluator not in EVALUATORS:
            raise ValueError(f"unknown evaluator: {self.search.evaluator!r}")
        if not 0 < self.server.port < 65536:
            raise ValueError("server.port must be in 1..65535")

    def make_engine(self, perspective: Side = Side.FIRST) -> SearchEngine:
        """Build a search engine from the ``search`` section.

        Raises:
            ValueError: If the generator or evaluator name is unknown.
        """
        return SearchEngine(
            make_generator(self.search.generator),
            make_evaluator(self.search.evaluator, perspective),
            enable_pruning=self.search.enable_pruning,
        )


def load_config(path: str | None = None) -> Config:
    """Load the TOML config and apply environment overrides.

    Raises:
        ValueError: If ``BOARDSEARCH_SEARCH_DEPTH`` is not a positive integer.
    """
    cfg = Config.load_from_toml(path or os.environ.get(CONFIG_ENV, "boardsearch.toml"))
    override_depth = os.environ.get(DEPTH_ENV)
    if override_depth:
        depth = int(override_depth)
        if depth < 1:
            raise ValueError(f"{DEPTH_ENV} must be >= 1")
        cfg.search.depth = depth
    return cfg


def _checked(key: str, current: object, value: object) -> object:
    # bool is an int subclass; keep the two apart
    if isinstance(current, bool) or isinstance(value, bool):
        ok = isinstance(current, bool) and isinstance(value, bool)
    else:
        ok = isinstance(value, type(current))
    if not ok:
        raise ValueError(f"{key} must be {type(current).__name__}, got {value!r}")
    return value
