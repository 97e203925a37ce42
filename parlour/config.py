# parlour/config.py
from dataclasses import dataclass, field
from typing import Dict, Optional
import logging
import os
import tomllib

logger = logging.getLogger(__name__)

# Material weights in whole pawns
PIECE_VALUES = {
    "PAWN": 1,
    "KNIGHT": 3,
    "BISHOP": 3,
    "ROOK": 5,
    "QUEEN": 9,
    "KING": 1000,
}

DIFFICULTY_NAMES = {1: "Easy", 2: "Medium", 3: "Hard"}

@dataclass
class SearchConfig:
    difficulty: int = 2
    noise_scale: int = 50  # perturbation per level below Hard
    seed: Optional[int] = None  # None means nondeterministic noise

@dataclass
class EvalConfig:
    piece_values: Dict[str, int] = field(default_factory=lambda: PIECE_VALUES.copy())
    use_positional: bool = True

@dataclass
class UIConfig:
    engine_name: str = "Parlour"
    default_mode: str = "ai"  # "local" or "ai"
    api_port: int = 8000

@dataclass
class Config:
    search: SearchConfig = field(default_factory=SearchConfig)
    eval: EvalConfig = field(default_factory=EvalConfig)
    ui: UIConfig = field(default_factory=UIConfig)
    log_level: str = "INFO"

    @staticmethod
    def load_from_toml(path: str = "parlour.toml") -> "Config":
        cfg = Config()
        if not os.path.exists(path):
            return cfg
        with open(path, "rb") as f:
            raw = tomllib.load(f)
        for section in ("search", "eval", "ui"):
            target = getattr(cfg, section)
            for k, v in raw.get(section, {}).items():
                if k == "piece_values":
                    # partial tables override single kinds, the rest keep defaults
                    v = {**PIECE_VALUES, **{name.upper(): val for name, val in v.items()}}
                if hasattr(target, k):
                    setattr(target, k, v)
        if "log_level" in raw:
            cfg.log_level = str(raw["log_level"])
        return cfg


def setup_logging(level: Optional[str] = None):
    """Configure root logging from the loaded config."""
    logging.basicConfig(
        level=(level or CONFIG.log_level).upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


# single globally importable config instance
CONFIG = Config.load_from_toml(os.environ.get("PARLOUR_CONFIG_TOML", "parlour.toml"))
# allow env override of difficulty for quick debugging
override_difficulty = os.environ.get("PARLOUR_DIFFICULTY")
if override_difficulty:
    try:
        CONFIG.search.difficulty = int(override_difficulty)
    except ValueError:
        logger.warning("Ignoring malformed PARLOUR_DIFFICULTY=%r", override_difficulty)
