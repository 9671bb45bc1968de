from __future__ import annotations
from dataclasses import dataclass
from typing import Tuple
import logging
import math

import numpy as np
import pandas as pd

from lob_book import FIELDS

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class GeneratorConfig:
    output_path: str = "orderbook.csv"
    levels: int = 10 # niveaux par côté
    mid_price: float = 100.0
    tick_size: float = 0.10 # écart de prix entre niveaux
    min_size: float = 1.0
    max_size: float = 50.0
    decimals: int = 2 # précision d'écriture du CSV


# -------- utilitaires légers ----------
def ladder_prices(mid_price: float, tick_size: float, levels: int) -> Tuple[np.ndarray, np.ndarray]:
    """Bids: mid - i*tick, asks: mid + i*tick pour i = 1..levels (best-first)."""
    steps = np.arange(1, levels + 1, dtype=float)
    return mid_price - steps * tick_size, mid_price + steps * tick_size

def sample_sizes(n: int, min_size: float, max_size: float) -> np.ndarray:
    # tirage uniforme; le seed est posé par l'appelant (np.random.seed)
    return np.random.uniform(min_size, max_size, size=n)

def validate_config(cfg: GeneratorConfig) -> None:
    if cfg.levels < 1:
        raise ValueError(f"levels must be >= 1, got {cfg.levels}")
    for name in ("mid_price", "tick_size", "min_size", "max_size"):
        if not math.isfinite(getattr(cfg, name)):
            raise ValueError(f"{name} must be finite, got {getattr(cfg, name)}")
    if cfg.tick_size <= 0:
        raise ValueError(f"tick_size must be > 0, got {cfg.tick_size}")
    # sous la précision d'écriture, des niveaux voisins tombent sur le même prix
    if cfg.tick_size < 10.0 ** -cfg.decimals:
        raise ValueError(
            f"tick_size {cfg.tick_size} is finer than the written precision ({cfg.decimals} decimals)"
        )
    if cfg.min_size <= 0 or cfg.min_size > cfg.max_size:
        raise ValueError(f"Invalid size range [{cfg.min_size}, {cfg.max_size}]")
    worst_bid = round(cfg.mid_price - cfg.levels * cfg.tick_size, cfg.decimals)
    if worst_bid <= 0:
        raise ValueError(
            f"Price {worst_bid} out of bounds: {cfg.levels} levels of {cfg.tick_size} below mid {cfg.mid_price}."
        )


def generate_book_frame(cfg: GeneratorConfig) -> pd.DataFrame:

    """
    Carnet synthétique non croisé:
      bids du meilleur (mid - tick) vers le pire, puis asks du meilleur (mid + tick) vers le pire.
    Prix et tailles arrondis à 'decimals'; une taille ne descend jamais sous 10**-decimals.
    """

    validate_config(cfg)
    bid_px, ask_px = ladder_prices(cfg.mid_price, cfg.tick_size, cfg.levels)
    sizes = sample_sizes(2 * cfg.levels, cfg.min_size, cfg.max_size)
    sizes = np.maximum(np.round(sizes, cfg.decimals), 10.0 ** -cfg.decimals)

    return pd.DataFrame({
        FIELDS[0]: ["bid"] * cfg.levels + ["ask"] * cfg.levels,
        FIELDS[1]: np.round(np.concatenate([bid_px, ask_px]), cfg.decimals),
        FIELDS[2]: sizes,
    })


def write_book_csv(cfg: GeneratorConfig) -> pd.DataFrame:
    df = generate_book_frame(cfg)
    df.to_csv(cfg.output_path, index=False, float_format=f"%.{cfg.decimals}f")
    logger.info(
        "Generated %s (%d bids + %d asks, mid = %s)",
        cfg.output_path, cfg.levels, cfg.levels, cfg.mid_price,
    )
    return df
