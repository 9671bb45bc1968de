from __future__ import annotations
from dataclasses import dataclass, asdict
from typing import Dict, Sequence
import logging
import math

from lob_book import InsufficientLiquidity, Order, Orderbook

logger = logging.getLogger(__name__)

# reliquat de soustractions flottantes toléré en fin de balayage, relatif à target_qty
QTY_REL_EPSILON = 1e-9


@dataclass(frozen=True)
class AnalyticsConfig:
    depth_pct: float = 0.5 # ±0.5% autour du mid
    target_qty: float = 40.0 # quantité pour le VWAP


@dataclass(frozen=True)
class Stats:
    best_bid: float
    best_ask: float
    mid_price: float
    spread: float
    spread_pct: float
    bid_depth: float
    ask_depth: float
    vwap_buy: float
    vwap_sell: float

    def as_dict(self) -> Dict[str, float]:
        return asdict(self)


def depth(orders: Sequence[Order], min_price: float, max_price: float) -> float:
    """Volume total au repos dans la bande fermée [min_price, max_price]."""
    total = 0.0
    for o in orders:
        if min_price <= o.price <= max_price:
            total += o.size
    return total


def sweep_vwap(levels: Sequence[Order], target_qty: float) -> float:

    """
    Balaie 'levels' du meilleur vers le pire (ordre fourni) jusqu'à remplir target_qty.
    Retourne le prix moyen pondéré par le volume effectivement exécuté.
    - asks triés croissants -> VWAP d'achat
    - bids triés décroissants -> VWAP de vente
    Lève InsufficientLiquidity si le carnet ne suffit pas.
    """

    if not math.isfinite(target_qty) or target_qty <= 0:
        raise ValueError(f"target_qty must be finite and > 0, got {target_qty}")

    remaining = target_qty
    total = 0.0
    walked = 0.0
    for level in levels:
        if remaining <= 0.0:
            break
        filled = min(remaining, level.size)
        total += filled * level.price
        remaining -= filled
        walked += level.size

    if remaining > QTY_REL_EPSILON * target_qty:
        side = levels[0].side if levels else None
        raise InsufficientLiquidity(side, target_qty, walked)
    return total / target_qty


def analyze(book: Orderbook, depth_pct: float, target_qty: float) -> Stats:

    """
    Calcule le snapshot complet (best, mid, spread, profondeur, VWAP).
    Tout ou rien: la moindre erreur de balayage remonte, aucun Stats partiel.
    """

    if not math.isfinite(depth_pct) or depth_pct < 0:
        raise ValueError(f"depth_pct must be finite and >= 0, got {depth_pct}")
    logger.debug("Analyzing book: depth_pct=%s target_qty=%s", depth_pct, target_qty)

    best_bid = book.best_bid()
    best_ask = book.best_ask()
    mid = (best_bid + best_ask) / 2.0
    spread = best_ask - best_bid

    lower = mid * (1.0 - depth_pct / 100.0)
    upper = mid * (1.0 + depth_pct / 100.0)

    return Stats(
        best_bid=best_bid,
        best_ask=best_ask,
        mid_price=mid,
        spread=spread,
        spread_pct=(spread / mid) * 100.0,
        bid_depth=depth(book.bids, lower, upper),
        ask_depth=depth(book.asks, lower, upper),
        vwap_buy=sweep_vwap(book.asks, target_qty),
        vwap_sell=sweep_vwap(book.bids, target_qty),
    )


def analyze_with(book: Orderbook, config: AnalyticsConfig | None = None) -> Stats:
    cfg = config or AnalyticsConfig()
    return analyze(book, cfg.depth_pct, cfg.target_qty)
