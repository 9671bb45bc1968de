from __future__ import annotations
from dataclasses import dataclass
from typing import Dict, Iterable, List, Literal, Tuple
import logging
import math

import pandas as pd

Side = Literal["bid","ask"]

DELIMITER = ","
FIELDS = ("side", "price", "size")

logger = logging.getLogger(__name__)


# -------------- erreurs --------------
class OrderbookError(Exception):
    """Base de toutes les erreurs de chargement / analyse d'un carnet."""


class FileOpenError(OrderbookError):
    def __init__(self, path: str, reason: str):
        self.path = path
        self.reason = reason
        super().__init__(f"Cannot open file: '{path}' ({reason})")


class MalformedRow(OrderbookError):
    def __init__(self, line_number: int | None, detail: str = "has empty fields"):
        self.line_number = line_number
        super().__init__(f"Line {line_number} {detail}.")


class InvalidSide(OrderbookError):
    def __init__(self, raw: str, line_number: int | None = None):
        self.raw = raw
        self.line_number = line_number
        where = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(f"{where}Unknown order side: '{raw}'")


class InvalidNumber(OrderbookError):
    def __init__(self, field_name: str, raw: str, line_number: int | None = None):
        self.field_name = field_name
        self.raw = raw
        self.line_number = line_number
        where = f"Line {line_number}: " if line_number is not None else ""
        super().__init__(
            f"{where}Invalid value for field '{field_name}': '{raw}' (must be finite and > 0)"
        )


class EmptySide(OrderbookError):
    def __init__(self, side: Side):
        self.side = side
        super().__init__(f"No {side}s found in file.")


class CrossedBook(OrderbookError):
    def __init__(self, best_bid: float, best_ask: float):
        self.best_bid = best_bid
        self.best_ask = best_ask
        super().__init__(f"Crossed book: best bid ({best_bid}) >= best ask ({best_ask}).")


class InsufficientLiquidity(OrderbookError):
    def __init__(self, side: Side | None, target_qty: float, available: float):
        self.side = side
        self.target_qty = target_qty
        self.available = available
        # on balaie les asks pour acheter, les bids pour vendre
        action = {"ask": "buy", "bid": "sell"}.get(side, "fill")
        super().__init__(
            f"Not enough liquidity to {action} {target_qty} units (only {available} available)."
        )


# -------------- modèle --------------
@dataclass(frozen=True)
class Order:
    side: Side
    price: float
    size: float


@dataclass(frozen=True)
class Orderbook:

    """
    Carnet statique, construit une fois puis lu seulement.
    - bids: prix triés décroissants
    - asks: prix triés croissants
    Donc [0] est toujours le meilleur prix de chaque côté, et bids[0] < asks[0].
    """

    bids: Tuple[Order, ...]
    asks: Tuple[Order, ...]

    @classmethod
    def from_orders(cls, orders: Iterable[Order]) -> "Orderbook":

        """
        Répartit les ordres par côté, trie du meilleur vers le pire et rejette les carnets invalides.
        Tri stable: à prix égal, l'ordre d'origine est conservé.
        """

        bids: List[Order] = []
        asks: List[Order] = []
        for order in orders:
            if order.side == "bid":
                bids.append(order)
            else:
                asks.append(order)

        if not bids:
            raise EmptySide("bid")
        if not asks:
            raise EmptySide("ask")

        bids.sort(key=lambda o: o.price, reverse=True)
        asks.sort(key=lambda o: o.price)

        # carnet croisé = données corrompues
        if bids[0].price >= asks[0].price:
            raise CrossedBook(bids[0].price, asks[0].price)

        return cls(bids=tuple(bids), asks=tuple(asks))

    # -------------- lecture --------------
    def side_orders(self, side: Side) -> Tuple[Order, ...]:
        return self.bids if side == "bid" else self.asks

    def best_bid(self) -> float:
        return self.bids[0].price

    def best_ask(self) -> float:
        return self.asks[0].price

    def total_size(self, side: Side) -> float:
        return sum(o.size for o in self.side_orders(side))

    def levels(self, side: Side, depth: int | None = None) -> List[Tuple[float, float]]:

        """
        Retourne [(price, volume)] agrégé par prix, trié du meilleur vers le plus loin,
        limité à 'depth' si fourni.
        """

        agg: Dict[float, float] = {}
        for o in self.side_orders(side):
            agg[o.price] = agg.get(o.price, 0.0) + o.size

        out = []
        for p, v in agg.items():  # dict garde l'ordre d'insertion, déjà best-first
            out.append((p, v))
            if depth is not None and len(out) >= depth:
                break
        return out

    def snapshot(self, depth: int | None = None) -> Dict[str, List[Tuple[float, float]]]:
        return {
            "bids": self.levels("bid", depth=depth),
            "asks": self.levels("ask", depth=depth),
        }

    def to_frame(self) -> pd.DataFrame:

        """
        Vue tabulaire: colonnes side, price, size, cum_size (cumul best-first par côté).
        """

        rows = [
            {"side": o.side, "price": o.price, "size": o.size}
            for o in (*self.bids, *self.asks)
        ]
        df = pd.DataFrame(rows, columns=list(FIELDS))
        df["cum_size"] = df.groupby("side", sort=False)["size"].cumsum()
        return df

    def assert_invariants(self) -> None:
        assert self.bids and self.asks, "Empty side"
        for orders in (self.bids, self.asks):
            for o in orders:
                assert o.price > 0.0 and o.size > 0.0, f"Non-positive order {o}"
        for a, b in zip(self.bids, self.bids[1:]):
            assert a.price >= b.price, f"Bids not descending at {a.price} -> {b.price}"
        for a, b in zip(self.asks, self.asks[1:]):
            assert a.price <= b.price, f"Asks not ascending at {a.price} -> {b.price}"
        bb, ba = self.best_bid(), self.best_ask()
        assert bb < ba, f"Invariant broken: best_bid {bb} >= best_ask {ba}"


# -------------- parsing --------------
def parse_side(raw: str, line_number: int | None = None) -> Side:
    s = raw.strip().lower()
    if s == "bid":
        return "bid"
    if s == "ask":
        return "ask"
    raise InvalidSide(raw, line_number)


def parse_number(raw: str, field_name: str, line_number: int | None = None) -> float:
    try:
        value = float(raw)
    except ValueError:
        raise InvalidNumber(field_name, raw, line_number) from None
    if not math.isfinite(value) or value <= 0.0:
        raise InvalidNumber(field_name, raw, line_number)
    return value


def parse_row(line: str, line_number: int | None = None) -> Order:

    """
    Convertit une ligne 'side,price,size' en Order.
    Les champs vides sont détectés avant toute conversion numérique.
    """

    fields = [f.strip() for f in line.split(DELIMITER)]
    if len(fields) != len(FIELDS):
        raise MalformedRow(line_number, f"has {len(fields)} fields, expected {len(FIELDS)}")
    side_str, price_str, size_str = fields
    if not side_str or not price_str or not size_str:
        raise MalformedRow(line_number)

    return Order(
        side=parse_side(side_str, line_number),
        price=parse_number(price_str, "price", line_number),
        size=parse_number(size_str, "size", line_number),
    )


# -------------- chargement --------------
def load_book(path: str) -> Orderbook:

    """
    Lit un fichier CSV (en-tête ignoré), parse chaque ligne non vide et construit le carnet.
    Le numéro de ligne est 1-based, l'en-tête compte comme ligne 1.
    """

    orders: List[Order] = []
    try:
        with open(path, "r", encoding="utf-8") as f:
            f.readline() # en-tête, jamais validé
            for line_number, line in enumerate(f, start=2):
                if not line.strip():
                    logger.debug("Skipping blank line %d in %s", line_number, path)
                    continue
                orders.append(parse_row(line, line_number))
    except OSError as exc:
        raise FileOpenError(str(path), exc.strerror or str(exc)) from exc
    except UnicodeDecodeError as exc:
        raise FileOpenError(str(path), "not valid UTF-8") from exc

    book = Orderbook.from_orders(orders)
    logger.debug("Loaded %d bids / %d asks from %s", len(book.bids), len(book.asks), path)
    return book
