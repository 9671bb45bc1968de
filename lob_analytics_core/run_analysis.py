from __future__ import annotations
import argparse
import logging

from lob_book import OrderbookError, load_book
from lob_analytics import AnalyticsConfig, Stats, analyze_with


def format_report(stats: Stats, depth_pct: float, target_qty: float) -> str:
    lines = [
        "",
        "============================================",
        "         ORDERBOOK ANALYSIS",
        "============================================",
        f"  Best Bid    : {stats.best_bid:.4f}",
        f"  Best Ask    : {stats.best_ask:.4f}",
        f"  Mid Price   : {stats.mid_price:.4f}",
        f"  Spread      : {stats.spread:.4f}  ({stats.spread_pct:.4f}%)",
        "--------------------------------------------",
        f"  Depth (±{depth_pct:.4f}% from mid):",
        f"    Bids : {stats.bid_depth:.4f} units",
        f"    Asks : {stats.ask_depth:.4f} units",
        "--------------------------------------------",
        f"  VWAP (qty = {target_qty:.4f} units):",
        f"    Buy  : {stats.vwap_buy:.4f}",
        f"    Sell : {stats.vwap_sell:.4f}",
        "============================================",
        "",
    ]
    return "\n".join(lines)


def main(argv=None):
    ap = argparse.ArgumentParser(description="Liquidity / pricing snapshot of a CSV order book.")
    ap.add_argument("csv", nargs="?", default="orderbook.csv")
    ap.add_argument("--depth_pct", type=float, default=AnalyticsConfig.depth_pct)
    ap.add_argument("--target_qty", type=float, default=AnalyticsConfig.target_qty)
    ap.add_argument("--log_level", type=str.upper, default="WARNING",
                    choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    args = ap.parse_args(argv)

    logging.basicConfig(
        level=args.log_level,
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    cfg = AnalyticsConfig(depth_pct=args.depth_pct, target_qty=args.target_qty)
    try:
        book = load_book(args.csv)
        stats = analyze_with(book, cfg)
    except (OrderbookError, ValueError) as exc:
        raise SystemExit(f"[ERROR] {exc}")

    print(format_report(stats, cfg.depth_pct, cfg.target_qty))


if __name__ == "__main__":
    main()
