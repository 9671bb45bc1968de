from lob_book import Order, Orderbook
from lob_analytics import analyze


def main():
    # Seed book: 5 niveaux de chaque côté, dans le désordre (le tri est fait à la construction)
    mid0 = 100.00
    orders = []
    for i in reversed(range(5)):
        orders.append(Order("bid", round(mid0 - 0.01 * (i + 1), 2), 50 + 10 * i))
        orders.append(Order("ask", round(mid0 + 0.01 * (i + 1), 2), 50 + 10 * i))
    book = Orderbook.from_orders(orders)

    print("== SNAPSHOT L5 (seed) ==")
    print(book.snapshot(depth=5))
    print("best_bid, best_ask:", book.best_bid(), book.best_ask())

    # VWAP 80 -> balaie le 1er niveau (50) puis 30 sur le 2e
    stats = analyze(book, depth_pct=0.02, target_qty=80)
    print("\n== ANALYSE (band ±0.02%, qty 80) ==")
    for k, v in stats.as_dict().items():
        print(f"{k:>10}: {v:.4f}")
    return stats


if __name__ == "__main__":
    main()
