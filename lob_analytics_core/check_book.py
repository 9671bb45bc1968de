import sys

import pandas as pd

from lob_book import load_book


def check_book(path: str) -> pd.DataFrame:
    book = load_book(path)
    # Invariants microstructure (tri, positivité, carnet non croisé)
    book.assert_invariants()

    df = book.to_frame()
    summary = df.groupby("side", sort=False).agg(
        levels=("price", "nunique"),
        total_size=("size", "sum"),
        best=("price", "first"),
        worst=("price", "last"),
    )
    return summary


if __name__ == "__main__":
    path = sys.argv[1] if len(sys.argv) > 1 else "orderbook.csv"
    summary = check_book(path)
    print(summary)
    print("OK — invariants de base vérifiés sur", path)
