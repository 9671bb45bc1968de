from __future__ import annotations
import argparse

import matplotlib.pyplot as plt

from lob_book import Orderbook, load_book


def plot_depth(book: Orderbook, ax=None):

    """
    Courbe de profondeur cumulée: bids à gauche du mid, asks à droite.
    """

    df = book.to_frame()
    if ax is None:
        fig, ax = plt.subplots(figsize=(10, 5))
    else:
        fig = ax.figure

    bids = df[df["side"] == "bid"]
    asks = df[df["side"] == "ask"]
    ax.step(bids["price"], bids["cum_size"], where="post", label="Bids")
    ax.step(asks["price"], asks["cum_size"], where="post", label="Asks")

    mid = (book.best_bid() + book.best_ask()) / 2.0
    ax.axvline(mid, linestyle="--", linewidth=0.8)
    ax.set_title("Cumulative depth")
    ax.set_xlabel("price")
    ax.set_ylabel("cumulative size")
    # Désactive l'offset “+1e2” pour plus de lisibilité
    ax.ticklabel_format(style="plain", useOffset=False, axis="x")
    ax.legend(loc="upper center")
    fig.tight_layout()
    return fig


def main(argv=None):
    ap = argparse.ArgumentParser()
    ap.add_argument("--csv", default="orderbook.csv")
    ap.add_argument("--save", type=str, default="")  # ex: depth.png
    args = ap.parse_args(argv)

    fig = plot_depth(load_book(args.csv))
    if args.save:
        fig.savefig(args.save)
        print("Graphique sauvegardé :", args.save)
    else:
        plt.show()


if __name__ == "__main__":
    main()
