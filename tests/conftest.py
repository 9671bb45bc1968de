"""Shared test fixtures for lob-analytics tests."""

import sys
from pathlib import Path

import pytest

# Ensure the repository root is on the path for imports
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from lob_book import Order, Orderbook  # noqa: E402


@pytest.fixture
def write_csv(tmp_path):
    """Write lines (header included) to a CSV file and return its path."""
    def _write(*lines, name="book.csv"):
        path = tmp_path / name
        path.write_text("\n".join(lines) + "\n", encoding="utf-8")
        return str(path)
    return _write


@pytest.fixture
def sample_book():
    """Bids [(100, 10), (99, 5)], asks [(101, 8), (102, 10)]."""
    return Orderbook.from_orders([
        Order("bid", 99.0, 5.0),
        Order("ask", 102.0, 10.0),
        Order("bid", 100.0, 10.0),
        Order("ask", 101.0, 8.0),
    ])
