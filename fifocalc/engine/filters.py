"""Trade filtering."""

from datetime import date

from fifocalc.models import Trade


def filter_trades(trades: list[Trade], client: str, target_date: date) -> list[Trade]:
    """Select one client's trades dated on or before the cutoff.

    Client names are compared case-insensitively. The result is ordered by
    date, then trade ID.

    Args:
        trades: All parsed trades.
        client: Client name to keep.
        target_date: Inclusive cutoff date.

    Returns:
        New list of matching trades.
    """
    wanted = client.casefold()
    selected = [
        t for t in trades
        if t.client.casefold() == wanted and t.date <= target_date
    ]
    return sorted(selected, key=lambda t: (t.date, t.trade_id))
