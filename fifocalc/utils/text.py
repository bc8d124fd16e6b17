"""Text helpers for matching user input against client names."""

import unicodedata
from typing import Iterable, Optional


def remove_diacritics(text: str) -> str:
    """Strip accents so 'Šarūnas' can be matched by typing 'Sarunas'.

    Decomposes to NFD, drops combining marks, recomposes to NFC.
    """
    if not text or not text.strip():
        return text

    decomposed = unicodedata.normalize("NFD", text)
    stripped = "".join(ch for ch in decomposed if unicodedata.category(ch) != "Mn")
    return unicodedata.normalize("NFC", stripped)


def match_client(name: str, clients: Iterable[str]) -> Optional[str]:
    """Find the client a user meant, ignoring case and diacritics.

    Args:
        name: Name as typed by the user.
        clients: Known client names.

    Returns:
        The canonical client name, or None if nothing matches.
    """
    wanted = remove_diacritics(name.strip()).casefold()
    if not wanted:
        return None

    for client in clients:
        if remove_diacritics(client).casefold() == wanted:
            return client
    return None
