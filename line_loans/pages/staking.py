"""Staking page: switches between all pools and the wallet's pools.

Only the tab routing lives here; pool lists are rendered elsewhere.
"""
from __future__ import annotations

import logging

from ..interfaces.history import History

logger = logging.getLogger(__name__)

TAB_ALL = "all"
TAB_MY = "my"
BASE_PATH = "/staking"
TITLE = "LINE token — Staking"


def tab_from_path(pathname: str) -> str:
    return TAB_MY if TAB_MY in pathname else TAB_ALL


class StakingPage:
    """Tab state of the staking page, kept in sync with the route."""

    def __init__(self, history: History, wallet_address: str = "") -> None:
        self._history = history
        self.wallet_address = wallet_address
        self.type = tab_from_path(history.pathname)

    @property
    def title(self) -> str:
        return TITLE

    def visible_tabs(self) -> list[str]:
        """The "my pools" tab is only offered with a connected wallet."""
        if self.wallet_address:
            return [TAB_ALL, TAB_MY]
        return [TAB_ALL]

    def change_tab(self, value: str) -> None:
        if value not in (TAB_ALL, TAB_MY):
            raise ValueError(f"Unknown staking tab: {value!r}")
        if self.type == value:
            return
        self.type = value
        self._history.push(f"{BASE_PATH}/{value}")

    def sync_with_location(self) -> None:
        """Adopt the tab from the current path or redirect to the default one."""
        pathname = self._history.pathname
        if TAB_MY in pathname or TAB_ALL in pathname:
            url_type = tab_from_path(pathname)
            if url_type != self.type:
                self.type = url_type
        else:
            logger.debug("Redirecting %s to %s/%s", pathname, BASE_PATH, TAB_ALL)
            self._history.replace(f"{BASE_PATH}/{TAB_ALL}")
            self.type = TAB_ALL
