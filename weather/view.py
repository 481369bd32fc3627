"""Weather view: draft query, committed query and the fetched card state.

The view mirrors a single search form. Typing replaces the draft; submitting
copies the draft into the committed query, which issues one fetch. Fetches are
split in two steps (``submit``/``mount`` hand out a ``FetchTicket``,
``run_fetch`` performs it) so callers decide where the network call runs.
Every ticket carries a sequence number and only the most recently issued
ticket may update the state, so a slow response for an old query can never
replace the result of a newer one.
"""

from __future__ import annotations

import logging
import threading
from dataclasses import dataclass
from typing import Any, Dict, Optional

from weather.card import WeatherCard, build_card
from weather.countries import CountryNameResolver
from weather.provider import DEFAULT_ICON_URL, WeatherFetchError, WeatherProvider
from weather.state import Failed, Loaded, Loading, ViewState, has_measurement_block, last_loaded

logger = logging.getLogger(__name__)

DEFAULT_LOCATION = "Irvine, USA"


@dataclass(frozen=True)
class FetchTicket:
    sequence: int
    query: str


class WeatherView:
    """Stateful search form backed by a ``WeatherProvider``.

    WHAT: own the draft query, the committed query and the card state for one
    user.
    WHY: the web API (one view per session) and the CLI drive the same search
    flow and must render identical cards.
    HOW: input handlers mutate state under a lock, ``submit``/``mount`` hand
    out sequenced ``FetchTicket`` objects, and ``run_fetch`` applies a result
    only when its ticket is still the latest one.
    """

    def __init__(
        self,
        provider: WeatherProvider,
        *,
        initial_query: str = DEFAULT_LOCATION,
        resolver: Optional[CountryNameResolver] = None,
        icon_base_url: str = DEFAULT_ICON_URL,
    ) -> None:
        self._provider = provider
        self._resolver = resolver or CountryNameResolver()
        self._icon_base_url = icon_base_url
        self._draft = initial_query
        self._committed = initial_query
        self._state: ViewState = Loading()
        self._sequence = 0
        self._mounted = False
        self._lock = threading.Lock()

    @property
    def draft(self) -> str:
        return self._draft

    @property
    def committed(self) -> str:
        return self._committed

    @property
    def state(self) -> ViewState:
        return self._state

    @property
    def latest_sequence(self) -> int:
        return self._sequence

    # -- Input handlers --------------------------------------------------------
    def set_draft(self, text: Optional[str]) -> None:
        with self._lock:
            self._draft = text or ""

    def submit(self) -> Optional[FetchTicket]:
        """Commit the draft and return the ticket for the fetch it triggers.

        Returns ``None`` when nothing changes: an empty or whitespace-only
        draft (``""``, ``"   "``) keeps the current committed query and sends
        no request, and re-submitting the committed query is a no-op. Any
        other draft is committed verbatim, surrounding spaces included.
        """

        with self._lock:
            draft = self._draft
            if not draft.strip():
                logger.debug("Ignoring empty search submission.")
                return None
            if draft == self._committed:
                return None
            self._committed = draft
            return self._issue_ticket()

    def mount(self) -> Optional[FetchTicket]:
        """Return the initial fetch ticket for the default query (once per view)."""

        with self._lock:
            if self._mounted:
                return None
            self._mounted = True
            return self._issue_ticket()

    def _issue_ticket(self) -> Optional[FetchTicket]:
        if not self._committed.strip():
            return None
        self._sequence += 1
        return FetchTicket(sequence=self._sequence, query=self._committed)

    # -- Fetch -----------------------------------------------------------------
    def run_fetch(self, ticket: FetchTicket) -> ViewState:
        """Fetch ``ticket.query`` and apply the result if the ticket is still current."""

        try:
            payload = self._provider.fetch_current(ticket.query)
        except WeatherFetchError as exc:
            logger.error("Error fetching data: %s", exc)
            return self._apply(ticket, lambda current: Failed(reason=exc.reason, previous=last_loaded(current)))

        if has_measurement_block(payload):
            return self._apply(ticket, lambda _current: Loaded(payload=payload))

        logger.warning(
            "Weather response for %r has no measurement block (%s).",
            ticket.query,
            payload.get("message") or payload.get("cod") or "no details",
        )
        return self._apply(ticket, lambda _current: Loading(raw=payload))

    def _apply(self, ticket: FetchTicket, transition) -> ViewState:
        with self._lock:
            if ticket.sequence != self._sequence:
                logger.debug(
                    "Discarding stale response for %r (request %d, latest %d).",
                    ticket.query,
                    ticket.sequence,
                    self._sequence,
                )
                return self._state
            self._state = transition(self._state)
            return self._state

    def ensure_mounted(self) -> ViewState:
        ticket = self.mount()
        if ticket is None:
            return self._state
        return self.run_fetch(ticket)

    def search(self, text: Optional[str] = None) -> ViewState:
        """Optionally replace the draft, then submit and fetch synchronously."""

        if text is not None:
            self.set_draft(text)
        ticket = self.submit()
        if ticket is None:
            return self._state
        return self.run_fetch(ticket)

    # -- Rendering -------------------------------------------------------------
    def card(self) -> Optional[WeatherCard]:
        return self._card_for(self._state)

    def _card_for(self, state: ViewState) -> Optional[WeatherCard]:
        loaded = last_loaded(state)
        if loaded is None:
            return None
        return build_card(loaded.payload, self._resolver, icon_base_url=self._icon_base_url)

    def to_dict(self) -> Dict[str, Any]:
        with self._lock:
            state = self._state
            draft, committed = self._draft, self._committed
        card = self._card_for(state)
        snapshot: Dict[str, Any] = {
            "draft": draft,
            "committed": committed,
            "error": None,
        }
        snapshot.update(state.to_dict())
        snapshot["card"] = card.to_dict() if card else None
        return snapshot
