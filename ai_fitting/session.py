"""A browser tab's worth of state: three uploaders wired to one controller."""

import logging
import time
from collections import OrderedDict
from typing import Callable

from .controller import FittingController, GenerationService
from .messages import get_message
from .models import Slot
from .ui import ImageUploader, PreviewStore, SessionView, UploaderView, render_session

logger = logging.getLogger(__name__)

SLOT_ICONS = {
    Slot.PERSON: "🧍",
    Slot.TOP: "👕",
    Slot.BOTTOM: "👖",
}


class FittingSession:
    """Owns the preview store, the uploaders and the controller for one tab."""

    def __init__(
        self,
        service: GenerationService,
        locale: str = "ko",
        previews: PreviewStore | None = None,
    ):
        self.locale = locale
        self.previews = previews or PreviewStore()
        self.controller = FittingController(service, locale=locale)

        callbacks = {
            Slot.PERSON: self.controller.select_person,
            Slot.TOP: self.controller.select_top,
            Slot.BOTTOM: self.controller.select_bottom,
        }
        self.uploaders = {
            slot: ImageUploader(
                label=get_message(f"upload_{slot.value}", locale),
                icon=SLOT_ICONS[slot],
                on_select=callback,
                previews=self.previews,
            )
            for slot, callback in callbacks.items()
        }

    def uploader(self, slot: Slot) -> ImageUploader:
        return self.uploaders[slot]

    def view(self) -> SessionView:
        uploader_views = [
            UploaderView(
                slot=slot,
                label=uploader.label,
                icon=uploader.icon,
                accept=uploader.accept,
                preview_url=uploader.preview_url,
            )
            for slot, uploader in self.uploaders.items()
        ]
        return render_session(self.controller.state, uploader_views, self.locale)

    def close(self) -> None:
        """Release every preview handle."""
        for uploader in self.uploaders.values():
            uploader.close()
        self.previews.clear()


class SessionStore:
    """Live sessions by id, capped in number and evicted when idle.

    Evicted sessions are closed, which releases their previews.
    """

    def __init__(
        self,
        max_sessions: int = 100,
        idle_timeout: float = 3600.0,
        clock: Callable[[], float] = time.monotonic,
    ):
        self.max_sessions = max_sessions
        self.idle_timeout = idle_timeout
        self._clock = clock
        # Least recently used first
        self._sessions: OrderedDict[str, tuple[FittingSession, float]] = OrderedDict()

    def get(self, session_id: str | None) -> FittingSession | None:
        """Look up a live session and mark it as used."""
        self.evict_idle()
        if session_id is None or session_id not in self._sessions:
            return None
        session, _ = self._sessions.pop(session_id)
        self._sessions[session_id] = (session, self._clock())
        return session

    def add(self, session_id: str, session: FittingSession) -> None:
        self.evict_idle()
        while len(self._sessions) >= self.max_sessions:
            oldest_id = next(iter(self._sessions))
            logger.info("Session limit reached, evicting %s", oldest_id)
            self.remove(oldest_id)
        self._sessions[session_id] = (session, self._clock())

    def remove(self, session_id: str | None) -> bool:
        """Close and forget a session. Returns False if it was not live."""
        entry = self._sessions.pop(session_id, None) if session_id else None
        if entry is None:
            return False
        entry[0].close()
        return True

    def evict_idle(self) -> None:
        cutoff = self._clock() - self.idle_timeout
        expired = [sid for sid, (_, last_used) in self._sessions.items() if last_used < cutoff]
        for session_id in expired:
            logger.info("Evicting idle session %s", session_id)
            self.remove(session_id)

    def close_all(self) -> None:
        for session, _ in self._sessions.values():
            session.close()
        self._sessions.clear()

    def __len__(self) -> int:
        return len(self._sessions)

    def __contains__(self, session_id: str) -> bool:
        return session_id in self._sessions
