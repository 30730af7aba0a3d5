import logging

from .command import build_invocation
from .config import Options
from .index import EntryIndex
from .instance import Message

logger = logging.getLogger(__name__)


class ApplicationState:
    """Everything the owner process keeps between events.

    Only the main loop touches it; the signal listener reaches it through
    ``handle`` scheduled on that loop. ``view`` is anything with
    ``shown()``, ``hide()``, ``show_launcher()`` and ``quit()``.
    """

    def __init__(self, options=None, index=None):
        self.options = options or Options()
        self.index = index if index is not None else EntryIndex()
        self.phrase = ""
        self.summary = ""

    def refresh(self):
        self.summary = self.index.refresh()
        self.phrase = ""
        return self.summary

    def results(self):
        return self.index.query(self.phrase)

    def invocation_for(self, entry):
        return build_invocation(entry, self.options.terminal)

    def handle(self, message, view):
        if message is Message.TERMINATE or not self.options.daemon:
            logger.debug("%s received, exiting..", message.name)
            view.quit()
        elif message is Message.TOGGLE:
            logger.debug("Toggling..")
            if view.shown():
                view.hide()
            else:
                self.refresh()
                view.show_launcher()
        return False
