import logging

logger = logging.getLogger(__name__)


class EventSource:
    """ The handlers subscribed to an event, called in the order they were added. """

    def __init__(self):
        self._handlers = []

    def __len__(self):
        return len(self._handlers)

    def add(self, handler):
        self._handlers.append(handler)

    def remove(self, handler):
        self._handlers.remove(handler)

    def fire(self, *args):
        """ calls each handler with the event. A handler that raises is logged and the rest are still called. """
        for handler in tuple(self._handlers):
            try:
                handler(*args)
            except Exception:
                logger.exception("event handler %r failed for %r", handler, args)
