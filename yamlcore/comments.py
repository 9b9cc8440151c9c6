"""Comment bookkeeping shared by the composer, serializer and emitter.

Comments travel through the pipeline as CommentEvent objects.  Nodes keep
them as lists of CommentLine, split into block comments (before the node),
in-line comments (after the node on the same line) and end comments
(before the end of the document).
"""

from .events import CommentEvent

__all__ = ['CommentType', 'CommentLine', 'CommentEventsCollector']


class CommentType:
    BLANK_LINE = 'blank_line'
    BLOCK = 'block'
    IN_LINE = 'in_line'


class CommentLine:
    """A single comment (or blank line) detached from the event stream."""

    def __init__(self, start_mark, end_mark, value, comment_type):
        self.start_mark = start_mark
        self.end_mark = end_mark
        self.value = value
        self.comment_type = comment_type

    @classmethod
    def from_event(cls, event):
        return cls(event.start_mark, event.end_mark, event.value,
                   event.comment_type)

    def to_event(self):
        return CommentEvent(self.comment_type, self.value,
                            self.start_mark, self.end_mark)

    def __repr__(self):
        return '<%s %s %r>' % (self.__class__.__name__,
                               self.comment_type, self.value)


class CommentEventsCollector:
    """Gathers consecutive comment events of the given types.

    ``peek`` returns the next event (or None) and ``poll`` removes and
    returns it; both are bound to an event source such as a parser or
    the emitter's lookahead queue.
    """

    def __init__(self, peek, poll, *expected_types):
        self.peek = peek
        self.poll = poll
        self.expected_types = expected_types
        self.comment_lines = []

    def _is_expected(self, event):
        return isinstance(event, CommentEvent) \
            and event.comment_type in self.expected_types

    def collect_events(self, event=None):
        """Collect comments starting with ``event`` (if given).

        Returns ``event`` untouched when it is not an expected comment,
        otherwise None once every following expected comment is consumed.
        """
        if event is not None:
            if not self._is_expected(event):
                return event
            self.comment_lines.append(CommentLine.from_event(event))
        while self._is_expected(self.peek()):
            self.comment_lines.append(CommentLine.from_event(self.poll()))
        return None

    def collect_events_and_poll(self, event):
        next_event = self.collect_events(event)
        return next_event if next_event is not None else self.poll()

    def consume(self):
        comment_lines = self.comment_lines
        self.comment_lines = []
        return comment_lines

    def is_empty(self):
        return not self.comment_lines

    def __iter__(self):
        return iter(self.comment_lines)
