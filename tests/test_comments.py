"""
Tests for comment handling across the pipeline: collection, attachment
and writing back out.
"""

import yamlcore
from yamlcore.comments import CommentType, CommentLine, CommentEventsCollector
from yamlcore.events import CommentEvent, ScalarEvent
from yamlcore.options import LoaderOptions, DumperOptions


# ── Helpers ──────────────────────────────────────────────────────────

def _queue(*events):
    """Return peek/poll callables over a list of events."""
    pending = list(events)

    def peek():
        return pending[0] if pending else None

    def poll():
        return pending.pop(0) if pending else None

    return peek, poll


def _node_round_trip(text):
    node = yamlcore.compose(text, options=LoaderOptions(process_comments=True))
    return yamlcore.serialize(node, process_comments=True)


def _event_round_trip(text):
    events = yamlcore.parse(text, options=LoaderOptions(process_comments=True))
    return yamlcore.emit(events)


# ── Collector ────────────────────────────────────────────────────────

class TestCollector:

    def test_collects_expected_types(self):
        """Only comments of the expected types are gathered."""
        peek, poll = _queue(CommentEvent(CommentType.BLOCK, ' a'),
                            CommentEvent(CommentType.IN_LINE, ' b'))
        collector = CommentEventsCollector(peek, poll, CommentType.BLOCK)
        assert collector.collect_events() is None
        assert [line.value for line in collector] == [' a']
        assert peek().comment_type == CommentType.IN_LINE

    def test_other_event_returned(self):
        """A non-comment event is handed back untouched."""
        event = ScalarEvent(None, None, (True, False), 'x')
        collector = CommentEventsCollector(*_queue(), CommentType.BLOCK)
        assert collector.collect_events(event) is event
        assert collector.is_empty()

    def test_collect_and_poll(self):
        """After the comments, the next event is polled."""
        scalar = ScalarEvent(None, None, (True, False), 'x')
        peek, poll = _queue(CommentEvent(CommentType.BLANK_LINE, '\n'), scalar)
        collector = CommentEventsCollector(peek, poll,
                                           CommentType.BLANK_LINE, CommentType.BLOCK)
        first = CommentEvent(CommentType.BLOCK, ' head')
        assert collector.collect_events_and_poll(first) is scalar
        assert [line.comment_type for line in collector] == \
            [CommentType.BLOCK, CommentType.BLANK_LINE]

    def test_consume_empties(self):
        """consume() hands over the lines and resets the collector."""
        peek, poll = _queue(CommentEvent(CommentType.BLOCK, ' a'))
        collector = CommentEventsCollector(peek, poll, CommentType.BLOCK)
        collector.collect_events()
        lines = collector.consume()
        assert len(lines) == 1
        assert collector.is_empty()

    def test_comment_line_event(self):
        """A CommentLine converts back to an equivalent event."""
        line = CommentLine(None, None, ' note', CommentType.IN_LINE)
        event = line.to_event()
        assert isinstance(event, CommentEvent)
        assert (event.comment_type, event.value) == (CommentType.IN_LINE, ' note')


# ── Writing comments ─────────────────────────────────────────────────

class TestCommentOutput:

    def test_node_round_trip(self):
        """Block and in-line comments survive compose and serialize."""
        text = "# head\na: 1 # one\n# before b\nb: 2\n"
        assert _node_round_trip(text) == text

    def test_event_round_trip(self):
        """Comment events are written where they occur."""
        text = "# head\na: 1 # one\n# before b\nb: 2\n"
        assert _event_round_trip(text) == text

    def test_sequence_inline(self):
        """An in-line comment after a sequence item stays on its line."""
        text = "- a # x\n- b\n"
        assert _event_round_trip(text) == text

    def test_blank_line_kept(self):
        """Blank lines between entries are kept."""
        text = "a: 1\n\nb: 2\n"
        assert _event_round_trip(text) == text

    def test_comments_dropped_without_option(self):
        """Without process_comments the serializer writes no comments."""
        node = yamlcore.compose("# head\na: 1 # one\nb: 2\n",
                                options=LoaderOptions(process_comments=True))
        assert yamlcore.serialize(node) == "a: 1\nb: 2\n"

    def test_comment_only_document(self):
        """A document of comments only is written as those comments."""
        nodes = list(yamlcore.compose_all(
            "# just a comment\n", options=LoaderOptions(process_comments=True)))
        text = yamlcore.serialize(nodes[0], process_comments=True)
        assert text == "# just a comment\n"

    def test_engine_round_trip(self):
        """An engine configured for comments keeps them both ways."""
        engine = yamlcore.YAML(LoaderOptions(process_comments=True),
                               DumperOptions(process_comments=True))
        text = "# head\na: 1 # one\n"
        assert engine.serialize(engine.compose(text)) == text
