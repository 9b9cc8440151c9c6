"""Composer: builds the node graph of a document from the event stream.

Expects subclasses to provide:
- check_event(*choices) -> bool
- get_event() -> Event
- peek_event() -> Event
- resolve(kind, value, implicit) -> tag  (from Resolver)
"""

import logging

from .error import MarkedYAMLError
from .comments import CommentType, CommentEventsCollector
from .options import LoaderOptions
from .nodes import Tag, ScalarNode, SequenceNode, MappingNode
from .events import (
    StreamStartEvent, StreamEndEvent,
    AliasEvent, ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
    CommentEvent,
)

__all__ = ['Composer', 'ComposerError']

logger = logging.getLogger(__name__)


class ComposerError(MarkedYAMLError):
    """YAML composer error (e.g., undefined alias)."""
    pass


class Composer:
    """Converts the event stream into one node graph per document.

    Anchored nodes are registered before their children are composed, so
    a collection may contain aliases of itself.  A node that is reached
    through an alias while it is still being composed is flagged with
    ``two_steps_construction``.
    """

    def __init__(self, options=None):
        if options is None:
            options = LoaderOptions()
        self.max_aliases_for_collections = options.max_aliases_for_collections
        self.anchors = {}
        self.recursive_nodes = set()
        self.non_scalar_aliases = 0
        self.block_comments_collector = CommentEventsCollector(
            self.peek_event, self.get_event,
            CommentType.BLANK_LINE, CommentType.BLOCK)
        self.inline_comments_collector = CommentEventsCollector(
            self.peek_event, self.get_event, CommentType.IN_LINE)
        self.leading_comments_collector = CommentEventsCollector(
            self.peek_event, self.get_event,
            CommentType.BLANK_LINE, CommentType.BLOCK, CommentType.IN_LINE)

    def check_node(self):
        # Drop the STREAM-START event.
        if self.check_event(StreamStartEvent):
            self.get_event()

        # If there are more documents available?
        return not self.check_event(StreamEndEvent)

    def get_node(self):
        # Get the root node of the next document.
        self.block_comments_collector.collect_events()
        if self.check_event(StreamEndEvent):
            # Only comments are left in the stream.
            comments = self.block_comments_collector.consume()
            node = MappingNode(Tag.COMMENT, [],
                               comments[0].start_mark if comments else None,
                               None, flow_style=False)
            node.block_comments = comments
            return node
        return self.compose_document()

    def get_single_node(self):
        # Drop the STREAM-START event.
        self.get_event()

        # Compose a document if the stream is not empty.
        document = None
        self.block_comments_collector.collect_events()
        if not self.check_event(StreamEndEvent):
            document = self.compose_document()
        else:
            self.block_comments_collector.consume()

        # Comments after the document belong to no node.
        while self.check_event(CommentEvent):
            self.get_event()

        # Ensure that the stream contains no more documents.
        if not self.check_event(StreamEndEvent):
            event = self.get_event()
            raise ComposerError("expected a single document in the stream",
                                document.start_mark if document else None,
                                "but found another document",
                                event.start_mark)

        # Drop the STREAM-END event.
        self.get_event()

        return document

    def compose_document(self):
        # Drop the DOCUMENT-START event.
        start_event = self.get_event()
        logger.debug("composing document at %s", start_event.start_mark)

        # Compose the root node.
        node = self.compose_node(None, self._collect_block_comments())

        self.block_comments_collector.collect_events()
        if not self.block_comments_collector.is_empty():
            node.end_comments = self.block_comments_collector.consume()

        # Drop the DOCUMENT-END event.
        self.get_event()

        self.anchors = {}
        self.recursive_nodes = set()
        self.non_scalar_aliases = 0
        return node

    def _collect_block_comments(self):
        self.block_comments_collector.collect_events()
        return self.block_comments_collector.consume()

    def compose_node(self, parent, block_comments):
        if parent is not None:
            self.recursive_nodes.add(parent)
        if self.check_event(CommentEvent):
            # In-line comments right before a node, as after a bare '-'
            # or ':', are kept with the node's block comments.
            self.leading_comments_collector.collect_events()
            block_comments = block_comments \
                + self.leading_comments_collector.consume()
        if self.check_event(AliasEvent):
            event = self.get_event()
            anchor = event.anchor
            if anchor not in self.anchors:
                raise ComposerError(None, None,
                                    "found undefined alias %r" % anchor,
                                    event.start_mark)
            node = self.anchors[anchor]
            if not isinstance(node, ScalarNode):
                self.non_scalar_aliases += 1
                logger.debug("alias %r to a collection (%d of %d allowed)",
                             anchor, self.non_scalar_aliases,
                             self.max_aliases_for_collections)
                if self.non_scalar_aliases > self.max_aliases_for_collections:
                    raise ComposerError(
                        None, None,
                        "Number of aliases for non-scalar nodes exceeds "
                        "the specified max=%d"
                        % self.max_aliases_for_collections,
                        event.start_mark)
            if node in self.recursive_nodes:
                self.recursive_nodes.discard(node)
                node.two_steps_construction = True
            if block_comments:
                node.block_comments = block_comments
        else:
            event = self.peek_event()
            anchor = getattr(event, 'anchor', None)
            if anchor is not None:
                if anchor in self.anchors:
                    raise ComposerError(
                        "found duplicate anchor %r; first occurrence"
                        % anchor, self.anchors[anchor].start_mark,
                        "second occurrence", event.start_mark)
            if self.check_event(ScalarEvent):
                node = self.compose_scalar_node(anchor, block_comments)
            elif self.check_event(SequenceStartEvent):
                node = self.compose_sequence_node(anchor, block_comments)
            elif self.check_event(MappingStartEvent):
                node = self.compose_mapping_node(anchor, block_comments)
            else:
                raise ComposerError(None, None,
                                    "expected a node, but found %s"
                                    % event.__class__.__name__,
                                    event.start_mark)
        self.recursive_nodes.discard(parent)
        return node

    def compose_scalar_node(self, anchor, block_comments):
        event = self.get_event()
        tag = event.tag
        resolved = False
        if tag is None or tag == '!':
            tag = self.resolve(ScalarNode, event.value, event.implicit)
            resolved = True
        node = ScalarNode(tag, event.value,
                          start_mark=event.start_mark,
                          end_mark=event.end_mark,
                          style=event.style)
        node.resolved = resolved
        if anchor is not None:
            node.anchor = anchor
            self.anchors[anchor] = node
        node.block_comments = block_comments
        self.inline_comments_collector.collect_events()
        node.in_line_comments = self.inline_comments_collector.consume()
        return node

    def compose_sequence_node(self, anchor, block_comments):
        start_event = self.get_event()
        tag = start_event.tag
        resolved = False
        if tag is None or tag == '!':
            tag = self.resolve(SequenceNode, None, start_event.implicit)
            resolved = True
        node = SequenceNode(tag, [],
                            start_mark=start_event.start_mark,
                            end_mark=None,
                            flow_style=start_event.flow_style)
        node.resolved = resolved
        if anchor is not None:
            node.anchor = anchor
            self.anchors[anchor] = node
        node.block_comments = block_comments
        self.inline_comments_collector.collect_events()
        node.in_line_comments = self.inline_comments_collector.consume()
        while not self.check_event(SequenceEndEvent):
            self.block_comments_collector.collect_events()
            if self.check_event(SequenceEndEvent):
                break
            node.value.append(self.compose_node(
                node, self.block_comments_collector.consume()))
        end_event = self.get_event()
        node.end_mark = end_event.end_mark
        self.inline_comments_collector.collect_events()
        if not self.inline_comments_collector.is_empty():
            node.in_line_comments = self.inline_comments_collector.consume()
        return node

    def compose_mapping_node(self, anchor, block_comments):
        start_event = self.get_event()
        tag = start_event.tag
        resolved = False
        if tag is None or tag == '!':
            tag = self.resolve(MappingNode, None, start_event.implicit)
            resolved = True
        node = MappingNode(tag, [],
                           start_mark=start_event.start_mark,
                           end_mark=None,
                           flow_style=start_event.flow_style)
        node.resolved = resolved
        if anchor is not None:
            node.anchor = anchor
            self.anchors[anchor] = node
        node.block_comments = block_comments
        self.inline_comments_collector.collect_events()
        node.in_line_comments = self.inline_comments_collector.consume()
        while not self.check_event(MappingEndEvent):
            self.block_comments_collector.collect_events()
            if self.check_event(MappingEndEvent):
                break
            self.compose_mapping_children(
                node, self.block_comments_collector.consume())
        end_event = self.get_event()
        node.end_mark = end_event.end_mark
        self.inline_comments_collector.collect_events()
        if not self.inline_comments_collector.is_empty():
            node.in_line_comments = self.inline_comments_collector.consume()
        return node

    def compose_mapping_children(self, node, key_block_comments):
        key_node = self.compose_node(node, key_block_comments)
        if key_node.tag == Tag.MERGE:
            node.merged = True
        self.block_comments_collector.collect_events()
        value_node = self.compose_node(
            node, self.block_comments_collector.consume())
        node.value.append((key_node, value_node))
