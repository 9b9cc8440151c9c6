"""Serializer: turns a node graph into events for the emitter.

Each document is walked twice.  The first walk finds the nodes reached
more than once (and the nodes that carried an anchor when they were
composed) and names them; the second walk produces the events, writing an
anchor on the first occurrence of a node and an alias on the others.
"""

import logging

from .error import YAMLError
from .events import (
    StreamStartEvent, StreamEndEvent,
    DocumentStartEvent, DocumentEndEvent,
    AliasEvent, ScalarEvent,
    SequenceStartEvent, SequenceEndEvent,
    MappingStartEvent, MappingEndEvent,
)
from .nodes import Tag, ScalarNode, SequenceNode, MappingNode
from .options import DumperOptions

__all__ = ['Serializer', 'SerializerError']

logger = logging.getLogger(__name__)


class SerializerError(YAMLError):
    pass


class Serializer:

    ANCHOR_TEMPLATE = 'id%03d'

    def __init__(self, options=None):
        if options is None:
            options = DumperOptions()
        self.use_encoding = options.encoding
        self.use_explicit_start = options.explicit_start
        self.use_explicit_end = options.explicit_end
        self.use_version = options.version
        self.use_tags = options.tags
        self.anchor_template = options.anchor_template or self.ANCHOR_TEMPLATE
        self.serialize_comments = options.process_comments
        self.serialized_nodes = {}
        self.anchors = {}
        self.last_anchor_id = 0
        self.closed = None

    def open(self):
        if self.closed is None:
            self.emit(StreamStartEvent(encoding=self.use_encoding))
            self.closed = False
        elif self.closed:
            raise SerializerError("serializer is closed")
        else:
            raise SerializerError("serializer is already opened")

    def close(self):
        if self.closed is None:
            raise SerializerError("serializer is not opened")
        elif not self.closed:
            self.emit(StreamEndEvent())
            self.closed = True

    def serialize(self, node):
        if self.closed is None:
            raise SerializerError("serializer is not opened")
        elif self.closed:
            raise SerializerError("serializer is closed")
        self.emit(DocumentStartEvent(explicit=self.use_explicit_start,
                                     version=self.use_version,
                                     tags=self.use_tags))
        self.anchor_node(node)
        self.serialize_node(node)
        self.emit(DocumentEndEvent(explicit=self.use_explicit_end))
        self.serialized_nodes = {}
        self.anchors = {}
        self.last_anchor_id = 0

    def anchor_node(self, node):
        if node in self.anchors:
            if self.anchors[node] is None:
                self.anchors[node] = self.generate_anchor(node)
        else:
            self.anchors[node] = None
            if node.anchor is not None:
                self.anchors[node] = self.generate_anchor(node)
            if isinstance(node, SequenceNode):
                for item in node.value:
                    self.anchor_node(item)
            elif isinstance(node, MappingNode):
                for key, value in node.value:
                    self.anchor_node(key)
                    self.anchor_node(value)

    def generate_anchor(self, node):
        self.last_anchor_id += 1
        anchor = self.anchor_template % self.last_anchor_id
        logger.debug("anchor %r for %r", anchor, node)
        return anchor

    def serialize_node(self, node):
        alias = self.anchors[node]
        if node in self.serialized_nodes:
            self.emit(AliasEvent(alias))
            return
        self.serialized_nodes[node] = True
        self.serialize_comment_lines(node.block_comments)
        if isinstance(node, ScalarNode):
            detected_tag = self.resolve(ScalarNode, node.value, (True, False))
            default_tag = self.resolve(ScalarNode, node.value, (False, True))
            implicit = (node.tag == detected_tag), (node.tag == default_tag)
            self.emit(ScalarEvent(alias, node.tag, implicit, node.value,
                                  style=node.style))
        elif isinstance(node, SequenceNode):
            implicit = (node.tag
                        == self.resolve(SequenceNode, node.value, True))
            self.emit(SequenceStartEvent(alias, node.tag, implicit,
                                         flow_style=node.flow_style))
            for item in node.value:
                self.serialize_node(item)
            self.emit(SequenceEndEvent())
        elif isinstance(node, MappingNode):
            if node.tag == Tag.COMMENT:
                # A document made of comments only.
                self.serialize_comment_lines(node.end_comments)
                return
            implicit = (node.tag
                        == self.resolve(MappingNode, node.value, True))
            self.emit(MappingStartEvent(alias, node.tag, implicit,
                                        flow_style=node.flow_style))
            for key, value in node.value:
                self.serialize_node(key)
                self.serialize_node(value)
            self.emit(MappingEndEvent())
        self.serialize_comment_lines(node.in_line_comments)
        self.serialize_comment_lines(node.end_comments)

    def serialize_comment_lines(self, comment_lines):
        if not self.serialize_comments or not comment_lines:
            return
        for comment_line in comment_lines:
            self.emit(comment_line.to_event())
