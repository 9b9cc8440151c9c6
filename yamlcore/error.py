"""Positions in the input and the errors that point at them.

Every stage raises a subclass of YAMLError; the ones that can say where
the trouble is derive from MarkedYAMLError and carry Marks.
"""

__all__ = ['Mark', 'YAMLError', 'MarkedYAMLError']

# Characters that end the line quoted under an error message.
SNIPPET_BREAKS = '\0\r\n\x85\u2028\u2029'


class Mark:
    """A position in an input stream.

    ``line`` and ``column`` count from zero; messages print them from one.
    Marks taken while reading an in-memory string also keep that string
    and the pointer into it, so the offending line can be quoted.
    """

    def __init__(self, name, index, line, column, buffer=None, pointer=None):
        self.name = name
        self.index = index
        self.line = line
        self.column = column
        self.buffer = buffer
        self.pointer = pointer

    def same_position(self, other):
        return other is not None and (self.name, self.line, self.column) \
            == (other.name, other.line, other.column)

    def source_line(self, max_length=75):
        """The line holding the mark and the caret offset into it.

        Long lines are cut around the pointer and marked with ' ... '.
        """
        start = end = self.pointer
        while start > 0 and self.buffer[start - 1] not in SNIPPET_BREAKS:
            start -= 1
        while end < len(self.buffer) and self.buffer[end] not in SNIPPET_BREAKS:
            end += 1
        half = max_length // 2 - 1
        head = tail = ''
        if self.pointer - start > half:
            head, start = ' ... ', self.pointer - half + 5
        if end - self.pointer > half:
            tail, end = ' ... ', self.pointer + half - 5
        return head + self.buffer[start:end] + tail, \
            len(head) + self.pointer - start

    def get_snippet(self, indent=4, max_length=75):
        if self.buffer is None:
            return None
        text, offset = self.source_line(max_length)
        return '%s%s\n%s^' % (' ' * indent, text, ' ' * (indent + offset))

    def __str__(self):
        where = '  in "%s", line %d, column %d' \
            % (self.name, self.line + 1, self.column + 1)
        snippet = self.get_snippet()
        if snippet is None:
            return where
        return where + ':\n' + snippet

    def __repr__(self):
        return '%s(%r, line=%d, column=%d)' % (
            self.__class__.__name__, self.name, self.line, self.column)


class YAMLError(Exception):
    pass


class MarkedYAMLError(YAMLError):
    """An error with a problem and, optionally, the context it arose in.

    The message lists the context, its mark, the problem, its mark and a
    note, skipping whatever is missing.  A context mark at the same place
    as the problem mark is printed once.
    """

    def __init__(self, context=None, context_mark=None,
                 problem=None, problem_mark=None, note=None):
        super().__init__(context, context_mark, problem, problem_mark, note)
        self.context = context
        self.context_mark = context_mark
        self.problem = problem
        self.problem_mark = problem_mark
        self.note = note

    def message_parts(self):
        if self.context is not None:
            yield self.context
        if self.context_mark is not None and not (
                self.problem is not None
                and self.context_mark.same_position(self.problem_mark)):
            yield str(self.context_mark)
        for part in (self.problem, self.problem_mark, self.note):
            if part is not None:
                yield str(part)

    def __str__(self):
        return '\n'.join(self.message_parts())
