"""Character reader.

Reader(stream) accepts a str, a bytes object or a file-like object (text
or binary).  Byte input is decoded according to its byte order mark:
UTF-32 and UTF-16 in either byte order are recognised, anything else is
read as UTF-8.

Reader methods:
    peek(index=0)   - the character ``index`` positions ahead ('\\0' at EOF)
    prefix(length)  - the next ``length`` characters as a string
    forward(length) - move the pointer, keeping line and column up to date
    get_mark()      - a Mark for the current position
"""

import codecs
import re

from .error import YAMLError, Mark

__all__ = ['Reader', 'ReaderError']


class ReaderError(YAMLError):
    """A character could not be decoded or is not allowed in YAML."""

    def __init__(self, name, position, character, encoding, reason):
        super().__init__(name, position, character, encoding, reason)
        self.name = name
        self.character = character
        self.position = position
        self.encoding = encoding
        self.reason = reason

    def __str__(self):
        if isinstance(self.character, bytes):
            return "'%s' codec can't decode byte #x%02x: %s\n" \
                   "  in \"%s\", position %d" \
                   % (self.encoding, ord(self.character), self.reason,
                      self.name, self.position)
        elif isinstance(self.character, int) and self.encoding != 'unicode':
            return "'%s' codec can't decode byte #x%02x: %s\n" \
                   "  in \"%s\", position %d" \
                   % (self.encoding, self.character, self.reason,
                      self.name, self.position)
        else:
            return "unacceptable character #x%04x: %s\n" \
                   "  in \"%s\", position %d" \
                   % (self.character, self.reason,
                      self.name, self.position)


class Reader:
    """Decodes the input and tracks the current position."""

    NON_PRINTABLE = re.compile(
        '[^\x09\x0A\x0D\x20-\x7E\x85\xA0-\uD7FF\uE000-\uFFFD\U00010000-\U0010ffff]')

    # Checked longest first: the UTF-32 LE mark starts with the UTF-16 LE one.
    BOMS = (
        (codecs.BOM_UTF32_LE, codecs.utf_32_le_decode, 'utf-32-le'),
        (codecs.BOM_UTF32_BE, codecs.utf_32_be_decode, 'utf-32-be'),
        (codecs.BOM_UTF16_LE, codecs.utf_16_le_decode, 'utf-16-le'),
        (codecs.BOM_UTF16_BE, codecs.utf_16_be_decode, 'utf-16-be'),
    )

    CHUNK_SIZE = 4096

    def __init__(self, stream):
        self.name = None
        self.stream = None
        self.stream_pointer = 0
        self.eof = True
        self.buffer = ''
        self.pointer = 0
        self.raw_buffer = None
        self.raw_decode = None
        self.encoding = None
        self.index = 0
        self.line = 0
        self.column = 0
        if isinstance(stream, str):
            self.name = "<unicode string>"
            self.check_printable(stream)
            self.buffer = stream + '\0'
        elif isinstance(stream, (bytes, bytearray)):
            self.name = "<byte string>"
            self.raw_buffer = bytes(stream)
            self.determine_encoding()
        else:
            self.stream = stream
            self.name = getattr(stream, 'name', "<file>")
            self.eof = False
            self.raw_buffer = None
            self.determine_encoding()

    def peek(self, index=0):
        if self.pointer + index >= len(self.buffer):
            self.update(index + 1)
            if self.pointer + index >= len(self.buffer):
                return '\0'
        return self.buffer[self.pointer + index]

    def prefix(self, length=1):
        if self.pointer + length >= len(self.buffer):
            self.update(length)
        return self.buffer[self.pointer:self.pointer + length]

    def prefix_forward(self, length=1):
        data = self.prefix(length)
        self.forward(len(data))
        return data

    def forward(self, length=1):
        if self.pointer + length + 1 >= len(self.buffer):
            self.update(length + 1)
        while length and self.pointer < len(self.buffer):
            ch = self.buffer[self.pointer]
            self.pointer += 1
            self.index += 1
            if ch in '\n\x85\u2028\u2029' \
                    or (ch == '\r' and self.peek() != '\n'):
                self.line += 1
                self.column = 0
            elif ch != '\uFEFF':
                self.column += 1
            length -= 1

    def get_mark(self):
        if self.stream is None:
            return Mark(self.name, self.index, self.line, self.column,
                        self.buffer, self.pointer)
        else:
            return Mark(self.name, self.index, self.line, self.column,
                        None, None)

    def determine_encoding(self):
        while not self.eof and (self.raw_buffer is None or len(self.raw_buffer) < 4):
            self.update_raw()
        if isinstance(self.raw_buffer, bytes):
            for bom, decode, encoding in self.BOMS:
                if self.raw_buffer.startswith(bom):
                    self.raw_decode = decode
                    self.encoding = encoding
                    break
            else:
                self.raw_decode = codecs.utf_8_decode
                self.encoding = 'utf-8'
        self.update(1)

    @classmethod
    def is_printable(cls, data):
        return cls.NON_PRINTABLE.search(data) is None

    def check_printable(self, data):
        match = self.NON_PRINTABLE.search(data)
        if match:
            character = match.group()
            position = self.index + (len(self.buffer) - self.pointer) + match.start()
            raise ReaderError(self.name, position, ord(character),
                              'unicode', "special characters are not allowed")

    def update(self, length):
        if self.raw_buffer is None:
            return
        self.buffer = self.buffer[self.pointer:]
        self.pointer = 0
        while len(self.buffer) < length:
            if not self.eof:
                self.update_raw()
            if self.raw_decode is not None:
                try:
                    data, converted = self.raw_decode(self.raw_buffer,
                                                      'strict', self.eof)
                except UnicodeDecodeError as exc:
                    character = self.raw_buffer[exc.start]
                    if self.stream is not None:
                        position = self.stream_pointer - len(self.raw_buffer) + exc.start
                    else:
                        position = exc.start
                    raise ReaderError(self.name, position, character,
                                      exc.encoding, exc.reason) from exc
            else:
                data = self.raw_buffer
                converted = len(data)
            self.check_printable(data)
            self.buffer += data
            self.raw_buffer = self.raw_buffer[converted:]
            if self.eof:
                self.buffer += '\0'
                self.raw_buffer = None
                break

    def update_raw(self, size=None):
        data = self.stream.read(size or self.CHUNK_SIZE)
        if self.raw_buffer is None:
            self.raw_buffer = data
        else:
            self.raw_buffer += data
        self.stream_pointer += len(data)
        if not data:
            self.eof = True
