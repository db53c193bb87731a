from __future__ import annotations

import contextlib
import io
import logging
import pathlib
import typing

from .entry import Entry
from .keyboard_consts import Command
from .lexer import Token, TokenType, tokenize
from .sequence import decode_sequence, parse_as_command
from .settings import Settings

logger = logging.getLogger(__name__)

TEMPORARY_TITLE = "temporary"


class LineSource(typing.Protocol):
    def readline(self) -> typing.Union[bytes, str]: ...


class KeytabReader:
    """Reads entries from a keytab stream, one line at a time.

    The reader always holds the next entry already decoded, so ``has_next_entry`` is
    accurate without touching the stream. It can only be read forward once.
    """

    def __init__(self, source: LineSource, settings: typing.Optional[Settings] = None):
        if settings is None:
            settings = Settings.default()
        self._source = source
        self._input_encoding = settings.input_encoding
        self._output_encoding = settings.output_encoding
        self._description = ""
        self._next_entry = Entry()
        self._has_next = False
        self._at_end = False

        # the description comes from a title line before the first entry; later titles are ignored
        while (line := self._readline()) is not None:
            tokens = tokenize(line)
            if not tokens:
                continue
            if tokens[0].type is TokenType.TITLE_KEYWORD:
                self._description = tokens[1].text
                break
            if tokens[0].type is TokenType.KEY_KEYWORD:
                self._next_entry = self._make_entry(tokens)
                self._has_next = True
                return
        self._read_next()

    def _readline(self) -> typing.Optional[str]:
        if self._at_end:
            return None
        line = self._source.readline()
        if not line:
            self._at_end = True
            return None
        if isinstance(line, bytes):
            return line.decode(self._input_encoding, errors="replace")
        return line

    def _read_next(self):
        while (line := self._readline()) is not None:
            tokens = tokenize(line)
            if not tokens or tokens[0].type is not TokenType.KEY_KEYWORD:
                continue
            self._next_entry = self._make_entry(tokens)
            self._has_next = True
            return
        self._has_next = False

    def _make_entry(self, tokens: list[Token]) -> Entry:
        sequence_text = tokens[1].text
        sequence = decode_sequence(sequence_text.lower())
        command = Command.NONE
        text = b""
        result = tokens[2]
        if result.type is TokenType.OUTPUT_TEXT:
            text = result.text.encode(self._output_encoding, errors="replace")
        elif result.type is TokenType.COMMAND:
            resolved = parse_as_command(result.text)
            if resolved is None:
                logger.debug("Key %r, command %r not understood.", sequence_text, result.text)
            else:
                command = resolved
        return Entry(
            key_code=sequence.key_code,
            modifiers=sequence.modifiers,
            modifier_mask=sequence.modifier_mask,
            state=sequence.state,
            state_mask=sequence.state_mask,
            command=command,
            text=text,
        )

    @property
    def description(self) -> str:
        return self._description

    def has_next_entry(self) -> bool:
        return self._has_next

    def next_entry(self) -> Entry:
        assert self._has_next, "next_entry() called on an exhausted reader"
        entry = self._next_entry
        self._read_next()
        return entry

    def parse_error(self) -> bool:
        # Problems are only ever logged; there is nothing to report here.
        return False

    def __iter__(self):
        return self

    def __next__(self) -> Entry:
        if not self._has_next:
            raise StopIteration
        return self.next_entry()


@contextlib.contextmanager
def open_reader(path: pathlib.Path, settings: typing.Optional[Settings] = None) -> typing.Iterator[KeytabReader]:
    with open(path, "rb") as source:
        yield KeytabReader(source, settings)


def create_entry(condition: str, result: str, settings: typing.Optional[Settings] = None) -> Entry:
    """Build a single entry as though ``key <condition> : <result>`` had been read from a file.

    ``result`` is a command when it names one, otherwise it is output text.
    """
    if parse_as_command(result) is None:
        result = f'"{result}"'
    document = f'keyboard "{TEMPORARY_TITLE}"\nkey {condition} : {result}'
    reader = KeytabReader(io.StringIO(document), settings)
    if reader.has_next_entry():
        return reader.next_entry()
    return Entry()
