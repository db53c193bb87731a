"""Split single keytab lines into tokens.

Each line of a keytab file is one of:

    keyboard "name"
    key KeySequence : "characters"
    key KeySequence : CommandName

plus blank lines and ``#`` comments.
"""
from __future__ import annotations

import enum
import logging
import re

import msgspec

logger = logging.getLogger(__name__)

TITLE_PREFIX = "keyboard"
# key Enter-NewLine                 : "\r"
# key Home        -AnyMod-AppCuKeys : "\E[H"
# key Up+Shift                      : scrollLineUp
KEY_LINE_MATCHER = re.compile(r'key\s+(.+?)\s*:\s*("(.*)"|\w+)')


class TokenType(enum.Enum):
    TITLE_KEYWORD = enum.auto()
    TITLE_TEXT = enum.auto()
    KEY_KEYWORD = enum.auto()
    KEY_SEQUENCE = enum.auto()
    COMMAND = enum.auto()
    OUTPUT_TEXT = enum.auto()


class Token(msgspec.Struct, frozen=True):
    type: TokenType
    text: str = ""


def strip_comment(line: str) -> str:
    in_quotes = False
    comment_pos = -1
    # No early exit: the leftmost unquoted '#' wins. Quote parity is the same from either end.
    for i in reversed(range(len(line))):
        ch = line[i]
        if ch == '"':
            in_quotes = not in_quotes
        elif ch == "#" and not in_quotes:
            comment_pos = i
    if comment_pos != -1:
        return line[:comment_pos]
    return line


def simplify(text: str) -> str:
    return " ".join(text.split())


def tokenize(line: str) -> list[Token]:
    text = simplify(strip_comment(line))
    if not text:
        return []

    if text.startswith(TITLE_PREFIX):
        title = simplify(text.removeprefix(TITLE_PREFIX).replace('"', ""))
        if not title:
            return []
        return [Token(TokenType.TITLE_KEYWORD), Token(TokenType.TITLE_TEXT, title)]

    match = KEY_LINE_MATCHER.match(text)
    if match is None:
        logger.debug("Line in keyboard translator file could not be parsed: %r", text)
        return []

    tokens = [Token(TokenType.KEY_KEYWORD), Token(TokenType.KEY_SEQUENCE, match.group(1).replace(" ", ""))]
    output_text = match.group(3)
    if output_text is not None:
        tokens.append(Token(TokenType.OUTPUT_TEXT, output_text))
    else:
        tokens.append(Token(TokenType.COMMAND, match.group(2)))
    return tokens
