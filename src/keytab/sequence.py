from __future__ import annotations

import enum
import logging
import typing

import msgspec

from .keyboard_consts import COMMAND_NAMES, MODIFIER_NAMES, STATE_NAMES, Command, Key, KeyboardModifier, State, parse_key_sequence

logger = logging.getLogger(__name__)


class Polarity(enum.Enum):
    REQUIRE_PRESENT = enum.auto()
    REQUIRE_ABSENT = enum.auto()


class KeySequence(msgspec.Struct, frozen=True):
    key_code: int = Key.KEY_UNKNOWN
    modifiers: KeyboardModifier = KeyboardModifier.NONE
    modifier_mask: KeyboardModifier = KeyboardModifier.NONE
    state: State = State.NONE
    state_mask: State = State.NONE


def parse_as_modifier(item: str) -> typing.Optional[KeyboardModifier]:
    return MODIFIER_NAMES.get(item.lower())


def parse_as_state_flag(item: str) -> typing.Optional[State]:
    return STATE_NAMES.get(item.lower())


def parse_as_command(text: str) -> typing.Optional[Command]:
    return COMMAND_NAMES.get(text.lower())


def parse_as_key_code(item: str) -> typing.Optional[int]:
    codes = parse_key_sequence(item)
    if not codes:
        return None
    if len(codes) > 1:
        logger.debug("Unhandled key codes in sequence: %r", item)
    return codes[0]


def decode_sequence(text: str, initial: KeySequence = KeySequence()) -> KeySequence:
    """Decode a descriptor such as ``home-anymod-appcukeys``.

    Items are separated by any non-alphanumeric character. A ``+`` before an item means
    the modifier or state must be present, a ``-`` means it must be absent; either way the
    item goes into the mask. Items that are neither a modifier, a state nor a key are
    logged and dropped, so this never fails.
    """
    key_code = initial.key_code
    modifiers = initial.modifiers
    modifier_mask = initial.modifier_mask
    state = initial.state
    state_mask = initial.state_mask

    polarity = Polarity.REQUIRE_PRESENT
    buffer: list[str] = []
    last = len(text) - 1
    for i, ch in enumerate(text):
        end_of_item = True
        if ch.isalnum():
            end_of_item = False
            buffer.append(ch)
        elif i == 0:
            buffer.append(ch)

        if (end_of_item or i == last) and buffer:
            item = "".join(buffer)
            buffer.clear()
            if (modifier := parse_as_modifier(item)) is not None:
                modifier_mask |= modifier
                if polarity is Polarity.REQUIRE_PRESENT:
                    modifiers |= modifier
            elif (flag := parse_as_state_flag(item)) is not None:
                state_mask |= flag
                if polarity is Polarity.REQUIRE_PRESENT:
                    state |= flag
            elif (item_key_code := parse_as_key_code(item)) is not None:
                key_code = item_key_code
            else:
                logger.debug("Unable to parse key binding item: %r", item)

        if ch == "+":
            polarity = Polarity.REQUIRE_PRESENT
        elif ch == "-":
            polarity = Polarity.REQUIRE_ABSENT

    return KeySequence(key_code=key_code, modifiers=modifiers, modifier_mask=modifier_mask, state=state, state_mask=state_mask)
