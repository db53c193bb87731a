from __future__ import annotations

import msgspec

from .keyboard_consts import COMMAND_SPELLINGS, MODIFIER_SPELLINGS, STATE_SPELLINGS, Command, KeyboardModifier, State, key_name

ESCAPES = {
    ord("E"): 27,
    ord("b"): 8,
    ord("f"): 12,
    ord("t"): 9,
    ord("r"): 13,
    ord("n"): 10,
}
REVERSE_ESCAPES = {v: b"\\" + bytes([k]) for k, v in ESCAPES.items()}
HEX_DIGITS = frozenset(b"0123456789abcdefABCDEF")


def unescape(data: bytes) -> bytes:
    result = bytearray()
    i = 0
    while i < len(data):
        ch = data[i]
        if ch == ord("\\") and i + 1 < len(data):
            following = data[i + 1]
            if following in ESCAPES:
                result.append(ESCAPES[following])
                i += 2
                continue
            if following == ord("x"):
                digits = data[i + 2 : i + 4]
                hexlen = 0
                while hexlen < len(digits) and digits[hexlen] in HEX_DIGITS:
                    hexlen += 1
                if hexlen:
                    result.append(int(digits[:hexlen], 16))
                    i += 2 + hexlen
                    continue
        result.append(ch)
        i += 1
    return bytes(result)


def escape(data: bytes) -> bytes:
    result = bytearray()
    for ch in data:
        if ch in REVERSE_ESCAPES:
            result += REVERSE_ESCAPES[ch]
        elif ch < 0x20 or ch >= 0x7F:
            result += b"\\x%02x" % ch
        else:
            result.append(ch)
    return bytes(result)


class Entry(msgspec.Struct, frozen=True):
    """One binding from a keytab file.

    ``text`` holds the output exactly as written between the quotes, escapes and all;
    use ``unescaped_text`` for the bytes a terminal should actually send.
    """

    key_code: int = 0
    modifiers: KeyboardModifier = KeyboardModifier.NONE
    modifier_mask: KeyboardModifier = KeyboardModifier.NONE
    state: State = State.NONE
    state_mask: State = State.NONE
    command: Command = Command.NONE
    text: bytes = b""

    def is_null(self) -> bool:
        return self == Entry()

    def unescaped_text(self) -> bytes:
        return unescape(self.text)

    def escaped_text(self) -> bytes:
        return escape(self.unescaped_text())

    def text_for(self, modifiers: KeyboardModifier) -> bytes:
        "Unescaped text with each '*' wildcard replaced by the xterm modifier parameter."
        value = 1
        value += bool(modifiers & KeyboardModifier.SHIFT)
        value += bool(modifiers & KeyboardModifier.ALT) << 1
        value += bool(modifiers & KeyboardModifier.CONTROL) << 2
        return self.unescaped_text().replace(b"*", str(value).encode("ascii"))

    def matches(self, key_code: int, modifiers: KeyboardModifier, state: State) -> bool:
        if self.key_code != key_code:
            return False
        if (modifiers & self.modifier_mask) != (self.modifiers & self.modifier_mask):
            return False

        any_modifiers_set = (modifiers & ~KeyboardModifier.KEYPAD) != KeyboardModifier.NONE
        if any_modifiers_set:
            state |= State.ANY_MODIFIER
        if (state & self.state_mask) != (self.state & self.state_mask):
            return False

        if self.state_mask & State.ANY_MODIFIER:
            want_any_modifier = bool(self.state & State.ANY_MODIFIER)
            if want_any_modifier != any_modifiers_set:
                return False
        return True

    def condition_to_string(self) -> str:
        parts = [key_name(self.key_code)]
        for modifier, spellings in MODIFIER_SPELLINGS.items():
            if self.modifier_mask & modifier:
                parts.append(("+" if self.modifiers & modifier else "-") + spellings[0])
        for flag, spellings in STATE_SPELLINGS.items():
            if self.state_mask & flag:
                parts.append(("+" if self.state & flag else "-") + spellings[0])
        return "".join(parts)

    def result_to_string(self, encoding: str = "utf-8") -> str:
        if self.text or self.command not in COMMAND_SPELLINGS:
            return '"' + self.escaped_text().decode(encoding, errors="replace") + '"'
        return COMMAND_SPELLINGS[self.command]
