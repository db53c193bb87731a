# SPDX-FileCopyrightText: 2021 Rose Davidson <rose@metaclassical.com>
#
# SPDX-License-Identifier: GPL-3.0-or-later
import enum
import typing

# Key codes use the usual GUI toolkit numbering: printable keys are the upper-case
# Latin-1 code point, special keys start at 0x01000000.
SPECIAL_KEY_BASE = 0x01000000


class Key(enum.IntEnum):
    KEY_UNKNOWN = 0x01FFFFFF

    KEY_ESCAPE = 0x01000000
    KEY_TAB = 0x01000001
    KEY_BACKTAB = 0x01000002
    KEY_BACKSPACE = 0x01000003
    KEY_RETURN = 0x01000004
    KEY_ENTER = 0x01000005
    KEY_INSERT = 0x01000006
    KEY_DELETE = 0x01000007
    KEY_PAUSE = 0x01000008
    KEY_PRINT = 0x01000009
    KEY_SYSREQ = 0x0100000A
    KEY_CLEAR = 0x0100000B
    KEY_HOME = 0x01000010
    KEY_END = 0x01000011
    KEY_LEFT = 0x01000012
    KEY_UP = 0x01000013
    KEY_RIGHT = 0x01000014
    KEY_DOWN = 0x01000015
    KEY_PAGEUP = 0x01000016
    KEY_PAGEDOWN = 0x01000017
    KEY_SHIFT = 0x01000020
    KEY_CONTROL = 0x01000021
    KEY_META = 0x01000022
    KEY_ALT = 0x01000023
    KEY_CAPSLOCK = 0x01000024
    KEY_NUMLOCK = 0x01000025
    KEY_SCROLLLOCK = 0x01000026
    KEY_F1 = 0x01000030
    KEY_F2 = 0x01000031
    KEY_F3 = 0x01000032
    KEY_F4 = 0x01000033
    KEY_F5 = 0x01000034
    KEY_F6 = 0x01000035
    KEY_F7 = 0x01000036
    KEY_F8 = 0x01000037
    KEY_F9 = 0x01000038
    KEY_F10 = 0x01000039
    KEY_F11 = 0x0100003A
    KEY_F12 = 0x0100003B
    KEY_F13 = 0x0100003C
    KEY_F14 = 0x0100003D
    KEY_F15 = 0x0100003E
    KEY_F16 = 0x0100003F
    KEY_F17 = 0x01000040
    KEY_F18 = 0x01000041
    KEY_F19 = 0x01000042
    KEY_F20 = 0x01000043
    KEY_F21 = 0x01000044
    KEY_F22 = 0x01000045
    KEY_F23 = 0x01000046
    KEY_F24 = 0x01000047
    KEY_F25 = 0x01000048
    KEY_F26 = 0x01000049
    KEY_F27 = 0x0100004A
    KEY_F28 = 0x0100004B
    KEY_F29 = 0x0100004C
    KEY_F30 = 0x0100004D
    KEY_F31 = 0x0100004E
    KEY_F32 = 0x0100004F
    KEY_F33 = 0x01000050
    KEY_F34 = 0x01000051
    KEY_F35 = 0x01000052
    KEY_SUPER_L = 0x01000053
    KEY_SUPER_R = 0x01000054
    KEY_MENU = 0x01000055
    KEY_HYPER_L = 0x01000056
    KEY_HYPER_R = 0x01000057
    KEY_HELP = 0x01000058

    KEY_SPACE = 0x20
    KEY_EXCLAM = 0x21
    KEY_QUOTEDBL = 0x22
    KEY_NUMBERSIGN = 0x23
    KEY_DOLLAR = 0x24
    KEY_PERCENT = 0x25
    KEY_AMPERSAND = 0x26
    KEY_APOSTROPHE = 0x27
    KEY_PARENLEFT = 0x28
    KEY_PARENRIGHT = 0x29
    KEY_ASTERISK = 0x2A
    KEY_PLUS = 0x2B
    KEY_COMMA = 0x2C
    KEY_MINUS = 0x2D
    KEY_PERIOD = 0x2E
    KEY_SLASH = 0x2F
    KEY_0 = 0x30
    KEY_1 = 0x31
    KEY_2 = 0x32
    KEY_3 = 0x33
    KEY_4 = 0x34
    KEY_5 = 0x35
    KEY_6 = 0x36
    KEY_7 = 0x37
    KEY_8 = 0x38
    KEY_9 = 0x39
    KEY_COLON = 0x3A
    KEY_SEMICOLON = 0x3B
    KEY_LESS = 0x3C
    KEY_EQUAL = 0x3D
    KEY_GREATER = 0x3E
    KEY_QUESTION = 0x3F
    KEY_AT = 0x40
    KEY_A = 0x41
    KEY_B = 0x42
    KEY_C = 0x43
    KEY_D = 0x44
    KEY_E = 0x45
    KEY_F = 0x46
    KEY_G = 0x47
    KEY_H = 0x48
    KEY_I = 0x49
    KEY_J = 0x4A
    KEY_K = 0x4B
    KEY_L = 0x4C
    KEY_M = 0x4D
    KEY_N = 0x4E
    KEY_O = 0x4F
    KEY_P = 0x50
    KEY_Q = 0x51
    KEY_R = 0x52
    KEY_S = 0x53
    KEY_T = 0x54
    KEY_U = 0x55
    KEY_V = 0x56
    KEY_W = 0x57
    KEY_X = 0x58
    KEY_Y = 0x59
    KEY_Z = 0x5A
    KEY_BRACKETLEFT = 0x5B
    KEY_BACKSLASH = 0x5C
    KEY_BRACKETRIGHT = 0x5D
    KEY_ASCIICIRCUM = 0x5E
    KEY_UNDERSCORE = 0x5F
    KEY_QUOTELEFT = 0x60
    KEY_BRACELEFT = 0x7B
    KEY_BAR = 0x7C
    KEY_BRACERIGHT = 0x7D
    KEY_ASCIITILDE = 0x7E


class KeyboardModifier(enum.IntFlag):
    NONE = 0
    SHIFT = 0x02000000
    CONTROL = 0x04000000
    ALT = 0x08000000
    META = 0x10000000
    KEYPAD = 0x20000000


class State(enum.IntFlag):
    NONE = 0
    # Terminal is in new line mode: Enter sends CR LF.
    NEW_LINE = 1
    # Terminal is in ANSI mode, as opposed to VT52.
    ANSI = 2
    # Cursor keys send application sequences.
    CURSOR_KEYS = 4
    # The alternate screen (vim, less, screen, ...) is active.
    ALTERNATE_SCREEN = 8
    # At least one non-keypad modifier is held.
    ANY_MODIFIER = 16
    # Keypad keys send application sequences.
    APPLICATION_KEYPAD = 32


class Command(enum.IntEnum):
    NONE = 0
    SEND = 1
    SCROLL_PAGE_UP = 2
    SCROLL_PAGE_DOWN = 4
    SCROLL_LINE_UP = 8
    SCROLL_LINE_DOWN = 16
    SCROLL_LOCK = 32
    SCROLL_UP_TO_TOP = 64
    SCROLL_DOWN_TO_BOTTOM = 128
    SCROLL_PROMPT_UP = 256
    SCROLL_PROMPT_DOWN = 512
    ERASE = 1024


# Keytab spellings. The first spelling for each variant is the one we write back out.
MODIFIER_SPELLINGS: dict[KeyboardModifier, tuple[str, ...]] = {
    KeyboardModifier.SHIFT: ("Shift",),
    KeyboardModifier.CONTROL: ("Ctrl", "Control"),
    KeyboardModifier.ALT: ("Alt",),
    KeyboardModifier.META: ("Meta",),
    KeyboardModifier.KEYPAD: ("KeyPad",),
}

STATE_SPELLINGS: dict[State, tuple[str, ...]] = {
    State.ALTERNATE_SCREEN: ("AppScreen",),
    State.NEW_LINE: ("NewLine",),
    State.ANSI: ("Ansi",),
    State.CURSOR_KEYS: ("AppCursorKeys", "AppCuKeys"),
    State.ANY_MODIFIER: ("AnyModifier", "AnyMod"),
    State.APPLICATION_KEYPAD: ("AppKeypad",),
}

COMMAND_SPELLINGS: dict[Command, str] = {
    Command.ERASE: "erase",
    Command.SCROLL_PAGE_UP: "scrollPageUp",
    Command.SCROLL_PAGE_DOWN: "scrollPageDown",
    Command.SCROLL_LINE_UP: "scrollLineUp",
    Command.SCROLL_LINE_DOWN: "scrollLineDown",
    Command.SCROLL_UP_TO_TOP: "scrollUpToTop",
    Command.SCROLL_DOWN_TO_BOTTOM: "scrollDownToBottom",
    Command.SCROLL_PROMPT_UP: "scrollPromptUp",
    Command.SCROLL_PROMPT_DOWN: "scrollPromptDown",
}

MODIFIER_NAMES: dict[str, KeyboardModifier] = {
    spelling.lower(): modifier for modifier, spellings in MODIFIER_SPELLINGS.items() for spelling in spellings
}
STATE_NAMES: dict[str, State] = {spelling.lower(): state for state, spellings in STATE_SPELLINGS.items() for spelling in spellings}
COMMAND_NAMES: dict[str, Command] = {spelling.lower(): command for command, spelling in COMMAND_SPELLINGS.items()}

# Special keys have short names in keytab files; everything else is spelled like the enum member.
KEY_SPELLINGS: dict[Key, str] = {
    Key.KEY_ESCAPE: "Esc",
    Key.KEY_TAB: "Tab",
    Key.KEY_BACKTAB: "Backtab",
    Key.KEY_BACKSPACE: "Backspace",
    Key.KEY_RETURN: "Return",
    Key.KEY_ENTER: "Enter",
    Key.KEY_INSERT: "Ins",
    Key.KEY_DELETE: "Del",
    Key.KEY_PAUSE: "Pause",
    Key.KEY_PRINT: "Print",
    Key.KEY_SYSREQ: "SysReq",
    Key.KEY_CLEAR: "Clear",
    Key.KEY_HOME: "Home",
    Key.KEY_END: "End",
    Key.KEY_LEFT: "Left",
    Key.KEY_UP: "Up",
    Key.KEY_RIGHT: "Right",
    Key.KEY_DOWN: "Down",
    Key.KEY_PAGEUP: "PgUp",
    Key.KEY_PAGEDOWN: "PgDown",
    Key.KEY_CAPSLOCK: "CapsLock",
    Key.KEY_NUMLOCK: "NumLock",
    Key.KEY_SCROLLLOCK: "scrollLock",
    Key.KEY_SUPER_L: "SuperL",
    Key.KEY_SUPER_R: "SuperR",
    Key.KEY_MENU: "Menu",
    Key.KEY_HYPER_L: "HyperL",
    Key.KEY_HYPER_R: "HyperR",
    Key.KEY_HELP: "Help",
    Key.KEY_SPACE: "Space",
}

KEY_NAMES: dict[str, Key] = {member.name.removeprefix("KEY_").lower(): member for member in Key if member is not Key.KEY_UNKNOWN}
KEY_NAMES.update({spelling.lower(): key for key, spelling in KEY_SPELLINGS.items()})


def key_name(key_code: int) -> str:
    "The spelling used when writing a key code back into a keytab file."
    try:
        key = Key(key_code)
    except ValueError:
        return chr(key_code) if 0 < key_code < SPECIAL_KEY_BASE else f"0x{key_code:x}"
    if key in KEY_SPELLINGS:
        return KEY_SPELLINGS[key]
    if key_code < SPECIAL_KEY_BASE and chr(key_code).isalnum():
        return chr(key_code)
    return key.name.removeprefix("KEY_").capitalize()


def _parse_key_unit(unit: str) -> typing.Optional[int]:
    if len(unit) == 1:
        upper = unit.upper()
        return ord(upper if len(upper) == 1 else unit)
    return KEY_NAMES.get(unit.lower())


def parse_key_sequence(text: str) -> tuple[int, ...]:
    """Resolve a key name to key codes.

    A name may hold several comma-separated keys ("a,b"); a lone "," is the comma key.
    Returns an empty tuple when any part is unknown.
    """
    if text == ",":
        return (Key.KEY_COMMA,)
    codes = []
    for unit in text.split(","):
        unit = unit.strip()
        code = _parse_key_unit(unit) if unit else None
        if code is None:
            return ()
        codes.append(code)
    return tuple(codes)
