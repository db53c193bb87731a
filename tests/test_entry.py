import pytest

from keytab.entry import Entry, escape, unescape
from keytab.keyboard_consts import Command, Key, KeyboardModifier, State
from keytab.reader import create_entry


@pytest.mark.parametrize(
    "raw,expected",
    (
        (b"\\E[A", b"\x1b[A"),
        (b"\\b\\f\\t\\r\\n", b"\x08\x0c\x09\x0d\x0a"),
        (b"\\x7f", b"\x7f"),
        (b"\\x4", b"\x04"),
        (b"\\x41B", b"AB"),
        (b"\\xzz", b"\\xzz"),
        (b"\\q", b"\\q"),
        (b"trailing\\", b"trailing\\"),
        (b"plain", b"plain"),
    ),
)
def test_unescape(raw, expected):
    assert unescape(raw) == expected


def test_escape():
    assert escape(b"\x1b[A\x7f\x00x") == b"\\E[A\\x7f\\x00x"


def test_escape_high_bytes():
    assert escape(b"\x80\xe9\xff") == b"\\x80\\xe9\\xff"
    assert unescape(escape(b"caf\xc3\xa9")) == b"caf\xc3\xa9"


def test_null_entry():
    assert Entry().is_null()
    assert not Entry(key_code=Key.KEY_A).is_null()


def test_text_is_kept_as_written():
    entry = create_entry("Up", "\\E[A")
    assert entry.text == b"\\E[A"
    assert entry.unescaped_text() == b"\x1b[A"
    assert entry.escaped_text() == b"\\E[A"


@pytest.mark.parametrize(
    "modifiers,expected",
    (
        (KeyboardModifier.NONE, b"\x1b[1;1A"),
        (KeyboardModifier.SHIFT, b"\x1b[1;2A"),
        (KeyboardModifier.ALT, b"\x1b[1;3A"),
        (KeyboardModifier.CONTROL, b"\x1b[1;5A"),
        (KeyboardModifier.CONTROL | KeyboardModifier.SHIFT, b"\x1b[1;6A"),
    ),
)
def test_text_for_expands_wildcards(modifiers, expected):
    entry = create_entry("Up+AnyMod", "\\E[1;*A")
    assert entry.text_for(modifiers) == expected


def test_matches_modifiers():
    entry = create_entry("Up+Shift", "\\E[1;2A")
    assert entry.matches(Key.KEY_UP, KeyboardModifier.SHIFT, State.NONE)
    assert entry.matches(Key.KEY_UP, KeyboardModifier.SHIFT | KeyboardModifier.CONTROL, State.NONE)
    assert not entry.matches(Key.KEY_UP, KeyboardModifier.NONE, State.NONE)
    assert not entry.matches(Key.KEY_DOWN, KeyboardModifier.SHIFT, State.NONE)


def test_matches_state():
    entry = create_entry("Left-AppCuKeys", "\\E[D")
    assert entry.matches(Key.KEY_LEFT, KeyboardModifier.NONE, State.NONE)
    assert entry.matches(Key.KEY_LEFT, KeyboardModifier.NONE, State.ANSI)
    assert not entry.matches(Key.KEY_LEFT, KeyboardModifier.NONE, State.CURSOR_KEYS)


def test_matches_any_modifier():
    without = create_entry("Home-AnyMod", "\\E[H")
    assert without.matches(Key.KEY_HOME, KeyboardModifier.NONE, State.NONE)
    assert without.matches(Key.KEY_HOME, KeyboardModifier.KEYPAD, State.NONE)
    assert not without.matches(Key.KEY_HOME, KeyboardModifier.CONTROL, State.NONE)

    with_any = create_entry("Home+AnyMod", "\\E[1;*H")
    assert with_any.matches(Key.KEY_HOME, KeyboardModifier.CONTROL, State.NONE)
    assert not with_any.matches(Key.KEY_HOME, KeyboardModifier.NONE, State.NONE)
    assert not with_any.matches(Key.KEY_HOME, KeyboardModifier.KEYPAD, State.NONE)


@pytest.mark.parametrize(
    "condition,expected",
    (
        ("Up+Shift", "Up+Shift"),
        ("home-anymod-appcukeys", "Home-AppCursorKeys-AnyModifier"),
        ("pgdown-control+alt", "PgDown-Ctrl+Alt"),
        ("F3+keypad-appscreen+newline", "F3+KeyPad-AppScreen+NewLine"),
        ("q", "Q"),
    ),
)
def test_condition_to_string(condition, expected):
    assert create_entry(condition, "x").condition_to_string() == expected


def test_result_to_string():
    assert create_entry("PgUp+Shift", "scrollPageUp").result_to_string() == "scrollPageUp"
    assert create_entry("Up", "\\E[A").result_to_string() == '"\\E[A"'
    assert Entry(key_code=Key.KEY_TAB).result_to_string() == '""'
    assert Entry(command=Command.ERASE).result_to_string() == "erase"
