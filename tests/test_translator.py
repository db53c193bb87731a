import pytest

from keytab.commontypes import TranslatorNotFound
from keytab.entry import Entry
from keytab.keyboard_consts import Command, Key, KeyboardModifier, State
from keytab.reader import create_entry
from keytab.settings import settings_converter, Settings
from keytab.translator import KeyboardTranslator, available_translators, find_translator

LAYOUT = """\
keyboard "Test Layout"

key Up    -Shift-AnyMod  : "\\E[A"
key Up    +Shift         : scrollLineUp
key Up    -Shift+AnyMod  : "\\E[1;*A"
key Enter -NewLine       : "\\r"
key Enter +NewLine       : "\\r\\n"
key Backspace            : "\\x7f"
"""


@pytest.fixture
def layout_dir(tmp_path):
    (tmp_path / "test.keytab").write_text(LAYOUT)
    (tmp_path / "other.keytab").write_text('keyboard "Other"\nkey A : "a"\n')
    (tmp_path / "notes.txt").write_text("not a layout")
    return tmp_path


@pytest.fixture
def settings(layout_dir):
    return settings_converter.structure({"keytab_dirs": [str(layout_dir)]}, Settings)


def test_load(layout_dir):
    translator = KeyboardTranslator.load(layout_dir / "test.keytab")
    assert translator.name == "test"
    assert translator.description == "Test Layout"
    assert len(translator.entries()) == 6


def test_find_entry(layout_dir):
    translator = KeyboardTranslator.load(layout_dir / "test.keytab")
    assert translator.find_entry(Key.KEY_UP, KeyboardModifier.NONE).text == b"\\E[A"
    assert translator.find_entry(Key.KEY_UP, KeyboardModifier.SHIFT).command is Command.SCROLL_LINE_UP
    assert translator.find_entry(Key.KEY_UP, KeyboardModifier.CONTROL).text == b"\\E[1;*A"
    assert translator.find_entry(Key.KEY_ENTER, KeyboardModifier.NONE, State.NEW_LINE).text == b"\\r\\n"
    assert translator.find_entry(Key.KEY_ENTER, KeyboardModifier.NONE).text == b"\\r"
    assert translator.find_entry(Key.KEY_F1, KeyboardModifier.NONE).is_null()


def test_add_remove_replace():
    translator = KeyboardTranslator("scratch")
    first = create_entry("F1", "one")
    second = create_entry("F1+Shift", "two")
    translator.add_entry(first)
    translator.add_entry(second)
    assert translator.entries() == [first, second]

    replacement = create_entry("F1-Shift", "uno")
    translator.replace_entry(first, replacement)
    assert translator.entries() == [second, replacement]

    translator.remove_entry(second)
    translator.remove_entry(second)
    assert translator.entries() == [replacement]

    translator.replace_entry(Entry(), create_entry("F2", "two"))
    assert len(translator.entries()) == 2


def test_save_and_reload(layout_dir, tmp_path):
    translator = KeyboardTranslator.load(layout_dir / "test.keytab")
    translator.add_entry(create_entry("A+Alt", "\xe9"))
    translator.add_entry(Entry(key_code=Key.KEY_B, text=b"\xe9"))
    dest = tmp_path / "saved.keytab"
    translator.save(dest)
    text = dest.read_text()
    assert text.startswith('keyboard "Test Layout"\n')
    assert "key Up+Shift : scrollLineUp\n" in text
    assert 'key Backspace : "\\x7f"\n' in text

    reloaded = KeyboardTranslator.load(dest)
    assert reloaded.description == translator.description
    assert 'key A+Alt : "\\xc3\\xa9"\n' in text
    assert 'key B : "\\xe9"\n' in text
    assert reloaded.entries()[:6] == translator.entries()[:6]
    assert [(e.condition_to_string(), e.unescaped_text()) for e in reloaded.entries()] == [
        (e.condition_to_string(), e.unescaped_text()) for e in translator.entries()
    ]
    assert reloaded.find_entry(Key.KEY_B, KeyboardModifier.NONE).unescaped_text() == b"\xe9"


def test_available_translators(settings):
    assert available_translators(settings) == ["other", "test"]


def test_available_translators_skips_missing_dirs(tmp_path):
    settings = settings_converter.structure({"keytab_dirs": [str(tmp_path / "missing")]}, Settings)
    assert available_translators(settings) == []


def test_find_translator(settings):
    translator = find_translator("other", settings)
    assert translator.description == "Other"
    assert translator.find_entry(Key.KEY_A, KeyboardModifier.NONE).text == b"a"


def test_find_translator_missing(settings):
    with pytest.raises(TranslatorNotFound) as excinfo:
        find_translator("nope", settings)
    assert excinfo.value.name == "nope"
