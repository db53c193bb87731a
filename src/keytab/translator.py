from __future__ import annotations

import logging
import pathlib
import typing

from .commontypes import TranslatorNotFound
from .entry import Entry
from .keyboard_consts import KeyboardModifier, State
from .reader import open_reader
from .settings import Settings

logger = logging.getLogger(__name__)

KEYTAB_SUFFIX = ".keytab"


class KeyboardTranslator:
    """A named set of entries, as loaded from one keytab file."""

    def __init__(self, name: str, description: str = ""):
        self.name = name
        self.description = description
        self._entries: dict[int, list[Entry]] = {}

    def __repr__(self):
        return f"<KeyboardTranslator {self.name!r} ({len(self.entries())} entries)>"

    def add_entry(self, entry: Entry):
        self._entries.setdefault(entry.key_code, []).append(entry)

    def remove_entry(self, entry: Entry):
        bucket = self._entries.get(entry.key_code)
        if bucket is None or entry not in bucket:
            return
        bucket.remove(entry)
        if not bucket:
            del self._entries[entry.key_code]

    def replace_entry(self, existing: Entry, replacement: Entry):
        if not existing.is_null():
            self.remove_entry(existing)
        self.add_entry(replacement)

    def entries(self) -> list[Entry]:
        return [entry for bucket in self._entries.values() for entry in bucket]

    def find_entry(self, key_code: int, modifiers: KeyboardModifier, state: State = State.NONE) -> Entry:
        for entry in self._entries.get(key_code, ()):
            if entry.matches(key_code, modifiers, state):
                return entry
        return Entry()

    @classmethod
    def load(cls, path: pathlib.Path, settings: typing.Optional[Settings] = None) -> KeyboardTranslator:
        with open_reader(path, settings) as reader:
            translator = cls(path.stem, reader.description)
            for entry in reader:
                translator.add_entry(entry)
        logger.debug("Loaded %r from %s", translator, path)
        return translator

    def save(self, dest: pathlib.Path, encoding: str = "utf-8"):
        with dest.open("w", encoding=encoding) as f:
            writer = KeytabWriter(f, encoding=encoding)
            writer.write_header(self.description)
            for entry in self.entries():
                writer.write_entry(entry)


class KeytabWriter:
    def __init__(self, dest: typing.TextIO, encoding: str = "utf-8"):
        self.dest = dest
        self.encoding = encoding

    def write_header(self, description: str):
        self.dest.write(f'keyboard "{description}"\n')

    def write_entry(self, entry: Entry):
        self.dest.write(f"key {entry.condition_to_string()} : {entry.result_to_string(self.encoding)}\n")


def available_translators(settings: Settings) -> list[str]:
    names = set()
    for directory in settings.keytab_dirs:
        if not directory.is_dir():
            continue
        names.update(p.stem for p in directory.glob(f"*{KEYTAB_SUFFIX}"))
    return sorted(names)


def locate_translator(name: str, settings: Settings) -> pathlib.Path:
    "The first ``<name>.keytab`` in the settings' search directories."
    for directory in settings.keytab_dirs:
        candidate = directory / f"{name}{KEYTAB_SUFFIX}"
        if candidate.is_file():
            return candidate
    raise TranslatorNotFound(name, settings.keytab_dirs)


def find_translator(name: str, settings: Settings) -> KeyboardTranslator:
    return KeyboardTranslator.load(locate_translator(name, settings), settings)
