import argparse
import logging
import pathlib

import msgspec

from .commontypes import TranslatorNotFound
from .entry import Entry
from .keyboard_consts import Command, key_name
from .reader import create_entry, open_reader
from .settings import Settings
from .translator import available_translators, locate_translator


class EntryRecord(msgspec.Struct):
    condition: str
    result: str
    key_code: int
    key: str
    modifiers: int
    modifier_mask: int
    state: int
    state_mask: int
    command: Command
    # as written in the file, escapes unexpanded
    text: bytes
    escaped_text: str

    @classmethod
    def from_entry(cls, entry: Entry, encoding: str = "utf-8"):
        return cls(
            condition=entry.condition_to_string(),
            result=entry.result_to_string(encoding),
            key_code=entry.key_code,
            key=key_name(entry.key_code),
            modifiers=int(entry.modifiers),
            modifier_mask=int(entry.modifier_mask),
            state=int(entry.state),
            state_mask=int(entry.state_mask),
            command=entry.command,
            text=entry.text,
            escaped_text=entry.escaped_text().decode("ascii"),
        )


def setup_logging(verbose: bool):
    logging.basicConfig(level=logging.DEBUG if verbose else logging.WARNING)


def load_settings(path):
    if path is None:
        return Settings.default()
    return Settings.load(path)


def resolve_layout(layout, settings: Settings) -> pathlib.Path:
    if layout is None:
        layout = settings.default_layout
    path = pathlib.Path(layout)
    if path.is_file():
        return path
    return locate_translator(layout, settings)


dump_parser = argparse.ArgumentParser(description="Print the entries of a keytab file.")
dump_parser.add_argument("layout", nargs="?", help="a .keytab file or the name of an installed layout")
dump_parser.add_argument("--settings", type=pathlib.Path)
dump_parser.add_argument("--json", action="store_true", help="emit one JSON object per entry")
dump_parser.add_argument("--verbose", "-v", action="store_true")


def dump_cli():
    args = dump_parser.parse_args()
    setup_logging(args.verbose)
    settings = load_settings(args.settings)
    try:
        path = resolve_layout(args.layout, settings)
    except TranslatorNotFound as exc:
        dump_parser.error(str(exc))
    with open_reader(path, settings) as reader:
        if not args.json:
            print(f'keyboard "{reader.description}"')
        for entry in reader:
            if args.json:
                print(msgspec.json.encode(EntryRecord.from_entry(entry, settings.output_encoding)).decode())
            else:
                print(f"key {entry.condition_to_string()} : {entry.result_to_string(settings.output_encoding)}")


entry_parser = argparse.ArgumentParser(description="Decode a single binding, e.g. 'Up+Shift' 'scrollLineUp'.")
entry_parser.add_argument("condition")
entry_parser.add_argument("result")
entry_parser.add_argument("--verbose", "-v", action="store_true")


def entry_cli():
    args = entry_parser.parse_args()
    setup_logging(args.verbose)
    entry = create_entry(args.condition, args.result)
    print(msgspec.json.format(msgspec.json.encode(EntryRecord.from_entry(entry))).decode())


list_parser = argparse.ArgumentParser(description="List the keyboard layouts found in the keytab directories.")
list_parser.add_argument("--settings", type=pathlib.Path)


def list_cli():
    args = list_parser.parse_args()
    setup_logging(False)
    for name in available_translators(load_settings(args.settings)):
        print(name)
