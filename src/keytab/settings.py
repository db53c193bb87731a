import dataclasses
import json
import pathlib
import typing

import cattrs

from .commontypes import SettingsError

USER_KEYTAB_DIR = pathlib.Path("~/.local/share/konsole")
SYSTEM_KEYTAB_DIRS = [pathlib.Path("/usr/local/share/konsole"), pathlib.Path("/usr/share/konsole")]
DEFAULT_LAYOUT = "default"

settings_converter = cattrs.Converter()
settings_converter.register_unstructure_hook(pathlib.Path, str)
settings_converter.register_structure_hook(pathlib.Path, lambda v, _: pathlib.Path(v).expanduser())


@dataclasses.dataclass(kw_only=True)
class Settings:
    _path: typing.Optional[pathlib.Path] = None
    keytab_dirs: list[pathlib.Path]
    default_layout: str = DEFAULT_LAYOUT
    # Used to decode lines before tokenizing.
    input_encoding: str = "utf-8"
    # Used to turn quoted output text into the bytes sent to the terminal.
    output_encoding: str = "utf-8"

    def save(self, dest: typing.Optional[pathlib.Path] = None):
        if dest is None:
            dest = self._path
        if dest is None:
            raise SettingsError("No destination given for settings that were not loaded from a file")
        raw = settings_converter.unstructure(self)
        del raw["_path"]
        with dest.open("w") as f:
            json.dump(raw, f, indent=2)

    @classmethod
    def load(cls, src: pathlib.Path):
        try:
            with src.open() as f:
                raw = json.load(f)
        except (OSError, ValueError) as exc:
            raise SettingsError(f"Unable to read settings from {src}") from exc
        raw["_path"] = str(src)
        try:
            return settings_converter.structure(raw, cls)
        except cattrs.BaseValidationError as exc:
            raise SettingsError(f"Invalid settings in {src}") from exc

    @classmethod
    def default(cls):
        return settings_converter.structure(
            {"keytab_dirs": [str(USER_KEYTAB_DIR), *(str(p) for p in SYSTEM_KEYTAB_DIRS)]},
            cls,
        )

    @classmethod
    def for_test(cls):
        return settings_converter.structure(
            {
                "keytab_dirs": ["test_keytabs"],
                "default_layout": DEFAULT_LAYOUT,
                "input_encoding": "utf-8",
                "output_encoding": "utf-8",
            },
            cls,
        )


settings_converter.register_structure_hook(Settings, cattrs.gen.make_dict_structure_fn(Settings, settings_converter))
