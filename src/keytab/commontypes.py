class KeytabError(Exception):
    pass


class TranslatorNotFound(KeytabError):
    def __init__(self, name: str, searched):
        self.name = name
        self.searched = tuple(searched)
        super().__init__(f"No keyboard layout named {name!r} in {', '.join(str(p) for p in self.searched) or 'any directory'}")


class SettingsError(KeytabError):
    pass
