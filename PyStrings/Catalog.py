import logging
from collections.abc import Iterator, Mapping

from PyStrings.CatalogEntry import CatalogEntry
from PyStrings.Helpers import GetRelativePath
from PyStrings.StringsError import CatalogError

class Catalog:
    """
    Deduplicated collection of translatable strings gathered during an extraction run.

    Entries are identified by (msgctxt, msgid) and kept in insertion order, so a fixed
    file ordering always produces the same catalog text.
    """
    def __init__(self, base_dir : str, defaults : Mapping[str, str|None]|None = None, plural_forms : int = 2):
        self.base_dir : str = base_dir
        self.defaults : dict[str, str|None] = dict(defaults or {})
        self.plural_forms : int = max(plural_forms, 1)
        self._entries : dict[tuple[str|None, str], CatalogEntry] = {}

    @property
    def entries(self) -> list[CatalogEntry]:
        return list(self._entries.values())

    @property
    def default_msgctxt(self) -> str|None:
        return self.defaults.get('msgctxt')

    def __len__(self) -> int:
        return len(self._entries)

    def __iter__(self) -> Iterator[CatalogEntry]:
        return iter(self._entries.values())

    def GetEntry(self, msgid : str, msgctxt : str|None = None) -> CatalogEntry|None:
        """
        Look up an entry by its identity. Note that the default context is not applied.
        """
        return self._entries.get((msgctxt, msgid))

    def Insert(self, msgid : str, filepath : str, line : int, msgid_plural : str|None = None, msgctxt : str|None = None,
               comments : list[str]|None = None, flags : list[str]|None = None) -> CatalogEntry:
        """
        Add an occurrence of a string to the catalog.

        A string already present with the same context gains a reference instead of a new entry.
        If the existing entry already has a different plural form, the first one is kept.
        """
        if not msgid:
            raise CatalogError(f"Cannot add an empty msgid to the catalog ({filepath}:{line})")

        if msgctxt is None:
            msgctxt = self.default_msgctxt

        key = (msgctxt, msgid)
        entry = self._entries.get(key)
        if entry is None:
            entry = CatalogEntry(msgid, msgid_plural=msgid_plural, msgctxt=msgctxt)
            self._entries[key] = entry

        elif msgid_plural is not None:
            if entry.msgid_plural is None:
                entry.msgid_plural = msgid_plural
            elif entry.msgid_plural != msgid_plural:
                logging.warning(f"Conflicting plural forms for \"{msgid}\" at {filepath}:{line}: keeping \"{entry.msgid_plural}\", ignoring \"{msgid_plural}\"")

        entry.AddReference(GetRelativePath(filepath, self.base_dir), line)
        entry.AddComments(comments)
        entry.AddFlags(flags)
        return entry

    def ToString(self) -> str:
        """
        Serialize the catalog as gettext template text. Each entry is followed by a blank line.
        """
        blocks = []
        for entry in self._entries.values():
            lines = entry.Compose(self.plural_forms)
            blocks.append("\n".join(lines) + "\n\n")

        return "".join(blocks)

    def __str__(self) -> str:
        return self.ToString()
