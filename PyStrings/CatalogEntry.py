from PyStrings.Helpers.Text import QuotePo

class CatalogEntry:
    """
    A translatable string identified by (msgctxt, msgid), with every place it was found
    """
    def __init__(self, msgid : str, msgid_plural : str|None = None, msgctxt : str|None = None):
        self.msgid : str = msgid
        self.msgid_plural : str|None = msgid_plural
        self.msgctxt : str|None = msgctxt
        self.references : list[tuple[str, int]] = []
        self.comments : list[str] = []
        self.flags : list[str] = []

    @property
    def key(self) -> tuple[str|None, str]:
        return (self.msgctxt, self.msgid)

    @property
    def is_plural(self) -> bool:
        return self.msgid_plural is not None

    def AddReference(self, path : str, line : int) -> bool:
        """ Record an occurrence, ignoring exact duplicates. Returns True if it was new. """
        reference = (path, line)
        if reference in self.references:
            return False
        self.references.append(reference)
        return True

    def AddComments(self, comments : list[str]|None):
        for comment in comments or []:
            if comment and comment not in self.comments:
                self.comments.append(comment)

    def AddFlags(self, flags : list[str]|None):
        for flag in flags or []:
            if flag and flag not in self.flags:
                self.flags.append(flag)

    def Compose(self, plural_forms : int = 2) -> list[str]:
        """
        Catalog text lines for this entry, without the separating blank line
        """
        lines = [ f"#. {comment}" for comment in self.comments ]
        lines.extend(f"#: {path}:{line}" for path, line in self.references)

        if self.flags:
            lines.append(f"#, {', '.join(self.flags)}")

        if self.msgctxt is not None:
            lines.append(f"msgctxt {QuotePo(self.msgctxt)}")

        lines.append(f"msgid {QuotePo(self.msgid)}")

        if self.msgid_plural is not None:
            lines.append(f"msgid_plural {QuotePo(self.msgid_plural)}")
            lines.extend(f'msgstr[{index}] ""' for index in range(max(plural_forms, 1)))
        else:
            lines.append('msgstr ""')

        return lines

    def __str__(self) -> str:
        if self.msgctxt is not None:
            return f"{self.msgctxt}|{self.msgid}"
        return self.msgid

    def __repr__(self) -> str:
        return f"CatalogEntry({self.msgid!r}, msgid_plural={self.msgid_plural!r}, msgctxt={self.msgctxt!r}, references={len(self.references)})"
