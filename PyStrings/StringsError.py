class StringsError(Exception):
    def __init__(self, message : str|None = None, error : Exception|None = None):
        super().__init__(message)
        self.error = error
        self.message = message

    def __str__(self) -> str:
        if self.error:
            return str(self.error)
        elif self.message:
            return self.message
        return super().__str__()

class SourceParseError(StringsError):
    """Error raised when a parser fails on a source file."""
    def __init__(self, message : str, filepath : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.filepath = filepath

class CatalogError(StringsError):
    """Error raised when an entry cannot be added to the catalog."""
    def __init__(self, message : str, error : Exception|None = None):
        super().__init__(message, error)

class OutputError(StringsError):
    """ The catalog could not be written - fatal to the run """
    def __init__(self, message : str, path : str|None = None, error : Exception|None = None):
        super().__init__(message, error)
        self.path = path
