from abc import ABC, abstractmethod

from PyStrings.Catalog import Catalog

class SourceParser(ABC):
    """
    Abstract interface for extracting translatable strings from one source dialect.
    Implementations recognise the dialect's translation markers and report
    every literal string they find to the catalog.
    """

    @abstractmethod
    def parse(self, filepath: str, content: str, catalog: Catalog) -> None:
        """
        Scan file content and insert the strings found into the catalog.

        Args:
            filepath: Path of the file, used for references
            content: Text of the file
            catalog: Catalog to insert into

        Implementations must not raise for malformed input. Whatever can be
        extracted from the well-formed part of the file is kept and the rest
        is ignored.
        """
        pass

    @abstractmethod
    def get_file_extensions(self) -> list[str]:
        """
        Get file suffixes handled by this parser.

        Returns:
            list[str]: List of suffixes (e.g., ['.php'])
        """
        pass
