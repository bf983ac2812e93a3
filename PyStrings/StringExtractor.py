import logging
import os
import sys
from typing import TextIO

from PyStrings.Catalog import Catalog
from PyStrings.FileDiscovery import STDIN_TOKEN, FindFiles, ReadPathList
from PyStrings.Options import Options
from PyStrings.ParserSelector import ParserSelector
from PyStrings.SourceParser import SourceParser
from PyStrings.StringsError import OutputError, SourceParseError

default_encoding = os.getenv('DEFAULT_ENCODING', 'utf-8')

class StringExtractor:
    """
    Runs an extraction: find the files, parse each one with the right parser
    and write the resulting catalog
    """
    def __init__(self, options : Options|None = None):
        self.options : Options = options or Options()
        self.selector = ParserSelector(comment_tag=self.options.comment_tag, setting_keys=self.options.setting_keys)
        self.catalog = Catalog(
            self.options.base_dir,
            defaults=self.options.GetCatalogDefaults(),
            plural_forms=self.options.plural_forms
        )
        self.files_parsed : int = 0
        self.files_skipped : int = 0
        self.files_failed : int = 0

    def FindFiles(self, paths : list[str], stdin : TextIO|None = None) -> list[str]:
        """
        Expand the input paths into the list of files to scan. The "-" token adds the paths listed on stdin.
        """
        paths = list(paths)
        if STDIN_TOKEN in paths:
            paths.extend(ReadPathList(stdin or sys.stdin))

        return FindFiles(paths, self.options.exclude_dirs)

    def ExtractPaths(self, paths : list[str], stdin : TextIO|None = None) -> Catalog:
        """
        Extract strings from every file found under the paths, in sorted order
        """
        files = self.FindFiles(paths, stdin)
        logging.info(f"Scanning {len(files)} files")

        for filepath in files:
            self.ExtractFile(filepath)

        logging.info(f"Parsed {self.files_parsed} files, skipped {self.files_skipped}, {self.files_failed} failed. Found {len(self.catalog)} strings")
        return self.catalog

    def ExtractFile(self, filepath : str) -> bool:
        """
        Extract strings from one file. Returns True if the file was parsed.
        Errors are logged and contained so that the rest of the run can continue.
        """
        content = self.ReadFile(filepath)

        parser = self.selector.GetParser(filepath, content)
        if not parser:
            self.files_skipped += 1
            if self.options.warn_unrecognised and not filepath.endswith('~'):
                logging.warning(f"No parser for {filepath}")
            else:
                logging.debug(f"No parser for {filepath}")
            return False

        try:
            self.ParseFile(filepath, content, parser)
            self.files_parsed += 1
            return True

        except SourceParseError as e:
            self.files_failed += 1
            logging.error(f"{e.message}: {str(e)}")
            return False

    def ParseFile(self, filepath : str, content : str, parser : SourceParser) -> None:
        """
        Run a parser over the file content, wrapping any failure in a SourceParseError
        """
        logging.debug(f"Parsing {filepath} with {type(parser).__name__}")
        try:
            parser.parse(filepath, content, self.catalog)

        except Exception as e:
            raise SourceParseError(f"Error extracting strings from {filepath}", filepath=filepath, error=e)

    def ReadFile(self, filepath : str) -> str:
        """
        Read a source file. Unreadable files are treated as empty.
        """
        try:
            with open(filepath, 'r', encoding=default_encoding, errors='replace') as f:
                return f.read()

        except OSError as e:
            logging.warning(f"Unable to read {filepath}: {e}")
            return ""

    def ReadHeader(self) -> str:
        header_file = self.options.header_file
        if not header_file:
            return ""

        try:
            with open(header_file, 'r', encoding=default_encoding) as f:
                return f.read()

        except OSError as e:
            raise OutputError(f"Unable to read header file {header_file}", path=header_file, error=e)

    def WriteCatalog(self, output : str|None = None, stream : TextIO|None = None) -> None:
        """
        Write the catalog to the output file, or to the stream if there is no output file.

        In append mode the catalog is added after the existing file content, and the header
        is only written when the file is created.
        """
        output = output or self.options.output
        append = self.options.append
        text = self.catalog.ToString()

        if not output:
            (stream or sys.stdout).write(self.ReadHeader() + text)
            return

        include_header = not append or not os.path.exists(output)
        header = self.ReadHeader() if include_header else ""

        # Keep appended entries off the last line of an unterminated file
        separator = "\n" if append and text and not include_header and not self._ends_with_newline(output) else ""

        try:
            with open(output, 'a' if append else 'w', encoding=default_encoding, newline='') as f:
                f.write(separator + header + text)

        except OSError as e:
            raise OutputError(f"Unable to write catalog to {output}", path=output, error=e)

        logging.info(f"{'Appended' if append else 'Wrote'} {len(self.catalog)} strings to {output}")

    def _ends_with_newline(self, path : str) -> bool:
        """
        True if the file is empty or its last byte is a line break
        """
        try:
            with open(path, 'rb') as f:
                f.seek(0, os.SEEK_END)
                if f.tell() == 0:
                    return True
                f.seek(-1, os.SEEK_END)
                return f.read(1) in (b'\n', b'\r')

        except OSError as e:
            raise OutputError(f"Unable to read existing catalog {path}", path=path, error=e)
