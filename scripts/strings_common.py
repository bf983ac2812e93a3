import os
import logging
import sys

from argparse import ArgumentParser, Namespace
from dataclasses import dataclass
from typing import TextIO

from PyStrings.Helpers.Resources import config_dir
from PyStrings.Options import Options
from PyStrings.StringExtractor import StringExtractor
from PyStrings.StringsError import OutputError

@dataclass
class LoggerOptions():
    file_handler: logging.FileHandler|None
    log_path: str

def InitLogger(logfilename: str, debug: bool = False) -> LoggerOptions:
    """ Initialise the logger with a file handler and return the path to the log file """
    log_path = os.path.join(config_dir, f"{logfilename}.log")
    file_handler = None

    if debug:
        logging_level = logging.DEBUG
    else:
        level_name = os.getenv('LOG_LEVEL', 'WARNING').upper()
        logging_level = getattr(logging, level_name, logging.WARNING)

    # Console logging goes to stderr, stdout may be carrying the catalog
    logging.basicConfig(format='%(levelname)s: %(message)s', encoding='utf-8', level=logging_level)

    if debug:
        logging.debug("Debug logging enabled")

    try:
        os.makedirs(config_dir, exist_ok=True)
        file_handler = logging.FileHandler(log_path, encoding='utf-8', mode='w')
        file_handler.setLevel(logging_level)
        file_handler.setFormatter(logging.Formatter('%(levelname)s: %(message)s'))
        logging.getLogger('').addHandler(file_handler)
    except Exception as e:
        logging.warning(f"Unable to create log file at {log_path}: {e}")

    return LoggerOptions(file_handler=file_handler, log_path=log_path)

def CreateArgParser(description : str) -> ArgumentParser:
    """
    Create the argument parser for the extraction command
    """
    parser = ArgumentParser(prog='civistrings', description=description)
    parser.add_argument('files', nargs='*', help="Files or directories from which to extract strings. Use \"-\" to accept file names from STDIN")
    parser.add_argument('-b', '--base', type=str, default=None, help="Base directory name (for constructing relative paths). Default: current directory")
    parser.add_argument('-o', '--out', type=str, default=None, help="Output file. (Default: stdout)")
    parser.add_argument('-a', '--append', action='store_true', default=None, help="Append to the output file instead of overwriting it")
    parser.add_argument('--header', type=str, default=None, help="File whose content is written at the top of a new catalog")
    parser.add_argument('--msgctxt', type=str, default=None, help="Default context for strings that don't specify one")
    parser.add_argument('-l', '--language', type=str, default=None, help="Target language, used to decide the number of plural forms")
    parser.add_argument('--pluralforms', type=int, default=None, help="Number of plural forms to write for plural strings")
    parser.add_argument('--exclude', action='append', type=str, default=None, help="Directory name to skip (can be repeated)")
    parser.add_argument('--warnunrecognised', action='store_true', default=None, help="Log a warning for files that no parser understands")
    parser.add_argument('--debug', action='store_true', help="Run with DEBUG log level")
    return parser

def CreateOptions(args: Namespace, **kwargs) -> Options:
    """ Create options from the command line arguments """
    options = {
        'base_dir': args.base and os.path.realpath(args.base),
        'output': args.out,
        'append': args.append,
        'header_file': args.header,
        'msgctxt': args.msgctxt,
        'language': args.language,
        'plural_forms': args.pluralforms,
        'exclude_dirs': args.exclude,
        'warn_unrecognised': args.warnunrecognised,
    }

    for key, value in kwargs.items():
        options[key] = value

    return Options(options)

def ExtractStrings(argv : list[str]|None = None, stdin : TextIO|None = None, stdout : TextIO|None = None) -> int:
    """
    Run an extraction from command line arguments and return the exit status
    """
    parser = CreateArgParser("Extract translatable strings from any mix of PHP, Smarty, JS and HTML files.")
    args = parser.parse_args(argv)

    InitLogger("civistrings", args.debug)

    options = CreateOptions(args)
    extractor = StringExtractor(options)

    extractor.ExtractPaths(args.files, stdin=stdin or sys.stdin)

    try:
        extractor.WriteCatalog(stream=stdout or sys.stdout)

    except OutputError as e:
        logging.error(f"{e.message}: {e.error}" if e.error else e.message)
        return 1

    return 0
