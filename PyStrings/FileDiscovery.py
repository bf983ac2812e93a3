import logging
import os
from typing import TextIO

DEFAULT_EXCLUDE_DIRS = ('node_modules', 'vendor', 'bower_components', '.git', '.svn')

STDIN_TOKEN = '-'

def ReadPathList(stream : TextIO) -> list[str]:
    """
    Read a line-delimited list of paths, dropping blank lines
    """
    return [ line.strip() for line in stream.read().splitlines() if line.strip() ]

def FindFiles(paths : list[str], exclude_dirs : list[str]|tuple[str, ...] = DEFAULT_EXCLUDE_DIRS, visited : set[str]|None = None) -> list[str]:
    """
    Expand a list of files and directories into a sorted, de-duplicated list of files.

    Directories are walked recursively, except those whose name is in exclude_dirs.
    Paths that don't exist are dropped. A directory is only visited once, so symlink
    loops terminate.
    """
    top_level = visited is None
    if visited is None:
        visited = set()

    excluded = set(exclude_dirs)
    files = []

    for path in sorted(set(paths)):
        if os.path.isdir(path):
            name = os.path.basename(path.rstrip('/')) or path
            if name in excluded:
                logging.debug(f"Skipping excluded directory {path}")
                continue

            real_path = os.path.realpath(path)
            if real_path in visited:
                logging.debug(f"Skipping {path}, directory already visited")
                continue
            visited.add(real_path)

            try:
                with os.scandir(path) as entries:
                    children = [ f"{path.rstrip('/')}/{entry.name}" for entry in entries ]
            except OSError as e:
                logging.warning(f"Unable to list directory {path}: {e}")
                continue

            files.extend(FindFiles(children, exclude_dirs, visited))

        elif os.path.isfile(path):
            files.append(path)

        elif path != STDIN_TOKEN:
            logging.debug(f"Skipping {path}, file not found")

    if top_level:
        # a file may be named directly and also found inside a listed directory
        files = list(dict.fromkeys(files))

    return files
