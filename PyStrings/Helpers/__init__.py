import os

def GetRelativePath(filepath : str, base_dir : str) -> str:
    """
    Path of a file relative to the base directory, always using forward slashes.
    Files outside the base directory keep a ../ prefix.
    """
    real_path = os.path.realpath(filepath)
    real_base = os.path.realpath(base_dir)

    try:
        relative = os.path.relpath(real_path, real_base)
    except ValueError:
        # Different drive on Windows
        relative = real_path

    return relative.replace(os.sep, '/')

def HasSuffix(filepath : str, suffixes : list[str]|tuple[str, ...]) -> bool:
    """
    Case-sensitive suffix check against any of the suffixes
    """
    return any(filepath.endswith(suffix) for suffix in suffixes)
