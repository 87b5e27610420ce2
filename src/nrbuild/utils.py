import os
from pathlib import Path
from typing import Union


def expanded_path(path: Union[str, Path]) -> Path:
    """
    Expands environment variables and user tilde in a given path.

    :param path: The path to expand.
    :return: The expanded path as a Path object.
    """
    if isinstance(path, Path):
        path = str(path)

    return Path(os.path.expandvars(os.path.expanduser(path)))


def resolve_path(path: Union[str, Path], cwd: Union[str, Path, None] = None) -> Path:
    """
    Resolve a path the way the build does: absolute paths are kept,
    relative ones are anchored at ``cwd`` (the process working directory
    when omitted).
    """
    path = expanded_path(path)
    if not path.is_absolute():
        path = Path(cwd if cwd is not None else os.getcwd()) / path
    return Path(os.path.normpath(path))


def deep_update(d: dict, u: dict) -> dict:
    for k, v in u.items():
        if isinstance(v, dict):
            current = d.get(k)
            d[k] = deep_update(current if isinstance(current, dict) else {}, v)
        else:
            d[k] = v
    return d
