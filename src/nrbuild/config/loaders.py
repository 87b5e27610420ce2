import json
import logging
from pathlib import Path

import yaml

logger = logging.getLogger(__name__)


def load_file(path: Path) -> dict:
    """
    Load a structured document from a YAML or JSON file.

    :param path: Path to the file.
    :return: Dictionary with the document data.
    :raises FileNotFoundError: If the file does not exist.
    :raises IsADirectoryError: If the path is a directory.
    :raises RuntimeError: If the file type is not supported.
    :raises ValueError: If the document is not a mapping.
    """
    logger.debug("Loading file: %s", path)
    assert path is not None

    if not path.exists():
        logger.error("File not found: %s", path.absolute())
        raise FileNotFoundError(f"File not found: {path.absolute()}")

    if path.is_dir():
        logger.error("Path is a directory, not a file: %s", path.absolute())
        raise IsADirectoryError(path.absolute())

    with open(path, "r", encoding="utf-8") as fp:
        if fp.read(1) == "":
            logger.debug("File is empty: %s", path)
            return {}

        fp.seek(0)

        if path.name.endswith((".yaml", ".yml")):
            logger.debug("Parsing YAML file: %s", path.name)
            data = yaml.safe_load(fp)
        elif path.name.endswith(".json"):
            logger.debug("Parsing JSON file: %s", path.name)
            data = json.load(fp)
        else:
            logger.error("Invalid file type: %s", path.name)
            raise RuntimeError("Invalid file type given: %s" % path.name)

    if data is None:
        return {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping in {path.name}, got {type(data).__name__}")
    return data
