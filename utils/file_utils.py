"""
JSON file utilities for airdrop data documents.
"""

import json
import os
import tempfile
from typing import Any


def load_json_document(path: str) -> Any:
    """
    Load a JSON document from disk.

    Args:
        path: File path

    Returns:
        Parsed JSON value
    """
    with open(path, 'r', encoding='utf-8') as f:
        return json.load(f)


def write_json_document(path: str, data: Any, indent: int = 2) -> None:
    """
    Write a JSON document so that either all of it lands on disk or none of it.

    The document is serialized to a temporary file in the target directory and
    moved over the destination with os.replace.

    Args:
        path: Destination file path
        data: JSON-serializable value
        indent: Indentation for pretty printing
    """
    # Serialize first so an unserializable value never touches the disk
    payload = json.dumps(data, indent=indent)

    directory = os.path.dirname(os.path.abspath(path))
    os.makedirs(directory, exist_ok=True)

    fd, tmp_path = tempfile.mkstemp(dir=directory, prefix='.tmp-', suffix='.json')
    try:
        with os.fdopen(fd, 'w', encoding='utf-8') as f:
            f.write(payload)
            f.flush()
            os.fsync(f.fileno())
        os.replace(tmp_path, path)
    except BaseException:
        if os.path.exists(tmp_path):
            os.remove(tmp_path)
        raise
