"""Utility functions for reading audit inputs and writing reports."""
import json
from pathlib import Path
from typing import Any, List, Mapping, Union

from ..exceptions import InputFormatError, InputNotFoundError
from .logger import get_logger

logger = get_logger("utils.files")

ABI_LABEL = "ABI"
CALLS_LABEL = "calls"
RULES_LABEL = "rules"


def ensure_directory(path: Union[str, Path]) -> Path:
    """Ensure a directory exists, creating it if necessary.

    Args:
        path: Directory path

    Returns:
        Path object for the directory
    """
    path = Path(path).resolve()
    path.mkdir(parents=True, exist_ok=True)
    return path


def read_json(file_path: Union[str, Path], label: str = "input") -> Any:
    """Read and parse a JSON file.

    Args:
        file_path: Path to the JSON file
        label: Name of the input, used in error messages

    Returns:
        Parsed JSON data

    Raises:
        InputNotFoundError: If the file cannot be read
        InputFormatError: If the file is not valid JSON
    """
    file_path = Path(file_path)
    try:
        with open(file_path, 'r', encoding='utf-8-sig') as f:
            return json.load(f)
    except FileNotFoundError as e:
        raise InputNotFoundError(label, "file not found", file_path) from e
    except (OSError, UnicodeDecodeError) as e:
        raise InputNotFoundError(label, f"cannot read file: {e}", file_path) from e
    except json.JSONDecodeError as e:
        raise InputFormatError(
            label, f"not valid JSON (line {e.lineno}, column {e.colno}: {e.msg})", file_path
        ) from e


def _unwrap_list(document: Any, key: str, label: str, file_path: Path) -> List[Any]:
    if isinstance(document, Mapping) and isinstance(document.get(key), list):
        return document[key]
    if isinstance(document, list):
        return document
    raise InputFormatError(
        label, f"expected a JSON array or an object with a {key!r} array", file_path
    )


def load_abi(file_path: Union[str, Path]) -> List[Any]:
    """Load an ABI from a bare JSON array or a compiler artifact with an ``abi`` key."""
    file_path = Path(file_path)
    abi = _unwrap_list(read_json(file_path, ABI_LABEL), 'abi', ABI_LABEL, file_path)
    logger.debug("Loaded %d ABI entries from %s", len(abi), file_path)
    return abi


def load_calls(file_path: Union[str, Path]) -> List[Any]:
    """Load a call queue from a JSON array or an object with a ``calls`` key."""
    file_path = Path(file_path)
    calls = _unwrap_list(read_json(file_path, CALLS_LABEL), 'calls', CALLS_LABEL, file_path)
    for position, call in enumerate(calls):
        if not isinstance(call, Mapping):
            raise InputFormatError(
                CALLS_LABEL, f"entry {position} is not an object", file_path
            )
    logger.debug("Loaded %d queued calls from %s", len(calls), file_path)
    return calls


def write_text(content: str, file_path: Union[str, Path]) -> Path:
    """Write a rendered report to disk, creating parent directories.

    Returns:
        Path to the written file
    """
    file_path = Path(file_path)
    ensure_directory(file_path.parent)
    with open(file_path, 'w', encoding='utf-8') as f:
        f.write(content)
    return file_path
