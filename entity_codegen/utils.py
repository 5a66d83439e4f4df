"""Loading entity documents from files and URLs.

An entity document is a JSON object describing one or more projects and
their entities. It can live on disk or behind an HTTP endpoint of the
entity management API.
"""

import json
from pathlib import Path
from typing import Any
from urllib.parse import urlparse

import requests

from .logging_config import get_logger

logger = get_logger(__name__)

DEFAULT_TIMEOUT = 30


class JSONLoaderError(Exception):
    """Raised when a document cannot be loaded or parsed."""

    pass


def load_json_from_file(file_path: str | Path) -> tuple[str, Any]:
    """Load JSON data from a local file.

    Args:
        file_path: Path to the JSON file.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If the file is missing, unreadable or not JSON.
    """
    file_path = Path(file_path)
    logger.debug("Loading JSON from file: %s", file_path)

    if not file_path.is_file():
        raise JSONLoaderError(f"File not found: {file_path}")

    if file_path.suffix.lower() != ".json":
        logger.warning("File does not have .json extension: %s", file_path)

    try:
        with file_path.open("r", encoding="utf-8") as f:
            data = json.load(f)
    except json.JSONDecodeError as e:
        raise JSONLoaderError(f"Invalid JSON in file {file_path}: {e}") from e
    except OSError as e:
        raise JSONLoaderError(f"Error reading file {file_path}: {e}") from e

    logger.info("Loaded JSON from %s", file_path)
    return str(file_path), data


def load_json_from_url(url: str, timeout: int = DEFAULT_TIMEOUT) -> tuple[str, Any]:
    """Load JSON data from a URL.

    Args:
        url: URL to fetch JSON from.
        timeout: Request timeout in seconds.

    Returns:
        Tuple of (source description, parsed JSON data).

    Raises:
        JSONLoaderError: If the URL is invalid, the request fails, or the
            response is not JSON.
    """
    logger.debug("Loading JSON from URL: %s", url)

    parsed_url = urlparse(url)
    if parsed_url.scheme not in ("http", "https") or not parsed_url.netloc:
        raise JSONLoaderError(f"Invalid URL: {url}")

    try:
        response = requests.get(url, timeout=timeout, headers={"Accept": "application/json"})
        response.raise_for_status()
    except requests.exceptions.Timeout as e:
        raise JSONLoaderError(f"Request timeout for URL: {url}") from e
    except requests.exceptions.ConnectionError as e:
        raise JSONLoaderError(f"Connection error for URL: {url}") from e
    except requests.exceptions.HTTPError as e:
        raise JSONLoaderError(f"HTTP error {e.response.status_code} for URL: {url}") from e
    except requests.exceptions.RequestException as e:
        raise JSONLoaderError(f"Request error for URL {url}: {e}") from e

    content_type = response.headers.get("content-type", "").lower()
    if "json" not in content_type:
        logger.warning("URL %s does not have a JSON content type: %s", url, content_type)

    try:
        data = response.json()
    except ValueError as e:
        raise JSONLoaderError(f"Invalid JSON response from URL {url}: {e}") from e

    logger.info("Loaded JSON from %s", url)
    return url, data


def load_entity_document(
    file_path: str | Path | None = None,
    url: str | None = None,
    timeout: int = DEFAULT_TIMEOUT,
) -> tuple[str, dict[str, Any]]:
    """Load an entity document from either a file or a URL.

    Args:
        file_path: Path to a local JSON file (mutually exclusive with url).
        url: URL to fetch the document from (mutually exclusive with file_path).
        timeout: Request timeout in seconds (only used for URLs).

    Returns:
        Tuple of (source description, document object).

    Raises:
        JSONLoaderError: If neither or both sources are given, loading fails,
            or the document is not a JSON object.
    """
    if not file_path and not url:
        raise JSONLoaderError("Either a file or a URL must be provided")

    if file_path and url:
        raise JSONLoaderError("Cannot specify both a file and a URL")

    if file_path:
        source, data = load_json_from_file(file_path)
    else:
        source, data = load_json_from_url(url, timeout)

    if not isinstance(data, dict):
        raise JSONLoaderError(
            f"Entity document must be a JSON object, got {type(data).__name__}: {source}"
        )
    return source, data
