"""Parse crop query documents into validated query descriptors."""
import json
import logging
from pathlib import Path
from typing import Any, Mapping

from pydantic import ValidationError

from inspection.errors import InvalidQueryError
from inspection.schemas.query import CropQuery, QueryDocument

logger = logging.getLogger(__name__)


def _first_error(e: ValidationError) -> InvalidQueryError:
    error = e.errors()[0]
    field = ".".join(str(part) for part in error["loc"]) or None
    return InvalidQueryError(error["msg"], field=field)


def parse_query_document(document: Any) -> CropQuery:
    """
    Build a query descriptor from a decoded query document.

    Raises:
        InvalidQueryError: a required field is missing, a value has the wrong
            type, or the box is inverted
    """
    if not isinstance(document, Mapping):
        raise InvalidQueryError("query document must be a JSON object")
    try:
        parsed = QueryDocument.model_validate(document)
    except ValidationError as e:
        raise _first_error(e) from e
    return parsed.query.operator_crop


def load_query_file(path: str | Path) -> CropQuery:
    """Read and parse a JSON query file."""
    path = Path(path)
    logger.info(f"Taking query from {path}")
    try:
        with open(path, "r", encoding="utf-8") as f:
            document = json.load(f)
    except OSError as e:
        raise InvalidQueryError(f"Cannot open query file {path}: {e.strerror}") from e
    except json.JSONDecodeError as e:
        raise InvalidQueryError(f"Invalid JSON in {path}: {e.msg} (line {e.lineno})") from e
    query = parse_query_document(document)
    logger.debug(f"Parsed query: {query!r}")
    return query
