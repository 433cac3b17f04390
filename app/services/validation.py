# app/services/validation.py

import logging
from typing import Any, Dict, List

from pydantic import ValidationError

from app.models.movie import MovieCreate, MovieUpdate

logger = logging.getLogger(__name__)


class MovieValidationError(Exception):
    """Raised when a MovieInput breaks one or more field constraints."""

    def __init__(self, errors: List[Dict[str, str]]):
        self.errors = errors
        fields = ", ".join(e["field"] for e in errors)
        super().__init__(f"Invalid movie input: {fields}")


def _collect_errors(exc: ValidationError) -> List[Dict[str, str]]:
    errors = []
    for err in exc.errors():
        field = ".".join(str(part) for part in err["loc"]) or "body"
        errors.append({"field": field, "message": err["msg"]})
    return errors


def validate_movie_input(payload: Any, partial: bool = False) -> Dict[str, Any]:
    """
    Checks a MovieInput against the movie field constraints.

    Args:
        payload: Decoded JSON request body.
        partial: When True only the supplied fields are checked (update).
                 Otherwise all four fields are required (create).

    Returns:
        A dict holding only the validated, supplied fields. Unknown keys
        (including any attempt to set `id`) are dropped.

    Raises:
        MovieValidationError: Listing every offending field.
    """
    if not isinstance(payload, dict):
        raise MovieValidationError([{"field": "body", "message": "Request body must be a JSON object"}])

    schema = MovieUpdate if partial else MovieCreate
    try:
        movie = schema.model_validate(payload)
    except ValidationError as e:
        errors = _collect_errors(e)
        logger.debug(f"Movie input rejected (partial={partial}): {errors}")
        raise MovieValidationError(errors) from e

    return movie.model_dump(exclude_unset=True)
