"""Thin ingress boundary helpers.

Centralises two transport concerns at the edges of the matcher:

- **deserialize_query**: normalises the JSON-string-or-dict payload
  handed over by the geocoding collaborator into a ``GeocodingResult``.
- **get_blob_service_client**: creates an ``azure.storage.blob``
  client from the ``AzureWebJobsStorage`` environment variable,
  failing fast with a structured error if unconfigured.
"""

from __future__ import annotations

import json
import logging
import os
from typing import TYPE_CHECKING, Any

from footprint_matcher.core.exceptions import ContractError

if TYPE_CHECKING:
    from azure.storage.blob import BlobServiceClient

    from footprint_matcher.models.geocoding import GeocodingResult

logger = logging.getLogger("footprint_matcher.core.ingress")


# ---------------------------------------------------------------------------
# Query deserialisation
# ---------------------------------------------------------------------------


def deserialize_query(raw: str | dict[str, Any] | object) -> GeocodingResult:
    """Normalise a geocoded query payload into a ``GeocodingResult``.

    Accepts a JSON string or a dict with ``lat``, ``lng`` (or ``lon``)
    and an optional ``address``.

    Raises:
        ContractError: If *raw* is not a JSON object or dict, or lacks
            numeric latitude/longitude fields.
    """
    from footprint_matcher.models.geocoding import GeocodingResult

    if isinstance(raw, str):
        try:
            parsed = json.loads(raw)
        except (json.JSONDecodeError, ValueError) as exc:
            msg = f"Query payload is not valid JSON: {exc}"
            raise ContractError(msg, stage="ingress", code="INVALID_JSON") from exc
        if not isinstance(parsed, dict):
            msg = f"Query JSON must be an object, got {type(parsed).__name__}"
            raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")
        raw = parsed

    if not isinstance(raw, dict):
        msg = f"Unexpected query payload type: {type(raw).__name__}"
        raise ContractError(msg, stage="ingress", code="INVALID_INPUT_TYPE")

    try:
        query = GeocodingResult.from_dict(raw)
    except KeyError as exc:
        msg = f"Query payload missing required field: {exc.args[0]}"
        raise ContractError(msg, stage="ingress", code="MISSING_QUERY_FIELDS") from exc
    except (TypeError, ValueError) as exc:
        msg = f"Query latitude/longitude must be numeric: {exc}"
        raise ContractError(msg, stage="ingress", code="INVALID_QUERY_COORDINATES") from exc

    logger.debug(
        "Deserialised query | address=%s | lat=%.6f | lng=%.6f",
        query.address,
        query.lat,
        query.lng,
    )
    return query


# ---------------------------------------------------------------------------
# Blob service client factory
# ---------------------------------------------------------------------------


def get_blob_service_client() -> BlobServiceClient:
    """Create a ``BlobServiceClient`` from the ``AzureWebJobsStorage`` env var.

    Raises:
        ContractError: If the environment variable is not set.
    """
    from azure.storage.blob import BlobServiceClient

    connection_string = os.environ.get("AzureWebJobsStorage", "")  # noqa: SIM112
    if not connection_string:
        msg = "AzureWebJobsStorage environment variable is not set"
        raise ContractError(msg, stage="ingress", code="MISSING_CONNECTION_STRING")

    return BlobServiceClient.from_connection_string(connection_string)
