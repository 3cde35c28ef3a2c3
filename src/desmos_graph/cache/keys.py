"""Cache key generation — content-addressed graph fingerprints."""

from __future__ import annotations

import hashlib
import json
from collections.abc import Iterable
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from desmos_graph.types import Equation, Fields, Spec

DEFAULT_PREFIX = "desmos"
DEFAULT_EXTENSION = "png"


def canonical_bytes(equations: Iterable[Equation], fields: Fields) -> bytes:
    """Serialize equations (in order) and fields with a fixed key order.

    Every equation carries all of its keys, including unset ones, so that
    e.g. a missing style and a missing color never collide. Output is pure
    ASCII, so any str (lone surrogates included) can be hashed.
    """
    document = {
        "equations": [eq.model_dump(mode="json") for eq in equations],
        "fields": fields.model_dump(mode="json"),
    }
    serialized = json.dumps(document, sort_keys=True, separators=(",", ":"), ensure_ascii=True)
    return serialized.encode("utf-8")


def compute_fingerprint(equations: Iterable[Equation], fields: Fields) -> str:
    """SHA256 hex digest of the canonical serialization."""
    return hashlib.sha256(canonical_bytes(equations, fields)).hexdigest()


def fingerprint(spec: Spec) -> str:
    """Return the fingerprint of a Spec (computed at construction)."""
    return spec.fingerprint


def cache_filename(
    graph_fingerprint: str,
    prefix: str = DEFAULT_PREFIX,
    extension: str = DEFAULT_EXTENSION,
) -> str:
    """File name of a durable cache entry: <prefix>-graph-<fingerprint>.<ext>."""
    return f"{prefix}-graph-{graph_fingerprint}.{extension}"
