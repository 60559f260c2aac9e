"""Request signature: sorted key=value tokens plus the secret, hashed with MD5.

The remote verifier recomputes the same digest from the visible query
parameters and its copy of the secret, so every step here is part of the wire
protocol. Values are never escaped before hashing.
"""
from __future__ import annotations

import hashlib
from typing import Dict, List, Mapping

from .config import RESPONSE_FORMAT
from .models import Credentials

RESERVED_PARAMETERS = ("api_key", "format", "expire")


def combined_parameters(
    parameters: Mapping[str, str],
    api_key: str,
    expire: str,
    *,
    response_format: str = RESPONSE_FORMAT,
) -> Dict[str, str]:
    """Merge caller parameters with the fixed keys; the fixed keys always win."""

    combined = {str(key): str(value) for key, value in parameters.items()}
    combined["api_key"] = api_key
    combined["format"] = response_format
    combined["expire"] = expire
    return combined


def canonical_tokens(combined: Mapping[str, str]) -> List[str]:
    return [f"{key}={combined[key]}" for key in sorted(combined)]


def canonical_string(combined: Mapping[str, str]) -> str:
    """Concatenated tokens without the secret."""

    return "".join(canonical_tokens(combined))


def signature_base(combined: Mapping[str, str], api_secret: str) -> str:
    return canonical_string(combined) + api_secret


def md5_hex(text: str) -> str:
    return hashlib.md5(text.encode("utf-8")).hexdigest()


def generate_signature(
    credentials: Credentials,
    expire: str,
    parameters: Mapping[str, str],
    *,
    response_format: str = RESPONSE_FORMAT,
) -> str:
    """Return the lowercase hex signature for one request."""

    combined = combined_parameters(
        parameters,
        credentials.api_key,
        expire,
        response_format=response_format,
    )
    return md5_hex(signature_base(combined, credentials.api_secret))


__all__ = [
    "RESERVED_PARAMETERS",
    "combined_parameters",
    "canonical_tokens",
    "canonical_string",
    "signature_base",
    "md5_hex",
    "generate_signature",
]
