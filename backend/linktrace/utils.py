import hashlib
import json
import math
import secrets
import string
from typing import Any


def generate_code(length: int = 8) -> str:
    alphabet = string.ascii_lowercase + string.digits
    return ''.join(secrets.choice(alphabet) for _ in range(length))


def anonymize_ip(ip: str) -> str:
    # GDPR: keep first 16 chars of the digest, enough to group visits
    return hashlib.sha256(ip.encode()).hexdigest()[:16]


def finite_json(value: Any) -> Any:
    """Replace NaN and +/-Infinity with None; Postgres json and strict parsers reject them."""
    if isinstance(value, float):
        return value if math.isfinite(value) else None
    if isinstance(value, dict):
        return {k: finite_json(v) for k, v in value.items()}
    if isinstance(value, (list, tuple)):
        return [finite_json(v) for v in value]
    return value


def canonical_json(value: Any) -> str:
    """Serialize with sorted keys and compact separators so equal content hashes equally."""
    return json.dumps(value, sort_keys=True, separators=(",", ":"), ensure_ascii=False, allow_nan=False)


def sha256_hex(text: str) -> str:
    return hashlib.sha256(text.encode("utf-8")).hexdigest()
