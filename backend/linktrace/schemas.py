from pydantic import BaseModel, ConfigDict, Field, field_validator
from typing import Optional, Any
from urllib.parse import urlparse

# Blocked URL schemes that could be used for phishing or attacks
BLOCKED_SCHEMES = {'javascript', 'data', 'vbscript', 'file'}

# Blocked domains commonly used for phishing (can be extended)
BLOCKED_DOMAINS = set()


def validate_url_safety(url: str) -> str:
    """Validate that a redirect target is an absolute http(s) URL on an allowed host."""
    url = (url or "").strip()
    if not url:
        raise ValueError("URL is required")

    url_lower = url.lower()
    for scheme in BLOCKED_SCHEMES:
        if url_lower.startswith(f"{scheme}:"):
            raise ValueError(f"URL scheme '{scheme}:' is not allowed")

    parsed = urlparse(url)
    # Targets end up in a meta refresh and in script, so only web URLs qualify
    if parsed.scheme.lower() not in ('http', 'https'):
        raise ValueError(f"URL scheme '{parsed.scheme}' is not allowed. Use http or https.")
    if not parsed.netloc:
        raise ValueError("URL must include a host")
    if parsed.hostname and parsed.hostname.lower() in BLOCKED_DOMAINS:
        raise ValueError("This domain is not allowed")

    return url


class LinkCreate(BaseModel):
    url: str
    custom_code: Optional[str] = Field(default=None, alias="customCode")

    model_config = ConfigDict(populate_by_name=True)

    @field_validator('url')
    @classmethod
    def validate_url(cls, v):
        return validate_url_safety(v)

    @field_validator('custom_code')
    @classmethod
    def blank_to_none(cls, v):
        if v is not None and not v.strip():
            return None
        return v.strip() if v else v


class TrackPayload(BaseModel):
    """Body posted by the in-browser collector. Sub-documents are free-form."""

    id: int
    client_data: Any = Field(default=None, alias="clientData")
    behavior: Any = None
    # full payload echoed by the collector; the server derives its own combined document
    combined: Any = None

    model_config = ConfigDict(populate_by_name=True)
