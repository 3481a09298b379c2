"""
Publication request/response models.

The request body is form-encoded in field order, with every field present
even when its value is empty.
"""

from typing import Any, Dict, Optional
from urllib.parse import quote_plus, urlencode

from pydantic import BaseModel, Field

FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def form_quote(value: str, safe: str = "", encoding=None, errors=None) -> str:
    """Quote like a WHATWG form serializer: keep `*`, escape `~`."""
    return quote_plus(value, safe="*", encoding=encoding, errors=errors).replace("~", "%7E")


class PublicationRequest(BaseModel):
    """A request to the publication service."""
    url: str = Field(..., description="Target endpoint")
    method: str = Field("POST", description="HTTP method")
    headers: Dict[str, str] = Field(
        default_factory=lambda: {"Content-Type": FORM_CONTENT_TYPE},
        description="Request headers",
    )
    fields: Dict[str, str] = Field(default_factory=dict, description="Form fields, in order")

    @property
    def body(self) -> str:
        """URL-encoded form body."""
        return urlencode(list(self.fields.items()), quote_via=form_quote)

    @classmethod
    def for_echidna(
        cls,
        endpoint: str,
        manifest_url: str,
        decision_url: str,
        token: str,
        cc: str,
    ) -> "PublicationRequest":
        return cls(
            url=endpoint,
            fields={
                "url": manifest_url,
                "decision": decision_url,
                "token": token,
                "cc": cc,
            },
        )


class HttpResponse(BaseModel):
    """A completed HTTP exchange."""
    status_code: int = Field(..., description="HTTP status code")
    content_type: Optional[str] = Field(None, description="Response content-type header")
    body: Any = Field(None, description="JSON-decoded body or raw text")

    @property
    def is_json(self) -> bool:
        return self.content_type == "application/json"
