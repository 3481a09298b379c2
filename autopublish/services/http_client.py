"""
HTTP client for the publication service.

One attempt per request, no timeout, no retry. Status codes are not
treated as errors; callers get the status back alongside the body.
"""

import json
from typing import Dict, Optional

import requests

from autopublish.errors import NetworkError, ResponseDecodeError
from autopublish.models.publication import HttpResponse, PublicationRequest

JSON_CONTENT_TYPE = "application/json"


class HttpClient:
    """Thin wrapper over requests that decodes JSON bodies."""

    def __init__(self, session: Optional[requests.Session] = None):
        """
        Initialize the client.

        Args:
            session: Session to send requests with. Defaults to a new one.
        """
        self.session = session or requests.Session()

    def request(
        self,
        url: str,
        method: str = "GET",
        headers: Optional[Dict[str, str]] = None,
        body: Optional[str] = None,
    ) -> HttpResponse:
        """
        Send a request and read the whole response.

        Args:
            url: Target URL
            method: HTTP method
            headers: Request headers
            body: Request body, sent in full before the request ends

        Returns:
            HttpResponse whose body is JSON-decoded when the content-type
            is exactly application/json, raw text otherwise

        Raises:
            NetworkError: On DNS, connection or transport failures
            ResponseDecodeError: If a JSON response body does not parse
        """
        try:
            response = self.session.request(
                method,
                url,
                headers=headers or {},
                data=body.encode("utf-8") if body else None,
            )
        except requests.exceptions.RequestException as e:
            raise NetworkError(url, e) from e

        content_type = response.headers.get("content-type")
        # Bodies are UTF-8 whatever charset the server declares, if any.
        text = response.content.decode("utf-8", errors="replace")
        payload = text
        if content_type == JSON_CONTENT_TYPE:
            try:
                payload = json.loads(text)
            except json.JSONDecodeError as e:
                raise ResponseDecodeError(url, e) from e

        return HttpResponse(
            status_code=response.status_code,
            content_type=content_type,
            body=payload,
        )

    def send(self, publication: PublicationRequest) -> HttpResponse:
        """Send a PublicationRequest."""
        return self.request(
            publication.url,
            method=publication.method,
            headers=publication.headers,
            body=publication.body,
        )
