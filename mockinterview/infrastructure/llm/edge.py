"""
HTTP client for the hosted ai-interview function.

The function accepts ``{"type": ...}`` requests (generate_question,
analyze_response, generate_feedback) and answers with a JSON object that is
either the result or ``{"error": "..."}``.
"""
import logging
from typing import Any, Dict, Optional

import requests

from ...config import EDGE_FUNCTION_TIMEOUT

logger = logging.getLogger("edge_client")

STATUS_MESSAGES = {
    429: "Rate limit exceeded. Please try again later.",
    402: "AI credits exhausted. Please add more credits.",
}


class EdgeFunctionError(RuntimeError):
    """The function could not be reached or returned an error payload."""

    def __init__(self, message: str, status_code: Optional[int] = None):
        super().__init__(message)
        self.status_code = status_code


class EdgeFunctionClient:
    """Thin JSON-over-HTTP client for the ai-interview function."""

    def __init__(self, url: str, token: Optional[str] = None,
                 timeout: int = EDGE_FUNCTION_TIMEOUT):
        self.url = url
        self.token = token
        self.timeout = timeout

    def _headers(self) -> Dict[str, str]:
        headers = {"Content-Type": "application/json"}
        if self.token:
            headers["Authorization"] = f"Bearer {self.token}"
        return headers

    def invoke(self, request_type: str, **fields: Any) -> Dict[str, Any]:
        """
        Post one request and return the decoded JSON body.

        Args:
            request_type: generate_question, analyze_response or generate_feedback
            **fields: Request fields, already in the function's camelCase shape

        Raises:
            EdgeFunctionError: On transport failure, HTTP error status,
                non-JSON body or an ``error`` key in the body
        """
        body = {"type": request_type}
        body.update({k: v for k, v in fields.items() if v is not None})
        logger.debug("Invoking ai-interview: %s", request_type)

        try:
            resp = requests.post(self.url, headers=self._headers(), json=body, timeout=self.timeout)
        except requests.RequestException as e:
            raise EdgeFunctionError(f"ai-interview request failed: {e}") from e

        try:
            data = resp.json()
        except ValueError:
            data = None

        if resp.status_code >= 400:
            message = STATUS_MESSAGES.get(resp.status_code)
            if message is None and isinstance(data, dict) and data.get("error"):
                message = str(data["error"])
            if message is None:
                message = f"ai-interview error {resp.status_code}: {resp.text[:200]}"
            logger.error("ai-interview %s failed with status %d", request_type, resp.status_code)
            raise EdgeFunctionError(message, status_code=resp.status_code)

        if not isinstance(data, dict):
            raise EdgeFunctionError("ai-interview returned a non-JSON body", status_code=resp.status_code)
        if data.get("error"):
            raise EdgeFunctionError(str(data["error"]), status_code=resp.status_code)

        return data
