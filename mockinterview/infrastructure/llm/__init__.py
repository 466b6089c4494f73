from .client import VertexRestClient, LLMRequestError, extract_json
from .edge import EdgeFunctionClient, EdgeFunctionError

__all__ = [
    "VertexRestClient",
    "LLMRequestError",
    "extract_json",
    "EdgeFunctionClient",
    "EdgeFunctionError",
]
