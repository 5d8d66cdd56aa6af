import json
from typing import Any, Dict

from zendesk_input.connector.errors import DataError


def parse_json_object(json_text: str) -> Dict[str, Any]:
    """Parse a response body whose root must be a JSON object.

    Raises DataError for any other root. Decode errors propagate as
    ``json.JSONDecodeError``.
    """
    node = parse_json_node(json_text)
    if isinstance(node, dict):
        return node
    raise DataError(f"Expected object node: {json_text}")


def parse_json_node(json_text: str) -> Any:
    return json.loads(json_text)
