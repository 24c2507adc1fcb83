"""Schema.org (https://schema.org/) items embedded as JSON-LD"""

import json
import logging
from dataclasses import dataclass
from typing import Any, Dict, List, Optional

logger = logging.getLogger(__name__)

_I64_MIN = -(2 ** 63)
_I64_MAX = 2 ** 63 - 1


def _reject_constant(name: str) -> Any:
    # NaN and Infinity are not JSON
    raise ValueError(f"invalid JSON constant {name}")


@dataclass
class SchemaOrg:
    """One typed JSON-LD entity, e.g. an Article or an Organization"""
    schema_type: str
    # Full JSON object of the entity, always a dict
    value: Dict[str, Any]

    @classmethod
    def parse(cls, text: str) -> List["SchemaOrg"]:
        """
        Flatten a JSON-LD payload into typed items.

        Accepts a single object, an array of objects, or an object holding a
        top-level ``@graph`` array. Invalid JSON yields an empty list.
        """
        try:
            node = json.loads(text, parse_constant=_reject_constant)
        except (ValueError, RecursionError) as e:
            logger.debug(f"Ignoring invalid JSON-LD block: {str(e)}")
            return []

        try:
            # Lone surrogate escapes such as "\ud800" decode but are not valid UTF-8
            json.dumps(node, ensure_ascii=False).encode("utf-8")
        except (UnicodeEncodeError, RecursionError) as e:
            logger.debug(f"Ignoring JSON-LD block with invalid unicode: {str(e)}")
            return []

        if isinstance(node, list):
            candidates = node
        elif isinstance(node, dict):
            graph = node.get("@graph")
            if isinstance(graph, list):
                candidates = graph
            else:
                node.pop("@graph", None)
                candidates = [node]
        else:
            return []

        items = []
        for candidate in candidates:
            if not isinstance(candidate, dict):
                continue
            schema_type = cls._schema_type(candidate.get("@type"))
            if schema_type:
                items.append(cls(schema_type=schema_type, value=candidate))
        return items

    @staticmethod
    def _schema_type(raw_type: Any) -> Optional[str]:
        # Multiple types: the first one wins
        if isinstance(raw_type, list):
            raw_type = raw_type[0] if raw_type else None
        if isinstance(raw_type, str) and raw_type:
            return raw_type
        return None

    def get_str(self, key: str) -> Optional[str]:
        value = self.value.get(key)
        return value if isinstance(value, str) else None

    def get_int(self, key: str) -> Optional[int]:
        value = self.value.get(key)
        if isinstance(value, bool) or not isinstance(value, int):
            return None
        # Signed 64-bit range
        if not _I64_MIN <= value <= _I64_MAX:
            return None
        return value

    def get_object(self, key: str) -> Optional[Dict[str, Any]]:
        value = self.value.get(key)
        return value if isinstance(value, dict) else None

    def get_array(self, key: str) -> Optional[List[Any]]:
        value = self.value.get(key)
        return value if isinstance(value, list) else None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "schema_type": self.schema_type,
            "value": self.value,
        }

    @classmethod
    def from_dict(cls, data: Dict[str, Any]) -> "SchemaOrg":
        return cls(schema_type=data["schema_type"], value=data["value"])
