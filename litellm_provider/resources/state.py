# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Caller-owned resource state.

``ResourceData`` is the mutable record a resource adapter reads desired
attributes from and writes server-authoritative values back into. An empty id
means the resource is not (or no longer) tracked.

``StateStore`` persists records to a JSON file keyed by id.
"""

import copy
import json
import logging
from pathlib import Path
from typing import Any, Dict, Iterator, Optional, Tuple, Union

logger = logging.getLogger(__name__)


class ResourceData:
    """Identifier plus attribute map for one managed resource."""

    def __init__(self, id: str = "", attributes: Optional[Dict[str, Any]] = None):
        self._id = id
        self._attributes: Dict[str, Any] = copy.deepcopy(attributes or {})

    def __repr__(self) -> str:
        return f"ResourceData(id={self._id!r}, attributes={self._attributes!r})"

    @property
    def id(self) -> str:
        return self._id

    def set_id(self, value: str) -> None:
        self._id = value

    def get(self, key: str, default: Any = None) -> Any:
        return self._attributes.get(key, default)

    def get_ok(self, key: str) -> Tuple[Any, bool]:
        """Return the attribute and whether it is set to something other than None."""
        value = self._attributes.get(key)
        return value, value is not None

    def set(self, key: str, value: Any) -> None:
        self._attributes[key] = value

    @property
    def attributes(self) -> Dict[str, Any]:
        return copy.deepcopy(self._attributes)

    def to_dict(self) -> Dict[str, Any]:
        return {"id": self._id, **self.attributes}


class StateStore:
    """JSON file of resource attributes, keyed by resource id."""

    def __init__(self, path: Union[str, Path]):
        self.path = Path(path)
        self._resources: Dict[str, Dict[str, Any]] = {}
        self.load()

    def __contains__(self, resource_id: str) -> bool:
        return resource_id in self._resources

    def __iter__(self) -> Iterator[str]:
        return iter(self._resources)

    def load(self) -> None:
        if not self.path.exists():
            logger.debug(f"State file {self.path} does not exist yet, starting empty")
            self._resources = {}
            return

        with self.path.open("r", encoding="utf-8") as f:
            content = json.load(f)
        self._resources = content.get("resources", {})
        logger.debug(f"Loaded {len(self._resources)} resource(s) from {self.path}")

    def save(self) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        tmp_path = self.path.with_suffix(self.path.suffix + ".tmp")
        with tmp_path.open("w", encoding="utf-8") as f:
            json.dump({"resources": self._resources}, f, indent=2, sort_keys=True)
        tmp_path.replace(self.path)

    def get(self, resource_id: str) -> Optional[ResourceData]:
        attributes = self._resources.get(resource_id)
        if attributes is None:
            return None
        return ResourceData(resource_id, attributes)

    def put(self, data: ResourceData) -> None:
        if not data.id:
            raise ValueError("cannot store a resource without an id")
        self._resources[data.id] = data.attributes

    def remove(self, resource_id: str) -> bool:
        return self._resources.pop(resource_id, None) is not None
