"""
Relationship cache for the Voyager to Filament converter.

Voyager stores relationship fields as data rows of type ``relationship`` whose
details describe the related model. The cache is filled once per run, before
any form is rendered, and is read-only afterwards.
"""

import logging
from dataclasses import dataclass
from typing import Any, Callable, Dict, Iterable, List, Optional, Tuple

from ..constants import MANY_TO_MANY_RELATIONSHIP
from .models import DataRow, DataType


logger = logging.getLogger(__name__)

CacheKey = Tuple[str, str]


@dataclass(frozen=True)
class RelationshipDetails:
    """Read-only view over the details of a relationship data row."""

    details: Dict[str, Any]

    @property
    def related_model(self) -> Optional[str]:
        return self.details.get("model") or None

    @property
    def title_attribute(self) -> str:
        return self.details.get("label") or "name"

    @property
    def relationship_name(self) -> str:
        method = self.details.get("method")
        if method:
            return method
        column = self.details.get("column") or "relation"
        return column.replace("_relationship", "")

    @property
    def kind(self) -> Optional[str]:
        return self.details.get("type")

    @property
    def is_many_to_many(self) -> bool:
        return self.kind == MANY_TO_MANY_RELATIONSHIP


class RelationshipCache:
    """Mapping of ``(model_name, field)`` to parsed relationship details."""

    def __init__(self):
        self._entries: Dict[CacheKey, Dict[str, Any]] = {}

    def add(self, model_name: str, field: str, details: Dict[str, Any]) -> None:
        self._entries[(model_name, field)] = details

    def get(self, model_name: str, field: str) -> Optional[RelationshipDetails]:
        details = self._entries.get((model_name, field))
        if details is None:
            return None
        return RelationshipDetails(details)

    def __contains__(self, key: CacheKey) -> bool:
        return key in self._entries

    def __len__(self) -> int:
        return len(self._entries)


def build_relationship_cache(
    data_types: Iterable[DataType],
    row_loader: Callable[[int], List[DataRow]],
) -> RelationshipCache:
    """
    Pre-scan the relationship rows of every data type.

    Args:
        data_types: Data types selected for conversion
        row_loader: Returns the relationship rows of a data type id

    Returns:
        A populated RelationshipCache
    """
    cache = RelationshipCache()
    for data_type in data_types:
        for row in row_loader(data_type.id):
            cache.add(data_type.model_name, row.field, row.details)
            logger.debug(
                f"Cached relationship '{row.field}' of {data_type.model_name}: {row.details}"
            )
    return cache
