from __future__ import annotations

from typing import Any, Mapping, Optional, Protocol, Sequence, Union

from ..core.enums import DataType
from .model import Attribute, AttributeSpec, EntityRecord


class EavRepository(Protocol):
    """Data-access contract of one EAV catalog.

    Note (DIP): catalog services depend on this interface, not on MySQL.
    """

    def get_or_create_attribute(self, attribute_name: str, data_type: Union[DataType, str, None] = DataType.STRING) -> int:
        raise NotImplementedError

    def get_all_attributes(self) -> Sequence[Attribute]:
        raise NotImplementedError

    def create_entity(
        self,
        name: str,
        fields: Optional[Mapping[str, Any]] = None,
        attributes: Optional[Mapping[str, AttributeSpec]] = None,
    ) -> int:
        raise NotImplementedError

    def get_entity_by_id(self, entity_id: int) -> Optional[EntityRecord]:
        raise NotImplementedError

    def get_all_entities(self, include_inactive: bool = False, *, parent_id: Optional[int] = None) -> Sequence[EntityRecord]:
        raise NotImplementedError

    def update_entity(self, entity_id: int, updates: Mapping[str, Any]) -> Optional[EntityRecord]:
        raise NotImplementedError

    def delete_entity(self, entity_id: int) -> bool:
        raise NotImplementedError

    def set_attribute_value(
        self,
        entity_id: int,
        attribute_name: str,
        value: Any,
        data_type: Union[DataType, str, None] = None,
    ) -> None:
        raise NotImplementedError

    def set_entity_attributes(
        self,
        entity_id: int,
        attributes: Mapping[str, AttributeSpec],
        *,
        atomic: bool = False,
    ) -> None:
        raise NotImplementedError

    def search_entities(self, search_term: str, attribute_name: Optional[str] = None) -> Sequence[EntityRecord]:
        raise NotImplementedError
