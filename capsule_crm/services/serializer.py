"""Conversion between Case records and the CapsuleCRM kase JSON envelope"""
import logging
from typing import List

from capsule_crm.domain.case import DEFAULT_STATUS
from capsule_crm.schemas import CaseSchema, TagSchema, collection_items

logger = logging.getLogger(__name__)


class CaseSerializer:
    """Serializer for the kase / kases envelopes"""

    root = "kase"
    collection_root = "kases"
    # id travels in the URL; track_id only as the trackId query parameter on create
    excluded_keys = {"id", "track_id"}

    def dump(self, case) -> dict:
        """
        Build the request body for a create or update

        Args:
            case: Record exposing the CaseSchema attribute names

        Returns:
            {"kase": {...}} with camelCase keys and empty values dropped
        """
        values = {name: getattr(case, name, None) for name in CaseSchema.model_fields}
        values = {name: value for name, value in values.items() if name not in self.excluded_keys}
        body = CaseSchema.model_validate(values).model_dump(
            mode="json",
            by_alias=True,
            exclude_none=True,
        )
        return {self.root: {key: value for key, value in body.items() if value != ""}}

    def load(self, payload: dict, partial: bool = False) -> dict:
        """
        Turn a kase payload into snake_case record attributes

        Args:
            payload: Either {"kase": {...}} or the bare kase object
            partial: When True only the non-null keys present in the
                payload are returned; full records get the server default
                status

        Returns:
            Dict of typed attributes
        """
        data = payload.get(self.root, payload) if payload else {}
        attributes = CaseSchema.model_validate(data).model_dump(exclude_unset=True)
        if partial:
            return {key: value for key, value in attributes.items() if value is not None}
        if attributes.get("status") is None:
            attributes["status"] = DEFAULT_STATUS
        return attributes

    def load_collection(self, payload: dict) -> List[dict]:
        items = collection_items(payload or {}, self.collection_root, self.root)
        logger.debug(f"Loaded {len(items)} kases")
        return [self.load(item) for item in items]

    def load_tags(self, payload: dict) -> List[str]:
        items = collection_items(payload or {}, "tags", "tag")
        return [TagSchema.model_validate(item).name for item in items]
