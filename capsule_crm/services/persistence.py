"""Persistence gateway for the CapsuleCRM kase endpoints"""
import logging
from datetime import date, datetime
from typing import Optional, Union
from urllib.parse import quote

from capsule_crm.connection import Connection

logger = logging.getLogger(__name__)

LASTMODIFIED_FORMAT = "%Y%m%dT%H%M%S"


class CasePersistenceGateway:
    """Maps case persistence onto the /api/kase endpoints"""

    def __init__(self, connection: Connection):
        self.connection = connection

    def create(self, party_id: int, body: dict, track_id: Optional[int] = None) -> dict:
        """
        Create a case under a party

        Args:
            party_id: Party that owns the case
            body: Serialized {"kase": {...}} body
            track_id: Optional track applied on creation

        Returns:
            The transport response ({"id": ...} or the kase body)
        """
        path = f"/api/party/{party_id}/kase"
        if track_id:
            path += f"?trackId={track_id}"
        response = self.connection.post(path, body)
        logger.info(f"Created kase for party {party_id} | response={response}")
        return response

    def update(self, case_id: int, body: dict) -> Union[dict, bool]:
        response = self.connection.put(f"/api/kase/{case_id}", body)
        logger.info(f"Updated kase {case_id}")
        return response

    def delete(self, case_id: int) -> bool:
        deleted = self.connection.delete(f"/api/kase/{case_id}")
        if deleted:
            logger.info(f"Deleted kase {case_id}")
        return deleted

    def find(self, case_id: int) -> dict:
        return self.connection.get(f"/api/kase/{case_id}")

    def all(
        self,
        lastmodified: Optional[Union[date, datetime, str]] = None,
        start: Optional[int] = None,
        limit: Optional[int] = None,
        tag: Optional[str] = None,
        q: Optional[str] = None
    ) -> dict:
        """
        List cases

        Args:
            lastmodified: Only cases changed since then (date, datetime or
                an already formatted YYYYMMDDTHHMMSS string)
            start: Offset of the first result
            limit: Maximum number of results
            tag: Only cases carrying this tag
            q: Free text search

        Returns:
            The {"kases": ...} collection payload
        """
        if isinstance(lastmodified, (date, datetime)):
            lastmodified = lastmodified.strftime(LASTMODIFIED_FORMAT)
        params = {
            "lastmodified": lastmodified,
            "start": start,
            "limit": limit,
            "tag": tag,
            "q": q,
        }
        params = {key: value for key, value in params.items() if value is not None}
        return self.connection.get("/api/kase", params=params or None)

    def for_party(self, party_id: int) -> dict:
        return self.connection.get(f"/api/party/{party_id}/kase")

    def tags(self, case_id: int) -> dict:
        return self.connection.get(f"/api/kase/{case_id}/tag")

    def add_tag(self, case_id: int, name: str) -> dict:
        return self.connection.post(f"/api/kase/{case_id}/tag/{quote(name, safe='')}")

    def remove_tag(self, case_id: int, name: str) -> bool:
        return self.connection.delete(f"/api/kase/{case_id}/tag/{quote(name, safe='')}")
