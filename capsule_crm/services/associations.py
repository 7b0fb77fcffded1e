"""Resolves the Party, Track and Task associations of a case"""
import logging
from typing import List, Optional

from capsule_crm.connection import Connection
from capsule_crm.domain.models import Party, Track, Task
from capsule_crm.errors import CapsuleCRMError
from capsule_crm.schemas import PartySchema, TrackSchema, TaskSchema, collection_items

logger = logging.getLogger(__name__)

PARTY_TYPES = ("person", "organisation")


class AssociationResolver:
    """Loads associated records on demand"""

    def __init__(self, connection: Connection):
        self.connection = connection

    def party(self, party_id: int) -> Party:
        """Fetch the party (person or organisation) a case belongs to"""
        payload = self.connection.get(f"/api/party/{party_id}")
        for party_type in PARTY_TYPES:
            if party_type in payload:
                schema = PartySchema.model_validate(payload[party_type])
                return Party(type=party_type, **schema.model_dump())
        raise CapsuleCRMError(f"Unexpected party payload for id {party_id}: {sorted(payload)}")

    def track(self, track_id: int) -> Optional[Track]:
        # The API has no single-track endpoint
        payload = self.connection.get("/api/tracks")
        for item in collection_items(payload, "tracks", "track"):
            schema = TrackSchema.model_validate(item)
            if schema.id == int(track_id):
                return Track(**schema.model_dump())
        logger.warning(f"Track {track_id} not found")
        return None

    def tasks(self, case_id: int) -> List[Task]:
        payload = self.connection.get(f"/api/kase/{case_id}/tasks")
        return [
            Task(**TaskSchema.model_validate(item).model_dump())
            for item in collection_items(payload, "tasks", "task")
        ]
