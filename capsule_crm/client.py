"""Entry point tying configuration, transport and case services together"""
import logging
from typing import Any, List, Mapping, Optional

import httpx

from capsule_crm.config import Settings, get_settings
from capsule_crm.connection import Connection
from capsule_crm.domain.case import Case
from capsule_crm.services import CaseServices

logger = logging.getLogger(__name__)


class CaseManager:
    """Case operations bound to one set of CaseServices"""

    def __init__(self, services: CaseServices):
        self.services = services

    def new(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs) -> Case:
        return Case.build(attributes, services=self.services, **kwargs)

    def create(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs) -> Case:
        return Case.create(attributes, services=self.services, **kwargs)

    def create_or_raise(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs) -> Case:
        return Case.create_or_raise(attributes, services=self.services, **kwargs)

    def find(self, case_id: int) -> Case:
        return Case.find(case_id, self.services)

    def all(self, **options) -> List[Case]:
        return Case.all(self.services, **options)

    def for_party(self, party_id: int) -> List[Case]:
        return Case._for_party(party_id, self.services)

    def for_track(self, track) -> List[Case]:
        return Case._for_track(track)


class CapsuleCRM:
    """
    CapsuleCRM API client

    Examples:
        with CapsuleCRM(Settings(capsule_account="acme", capsule_api_token="...")) as crm:
            kase = crm.cases.create(name="Renewal", party=party)
    """

    def __init__(self, settings: Optional[Settings] = None, http_client: Optional[httpx.Client] = None):
        self.settings = settings or get_settings()
        self.connection = Connection(self.settings, http_client=http_client)
        self.case_services = CaseServices.from_connection(self.connection)
        self.cases = CaseManager(self.case_services)
        logger.debug(f"CapsuleCRM client ready for {self.connection.client.base_url}")

    def __enter__(self) -> "CapsuleCRM":
        return self

    def __exit__(self, *exc_info) -> None:
        self.close()

    def close(self) -> None:
        self.connection.close()
