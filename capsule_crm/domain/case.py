"""Case record: a CapsuleCRM case (a 'kase' on the wire)"""
import logging
from dataclasses import dataclass, field
from datetime import date, datetime
from decimal import Decimal
from typing import TYPE_CHECKING, Any, Dict, List, Mapping, Optional, Union

from capsule_crm.domain.models import Party, Track, Task
from capsule_crm.errors import CapsuleCRMError, RecordInvalid

if TYPE_CHECKING:
    from capsule_crm.services import CaseServices

logger = logging.getLogger(__name__)

CASE_STATUSES = ("OPEN", "CLOSED")
DEFAULT_STATUS = "OPEN"

ATTRIBUTE_NAMES = (
    "id", "name", "description", "status", "close_date", "owner", "party_id", "track_id",
)


def _coerce_date(value):
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, str) and value:
        return date.fromisoformat(value.split("T", 1)[0])
    return value or None


def _is_numeric(value) -> bool:
    if isinstance(value, bool):
        return False
    if isinstance(value, (int, float, Decimal)):
        return True
    if not isinstance(value, str):
        return False
    try:
        float(value.strip())
    except ValueError:
        return False
    return True


@dataclass
class Case:
    """
    In-memory projection of a CapsuleCRM case

    The record is composed with a CaseServices bundle (serializer,
    persistence gateway, association resolver); every operation that talks
    to CapsuleCRM goes through it.

    Attributes:
        id: Remote identifier, None until persisted
        name: Case name (required)
        description: Free text description
        status: OPEN or CLOSED
        close_date: When the case was/will be closed, ignored by Capsule
            unless status is CLOSED
        owner: Username of the owner
        party_id: Owning party (required)
        track_id: Track applied on creation
    """
    id: Optional[int] = None
    name: Optional[str] = None
    description: Optional[str] = None
    status: Optional[str] = None
    close_date: Optional[date] = None
    owner: Optional[str] = None
    party_id: Optional[int] = None
    track_id: Optional[int] = None
    services: Optional["CaseServices"] = field(default=None, repr=False, compare=False)
    errors: Dict[str, List[str]] = field(default_factory=dict, init=False, repr=False, compare=False)
    _party: Optional[Party] = field(default=None, init=False, repr=False, compare=False)
    _track: Optional[Track] = field(default=None, init=False, repr=False, compare=False)

    # Construction

    @classmethod
    def build(
        cls,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        services: Optional["CaseServices"] = None,
        **kwargs
    ) -> "Case":
        """Build an unsaved record from an attribute mapping (no network call)"""
        case = cls(services=services)
        case.assign_attributes({**(attributes or {}), **kwargs})
        return case

    @classmethod
    def create(
        cls,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        services: Optional["CaseServices"] = None,
        **kwargs
    ) -> "Case":
        """
        Create a case

        Args:
            attributes: Mapping of attributes:
                name - the case name (required)
                party - the owning Party (required), or party_id
                track - an optional Track, or track_id
                description, status (OPEN or CLOSED), owner, close_date
            services: CaseServices to persist through

        Returns:
            The Case, persisted when it was valid, unsaved (id None) otherwise
        """
        case = cls.build(attributes, services=services, **kwargs)
        case.save()
        return case

    @classmethod
    def create_or_raise(
        cls,
        attributes: Optional[Mapping[str, Any]] = None,
        *,
        services: Optional["CaseServices"] = None,
        **kwargs
    ) -> "Case":
        """
        Create a case or raise

        Raises:
            RecordInvalid: if the attributes do not validate
        """
        case = cls.build(attributes, services=services, **kwargs)
        case.save_or_raise()
        return case

    @classmethod
    def from_capsule_json(cls, payload: dict, services: "CaseServices") -> "Case":
        return cls.build(services.serializer.load(payload), services=services)

    # Querying

    @classmethod
    def find(cls, case_id: int, services: "CaseServices") -> "Case":
        """Fetch a single case by id"""
        return cls.from_capsule_json(services.gateway.find(case_id), services)

    @classmethod
    def all(cls, services: "CaseServices", **options) -> List["Case"]:
        """
        List cases

        Args:
            services: CaseServices to query through
            **options: lastmodified, start, limit, tag, q

        Returns:
            List of Case records
        """
        payload = services.gateway.all(**options)
        return [
            cls.build(attributes, services=services)
            for attributes in services.serializer.load_collection(payload)
        ]

    @classmethod
    def _for_party(cls, party_id: int, services: "CaseServices") -> List["Case"]:
        payload = services.gateway.for_party(party_id)
        return [
            cls.build(attributes, services=services)
            for attributes in services.serializer.load_collection(payload)
        ]

    @classmethod
    def _for_track(cls, track):
        raise NotImplementedError("There is no way to find cases by trackId in the Capsule API right now")

    # Attributes and associations

    def assign_attributes(self, attributes: Mapping[str, Any]) -> None:
        """Merge attributes into the record; unknown keys are ignored"""
        for key, value in attributes.items():
            if key == "party":
                self.party = value
            elif key == "track":
                self.track = value
            elif key == "close_date":
                self.close_date = _coerce_date(value)
            elif key == "party_id":
                self.party_id = value
                if self._party is not None and self._party.id != value:
                    self._party = None
            elif key == "track_id":
                self.track_id = value
                if self._track is not None and self._track.id != value:
                    self._track = None
            elif key in ATTRIBUTE_NAMES:
                setattr(self, key, value)
            else:
                logger.debug(f"Ignoring unknown case attribute '{key}'")

    @property
    def attributes(self) -> Dict[str, Any]:
        return {name: getattr(self, name) for name in ATTRIBUTE_NAMES}

    @property
    def party(self) -> Optional[Party]:
        if self._party is None and self.party_id is not None:
            self._party = self._require_services().associations.party(self.party_id)
        return self._party

    @party.setter
    def party(self, party: Optional[Party]) -> None:
        self._party = party
        self.party_id = party.id if party is not None else None

    @property
    def track(self) -> Optional[Track]:
        if self._track is None and self.track_id is not None:
            self._track = self._require_services().associations.track(self.track_id)
        return self._track

    @track.setter
    def track(self, track: Optional[Track]) -> None:
        self._track = track
        self.track_id = track.id if track is not None else None

    @property
    def tasks(self) -> List[Task]:
        """Tasks of this case, fetched on every access"""
        if self.new_record:
            return []
        return self._require_services().associations.tasks(self.id)

    # Validation

    def validate(self) -> Dict[str, List[str]]:
        """Run the validations and return field -> messages"""
        errors: Dict[str, List[str]] = {}
        if self.id not in (None, "") and not _is_numeric(self.id):
            errors.setdefault("id", []).append("is not a number")
        if self.name is None or not str(self.name).strip():
            errors.setdefault("name", []).append("can't be blank")
        if self.party_id is None:
            errors.setdefault("party", []).append("can't be blank")
        if self.status is not None and self.status not in CASE_STATUSES:
            errors.setdefault("status", []).append("is not included in the list")
        self.errors = errors
        return errors

    def valid(self) -> bool:
        return not self.validate()

    # Persistence

    @property
    def new_record(self) -> bool:
        return self.id in (None, "")

    @property
    def persisted(self) -> bool:
        return not self.new_record

    def update_attributes(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs) -> Union["Case", bool]:
        """
        Merge attributes and save

        Returns:
            The Case, or False when it does not validate
        """
        self.assign_attributes({**(attributes or {}), **kwargs})
        return self.save()

    def update_attributes_or_raise(self, attributes: Optional[Mapping[str, Any]] = None, **kwargs) -> "Case":
        self.assign_attributes({**(attributes or {}), **kwargs})
        return self.save_or_raise()

    def save(self) -> Union["Case", bool]:
        """
        Save this case, creating it when it is new

        Returns:
            The Case, or False (without any request) when invalid
        """
        if not self.valid():
            logger.debug(f"Not saving invalid case: {self.errors}")
            return False
        return self._persist()

    def save_or_raise(self) -> "Case":
        """
        Save this case or raise

        Raises:
            RecordInvalid: if the case does not validate
        """
        if not self.valid():
            raise RecordInvalid(self)
        return self._persist()

    def destroy(self) -> "Case":
        """
        Delete this case from CapsuleCRM

        The id is cleared only when the delete succeeds, leaving a detached
        record. A new record is returned untouched.
        """
        if self.new_record:
            return self
        if self._require_services().gateway.delete(self.id):
            self.id = None
        return self

    def to_capsule_json(self) -> dict:
        return self._require_services().serializer.dump(self)

    # Tags

    def tags(self) -> List[str]:
        services = self._require_persisted()
        return services.serializer.load_tags(services.gateway.tags(self.id))

    def add_tag(self, name: str) -> "Case":
        self._require_persisted().gateway.add_tag(self.id, name)
        return self

    def remove_tag(self, name: str) -> "Case":
        self._require_persisted().gateway.remove_tag(self.id, name)
        return self

    # Internals

    def _persist(self) -> "Case":
        if self.new_record:
            self._create_record()
        else:
            self._update_record()
        return self

    def _create_record(self) -> "Case":
        services = self._require_services()
        response = services.gateway.create(self.party_id, self.to_capsule_json(), track_id=self.track_id)
        self.assign_attributes(services.serializer.load(response, partial=True))
        if self.status is None:
            self.status = DEFAULT_STATUS
        return self

    def _update_record(self):
        # The PUT response is returned as-is and not merged into the record
        return self._require_services().gateway.update(self.id, self.to_capsule_json())

    def _require_services(self) -> "CaseServices":
        if self.services is None:
            raise CapsuleCRMError("Case is not bound to a CapsuleCRM connection")
        return self.services

    def _require_persisted(self) -> "CaseServices":
        if self.new_record:
            raise CapsuleCRMError("Case must be saved before it can be tagged")
        return self._require_services()
