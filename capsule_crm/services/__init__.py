from dataclasses import dataclass

from .serializer import CaseSerializer
from .persistence import CasePersistenceGateway
from .associations import AssociationResolver


@dataclass
class CaseServices:
    """The collaborators a Case record is composed with"""
    serializer: CaseSerializer
    gateway: CasePersistenceGateway
    associations: AssociationResolver

    @classmethod
    def from_connection(cls, connection) -> "CaseServices":
        return cls(
            serializer=CaseSerializer(),
            gateway=CasePersistenceGateway(connection),
            associations=AssociationResolver(connection),
        )


__all__ = [
    'CaseSerializer', 'CasePersistenceGateway', 'AssociationResolver',
    'CaseServices'
]
