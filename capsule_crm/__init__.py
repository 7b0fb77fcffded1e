from .config import Settings, get_settings
from .connection import Connection
from .errors import (
    CapsuleCRMError,
    RecordInvalid,
    ResponseError,
    BadRequest,
    Unauthorized,
    NotFound,
    InternalServerError,
)
from .domain import Case, Party, Track, Task
from .services import CaseServices, CaseSerializer, CasePersistenceGateway, AssociationResolver
from .client import CapsuleCRM, CaseManager

__all__ = [
    'Settings', 'get_settings', 'Connection',
    'CapsuleCRMError', 'RecordInvalid', 'ResponseError',
    'BadRequest', 'Unauthorized', 'NotFound', 'InternalServerError',
    'Case', 'Party', 'Track', 'Task',
    'CaseServices', 'CaseSerializer', 'CasePersistenceGateway', 'AssociationResolver',
    'CapsuleCRM', 'CaseManager'
]
