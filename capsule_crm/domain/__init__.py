from .models import Party, Track, Task
from .case import Case, CASE_STATUSES

__all__ = [
    'Party', 'Track', 'Task',
    'Case', 'CASE_STATUSES'
]
