# Entity Models
from housekeeping.models.ontology import (
    Hotel, Building, Room, User, Incident,
    RoomStatus, UserRole, IncidentStatus
)

__all__ = [
    'Hotel', 'Building', 'Room', 'User', 'Incident',
    'RoomStatus', 'UserRole', 'IncidentStatus'
]
