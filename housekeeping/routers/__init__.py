# API Routers
from housekeeping.routers import auth, hotels, rooms, users, incidents, ws

__all__ = ['auth', 'hotels', 'rooms', 'users', 'incidents', 'ws']
