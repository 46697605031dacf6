from .api import ApiError, BloodBondClient
from .session import SessionStore

__all__ = ['ApiError', 'BloodBondClient', 'SessionStore']
