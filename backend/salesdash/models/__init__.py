from .kv import KeyValueEntry
from .records import User, Sale, ROLE_ADMIN, ROLE_USER, ROLES

__all__ = [
    'KeyValueEntry',
    'User', 'Sale',
    'ROLE_ADMIN', 'ROLE_USER', 'ROLES',
]
