"""
Bundled endpoint definitions.

Importing this package registers every endpoint with the request registry.
"""

from .memberships import CreateMembership, DestroyMembership, GetMembership, GetUserMemberships
from .users import CreateUser, DestroyUser, GetCurrentUser, GetUser, GetUsers, UpdateUser

__all__ = [
    'CreateMembership',
    'CreateUser',
    'DestroyMembership',
    'DestroyUser',
    'GetCurrentUser',
    'GetMembership',
    'GetUser',
    'GetUserMemberships',
    'GetUsers',
    'UpdateUser',
]
