from .auth import User, SessionToken, ROLES, ROLE_MANAGER, ROLE_OWNER, ROLE_TENANT
from .properties import Property, Tenant, Lease
from .payments import Payment
from .maintenance import MaintenanceRequest
from .documents import Document

__all__ = [
    'User', 'SessionToken', 'ROLES', 'ROLE_MANAGER', 'ROLE_OWNER', 'ROLE_TENANT',
    'Property', 'Tenant', 'Lease',
    'Payment',
    'MaintenanceRequest',
    'Document',
]
