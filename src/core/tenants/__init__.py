from src.core.tenants.models import Tenant, TenantRole, TenantUser
from src.core.tenants.service import TenantScope, TenantService

__all__ = ["Tenant", "TenantRole", "TenantUser", "TenantScope", "TenantService"]
