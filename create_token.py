"""Print a development access token for a tenant admin.

Usage:
    python create_token.py <tenant_id> [user_id] [email]
"""
import sys

from cashless_hub_api.app.core.security import UserRole, create_access_token

if len(sys.argv) < 2:
    sys.exit(__doc__)

tenant_id = sys.argv[1]
user_id = sys.argv[2] if len(sys.argv) > 2 else "dev-admin"
email = sys.argv[3] if len(sys.argv) > 3 else "admin@example.com"
# valid for 365 days
token = create_access_token(
    {
        "userId": user_id,
        "email": email,
        "globalRole": UserRole.TENANT_ADMIN.value,
        "tenantId": tenant_id,
        "tenantRole": UserRole.TENANT_ADMIN.value,
    },
    expires_delta=365 * 24 * 60 * 60,
)
print(token)
