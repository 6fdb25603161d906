"""HTTP transport for credgate.

The auth blueprint exposes register, login and token introspection. Errors
raised by the service are mapped to status codes via STATUS_BY_KIND, one
entry per ErrorKind.
"""

from .auth import auth_bp
from .errors import STATUS_BY_KIND, error_body

__all__ = ["auth_bp", "STATUS_BY_KIND", "error_body"]
