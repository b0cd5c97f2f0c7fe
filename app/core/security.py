import hmac
from typing import Optional
from app.core.config import settings
from app.core.errors import AuthError


def verify_upload_password(provided: Optional[str]) -> None:
    """Raise AuthError unless ``provided`` equals the configured upload secret.

    An unset secret rejects every request.
    """
    expected = settings.UPLOAD_PASSWORD or ""
    provided = provided or ""
    if not expected or not hmac.compare_digest(provided.encode(), expected.encode()):
        raise AuthError("Invalid upload password")
