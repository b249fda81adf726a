import logging
from typing import Optional, Any, Dict

from django.contrib.auth import get_user_model

from wellness.models import AuditEvent

User = get_user_model()
logger = logging.getLogger(__name__)


def log_action(*, user: Optional[User], action: str, object_type: Optional[str]=None, object_id: Optional[int]=None, detail: Optional[Dict[str, Any]]=None) -> AuditEvent:
    logger.info("audit %s user=%s %s=%s", action, getattr(user, 'id', None), object_type, object_id)
    return AuditEvent.objects.create(
        user=user if getattr(user, 'pk', None) else None,
        action=action,
        object_type=object_type, object_id=object_id,
        detail=detail or {},
    )
