from __future__ import annotations

import logging
from typing import Dict, Sequence

from photo_objects.core.models import Capability, PermissionStatus

from .providers import PermissionProvider

logger = logging.getLogger(__name__)

CAPTURE_CAPABILITIES = (Capability.CAMERA, Capability.STORAGE)


async def ensure_permissions(
    provider: PermissionProvider,
    capabilities: Sequence[Capability] = CAPTURE_CAPABILITIES,
) -> bool:
    """
    Check each capability and, if any is missing, ask for all of them in one request.

    Statuses are read fresh on every call. A capability missing from the request
    response counts as denied.
    """
    statuses: Dict[Capability, PermissionStatus] = {}
    for capability in capabilities:
        statuses[capability] = await provider.check_status(capability)
    logger.debug("Permission status: %s", {c.value: s.value for c, s in statuses.items()})

    if all(status == PermissionStatus.GRANTED for status in statuses.values()):
        return True

    granted = await provider.request(list(capabilities))
    statuses = {
        capability: granted.get(capability, PermissionStatus.DENIED)
        for capability in capabilities
    }
    if all(status == PermissionStatus.GRANTED for status in statuses.values()):
        return True

    logger.info(
        "Permissions denied: %s",
        ", ".join(c.value for c, s in statuses.items() if s != PermissionStatus.GRANTED),
    )
    return False
