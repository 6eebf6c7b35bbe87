from __future__ import annotations

import logging
import uuid
from typing import Callable

from .repository import DeviceRepository

logger = logging.getLogger(__name__)


class DeviceFingerprint:
    """Stable per-device identifier.

    Hardware identifiers are not readable here, so a random UUID is created on
    first use and persisted. It is a continuity token, not a credential.
    """

    def __init__(self, devices: DeviceRepository, *, id_factory: Callable[[], str] | None = None):
        self._devices = devices
        self._id_factory = id_factory or (lambda: str(uuid.uuid4()))

    def device_id(self) -> str:
        device_id = self._devices.get_device_id()
        if not device_id:
            device_id = self._id_factory()
            self._devices.save_device_id(device_id)
            logger.info("Created device fingerprint %s", device_id)
        return device_id
