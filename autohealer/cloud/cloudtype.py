"""Detect the deployment flavor of the target cloud from the environment."""

from __future__ import annotations

import os
from typing import Mapping, Optional

from .base import CloudType

CLOUD_TYPE_ENV = "OS_CLOUD_TYPE"

_RESTRICTED_TOKENS = {"ospc"}


def detect_cloud_type(environ: Optional[Mapping[str, str]] = None) -> CloudType:
    """Classify the cloud as standard or OSPC.

    Unset, empty and unrecognized values all mean STANDARD.
    """
    if environ is None:
        environ = os.environ
    value = (environ.get(CLOUD_TYPE_ENV) or "").strip().lower()
    if value in _RESTRICTED_TOKENS:
        return CloudType.OSPC
    return CloudType.STANDARD
