"""Capability checks for quick edit fields"""

from typing import Callable, Iterable, Optional

from fastapi import Request

from core.settings import settings

# (capability, object_id=None) -> bool
CurrentUserCan = Callable[..., bool]

# Capabilities checked against a single object, mapped to the primitive the user must hold
META_CAPABILITIES = {
    "edit_post": "edit_posts",
    "delete_post": "delete_posts",
    "read_post": "read",
}


class CapabilityChecker:
    """Answers capability checks from a fixed set of granted capabilities"""

    def __init__(self, capabilities: Iterable[str]):
        self.capabilities = frozenset(capabilities)

    def __call__(self, capability: str, object_id: Optional[int] = None) -> bool:
        capability = META_CAPABILITIES.get(capability, capability)
        return capability in self.capabilities


def get_current_user_can(request: Request) -> CurrentUserCan:
    """
    FastAPI dependency returning the permission oracle for this request.

    Hosts that authenticate users set request.state.capabilities in a
    middleware; otherwise the QUICK_EDIT_CAPABILITIES setting applies.
    """
    capabilities = getattr(request.state, "capabilities", None)
    if capabilities is None:
        capabilities = settings.capabilities
    return CapabilityChecker(capabilities)
