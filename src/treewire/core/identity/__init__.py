"""Instance identity: arena handles."""

from treewire.core.identity.models import InstanceId

__all__ = ["InstanceId"]
