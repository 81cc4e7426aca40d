"""Registry that activates components according to their environment tags"""
from dataclasses import dataclass
from typing import Any, Dict, List, Optional, Tuple
from logging_config import get_logger, log_component_gating
from .context import RuntimeContext, runtime_context
from .matching import EnvironmentMatcher
from .tags import EnvironmentTag


logger = get_logger(__name__)


@dataclass(frozen=True)
class ComponentDescriptor:
    """A registrable component and the environment tags it declares"""
    name: str
    target: Any
    env_tags: Tuple[EnvironmentTag, ...] = ()

    def __post_init__(self):
        # Accept any iterable of tags but store an immutable, ordered tuple
        object.__setattr__(self, "env_tags", tuple(self.env_tags))


class ComponentRegistry:
    """Keeps the components that are active in the current environment"""

    def __init__(self, context: Optional[RuntimeContext] = None):
        self._context = context
        self.active: Dict[str, ComponentDescriptor] = {}
        self.skipped: Dict[str, ComponentDescriptor] = {}

    @property
    def context(self) -> RuntimeContext:
        if self._context is None:
            return runtime_context.get_runtime_context()
        return self._context

    def register(self, descriptor: ComponentDescriptor) -> bool:
        """Register a component; returns True if it was activated"""
        if not isinstance(descriptor, ComponentDescriptor):
            raise ValueError("Component must be described by a ComponentDescriptor")

        self.active.pop(descriptor.name, None)
        self.skipped.pop(descriptor.name, None)

        is_active = EnvironmentMatcher.matches_all(descriptor.env_tags, self.context)
        if is_active:
            self.active[descriptor.name] = descriptor
        else:
            self.skipped[descriptor.name] = descriptor

        log_component_gating(logger, descriptor.name, is_active, descriptor.env_tags)
        return is_active

    def register_all(self, descriptors) -> List[str]:
        """Register several components; returns the names that were activated"""
        return [d.name for d in descriptors if self.register(d)]

    def get(self, name: str) -> Optional[Any]:
        """Get the target of an active component"""
        descriptor = self.active.get(name)
        return descriptor.target if descriptor else None

    def list_active(self) -> List[str]:
        return list(self.active.keys())

    def list_skipped(self) -> List[str]:
        return list(self.skipped.keys())

    def get_component_status(self) -> Dict[str, Dict[str, Any]]:
        """Status of every registered component"""
        status = {}
        for name, descriptor in list(self.active.items()) + list(self.skipped.items()):
            status[name] = {
                "active": name in self.active,
                "tags": [
                    {"kind": tag.kind, "value": tag.value, "unless": tag.unless}
                    for tag in EnvironmentMatcher.environment_tags(descriptor.env_tags)
                ],
            }
        return status
