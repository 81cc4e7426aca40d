"""Runtime context the environment tags are evaluated against"""
import logging
import threading
from dataclasses import dataclass
from typing import Optional
from .tags import Mode

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RuntimeContext:
    """Current mode, profile and node group of the process"""
    mode: Mode
    profile: Optional[str] = None
    node_group: Optional[str] = None

    @classmethod
    def from_config(cls, config) -> "RuntimeContext":
        """Build a context from a Config; empty labels become None"""
        return cls(
            mode=config.mode,
            profile=config.profile or None,
            node_group=config.node_group or None,
        )

    def as_dict(self) -> dict:
        return {
            "mode": self.mode.value,
            "profile": self.profile,
            "node_group": self.node_group,
        }


class EnvironmentContext:
    """Singleton provider of the process-wide runtime context"""

    _instance: Optional['EnvironmentContext'] = None

    def __new__(cls) -> 'EnvironmentContext':
        if cls._instance is None:
            cls._instance = super().__new__(cls)
        return cls._instance

    def __init__(self):
        if not hasattr(self, '_initialized'):
            self._lock = threading.Lock()
            self._context: Optional[RuntimeContext] = None
            self._initialized = True

    def initialize(self, config=None, force_reload: bool = False) -> RuntimeContext:
        """Load the runtime context from configuration (once unless forced)"""
        with self._lock:
            if self._context is None or force_reload:
                if config is None:
                    from config import Config
                    config = Config()
                self._context = RuntimeContext.from_config(config)
                logger.info(
                    f"Runtime context initialized: mode={self._context.mode.value} "
                    f"profile={self._context.profile} node_group={self._context.node_group}"
                )
            return self._context

    def get_runtime_context(self) -> RuntimeContext:
        """Get the current runtime context (initialize if needed)"""
        context = self._context
        if context is None:
            return self.initialize()
        return context

    def override(self, context: RuntimeContext) -> None:
        """Install an explicit context, replacing any loaded one"""
        with self._lock:
            self._context = context

    def reset(self) -> None:
        """Forget the loaded context so the next access reloads it"""
        with self._lock:
            self._context = None


# Global instance for easy access
runtime_context = EnvironmentContext()
