"""Best-effort identification of the running process"""
import os
import socket
import subprocess
import threading
import logging
from pathlib import Path
from typing import Callable, List, Optional, Tuple

logger = logging.getLogger(__name__)

PROC_SELF = Path("/proc/self")
POSIX_SHELL = Path("/bin/sh")
DEFAULT_SHELL_TIMEOUT = 2.0
RUNTIME_NAME_SEPARATOR = "@"


def runtime_name() -> str:
    """Name of the running interpreter in the conventional ``<pid>@<hostname>`` form"""
    return f"{os.getpid()}{RUNTIME_NAME_SEPARATOR}{socket.gethostname()}"


class ProcessIdentityResolver:
    """Resolves a process identifier once and caches it for the process lifetime.

    Strategies are tried in order and the first one producing a value wins:

    * POSIX: the target of ``/proc/self``, then ``echo $PPID`` run through
      ``/bin/sh``.
    * Other platforms: the part of the runtime name before ``@``.
    * Always: the identifier of the resolving thread.

    Failures of individual strategies are logged at debug level and never
    propagate, so ``get()`` always returns a non-empty string.

    A forked child starts unresolved and computes its own identity.
    """

    def __init__(self,
                 proc_self: Path = PROC_SELF,
                 shell: Path = POSIX_SHELL,
                 timeout: float = DEFAULT_SHELL_TIMEOUT,
                 is_posix: Optional[bool] = None,
                 runtime_name_provider: Callable[[], Optional[str]] = runtime_name):
        self.proc_self = Path(proc_self)
        self.shell = Path(shell)
        self.timeout = timeout
        self.is_posix = os.name == "posix" if is_posix is None else is_posix
        self.runtime_name_provider = runtime_name_provider
        self.strategy_used: Optional[str] = None
        self._identity: Optional[str] = None
        self._lock = threading.Lock()

    def get(self) -> str:
        """Get the process identity, resolving it on first use"""
        identity = self._identity
        if identity is not None:
            return identity

        with self._lock:
            if self._identity is None:
                self._identity, self.strategy_used = self._resolve()
                logger.debug(f"Process identity resolved: {self._identity} (via {self.strategy_used})")
            return self._identity

    def configure(self, timeout: float) -> None:
        """Set the timeout of the shell fallback"""
        self.timeout = timeout

    def reset_after_fork(self) -> None:
        """Drop the inherited identity and lock in a forked child"""
        self._lock = threading.Lock()
        self._identity = None
        self.strategy_used = None

    @property
    def is_resolved(self) -> bool:
        return self._identity is not None

    def _strategies(self) -> List[Tuple[str, Callable[[], Optional[str]]]]:
        if self.is_posix:
            return [
                ("proc_self", self._from_proc_self),
                ("shell", self._from_shell),
            ]
        return [("runtime_name", self._from_runtime_name)]

    def _resolve(self) -> Tuple[str, str]:
        for name, strategy in self._strategies():
            try:
                identity = strategy()
            except Exception as e:
                logger.debug(f"Process identity strategy {name} failed: {e}")
                continue
            if identity:
                return identity, name

        # The final resort
        return str(threading.get_ident()), "thread_id"

    def _from_proc_self(self) -> Optional[str]:
        """Final segment of the resolved /proc/self link"""
        if not self.proc_self.exists():
            return None
        return self.proc_self.resolve(strict=True).name or None

    def _from_shell(self) -> Optional[str]:
        """First non-empty line printed by ``echo $PPID`` in a POSIX shell"""
        if not self.shell.exists():
            return None
        result = subprocess.run(
            [str(self.shell), "-c", "echo $PPID"],
            capture_output=True,
            text=True,
            timeout=self.timeout
        )
        for line in result.stdout.splitlines():
            if line.strip():
                return line.strip()
        return None

    def _from_runtime_name(self) -> Optional[str]:
        """Numeric part of a ``<pid>@<hostname>`` runtime name"""
        name = self.runtime_name_provider()
        if not name:
            return None
        separator = name.find(RUNTIME_NAME_SEPARATOR)
        if separator > 0:
            return name[:separator]
        return None


# Global instance for easy access
process_identity = ProcessIdentityResolver()

if hasattr(os, "register_at_fork"):
    os.register_at_fork(after_in_child=process_identity.reset_after_fork)


def get_process_identity() -> str:
    """Get the identity of the current process"""
    return process_identity.get()
