from .errors import ConvergenceTimeout, PreconditionFailed, ProbeError, ScriptError
from .harness import ConvergenceHarness, rand_string
from .resources import DNS_ENTRY, DNS_PROVIDER, STATE_DELETED, STATE_ERROR, STATE_READY, ResourceKind

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "ConvergenceHarness",
    "ConvergenceTimeout",
    "DNS_ENTRY",
    "DNS_PROVIDER",
    "PreconditionFailed",
    "ProbeError",
    "ResourceKind",
    "STATE_DELETED",
    "STATE_ERROR",
    "STATE_READY",
    "ScriptError",
    "rand_string",
]
