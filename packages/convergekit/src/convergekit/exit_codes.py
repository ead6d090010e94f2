from __future__ import annotations

OK = 0
ERR_USAGE = 2
ERR_CONFIG = 10
ERR_PREREQ = 11
ERR_TIMEOUT = 12
ERR_VALIDATION = 13
ERR_PROBE = 14
ERR_SKIPPED = 15
ERR_INTERNAL = 99
