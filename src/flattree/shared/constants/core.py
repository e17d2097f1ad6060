"""
Core Constants

Application identity, conflict naming and logging defaults.
"""


class Application:
    """Application identity."""

    NAME = "flattree"
    VERSION = "0.1.0"
    ENV_PREFIX = "FLATTREE_"


class ConflictNaming:
    """Conflict suffix scheme: ``stem_N.ext``."""

    SEPARATOR = "_"
    FIRST_INDEX = 1


class Logging:
    """Logging defaults."""

    ROOT_LOGGER = "flattree"
    DEFAULT_LEVEL = "WARNING"
    MAX_BYTES = 10 * 1024 * 1024  # 10MB
    BACKUP_COUNT = 5
