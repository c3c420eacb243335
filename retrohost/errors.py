"""Error taxonomy shared by the save store, catalog client and session controller."""


class RetroHostError(Exception):
    """Base class for RetroHost errors."""


class SaveNotFound(RetroHostError):
    """No save exists for the key. Expected outcome, not a failure."""


class TransportFailure(RetroHostError):
    """Network or backend error (including timeouts) on a save-store read or write."""


class CapabilityUnavailable(RetroHostError):
    """Emulator not initialized yet."""


class NothingToPersist(RetroHostError):
    """Emulator is ready but reports no save data."""


class ConfigurationError(RetroHostError):
    """Missing required session parameters; fatal for the session."""


class CatalogUnavailable(RetroHostError):
    """Catalog (systems or ROM list) could not be fetched."""
