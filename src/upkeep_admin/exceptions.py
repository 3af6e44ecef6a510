"""
Custom exception classes for the upkeep admin adapter.

This module defines structured exception types for version resolution,
generation guards, event-log extraction and configuration loading.
"""


class UpkeepAdminError(Exception):
    """Base exception for all upkeep admin errors."""

    def __init__(self, message: str):
        self.message = message
        super().__init__(message)


class UnsupportedVersion(UpkeepAdminError):
    """A self-reported typeAndVersion string is not in the classification table."""

    def __init__(self, message: str, version: str = None):
        self.version = version
        super().__init__(message)


class UnsupportedRegistryVersion(UnsupportedVersion):
    """Registry reported a typeAndVersion this adapter cannot talk to."""

    def __init__(self, version: str = None):
        super().__init__("Unsupported KeeperRegistry typeAndVersion", version)


class UnsupportedRegistrarVersion(UnsupportedVersion):
    """Registrar reported a typeAndVersion this adapter cannot talk to."""

    def __init__(self, version: str = None):
        super().__init__("Unsupported KeeperRegistrar typeAndVersion", version)


class OperationNotSupportedForVersion(UpkeepAdminError):
    """Operation called against a generation that does not implement it."""

    def __init__(self, message: str = "This function is only supported for KeeperRegistrar2_1", operation: str = None):
        self.operation = operation
        super().__init__(message)


class MissingTriggerType(UpkeepAdminError):
    """Registrar keys its configuration per trigger type but none was given."""

    def __init__(self):
        super().__init__("'triggerType' must be provided for this typeAndVersion of the KeeperRegistrar")


class LogExtractionError(UpkeepAdminError):
    """Emitted events do not have the shape expected at the lookup position."""
    pass


class IntermediaryCreationError(UpkeepAdminError):
    """Cron factory call did not emit the upkeep creation event."""
    pass


class ConfigurationError(UpkeepAdminError):
    """Adapter configuration is missing a value an operation needs."""
    pass


class ManifestLoadError(UpkeepAdminError):
    """Error loading manifest file."""

    def __init__(self, file_name: str, message: str):
        self.file_name = file_name
        super().__init__(f"Error loading {file_name}: {message}")
        self.message = message
