"""Exception types raised while merging icons into generated modules."""


class IconMergeError(Exception):
    """Base class for all icon merge failures."""


class InvalidIdentifierError(IconMergeError, ValueError):
    """Raised when an icon identifier or component name is malformed."""


class ReservedNameError(InvalidIdentifierError):
    """Raised when a component name collides with a generated folder file."""


class NameCollisionError(IconMergeError):
    """Raised when a custom name is requested for more than one icon."""


class FetchError(IconMergeError):
    """Raised when the registry cannot supply an icon."""


class MalformedSvgError(IconMergeError, ValueError):
    """Raised when SVG markup does not contain exactly one <svg> root."""


class UnsupportedDialectError(IconMergeError, ValueError):
    """Raised for a component dialect with no descriptor."""

    def __init__(self, dialect: str):
        super().__init__(f"Unsupported framework: {dialect}")
        self.dialect = dialect


class MalformedModuleError(IconMergeError, ValueError):
    """Raised when a module falls outside the generated vocabulary."""


class EntryNotFoundError(IconMergeError, LookupError):
    """Raised when a mutation targets an entry the module does not contain."""


class DuplicateEntryError(IconMergeError, ValueError):
    """Raised when inserting a name the module already contains."""


class DocumentIoError(IconMergeError):
    """Raised when a generated file cannot be read or written."""


class ConfigError(IconMergeError):
    """Base class for configuration precondition failures."""


class ConfigMissingError(ConfigError):
    """Raised when the project has no configuration file."""


class ConfigInvalidError(ConfigError):
    """Raised when the configuration file cannot be parsed or validated."""


class HookError(IconMergeError):
    """Raised when a user hook exits with a failure."""


class BatchCancelled(IconMergeError):
    """Raised when the user cancels at a confirmation prompt."""
