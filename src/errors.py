"""Exception types raised by resolution, versioning and inference code."""


class ModtreeError(Exception):
    """Base class for fatal resolution errors."""


class ManifestFormatError(ModtreeError):
    """An upstream file no longer follows the expected format."""


class InstallerError(ModtreeError):
    """The loader installer did not produce the expected output."""


class MissingArtifactError(ModtreeError):
    """A required artifact was not found at any probed location."""

    def __init__(self, message: str, checked_paths=None):
        super().__init__(message)
        self.checked_paths = list(checked_paths or [])


class PromotionNotFoundError(ModtreeError):
    """No concrete version matches a promotion label, even after fallback."""


class IndexFetchError(ModtreeError):
    """A remote version index could not be fetched or parsed."""
