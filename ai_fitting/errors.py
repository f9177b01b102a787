"""Exceptions raised while preparing or running a fitting."""


class FittingError(Exception):
    """Base class. The message is already localized for display."""


class InputValidationError(FittingError):
    """The user has not selected the images a fitting needs."""


class MissingPersonImageError(InputValidationError):
    pass


class MissingGarmentImageError(InputValidationError):
    pass


class UnsupportedImageTypeError(InputValidationError):
    """An upload that is not a PNG, JPEG or WEBP image."""


class MissingCredentialError(FittingError):
    """No API key is configured."""


class GenerationFailedError(FittingError):
    """The image model call failed or was rejected."""


class NoImageGeneratedError(FittingError):
    """The model answered without any inline image."""
