class AppError(Exception):
    """Base app error."""


class ValidationError(AppError):
    pass


class PersistenceError(AppError):
    pass


class FxUnavailableError(AppError):
    pass
