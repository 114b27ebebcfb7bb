class ServiceError(Exception):
    http_status = 500

    def __init__(self, reason: str):
        super().__init__(reason)
        self.reason = reason


class ValidationError(ServiceError):
    http_status = 400


class UnauthorizedError(ServiceError):
    http_status = 401


class ForbiddenError(ServiceError):
    http_status = 403


class NotFoundError(ServiceError):
    http_status = 404


class StorageError(ServiceError):
    http_status = 500
