# errors.py


class ApiError(Exception):
    """
    An error that is sent to the client as-is: the response status is
    ``status_code`` and the JSON body is ``data``.
    """

    def __init__(self, status_code, data):
        super().__init__(data)
        self.status_code = status_code
        self.data = data


class ClientRoutingError(ApiError):
    def __init__(self):
        super().__init__(404, {"message": "Not Found"})


class MalformedBodyError(ApiError):
    def __init__(self):
        super().__init__(400, {"message": "Bad Request"})


class StorageCorruptionError(Exception):
    """The order document exists but does not hold a JSON array."""
