# ABOUTME: Error taxonomy for location, network, and storage failures.
# ABOUTME: The str() of every error is the human-readable message shown in a Failed view state.


class LocationError(Exception):
    """Base class for failures resolving the device location."""


class PermissionDeniedError(LocationError):
    def __init__(self):
        super().__init__("Location permission denied. Please enable location access in Settings.")


class LocationUnavailableError(LocationError):
    def __init__(self):
        super().__init__("Could not determine your location. Please try again.")


class UnknownLocationError(LocationError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Location error: {cause}")


class NetworkError(Exception):
    """Base class for failures talking to the weather or geocoding endpoints."""


class InvalidInputError(NetworkError):
    def __init__(self, detail: str = "invalid request"):
        super().__init__(f"Invalid request: {detail}")


class NoDataError(NetworkError):
    def __init__(self):
        super().__init__("No data received")


class DecodingError(NetworkError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Could not decode response: {cause}")


class TransportError(NetworkError):
    def __init__(self, cause: BaseException):
        self.cause = cause
        super().__init__(f"Network error: {cause}")


class ServerError(NetworkError):
    def __init__(self, status_code: int):
        self.status_code = status_code
        super().__init__(f"Server error with status code {status_code}")


class StorageError(Exception):
    """Base class for history persistence failures. Never surfaced as a view state."""


class StorageEncodingError(StorageError):
    def __init__(self):
        super().__init__("Could not encode data")


class StorageDecodingError(StorageError):
    def __init__(self):
        super().__init__("Could not decode stored data")


class StorageWriteError(StorageError):
    def __init__(self):
        super().__init__("Could not write data")


class StorageReadError(StorageError):
    def __init__(self):
        super().__init__("Could not read data")
