"""Failures raised by the core; the router turns each into a response envelope."""


class ChainError(Exception):
    """Base class for every failure the router reports to a caller."""

    code = "chain_error"

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


class InvalidArguments(ChainError):
    """Raised when an operation receives the wrong number or shape of arguments."""

    code = "invalid_arguments"

    def __init__(self, message: str, expected: int | None = None) -> None:
        self.expected = expected
        super().__init__(message)

    @classmethod
    def arity(cls, expected: int) -> "InvalidArguments":
        return cls(f"Incorrect number of arguments. Expecting {expected}", expected=expected)


class AlreadyEnrolled(ChainError):
    """Raised when enrolling a device id that already has a record."""

    code = "already_enrolled"

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__("Device already enrolled")


class DeviceNotEnrolled(ChainError):
    """Raised when an operation needs a device record that does not exist."""

    code = "device_not_enrolled"

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__("Device not enrolled")


class DeviceAlreadyBound(ChainError):
    """Raised when binding a good to a device that already carries one."""

    code = "device_already_bound"

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__("Device already used")


class NotBound(ChainError):
    """Raised when a device has no good bound to it yet."""

    code = "not_bound"

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__("Wine not enrolled")


class WineRecordMissing(ChainError):
    """Raised when a bound device has no wine record under its key."""

    code = "wine_record_missing"

    def __init__(self, device_id: str) -> None:
        self.device_id = device_id
        super().__init__(f"Wine record missing for device {device_id}")


class MalformedRecord(ChainError):
    """Raised when stored bytes do not decode into the expected record."""

    code = "malformed_record"


class UnknownOperation(ChainError):
    """Raised when the router is asked for an operation it does not know."""

    code = "unknown_operation"

    def __init__(self, operation: str) -> None:
        self.operation = operation
        super().__init__("Invalid Smart Contract function name.")


class CollaboratorError(ChainError):
    """Raised when the backing store fails (I/O, corrupt ledger file, ...)."""

    code = "collaborator_error"
