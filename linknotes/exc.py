class DoesNotExist(Exception):  # noqa: N818
    """Exception raised when a resource does not exist."""

    def __init__(self, resource_type: str, resource_id: int | str):
        self.resource_type = resource_type
        self.resource_id = resource_id
        super().__init__(f'{resource_type} with ID "{resource_id!s}" does not exist')


class DeserializationError(Exception):
    """Exception raised when a stored rich-document blob cannot be parsed."""

    def __init__(self, error: Exception | str):
        self.error = error
        super().__init__(f"Rich document could not be read: {error!s}")


class StorageError(Exception):
    """Base class for failures of the durable note store."""

    #: Prefix for the exception message.
    action: str = "Storage operation failed"

    def __init__(self, error: Exception):
        self.error = error
        super().__init__(f"{self.action}: {error!s}")

    @property
    def user_message(self) -> str:
        """
        A message suitable for showing to the user.
        """
        return f"The notes could not be accessed. {self.error!s}"


class StorageReadError(StorageError):
    """Exception raised when notes cannot be read from the store."""

    action = "Reading notes failed"


class StorageWriteError(StorageError):
    """Exception raised when pending changes cannot be committed."""

    action = "Saving notes failed"

    @property
    def user_message(self) -> str:
        return f"The note could not be saved. {self.error!s}"


class OutOfSpace(StorageWriteError):  # noqa: N818
    """Exception raised when a commit fails because storage is full."""

    action = "Saving notes failed, storage is full"

    @property
    def user_message(self) -> str:
        return (
            "There is not enough storage space to save the note. "
            "Free up some space and try again."
        )
