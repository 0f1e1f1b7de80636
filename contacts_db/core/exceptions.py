class ContactsDBException(Exception):
    def __init__(self, message: str):
        self.message = message
        super().__init__(self.message)


class ConfigError(ContactsDBException):
    def __init__(self, message: str = "Invalid Configuration"):
        super().__init__(message)


class ConnectionFailed(ContactsDBException):
    def __init__(self, message: str = "Could not connect to DB"):
        super().__init__(message)


class SchemaError(ContactsDBException):
    def __init__(self, message: str = "Database initialization failed"):
        super().__init__(message)


class StorageError(ContactsDBException):
    def __init__(self, message: str = "DB Rollback Triggered"):
        super().__init__(message)


class InvalidValue(ContactsDBException):
    def __init__(self, message: str = "Invalid Value"):
        super().__init__(message)


class ElementDoesNotExist(ContactsDBException):
    def __init__(self, message: str = "Element Does Not Exist"):
        super().__init__(message)


class DataFileNotFound(ContactsDBException):
    def __init__(self, message: str = "Data file not found"):
        super().__init__(message)
