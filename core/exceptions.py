from abc import ABC


class BaseCustomException(Exception, ABC):
    """
    Base class for all custom exceptions.
    """
    
    def __init__(self, message: str | None = None):
        self.message = message or self.get_default_message()
        super().__init__(self.message)
    
    def get_default_message(self) -> str:
        """
        Return default error message.
        
        Returns
        -------
        str
            Default error message
        """
        return "error.unknown"
    
    def get_status_code(self) -> int:
        """
        Return HTTP status code for exception.
        
        Returns
        -------
        int
            HTTP status code
        """
        return 500


class BadRequestException(BaseCustomException):
    """Bad request exception (400)."""
    
    def get_status_code(self) -> int:
        return 400


class NotFoundException(BaseCustomException):
    """Not found exception (404)."""
    
    def get_status_code(self) -> int:
        return 404


class UnprocessableException(BaseCustomException):
    """Unprocessable input exception (422)."""
    
    def get_status_code(self) -> int:
        return 422


class UnmappableTypeException(UnprocessableException):
    """Schema type without a TypeScript mapping."""
    
    def get_default_message(self) -> str:
        return "error.type.unmappable"


class InvalidSchemaException(UnprocessableException):
    """Entity schema document cannot be interpreted."""
    
    def get_default_message(self) -> str:
        return "error.schema.invalid"


class InvalidAbiException(UnprocessableException):
    """ABI document is malformed."""
    
    def get_default_message(self) -> str:
        return "error.abi.invalid"


class ManifestNotFoundException(NotFoundException):
    """Subgraph manifest not found."""
    
    def get_default_message(self) -> str:
        return "error.manifest.not_found"


class InvalidManifestException(BadRequestException):
    """Subgraph manifest or data source has an invalid shape."""
    
    def get_default_message(self) -> str:
        return "error.manifest.invalid"


class UnknownNetworkException(BadRequestException):
    """Network name without a chain id."""
    
    def get_default_message(self) -> str:
        return "error.network.unknown"


class MissingReferenceException(NotFoundException):
    """Referenced ABI or schema file cannot be resolved."""
    
    def get_default_message(self) -> str:
        return "error.reference.missing"


class ProjectConfigException(BadRequestException):
    """Project configuration artifact missing or malformed."""
    
    def get_default_message(self) -> str:
        return "error.config.invalid"
