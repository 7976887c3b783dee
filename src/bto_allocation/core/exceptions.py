"""
Custom Exception Hierarchy
Domain and application-level exceptions
"""


class DomainException(Exception):
    """Base exception for all domain errors"""
    pass


class ValidationException(DomainException):
    """Malformed or out-of-range input"""
    
    def __init__(self, field: str, message: str):
        self.field = field
        self.message = message
        super().__init__(f"{field}: {message}")


class ConflictException(DomainException):
    """Operation would break a cross-entity invariant"""
    pass


class StateException(DomainException):
    """Lifecycle state forbids the requested action"""
    
    def __init__(self, entity: str, state: str, action: str):
        self.entity = entity
        self.state = state
        self.action = action
        super().__init__(f"Cannot {action} {entity} in state {state}")


class AuthenticationException(DomainException):
    """Authentication failed"""
    pass


class AuthorizationException(DomainException):
    """User not authorized for this operation"""
    pass


class RepositoryException(DomainException):
    """Persistence operation failed"""
    pass


class ResourceNotFoundException(DomainException):
    """Requested resource not found"""
    
    def __init__(self, resource_type: str, identifier: str):
        self.resource_type = resource_type
        self.identifier = identifier
        super().__init__(f"{resource_type} not found: {identifier}")


class DuplicateResourceException(ConflictException):
    """Resource already exists"""
    
    def __init__(self, resource_type: str, field: str, value: str):
        self.resource_type = resource_type
        self.field = field
        self.value = value
        super().__init__(f"{resource_type} with {field}='{value}' already exists")
