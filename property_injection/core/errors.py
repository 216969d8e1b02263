"""Error definitions for property injection."""

from typing import Optional, Dict, Any


class ServiceError(Exception):
    """Base exception for service errors."""
    
    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        details: Optional[Dict[str, Any]] = None
    ):
        super().__init__(message)
        self.error_code = error_code or "SERVICE_ERROR"
        self.details = details or {}


class ConfigurationError(ServiceError):
    """Configuration related errors."""
    
    def __init__(self, message: str, config_key: Optional[str] = None):
        super().__init__(
            message,
            error_code="CONFIGURATION_ERROR",
            details={"config_key": config_key} if config_key else {}
        )


class DependencyError(ServiceError):
    """Dependency resolution errors."""
    
    def __init__(self, message: str, dependency: Optional[str] = None):
        super().__init__(
            message,
            error_code="DEPENDENCY_ERROR",
            details={"dependency": dependency} if dependency else {}
        )


class InjectionError(ServiceError):
    """Base for errors raised while injecting into a constructed service."""


class DuplicateInjectionError(InjectionError):
    """Property was already injected on this instance."""
    
    def __init__(self, property_name: str):
        super().__init__(
            f"Error when injecting property '{property_name}'. Injection was done already.",
            error_code="DUPLICATE_INJECTION",
            details={"property": property_name}
        )
        self.property_name = property_name


class InjectionAfterCompletionError(InjectionError):
    """Injection attempted after the injection process was completed."""
    
    def __init__(self, property_name: str):
        super().__init__(
            f"Error when injecting property '{property_name}'. "
            f"Cannot inject when injection process was completed before.",
            error_code="INJECTION_COMPLETED",
            details={"property": property_name}
        )
        self.property_name = property_name


class UnknownPropertyError(InjectionError):
    """Injection target is not a declared property of the service class."""
    
    def __init__(self, class_name: str, property_name: str):
        super().__init__(
            f"{class_name} has no declared property '{property_name}'",
            error_code="UNKNOWN_PROPERTY",
            details={"class": class_name, "property": property_name}
        )
        self.property_name = property_name
