"""Configuration management for property injection."""

from typing import Optional, Dict, Any
from pydantic import BaseModel, Field
import os


class InjectionConfig(BaseModel):
    """Well-known operation names and build-pass policy."""
    
    inject_property_method: str = Field(
        default="inject_property",
        description="Operation called once per planned property"
    )
    inject_parameters_method: str = Field(
        default="inject_parameters",
        description="Operation receiving the container parameters"
    )
    injection_completed_method: str = Field(
        default="injection_completed",
        description="Operation marking injection as finished"
    )
    completion_hook: str = Field(
        default="on_injection_completed",
        description="Optional method invoked once injection completed"
    )
    reference_prefix: str = Field(
        default="@",
        description="Prefix marking a setup argument as a service reference"
    )
    container_reference: str = Field(
        default="container",
        description="Reference name resolving to the container itself"
    )
    inject_tag: str = Field(
        default="inject",
        description="Tag selecting descriptors for the inject-method pass"
    )
    inject_method_prefix: str = Field(
        default="inject",
        description="Prefix of methods called by the inject-method pass"
    )
    auto_service_suffix: str = Field(
        default="Service",
        description="Class name suffix required for auto registration"
    )
    auto_service_prefix: str = Field(
        default="_auto.",
        description="Service name prefix used for auto registration"
    )
    
    @property
    def guard_operations(self) -> tuple:
        """Operations owned by the Injectable capability itself."""
        return (
            self.inject_property_method,
            self.inject_parameters_method,
            self.injection_completed_method,
        )
    
    def reference(self, target: str) -> str:
        """Build a service reference argument."""
        return f"{self.reference_prefix}{target}"


class Config(BaseModel):
    """Main configuration object."""
    
    injection: InjectionConfig = Field(default_factory=InjectionConfig)
    parameters: Dict[str, Any] = Field(
        default_factory=dict,
        description="Container parameters, looked up by dot path"
    )
    log_level: str = Field(
        default="WARNING",
        description="Level applied to the package logger"
    )
    
    @classmethod
    def from_env(cls) -> "Config":
        """Create config from environment variables."""
        config_dict: Dict[str, Any] = {}
        
        if log_level := os.getenv("PROPERTY_INJECTION_LOG_LEVEL"):
            config_dict["log_level"] = log_level.upper()
        
        if inject_tag := os.getenv("PROPERTY_INJECTION_INJECT_TAG"):
            config_dict["injection"] = InjectionConfig(inject_tag=inject_tag)
        
        return cls(**config_dict)


# Global config instance
_config: Optional[Config] = None


def get_config() -> Config:
    """Get the global configuration instance."""
    global _config
    if _config is None:
        _config = Config.from_env()
    return _config


def set_config(config: Config) -> None:
    """Set the global configuration instance."""
    global _config
    _config = config
