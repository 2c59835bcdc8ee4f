"""
Configuration settings for kimspect.
"""
from pydantic_settings import BaseSettings
from pydantic import Field
from typing import Optional


class Settings(BaseSettings):
    """Application settings from environment variables."""
    
    # Application
    APP_NAME: str = Field(default="kimspect", description="Application name")
    
    # Kubernetes Configuration
    K8S_NAMESPACE: str = Field(default="default", description="Namespace queried when none is given")
    K8S_CONTEXT: Optional[str] = Field(default=None, description="Kubernetes context")
    K8S_IN_CLUSTER: bool = Field(default=False, description="Running in cluster")
    KUBECONFIG: Optional[str] = Field(default=None, description="Path to kubeconfig file")
    
    # Service Configuration
    REQUEST_TIMEOUT_SECS: int = Field(default=30, description="Request timeout")
    LOG_LEVEL: str = Field(default="warning", description="Log level: warning|info|debug")
    LOG_FORMAT: str = Field(default="text", description="Log format: text|json")
    
    class Config:
        env_file = ".env"
        env_file_encoding = "utf-8"
        case_sensitive = True
        extra = "ignore"


# Global settings instance
settings = Settings()
