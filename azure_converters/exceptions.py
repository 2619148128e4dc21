"""
Custom Exception Hierarchy for azure-converters

This module provides the exception hierarchy used across the converters.
Only resource-ID parsing produces errors during a conversion; the other
exceptions cover image resolution in strict mode and configuration loading.
"""

from typing import Any, Dict, Optional


class AzureConvertersError(Exception):
    """
    Base exception class for all azure-converters errors.

    Provides structured error information including context, error codes,
    and optional recovery suggestions.
    """

    def __init__(
        self,
        message: str,
        error_code: Optional[str] = None,
        context: Optional[Dict[str, Any]] = None,
        cause: Optional[Exception] = None,
        recovery_suggestion: Optional[str] = None,
    ) -> None:
        """
        Initialize the base exception.

        Args:
            message: Human-readable error message
            error_code: Optional error code for programmatic handling
            context: Optional dictionary with error context
            cause: Optional underlying exception that caused this error
            recovery_suggestion: Optional suggestion for error recovery
        """
        super().__init__(message)
        self.message = message
        self.error_code = error_code
        self.context = context or {}
        self.cause = cause
        self.recovery_suggestion = recovery_suggestion

    def __str__(self) -> str:
        """Return a formatted error message with context."""
        result = self.message
        if self.error_code:
            result = f"[{self.error_code}] {result}"
        if self.context:
            context_str = ", ".join(f"{k}={v}" for k, v in self.context.items())
            result += f" (context: {context_str})"
        if self.cause:
            result += f" (caused by: {self.cause})"
        if self.recovery_suggestion:
            result += f" (suggestion: {self.recovery_suggestion})"
        return result

    def to_dict(self) -> Dict[str, Any]:
        """Convert exception to dictionary for logging/serialization."""
        return {
            "error_type": self.__class__.__name__,
            "message": self.message,
            "error_code": self.error_code,
            "context": self.context,
            "cause": str(self.cause) if self.cause else None,
            "recovery_suggestion": self.recovery_suggestion,
        }


class ResourceIDError(AzureConvertersError):
    """Raised when an Azure resource ID does not match the expected grammar."""

    def __init__(
        self, message: str, resource_id: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if resource_id:
            context["resource_id"] = resource_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "INVALID_RESOURCE_ID")
        super().__init__(message, **kwargs)
        self.resource_id = resource_id


class ImageResolutionError(AzureConvertersError):
    """Raised when an image reference cannot be resolved in strict mode."""

    def __init__(
        self, message: str, image_id: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if image_id:
            context["image_id"] = image_id
        kwargs["context"] = context
        kwargs.setdefault("error_code", "IMAGE_RESOLUTION_FAILED")
        kwargs.setdefault(
            "recovery_suggestion",
            "Check the image reference ID or disable strict_image_resolution",
        )
        super().__init__(message, **kwargs)


class ConfigError(AzureConvertersError):
    """Raised when converter configuration cannot be loaded or validated."""

    def __init__(
        self, message: str, config_path: Optional[str] = None, **kwargs: Any
    ) -> None:
        context = kwargs.get("context", {})
        if config_path:
            context["config_path"] = config_path
        kwargs["context"] = context
        kwargs.setdefault("error_code", "INVALID_CONFIGURATION")
        super().__init__(message, **kwargs)
