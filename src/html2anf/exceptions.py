#  Copyright (c) 2025 Tom Villani, Ph.D.
"""Custom exceptions for the html2anf library.

This module defines the exception classes raised while turning markup nodes
into article JSON fragments. Every build-time failure is local to a single
component build; the caller decides whether to skip the node or abort the
conversion.

Exception Hierarchy
-------------------
- Html2AnfError (base exception)

  - ValidationError (parameter/option validation)
    - SettingsError (invalid settings values)
      - UnknownSettingError (setting key not defined)
    - ConfigFileError (settings file unreadable or malformed)

  - BuildError (component build failures)
    - ExtractionError (required markup absent, e.g. no ``src``)
    - UnknownPlaceholderError (template token without a value)
    - UnknownSpecError (spec name never registered)

  - SpecRegistrationError (conflicting spec registration)

  - ThemeError (theme store failures)

"""

from typing import Any


class Html2AnfError(Exception):
    """Base exception class for all html2anf-specific errors.

    Parameters
    ----------
    message : str
        Human-readable description of the error
    original_error : Exception, optional
        The original exception that caused this error, if applicable

    Attributes
    ----------
    message : str
        The error message
    original_error : Exception or None
        The wrapped original exception, if any

    """

    def __init__(self, message: str, original_error: Exception | None = None):
        """Initialize the error with a message and optional original exception."""
        super().__init__(message)
        self.message = message
        self.original_error = original_error


class ValidationError(Html2AnfError):
    """Exception raised for invalid input parameters or options.

    Parameters
    ----------
    message : str
        Description of the validation error
    parameter_name : str, optional
        Name of the invalid parameter
    parameter_value : any, optional
        The invalid value that was provided
    original_error : Exception, optional
        The original exception that caused this error

    """

    def __init__(
        self,
        message: str,
        parameter_name: str | None = None,
        parameter_value: Any = None,
        original_error: Exception | None = None,
    ):
        """Initialize the validation error with parameter details."""
        super().__init__(message, original_error=original_error)
        self.parameter_name = parameter_name
        self.parameter_value = parameter_value


class SettingsError(ValidationError):
    """Exception raised when a settings value is invalid."""


class UnknownSettingError(SettingsError):
    """Exception raised when a settings key is not part of the settings contract.

    Parameters
    ----------
    key : str
        The requested settings key

    """

    def __init__(self, key: str):
        """Initialize the error for an unknown key."""
        super().__init__(f"Unknown setting: '{key}'", parameter_name=key)
        self.key = key


class ConfigFileError(ValidationError):
    """Exception raised when a settings file cannot be loaded.

    Parameters
    ----------
    message : str
        Description of the failure
    file_path : str, optional
        Path of the offending file
    original_error : Exception, optional
        Underlying parse or I/O error

    """

    def __init__(self, message: str, file_path: str | None = None, original_error: Exception | None = None):
        """Initialize the config file error."""
        super().__init__(message, parameter_name="settings_file", parameter_value=file_path, original_error=original_error)
        self.file_path = file_path


class BuildError(Html2AnfError):
    """Base exception for failures while building a component fragment.

    A BuildError is fatal to one component build only. Registries are left
    untouched by a failed build.
    """


class ExtractionError(BuildError):
    """Exception raised when required markup is missing from a node.

    Parameters
    ----------
    component : str
        Name of the component that attempted the build
    detail : str
        What could not be extracted (e.g. ``"src attribute"``)
    node_text : str, optional
        The markup that was inspected

    """

    def __init__(self, component: str, detail: str, node_text: str | None = None):
        """Initialize the extraction error."""
        super().__init__(f"{component}: could not extract {detail}")
        self.component = component
        self.detail = detail
        self.node_text = node_text


class UnknownPlaceholderError(BuildError):
    """Exception raised when a template references a placeholder with no value.

    This always signals a mismatch between a spec and the builder feeding it,
    so it is never silently dropped.

    Parameters
    ----------
    placeholder : str
        Name of the unresolved placeholder
    spec_name : str, optional
        Name of the spec being substituted, when known

    """

    def __init__(self, placeholder: str, spec_name: str | None = None):
        """Initialize the unknown placeholder error."""
        where = f" in spec '{spec_name}'" if spec_name else ""
        super().__init__(f"No value for placeholder '#{placeholder}#'{where}")
        self.placeholder = placeholder
        self.spec_name = spec_name


class UnknownSpecError(BuildError):
    """Exception raised when a spec name was never registered.

    Parameters
    ----------
    spec_name : str
        The requested spec name
    component : str, optional
        Component namespace that was searched

    """

    def __init__(self, spec_name: str, component: str | None = None):
        """Initialize the unknown spec error."""
        scope = f" for component '{component}'" if component else ""
        super().__init__(f"Spec '{spec_name}' is not registered{scope}")
        self.spec_name = spec_name
        self.component = component


class SpecRegistrationError(Html2AnfError):
    """Exception raised when a spec name is registered twice with different templates."""


class ThemeError(Html2AnfError):
    """Exception raised for theme store failures.

    Parameters
    ----------
    message : str
        Description of the failure
    theme_name : str, optional
        The theme involved

    """

    def __init__(self, message: str, theme_name: str | None = None, original_error: Exception | None = None):
        """Initialize the theme error."""
        super().__init__(message, original_error=original_error)
        self.theme_name = theme_name


__all__ = [
    "Html2AnfError",
    "ValidationError",
    "SettingsError",
    "UnknownSettingError",
    "ConfigFileError",
    "BuildError",
    "ExtractionError",
    "UnknownPlaceholderError",
    "UnknownSpecError",
    "SpecRegistrationError",
    "ThemeError",
]
