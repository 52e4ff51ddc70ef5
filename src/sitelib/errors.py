"""Error handling utilities for sitectl."""

from __future__ import annotations

from typing import Any, Iterable


class IconMissingError(RuntimeError):
    """Raised by strict builds when one or more icons could not be loaded."""

    def __init__(self, names: Iterable[str]) -> None:
        self.names = list(names)
        super().__init__(f"Icons not found or unreadable: {', '.join(self.names)}")


def format_error_message(operation: str, error: Exception, context: dict[str, Any] | None = None) -> str:
    """Format a user-friendly error message based on the exception type and context."""
    error_str = str(error)
    lowered = error_str.lower()
    context = context or {}

    # Output path problems are not missing icons
    if "output_dir" in context and isinstance(error, FileNotFoundError):
        return (
            f"Could not write to {context['output_dir']} while trying to {operation}. "
            f"Check that the output path and cursor names are valid file paths. "
            f"Original error: {error_str}"
        )

    # Icon package missing or icon misspelled
    if isinstance(error, (FileNotFoundError, IconMissingError)) or "not found" in lowered or "no such file" in lowered:
        icons_dir = context.get("icons_dir", "the icons directory")
        if "icon" in context:
            return (
                f"Icon '{context['icon']}' not found in {icons_dir}. "
                f"Check the icon name or install the icon package with 'npm install @tabler/icons'. "
                f"Original error: {error_str}"
            )
        return (
            f"Some icons could not be found in {icons_dir}. "
            f"Use 'sitectl icons list' to see which ones. "
            f"Original error: {error_str}"
        )

    # Output directory not writable
    if isinstance(error, PermissionError) or "permission denied" in lowered:
        target = context.get("output_dir", "the output directory")
        return (
            f"Permission denied while trying to {operation}. "
            f"Please check that {target} is writable. "
            f"Original error: {error_str}"
        )

    # Upstream markup we cannot parse
    if any(word in lowered for word in ["not well-formed", "parse", "not <svg>", "syntax error"]):
        return (
            f"Icon file is not valid SVG. The icon package may be corrupted or a "
            f"non-SVG file has the icon's name. "
            f"Original error: {error_str}"
        )

    # Generic error with helpful context
    return f"Failed to {operation}: {error_str}"


def suggest_troubleshooting_steps(operation: str, error: Exception) -> list[str]:
    """Suggest troubleshooting steps based on the operation and error."""
    error_str = str(error).lower()
    suggestions = []

    if isinstance(error, (FileNotFoundError, IconMissingError)) or "not found" in error_str or "no such file" in error_str:
        suggestions.extend([
            "Install the icon package: npm install @tabler/icons",
            "Check icons_dir in sitectl.yaml points at the outline icon folder",
            "List configured icons and their status: sitectl icons list",
        ])

    elif isinstance(error, PermissionError) or "permission denied" in error_str:
        suggestions.extend([
            "Check ownership and permissions of output_dir",
            "Pass a writable directory with --output-dir",
        ])

    elif "not well-formed" in error_str or "parse" in error_str or "not <svg>" in error_str:
        suggestions.extend([
            "Reinstall the icon package: rm -rf node_modules && npm install",
            "Open the icon file and check it is an SVG document",
        ])

    if not suggestions:
        suggestions.extend([
            "Check the logs with -v/--verbose flag for more details",
            "Verify your configuration file is correct: sitectl config show",
        ])

    return suggestions


def format_config_error(error: Exception) -> str:
    """Format configuration-related error messages."""
    error_str = str(error)

    if "sitectl_config path not found" in error_str.lower():
        return (
            f"{error_str}\n"
            "Either point SITECTL_CONFIG at an existing file or unset it to use\n"
            "./sitectl.yaml, ~/.config/sitectl/config.yaml or the built-in defaults."
        )

    if "invalid yaml" in error_str.lower():
        return f"Configuration file could not be parsed: {error_str}"

    return f"Configuration error: {error_str}"
