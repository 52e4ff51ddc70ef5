from __future__ import annotations

from sitelib.config import ConfigError
from sitelib.errors import (
    IconMissingError,
    format_config_error,
    format_error_message,
    suggest_troubleshooting_steps,
)


def test_missing_icon_message_names_icon():
    err = FileNotFoundError(2, "No such file or directory", "icons/foo.svg")
    msg = format_error_message("load icon", err, {"icon": "foo", "icons_dir": "icons"})
    assert "Icon 'foo' not found in icons" in msg
    assert "npm install @tabler/icons" in msg


def test_icon_missing_error_message():
    err = IconMissingError(["a", "b"])
    assert err.names == ["a", "b"]
    msg = format_error_message("build site assets", err, {"icons_dir": "icons"})
    assert "sitectl icons list" in msg
    assert "a, b" in msg


def test_permission_message():
    err = PermissionError(13, "Permission denied", "/public/icons")
    msg = format_error_message("write cursor files", err, {"output_dir": "/public/icons"})
    assert msg.startswith("Permission denied while trying to write cursor files")
    assert "/public/icons" in msg


def test_parse_error_message():
    msg = format_error_message("load icon", ValueError("x.svg: root element is <html>, not <svg>"))
    assert "not valid SVG" in msg


def test_generic_message():
    assert format_error_message("do things", RuntimeError("boom")) == "Failed to do things: boom"


def test_suggestions():
    assert any("npm install" in s for s in suggest_troubleshooting_steps("load icon", FileNotFoundError("x")))
    assert any("--output-dir" in s for s in suggest_troubleshooting_steps("write", PermissionError("denied")))
    assert any("--verbose" in s for s in suggest_troubleshooting_steps("x", RuntimeError("boom")))


def test_format_config_error():
    msg = format_config_error(ConfigError("SITECTL_CONFIG path not found: /x.yaml"))
    assert "/x.yaml" in msg and "built-in defaults" in msg
    assert format_config_error(ConfigError("inline_size bad")) == "Configuration error: inline_size bad"


def test_missing_output_path_is_not_reported_as_missing_icon():
    err = FileNotFoundError(2, "No such file or directory", "public/icons/sub/arrow.svg")
    msg = format_error_message("write cursor files", err, {"output_dir": "public/icons"})
    assert msg.startswith("Could not write to public/icons while trying to write cursor files")
    assert "icons list" not in msg
