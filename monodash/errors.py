"""Exception types raised by monodash."""

from __future__ import annotations


class MonodashError(Exception):
    """Base class for all monodash errors."""


class ConfigError(MonodashError):
    """A configuration value could not be interpreted."""


class PreparationError(MonodashError):
    """The preparation pipeline was misconfigured or a step misbehaved."""
