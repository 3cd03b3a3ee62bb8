#!/usr/bin/env python3
"""
exceptions.py
--------------------
Custom exception classes for the countdown project.

Every error raised inside the deadline engine is recoverable: the engine
catches it at the component boundary, logs it, and degrades to a usable
(if incomplete) board. Only configuration errors reach the CLI.

Exception Hierarchy:
    Exception (built-in)
    └── CountdownError - Base for all project errors
        ├── ParseError - Raw deadline expression is not a timestamp
        ├── FetchError - Remote deadline store unreachable or malformed
        ├── MalformedTagError - Tag field of a record cannot be decoded
        ├── StorageError - Local key-value store read/write failure
        ├── ValidationError - Configuration record structurally invalid
        └── ConfigError - Configuration file missing or not valid YAML

Usage:
    from countdown.core.exceptions import ParseError, FetchError

    try:
        instant = parse_expression(raw, year, timezone)
    except ParseError as e:
        logger.log_warning(f"Unparseable deadline: {e}")
        instant = None
"""


class CountdownError(Exception):
    """
    Base exception for all countdown errors.

    Catch this to handle any error raised by the engine, or catch the
    specific subclasses for more granular recovery.
    """

    pass


class ParseError(CountdownError):
    """
    Exception for deadline expressions that cannot become an instant.

    Raised by the time expression parser when:
    - The substituted string is not an ISO-8601 style timestamp
    - The expression is not a string at all
    - The configured timezone name is unknown

    Recovered by the normalizer, which stores the entry as unspecified.

    Examples:
        >>> raise ParseError("Invalid timestamp: '2026-13-45 25:00'")
        >>> raise ParseError("Unknown timezone: 'Mars/Olympus'")
    """

    pass


class FetchError(CountdownError):
    """
    Exception for remote deadline store failures.

    Raised (and wrapped into a FetchResult) when:
    - The remote host is unreachable or the request times out
    - The response status is not 2xx
    - The response body is not a JSON list

    Recovered by falling back to the local deadline store.

    Examples:
        >>> raise FetchError("Remote store returned HTTP 401")
        >>> raise FetchError("Remote store unreachable: connection refused")
    """

    pass


class MalformedTagError(CountdownError):
    """
    Exception for tag fields that cannot be decoded.

    Tags may arrive as a list or as a JSON-encoded string. Anything else,
    or a string that does not decode to a list, raises this error.

    Recovered by substituting an empty tag set for that single record.

    Examples:
        >>> raise MalformedTagError("Tags JSON did not decode: '[nlp'")
    """

    pass


class StorageError(CountdownError):
    """
    Exception for local key-value store failures.

    Raised when:
    - The SQLite store cannot be opened, read or written
    - A stored value is not valid JSON or has the wrong shape

    Recovered by treating the persisted value as absent.

    Examples:
        >>> raise StorageError("Stored value for 'site:custom_deadlines' is not a list")
    """

    pass


class ValidationError(CountdownError):
    """
    Exception for structurally invalid configuration records.

    Raised when a configuration record lacks a name, has a non-integer
    year, or is not a mapping. The record is skipped; the batch continues.

    Examples:
        >>> raise ValidationError("Configuration record missing 'name'")
        >>> raise ValidationError("Invalid year for 'ConfX': 'next'")
    """

    pass


class ConfigError(CountdownError):
    """
    Exception for configuration files that cannot be loaded.

    Raised when the conference list or tag-type list is missing, is not
    valid YAML, or does not contain a list at the top level.

    Examples:
        >>> raise ConfigError("Configuration file not found: data/conferences.yml")
    """

    pass
