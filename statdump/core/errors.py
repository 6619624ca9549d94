#!/usr/bin/env python3
"""
Error types raised while building a dump command.
All of them are user-input errors detected before any samples are read.
"""

from typing import Any, Optional


class DumpSpecError(ValueError):
    """Base class for every dump specification error"""


class UnknownField(DumpSpecError):
    """A token does not name a field of the domain"""

    def __init__(self, token: str, domain: Any):
        self.token = token
        self.domain = domain
        super().__init__(f"Unknown {_domain_name(domain)} field: '{token}'")


class UnknownGroup(DumpSpecError):
    """A token does not name an aggregate group of the domain"""

    def __init__(self, token: str, domain: Any):
        self.token = token
        self.domain = domain
        super().__init__(f"Unknown {_domain_name(domain)} field group: '{token}'")


class ConflictingSortDirection(DumpSpecError):
    def __init__(self):
        super().__init__("--sort and --rsort cannot be used together")


class NotApplicableForDomain(DumpSpecError):
    """A row-scoped option was given for a domain without rows to select"""

    def __init__(self, option: str, domain: Any):
        self.option = option
        self.domain = domain
        super().__init__(
            f"--{option} is not applicable to {_domain_name(domain)} dumps "
            f"(one row per time slice)"
        )


class MissingSelectField(DumpSpecError):
    """filter/sort/top was requested without --select"""

    def __init__(self, option: str, domain: Any):
        self.option = option
        self.domain = domain
        super().__init__(
            f"--{option} requires --select for {_domain_name(domain)} dumps"
        )


class FieldDomainMismatch(DumpSpecError):
    """A field tag from one domain was used in a command for another"""

    def __init__(self, field: Any, domain: Any):
        self.field = field
        self.domain = domain
        field_name = getattr(field, 'value', field)
        super().__init__(
            f"Field '{field_name}' does not belong to the {_domain_name(domain)} domain"
        )


class InvalidOptionValue(DumpSpecError):
    """An option value failed validation"""

    def __init__(self, option: str, value: Any, reason: str):
        self.option = option
        self.value = value
        self.reason = reason
        super().__init__(f"Invalid value for --{option} ({value!r}): {reason}")


class SinkUnavailable(DumpSpecError):
    """The output destination could not be opened for writing"""

    def __init__(self, path: str, cause: Optional[BaseException] = None):
        self.path = path
        self.cause = cause
        message = f"Cannot open output '{path}'"
        if cause is not None:
            message += f": {cause}"
        super().__init__(message)


def _domain_name(domain: Any) -> str:
    return getattr(domain, 'value', str(domain))
