#!/usr/bin/env python3
"""
Turns the user's --fields tokens into the ordered column list of a dump.

Precedence is --everything, then --default, then the explicit tokens. Explicit
tokens keep their order and are never de-duplicated: asking for a field twice
shows the column twice.
"""

from dataclasses import dataclass
from typing import Callable, List, Optional, Sequence, Tuple
import logging

from .aggregates import default_fields, expand, is_group
from .fields import Domain, FieldTag, all_fields, resolve

logger = logging.getLogger('statdump.field_resolver')


@dataclass(frozen=True)
class FieldFlags:
    """Flags that override or extend the explicit field list"""
    everything: bool = False
    default: bool = False
    detail: bool = False


def _everything_override(domain: Domain, tokens: Sequence[str],
                         flags: FieldFlags) -> Optional[List[FieldTag]]:
    if flags.everything:
        return all_fields(domain)
    return None


def _default_override(domain: Domain, tokens: Sequence[str],
                      flags: FieldFlags) -> Optional[List[FieldTag]]:
    if flags.default:
        return default_fields(domain, flags.detail)
    return None


# Checked in order, first non-None result wins
OVERRIDES: Tuple[Callable[[Domain, Sequence[str], FieldFlags], Optional[List[FieldTag]]], ...] = (
    _everything_override,
    _default_override,
)


def resolve_token(domain: Domain, token: str, detail: bool = False) -> List[FieldTag]:
    """Resolve one token: a group name expands, anything else must be a field"""
    if is_group(domain, token):
        return expand(domain, token, detail)
    return [resolve(domain, token)]


def resolve_fields(domain: Domain,
                   tokens: Optional[Sequence[str]] = None,
                   flags: Optional[FieldFlags] = None) -> List[FieldTag]:
    """
    Build the ordered field selection for a dump.

    Args:
        domain: Domain being dumped
        tokens: --fields values in the order given; group names and field names mixed
        flags: everything/default/detail switches

    Returns:
        Ordered list of field tags, duplicates preserved. Empty when no tokens and
        no override flag were given.

    Raises:
        UnknownField: the first token that is neither a group nor a field
    """
    tokens = list(tokens or [])
    flags = flags or FieldFlags()

    for override in OVERRIDES:
        selection = override(domain, tokens, flags)
        if selection is not None:
            logger.debug(f"{domain.value}: {override.__name__} selected {len(selection)} fields")
            return selection

    selection: List[FieldTag] = []
    for token in tokens:
        selection.extend(resolve_token(domain, token, flags.detail))

    logger.debug(f"{domain.value}: resolved {tokens} -> {[tag.value for tag in selection]}")
    return selection
