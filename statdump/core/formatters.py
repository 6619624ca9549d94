#!/usr/bin/env python3
"""
Plain-text views of the field catalog and of a resolved dump command.
Row data itself is rendered by the downstream renderer, not here.
"""

from typing import Any, Dict

from tabulate import tabulate

from .aggregates import default_fields, group_membership, groups
from .command_spec import CommandSpec
from .fields import Domain, all_fields


class CatalogFormatter:
    """Format field catalogs and command plans with tabulate"""

    CATALOG_HEADERS = ['field', 'kind', 'groups']
    PLAN_HEADERS = ['#', 'field', 'kind']

    def __init__(self, tablefmt: str = 'simple'):
        self.tablefmt = tablefmt

    def format_catalog(self, domain: Domain) -> str:
        """List every field of a domain with its kind and group membership"""
        membership = group_membership(domain)
        rows = []
        for tag in all_fields(domain):
            labels = [f"{name} (detail)" if detail_only else name
                      for name, detail_only in membership.get(tag, [])]
            rows.append([tag.value, tag.kind.value, ', '.join(labels)])

        output = [f"=== {domain.value} fields ===", ""]
        output.append(tabulate(rows, headers=self.CATALOG_HEADERS, tablefmt=self.tablefmt))
        output.append("")
        output.append(f"groups:  {', '.join(groups(domain))}")
        output.append(f"default: {', '.join(tag.value for tag in default_fields(domain))}")
        output.append("")
        return "\n".join(output)

    def format_plan(self, spec: CommandSpec) -> str:
        """Describe a resolved command: columns in order, then the options"""
        output = [f"=== {spec.domain.value} dump ===", ""]

        if spec.fields:
            rows = [[i, tag.value, tag.kind.value] for i, tag in enumerate(spec.fields, 1)]
            output.append(tabulate(rows, headers=self.PLAN_HEADERS, tablefmt=self.tablefmt))
        else:
            output.append("No fields selected.")
        output.append("")

        settings = self.plan_settings(spec)
        output.append(tabulate(list(settings.items()), headers=['option', 'value'],
                               tablefmt=self.tablefmt))
        output.append("")
        return "\n".join(output)

    def plan_settings(self, spec: CommandSpec) -> Dict[str, Any]:
        """Option name -> display value; unset options show as '-'"""
        options = spec.options
        settings: Dict[str, Any] = {
            'time window': options.window.describe(),
            'select': spec.select.value if spec.select is not None else None,
            'filter': options.filter.pattern if options.filter is not None else None,
            'sort': options.sort_order.value,
            'top': options.top or 'unlimited',
            'repeat title': options.effective_repeat_title,
            'output format': options.output_format.value,
            'output': options.output or 'stdout',
        }
        return {name: ('-' if value is None else value) for name, value in settings.items()}
