"""CLI: check, matrix, decide, rbac."""

from __future__ import annotations

import json
import logging
import sys

import click
from pydantic import ValidationError
from rich.console import Console
from rich.panel import Panel
from rich.table import Table

from warden.auth.rbac import check_permission
from warden.config import Config, ConfigError
from warden.core.evaluator import Evaluator
from warden.core.registry import PolicyConfigError, PolicyRegistry, UnknownVocabularyError
from warden.models.subject import Role, Subject

_RULE_STYLES = {
    "allow": "[green]allow[/green]",
    "deny": "[red]deny[/red]",
    "predicate": "[yellow]predicate[/yellow]",
}


def _registry(config: Config) -> PolicyRegistry:
    try:
        return config.build_registry()
    except PolicyConfigError as e:
        click.echo("Error: invalid policy declaration", err=True)
        for error in e.errors:
            click.echo(f"  {error}", err=True)
        sys.exit(1)
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)


@click.group()
@click.version_option(package_name="warden-abac")
@click.pass_context
def main(ctx: click.Context) -> None:
    """Warden: attribute-based access control decisions."""
    try:
        config = Config.load()
    except ConfigError as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)
    logging.basicConfig(
        level=config.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )
    ctx.obj = config


@main.command()
@click.option("--exhaustive", is_flag=True, help="Require every combination to be declared")
@click.pass_obj
def check(config: Config, exhaustive: bool) -> None:
    """Validate the configured policy declaration."""
    if exhaustive:
        config.exhaustive = True
    registry = _registry(config)
    rules = len(list(registry.entries()))
    click.echo(f"Policy {config.policy} OK: {rules} rules")
    missing = registry.missing()
    if missing:
        click.echo(f"{len(missing)} combinations undeclared (denied)")


@main.command()
@click.pass_obj
def matrix(config: Config) -> None:
    """Print the role x resource/action table."""
    registry = _registry(config)

    table = Table(title=f"Policy {config.policy}")
    table.add_column("Resource")
    table.add_column("Action")
    for role in registry.roles:
        table.add_column(str(role))

    for resource, spec in registry.resources.items():
        for action in spec.actions:
            cells = []
            for role in registry.roles:
                rule = registry.lookup(role, resource, action)
                cells.append("-" if rule is None else _RULE_STYLES[rule.kind])
            table.add_row(str(resource), str(action), *cells)

    Console().print(table)


@main.command()
@click.argument("resource_type")
@click.argument("action")
@click.option("--role", "roles", multiple=True, type=click.Choice([r.value for r in Role]))
@click.option("--subject-id", required=True, help="ID of the acting subject")
@click.option("--blocked-by", multiple=True, help="ID of a user who blocked the subject")
@click.option("--data", default=None, help="Resource instance as JSON")
@click.pass_obj
def decide(
    config: Config,
    resource_type: str,
    action: str,
    roles: tuple[str, ...],
    subject_id: str,
    blocked_by: tuple[str, ...],
    data: str | None,
) -> None:
    """Decide whether a subject may perform ACTION on RESOURCE_TYPE.

    Exits 0 when allowed, 3 when denied and 1 on invalid input.
    """
    evaluator = Evaluator(_registry(config))
    subject = Subject(id=subject_id, roles=roles, blocked_by=blocked_by)

    try:
        instance = None
        if data is not None:
            spec = evaluator.registry.spec_for(resource_type)
            instance = spec.data_type.model_validate(json.loads(data))
        decision = evaluator.decide(subject, resource_type, action, instance)
    except (UnknownVocabularyError, ValidationError, json.JSONDecodeError) as e:
        click.echo(f"Error: {e}", err=True)
        sys.exit(1)

    if decision.allowed:
        body = f"[green]✓[/green] Allowed via role {decision.role} ({decision.rule})"
    else:
        body = "[red]✗[/red] Denied"
    Console().print(Panel(body, title=f"{resource_type}:{action}"))
    sys.exit(0 if decision.allowed else 3)


@main.command()
@click.argument("role")
@click.argument("permission")
def rbac(role: str, permission: str) -> None:
    """Check a flat RBAC permission such as view:comments.

    Exits 0 when the role holds the permission and 3 when it does not.
    """
    allowed = check_permission(role, permission)
    click.echo("allowed" if allowed else "denied")
    sys.exit(0 if allowed else 3)
