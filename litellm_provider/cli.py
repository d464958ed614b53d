# Copyright 2025 CNOE Contributors
# SPDX-License-Identifier: Apache-2.0

"""Command line for managing LiteLLM users against a local state file."""

import contextlib
import json
import logging
from typing import Any, Dict, Iterator, Optional

import click
from pydantic import ValidationError

from litellm_provider.api.client import LiteLLMClient
from litellm_provider.config import LiteLLMConfig
from litellm_provider.errors import LiteLLMProviderError
from litellm_provider.logging_config import configure_logging
from litellm_provider.models.user import UserRole
from litellm_provider.resources.state import ResourceData, StateStore
from litellm_provider.resources.user import UserResource

logger = logging.getLogger(__name__)

ROLE_CHOICES = [role.value for role in UserRole]


def user_attribute_options(require_role: bool):
    """Attach one option per user attribute."""
    options = [
        click.option("--user-email", type=str, default=None),
        click.option("--user-alias", type=str, default=None),
        click.option("--key-alias", type=str, default=None),
        click.option(
            "--user-role",
            type=click.Choice(ROLE_CHOICES),
            required=require_role,
            default=None,
        ),
        click.option("--max-budget", type=float, default=None),
        click.option("--model", "models", multiple=True, help="Allowed model (repeatable)"),
        click.option("--tpm-limit", type=int, default=None),
        click.option("--rpm-limit", type=int, default=None),
        click.option("--auto-create-key/--no-auto-create-key", default=None),
        click.option("--send-user-invite/--no-send-user-invite", default=None),
        click.option("--team", "teams", multiple=True, help="Team id (repeatable)"),
    ]

    def decorator(f):
        for option in reversed(options):
            f = option(f)
        return f

    return decorator


def _attributes_from_options(options: Dict[str, Any]) -> Dict[str, Any]:
    attributes = {}
    for key, value in options.items():
        # multiple=True options come back as an empty tuple when not given
        if value is None or value == ():
            continue
        attributes[key] = list(value) if isinstance(value, tuple) else value
    return attributes


def _echo_state(data: ResourceData) -> None:
    click.echo(json.dumps(data.to_dict(), indent=2, sort_keys=True))


@contextlib.contextmanager
def _reported_errors() -> Iterator[None]:
    try:
        yield
    except ValidationError as e:
        raise click.ClickException(f"invalid user attributes: {e}") from e
    except (LiteLLMProviderError, ValueError) as e:
        raise click.ClickException(str(e)) from e


@contextlib.contextmanager
def _user_resource(ctx: click.Context) -> Iterator[UserResource]:
    with _reported_errors():
        config = LiteLLMConfig.from_env(
            api_base=ctx.obj["api_base"], api_key=ctx.obj["api_key"]
        )
    configure_logging(ctx.obj["log_level"], secrets=[config.api_key])

    with LiteLLMClient(config) as client:
        yield UserResource(client, config)


@click.group()
@click.option(
    "--state-file",
    default="litellm-users.json",
    envvar="LITELLM_STATE_FILE",
    show_default=True,
    type=click.Path(dir_okay=False),
)
@click.option("--api-base", default=None, help="Overrides LITELLM_API_BASE")
@click.option("--api-key", default=None, help="Overrides LITELLM_API_KEY")
@click.option(
    "--log-level",
    default="WARNING",
    show_default=True,
    type=click.Choice(["DEBUG", "INFO", "WARNING", "ERROR"], case_sensitive=False),
)
@click.pass_context
def main(ctx: click.Context, state_file: str, api_base: Optional[str], api_key: Optional[str], log_level: str):
    """Manage LiteLLM proxy users declaratively."""
    ctx.ensure_object(dict)
    logger.debug(f"Using state file {state_file}")
    ctx.obj.update(
        {
            "store": StateStore(state_file),
            "api_base": api_base,
            "api_key": api_key,
            "log_level": log_level,
        }
    )


@main.command()
@user_attribute_options(require_role=True)
@click.pass_context
def create(ctx: click.Context, **options):
    """Create a user and start tracking it."""
    store: StateStore = ctx.obj["store"]
    data = ResourceData(attributes=_attributes_from_options(options))

    with _user_resource(ctx) as resource, _reported_errors():
        try:
            resource.create(data)
        finally:
            # once an id is assigned the user exists remotely, keep tracking it
            if data.id:
                store.put(data)
                store.save()

    _echo_state(data)


@main.command()
@click.argument("user_id")
@click.pass_context
def read(ctx: click.Context, user_id: str):
    """Refresh a tracked user from the proxy."""
    store: StateStore = ctx.obj["store"]
    data = store.get(user_id)
    if data is None:
        raise click.ClickException(f"user {user_id} is not tracked; use 'import' to adopt it")

    with _user_resource(ctx) as resource, _reported_errors():
        record = resource.read(data)

    if record is None:
        store.remove(user_id)
        store.save()
        click.echo(f"user {user_id} no longer exists, removed from state")
        return

    store.put(data)
    store.save()
    _echo_state(data)


@main.command()
@click.argument("user_id")
@user_attribute_options(require_role=False)
@click.pass_context
def update(ctx: click.Context, user_id: str, **options):
    """Change attributes of a tracked user."""
    store: StateStore = ctx.obj["store"]
    data = store.get(user_id)
    if data is None:
        raise click.ClickException(f"user {user_id} is not tracked; use 'import' to adopt it")

    for key, value in _attributes_from_options(options).items():
        data.set(key, value)

    with _user_resource(ctx) as resource, _reported_errors():
        resource.update(data)

    if not data.id:
        store.remove(user_id)
        store.save()
        click.echo(f"user {user_id} no longer exists, removed from state")
        return

    store.put(data)
    store.save()
    _echo_state(data)


@main.command()
@click.argument("user_id")
@click.pass_context
def delete(ctx: click.Context, user_id: str):
    """Delete a user and stop tracking it."""
    store: StateStore = ctx.obj["store"]
    data = store.get(user_id) or ResourceData(user_id)

    with _user_resource(ctx) as resource, _reported_errors():
        resource.delete(data)

    store.remove(user_id)
    store.save()
    click.echo(f"user {user_id} deleted")


@main.command("import")
@click.argument("user_id")
@click.pass_context
def import_user(ctx: click.Context, user_id: str):
    """Start tracking a user that already exists on the proxy."""
    store: StateStore = ctx.obj["store"]
    data = ResourceData(user_id)

    with _user_resource(ctx) as resource, _reported_errors():
        resource.import_state(data)

    store.put(data)
    store.save()
    _echo_state(data)


if __name__ == "__main__":
    main()
