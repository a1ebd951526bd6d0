"""
Config CLI commands.

Shows and updates the client configuration file.
"""

import click

from hostel_notify.config import ClientConfig, ConfigError, ConfigValidationError


def _load_config(ctx: click.Context) -> ClientConfig:
    try:
        return ClientConfig()
    except ConfigError as e:
        click.echo(click.style("Error: ", fg="red", bold=True) + str(e))
        ctx.exit(1)


def _validate_and_save(ctx: click.Context, client_config: ClientConfig) -> None:
    try:
        client_config.validate()
    except ConfigValidationError as e:
        click.echo(click.style("Error: ", fg="red", bold=True) + str(e))
        ctx.exit(1)
    client_config.save()


# ============================================================================
# Config Command Group
# ============================================================================


@click.group()
@click.pass_context
def config(ctx: click.Context) -> None:
    """
    Manage client configuration.

    Settings are stored in a YAML file in the user configuration directory.
    HOSTEL_NOTIFY_SERVER_URL, HOSTEL_NOTIFY_API_TOKEN and
    HOSTEL_NOTIFY_LOG_LEVEL override the file.
    """
    ctx.ensure_object(dict)


@config.command("show")
@click.pass_context
def show(ctx: click.Context) -> None:
    """
    Display the current configuration.

    Example:

        hostel-notify config show
    """
    client_config = _load_config(ctx)

    token = client_config.api_token
    masked = f"{token[:4]}…{token[-4:]}" if len(token) > 8 else ("set" if token else "not set")

    click.echo(f"Config file:      {client_config.config_path}")
    click.echo(f"Server URL:       {client_config.server_url}")
    click.echo(f"API token:        {masked}")
    click.echo(f"Items per page:   {client_config.items_per_page}")
    click.echo(f"Search debounce:  {client_config.search_debounce_ms} ms")
    click.echo(f"Request timeout:  {client_config.request_timeout_seconds} s")
    click.echo(f"Log level:        {client_config.log_level}")


@config.command("set-server")
@click.argument("url", required=True)
@click.pass_context
def set_server(ctx: click.Context, url: str) -> None:
    """
    Set the API server URL.

    Example:

        hostel-notify config set-server https://hostel.example.edu/api
    """
    client_config = _load_config(ctx)
    client_config.server_url = url.rstrip("/")
    _validate_and_save(ctx, client_config)
    click.echo(click.style("Server URL updated: ", fg="green") + client_config.server_url)


@config.command("set-token")
@click.argument("token", required=True)
@click.pass_context
def set_token(ctx: click.Context, token: str) -> None:
    """
    Store the bearer token sent with every request.

    Example:

        hostel-notify config set-token eyJhbGciOi...
    """
    client_config = _load_config(ctx)
    client_config.api_token = token
    _validate_and_save(ctx, client_config)
    click.echo(click.style("API token saved.", fg="green"))


@config.command("set-page-size")
@click.argument("size", type=int, required=True)
@click.pass_context
def set_page_size(ctx: click.Context, size: int) -> None:
    """
    Set how many notifications are requested per page.

    Example:

        hostel-notify config set-page-size 20
    """
    client_config = _load_config(ctx)
    client_config.items_per_page = size
    _validate_and_save(ctx, client_config)
    click.echo(click.style("Items per page: ", fg="green") + str(size))
