import click

from feishu_auth.cli.commands import app_token, authorize_url, exchange, tenant_token


@click.group(invoke_without_command=True)
@click.pass_context
def cli(ctx: click.Context) -> None:
    """Feishu OAuth helper"""
    if ctx.invoked_subcommand is None:
        click.echo(ctx.get_help())


cli.add_command(authorize_url)
cli.add_command(app_token)
cli.add_command(tenant_token)
cli.add_command(exchange)


if __name__ == "__main__":
    cli()
