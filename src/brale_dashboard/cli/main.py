"""CLI for the Brale wallet dashboard."""

import logging
from enum import StrEnum

import typer
from rich.console import Console
from rich.logging import RichHandler
from rich.markup import escape
from rich.progress import BarColumn, Progress, SpinnerColumn, TaskProgressColumn, TextColumn
from rich.table import Table
from rich.traceback import install

from brale_dashboard.core import (
    DashboardView,
    Session,
    TokenStore,
    WalletBalances,
    WalletDashboard,
    grand_total,
    ranked_totals,
)
from brale_dashboard.data import Settings, SettingsError, get_value_types, load_settings
from brale_dashboard.integrations import (
    BraleClient,
    BraleError,
    NoCustodialWalletsError,
    TokenProvider,
)

# Install rich traceback handler
install(show_locals=False)

app = typer.Typer(
    name="brale-dashboard",
    help="Authenticate against the Brale API and inspect custodial wallet balances",
    add_completion=False,
)

console = Console()


class OutputFormat(StrEnum):
    """Output format options."""

    TABLE = "table"
    JSON = "json"


def _configure_logging(debug: bool) -> None:
    """Route library logging through rich; WARNING by default, DEBUG with --debug."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.WARNING,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=Console(stderr=True), rich_tracebacks=True)],
        force=True,
    )
    logging.getLogger("httpx").setLevel(logging.INFO if debug else logging.WARNING)
    logging.getLogger("httpcore").setLevel(logging.WARNING)


def _load_settings() -> Settings:
    try:
        return load_settings()
    except SettingsError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        raise typer.Exit(1)


def _resolve_token(settings: Settings, token: str | None) -> str:
    """
    Pick the token from the command line or the token store.

    Raises
    ------
    typer.Exit
        If no token is available

    """
    token = token or TokenStore(settings.token_file).load()
    if not token:
        console.print("[yellow]Not authenticated.[/yellow] Run [bold]brale-dashboard auth[/bold] first.")
        raise typer.Exit(code=1)
    return token


def _brale_client(settings: Settings) -> BraleClient:
    return BraleClient(
        api_url=settings.api_url,
        timeout=settings.timeout,
        max_workers=settings.max_workers,
    )


@app.command()
def auth(
    client_id: str = typer.Option(
        ..., "--client-id", envvar="BRALE_CLIENT_ID", prompt="Client ID", help="OAuth2 client ID"
    ),
    client_secret: str = typer.Option(
        ...,
        "--client-secret",
        envvar="BRALE_CLIENT_SECRET",
        prompt="Client secret",
        hide_input=True,
        help="OAuth2 client secret",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Exchange client credentials for a bearer token and save it."""
    _configure_logging(debug)
    settings = _load_settings()

    try:
        with TokenProvider(auth_url=settings.auth_url, timeout=settings.timeout) as provider:
            token = provider.authenticate(client_id, client_secret)
    except BraleError as e:
        console.print(f"[bold red]Error:[/bold red] {escape(str(e))}")
        if debug:
            raise
        raise typer.Exit(1)

    TokenStore(settings.token_file).save(token)
    console.print("[bold green]✓ Authenticated.[/bold green] Bearer token saved.")
    console.print(token, soft_wrap=True, markup=False, highlight=False)


@app.command()
def token(
    clear: bool = typer.Option(False, "--clear", help="Remove the saved token"),
) -> None:
    """Show or clear the saved bearer token."""
    store = TokenStore(_load_settings().token_file)

    if clear:
        if store.clear():
            console.print("[green]✓ Token removed[/green]")
        else:
            console.print("[yellow]No saved token[/yellow]")
        return

    saved = store.load()
    if not saved:
        console.print("[yellow]No saved token[/yellow]")
        raise typer.Exit(code=1)
    console.print(saved, soft_wrap=True, markup=False, highlight=False)


@app.command()
def account(
    token: str | None = typer.Option(None, "--token", "-t", envvar="BRALE_TOKEN", help="Bearer token override"),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """Resolve the account ID for the current token."""
    _configure_logging(debug)
    settings = _load_settings()
    session = Session(_resolve_token(settings, token))

    with _brale_client(settings) as client:
        account_id = client.resolve_account_id(session)

    if account_id is None:
        console.print("[yellow]Could not determine account ID[/yellow]")
        raise typer.Exit(code=1)
    console.print(f"[bold cyan]Account ID:[/bold cyan] {account_id}")


@app.command()
def wallets(
    token: str | None = typer.Option(None, "--token", "-t", envvar="BRALE_TOKEN", help="Bearer token override"),
    format: OutputFormat = typer.Option(
        OutputFormat.TABLE,
        "--format",
        "-f",
        help="Output format",
    ),
    debug: bool = typer.Option(False, "--debug", "-d", help="Enable debug output"),
) -> None:
    """
    Show custodial wallets, their balances, and totals.

    Examples:

        # Dashboard for the saved token
        brale-dashboard wallets

        # Output as JSON
        brale-dashboard wallets --format json
    """
    _configure_logging(debug)
    settings = _load_settings()
    session = Session(_resolve_token(settings, token))

    try:
        with _brale_client(settings) as client:
            dashboard = WalletDashboard(client)
            if format == OutputFormat.JSON:
                view = dashboard.load(session)
            else:
                with Progress(
                    SpinnerColumn(),
                    TextColumn("[progress.description]{task.description}"),
                    BarColumn(),
                    TaskProgressColumn(),
                    console=console,
                    transient=True,
                ) as progress:
                    task = progress.add_task("Loading wallet information...", total=100)
                    view = dashboard.load(session, progress=progress, task_id=task)
    except NoCustodialWalletsError as e:
        # Informational empty state, not a failure
        console.print(f"\n[yellow]{escape(str(e))}[/yellow]")
        return
    except BraleError as e:
        console.print(f"[bold red]Error:[/bold red] Failed to load wallet information: {escape(str(e))}")
        if debug:
            raise
        raise typer.Exit(1)

    if format == OutputFormat.JSON:
        _output_json(view)
    else:
        _output_table(view)


@app.command()
def value_types() -> None:
    """List the value types queried for balances."""
    table = Table(title="Value Types", show_header=True, header_style="bold magenta")
    table.add_column("#", style="dim", justify="right")
    table.add_column("Symbol", style="cyan")

    for i, symbol in enumerate(get_value_types(), start=1):
        table.add_row(str(i), symbol)

    console.print(table)


def _wallet_balance_table(wallet: WalletBalances) -> Table:
    address = wallet.address
    title = f"{escape(address.description or '(No description)')} [dim]{address.id}[/dim]"
    table = Table(title=title, show_header=True, header_style="bold magenta")
    table.add_column("Transfer Type", style="blue")
    table.add_column("Value Type", style="cyan")
    table.add_column("Balance", style="bold green", justify="right")

    for entry in wallet.balances:
        value = entry.balance.value if entry.balance and entry.balance.value is not None else "-"
        table.add_row(entry.transfer_type, entry.value_type, str(value))

    return table


def _output_table(view: DashboardView) -> None:
    """Output dashboard as rich tables."""
    console.print("\n[bold cyan]Wallet Information[/bold cyan]")
    if view.used_fallback:
        console.print("[yellow]Account ID unavailable; showing the global address list without balances.[/yellow]")
    else:
        console.print(f"[bold]Account ID:[/bold] {view.account_id}")

    if view.primary:
        primary = view.primary.address
        console.print("\n[bold]🌟 Primary Wallet[/bold]")
        console.print(f"  ID: {primary.id}")
        console.print(f"  Address: {primary.address or 'Not available'}")
        console.print(f"  Description: {escape(primary.description or '(No description)')}")
        console.print(f"  Transfer types: {', '.join(primary.transfer_types) or '-'}")
    else:
        console.print("\n[yellow]No primary custodial wallet found[/yellow]")

    table = Table(
        title=f"Custodial Wallets ({len(view.wallets)})",
        show_header=True,
        header_style="bold magenta",
    )
    table.add_column("ID", style="cyan")
    table.add_column("Usage", style="yellow")
    table.add_column("Address", style="white")
    table.add_column("Transfer Types", style="blue")
    table.add_column("Balances", justify="right")
    table.add_column("Unavailable", style="dim", justify="right")

    for wallet in view.wallets:
        address = wallet.address
        table.add_row(
            address.id,
            address.usage or "-",
            address.address or "Not available",
            ", ".join(address.transfer_types) or "-",
            str(len(wallet.balances)),
            str(len(wallet.unavailable)),
        )

    console.print("\n")
    console.print(table)

    for wallet in view.wallets:
        if wallet.balances:
            console.print(_wallet_balance_table(wallet))

    console.print("\n")
    if not view.totals:
        console.print("[yellow]No balances reported[/yellow]")
        console.print("\n")
        return

    totals = Table(title="Total Balances", show_header=True, header_style="bold magenta")
    totals.add_column("Value Type", style="cyan")
    totals.add_column("Total", style="bold green", justify="right")
    for value_type, amount in ranked_totals(view.totals):
        totals.add_row(escape(value_type), f"{amount:,.2f}")

    console.print(totals)
    console.print(f"[bold]💰 Total Balance:[/bold] [bold green]${grand_total(view.totals):,.2f} USD[/bold green]")
    console.print("\n")


def _output_json(view: DashboardView) -> None:
    """Output dashboard as JSON."""
    data = view.model_dump(mode="json")
    console.print_json(data=data)


if __name__ == "__main__":
    app()
