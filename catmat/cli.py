"""CATMAT Preços CLI.

Commands:
- serve: Run the HTTP API (converts the spreadsheet at startup)
- build-cache: Convert the CATMAT spreadsheet to the JSON cache
- search: Search the cached catalog by code or description
- preco: Query the price API for a catalog code
"""

from __future__ import annotations

import asyncio
from pathlib import Path

import typer
from rich.console import Console
from rich.table import Table

from catmat.catalog.query import CatalogQueryService, SearchTermTooShortError
from catmat.config import get_config
from catmat.core.logging import configure_logging
from catmat.ingestion.catalog import CatalogSourceMissingError, load_catalog, read_catalog_cache
from catmat.integration.compras_client import ComprasGovClient, PriceGatewayError
from catmat.pricing.pipeline import PriceNotFoundError, build_price_report

app = typer.Typer(
    name="catmat",
    help="CATMAT Preços - catálogo de materiais e pesquisa de preços",
    no_args_is_help=True,
)

console = Console()


@app.command()
def serve(
    host: str | None = typer.Option(None, help="Host to bind (default: HOST)"),
    port: int | None = typer.Option(None, help="Port to bind (default: PORT)"),
    reload: bool = typer.Option(False, help="Enable autoreload (dev only)"),
):
    """Run the FastAPI server."""
    import uvicorn

    config = get_config()
    if not config.catalog.source_path.exists():
        console.print(f"[red]Arquivo {config.catalog.source_path} não encontrado![/red]")
        raise typer.Exit(1)

    host = host or config.server.host
    port = port or config.server.port
    typer.echo(f"Servidor rodando em http://{host}:{port}")
    uvicorn.run(
        "catmat.web.app:create_app",
        factory=True,
        host=host,
        port=port,
        reload=reload,
        workers=1,
    )


@app.command(name="build-cache")
def build_cache(
    source: Path | None = typer.Option(None, "--source", help="CATMAT spreadsheet (CSV/XLSX)"),
    cache: Path | None = typer.Option(None, "--cache", help="JSON cache to write"),
):
    """Convert the CATMAT spreadsheet into the JSON cache."""
    config = get_config()
    configure_logging(config.log_level, config.json_logs)
    source = source or config.catalog.source_path
    cache = cache or config.catalog.cache_path

    try:
        snapshot = load_catalog(source, cache)
    except CatalogSourceMissingError as exc:
        console.print(f"[red]{exc}[/red]")
        raise typer.Exit(1) from None
    except ValueError as exc:
        console.print(f"[red]Error:[/red] {exc}")
        raise typer.Exit(1) from None

    console.print(f"[bold green]✓[/bold green] {cache} gerado com {len(snapshot)} itens")


@app.command()
def search(
    term: str = typer.Argument(..., help="Código ou parte da descrição"),
    cache: Path | None = typer.Option(None, "--cache", help="JSON cache to read"),
    limit: int = typer.Option(50, "--limit", help="Rows to display"),
):
    """Search the cached catalog."""
    config = get_config()
    cache = cache or config.catalog.cache_path
    if not cache.exists():
        console.print(f"[red]Cache not found:[/red] {cache} (run 'catmat build-cache')")
        raise typer.Exit(1)

    service = CatalogQueryService(read_catalog_cache(cache))
    try:
        results = service.search(term)
    except SearchTermTooShortError as exc:
        console.print(f"[yellow]{exc}[/yellow]")
        raise typer.Exit(1) from None

    table = Table(title=f"{len(results)} itens para '{term}'")
    table.add_column("Código", style="cyan")
    table.add_column("Descrição")
    for item in results[:limit]:
        table.add_row(item.codigo, item.descricao)
    console.print(table)


@app.command()
def preco(
    codigo: str = typer.Argument(..., help="Código do item (CATMAT)"),
    ano: str | None = typer.Option(None, "--ano", help="Filtrar pelo ano da compra"),
    data_resultado: bool | None = typer.Option(
        None, "--data-resultado/--sem-data-resultado", help="Filtro dataResultado da API"
    ),
):
    """Query the price API and print the summary."""
    config = get_config()
    configure_logging(config.log_level, config.json_logs)

    async def _fetch():
        async with ComprasGovClient(
            token=config.price_api.token,
            base_url=config.price_api.base_url,
            timeout=config.price_api.timeout_seconds,
            page_size=config.price_api.page_size,
        ) as client:
            return await client.fetch_observations(codigo, data_resultado=data_resultado)

    try:
        raw = asyncio.run(_fetch())
        report = build_price_report(raw, ano)
    except PriceGatewayError as exc:
        console.print(f"[red]Erro ao consultar a API externa:[/red] {exc}")
        raise typer.Exit(1) from None
    except PriceNotFoundError as exc:
        console.print(f"[yellow]{exc.message}[/yellow]")
        raise typer.Exit(1) from None

    stats = report.estatisticas
    console.print(f"[bold]Média:[/bold] {stats.media}")
    console.print(f"[bold]Mediana:[/bold] {stats.mediana}")
    console.print(f"[bold]Mínimo:[/bold] {stats.minimo}")
    console.print(f"[bold]Máximo:[/bold] {stats.maximo}")
    console.print(f"{stats.total_registros} registros ({stats.precos_validos} com preço)")

    table = Table()
    table.add_column("Preço", justify="right", style="green")
    table.add_column("Unidade")
    table.add_column("Marca")
    table.add_column("Órgão")
    table.add_column("UF")
    table.add_column("Data")
    for row in report.dados:
        table.add_row(
            row.preco_unitario or "-",
            row.nome_unidade_fornecimento or "",
            row.marca or "",
            row.nome_orgao or "",
            row.estado or "",
            row.data_compra or "",
        )
    console.print(table)


if __name__ == "__main__":
    app()
