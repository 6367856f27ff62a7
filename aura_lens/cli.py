import typer
from pathlib import Path
from typing import Optional
from rich.console import Console
from rich.markdown import Markdown
from dotenv import load_dotenv

from aura_lens.analyzers.aura_engine import compute_aura
from aura_lens.formatters.markdown import format_aura_report
from aura_lens.models import AuraInputs, AuraResult

load_dotenv()
app = typer.Typer(help="Deterministic Farcaster aura scores.")
console = Console()


def _emit(result: AuraResult, as_json: bool, output: Optional[Path]) -> None:
    text = result.model_dump_json(indent=2) if as_json else format_aura_report(result)

    if output:
        output.write_text(text)
        console.print(f"[bold green]✓[/] Aura saved to [cyan]{output}[/]")
    elif as_json:
        console.print_json(text)
    else:
        console.print(Markdown(text))


@app.command()
def score(
    casts: int = typer.Option(..., "--casts", "-c", help="Casts in the window"),
    replies: int = typer.Option(..., "--replies", "-r", help="Replies in the window"),
    reactions: int = typer.Option(..., "--reactions", help="Likes + recasts received"),
    followers: int = typer.Option(..., "--followers", "-f", help="Follower count"),
    long_ratio: Optional[float] = typer.Option(None, "--long-ratio", help="Fraction of long casts (0..1)"),
    media_ratio: Optional[float] = typer.Option(None, "--media-ratio", help="Fraction of media casts (0..1)"),
    base_tx: Optional[int] = typer.Option(None, "--base-tx", help="Base transaction count"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save result to file instead of printing"),
):
    """Score raw stats without touching the network."""
    inputs = AuraInputs(
        casts=casts,
        replies=replies,
        reactions_received=reactions,
        followers=followers,
        long_cast_ratio=long_ratio,
        media_cast_ratio=media_ratio,
        base_tx_count=base_tx,
    )
    _emit(compute_aura(inputs), as_json, output)


@app.command()
def fid(
    fid: int = typer.Argument(help="Farcaster fid"),
    casts_limit: int = typer.Option(30, "--casts-limit", "-n", help="Number of recent casts to fetch"),
    base_tx: Optional[int] = typer.Option(None, "--base-tx", help="Base transaction count"),
    as_json: bool = typer.Option(False, "--json", help="Print the raw result as JSON"),
    output: Optional[Path] = typer.Option(None, "--output", "-o", help="Save result to file instead of printing"),
):
    """Fetch stats for a fid from Neynar and score them."""
    from aura_lens.fetchers.farcaster import FarcasterFetchError, MissingCredentialsError, fetch_farcaster_stats

    if fid <= 0:
        console.print(f"[bold red]Error:[/] fid must be positive, got {fid}")
        raise typer.Exit(1)

    try:
        with console.status(f"[bold green]Fetching fid {fid} from Neynar..."):
            stats = fetch_farcaster_stats(fid, cast_limit=casts_limit)
    except MissingCredentialsError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        console.print("[dim]Set NEYNAR_API_KEY in your .env file[/]")
        raise typer.Exit(1)
    except FarcasterFetchError as exc:
        console.print(f"[bold red]Error:[/] {exc}")
        raise typer.Exit(1)

    if not as_json:
        console.print(f"[dim]fid {fid}: {stats.casts} casts · {stats.replies} replies · "
                      f"{stats.reactions_received} reactions · {stats.followers} followers[/]")
    _emit(compute_aura(stats.to_inputs(base_tx)), as_json, output)
