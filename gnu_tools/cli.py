"""CLI orchestration: wires config, catalogs and the resource writer together."""

import logging
import time
from typing import Optional

from rich.console import Console
from rich.logging import RichHandler
from rich.table import Table

from gnu_tools.catalog import CatalogLoadError, DuplicatePolicy
from gnu_tools.config import AppConfig, apply_environment, load_config
from gnu_tools.msgfmt import (
    CatalogError,
    ConversionResult,
    MsgfmtOptions,
    ResourcesGen,
)

console = Console()


def setup_logging(verbose: bool = False) -> None:
    """Configure logging with rich handler for colored, readable output."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.INFO,
        format="%(message)s",
        datefmt="[%X]",
        handlers=[RichHandler(console=console, rich_tracebacks=True)],
    )


def _print_summary_table(result: ConversionResult, elapsed: float) -> None:
    """Print a summary table of the conversion.

    Args:
        result: Counts from the finished conversion.
        elapsed: Total elapsed time in seconds.
    """
    table = Table(title="Resource Summary")
    table.add_column("Item", style="cyan")
    table.add_column("Count", style="green", justify="right")

    table.add_row("Input files", str(result.files))
    table.add_row("Translated", str(result.translated))
    table.add_row("Untranslated", str(result.untranslated))
    table.add_row("Replaced duplicates", str(result.replaced))
    table.add_row("Skipped duplicates", str(result.skipped))
    table.add_section()
    table.add_row("[bold]Total[/bold]", f"[bold]{result.entries}[/bold]")

    console.print()
    console.print(table)
    console.print(f"\n[dim]Completed in {elapsed:.1f}s[/dim]")


def build_options(
    config: AppConfig,
    input_files: list[str],
    output_file: str,
    duplicates: Optional[str] = None,
    use_fuzzy: Optional[bool] = None,
) -> MsgfmtOptions:
    """Combine config file settings with command line overrides."""
    return MsgfmtOptions(
        input_files=list(input_files),
        output_file=output_file,
        duplicates=DuplicatePolicy(duplicates or config.msgfmt.duplicates),
        use_fuzzy=config.msgfmt.use_fuzzy if use_fuzzy is None else use_fuzzy,
    )


def run(
    input_files: list[str],
    output_file: str,
    config_path: Optional[str] = None,
    duplicates: Optional[str] = None,
    use_fuzzy: Optional[bool] = None,
    verbose: bool = False,
) -> ConversionResult:
    """Main synchronous entry point for the CLI.

    Args:
        input_files: PO files to merge, in order.
        output_file: Path of the resource bundle to write.
        config_path: Optional path to the YAML configuration file.
        duplicates: Duplicate key policy overriding the config.
        use_fuzzy: Fuzzy handling overriding the config.
        verbose: Enable debug logging.

    Returns:
        The conversion summary.
    """
    setup_logging(verbose)
    logger = logging.getLogger(__name__)

    try:
        console.print("[bold cyan]GNU msgfmt resource generator[/bold cyan]")
        console.print("[dim]" + "─" * 50 + "[/dim]")

        if config_path:
            config = load_config(config_path)
            logger.info("Configuration loaded from %s", config_path)
        else:
            config = apply_environment(AppConfig())

        options = build_options(
            config, input_files, output_file, duplicates, use_fuzzy
        )
        logger.info("Duplicate policy: %s", options.duplicates.value)

        start_time = time.time()
        result = ResourcesGen(options).run()
        elapsed = time.time() - start_time

        console.print(f"\n[green bold]Saved resources to {output_file}[/green bold]")
        _print_summary_table(result, elapsed)
        return result

    except FileNotFoundError as e:
        console.print(f"[red bold]Error:[/red bold] {e}")
        raise SystemExit(1)
    except (CatalogLoadError, CatalogError) as e:
        cause = f" ({e.__cause__})" if e.__cause__ else ""
        console.print(f"[red bold]Error:[/red bold] {e}{cause}")
        raise SystemExit(1)
    except ValueError as e:
        console.print(f"[red bold]Configuration error:[/red bold] {e}")
        raise SystemExit(1)
    except KeyboardInterrupt:
        console.print("\n[yellow]Conversion cancelled by user.[/yellow]")
        raise SystemExit(130)
    except Exception as e:
        logger.exception("Unexpected error: %s", e)
        raise SystemExit(1)
