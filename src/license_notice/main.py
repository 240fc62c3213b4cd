import json
import logging
import time
from pathlib import Path
from typing import Any, List, Optional

import click
import yaml
from rich.console import Console
from rich.panel import Panel

from . import __version__
from .cli_config import (
    NoticeConfig,
    apply_config_section,
    create_sample_config,
    decode_escapes,
    get_config,
    load_config_file,
    validate_config_values,
)
from .dependency import DependencyRecord, parse_dependency
from .error_handling import (
    ErrorCategory,
    InvalidRecordError,
    get_error_handler,
    log_validation_error,
    setup_error_handling,
)
from .formatter import format_dependencies, select_dependencies
from .structured_logging import (
    configure_logging,
    log_format_complete,
    log_format_start,
)

console = Console()


def load_dependency_document(file_path: str) -> List[DependencyRecord]:
    """
    Load dependency records from a JSON or YAML document.

    The document holds a single record, a list of records, or a mapping
    with a ``dependencies`` list.
    """
    path = Path(file_path)
    try:
        with open(path, encoding="utf-8") as f:
            if path.suffix.lower() in [".yaml", ".yml"]:
                data: Any = yaml.safe_load(f)
            else:
                data = json.load(f)
    except (ValueError, yaml.YAMLError) as e:
        get_error_handler().error(
            ErrorCategory.PARSING,
            f"Could not parse {path.name}",
            __name__,
            "load_dependency_document",
            exception=e,
        )
        raise click.ClickException(f"Failed to parse dependency document: {e}")
    except OSError as e:
        get_error_handler().error(
            ErrorCategory.FILESYSTEM,
            f"Could not read {path.name}",
            __name__,
            "load_dependency_document",
            exception=e,
        )
        raise click.ClickException(f"Failed to read dependency document: {e}")

    if data is None:
        return []
    if isinstance(data, dict) and "dependencies" in data:
        data = data["dependencies"] or []
    if isinstance(data, dict):
        data = [data]
    if not isinstance(data, list):
        raise click.ClickException(
            "Dependency document must contain a record or a list of records"
        )

    records = []
    for entry in data:
        try:
            records.append(parse_dependency(entry))
        except InvalidRecordError as e:
            log_validation_error(e, __name__, "load_dependency_document", path.name)
            raise click.ClickException(f"Invalid dependency record: {e}")
    return records


def write_notice(notice: str, output_path: Path, encoding: str) -> None:
    """Write the notice, creating the parent directory when needed."""
    try:
        output_path.parent.mkdir(parents=True, exist_ok=True)
        with open(output_path, "w", encoding=encoding) as f:
            f.write(notice)
    except (OSError, UnicodeEncodeError) as e:
        get_error_handler().error(
            ErrorCategory.FILESYSTEM,
            f"Could not write {output_path.name}",
            __name__,
            "write_notice",
            exception=e,
        )
        raise click.ClickException(f"Failed to write notice to {output_path}: {e}")


@click.group(invoke_without_command=True)
@click.option("--version", is_flag=True, help="Show version information")
@click.pass_context
def cli(ctx, version):
    """
    📜 License-Notice: third-party license notices from dependency metadata

    Renders dependency records as fixed-layout, human-readable text blocks.
    """
    if version:
        console.print(f"License-Notice version {__version__}", style="bold blue")
        ctx.exit()

    if ctx.invoked_subcommand is None:
        console.print(ctx.get_help())
        return

    current_config = get_config()
    configure_logging(current_config.logging.log_level)
    setup_error_handling(
        log_level=getattr(
            logging, current_config.logging.log_level.upper(), logging.WARNING
        ),
        log_format=current_config.logging.log_format,
    )


@cli.command()
@click.argument(
    "file_path", type=click.Path(exists=True, readable=True, dir_okay=False)
)
@click.option(
    "--output-file",
    "-o",
    type=click.Path(dir_okay=False),
    help="Write the notice to this file instead of stdout",
)
@click.option(
    "--include-private/--exclude-private",
    default=None,
    help="Include dependencies marked private (default: from config)",
)
@click.option(
    "--separator",
    help="Text placed between two dependency blocks (default: from config)",
)
@click.option("--quiet", "-q", is_flag=True, help="Suppress non-critical output")
def render(
    file_path: str,
    output_file: Optional[str],
    include_private: Optional[bool],
    separator: Optional[str],
    quiet: bool,
):
    """Render a license notice from a JSON or YAML dependency document."""
    current_config = get_config()
    if include_private is None:
        include_private = current_config.output.include_private
    if separator is None:
        separator = current_config.output.separator
    else:
        separator = decode_escapes(separator)
    output_file = output_file or current_config.output.output_file

    start = time.perf_counter()
    records = load_dependency_document(file_path)
    log_format_start(file_path, len(records))

    selected = select_dependencies(records, include_private=include_private)
    notice = format_dependencies(selected, separator=separator, include_private=True)
    rendered = len(selected)
    log_format_complete(
        rendered, len(records) - rendered, (time.perf_counter() - start) * 1000
    )

    if output_file:
        write_notice(notice, Path(output_file), current_config.output.encoding)
        if not quiet:
            console.print(
                f"✅ Wrote {rendered} dependencies to {output_file}", style="green"
            )
    else:
        click.echo(notice)


@cli.command()
def info():
    """Show the notice layout and configuration sources."""
    info_text = """
[bold blue]📋 Block Layout (fixed order):[/bold blue]

• [green]Name[/green], [green]Version[/green], [green]License[/green], [green]Private[/green] - always present
• [yellow]Description[/yellow], [yellow]Repository[/yellow], [yellow]Homepage[/yellow] - when known
• [yellow]Author[/yellow] - rendered as NAME <EMAIL>
• [yellow]Contributors[/yellow] - one indented line per contributor

[bold blue]🌍 Environment Variables:[/bold blue]

• [cyan]LICENSE_NOTICE_SEPARATOR[/cyan] - Text between dependency blocks
• [cyan]LICENSE_NOTICE_INCLUDE_PRIVATE[/cyan] - Include private dependencies
• [cyan]LICENSE_NOTICE_ENCODING[/cyan] - Output file encoding
• [cyan]LICENSE_NOTICE_LOG_LEVEL[/cyan] - Log level for stderr events

[bold blue]📄 Configuration Files:[/bold blue]

• [green].license-notice.json[/green] / [green].license-notice.yaml[/green] - Project-level config
• [green]~/.config/license-notice/config.json[/green] - User-level config

[bold blue]💡 Usage Examples:[/bold blue]

  license-notice render dependencies.json
  license-notice render dependencies.yaml -o THIRD_PARTY_NOTICES.txt
  license-notice config init
"""
    console.print(
        Panel(
            info_text,
            title="[bold]License-Notice Information[/bold]",
            border_style="blue",
        )
    )


@cli.group()
def config():
    """Configuration management commands."""
    pass


@config.command("init")
@click.option(
    "--path",
    type=click.Path(),
    default=".license-notice.json",
    help="Path where to create the config file",
    show_default=True,
)
@click.option("--force", is_flag=True, help="Overwrite existing config file")
def config_init(path: str, force: bool):
    """Create a sample configuration file."""
    config_path = Path(path)

    if config_path.exists() and not force:
        console.print(f"⚠️  Config file already exists at {config_path}", style="yellow")
        console.print("Use --force to overwrite", style="dim")
        return

    try:
        with open(config_path, "w", encoding="utf-8") as f:
            f.write(create_sample_config())
    except OSError as e:
        raise click.ClickException(f"Failed to create config file: {e}")

    console.print(f"✅ Created configuration file at {config_path}", style="green")


@config.command("show")
def config_show():
    """Show current configuration settings."""
    current_config = get_config()

    console.print(
        Panel("[bold blue]🔧 License-Notice Configuration[/bold blue]", border_style="blue")
    )

    console.print("\n[bold cyan]📄 Output Settings:[/bold cyan]")
    console.print(f"  Separator: {current_config.output.separator!r}", markup=False)
    console.print(f"  Include Private: {current_config.output.include_private}")
    console.print(f"  Encoding: {current_config.output.encoding}")
    console.print(f"  Output File: {current_config.output.output_file or '(stdout)'}")

    console.print("\n[bold cyan]📝 Logging Settings:[/bold cyan]")
    console.print(f"  Log Level: {current_config.logging.log_level}")


@config.command("validate")
@click.argument("config_file", type=click.Path(exists=True, dir_okay=False))
def config_validate(config_file: str):
    """Validate a configuration file."""
    config_data = load_config_file(Path(config_file))

    if not isinstance(config_data, dict):
        raise click.ClickException(f"Could not load config from {config_file}")

    candidate = NoticeConfig()
    for section in ("output", "logging"):
        if isinstance(config_data.get(section), dict):
            apply_config_section(getattr(candidate, section), config_data[section], section)

    errors = validate_config_values(candidate)
    if errors:
        for error in errors:
            console.print(f"  • {error}", style="red")
        raise click.ClickException("Configuration validation failed")

    console.print(f"✅ Configuration file {config_file} is valid", style="green")


if __name__ == "__main__":
    cli()
