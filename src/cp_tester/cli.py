"""Command line interface entry point."""

from __future__ import annotations

import logging
import sys

import click

from cp_tester.configuration import (
    COMPARISON_MODES,
    DEFAULT_CONFIG_FILENAME,
    SUPPORTED_CPP_VERSIONS,
    ConfigurationError,
    resolve_configuration,
    write_placeholder_configuration,
)
from cp_tester.run_execution import RunExecutionError, RunRequest, execute_case_run


class CliError(Exception):
    """Custom CLI error."""


@click.group(context_settings={"help_option_names": ["-h", "--help"]})
@click.version_option(package_name="cp-tester")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log engine details to stderr.")
def cli(verbose: bool) -> None:
    """Run competitive-programming solutions against stored test cases.

    Supports C, C++, Java, and Python. Java class names must match the file name.
    """
    if verbose:
        logging.basicConfig(
            level=logging.DEBUG,
            stream=sys.stderr,
            format="%(levelname)s %(name)s: %(message)s",
        )


@cli.command(name="generate-config")
@click.option(
    "--output",
    "output_path",
    required=False,
    default=DEFAULT_CONFIG_FILENAME,
    show_default=True,
    type=click.Path(path_type=str),
    help="Path to the YAML configuration file to write",
)
def generate_config(output_path: str) -> None:
    """Generate a YAML configuration file holding the default settings."""
    try:
        resolved_output = write_placeholder_configuration(output_path)
    except (FileExistsError, OSError) as exc:
        raise CliError(str(exc)) from exc
    click.echo(str(resolved_output))


@cli.command(name="show-config")
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_FILENAME} if present)",
)
def show_config(config_path: str | None) -> None:
    """Print the resolved configuration."""
    try:
        settings = resolve_configuration(config_path)
    except ConfigurationError as exc:
        raise CliError(str(exc)) from exc
    click.echo(settings.describe())


@cli.command(name="run")
@click.argument("test_dir", type=click.Path(exists=True, file_okay=False, path_type=str))
@click.option(
    "--file",
    "-f",
    "source_file",
    required=True,
    type=click.Path(path_type=str),
    help="The file to run, with a supported extension (.c, .cpp, .java, .py)",
)
@click.option(
    "--cases",
    "-c",
    "cases",
    required=False,
    help="Comma-separated test case names to run; all cases run when omitted",
)
@click.option(
    "--show-input", "-s", is_flag=True, default=False, help="Show input for each test case"
)
@click.option(
    "--compare-output",
    "-o",
    is_flag=True,
    default=False,
    help="Show the expected output next to the program output",
)
@click.option(
    "--cpp-ver",
    "cpp_version",
    type=click.Choice(SUPPORTED_CPP_VERSIONS),
    default=None,
    help="C++ standard to compile with (default: configured version, else 17)",
)
@click.option(
    "--timeout",
    "-t",
    "timeout_ms",
    type=click.IntRange(min=0),
    default=None,
    help="Time limit per test case in milliseconds (default: configured limit, else 5000)",
)
@click.option("--input-extension", default="in", show_default=True, help="Input file extension")
@click.option("--output-extension", default="out", show_default=True, help="Output file extension")
@click.option(
    "--io",
    "io_names",
    multiple=True,
    help="Route I/O through files: give once for a shared name, twice for input then output",
)
@click.option(
    "--comparison",
    "comparison_mode",
    type=click.Choice(COMPARISON_MODES),
    default=None,
    help="Output comparison mode (default: configured mode, else trimmed)",
)
@click.option(
    "--keep-going",
    is_flag=True,
    default=False,
    help="Report timeouts and runtime errors per case instead of stopping",
)
@click.option(
    "--config",
    "config_path",
    required=False,
    type=click.Path(path_type=str),
    help=f"Path to YAML configuration file (default: ./{DEFAULT_CONFIG_FILENAME} if present)",
)
def run_tests(  # pylint: disable=too-many-arguments
    test_dir: str,
    source_file: str,
    cases: str | None,
    show_input: bool,
    compare_output: bool,
    cpp_version: str | None,
    timeout_ms: int | None,
    input_extension: str,
    output_extension: str,
    io_names: tuple[str, ...],
    comparison_mode: str | None,
    keep_going: bool,
    config_path: str | None,
) -> None:
    """Compile a solution and run it against the cases in TEST_DIR."""
    if len(io_names) > 2:
        raise click.BadParameter("give at most two names (input, output)", param_hint="--io")
    try:
        execute_case_run(
            RunRequest(
                test_dir=test_dir,
                source_file=source_file,
                case_names=_split_case_names(cases),
                show_input=show_input,
                compare_output=compare_output,
                cpp_version=cpp_version,
                timeout_ms=timeout_ms,
                input_extension=input_extension,
                output_extension=output_extension,
                io_names=io_names,
                comparison_mode=comparison_mode,
                keep_going=keep_going,
                config_path=config_path,
            )
        )
    except RunExecutionError as exc:
        raise CliError(str(exc)) from exc


def _split_case_names(cases: str | None) -> tuple[str, ...] | None:
    if cases is None:
        return None
    names = tuple(name.strip() for name in cases.split(",") if name.strip())
    if not names:
        raise click.BadParameter("give at least one test case name", param_hint="--cases")
    return names


def main(argv: list[str] | None = None) -> int:
    """CLI entry point for console_scripts wiring."""
    argv = argv if argv is not None else sys.argv[1:]
    try:
        cli.main(args=list(argv), prog_name="cp-tester", standalone_mode=False)
    except CliError as exc:
        click.echo(f"{click.style('ERROR', fg='red')}: {exc}", err=True)
        return 1
    except click.ClickException as exc:
        exc.show()
        return exc.exit_code
    except click.Abort:
        click.echo("Aborted.", err=True)
        return 1
    return 0


if __name__ == "__main__":  # pragma: no cover
    raise SystemExit(main())
