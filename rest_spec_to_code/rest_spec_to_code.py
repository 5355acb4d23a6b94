import json
import logging
from pathlib import Path

import click

from .cli_utils import reconstruct_command_line
from .pipeline import CodeGeneratorConfig, GenerationError, GenerationMode, PipelineGenerator, load_documents


def load_config(path):
    """Read a CodeGeneratorConfig from a JSON file, or the defaults when path is None."""
    if path is None:
        return CodeGeneratorConfig()
    with open(path, encoding="utf-8") as f:
        data = json.load(f)
    if not isinstance(data, dict):
        raise click.ClickException(f"invalid config file {Path(path).name}: expected a JSON object")
    return CodeGeneratorConfig.from_dict(data)


@click.command()
@click.option(
    "--mode",
    "-m",
    default=GenerationMode.API.value,
    type=click.Choice([mode.value for mode in GenerationMode]),
    help="api: endpoint descriptors to request builders, request: body descriptors to types",
)
@click.option("--language", "-l", default="python", type=click.Choice(["python", "swift"]))
@click.option("--config", "-c", default=None, type=click.Path(exists=True, dir_okay=False, resolve_path=True))
@click.option("--no-validate", is_flag=True, default=False, help="Write generated files without syntax checks")
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log every registration and written file")
@click.argument("input_dir", type=click.Path(exists=True, file_okay=False, resolve_path=True))
@click.argument("output_dir", type=click.Path(file_okay=False, resolve_path=True))
def rest_spec_to_code(mode, language, config, no_validate, verbose, input_dir, output_dir):
    """Generate REST client sources from the JSON descriptors in INPUT_DIR."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    try:
        config = load_config(config)
    except (json.JSONDecodeError, UnicodeDecodeError, OSError) as e:
        raise click.ClickException(f"invalid config file {Path(config).name}: {e}") from e

    if no_validate:
        config.output.validate_before_write = False

    try:
        documents = load_documents(Path(input_dir))
        codegen = PipelineGenerator(documents, config, language, mode, reconstruct_command_line(rest_spec_to_code))
        written = codegen.write(Path(output_dir))
    except (GenerationError, OSError) as e:
        raise click.ClickException(str(e)) from e

    click.echo(f"Generated {len(written)} file(s) in {output_dir}")
