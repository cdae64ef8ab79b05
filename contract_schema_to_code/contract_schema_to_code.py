import logging
from pathlib import Path

import click

from .errors import SchemaCodegenError
from .pipeline import LANGUAGES, CodeGeneratorConfig, ContractGenerator, ContractSchema
from .utils import snake_to_pascal_case


@click.command()
@click.option("--interface", "-i", default=None, type=str, help="Interface the generated class implements (default: I<ContractName>)")
@click.option("--namespace", "-n", default="", type=str, help="Namespace of the generated code")
@click.option("--config", "-c", default=None, type=click.Path(exists=True, resolve_path=True))
@click.option("--language", "-l", default="cs", type=click.Choice(LANGUAGES))
@click.option("--verbose", "-v", is_flag=True, default=False, help="Log the compilation steps")
@click.argument("path", default=None, type=click.Path(exists=True, resolve_path=True))
@click.argument("output", default=None, type=click.Path(resolve_path=True))
def contract_schema_to_code(interface, namespace, config, language, verbose, path, output):
    if verbose:
        logging.basicConfig(level=logging.DEBUG, format="%(levelname)s %(name)s: %(message)s")

    if config is not None:
        config = CodeGeneratorConfig.from_file(config)
    else:
        config = CodeGeneratorConfig()

    try:
        schema = ContractSchema.from_file(path)

        if interface is None:
            stem = schema.contract_name or Path(path).stem
            interface = f"{config.interface_marker}{snake_to_pascal_case(stem)}"

        out = ContractGenerator(interface, namespace, schema, config, language).generate()
    except SchemaCodegenError as e:
        raise click.ClickException(str(e)) from e

    with open(output, "w", encoding="utf-8") as f:
        f.write(out)
