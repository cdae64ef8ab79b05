import click
from click.testing import CliRunner

from contract_schema_to_code.cli_utils import reconstruct_command_line
from contract_schema_to_code.contract_schema_to_code import contract_schema_to_code


class TestCliUtils:
    """Test cases for CLI utilities"""

    def test_reconstruct_command_line_without_context(self):
        assert reconstruct_command_line(contract_schema_to_code) == "contract_schema_to_code"

    def test_reconstruct_command_line_with_context(self, tmp_path):
        schema = tmp_path / "cw20.json"
        schema.write_text("{}", encoding="utf-8")

        @click.command()
        @click.option("--namespace", "-n", default="")
        @click.option("--language", "-l", default="cs")
        @click.option("--verbose", "-v", is_flag=True, default=False)
        @click.argument("path", type=click.Path(exists=True, resolve_path=True))
        def command(namespace, language, verbose, path):
            click.echo(reconstruct_command_line(command))

        result = CliRunner().invoke(command, [str(schema), "-n", "My.Contracts", "-l", "cs", "-v"])

        assert result.exit_code == 0
        assert result.output.strip() == "contract_schema_to_code cw20.json --namespace My.Contracts"
