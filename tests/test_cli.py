# =============================================================================
# test_cli.py - ndrasm Command-Line Tests
# =============================================================================

from pathlib import Path

from click.testing import CliRunner

from neander_asm import __version__
from neander_asm.cli.ndrasm import main


def run(args, files=None):
    """Invoke ndrasm in an isolated directory; returns (result, directory)."""
    runner = CliRunner()
    with runner.isolated_filesystem() as directory:
        for name, text in (files or {}).items():
            Path(name).write_text(text)
        result = runner.invoke(main, args)
        outputs = {p.name: p.read_bytes() for p in Path(directory).glob("*.mem")}
    return result, outputs


class TestAssemble:

    def test_default_output(self):
        result, outputs = run(["prog.asm"], {"prog.asm": "NOP\n"})
        assert result.exit_code == 0, result.output
        assert "Memory image written to output.mem" in result.output
        assert len(outputs["output.mem"]) == 516
        assert outputs["output.mem"][:4] == bytes([0x03, 0x4E, 0x44, 0x52])

    def test_custom_output(self):
        result, outputs = run(["prog.asm", "-o", "prog.mem"], {"prog.asm": "HLT"})
        assert result.exit_code == 0, result.output
        assert outputs["prog.mem"][4:6] == bytes([0xF0, 0x00])
        assert "output.mem" not in outputs

    def test_verbose_lists_labels(self):
        result, _ = run(["-v", "prog.asm"], {"prog.asm": "NOP\nend: HLT"})
        assert result.exit_code == 0, result.output
        assert "Assembly complete: 6 bytes, 1 labels" in result.output
        assert "$02" in result.output

    def test_version(self):
        result, _ = run(["--version"])
        assert result.exit_code == 0
        assert __version__ in result.output


class TestErrors:

    def test_missing_argument(self):
        result, _ = run([])
        assert result.exit_code == 2

    def test_missing_file(self):
        result, _ = run(["nope.asm"])
        assert result.exit_code == 2

    def test_unknown_instruction(self):
        result, outputs = run(["bad.asm"], {"bad.asm": "NOP\nFOO\n"})
        assert result.exit_code == 1
        assert "unknown instruction 'FOO'" in result.output
        assert outputs == {}

    def test_invalid_number(self):
        result, outputs = run(["bad.asm"], {"bad.asm": "DB 256"})
        assert result.exit_code == 1
        assert "invalid number '256'" in result.output
        assert outputs == {}


class TestCheck:

    def test_check_valid_image(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            Path("prog.asm").write_text("LDA 5\nHLT")
            assert runner.invoke(main, ["prog.asm"]).exit_code == 0

            result = runner.invoke(main, ["--check", "output.mem"])
            assert result.exit_code == 0, result.output
            assert "valid memory image (3 non-zero cells)" in result.output

    def test_check_invalid_image(self):
        result, _ = run(["--check", "prog.asm"], {"prog.asm": "NOP"})
        assert result.exit_code == 1
        assert "Image error" in result.output

    def test_check_rejects_nonzero_high_byte(self):
        runner = CliRunner()
        with runner.isolated_filesystem():
            image = bytes([0x03, 0x4E, 0x44, 0x52, 0x10, 0x01]) + bytes(510)
            Path("bad.mem").write_bytes(image)

            result = runner.invoke(main, ["--check", "bad.mem"])
            assert result.exit_code == 1
            assert "Image error" in result.output
            assert "high byte" in result.output
