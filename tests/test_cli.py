from cli import build_argument_parser, main


class TestCli:
    """
    Tests for the command line entry point.
    """

    def test_parser(self):
        args = build_argument_parser().parse_args(["import-subgraph", "./sub", "--root", "./out"])

        assert args.command == "import-subgraph"
        assert args.subgraph_dir == "./sub"
        assert args.root == "./out"

    def test_import_then_codegen(self, subgraph_dir, tmp_path, capsys):
        """
        Test bootstrapping a project from a subgraph and generating its types.
        """
        root = tmp_path / "project"

        assert main(["import-subgraph", str(subgraph_dir), "--root", str(root)]) == 0
        assert main(["codegen", "--root", str(root)]) == 0

        assert (root / "generated" / "ERC20.d.ts").exists()
        assert (root / "generated" / "entities.ts").exists()
        assert "Imported sources ERC20 on mainnet" in capsys.readouterr().out

    def test_codegen_without_config(self, tmp_path, capsys):
        assert main(["codegen", "--root", str(tmp_path)]) == 1
        assert "Project config not found" in capsys.readouterr().err

    def test_env_file_settings(self, subgraph_dir, tmp_path):
        """
        Test that settings from --env-file reach the generators.
        """
        root = tmp_path / "project"
        env_file = tmp_path / "codegen.env"
        env_file.write_text("GENERATED_DIR=types\n", encoding="utf-8")

        assert main(["--env-file", str(env_file), "import-subgraph", str(subgraph_dir), "--root", str(root)]) == 0
        assert main(["--env-file", str(env_file), "codegen", "--root", str(root)]) == 0

        assert (root / "types" / "ERC20.d.ts").exists()
        assert not (root / "generated").exists()

    def test_undecodable_abi_is_reported(self, subgraph_dir, tmp_path, capsys):
        """
        Test that an ABI file that is not UTF-8 ends codegen with an error naming it.
        """
        root = tmp_path / "project"
        assert main(["import-subgraph", str(subgraph_dir), "--root", str(root)]) == 0
        (root / "abis" / "ERC20.json").write_bytes(b"\xff\xfe[]")

        assert main(["codegen", "--root", str(root)]) == 1

        err = capsys.readouterr().err
        assert err.startswith("error: ABI file is not valid UTF-8: ")
        assert "ERC20.json" in err
        assert not (root / "generated").exists()
