"""Unit tests for the command line entry point."""

from unittest.mock import patch



from kraken_trader.__main__ import build_parser, main


class TestCli:
    """Test argument handling and startup failures."""

    def test_parser_defaults(self):
        """Test defaults leave configuration to the loader."""
        args = build_parser().parse_args([])

        assert args.config_dir is None
        assert args.once is False
        assert args.validate_only is False

    def test_missing_credentials_exit_code(self, tmp_path, no_credentials):
        """Test startup aborts with exit code 2 on configuration errors."""
        assert main(["--config-dir", str(tmp_path), "--once"]) == 2

    def test_empty_section_exit_code(self, tmp_path, no_credentials):
        """Test an empty YAML section aborts with exit code 2, not a traceback."""
        (tmp_path / "trader.yaml").write_text("logging:\n#  level: INFO\n")

        assert main(["--config-dir", str(tmp_path), "--once"]) == 2

    def test_once_runs_single_cycle(self, tmp_path, monkeypatch, api_secret):
        """Test --once runs exactly one cycle with CLI overrides applied."""
        monkeypatch.setenv("KRAKEN_API_KEY", "key")
        monkeypatch.setenv("KRAKEN_API_SECRET", api_secret)

        with patch("kraken_trader.__main__.TradingEngine") as mock_engine_cls:
            engine = mock_engine_cls.return_value
            engine.cycle_count = 1
            engine.position.label = "flat"

            exit_code = main([
                "--config-dir", str(tmp_path),
                "--once",
                "--pair", "XXBTZUSD",
                "--validate-only",
            ])

        assert exit_code == 0
        config = mock_engine_cls.call_args[0][0]
        assert config.trading.pair == "XXBTZUSD"
        assert config.trading.validate_only is True
        engine.run_cycle.assert_called_once_with()
