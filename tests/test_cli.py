"""Tests for the command-line tools."""

from snake_rules.cli import _build_parser, main
from snake_rules.config import GameConfig
from snake_rules.scores import JsonScoreStore, Score


class TestCLIParser:
    def test_no_command_returns_1(self):
        assert main([]) == 1

    def test_simulate_defaults(self):
        args = _build_parser().parse_args(["simulate"])
        assert args.command == "simulate"
        assert args.games == 1
        assert args.seed is None
        assert args.max_ticks == 5000
        assert args.no_save is False

    def test_simulate_flags(self):
        args = _build_parser().parse_args([
            "simulate", "--games", "3", "--seed", "7",
            "--difficulty", "fast", "--no-save",
        ])
        assert args.games == 3
        assert args.seed == 7
        assert args.difficulty == "fast"
        assert args.no_save is True

    def test_scores_defaults(self):
        args = _build_parser().parse_args(["scores"])
        assert args.limit == 10


class TestCLISimulate:
    def test_prints_one_line_per_game(self, capsys):
        result = main([
            "simulate", "--games", "2", "--seed", "1",
            "--max-ticks", "100", "--no-save",
        ])
        assert result == 0
        lines = capsys.readouterr().out.strip().splitlines()
        assert len(lines) == 2
        assert all(line.startswith("autopilot:") for line in lines)

    def test_uses_config_file(self, tmp_path, capsys):
        cfg_path = tmp_path / "game.json"
        GameConfig(grid_width=10, grid_height=10).save(cfg_path)
        result = main([
            "simulate", "--config", str(cfg_path), "--seed", "2",
            "--max-ticks", "50", "--scores", str(tmp_path / "s.json"),
        ])
        assert result == 0
        assert "autopilot:" in capsys.readouterr().out

    def test_missing_config_file(self, tmp_path):
        result = main([
            "simulate", "--config", str(tmp_path / "absent.json"), "--no-save",
        ])
        assert result == 1

    def test_malformed_config_file(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text("{broken")
        assert main(["simulate", "--config", str(path), "--no-save"]) == 1

    def test_config_with_unknown_field(self, tmp_path):
        path = tmp_path / "game.json"
        path.write_text('{"grid_width": 10, "colour": "green"}')
        assert main(["simulate", "--config", str(path), "--no-save"]) == 1


class TestCLIScores:
    def test_lists_best_scores(self, tmp_path, capsys):
        path = tmp_path / "scores.json"
        store = JsonScoreStore(path)
        store.add_score(Score("ann", 50))
        store.add_score(Score("bob", 80))
        assert main(["scores", "--scores", str(path)]) == 0
        out = capsys.readouterr().out
        assert out.index("bob") < out.index("ann")

    def test_empty_store(self, tmp_path, capsys):
        assert main(["scores", "--scores", str(tmp_path / "none.json")]) == 0
        assert "No scores" in capsys.readouterr().out

    def test_corrupt_store(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text("nope")
        assert main(["scores", "--scores", str(path)]) == 1


class TestCLIConfig:
    def test_writes_default_config(self, tmp_path):
        path = tmp_path / "out" / "game.json"
        assert main(["config", str(path)]) == 0
        assert GameConfig.load(path) == GameConfig()
