"""CLI 测试 -- python -m vinoteca.core <command>"""

import sys

import pytest
from vinoteca.core.__main__ import main


@pytest.fixture
def cli_db(tmp_path, monkeypatch):
    db_path = tmp_path / "cli.db"
    monkeypatch.setenv("VINOTECA_DB_PATH", str(db_path))
    return db_path


def _run(monkeypatch, *args):
    monkeypatch.setattr(sys, "argv", ["vinoteca.core", *args])
    main()


class TestCli:
    def test_seed_then_list(self, cli_db, monkeypatch, capsys):
        _run(monkeypatch, "seed")
        assert "种子数据写入完成" in capsys.readouterr().out

        _run(monkeypatch, "seed")
        assert "跳过" in capsys.readouterr().out

        _run(monkeypatch, "list-orders")
        out = capsys.readouterr().out
        assert "Restaurante La Vid" in out
        assert "共 3 条订单" in out

    def test_list_orders_by_status(self, cli_db, monkeypatch, capsys):
        _run(monkeypatch, "seed")
        capsys.readouterr()

        _run(monkeypatch, "list-orders", "completed")
        out = capsys.readouterr().out
        assert "Bodega El Roble" in out
        assert "共 1 条订单" in out

    def test_invalid_status(self, cli_db, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, "list-orders", "shipped")

    def test_unknown_command(self, monkeypatch):
        with pytest.raises(SystemExit):
            _run(monkeypatch, "rebuild")
