import pytest

pytest.importorskip("tkinter")

import config
from pocketcalc import build_parser


def test_defaults():
    args = build_parser().parse_args([])
    assert args.db == config.DB_PATH
    assert args.verbose is False


def test_custom_db(tmp_path):
    path = str(tmp_path / "other.db")
    args = build_parser().parse_args(["--db", path, "-v"])
    assert args.db == path
    assert args.verbose is True
