"""
Tests for the run_payroll command line entry point.
"""

import json

import pytest

from nomina_kernel.db.engine import reset_engine
from scripts.run_payroll import build_parser, main


def _run(capsys, *argv):
    code = main(list(argv))
    captured = capsys.readouterr()
    return code, captured


class TestParser:

    def test_defaults(self):
        args = build_parser().parse_args([])
        assert args.user == "admin"
        assert args.date is None
        assert not args.pay_all and not args.close

    def test_unknown_user(self):
        with pytest.raises(SystemExit):
            build_parser().parse_args(["--user", "root"])


class TestMain:

    def test_manager_register(self, capsys):
        code, captured = _run(capsys, "--date", "2024-07-20", "--user", "manager")
        assert code == 0
        output = json.loads(captured.out)
        register = output["register"]
        assert register["period"]["identifier"] == "2024-07-Q2"
        assert [line["employee_id"] for line in register["lines"]] == [2, 4, 5]
        assert register["total_net"] == "46125.00"
        assert "closed" not in output

    def test_first_half(self, capsys):
        code, captured = _run(capsys, "--date", "2024-07-03")
        assert code == 0
        register = json.loads(captured.out)["register"]
        assert register["period"]["identifier"] == "2024-07-Q1"
        assert register["lines"][1]["net_pay"] == "17500.00"

    def test_accents_are_kept(self, capsys):
        _, captured = _run(capsys)
        assert "Sofía Martínez Hernández" in captured.out

    def test_pay_all_and_close(self, capsys):
        code, captured = _run(capsys, "--pay-all", "--close")
        assert code == 0
        output = json.loads(captured.out)
        assert all(line["paid"] for line in output["register"]["lines"])
        assert output["closed"] == {
            "period_id": "2024-07-Q2",
            "total_net": "77887.50",
            "next_period_id": "2024-08-Q1",
        }

    def test_close_without_paying_fails(self, capsys):
        code, captured = _run(capsys, "--close")
        assert code == 1
        assert "ERROR" in captured.err
        assert captured.out == ""

    def test_employee_cannot_pay(self, capsys):
        code, _ = _run(capsys, "--user", "employee", "--pay-all")
        assert code == 1

    def test_bad_date(self, capsys):
        code, captured = _run(capsys, "--date", "2024-02-30")
        assert code == 2
        assert "ERROR" in captured.err

    @pytest.mark.sql
    def test_sql_database(self, capsys):
        try:
            code, captured = _run(
                capsys, "--db-url", "sqlite+pysqlite:///:memory:", "--pay-all", "--close",
            )
        finally:
            reset_engine()
        assert code == 0
        assert json.loads(captured.out)["closed"]["total_net"] == "77887.50"
