"""End-to-end runs of the demo scenarios in main.py."""

import pytest

from main import Collection, Single, group_and_name_validator, group_validator, main


def test_group_scenario_succeeds(capsys):
    assert main(["group"]) == 0
    out = capsys.readouterr().out
    assert "singles[1].singles: Must be unique within collection." in out
    assert out.strip().endswith("OK")


def test_group_and_name_scenario_succeeds(capsys):
    assert main(["group-and-name"]) == 0
    assert capsys.readouterr().out.strip().endswith("OK")


def test_unknown_scenario_rejected():
    with pytest.raises(SystemExit):
        main(["nope"])


def test_group_rule_ignores_name():
    record = Collection("c", [Single(1, "First", 1), Single(2, "Second", 1), Single(3, "Third", 2)])
    assert [v.index for v in group_validator().validate(record)] == [1]


def test_group_and_name_rule_flags_each_repeat():
    record = Collection("c", [Single(1, "First", 1), Single(2, "First", 1), Single(3, "First", 1)])
    violations = group_and_name_validator().validate(record)
    assert [v.path for v in violations] == ["singles[1].singles", "singles[2].singles"]
