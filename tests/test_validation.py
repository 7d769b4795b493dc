import logging

from swarm_formation.validation import ParameterWarning, at_least, clamp_agents_per_line, report, within


def test_valid_values_pass_through():
    assert at_least("size", 3, 1) == (3, None)
    assert within("ratio", 0.3, 0.0, 1.0) == (0.3, None)


def test_clamp_reports_structured_warning():
    value, warning = within("ratio", 1.4, 0.0, 1.0)
    assert value == 1.0
    assert isinstance(warning, ParameterWarning)
    assert (warning.name, warning.value, warning.clamped_to) == ("ratio", 1.4, 1.0)
    assert "ratio=1.4" in str(warning)


def test_lower_bound_wins_when_bounds_cross():
    assert within("inner", 2.0, 3.0, 1.0)[0] == 3.0


def test_agents_per_line():
    lines, warnings = clamp_agents_per_line((0, 4))
    assert lines == (1, 4)
    assert [w.name for w in warnings] == ["agents_per_line.x"]


def test_report_logs_and_collects(caplog):
    sink = []
    with caplog.at_level(logging.WARNING, logger="swarm_formation.validation"):
        report([None, at_least("spacing", -1.0, 0.0)[1]], sink)
    assert len(sink) == 1
    assert len(caplog.records) == 1


def test_report_skips_repeated_warning(caplog):
    sink = []
    warning = at_least("size", 0, 1)[1]
    with caplog.at_level(logging.WARNING, logger="swarm_formation.validation"):
        report([warning], sink)
        report([warning], sink)
    assert sink == [warning]
    assert len(caplog.records) == 1
