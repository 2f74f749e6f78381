import pytest

from src.attendance_payroll.attendance_payroll.attendance.factory import TransitionStrategyFactory
from src.attendance_payroll.attendance_payroll.attendance.strategies.break_strategy import BreakInStrategy
from src.attendance_payroll.attendance_payroll.attendance.strategies.clock_in_strategy import ClockInStrategy
from src.attendance_payroll.attendance_payroll.attendance.strategies.lenient_strategy import UnguardedBreakStrategy
from src.attendance_payroll.attendance_payroll.core.enums import ErrorCode, EventKind
from src.attendance_payroll.attendance_payroll.core.exceptions import PolicyRejection

CI, CO, BO, BI = EventKind.CLOCK_IN, EventKind.CLOCK_OUT, EventKind.BREAK_OUT, EventKind.BREAK_IN


def test_factory_picks_strict_strategies_by_default():
    assert isinstance(TransitionStrategyFactory().for_event(BI), BreakInStrategy)


def test_factory_picks_unguarded_breaks_when_lenient():
    assert isinstance(TransitionStrategyFactory(strict_breaks=False).for_event(BO), UnguardedBreakStrategy)


@pytest.mark.parametrize(
    "kind,last,expected",
    [
        (CI, None, None),
        (CI, CO, None),
        (CI, CI, ErrorCode.ALREADY_CLOCKED_IN),
        (CI, BO, ErrorCode.ALREADY_CLOCKED_IN),
        (CI, BI, ErrorCode.ALREADY_CLOCKED_IN),
        (CO, CI, None),
        (CO, BI, None),
        (CO, None, ErrorCode.NOT_CLOCKED_IN),
        (CO, CO, ErrorCode.NOT_CLOCKED_IN),
        (CO, BO, ErrorCode.ON_BREAK),
        (BO, CI, None),
        (BO, BI, None),
        (BO, BO, ErrorCode.ALREADY_ON_BREAK),
        (BO, None, ErrorCode.NOT_CLOCKED_IN),
        (BO, CO, ErrorCode.NOT_CLOCKED_IN),
        (BI, BO, None),
        (BI, None, ErrorCode.NOT_ON_BREAK),
        (BI, CI, ErrorCode.NOT_ON_BREAK),
        (BI, BI, ErrorCode.NOT_ON_BREAK),
    ],
)
def test_strict_transitions(kind, last, expected):
    strategy = TransitionStrategyFactory(strict_breaks=True).for_event(kind)
    if expected is None:
        strategy.check(last)
        return
    with pytest.raises(PolicyRejection) as excinfo:
        strategy.check(last)
    assert excinfo.value.code == expected


@pytest.mark.parametrize(
    "kind,last,expected",
    [
        (CI, CI, ErrorCode.ALREADY_CLOCKED_IN),
        (CI, BO, ErrorCode.ALREADY_CLOCKED_IN),
        (CI, None, None),
        (CI, CO, None),
        (CO, BO, ErrorCode.NOT_CLOCKED_IN),
        (CO, BI, None),
        (CO, CI, None),
        (CO, None, ErrorCode.NOT_CLOCKED_IN),
        (CO, CO, ErrorCode.NOT_CLOCKED_IN),
        (BO, None, None),
        (BO, BO, None),
        (BI, None, None),
        (BI, CO, None),
    ],
)
def test_lenient_transitions(kind, last, expected):
    strategy = TransitionStrategyFactory(strict_breaks=False).for_event(kind)
    if expected is None:
        strategy.check(last)
        return
    with pytest.raises(PolicyRejection) as excinfo:
        strategy.check(last)
    assert excinfo.value.code == expected


def test_clock_in_rule_is_shared_by_both_modes():
    assert isinstance(TransitionStrategyFactory(strict_breaks=False).for_event(CI), ClockInStrategy)
    assert isinstance(TransitionStrategyFactory(strict_breaks=True).for_event(CI), ClockInStrategy)
