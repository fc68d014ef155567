from discrete_powerlaw.distributions.errors import (
    handle_invalid_input,
    handle_no_input,
    record_replica_failure,
)
from discrete_powerlaw.distributions.errors.replica_errors import failure_ratio
from discrete_powerlaw.interfaces.distribution import ModelState
from discrete_powerlaw.schema.fit_config import FitConfig


def test_handle_no_input_marks_model(caplog) -> None:
    model = handle_no_input(FitConfig())
    assert model.state is ModelState.NO_INPUT
    assert any("empty sample" in r.message for r in caplog.records)


def test_handle_invalid_input_keeps_config() -> None:
    config = FitConfig(known_xmin=4)
    model = handle_invalid_input("xmin too large", n_samples=3, config=config, xmin=4)
    assert model.state is ModelState.INVALID_INPUT
    assert model.config is config


def test_record_replica_failure_logs_debug(caplog) -> None:
    with caplog.at_level("DEBUG"):
        record_replica_failure(7, n_samples=10, state=ModelState.INVALID_INPUT)
    assert any(getattr(r, "replica", None) == 7 for r in caplog.records)


def test_failure_ratio() -> None:
    assert failure_ratio(1, 4) == 0.25
    assert failure_ratio(0, 0) is None
