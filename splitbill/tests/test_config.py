import logging
from splitbill.utilities import config
from splitbill.logic import settlement


def test_defaults():
    assert config.PERCENTAGE_TOLERANCE > 0
    assert isinstance(config.DEFAULT_CURRENCY, str) and config.DEFAULT_CURRENCY


def test_configure_logging_uses_given_level(monkeypatch):
    calls = {}
    monkeypatch.setattr(logging, "basicConfig", lambda **kwargs: calls.update(kwargs))
    config.configure_logging("DEBUG")
    assert calls["level"] == logging.DEBUG


def test_settlement_package_exports_engine():
    for name in settlement.__all__:
        assert callable(getattr(settlement, name))
