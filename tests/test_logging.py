from __future__ import annotations

import logging

from timerkit.telemetry.logging import get_logger


def test_get_logger_plain_and_with_context(caplog):
    log = get_logger("timerkit.test")
    assert isinstance(log, logging.Logger)

    ctx = get_logger("timerkit.test", {"label": "job", "state": "running"})
    with caplog.at_level(logging.INFO, logger="timerkit.test"):
        ctx.info("tick")
    assert "[label=job state=running] tick" in caplog.text
