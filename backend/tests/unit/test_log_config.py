"""Unit tests for per-category logging configuration and the query logger."""

import logging

import pytest

from casa_datatables.config import get_settings
from casa_datatables.infrastructure.logging.log_config import _parse_level, setup_logging
from casa_datatables.infrastructure.logging.query_logger import QueryLogger, QueryStage


def test_parse_level_defaults_to_info():
    assert _parse_level("debug") == logging.DEBUG
    assert _parse_level("chatty") == logging.INFO


def test_setup_logging_applies_category_levels():
    settings = get_settings()

    setup_logging()

    assert logging.getLogger("sqlalchemy.engine").level == _parse_level(settings.log_level_sql)
    assert logging.getLogger("VolunteerDatatable").level == _parse_level(settings.log_level_datatable)


def test_timed_step_logs_and_reraises_failures(caplog):
    qlog = QueryLogger("VolunteerDatatableTest")

    with caplog.at_level(logging.DEBUG, logger="VolunteerDatatableTest"):
        with qlog.timed_step(QueryStage.COUNT, "Counting base scope", org_id=1):
            pass
        with pytest.raises(RuntimeError):
            with qlog.timed_step(QueryStage.PAGE, "Fetching ordered page"):
                raise RuntimeError("connection lost")

    messages = [record.getMessage() for record in caplog.records]
    assert any("[COUNT]" in m and "org_id=1" in m for m in messages)
    assert any("[PAGE]" in m and "connection lost" in m for m in messages)
    assert caplog.records[-1].levelno == logging.ERROR
