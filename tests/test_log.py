import io
import json
import logging

import pytest

from sha2stream.log import configure_logging, get_logger


@pytest.fixture
def root_stream():
    stream = io.StringIO()
    handler = logging.StreamHandler(stream)
    root = logging.getLogger()
    root.addHandler(handler)
    yield stream
    root.removeHandler(handler)
    pkg_logger = logging.getLogger("sha2stream")
    pkg_logger.handlers = []
    pkg_logger.propagate = True
    pkg_logger.setLevel(logging.NOTSET)


def test_records_not_duplicated_to_root(root_stream, capsys):
    configure_logging("INFO", use_json=True)
    get_logger("sha2stream.test").info("hello")
    err = capsys.readouterr().err.splitlines()
    assert len(err) == 1
    assert json.loads(err[0])["message"] == "hello"
    assert root_stream.getvalue() == ""


def test_reconfigure_replaces_handler(root_stream):
    configure_logging("DEBUG")
    configure_logging("WARNING")
    pkg_logger = logging.getLogger("sha2stream")
    assert len(pkg_logger.handlers) == 1
    assert pkg_logger.level == logging.WARNING
    assert pkg_logger.propagate is False
