"""
Tests for the logger and the environment configuration.
"""

import logging
import os

import numpy as np
import pytest

from krylovspace.common.flog import Logger, Colors, get_global_logger
from krylovspace.algebra import utils
from krylovspace.algebra.krylov import arnoldi

# --------------------------------------------

class _Recorder:
    ''' Stand-in for the global logger, keeps (method, message, lvl). '''

    def __init__(self):
        self.records = []

    def __getattr__(self, method):
        def log(msg, lvl=0, **kwargs):
            self.records.append((method, msg, lvl))
        return log

@pytest.fixture
def recorder(monkeypatch):
    rec = _Recorder()
    monkeypatch.setattr(utils, "get_logger", lambda: rec)
    return rec

# --------------------------------------------

class TestLogger:

    def test_console_output(self, capsys):
        logger = Logger(name="krylovspace.test.console", lvl=logging.INFO)
        logger.info("subspace ready", lvl=1)
        logger.debug("not shown")
        out = capsys.readouterr().out
        assert "[INFO] \t->subspace ready" in out
        assert "not shown" not in out

    def test_string_level(self, capsys):
        logger = Logger(name="krylovspace.test.string", lvl='debug')
        logger.debug("shown")
        assert "[DEBUG] shown" in capsys.readouterr().out

    def test_say_joins_messages(self, capsys):
        logger = Logger(name="krylovspace.test.say")
        logger.say("a", "b", end=False, log='w')
        assert "[WARNING] a b" in capsys.readouterr().out

    def test_verbose_flag(self, capsys):
        logger = Logger(name="krylovspace.test.verbose")
        logger.info("hidden", verbose=False)
        assert "hidden" not in capsys.readouterr().out

    def test_file_output_strips_colors(self, tmp_path, capsys):
        logger = Logger(name="krylovspace.test.file")
        logger.configure(str(tmp_path), "run.log")
        logger.info(Colors("red")("colored"))
        for h in logger.logger.handlers:
            h.flush()
        content = (tmp_path / "run.log").read_text()
        assert "colored" in content
        assert "\033[" not in content

    def test_title(self, capsys):
        logger = Logger(name="krylovspace.test.title")
        logger.title("Arnoldi", desired_size=21)
        out = capsys.readouterr().out
        assert "=======Arnoldi=======" in out

    def test_global_logger_is_shared(self):
        assert get_global_logger() is get_global_logger()

    def test_colors(self):
        assert str(Colors("blue")) == Colors.blue
        assert str(Colors("unknown")) == Colors.white
        assert Logger.colorize("x", None) == "x"

# --------------------------------------------

class TestIterationLogging:

    def test_zero_vector_warns(self, recorder):
        arnoldi(np.eye(3) + np.triu(np.ones((3, 3)), 1), np.zeros(3), m=2)
        assert [r[0] for r in recorder.records] == ['warning']

    def test_breakdown_is_debug(self, recorder):
        arnoldi(np.diag([1.0, 2.0, 3.0]), np.array([1.0, 0.0, 0.0]), m=3)
        methods = [r[0] for r in recorder.records]
        assert 'warning' not in methods
        assert any('breakdown' in r[1] for r in recorder.records)
        assert set(methods) == {'debug'}

# --------------------------------------------

class TestConfiguration:

    def test_written_back_to_environment(self):
        assert float(os.environ[utils.PY_KRYLOV_TOL_STR]) == utils.DEFAULT_TOL
        assert int(os.environ[utils.PY_KRYLOV_MAXITER_STR]) == utils.DEFAULT_MAXITER
        assert os.environ[utils.PY_FLOATING_POINT_STR] in ("float32", "float64")

    def test_default_dtype(self):
        expected = np.float32 if utils.PREFER_32BIT else np.float64
        assert utils.default_dtype() == expected

    def test_result_dtype(self):
        real = utils.default_dtype()
        assert utils.result_dtype(np.ones(2, dtype=np.int64)) == np.result_type(real, np.int64)
        assert utils.result_dtype(np.ones(2, dtype=np.complex128), object()) == np.complex128
        assert utils.result_dtype() == real

    def test_is_complex_dtype(self):
        assert utils.is_complex_dtype(np.complex64)
        assert not utils.is_complex_dtype(np.float64)
        assert not utils.is_complex_dtype(int)

# --------------------------------------------
#! EOF
# --------------------------------------------
