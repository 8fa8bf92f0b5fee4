# SPDX-License-Identifier: LGPL-3.0-or-later
import logging
import sys
from pathlib import Path

import pytest

_THIS_DIR = Path(__file__).resolve().parent
_REPO_ROOT = _THIS_DIR.parent

for p in (_REPO_ROOT, _THIS_DIR):
    if str(p) not in sys.path:
        sys.path.insert(0, str(p))

from fakes.fake_reg import FakeRegExe  # noqa: E402


def pytest_configure(config):
    config.addinivalue_line("markers", "unit: fast tests with no reg.exe")


@pytest.fixture
def fake_reg():
    return FakeRegExe()


@pytest.fixture(autouse=True)
def _reset_regtool_logger():
    # Log.setup() in CLI tests attaches handlers to the shared "regtool" logger.
    yield
    lg = logging.getLogger("regtool")
    for h in list(lg.handlers):
        lg.removeHandler(h)
        h.close()
    lg.propagate = True
    lg.setLevel(logging.NOTSET)
