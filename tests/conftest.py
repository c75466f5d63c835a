# tests/conftest.py
import pytest

import audit


@pytest.fixture(autouse=True)
def audit_dir(tmp_path):
    # keep the event journal out of the real user log dir
    log_dir = tmp_path / "audit"
    audit.configure(log_dir)
    audit.set_actor(None)
    return log_dir
