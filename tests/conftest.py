import pytest

from totpboard.config_loader import Account

GITHUB_SECRET = "JBSWY3DPEHPK3PXP"
RFC_SECRET = "GEZDGNBVGY3TQOJQGEZDGNBVGY3TQOJQ"  # b"12345678901234567890"


@pytest.fixture
def github_account():
    return Account(id=1, name="GitHub", username="alice", site="github.com", secret=GITHUB_SECRET)


@pytest.fixture
def write_config(tmp_path):
    def _write(text, name="config.yml"):
        path = tmp_path / name
        path.write_text(text, encoding="utf-8")
        return path
    return _write
