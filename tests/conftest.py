import pytest

from ledger import loader


@pytest.fixture(autouse=True)
def _reset_feed_warning_caps():
    # Capped warning counters are process-wide.
    loader._WARN_COUNTS.clear()
    yield
    loader._WARN_COUNTS.clear()
