from datetime import datetime

import pytest

from periodlib.conventions import TimesConfig, Weekday


@pytest.fixture
def config():
    # Wednesday 2021-06-16, weeks start on Sunday
    return TimesConfig(epoch=datetime(2021, 6, 16, 9, 30), start_of_week=Weekday.SUNDAY)
