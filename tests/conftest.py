from typing import List

import pytest

from .helpers import HEADER, call_row


@pytest.fixture()
def call_lines() -> List[str]:
    return [
        HEADER,
        call_row(calls="10", it_system="SysA", period="2025-11-30T08:00:00", operation="get"),
        call_row(calls="5", it_system="SysB", period="2025-11-30T08:15:00", operation="put"),
        call_row(calls="7", it_system="SysA", period="2025-11-30T14:22:00", operation="put", version="v2"),
        call_row(calls="100", it_system="SysC", version="NULL"),
        call_row(calls="3", it_system="SysC", version=""),
        "",
        call_row(calls="abc", it_system="SysB", period="no-time", support="Support2"),
    ]
