import sys, os
sys.path.append(os.path.dirname(os.path.dirname(__file__)))

import time

from hummbl_api.utils.timing import timer


def test_timer_reports_elapsed_ms():
    with timer("sleep") as elapsed:
        time.sleep(0.02)
        ms = elapsed()
    assert ms >= 15
    assert elapsed() >= ms
