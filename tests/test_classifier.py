from __future__ import annotations

import unittest

from gameday.aggregation.classifier import GameState, classify_status


class ClassifierTests(unittest.TestCase):
    def test_only_scheduled_status_is_pregame(self) -> None:
        self.assertIs(GameState.SCHEDULED, classify_status("STATUS_SCHEDULED"))
        for status in (
            "STATUS_IN_PROGRESS",
            "STATUS_HALFTIME",
            "STATUS_FINAL",
            "STATUS_POSTPONED",
            "",
            None,
        ):
            self.assertIs(GameState.LIVE_OR_FINAL, classify_status(status))


if __name__ == "__main__":
    unittest.main()
