import unittest

from timed_block_puzzle.game import (
    BlockCoordinate,
    EventChannel,
    GamePiece,
    GameUpdated,
    LinesCleared,
    NextPieceChanged,
    PieceType,
    TimerTicked,
)


class EventChannelTests(unittest.TestCase):
    def test_delivers_in_registration_order(self):
        channel = EventChannel()
        seen = []
        channel.subscribe(lambda e: seen.append("a"))
        channel.subscribe(lambda e: seen.append("b"), GameUpdated)
        channel.subscribe(lambda e: seen.append("c"))
        channel.publish(GameUpdated())
        self.assertEqual(seen, ["a", "b", "c"])

    def test_filters_by_kind(self):
        channel = EventChannel()
        ticks, clears = [], []
        channel.subscribe(ticks.append, TimerTicked)
        channel.subscribe(clears.append, LinesCleared)
        event = LinesCleared(frozenset({BlockCoordinate(0, 0)}))
        channel.publish(TimerTicked())
        channel.publish(event)
        channel.publish(NextPieceChanged(GamePiece(PieceType.DOT), GamePiece(PieceType.LINE)))
        self.assertEqual(ticks, [TimerTicked()])
        self.assertEqual(clears, [event])

    def test_cancelled_subscription_stops_receiving(self):
        channel = EventChannel()
        seen = []
        sub = channel.subscribe(seen.append)
        channel.publish(GameUpdated())
        sub.cancel()
        channel.publish(GameUpdated())
        self.assertEqual(len(seen), 1)
        self.assertEqual(len(channel), 0)

    def test_rejects_unknown_kind(self):
        with self.assertRaises(TypeError):
            EventChannel().subscribe(print, int)

    def test_subscriber_errors_propagate(self):
        channel = EventChannel()

        def boom(event):
            raise RuntimeError("listener failed")

        channel.subscribe(boom)
        with self.assertRaises(RuntimeError):
            channel.publish(GameUpdated())

    def test_coordinates_compare_by_value(self):
        self.assertEqual(BlockCoordinate(1, 2), BlockCoordinate(1, 2))
        self.assertEqual(len({BlockCoordinate(1, 2), BlockCoordinate(1, 2)}), 1)


if __name__ == "__main__":
    unittest.main()
