"""Tests for KitchenSession: command dispatch, scenarios and invariants."""
from __future__ import annotations

import random
import unittest

from config import COOK_TICK_SECONDS, COOKING, EVENT_LOG_LIMIT
from game import KitchenSession
from game.entities import FoodItem, FoodState, StationKind
from game.timers import IntervalTimers
from station_catalog import DEFAULT_STATIONS

DEFAULT_DEFS = [station.to_runtime_dict() for station in DEFAULT_STATIONS.values()]


def _session() -> KitchenSession:
    return KitchenSession(DEFAULT_DEFS)


class TestSessionInit(unittest.TestCase):
    def test_two_stations_in_catalog_order(self):
        session = _session()
        kinds = [snap.kind for snap in session.get_stations()]
        self.assertEqual(kinds, [StationKind.COOKING, StationKind.ASSEMBLY])
        self.assertEqual([snap.chain_id for snap in session.get_stations()], [901, 902])

    def test_starts_empty(self):
        session = _session()
        self.assertEqual(session.get_served_count(), 0)
        self.assertEqual(session.total_items(), 0)
        self.assertEqual(session.event_log, ["Kitchen opened"])

    def test_rejects_incomplete_layout(self):
        with self.assertRaises(ValueError):
            KitchenSession([{"kind": COOKING, "chain_id": 1}, {"kind": COOKING, "chain_id": 2}])

    def test_uses_supplied_timers(self):
        timers = IntervalTimers()
        session = KitchenSession(DEFAULT_DEFS, timers=timers)
        self.assertIs(session.timers, timers)

    def test_default_constructor_uses_catalog(self):
        session = KitchenSession()
        self.assertEqual(len(session.get_stations()), 2)


class TestScenarios(unittest.TestCase):
    def setUp(self):
        self.session = _session()
        self.cooking = self.session.station_index(StationKind.COOKING)
        self.assembly = self.session.station_index(StationKind.ASSEMBLY)

    def _items(self, index):
        return self.session.get_stations()[index].items

    def test_a_assembly_creates_one_raw_item(self):
        self.session.start_assembly_action()
        items = self._items(self.assembly)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].state, FoodState.UNPREPARED)
        self.assertIsNone(items[0].prep_progress)

    def test_b_transfer_moves_raw_item_to_cooking(self):
        self.session.start_assembly_action()
        item_id = self._items(self.assembly)[0].id
        self.session.transfer(self.assembly, 0)
        self.assertEqual(self._items(self.assembly), ())
        self.assertEqual([i.id for i in self._items(self.cooking)], [item_id])

    def test_c_five_ticks_cook_the_item(self):
        self.session.start_assembly_action()
        self.session.transfer(self.assembly, 0)
        self.session.start_cooking_action()
        for _ in range(5):
            self.session.tick(COOK_TICK_SECONDS)
        item = self._items(self.cooking)[0]
        self.assertEqual(item.state, FoodState.PREPARED)
        self.assertEqual(item.prep_progress, 100)
        self.assertEqual(self.session.active_cooking, 0)

        self.session.tick(COOK_TICK_SECONDS)
        again = self._items(self.cooking)[0]
        self.assertEqual(again.state, FoodState.PREPARED)
        self.assertEqual(again.prep_progress, 100)

    def test_d_serving_a_cooked_item(self):
        self.session.station(StationKind.COOKING).append(FoodItem(state=FoodState.PREPARED, prep_progress=100))
        self.session.transfer(self.cooking, 0)
        self.assertEqual(self._items(self.cooking), ())
        self.assertEqual(self.session.get_served_count(), 1)

    def test_e_out_of_range_transfer_changes_nothing(self):
        self.session.start_assembly_action()
        before = self.session.get_stations()
        self.session.transfer(self.assembly, 5)
        self.session.transfer(self.cooking, 0)
        self.session.transfer(7, 0)
        self.assertEqual(self.session.get_stations(), before)
        self.assertEqual(self.session.get_served_count(), 0)

    def test_f_second_assembly_is_refused(self):
        self.session.start_assembly_action()
        first = self._items(self.assembly)[0].id
        self.session.start_assembly_action()
        items = self._items(self.assembly)
        self.assertEqual(len(items), 1)
        self.assertEqual(items[0].id, first)


class TestCookingDispatch(unittest.TestCase):
    def setUp(self):
        self.session = _session()
        self.cooking = self.session.station(StationKind.COOKING)

    def test_cooking_action_without_raw_item_is_noop(self):
        self.session.start_cooking_action()
        self.assertEqual(self.session.active_cooking, 0)
        self.assertEqual(len(self.session.timers), 0)

    def test_one_item_starts_per_action(self):
        first, second = FoodItem(), FoodItem()
        self.cooking.append(first)
        self.cooking.append(second)
        self.session.start_cooking_action()
        self.assertEqual(first.state, FoodState.PREPARING)
        self.assertEqual(second.state, FoodState.UNPREPARED)
        self.session.start_cooking_action()
        self.assertEqual(second.state, FoodState.PREPARING)
        self.assertEqual(self.session.active_cooking, 2)

    def test_staggered_items_cook_independently(self):
        first, second = FoodItem(), FoodItem()
        self.cooking.append(first)
        self.cooking.append(second)
        self.session.start_cooking_action()
        self.session.tick(COOK_TICK_SECONDS * 2)
        self.session.start_cooking_action()
        self.session.tick(COOK_TICK_SECONDS * 3)
        self.assertEqual(first.state, FoodState.PREPARED)
        self.assertEqual(second.prep_progress, 60)

    def test_serving_earlier_item_does_not_disturb_later_process(self):
        done = FoodItem(state=FoodState.PREPARED, prep_progress=100)
        raw = FoodItem()
        self.cooking.append(done)
        self.cooking.append(raw)
        self.session.start_cooking_action()
        self.session.tick(COOK_TICK_SECONDS)
        self.session.transfer(self.session.station_index(StationKind.COOKING), 0)
        self.session.tick(COOK_TICK_SECONDS * 4)
        self.assertEqual(self.cooking.items, [raw])
        self.assertEqual(raw.state, FoodState.PREPARED)
        self.assertEqual(self.session.get_served_count(), 1)

    def test_cooking_events_are_logged(self):
        self.cooking.append(FoodItem())
        self.session.start_cooking_action()
        self.session.tick(COOK_TICK_SECONDS * 5)
        self.assertIn("Cooking started", self.session.event_log)
        self.assertEqual(self.session.event_log[-1], "Pizza cooked")

    def test_event_log_is_bounded(self):
        for _ in range(EVENT_LOG_LIMIT * 2):
            self.session.start_assembly_action()
            self.session.transfer(self.session.station_index(StationKind.ASSEMBLY), 0)
        self.assertEqual(len(self.session.event_log), EVENT_LOG_LIMIT)


class TestInvariants(unittest.TestCase):
    """Random action sequences must never break the kitchen's invariants."""

    def _run(self, seed: int, steps: int = 400) -> None:
        rng = random.Random(seed)
        session = _session()
        assembly = session.station_index(StationKind.ASSEMBLY)
        cooking = session.station_index(StationKind.COOKING)
        last_progress = {}

        for _ in range(steps):
            roll = rng.random()
            total_before = session.total_items()
            served_before = session.get_served_count()
            if roll < 0.2:
                session.start_assembly_action()
            elif roll < 0.4:
                session.start_cooking_action()
            elif roll < 0.75:
                session.transfer(rng.choice([assembly, cooking]), rng.randint(-1, 4))
                removed = total_before - session.total_items()
                self.assertEqual(removed, session.get_served_count() - served_before)
            else:
                session.tick(rng.choice([0.1, 0.5, 1.0, 2.0]))

            self.assertLessEqual(len(session.station(StationKind.ASSEMBLY)), 1)
            for station in session.stations:
                for item in station.items:
                    if item.state is FoodState.UNPREPARED:
                        self.assertIsNone(item.prep_progress)
                        continue
                    self.assertTrue(0 <= item.prep_progress <= 100)
                    self.assertGreaterEqual(item.prep_progress, last_progress.get(item.id, 0))
                    if item.state is FoodState.PREPARED:
                        self.assertEqual(item.prep_progress, 100)
                        self.assertFalse(session.is_cooking(item.id))
                    last_progress[item.id] = item.prep_progress

            ids = [item.id for station in session.stations for item in station.items]
            self.assertEqual(len(ids), len(set(ids)))

    def test_random_sequences(self):
        for seed in range(5):
            self._run(seed)

    def test_every_item_eventually_cooks(self):
        session = _session()
        assembly = session.station_index(StationKind.ASSEMBLY)
        for _ in range(3):
            session.start_assembly_action()
            session.transfer(assembly, 0)
        for _ in range(3):
            session.start_cooking_action()
        session.tick(COOK_TICK_SECONDS * 5)
        states = {item.state for item in session.station(StationKind.COOKING).items}
        self.assertEqual(states, {FoodState.PREPARED})


if __name__ == "__main__":
    unittest.main()
