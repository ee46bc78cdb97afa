import unittest
import sys
import os

from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker

# Add the project root to the Python path
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from web_server import db
from ecosystem.archetype import Archetype
from ecosystem.engine import REPRODUCTION_ENERGY_COST, run_simulation_tick
from ecosystem.models import CauseOfDeath, CreatureEvent, EcosystemStats, Event
from ecosystem.position import Position
from ecosystem.world import World

DT = 1.0 / 30.0


class TestSimulationTick(unittest.TestCase):

    def setUp(self):
        self.world = World(seed=123)

    def test_carnivore_kills_prey(self):
        wolf = self.world.spawn(Archetype.CARNIVORE, "wolf", Position(1000.0, 1000.0))
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1010.0, 1000.0))
        wolf.hunger = 100.0
        # Keep the wolf from breeding.
        wolf.energy = 50.0
        rabbit.health = 1.0

        report = run_simulation_tick(self.world, DT)

        self.assertEqual(report.kills, 1)
        self.assertEqual(report.deaths, 1)
        self.assertEqual(rabbit.cause_of_death, CauseOfDeath.PREDATION)
        self.assertIsNone(self.world.get(rabbit.id))
        # 2.5kg of rabbit at 12 hunger per kg.
        self.assertAlmostEqual(wolf.hunger, 100.0 + 1.5 * DT - 30.0)
        self.assertGreater(wolf.action_cooldown, 0.0)

    def test_attack_on_cooldown_does_nothing(self):
        wolf = self.world.spawn(Archetype.CARNIVORE, "wolf", Position(1000.0, 1000.0))
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1010.0, 1000.0))
        wolf.hunger = 100.0
        wolf.energy = 50.0
        wolf.action_cooldown = 0.5

        report = run_simulation_tick(self.world, DT)

        self.assertEqual(report.kills, 0)
        self.assertEqual(rabbit.health, rabbit.max_health)

    def test_satisfied_carnivore_does_not_attack(self):
        self.world.spawn(Archetype.CARNIVORE, "wolf", Position(1000.0, 1000.0))
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1010.0, 1000.0))

        run_simulation_tick(self.world, DT)

        self.assertEqual(rabbit.health, rabbit.max_health)

    def test_herbivore_eats_plant(self):
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1000.0, 1000.0))
        moss = self.world.spawn(Archetype.PLANT, "moss", Position(1010.0, 1000.0))
        rabbit.hunger = 90.0
        # Keep the plant from breeding.
        moss.energy = 10.0

        report = run_simulation_tick(self.world, DT)

        self.assertEqual(report.bites, 1)
        self.assertAlmostEqual(moss.health, 40.0)
        # 0.05kg of moss at 22 hunger per kg.
        self.assertAlmostEqual(rabbit.hunger, 90.0 + 2.0 * DT - 1.1)

    def test_plant_grazed_to_death(self):
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1000.0, 1000.0))
        moss = self.world.spawn(Archetype.PLANT, "moss", Position(1010.0, 1000.0))
        rabbit.hunger = 90.0
        moss.health = 5.0

        report = run_simulation_tick(self.world, DT)

        self.assertEqual(report.deaths, 1)
        self.assertEqual(moss.cause_of_death, CauseOfDeath.GRAZED)
        self.assertIsNone(self.world.get(moss.id))

    def test_starved_creature_is_removed(self):
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1000.0, 1000.0))
        rabbit.hunger = rabbit.max_hunger + 10.0
        rabbit.health = 0.001

        report = run_simulation_tick(self.world, DT)

        self.assertEqual(report.deaths, 1)
        self.assertEqual(rabbit.cause_of_death, CauseOfDeath.STARVATION)
        self.assertEqual(len(self.world), 0)

    def test_exhausted_creature_is_removed(self):
        moss = self.world.spawn(Archetype.PLANT, "moss", Position(1000.0, 1000.0))
        moss.energy = 0.0
        moss.health = 0.001

        run_simulation_tick(self.world, DT)

        self.assertEqual(moss.cause_of_death, CauseOfDeath.EXHAUSTION)
        self.assertEqual(len(self.world), 0)

    def test_plant_reproduces(self):
        moss = self.world.spawn(Archetype.PLANT, "moss", Position(1000.0, 1000.0))
        # A long tick makes the breeding roll certain.
        report = run_simulation_tick(self.world, 100.0)

        self.assertEqual(report.births, 1)
        self.assertEqual(len(self.world), 2)
        child = self.world.get(2)
        self.assertEqual(child.species, "moss")
        self.assertLessEqual(abs(child.position.x - 1000.0), 100.0)
        self.assertLessEqual(abs(child.position.y - 1000.0), 100.0)
        # Energy after drain, photosynthesis and the cost of the offspring.
        self.assertAlmostEqual(moss.energy, 100.0 - REPRODUCTION_ENERGY_COST)

    def test_hungry_herbivore_does_not_reproduce(self):
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1000.0, 1000.0))
        rabbit.hunger = 50.0

        report = run_simulation_tick(self.world, 1.0)

        self.assertEqual(report.births, 0)

    def test_creatures_stay_in_bounds(self):
        for i in range(5):
            self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(55.0 + i, 55.0))

        for _ in range(30):
            run_simulation_tick(self.world, 0.5)

        for creature in self.world.living():
            self.assertGreaterEqual(creature.position.x, self.world.bounds.min_x)
            self.assertGreaterEqual(creature.position.y, self.world.bounds.min_y)

    def test_empty_world(self):
        report = run_simulation_tick(self.world, DT, tick=3)
        self.assertEqual(report.tick, 3)
        self.assertEqual((report.births, report.deaths), (0, 0))


class TestSimulationTickRecording(unittest.TestCase):

    def setUp(self):
        self.engine = create_engine("sqlite://")
        db.metadata.create_all(self.engine)
        self.session = sessionmaker(bind=self.engine)()
        self.world = World(seed=7)

    def tearDown(self):
        self.session.close()
        db.metadata.drop_all(self.engine)

    def test_stats_row_is_recorded(self):
        moss = self.world.spawn(Archetype.PLANT, "moss", Position(500.0, 500.0))
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1500.0, 1500.0))
        # Neither may breed this tick.
        moss.energy = 10.0
        rabbit.hunger = 50.0

        run_simulation_tick(self.world, DT, self.session, tick=1)
        self.session.commit()

        stats = self.session.query(EcosystemStats).one()
        self.assertEqual(stats.tick, 1)
        self.assertEqual(stats.population, 2)
        self.assertEqual(stats.plant_population, 1)
        self.assertEqual(stats.herbivore_population, 1)
        self.assertEqual(stats.carnivore_population, 0)
        self.assertIsNone(stats.carnivore_hunger_median)

    def test_death_event_is_recorded(self):
        rabbit = self.world.spawn(Archetype.HERBIVORE, "rabbit", Position(1000.0, 1000.0))
        rabbit.hunger = rabbit.max_hunger + 10.0
        rabbit.health = 0.001

        run_simulation_tick(self.world, DT, self.session, tick=4)
        self.session.commit()

        event = self.session.query(CreatureEvent).one()
        self.assertEqual(event.creature_id, rabbit.id)
        self.assertEqual(event.tick, 4)
        self.assertEqual(event.event, Event.DEATH)
        self.assertEqual(event.description, "Died of STARVATION.")

    def test_birth_events_are_recorded(self):
        self.world.spawn(Archetype.PLANT, "moss", Position(1000.0, 1000.0))

        run_simulation_tick(self.world, 100.0, self.session, tick=1)
        self.session.commit()

        events = {e.event for e in self.session.query(CreatureEvent).all()}
        self.assertEqual(events, {Event.BIRTH, Event.REPRODUCE})


if __name__ == "__main__":
    unittest.main()
