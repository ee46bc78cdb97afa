import unittest
import sys
import os

# Add the project root to the Python path to allow imports
sys.path.insert(0, os.path.abspath(os.path.join(os.path.dirname(__file__), "..")))

from config import Config
from web_server import create_app, db
from ecosystem.models import CreatureEvent, EcosystemHealth, EcosystemStats, Event


class TestingConfig(Config):
    TESTING = True
    SQLALCHEMY_DATABASE_URI = "sqlite://"


class TestRoutes(unittest.TestCase):
    def setUp(self):
        """
        Runs before each test.
        Creates a new application instance with an in-memory database.
        """
        self.app = create_app(TestingConfig)
        self.app_context = self.app.app_context()
        self.app_context.push()
        db.create_all()
        self.client = self.app.test_client()

    def tearDown(self):
        """
        Runs after each test.
        Drops the database and pops the application context.
        """
        db.session.remove()
        db.drop_all()
        self.app_context.pop()

    def _add_stats(self, tick, population=10):
        db.session.add(
            EcosystemStats(
                tick=tick,
                population=population,
                plant_population=6,
                herbivore_population=3,
                carnivore_population=1,
                health=EcosystemHealth.EXCELLENT,
            )
        )

    def test_index(self):
        response = self.client.get("/")
        self.assertEqual(response.status_code, 200)
        self.assertIn(b"Ecosystem", response.data)

    def test_latest_stats_without_data(self):
        response = self.client.get("/api/stats/latest")
        self.assertEqual(response.status_code, 404)
        self.assertIn("error", response.get_json())

    def test_latest_stats(self):
        self._add_stats(1)
        self._add_stats(2, population=12)
        db.session.commit()

        response = self.client.get("/api/stats/latest")
        self.assertEqual(response.status_code, 200)
        data = response.get_json()
        self.assertEqual(data["tick"], 2)
        self.assertEqual(data["population"], 12)
        self.assertEqual(data["health"], "excellent")

    def test_stats_history_is_oldest_first(self):
        for tick in range(1, 6):
            self._add_stats(tick)
        db.session.commit()

        response = self.client.get("/api/stats/history?limit=3")
        self.assertEqual(response.status_code, 200)
        self.assertEqual([s["tick"] for s in response.get_json()], [3, 4, 5])

    def test_events(self):
        db.session.add(CreatureEvent(creature_id=1, tick=1, event=Event.BIRTH, description="a"))
        db.session.add(CreatureEvent(creature_id=2, tick=2, event=Event.BIRTH, description="b"))
        db.session.add(CreatureEvent(creature_id=1, tick=3, event=Event.DEATH, description="c"))
        db.session.commit()

        response = self.client.get("/api/events")
        self.assertEqual([e["description"] for e in response.get_json()], ["c", "b", "a"])

        response = self.client.get("/api/events?creature_id=1&limit=1")
        events = response.get_json()
        self.assertEqual(len(events), 1)
        self.assertEqual(events[0]["event"], "DEATH")


if __name__ == "__main__":
    unittest.main()
