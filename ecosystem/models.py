import enum
from datetime import datetime, timezone

from web_server import db


class EcosystemHealth(enum.Enum):
    CRITICAL = "critical"
    POOR = "poor"
    FAIR = "fair"
    GOOD = "good"
    EXCELLENT = "excellent"


class CauseOfDeath(enum.Enum):
    STARVATION = "starvation"
    EXHAUSTION = "exhaustion"
    PREDATION = "predation"
    GRAZED = "grazed"


class Event(enum.Enum):
    BIRTH = "birth"
    DEATH = "death"
    REPRODUCE = "reproduce"
    ATTACK_SURVIVED = "attack_survived"
    ATTACK_KILLED = "attack_killed"


class CreatureEvent(db.Model):
    __tablename__ = "creature_event"
    id = db.Column(db.Integer, primary_key=True)

    creature_id = db.Column(db.Integer, nullable=False, index=True)

    tick = db.Column(db.Integer, nullable=False)
    event = db.Column(db.Enum(Event), nullable=False)
    description = db.Column(db.String(255), nullable=False)

    def to_dict(self):
        return {
            "creature_id": self.creature_id,
            "tick": self.tick,
            "event": self.event.name,
            "description": self.description,
        }


class EcosystemStats(db.Model):
    __tablename__ = "ecosystem_stats"
    tick = db.Column(db.Integer, primary_key=True)
    timestamp = db.Column(db.DateTime, default=lambda: datetime.now(timezone.utc))

    population = db.Column(db.Integer)
    plant_population = db.Column(db.Integer)
    herbivore_population = db.Column(db.Integer)
    carnivore_population = db.Column(db.Integer)

    health = db.Column(db.Enum(EcosystemHealth), nullable=False)

    births = db.Column(db.Integer, default=0)
    deaths = db.Column(db.Integer, default=0)

    # 25th, 50th (median) and 75th percentiles of hunger.
    herbivore_hunger_q1 = db.Column(db.Float)
    herbivore_hunger_median = db.Column(db.Float)
    herbivore_hunger_q3 = db.Column(db.Float)
    carnivore_hunger_q1 = db.Column(db.Float)
    carnivore_hunger_median = db.Column(db.Float)
    carnivore_hunger_q3 = db.Column(db.Float)

    def to_dict(self):
        data = {}
        for column in self.__table__.columns:
            value = getattr(self, column.name)
            if isinstance(value, enum.Enum):
                data[column.name] = value.value
            elif isinstance(value, datetime):
                data[column.name] = value.isoformat()
            else:
                data[column.name] = value
        return data
