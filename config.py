import os

# Get the absolute path of this file
basedir = os.path.abspath(os.path.dirname(__file__))


class Config:
    # Database URI. SQLite file.
    SQLALCHEMY_DATABASE_URI = "sqlite:///" + os.path.join(basedir, "ecosystem.db")
    SQLALCHEMY_SIM_DATABASE_URI = SQLALCHEMY_DATABASE_URI

    # Disable change tracking.
    SQLALCHEMY_TRACK_MODIFICATIONS = False

    WORLD_SEED = 42

    # Simulated seconds per tick: one frame at 30 FPS.
    TICK_DELTA_TIME = 1.0 / 30.0

    # Biome applied to every creature. None keeps the base behaviour.
    WORLD_BIOME = None
