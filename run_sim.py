import argparse
import logging
import time
import traceback

from sqlalchemy import create_engine, func
from sqlalchemy.orm import sessionmaker

from config import Config
from ecosystem.engine import run_simulation_tick
from ecosystem.logger import BEHAVIOURS_LOGGER, setup_logging
from ecosystem.models import CreatureEvent, EcosystemStats
from ecosystem.world import World
from seed_world import seed_population
from web_server import db

logger = logging.getLogger(__name__)


def _wipe_history(session_maker: sessionmaker):
    """Clears all recorded statistics and events."""
    session = session_maker()
    try:
        session.query(CreatureEvent).delete()
        session.query(EcosystemStats).delete()
        session.commit()
    finally:
        session.close()
    print("All recorded history cleared")


def _get_start_tick(session_maker: sessionmaker) -> int:
    """
    Finds the last recorded tick so that statistics of a new run continue
    after the previous one instead of colliding with it.
    """
    session = session_maker()
    try:
        latest_stats = session.query(EcosystemStats).order_by(EcosystemStats.tick.desc()).first()
    finally:
        session.close()
    return latest_stats.tick if latest_stats else 0


def _get_first_creature_id(session_maker: sessionmaker) -> int:
    """
    Returns the first creature id that no recorded event uses yet, so that
    the events of a new run never mix with those of an earlier one.
    """
    session = session_maker()
    try:
        last_id = session.query(func.max(CreatureEvent.creature_id)).scalar()
    finally:
        session.close()
    return last_id + 1 if last_id is not None else 1


def main():
    parser = argparse.ArgumentParser(description="Run the ecosystem sim loop")
    parser.add_argument(
        "-t",
        "--tick-timer",
        type=float,
        default=0.0,
        help="The time in seconds between sim ticks. 0 runs as fast as possible.",
    )
    parser.add_argument(
        "-d",
        "--delta-time",
        type=float,
        default=Config.TICK_DELTA_TIME,
        help="The simulated seconds that pass each tick",
    )
    parser.add_argument(
        "-n",
        "--num-ticks",
        type=int,
        default=3000,
        help="The number of ticks to run. 0 runs until interrupted.",
    )
    parser.add_argument("--seed", type=int, default=Config.WORLD_SEED, help="The world seed")
    parser.add_argument(
        "--biome",
        type=str,
        default=Config.WORLD_BIOME,
        help="The biome of the world, e.g. forest, desert or laboratory",
    )
    parser.add_argument("-np", "--num-plants", type=int, default=60,
                        help="The number of initial plants to create")
    parser.add_argument("-nh", "--num-herbivores", type=int, default=30,
                        help="The number of initial herbivores to create")
    parser.add_argument("-nc", "--num-carnivores", type=int, default=10,
                        help="The number of initial carnivores to create")
    parser.add_argument("-p", "--num-packs", type=int, default=3,
                        help="Number of carnivore packs to spawn.")
    parser.add_argument("-r", "--pack-radius", type=float, default=60.0,
                        help="Radius in which to spawn carnivores in a pack.")
    parser.add_argument(
        "--console-log",
        action="store_true",  # This makes it a boolean flag
        help="Enable logging to the console (logs will still go to the file).",
    )
    parser.add_argument(
        "--log-file",
        type=str,
        default="ecosystem.log",
        help="The name of the file to save logs to.",
    )
    parser.add_argument(
        "-w",
        "--wipe-history",
        action="store_true",
        help="Clear all recorded statistics and events before running.",
    )
    parser.add_argument(
        "--debug-behaviours",
        action="store_true",
        help="Log every creature behaviour decision at debug level.",
    )
    args = parser.parse_args()

    module_levels = {BEHAVIOURS_LOGGER: logging.DEBUG} if args.debug_behaviours else None
    setup_logging(
        console_log_enabled=args.console_log,
        log_filename=args.log_file,
        module_levels=module_levels,
    )

    engine = create_engine(Config.SQLALCHEMY_SIM_DATABASE_URI)
    db.metadata.create_all(engine)
    session_maker = sessionmaker(bind=engine)

    if args.wipe_history:
        _wipe_history(session_maker)

    world = World(
        seed=args.seed,
        biome=args.biome,
        first_id=_get_first_creature_id(session_maker),
    )
    seed_population(
        world,
        num_plants=args.num_plants,
        num_herbivores=args.num_herbivores,
        num_carnivores=args.num_carnivores,
        num_packs=args.num_packs,
        pack_radius=args.pack_radius,
    )

    tick = _get_start_tick(session_maker)
    last_tick = tick + args.num_ticks if args.num_ticks > 0 else None

    print(f"Starting simulation loop with a {args.tick_timer}s tick... ")
    print("  Ctrl+C to exit.")

    try:
        while last_tick is None or tick < last_tick:
            start_time = time.time()
            tick += 1

            session = session_maker()
            try:
                report = run_simulation_tick(world, args.delta_time, session, tick)
                session.commit()
            except Exception as e:
                logging.error(f"An error occurred: {e}")
                logging.error(traceback.format_exc())
                session.rollback()
                raise
            finally:
                session.close()

            if report.births or report.deaths:
                logger.info(f"Tick {tick}: {report.births} births, {report.deaths} deaths")

            if not world.living():
                print(f"\nThe ecosystem died out at tick {tick}.")
                break

            if args.tick_timer > 0:
                time_taken = time.time() - start_time
                sleep_time = args.tick_timer - time_taken

                if sleep_time > 0:
                    time.sleep(sleep_time)
                else:
                    logging.warning(
                        f"Tick processing ({time_taken:.2f}s) exceeded the "
                        f"tick timer duration ({args.tick_timer}s)"
                    )
    except KeyboardInterrupt:
        print("\nSimulation interrupted by user.")

    counts = world.counts()
    print(
        "Final population: "
        + ", ".join(f"{archetype.value}: {count}" for archetype, count in counts.items())
    )


if __name__ == "__main__":
    main()
