from flask import Blueprint, jsonify, request

from ecosystem.models import CreatureEvent, EcosystemStats

main = Blueprint("main", __name__)

MAX_LIMIT = 1000


def _get_limit(default: int) -> int:
    limit = request.args.get("limit", default, type=int)
    return max(1, min(limit, MAX_LIMIT))


@main.route("/")
def index():
    return "Welcome to the Ecosystem"


@main.route("/api/stats/history", methods=["GET"])
def get_stats_history():
    """Returns a history of ecosystem stats, oldest first"""
    limit = _get_limit(100)

    stats_history = (
        EcosystemStats.query.order_by(EcosystemStats.tick.desc()).limit(limit).all()
    )

    stats_history.reverse()

    return jsonify([s.to_dict() for s in stats_history])


@main.route("/api/stats/latest", methods=["GET"])
def get_latest_stats():
    """Returns the most recent ecosystem stats"""
    latest = EcosystemStats.query.order_by(EcosystemStats.tick.desc()).first()
    if not latest:
        return jsonify({"error": "No statistics recorded yet"}), 404
    return jsonify(latest.to_dict())


@main.route("/api/events", methods=["GET"])
def get_events():
    """
    Returns the most recent creature events, newest first.
    Use query parameters: ?creature_id= and ?limit=
    """
    creature_id = request.args.get("creature_id", type=int)
    limit = _get_limit(50)

    query = CreatureEvent.query
    if creature_id is not None:
        query = query.filter_by(creature_id=creature_id)

    events = query.order_by(CreatureEvent.id.desc()).limit(limit).all()
    return jsonify([event.to_dict() for event in events])
