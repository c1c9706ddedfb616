"""Health check endpoint for monitoring worker status"""

from flask import Blueprint, jsonify
import psutil
import os
from state import registry, game_states, scheduler

health_bp = Blueprint('health', __name__)

@health_bp.route('/health', methods=['GET'])
def health_check():
    """
    Server status, memory usage, and room counts.
    Used by the load balancer health check.
    """
    process = psutil.Process(os.getpid())
    memory_mb = process.memory_info().rss / 1024 / 1024

    rooms = list(registry)
    return jsonify({
        "status": "healthy",
        "pid": os.getpid(),
        "memory_mb": round(memory_mb, 2),
        "cpu_percent": round(process.cpu_percent(interval=0.1), 2),
        "active_rooms": len(rooms),
        "total_players": sum(len(room.players) for room in rooms),
        "active_games": sum(1 for _, gs in game_states.items() if not gs.is_over),
        "running_timers": len(scheduler),
        "num_threads": process.num_threads()
    }), 200

@health_bp.route('/metrics', methods=['GET'])
def metrics():
    """
    Per-room details for debugging
    """
    process = psutil.Process(os.getpid())
    memory_info = process.memory_info()

    room_details = []
    for room in registry:
        gs = game_states.get(room.code)
        timer = scheduler.get(room.code)
        room_details.append({
            "room_code": room.code,
            "players": len(room.players),
            "game_type": room.selected_game,
            "current_player": gs.current_player_id if gs else None,
            "game_over": gs.is_over if gs else None,
            "time_left": timer.remaining if timer else None
        })

    return jsonify({
        "process": {
            "pid": os.getpid(),
            "num_threads": process.num_threads(),
            "num_fds": process.num_fds() if hasattr(process, 'num_fds') else None
        },
        "memory": {
            "rss_mb": round(memory_info.rss / 1024 / 1024, 2),
            "vms_mb": round(memory_info.vms / 1024 / 1024, 2),
            "percent": process.memory_percent()
        },
        "rooms": {
            "total": len(room_details),
            "details": room_details
        }
    }), 200
