from django.conf import settings
from django.utils import timezone

from fasttracker.api import InvalidRequest, api_endpoint, parse_number, query_int, read_json, success
from . import store

MAX_DAYS = 90


def serialize_log(log):
    """Serialize a mood log to a dictionary for JSON responses."""
    return {
        'id': log.id,
        'mood': log.mood,
        'energy': log.energy,
        'notes': log.notes,
        'timestamp': log.timestamp.isoformat(),
    }


@api_endpoint(["GET", "POST"])
def mood_logs(request):
    """
    GET: mood check-ins from the last few days.
        Query params:
            - days: integer (default MOOD_DEFAULT_DAYS)

    POST: record a check-in.
        Expects JSON data:
            - mood: string, emoji or label (required)
            - energy: integer 1-5 (required)
            - notes: string up to 200 characters (optional)
    """
    if request.method == 'GET':
        days = query_int(request, 'days', settings.MOOD_DEFAULT_DAYS, maximum=MAX_DAYS)
        logs = store.list_logs(request.user, days, timezone.now())
        return success([serialize_log(log) for log in logs])

    data = read_json(request)
    mood = str(data.get('mood') or '').strip()
    if not mood:
        raise InvalidRequest('Mood is required')
    if len(mood) > 32:
        raise InvalidRequest('Mood must be at most 32 characters')

    if data.get('energy') in (None, ''):
        raise InvalidRequest('Energy is required')
    energy = parse_number(data['energy'], 'energy', minimum=1, maximum=5, integer=True)

    notes = str(data.get('notes') or '').strip()
    if len(notes) > 200:
        raise InvalidRequest('Notes must be at most 200 characters')

    log = store.create(request.user, mood, energy, notes)
    return success(serialize_log(log), status=201)


@api_endpoint(["DELETE"])
def delete_mood_log(request, log_id):
    """Delete one of the signed-in user's mood logs."""
    store.delete(request.user, log_id)
    return success({'id': log_id})
