"""
JSON API helpers shared by every app.

Each endpoint answers with the same envelope:
    {"success": true, "data": ...}
    {"success": false, "error": "..."}

Failures are raised as TrackerError subclasses and turned into responses by
the ``api_endpoint`` decorator.
"""
import functools
import json
import logging
import math
from datetime import datetime, timezone as dt_timezone

from django.http import JsonResponse
from django.utils.dateparse import parse_datetime
from django.utils import timezone

logger = logging.getLogger(__name__)


class TrackerError(Exception):
    """Base class for errors that map onto an HTTP status."""
    status = 500

    def __init__(self, message):
        super().__init__(message)
        self.message = message


class Unauthorized(TrackerError):
    status = 401


class InvalidRequest(TrackerError):
    status = 400


class NotFound(TrackerError):
    status = 404


class Conflict(TrackerError):
    status = 409


class ServerError(TrackerError):
    status = 500


def success(data=None, status=200):
    return JsonResponse({'success': True, 'data': data}, status=status)


def failure(message, status):
    return JsonResponse({'success': False, 'error': message}, status=status)


def api_endpoint(methods, login_required=True):
    """
    Wrap a JSON view with method checks, authentication and error mapping.

    Other HTTP methods get a 405 envelope. Unauthenticated requests get a 401
    envelope and the view never runs. TrackerError subclasses are returned
    verbatim with their status; anything else is logged and reported as a 500.

    Usage:
        @api_endpoint(["GET", "POST"])
        def hydration_logs(request): ...
    """
    allowed = [method.upper() for method in methods]

    def decorator(view):
        @functools.wraps(view)
        def wrapper(request, *args, **kwargs):
            if request.method not in allowed:
                response = failure('Method not allowed', 405)
                response['Allow'] = ', '.join(allowed)
                return response
            if login_required and not request.user.is_authenticated:
                return failure('Unauthorized', Unauthorized.status)
            try:
                return view(request, *args, **kwargs)
            except TrackerError as e:
                if e.status >= 500:
                    logger.error(f"{view.__name__} failed: {e.message}")
                else:
                    logger.warning(f"{view.__name__} rejected for user {request.user.pk}: {e.message}")
                return failure(e.message, e.status)
            except Exception as e:
                logger.exception(f"Unexpected error in {view.__name__}")
                return failure(f'Server error: {e}', ServerError.status)

        return wrapper

    return decorator


def read_json(request):
    """Parse the request body as a JSON object. An empty body is an empty dict."""
    if not request.body:
        return {}
    try:
        data = json.loads(request.body)
    except (json.JSONDecodeError, UnicodeDecodeError):
        raise InvalidRequest('Invalid JSON')
    if not isinstance(data, dict):
        raise InvalidRequest('Request body must be a JSON object')
    return data


def parse_instant(value, field):
    """
    Parse an instant sent by a client.

    Accepts an ISO 8601 string or epoch milliseconds (what browsers send from
    Date.now()). Naive strings are read in the current time zone.
    Returns None when the value is missing.
    """
    if value in (None, ''):
        return None
    if isinstance(value, bool):
        raise InvalidRequest(f'Invalid {field}')
    if isinstance(value, (int, float)):
        try:
            return datetime.fromtimestamp(value / 1000, tz=dt_timezone.utc)
        except (OverflowError, OSError, ValueError):
            raise InvalidRequest(f'Invalid {field}')
    if isinstance(value, str):
        parsed = parse_datetime(value.strip().replace('Z', '+00:00'))
        if parsed is None:
            raise InvalidRequest(f'Invalid {field}. Use ISO 8601 format')
        if timezone.is_naive(parsed):
            parsed = timezone.make_aware(parsed)
        return parsed
    raise InvalidRequest(f'Invalid {field}')


def parse_number(value, field, minimum=None, maximum=None, integer=False):
    """Parse a numeric field, enforcing optional inclusive bounds."""
    if isinstance(value, bool):
        raise InvalidRequest(f'Invalid {field}')
    try:
        number = int(value) if integer else float(value)
    except (TypeError, ValueError, OverflowError):
        raise InvalidRequest(f'Invalid {field}')
    if not math.isfinite(number):
        raise InvalidRequest(f'Invalid {field}')
    if integer and isinstance(value, float) and not value.is_integer():
        raise InvalidRequest(f'{field} must be a whole number')
    if minimum is not None and number < minimum:
        raise InvalidRequest(f'{field} must be at least {minimum}')
    if maximum is not None and number > maximum:
        raise InvalidRequest(f'{field} must be at most {maximum}')
    return number


def query_int(request, name, default, minimum=1, maximum=None):
    """Read a positive integer from the query string."""
    raw = request.GET.get(name)
    if raw in (None, ''):
        return default
    return parse_number(raw, name, minimum=minimum, maximum=maximum, integer=True)
