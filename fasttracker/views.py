from django.conf import settings
from django.contrib.auth.decorators import login_required
from django.shortcuts import render
from django.utils import timezone
from django.views.decorators.csrf import ensure_csrf_cookie

from fasting import store as fasting_store
from fasting.services.analytics import summarize
from fasting.services.stages import STAGES
from fasting.services.streaks import calculate_streaks
from fasting.services.trends import build_charts
from fasting.views import live_status, serialize_session
from hydration.views import hydration_summary
from mood import store as mood_store
from mood.views import serialize_log as serialize_mood_log
from .api import api_endpoint, success
from .timezone_utils import get_user_timezone


def build_dashboard(user, now, tz):
    """
    Everything the dashboard shows for one user.

    Analytics are recomputed from the full completed history on every call.
    """
    history = fasting_store.list_history(user, None)
    summary = summarize(history)
    streaks = calculate_streaks(history, tz)

    active = fasting_store.list_active(user)
    active_data = None
    if active is not None:
        active_data = serialize_session(active, tz)
        active_data['status'] = live_status(active, now)

    mood_logs = mood_store.list_logs(user, settings.MOOD_DEFAULT_DAYS, now)

    return {
        'active_session': active_data,
        'history': [
            serialize_session(session, tz)
            for session in history[:settings.DASHBOARD_HISTORY_LIMIT]
        ],
        'summary': summary.as_dict(),
        'streaks': streaks.as_dict(),
        'charts': build_charts(history, now, tz),
        'hydration': hydration_summary(user, 1, now, tz),
        'mood_logs': [serialize_mood_log(log) for log in mood_logs],
    }


@login_required
@ensure_csrf_cookie
def home(request):
    """
    Renders the dashboard page.
    """
    dashboard = build_dashboard(request.user, timezone.now(), get_user_timezone(request))
    return render(request, 'home/dashboard.html', {
        'dashboard': dashboard,
        'stages': [stage.as_dict() for stage in STAGES],
        'default_goal_hours': settings.FASTING_DEFAULT_GOAL_HOURS,
    })


@api_endpoint(["GET"])
def dashboard_api(request):
    """Dashboard data for the signed-in user, including derived analytics."""
    return success(build_dashboard(request.user, timezone.now(), get_user_timezone(request)))
