from arq import cron
from arq.connections import RedisSettings

from checkin.config import settings
from checkin.jobs.tasks import (
    disconnect_user,
    log_message,
    search_log,
    send_reminders,
    undo_last_entry,
    weekly_summary,
)


class WorkerSettings:
    functions = [
        log_message,
        weekly_summary,
        undo_last_entry,
        search_log,
        disconnect_user,
        send_reminders,
    ]
    cron_jobs = [
        cron(send_reminders, minute=set(range(0, 60, 5))),  # every 5 minutes
    ]
    max_jobs = 10
    job_timeout = 60
    max_tries = 2
    redis_settings = RedisSettings.from_dsn(settings.redis_url)
