import os
from celery import Celery
from celery.schedules import crontab
from dotenv import load_dotenv

load_dotenv()

broker = os.getenv("REDIS_URL", "redis://localhost:6379/0")
backend = broker

celery = Celery("wardrobe_workers", broker=broker, backend=backend, include=["workers.tasks"])
celery.conf.timezone = os.getenv("APP_TIMEZONE", "Europe/London")
celery.conf.task_routes = {
    "tasks.generate_daily_suggestions": {"queue": "daily"},
    "tasks.sync_fashion_trends": {"queue": "llm"},
    "tasks.cleanup_reminders": {"queue": "maintenance"},
}

# Beat schedule for periodic tasks
celery.conf.beat_schedule = {
    "generate-daily-suggestions": {
        "task": "tasks.generate_daily_suggestions",
        "schedule": crontab(hour=6, minute=0),  # Daily 6 AM
    },
    "sync-fashion-trends-weekly": {
        "task": "tasks.sync_fashion_trends",
        "schedule": crontab(hour=3, minute=0, day_of_week=1),  # Monday 3 AM
    },
    "cleanup-reminders-daily": {
        "task": "tasks.cleanup_reminders",
        "schedule": crontab(hour=2, minute=30),  # Daily 2:30 AM
    },
}
