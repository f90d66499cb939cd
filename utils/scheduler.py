"""
Scheduled Tasks Module
Runs the QA send cycle on the configured cron schedule
"""
from apscheduler.schedulers.background import BackgroundScheduler
from apscheduler.triggers.cron import CronTrigger
from datetime import datetime
from zoneinfo import ZoneInfo
import logging

logger = logging.getLogger(__name__)
scheduler = None


def scheduled_send_task(app, sender):
    """
    Scheduled task to send a QA message
    Runs on SEND_MESSAGE_CRON
    """
    with app.app_context():
        try:
            sender.run_cycle()
        except Exception as e:
            logger.error(f"Unexpected error in scheduled QA send: {e}")


def init_scheduler(app, sender):
    """
    Initialize and start the background scheduler

    Args:
        app: Flask application instance
        sender: QASender run on every tick

    Returns:
        The started scheduler, or None if it was already running
    """
    global scheduler

    if scheduler is not None:
        logger.warning("Scheduler already initialized")
        return None

    timezone = app.config['TIMEZONE']
    cron = app.config['SEND_MESSAGE_CRON']

    job_options = {}
    if app.config.get('SEND_ON_STARTUP'):
        # First run now, then follow the cron schedule
        job_options['next_run_time'] = datetime.now(ZoneInfo(timezone))

    scheduler = BackgroundScheduler(timezone=timezone)
    scheduler.add_job(
        func=scheduled_send_task,
        trigger=CronTrigger.from_crontab(cron, timezone=timezone),
        args=[app, sender],
        id='qa_send_message',
        name='QA broadcast message',
        max_instances=1,
        coalesce=True,
        replace_existing=True,
        **job_options
    )
    logger.info(f"QA sender scheduled - cron '{cron}' ({timezone})")

    scheduler.start()
    logger.info("Scheduler started successfully")

    return scheduler


def shutdown_scheduler():
    """Shutdown the scheduler gracefully"""
    global scheduler

    if scheduler is not None:
        try:
            scheduler.shutdown(wait=False)
            logger.info("Scheduler shut down")
        except Exception as e:
            logger.error(f"Error shutting down scheduler: {e}")
        scheduler = None
