"""
Add the Celery Beat schedule for purging stale one-time passwords.
"""

from django.db import migrations

PURGE_TASK_NAME = "OTP: Purge Stale Codes"


def create_periodic_tasks(apps, schema_editor):
    """Run purge_stale_otps every hour."""
    IntervalSchedule = apps.get_model("django_celery_beat", "IntervalSchedule")
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")

    schedule_1hour, _ = IntervalSchedule.objects.get_or_create(
        every=1,
        period="hours",
    )

    PeriodicTask.objects.get_or_create(
        name=PURGE_TASK_NAME,
        defaults={
            "task": "otp.tasks.purge_stale_otps",
            "interval": schedule_1hour,
            "enabled": True,
            "description": (
                "Deletes consumed one-time passwords and any code older than "
                "OTP_RETENTION_HOURS."
            ),
        },
    )


def remove_periodic_tasks(apps, schema_editor):
    PeriodicTask = apps.get_model("django_celery_beat", "PeriodicTask")
    PeriodicTask.objects.filter(name=PURGE_TASK_NAME).delete()


class Migration(migrations.Migration):
    dependencies = [
        ("otp", "0001_initial"),
        ("django_celery_beat", "0019_alter_periodictasks_options"),
    ]

    operations = [
        migrations.RunPython(create_periodic_tasks, remove_periodic_tasks),
    ]
