import django.db.models.deletion
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name="OneTimePassword",
            fields=[
                (
                    "id",
                    models.BigAutoField(
                        auto_created=True,
                        primary_key=True,
                        serialize=False,
                        verbose_name="ID",
                    ),
                ),
                (
                    "created_at",
                    models.DateTimeField(
                        auto_now_add=True,
                        db_index=True,
                        help_text="Timestamp when this record was created",
                    ),
                ),
                (
                    "updated_at",
                    models.DateTimeField(
                        auto_now=True,
                        help_text="Timestamp when this record was last modified",
                    ),
                ),
                (
                    "operation",
                    models.CharField(
                        choices=[
                            ("email", "Email verification"),
                            ("password", "Password change"),
                        ],
                        help_text="What this code authorizes",
                        max_length=32,
                    ),
                ),
                ("code", models.PositiveIntegerField(help_text="6-digit numeric code")),
                (
                    "is_active",
                    models.BooleanField(
                        default=True, help_text="False once the code has been used"
                    ),
                ),
                (
                    "user",
                    models.ForeignKey(
                        help_text="User this code was issued to",
                        on_delete=django.db.models.deletion.CASCADE,
                        related_name="otps",
                        to=settings.AUTH_USER_MODEL,
                    ),
                ),
            ],
            options={
                "verbose_name": "one-time password",
                "verbose_name_plural": "one-time passwords",
                "db_table": "otp_one_time_password",
                "ordering": ["-created_at"],
                "indexes": [
                    models.Index(
                        fields=["user", "operation", "is_active"],
                        name="otp_user_operation_active_idx",
                    )
                ],
            },
        ),
    ]
