import django.db.models.deletion
import django.utils.timezone
from django.conf import settings
from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        ('events', '0001_initial'),
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='Registration',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('status', models.CharField(
                    choices=[('confirmed', 'Confirmed'), ('waitlist', 'Waiting list'), ('withdrawn', 'Withdrawn')],
                    max_length=16, verbose_name='Status')),
                ('created_at', models.DateTimeField(
                    default=django.utils.timezone.now, editable=False, verbose_name='Creation timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last update timestamp')),
                ('event', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='registrations', to='events.event')),
                ('user', models.ForeignKey(
                    on_delete=django.db.models.deletion.CASCADE, related_name='registrations',
                    to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'registration',
                'verbose_name_plural': 'registrations',
                'indexes': [
                    models.Index(fields=['event', 'status', 'created_at'], name='idx_event_status_created'),
                ],
                'constraints': [
                    models.UniqueConstraint(fields=('event', 'user'), name='one_registration_per_user_per_event'),
                    models.CheckConstraint(
                        condition=models.Q(('status__in', ['confirmed', 'waitlist', 'withdrawn'])),
                        name='registration_status_valid'),
                ],
            },
        ),
    ]
