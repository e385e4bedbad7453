from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Event',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('title', models.CharField(max_length=100, verbose_name='Title')),
                ('description', models.TextField(blank=True, verbose_name='Description')),
                ('venue', models.CharField(blank=True, max_length=100, verbose_name='Venue')),
                ('starts_at', models.DateTimeField(verbose_name='Starts at')),
                ('ends_at', models.DateTimeField(verbose_name='Ends at')),
                ('capacity', models.PositiveIntegerField(
                    help_text='Maximum number of confirmed registrations. Further registrations end up on the '
                              'waiting list.',
                    verbose_name='Capacity')),
                ('created_at', models.DateTimeField(auto_now_add=True, verbose_name='Creation timestamp')),
                ('updated_at', models.DateTimeField(auto_now=True, verbose_name='Last update timestamp')),
            ],
            options={
                'verbose_name': 'event',
                'verbose_name_plural': 'events',
                'ordering': ('starts_at',),
                'constraints': [
                    models.CheckConstraint(condition=models.Q(('capacity__gt', 0)), name='event_capacity_positive'),
                ],
            },
        ),
    ]
