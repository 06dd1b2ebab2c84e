from django.conf import settings
from django.db import migrations, models
import django.db.models.deletion


class Migration(migrations.Migration):

    initial = True

    dependencies = [
        migrations.swappable_dependency(settings.AUTH_USER_MODEL),
    ]

    operations = [
        migrations.CreateModel(
            name='FastingSession',
            fields=[
                ('id', models.BigAutoField(auto_created=True, primary_key=True, serialize=False, verbose_name='ID')),
                ('start_time', models.DateTimeField(help_text='Fasting start time')),
                ('end_time', models.DateTimeField(blank=True, help_text='Fasting end time (empty while the fast is active)', null=True)),
                ('duration', models.PositiveIntegerField(default=0, help_text='Duration in seconds, set when the fast is stopped')),
                ('goal_hours', models.FloatField(default=16, help_text='Target duration in hours')),
                ('goal_reached', models.BooleanField(default=False, help_text='Whether duration reached goal_hours when the fast was stopped')),
                ('is_active', models.BooleanField(db_index=True, default=True)),
                ('notes', models.CharField(blank=True, default='', max_length=500)),
                ('created_at', models.DateTimeField(auto_now_add=True)),
                ('updated_at', models.DateTimeField(auto_now=True)),
                ('user', models.ForeignKey(on_delete=django.db.models.deletion.CASCADE, related_name='fasting_sessions', to=settings.AUTH_USER_MODEL)),
            ],
            options={
                'verbose_name': 'Fasting Session',
                'verbose_name_plural': 'Fasting Sessions',
                'ordering': ['-start_time'],
                'indexes': [
                    models.Index(fields=['user', 'is_active'], name='fasting_user_active_idx'),
                    models.Index(fields=['user', '-start_time'], name='fasting_user_start_idx'),
                ],
                'constraints': [
                    models.UniqueConstraint(condition=models.Q(('is_active', True)), fields=('user',), name='one_active_fast_per_user'),
                ],
            },
        ),
    ]
