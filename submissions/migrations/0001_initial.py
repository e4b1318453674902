import uuid

from django.db import migrations, models


class Migration(migrations.Migration):

    initial = True

    dependencies = [
    ]

    operations = [
        migrations.CreateModel(
            name='Submission',
            fields=[
                ('id', models.UUIDField(default=uuid.uuid4, editable=False, primary_key=True, serialize=False)),
                ('name', models.CharField(help_text='Name of the person contacting us', max_length=100)),
                ('email', models.EmailField(help_text='Email address for follow-up', max_length=254)),
                ('phone', models.CharField(blank=True, help_text='Optional phone number', max_length=20, null=True)),
                ('message', models.TextField(help_text='The actual message content', max_length=1000)),
                ('created_at', models.DateTimeField(auto_now_add=True, db_index=True, help_text='When the submission was received')),
                ('updated_at', models.DateTimeField(auto_now=True, help_text='When the submission was last updated')),
            ],
            options={
                'verbose_name': 'Submission',
                'verbose_name_plural': 'Submissions',
                'db_table': 'submissions',
                'ordering': ['-created_at'],
                'indexes': [models.Index(fields=['email'], name='submissions_email_idx'), models.Index(fields=['name'], name='submissions_name_idx')],
            },
        ),
    ]
